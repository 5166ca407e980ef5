"""
Pytest Configuration and Fixtures

Shared fixtures for all tests. Engine components are wired to in-memory
repositories so no MongoDB server is needed.
"""

import os
import tempfile

# Must be set before any brotocare import reads settings
os.environ.setdefault("LOGS_PATH", tempfile.mkdtemp(prefix="brotocare_test_logs_"))
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("TIMELINE_ON_EVERY_TRANSITION", "false")
os.environ.setdefault("MONGO_TRANSACTIONS_ENABLED", "false")

import pytest

from brotocare.domain.enums import UserRole
from brotocare.domain.models import ActorContext, Profile
from brotocare.engine.comment_thread import CommentThread
from brotocare.engine.lifecycle import ComplaintLifecycleManager
from brotocare.engine.profile_enricher import ProfileEnricher
from brotocare.engine.role_gate import RoleGate
from brotocare.engine.timeline_ledger import TimelineLedger
from brotocare.services.complaint_service import ComplaintService

from .fakes import (
    FakeCommentRepository, FakeComplaintRepository, FakeProfileRepository,
    FakeRoleRepository, FakeTimelineRepository
)

STUDENT_ID = "stu-1"
OTHER_STUDENT_ID = "stu-2"
ADMIN_ID = "adm-1"
STRANGER_ID = "nobody"


@pytest.fixture
def student():
    return ActorContext(user_id=STUDENT_ID, email="john.doe@gmail.com")


@pytest.fixture
def other_student():
    return ActorContext(user_id=OTHER_STUDENT_ID)


@pytest.fixture
def admin():
    return ActorContext(user_id=ADMIN_ID)


@pytest.fixture
def stranger():
    """Authenticated but without any role assignment"""
    return ActorContext(user_id=STRANGER_ID)


@pytest.fixture
def role_repo():
    return FakeRoleRepository({
        STUDENT_ID: UserRole.STUDENT,
        OTHER_STUDENT_ID: UserRole.STUDENT,
        ADMIN_ID: UserRole.ADMIN,
    })


@pytest.fixture
def profile_repo():
    return FakeProfileRepository({
        STUDENT_ID: Profile(
            user_id=STUDENT_ID, first_name="John", last_name="Doe",
            student_id="123456", batch_number="B24", brotocare_id="john.doe.2003@brototype.com"
        ),
        OTHER_STUDENT_ID: Profile(user_id=OTHER_STUDENT_ID, first_name="Jane", last_name="Smith"),
        ADMIN_ID: Profile(user_id=ADMIN_ID, first_name="Campus", last_name="Admin"),
    })


@pytest.fixture
def complaint_repo():
    return FakeComplaintRepository()


@pytest.fixture
def timeline_repo():
    return FakeTimelineRepository()


@pytest.fixture
def comment_repo():
    return FakeCommentRepository()


@pytest.fixture
def role_gate(role_repo):
    return RoleGate(role_repo=role_repo)


@pytest.fixture
def enricher(profile_repo):
    return ProfileEnricher(profile_repo=profile_repo, concurrency=8, timeout_seconds=1.0)


@pytest.fixture
def ledger(timeline_repo):
    return TimelineLedger(timeline_repo=timeline_repo)


@pytest.fixture
def thread(comment_repo, enricher):
    return CommentThread(comment_repo=comment_repo, enricher=enricher)


@pytest.fixture
def lifecycle(complaint_repo, ledger, role_gate):
    return ComplaintLifecycleManager(
        complaint_repo=complaint_repo,
        ledger=ledger,
        role_gate=role_gate,
        audit_every_transition=False,
        transactions_enabled=False
    )


@pytest.fixture
def service(complaint_repo, role_gate, enricher, ledger, thread, lifecycle):
    return ComplaintService(
        complaint_repo=complaint_repo,
        role_gate=role_gate,
        enricher=enricher,
        ledger=ledger,
        thread=thread,
        lifecycle=lifecycle
    )


@pytest.fixture
def submit(service, student):
    """File a complaint as the default student and return its ID"""
    def _submit(actor=None, **overrides):
        payload = {
            "title": "Hostel WiFi down",
            "description": "No connectivity on the second floor since Monday",
            "category": "infrastructure",
            "priority": "high",
        }
        payload.update(overrides)
        return service.submit_complaint(actor or student, **payload)
    return _submit
