"""
Seed Data Script - Creates demo students, an admin and sample complaints
Run: python -m scripts.seed_data
"""
from brotocare.repositories.mongo_client import get_collection, create_indexes
from brotocare.domain.models import ActorContext, RoleAssignment
from brotocare.domain.enums import UserRole
from brotocare.engine.lifecycle import ComplaintLifecycleManager


STUDENTS = [
    {
        "user_id": "demo-student-1",
        "first_name": "John",
        "last_name": "Doe",
        "student_id": "123456",
        "batch_number": "B24",
        "brotocare_id": "john.doe.2003@brototype.com",
    },
    {
        "user_id": "demo-student-2",
        "first_name": "Jane",
        "last_name": "Smith",
        "student_id": "234567",
        "batch_number": "B23",
        "brotocare_id": "jane.smith.2002@brototype.com",
    },
]

ADMIN = {"user_id": "demo-admin-1", "first_name": "Campus", "last_name": "Admin"}

# (owner, title, description, category, priority, [(status, note), ...])
COMPLAINTS = [
    (
        "demo-student-1", "Hostel WiFi not working", "WiFi has been down for 3 days",
        "infrastructure", "high", [("in_process", "Dispatched to IT")],
    ),
    (
        "demo-student-2", "Need access to additional study materials", "Requesting DSA practice problems",
        "academic", "medium", [("under_review", None)],
    ),
    (
        "demo-student-1", "Classroom AC not working", "AC in room 204 is broken",
        "infrastructure", "low", [("resolved", "Technician replaced the compressor"), ("closed", None)],
    ),
]


def seed_identities() -> None:
    """Create profiles and role assignments (normally owned by the identity provider)"""
    profiles = get_collection("profiles")
    roles = get_collection("role_assignments")
    
    for profile in STUDENTS + [ADMIN]:
        profiles.update_one({"user_id": profile["user_id"]}, {"$set": profile}, upsert=True)
    assignments = [RoleAssignment(user_id=s["user_id"], role=UserRole.STUDENT) for s in STUDENTS]
    assignments.append(RoleAssignment(user_id=ADMIN["user_id"], role=UserRole.ADMIN))
    for assignment in assignments:
        roles.update_one(
            {"user_id": assignment.user_id},
            {"$set": assignment.model_dump(mode="json")},
            upsert=True
        )
    print(f"Seeded {len(STUDENTS)} students and 1 admin")


def seed_complaints() -> None:
    """File the sample complaints and walk them through their transitions"""
    if get_collection("complaints").count_documents({}) > 0:
        print("Database already has complaints. Skipping complaint seed.")
        return
    
    lifecycle = ComplaintLifecycleManager()
    admin = ActorContext(user_id=ADMIN["user_id"])
    
    for owner, title, description, category, priority, transitions in COMPLAINTS:
        complaint = lifecycle.submit(
            ActorContext(user_id=owner), title, description, category, priority
        )
        for status, note in transitions:
            lifecycle.transition(admin, complaint.complaint_id, status, note)
        print(f"  {complaint.complaint_id}: {title}")
    
    print(f"Seeded {len(COMPLAINTS)} complaints")


if __name__ == "__main__":
    create_indexes()
    seed_identities()
    seed_complaints()
