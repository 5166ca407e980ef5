"""
Test Suite

This module contains all tests for the Brotocare grievance backend.

Structure:
    tests/
    ├── __init__.py         # This file
    ├── conftest.py         # Pytest fixtures
    ├── fakes.py            # In-memory repositories
    ├── unit/               # Unit tests
    │   ├── test_services/  # Service layer tests
    │   ├── test_engine/    # Engine tests
    │   ├── test_repositories/ # Store error handling
    │   └── test_utils/     # Utility tests
    └── integration/        # Integration tests
        └── test_api/       # API endpoint tests

To run tests:
    pytest tests/
    pytest tests/unit/
    pytest tests/integration/
"""
