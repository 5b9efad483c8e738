import mongomock
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routes.student_routes import get_marks_service
from app.services.marks_service import MarksService


@pytest.fixture
def db():
    return mongomock.MongoClient()["academic_connect_test"]


@pytest.fixture
def service(db):
    return MarksService(lambda: db)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_marks_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def section_a(db):
    """Two third-year students in section A (semester 5/6)."""
    db["student_profiles"].insert_many([
        {"_id": "P1", "userId": "U1", "fullName": "Asha Rao", "year": 3, "section": "A", "currentSemester": 5},
        {"_id": "P2", "userId": "U2", "fullName": "Ravi Kumar", "year": 3, "section": "A", "currentSemester": 5},
        {"_id": "P3", "userId": "U3", "fullName": "Other Section", "year": 3, "section": "B", "currentSemester": 5},
    ])
    return db
