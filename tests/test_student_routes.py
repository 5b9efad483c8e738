import inspect

from app.main import app
from app.routes.student_routes import get_marks_service
from app.services.marks_service import MarksService
from fastapi.testclient import TestClient


def _raise():
    raise ConnectionError("refused")


def test_get_student_marks(db, client):
    db["marks"].insert_one(
        {"_id": "S1-CS101-3", "studentId": "S1", "semester": 3, "subjectCode": "CS101", "ia1_50": 42.0}
    )

    resp = client.get("/student/S1/marks", params={"semester": 3})

    assert resp.status_code == 200
    assert resp.json() == [{
        "id": "S1-CS101-3", "_id": "S1-CS101-3", "studentId": "S1",
        "semester": 3, "subjectCode": "CS101", "ia1_50": 42.0,
    }]


def test_get_student_marks_requires_semester(client):
    assert client.get("/student/S1/marks").status_code == 422


def test_retrieval_failure_returns_fixed_message():
    app.dependency_overrides[get_marks_service] = lambda: MarksService(_raise)
    try:
        resp = TestClient(app).get("/student/S1/marks", params={"semester": 3})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to fetch student marks."}


def test_class_marks_and_entry_sheet(section_a, client):
    section_a["marks"].insert_one({
        "_id": "U2-CS501-5", "studentId": "U2", "semester": 5, "subjectCode": "CS501",
    })
    params = {"semester": 5, "section": "A", "subject_code": "CS501"}

    resp = client.get("/student/marks/class", params=params)
    assert resp.status_code == 200
    assert [m["id"] for m in resp.json()] == ["U2-CS501-5"]

    resp = client.get("/student/marks/entry", params={**params, "faculty_id": "F1"})
    assert resp.status_code == 200
    sheet = {row["profile"]["userId"]: row["marks"] for row in resp.json()}
    assert sheet["U1"] is None
    assert sheet["U2"]["_id"] == "U2-CS501-5"


def test_save_marks(db, client):
    entries = [{
        "studentId": "U1", "usn": "USN1", "studentName": "Asha", "subjectCode": "CS501",
        "subjectName": "Compilers", "semester": 5, "ia1_50": 40, "assignment1_20": 18,
    }]

    resp = client.post("/student/marks", params={"faculty_id": "F1"}, json=entries)

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert db["marks"].find_one({"_id": "U1-CS501-5"})["assignment1_20"] == 18


def test_upload_rejects_non_csv(client):
    resp = client.post(
        "/student/admin/marks/upload",
        params={"faculty_id": "F1"},
        files={"file": ("marks.xlsx", b"data", "application/octet-stream")},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Only CSV files are allowed."


def test_upload_csv(db, client):
    content = (
        "studentId,usn,studentName,subjectCode,subjectName,semester,ia1_50,ia2_50,assignment1_20,assignment2_20\n"
        "U1,USN1,Asha,CS501,Compilers,5,44,,18,\n"
    ).encode()

    resp = client.post(
        "/student/admin/marks/upload",
        params={"faculty_id": "F1"},
        files={"file": ("marks.csv", content, "text/csv")},
    )

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert db["marks"].find_one({"_id": "U1-CS501-5"})["ia2_50"] is None


def test_health():
    assert TestClient(app).get("/health").json() == {"status": "ok"}


def test_upload_non_utf8_csv_is_rejected(db, client):
    content = b"studentId,usn,studentName,subjectCode,subjectName,semester\nU1,\xff\xfe,Asha,CS501,Compilers,5\n"

    resp = client.post(
        "/student/admin/marks/upload",
        params={"faculty_id": "F1"},
        files={"file": ("m.csv", content, "text/csv")},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "CSV file must be UTF-8 encoded."
    assert db["marks"].count_documents({}) == 0


def test_upload_resolves_students_by_usn(db, client):
    db["student_profiles"].insert_one(
        {"_id": "P1", "userId": "U1", "admissionId": "1AC21CS001", "year": 3, "section": "A"}
    )
    content = (
        "studentId,usn,studentName,subjectCode,subjectName,semester,ia1_50\n"
        ",1ac21cs001,Asha,CS501,Compilers,5,44\n"
        ",1AC21CS999,Nobody,CS501,Compilers,5,30\n"
    ).encode()

    resp = client.post(
        "/student/admin/marks/upload",
        params={"faculty_id": "F1"},
        files={"file": ("marks.csv", content, "text/csv")},
    )

    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert [e["usn"] for e in body["errors"]] == ["1AC21CS999"]
    assert db["marks"].find_one({"_id": "U1-CS501-5"})["usn"] == "1AC21CS001"


def test_upload_endpoint_runs_in_threadpool():
    # Blocking pymongo writes must stay off the event loop
    from app.routes.student_routes import upload_marks_csv

    assert not inspect.iscoroutinefunction(upload_marks_csv)
