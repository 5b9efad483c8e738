from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile

from app.core.database import get_database
from app.models.marks_schemas import MarksSaveResult, StudentMarksEntry, SubjectMark
from app.services.marks_ingest import process_marks_csv
from app.services.marks_service import MarksService

router = APIRouter(prefix="/student", tags=["Student Marks"])


def get_marks_service() -> MarksService:
    return MarksService(get_database)


# Static paths first so they are not captured by /{student_id}/...
@router.get("/marks/class", response_model=List[SubjectMark])
def get_class_marks(
    semester: int = Query(..., ge=1),
    section: str = Query(...),
    subject_code: str = Query(...),
    service: MarksService = Depends(get_marks_service),
):
    """Marks of a whole section for one subject, used by performance analysis."""
    return service.fetch_marks_for_class(semester, section, subject_code)


@router.get("/marks/entry", response_model=List[StudentMarksEntry])
def get_marks_entry_sheet(
    semester: int = Query(..., ge=1),
    section: str = Query(...),
    subject_code: str = Query(...),
    faculty_id: str = Query(...),
    service: MarksService = Depends(get_marks_service),
):
    return service.fetch_student_profiles_for_marks_entry(semester, section, subject_code, faculty_id)


@router.post("/marks", response_model=MarksSaveResult)
def save_marks(
    entries: List[Dict[str, Any]] = Body(...),
    faculty_id: str = Query(...),
    service: MarksService = Depends(get_marks_service),
):
    """
    Endpoint for Faculty to save a marks sheet.
    Invalid rows are skipped and listed in `errors`.
    """
    return service.save_multiple_student_marks(entries, faculty_id)


@router.post("/admin/marks/upload", response_model=MarksSaveResult)
def upload_marks_csv(
    file: UploadFile = File(...),
    faculty_id: str = Query(...),
    service: MarksService = Depends(get_marks_service),
):
    """
    Endpoint for Faculty/Admins to bulk upload student marks via CSV.
    """
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed.")

    content = file.file.read()
    try:
        return process_marks_csv(content, service, faculty_id)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded.")


@router.get("/{student_id}/marks", response_model=List[SubjectMark])
def get_student_marks(
    student_id: str,
    semester: int = Query(...),
    service: MarksService = Depends(get_marks_service),
):
    """
    Marks of one student in one semester.
    The caller must already have checked that the session may view student_id.
    """
    return service.fetch_student_marks(student_id, semester)
