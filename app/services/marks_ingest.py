import csv
import io

from app.core.logger import get_logger
from app.models.marks_schemas import MarksSaveResult
from app.services.marks_service import MarksService

logger = get_logger("marks_ingest")

TEXT_COLUMNS = ("studentId", "usn", "studentName", "subjectCode", "subjectName")
NUMERIC_COLUMNS = ("semester", "ia1_50", "ia2_50", "assignment1_20", "assignment2_20")


def _parse_number(raw: str | None):
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return raw  # left for validation to report
    return int(value) if value.is_integer() else value


def process_marks_csv(file_content: bytes, service: MarksService, faculty_id: str) -> MarksSaveResult:
    """
    Parses a marks sheet uploaded by a faculty member and saves it.
    Expected headers: studentId, usn, studentName, subjectCode, subjectName,
    semester, ia1_50, ia2_50, assignment1_20, assignment2_20

    `studentId` may be left blank: the student is then looked up by USN
    (profile `admissionId`). Unknown USNs are reported, not saved.
    Raises UnicodeDecodeError when the file is not UTF-8.
    """
    decoded = file_content.decode("utf-8-sig")
    reader = csv.DictReader(io.StringIO(decoded))

    entries = []
    for row in reader:
        entry = {col: (row.get(col) or "").strip() for col in TEXT_COLUMNS}
        entry["usn"] = entry["usn"].upper()
        for col in NUMERIC_COLUMNS:
            entry[col] = _parse_number(row.get(col))
        entries.append(entry)

    to_resolve = [e["usn"] for e in entries if not e["studentId"] and e["usn"]]
    student_ids = service.resolve_student_ids(to_resolve)

    resolved = []
    unknown = []
    for line_no, entry in enumerate(entries, start=2):
        if not entry["studentId"] and entry["usn"]:
            student_id = student_ids.get(entry["usn"])
            if student_id is None:
                unknown.append({
                    "usn": entry["usn"],
                    "errors": [f'Row {line_no}: USN "{entry["usn"]}" not found in student records.'],
                })
                continue
            entry["studentId"] = student_id
        resolved.append(entry)

    logger.info("Parsed %d rows from marks CSV, %d unknown USNs", len(entries), len(unknown))
    return service.save_multiple_student_marks(resolved, faculty_id, skipped=unknown)
