# app/services/marks_service.py
import math
from typing import Any, Callable, Dict, Iterable, List

from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.database import Database

from app.core.errors import RetrievalFailure
from app.core.logger import get_logger
from app.models.constants import MARKS_COLLECTION, STUDENT_PROFILES_COLLECTION, with_both_ids
from app.models.marks_schemas import MarksSaveResult, SubjectMarkInput

logger = get_logger("marks")


class MarksService:
    """
    Data access for the `marks` collection.

    The service only holds a database factory; every call fetches its own
    handle, so one instance can be shared across requests. No authorization
    happens here: callers must check that the requester may see the student.
    """

    def __init__(self, get_db: Callable[[], Database]):
        self._get_db = get_db

    def _marks(self) -> Collection:
        return self._get_db()[MARKS_COLLECTION]

    def _profiles(self) -> Collection:
        return self._get_db()[STUDENT_PROFILES_COLLECTION]

    def fetch_student_marks(self, student_id: str, semester: int) -> List[Dict[str, Any]]:
        """
        All marks of one student in one semester, in canonical shape
        (`id` and `_id` both set to the composite key).
        """
        logger.info("Fetching marks for student %s, semester %s", student_id, semester)
        try:
            cursor = self._marks().find({"studentId": student_id, "semester": semester})
            return [with_both_ids(doc) for doc in cursor]
        except Exception as e:
            logger.exception(
                "Error fetching marks for student %s, semester %s: %s", student_id, semester, e
            )
            raise RetrievalFailure() from e

    def _class_profiles(self, semester: int, section: str) -> List[Dict[str, Any]]:
        year = math.ceil(semester / 2)
        return list(self._profiles().find({"year": year, "section": section}))

    def fetch_marks_for_class(self, semester: int, section: str, subject_code: str) -> List[Dict[str, Any]]:
        """Marks of every student in a section for one subject (performance analysis)."""
        logger.info("Fetching class marks: sem %s, sec %s, sub %s", semester, section, subject_code)
        try:
            profiles = self._class_profiles(semester, section)
            if not profiles:
                logger.info("No student profiles for sem %s, sec %s", semester, section)
                return []

            query = {
                "studentId": {"$in": [p["userId"] for p in profiles]},
                "semester": semester,
                "subjectCode": subject_code,
            }
            return [with_both_ids(doc) for doc in self._marks().find(query)]
        except Exception as e:
            logger.exception("Error fetching class marks: %s", e)
            raise RetrievalFailure("Failed to fetch class marks.") from e

    def fetch_student_profiles_for_marks_entry(
        self, semester: int, section: str, subject_code: str, faculty_id: str
    ) -> List[Dict[str, Any]]:
        """
        Every student profile of the section paired with its existing mark
        for the subject (None when nothing was entered yet).
        """
        logger.info(
            "Fetching marks entry sheet: sem %s, sec %s, sub %s, faculty %s",
            semester, section, subject_code, faculty_id,
        )
        try:
            profiles = [with_both_ids(p) for p in self._class_profiles(semester, section)]
            if not profiles:
                return []

            query = {
                "studentId": {"$in": [p["userId"] for p in profiles]},
                "semester": semester,
                "subjectCode": subject_code,
            }
            marks_by_student = {doc["studentId"]: with_both_ids(doc) for doc in self._marks().find(query)}

            return [
                {"profile": profile, "marks": marks_by_student.get(profile["userId"])}
                for profile in profiles
            ]
        except Exception as e:
            logger.exception("Error fetching profiles for marks entry: %s", e)
            raise RetrievalFailure("Failed to fetch student profiles or marks.") from e

    def resolve_student_ids(self, usns: Iterable[str]) -> Dict[str, str]:
        """Map upper-cased USNs (profile `admissionId`) to the student's user id."""
        usns = sorted({u.strip().upper() for u in usns if u and u.strip()})
        if not usns:
            return {}
        try:
            cursor = self._profiles().find({"admissionId": {"$in": usns}})
            return {p["admissionId"]: p["userId"] for p in cursor}
        except Exception as e:
            logger.exception("Error resolving USNs: %s", e)
            raise RetrievalFailure("Failed to fetch student profiles.") from e

    def save_multiple_student_marks(
        self,
        entries: Iterable[Dict[str, Any]],
        faculty_id: str,
        skipped: Iterable[Dict[str, Any]] | None = None,
    ) -> MarksSaveResult:
        """
        Upsert marks keyed by `studentId-subjectCode-semester`.
        Invalid entries are skipped and reported; store errors are returned, not raised.
        `skipped` carries entries already rejected by the caller, reported the same way.
        """
        entries = list(entries or [])
        validation_errors = list(skipped or [])
        if not entries and not validation_errors:
            return MarksSaveResult(success=False, message="No marks data provided.")

        logger.info("Saving %d marks entries by faculty %s", len(entries), faculty_id)

        documents = []
        for entry in entries:
            try:
                valid = SubjectMarkInput.model_validate(entry)
                mark_id = str(valid.key)
            except ValidationError as e:
                usn = entry.get("usn") if isinstance(entry, dict) else None
                logger.warning("Invalid mark entry skipped (usn=%s)", usn or "Unknown USN")
                validation_errors.append({
                    "usn": usn or "Unknown USN",
                    "errors": e.errors(include_url=False, include_context=False),
                })
                continue

            # Assessment fields are always stored, null when not entered
            doc = valid.model_dump()
            doc["id"] = mark_id
            doc["_id"] = mark_id
            documents.append(doc)

        if not documents and validation_errors:
            return MarksSaveResult(
                success=False,
                message="All mark entries were invalid. No data saved.",
                errors=validation_errors,
            )
        if not documents:
            return MarksSaveResult(success=True, message="No valid marks entries to save.")

        try:
            marks = self._marks()
            saved = 0
            for doc in documents:
                fields = {k: v for k, v in doc.items() if k != "_id"}
                result = marks.update_one({"_id": doc["_id"]}, {"$set": fields}, upsert=True)
                if result.upserted_id is not None:
                    saved += 1
                else:
                    saved += result.modified_count
        except Exception as e:
            logger.exception("Error saving marks: %s", e)
            return MarksSaveResult(
                success=False,
                message=f"An unexpected error occurred: {e}",
                errors=[{"general": str(e)}],
            )

        logger.info("Saved %d of %d marks records", saved, len(documents))
        message = f"Successfully saved/updated {saved} of {len(documents)} student marks records."
        if validation_errors:
            message += f" {len(validation_errors)} entries had validation issues and were skipped."

        return MarksSaveResult(
            success=True,
            message=message,
            errors=validation_errors or None,
        )
