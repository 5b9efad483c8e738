# app/models/constants.py
from typing import Any, Dict

# MongoDB collection names
USERS_COLLECTION = "users"
STUDENT_PROFILES_COLLECTION = "student_profiles"
MARKS_COLLECTION = "marks"
PROJECTS_COLLECTION = "projects"
MOOCS_COLLECTION = "moocs"
FACULTY_SUBJECT_ASSIGNMENTS_COLLECTION = "faculty_subject_assignments"


def map_mongo_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    Store shape -> canonical shape: `_id` is removed and put back as `id`.
    ObjectIds become their hex string.
    """
    rest = {k: v for k, v in doc.items() if k != "_id"}
    rest["id"] = str(doc["_id"])
    return rest


def map_to_mongo_id(record: Dict[str, Any]) -> Dict[str, Any]:
    """Canonical shape -> store shape: `id` is removed and put back as `_id`."""
    rest = {k: v for k, v in record.items() if k != "id"}
    rest["_id"] = record["id"]
    return rest


def with_both_ids(doc: Dict[str, Any]) -> Dict[str, Any]:
    # Canonical record that also keeps `_id` for older consumers
    record = map_mongo_id(doc)
    record["_id"] = record["id"]
    return record
