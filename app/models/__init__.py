# app/models/__init__.py

from .marks_schemas import MarkKey, SubjectMark, SubjectMarkInput, MarksSaveResult

__all__ = [
    "MarkKey",
    "SubjectMark",
    "SubjectMarkInput",
    "MarksSaveResult",
]
