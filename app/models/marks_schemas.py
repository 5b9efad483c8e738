from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional


class MarkKey(BaseModel):
    """
    Composite identity of a mark document: `studentId-subjectCode-semester`.
    Used as the Mongo `_id` of the marks collection.
    """
    model_config = ConfigDict(frozen=True)

    student_id: str = Field(min_length=1)
    subject_code: str = Field(min_length=1)
    semester: int = Field(ge=1)

    @field_validator("student_id")
    @classmethod
    def _no_separator(cls, v: str) -> str:
        if "-" in v:
            raise ValueError("student_id must not contain '-'")
        return v

    @classmethod
    def parse(cls, text: str) -> "MarkKey":
        student_id, sep, rest = text.partition("-")
        subject_code, sep2, semester = rest.rpartition("-")
        if not sep or not sep2 or not semester.isdigit():
            raise ValueError(f"Malformed mark key: {text!r}")
        return cls(student_id=student_id, subject_code=subject_code, semester=int(semester))

    def __str__(self) -> str:
        return f"{self.student_id}-{self.subject_code}-{self.semester}"


class SubjectMark(BaseModel):
    # Extra subject/score fields are passed through untouched
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    mongo_id: str = Field(alias="_id")
    studentId: str
    semester: int


class SubjectMarkInput(BaseModel):
    # No string-to-number coercion; CSV cells are converted before validation
    model_config = ConfigDict(strict=True)

    studentId: str = Field(min_length=1)
    usn: str = Field(min_length=1)
    studentName: str = Field(min_length=1)
    subjectCode: str = Field(min_length=1)
    subjectName: str = Field(min_length=1)
    semester: int = Field(ge=1, le=8)
    ia1_50: Optional[float] = Field(default=None, ge=0, le=50)
    ia2_50: Optional[float] = Field(default=None, ge=0, le=50)
    assignment1_20: Optional[float] = Field(default=None, ge=0, le=20)
    assignment2_20: Optional[float] = Field(default=None, ge=0, le=20)

    @property
    def key(self) -> MarkKey:
        return MarkKey(student_id=self.studentId, subject_code=self.subjectCode, semester=self.semester)


class MarksSaveResult(BaseModel):
    success: bool
    message: str
    errors: Optional[List[Dict[str, Any]]] = None


class StudentProfile(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    mongo_id: str = Field(alias="_id")
    userId: str
    fullName: str = ""
    year: int
    section: str
    currentSemester: Optional[int] = None


class StudentMarksEntry(BaseModel):
    profile: StudentProfile
    marks: Optional[SubjectMark] = None
