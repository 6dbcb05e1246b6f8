"""
Students API routes - list, create, update and delete student records.

Errors are raised as exceptions and rendered as {"error": ...} by the
handlers in student_records.errors:
- 400 for a missing id, a duplicate email or an invalid body
- 500 for store failures and anything unexpected
"""

import time
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy.orm import Session

from student_records.database import get_db
from student_records.errors import MissingIdError
from student_records.models.student import Gender
from student_records.services import students as student_service
from student_records.logging_config import get_logger, log_with_context

router = APIRouter(prefix="/api/students")
logger = get_logger("http")

DELETED_MESSAGE = "Student deleted successfully"


# ── Pydantic schemas ─────────────────────────────────────────

class StudentCreate(BaseModel):
    """Request body for creating a student (everything but the id)."""
    name: str = Field(..., description="Student's name")
    email: str = Field(..., description="Email, unique across students")
    phone: str = Field(..., description="Phone number")
    gender: Gender = Field(..., description="Male | Female | Other")

    @field_validator("name", "email", "phone")
    @classmethod
    def not_blank(cls, value: str) -> str:
        # Stored exactly as sent; whitespace only counts as empty
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class StudentUpdate(BaseModel):
    """
    Request body for updating a student; id selects the row.

    Only the id is parsed up front so a missing id is reported first.
    The remaining keys are validated as StudentCreate afterwards.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Id of the student to update")


class StudentResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    # Plain string: rows written by other clients may hold any value
    gender: str


class MessageResponse(BaseModel):
    message: str


def _fields(body: StudentCreate) -> dict:
    return body.model_dump(mode="json", include={"name", "email", "phone", "gender"})


def _validate_update_fields(body: StudentUpdate) -> StudentCreate:
    try:
        return StudentCreate.model_validate(body.model_extra or {})
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False))


@router.get("", response_model=List[StudentResponse])
def list_students(db: Session = Depends(get_db)):
    """Return all students."""
    start_time = time.time()
    students = student_service.list_students(db)

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO",
        "Listed {} students".format(len(students)),
        extra_data={"duration_ms": round(duration_ms, 2)})
    return [s.to_dict() for s in students]


@router.post("", status_code=201, response_model=StudentResponse)
def create_student(body: StudentCreate, db: Session = Depends(get_db)):
    """Create a student. Fails with 400 if the email is already registered."""
    student = student_service.create_student(db, _fields(body))
    return student.to_dict()


@router.put("", response_model=StudentResponse)
def update_student(body: StudentUpdate, db: Session = Depends(get_db)):
    """Replace name, email, phone and gender of the student with body.id."""
    if not (body.id or "").strip():
        raise MissingIdError()

    fields = _fields(_validate_update_fields(body))
    student = student_service.update_student(db, body.id, fields)
    return student.to_dict()


@router.delete("", response_model=MessageResponse)
def delete_student(
    id: Optional[str] = Query(None, description="Id of the student to delete"),
    db: Session = Depends(get_db)
):
    """Delete a student. Succeeds even when no student has this id."""
    if not id:
        raise MissingIdError()

    student_service.delete_student(db, id)
    return {"message": DELETED_MESSAGE}
