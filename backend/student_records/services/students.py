"""
Student Service - reads and writes student rows.

All functions take the request's SQLAlchemy session. Email uniqueness is a
read-then-write pre-check: two concurrent writes with the same email can
both pass it, since the table has no unique constraint.
"""

import time
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from student_records.errors import DuplicateEmailError, StudentNotFoundError
from student_records.models.student import Student
from student_records.logging_config import get_logger, log_with_context

logger = get_logger("students")

MUTABLE_FIELDS = ("name", "email", "phone", "gender")


def _commit(db: Session):
    """Commit, rolling the session back if the store rejects the write."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def list_students(db: Session) -> List[Student]:
    """Return every student in insertion order."""
    start_time = time.time()
    students = db.query(Student).order_by(Student.created_at.asc(), Student.id.asc()).all()

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "DEBUG",
        "Listed {} students".format(len(students)),
        extra_data={"duration_ms": round(duration_ms, 2)})
    return students


def find_by_email(db: Session, email: str, exclude_id: Optional[str] = None) -> Optional[Student]:
    """
    Find a student owning this email.

    Args:
        db: Database session
        email: Email to look up (exact match)
        exclude_id: Ignore the student with this id (used on update)

    Returns:
        The first matching Student or None
    """
    query = db.query(Student).filter(Student.email == email)
    if exclude_id is not None:
        query = query.filter(Student.id != exclude_id)
    return query.first()


def create_student(db: Session, data: dict) -> Student:
    """
    Insert a new student after checking the email is free.

    Raises:
        DuplicateEmailError: another student already uses data["email"]
    """
    email = data.get("email")
    if find_by_email(db, email) is not None:
        log_with_context(logger, "INFO",
            "Rejected create: email already exists",
            context={"email": email})
        raise DuplicateEmailError(email)

    student = Student(**{field: data[field] for field in MUTABLE_FIELDS if field in data})
    db.add(student)
    _commit(db)
    db.refresh(student)

    log_with_context(logger, "INFO",
        "Student created: {}".format(student.id),
        context={"student_id": str(student.id), "email": student.email})
    return student


def update_student(db: Session, student_id: str, data: dict) -> Student:
    """
    Replace the mutable fields of a student.

    Raises:
        DuplicateEmailError: a different student already uses data["email"]
        StudentNotFoundError: no student has this id
    """
    email = data.get("email")
    if find_by_email(db, email, exclude_id=student_id) is not None:
        log_with_context(logger, "INFO",
            "Rejected update: email already exists",
            context={"student_id": student_id, "email": email})
        raise DuplicateEmailError(email)

    student = db.query(Student).filter(Student.id == student_id).first()
    if student is None:
        raise StudentNotFoundError(student_id)

    for field in MUTABLE_FIELDS:
        if field in data:
            setattr(student, field, data[field])
    _commit(db)
    db.refresh(student)

    log_with_context(logger, "INFO",
        "Student updated: {}".format(student_id),
        context={"student_id": student_id, "email": student.email})
    return student


def delete_student(db: Session, student_id: str) -> int:
    """
    Delete the student with this id.

    Returns:
        Number of rows removed (0 when nothing matched, which is not an error)
    """
    deleted = db.query(Student).filter(Student.id == student_id).delete(synchronize_session=False)
    _commit(db)

    log_with_context(logger, "INFO",
        "Student delete requested: {} ({} row(s) removed)".format(student_id, deleted),
        context={"student_id": student_id},
        extra_data={"rows_deleted": deleted})
    return deleted
