"""Unit tests for the student service functions against the SQLite store."""

import pytest

from student_records.errors import DuplicateEmailError, StudentNotFoundError
from student_records.models.student import Student
from student_records.services import students as student_service


def _data(**overrides):
    data = {"name": "Ann", "email": "a@x.com", "phone": "1", "gender": "Female"}
    data.update(overrides)
    return data


def test_create_assigns_uuid_and_timestamp(db_session):
    student = student_service.create_student(db_session, _data())

    assert len(student.id) == 36
    assert student.created_at is not None
    assert student.to_dict() == {"id": student.id, "name": "Ann", "email": "a@x.com",
                                 "phone": "1", "gender": "Female"}


def test_create_rejects_taken_email(db_session):
    student_service.create_student(db_session, _data())

    with pytest.raises(DuplicateEmailError) as exc_info:
        student_service.create_student(db_session, _data(name="Other"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Email already exists"
    assert db_session.query(Student).count() == 1


def test_email_match_is_exact(db_session):
    student_service.create_student(db_session, _data(email="a@x.com"))

    # Only an identical string counts as taken
    student = student_service.create_student(db_session, _data(email="A@x.com"))
    assert student.email == "A@x.com"


def test_find_by_email_excludes_given_id(db_session):
    student = student_service.create_student(db_session, _data())

    assert student_service.find_by_email(db_session, "a@x.com").id == student.id
    assert student_service.find_by_email(db_session, "a@x.com", exclude_id=student.id) is None
    assert student_service.find_by_email(db_session, "nobody@x.com") is None


def test_update_checks_email_before_lookup(db_session):
    student_service.create_student(db_session, _data(email="a@x.com"))

    # The email check runs first, so a taken email wins over an unknown id
    with pytest.raises(DuplicateEmailError):
        student_service.update_student(db_session, "missing", _data(email="a@x.com"))

    with pytest.raises(StudentNotFoundError) as exc_info:
        student_service.update_student(db_session, "missing", _data(email="free@x.com"))
    assert exc_info.value.student_id == "missing"


def test_update_does_not_touch_id(db_session):
    student = student_service.create_student(db_session, _data())
    original_id = student.id

    updated = student_service.update_student(db_session, original_id, _data(phone="42"))

    assert updated.id == original_id
    assert updated.phone == "42"


def test_delete_reports_rows_removed(db_session):
    student = student_service.create_student(db_session, _data())

    assert student_service.delete_student(db_session, "missing") == 0
    assert student_service.delete_student(db_session, student.id) == 1
    assert student_service.list_students(db_session) == []
