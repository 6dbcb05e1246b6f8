import os

# Must be set before student_records is imported: the engine is built at import time
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from student_records.database import SessionLocal, create_tables, drop_tables
from student_records.main import app


@pytest.fixture(autouse=True)
def fresh_tables():
    """Every test starts from an empty students table."""
    drop_tables()
    create_tables()
    yield


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_student(client):
    """POST a student and return the created row."""
    def _make(name="Ann", email="a@x.com", phone="1", gender="Female"):
        response = client.post("/api/students", json={
            "name": name, "email": email, "phone": phone, "gender": gender
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _make
