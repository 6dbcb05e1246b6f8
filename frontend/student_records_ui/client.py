"""
HTTP client for the students API.

Wraps an httpx.Client. Every non-2xx response is raised as
StudentsApiError carrying the server's {"error": ...} message.
"""

import logging
from typing import List, Optional

import httpx

logger = logging.getLogger(__name__)

STUDENTS_PATH = "/api/students"


class StudentsApiError(Exception):
    """A request to the students API failed. status_code is 0 when the server was unreachable."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


class StudentsClient:
    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, **kwargs):
        try:
            response = self._client.request(method, STUDENTS_PATH, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, STUDENTS_PATH, exc)
            raise StudentsApiError(0, f"Could not reach the students API: {exc}") from exc

        if response.is_success:
            return response.json()

        message = _error_message(response)
        logger.info("%s %s returned %s: %s", method, STUDENTS_PATH, response.status_code, message)
        raise StudentsApiError(response.status_code, message)

    def list_students(self) -> List[dict]:
        return self._request("GET")

    def create_student(self, student: dict) -> dict:
        return self._request("POST", json=student)

    def update_student(self, student_id: str, student: dict) -> dict:
        return self._request("PUT", json={**student, "id": student_id})

    def delete_student(self, student_id: str) -> str:
        return self._request("DELETE", params={"id": student_id})["message"]
