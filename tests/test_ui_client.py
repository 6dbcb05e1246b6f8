import json

import httpx
import pytest

from student_records_ui.client import StudentsApiError, StudentsClient


def _client(handler):
    return StudentsClient("http://testserver", transport=httpx.MockTransport(handler))


def test_list_students():
    rows = [{"id": "1", "name": "Ann", "email": "a@x.com", "phone": "1", "gender": "Female"}]

    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/api/students"
        return httpx.Response(200, json=rows)

    with _client(handler) as client:
        assert client.list_students() == rows


def test_update_sends_id_in_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={**seen["body"]})

    with _client(handler) as client:
        client.update_student("abc", {"name": "Ann", "email": "a@x.com", "phone": "1", "gender": "Female"})

    assert seen["method"] == "PUT"
    assert seen["body"]["id"] == "abc"
    assert seen["body"]["name"] == "Ann"


def test_delete_passes_id_as_query_param():
    def handler(request):
        assert request.method == "DELETE"
        assert request.url.params["id"] == "abc"
        return httpx.Response(200, json={"message": "Student deleted successfully"})

    with _client(handler) as client:
        assert client.delete_student("abc") == "Student deleted successfully"


def test_error_body_becomes_exception_message():
    def handler(request):
        return httpx.Response(400, json={"error": "Email already exists"})

    with _client(handler) as client:
        with pytest.raises(StudentsApiError) as exc_info:
            client.create_student({"name": "Ann", "email": "a@x.com", "phone": "1", "gender": "Female"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Email already exists"


def test_non_json_error_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with _client(handler) as client:
        with pytest.raises(StudentsApiError) as exc_info:
            client.list_students()

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Bad Gateway"


def test_connection_failure_has_status_zero():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(StudentsApiError) as exc_info:
            client.list_students()

    assert exc_info.value.status_code == 0
    assert "connection refused" in exc_info.value.message
