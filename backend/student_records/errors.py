"""
Error types and the exception handlers that turn them into responses.

Every error response has the body {"error": "<message>"}:
- StudentRecordsError subclasses carry their own status code (400 for
  client input problems)
- request body validation failures become 400
- SQLAlchemy errors become 500 with the database's error text
- anything else becomes 500 "Internal Server Error"
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from student_records.logging_config import get_logger, log_with_context

logger = get_logger("http")

INTERNAL_SERVER_ERROR = "Internal Server Error"


class StudentRecordsError(Exception):
    """Base class for errors with a known HTTP status."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingIdError(StudentRecordsError):
    status_code = 400

    def __init__(self):
        super().__init__("ID is required")


class DuplicateEmailError(StudentRecordsError):
    status_code = 400

    def __init__(self, email: str = None):
        super().__init__("Email already exists")
        self.email = email


class StudentNotFoundError(StudentRecordsError):
    """Update matched no row. Reported like any other store failure (500)."""
    status_code = 500

    def __init__(self, student_id: str):
        super().__init__("Student not found")
        self.student_id = student_id


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def store_error_message(exc: SQLAlchemyError) -> str:
    """Raw error text from the database driver, without SQLAlchemy's wrapping."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def validation_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def student_records_error_handler(request: Request, exc: StudentRecordsError):
    log_with_context(logger, "WARNING",
        f"{request.method} {request.url.path} rejected: {exc.message}",
        extra_data={"status_code": exc.status_code})
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = validation_error_message(exc)
    log_with_context(logger, "WARNING",
        f"{request.method} {request.url.path} invalid body: {message}",
        extra_data={"status_code": 400})
    return error_response(400, message)


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    message = store_error_message(exc)
    log_with_context(get_logger("db"), "ERROR",
        f"Store error on {request.method} {request.url.path}: {message}",
        extra_data={"status_code": 500, "error_type": type(exc).__name__})
    return error_response(500, message)


async def general_exception_handler(request: Request, exc: Exception):
    log_with_context(logger, "ERROR",
        f"Unhandled error on {request.method} {request.url.path}",
        extra_data={"status_code": 500, "error_type": type(exc).__name__},
        exc_info=exc)
    return error_response(500, INTERNAL_SERVER_ERROR)


def setup_error_handling(app):
    """Register the exception handlers on the FastAPI app."""
    app.add_exception_handler(StudentRecordsError, student_records_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
