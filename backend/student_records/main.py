"""
Student Records - FastAPI Application Entry Point.

This module:
1. Initializes the FastAPI app with CORS middleware
2. Sets up structured JSON logging
3. Implements request ID middleware (X-Request-ID header)
4. Registers the error handlers and the students routes
5. Provides health check and root endpoints

Layout:
- routes/: API endpoint handlers
- models/: SQLAlchemy ORM models
- services/: Store access and the email uniqueness check
- errors.py: Error types and exception handlers
- logging_config.py: Structured logging configuration
- database.py: Database connection management
"""

import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from student_records.config import (
    API_HOST, API_PORT, CORS_ORIGINS, SERVICE_NAME, SERVICE_VERSION
)
from student_records.logging_config import (
    setup_logging, get_logger, log_with_context,
    request_id_var, generate_request_id
)
from student_records.errors import general_exception_handler, setup_error_handling
from student_records.routes import students
from student_records.database import create_tables

# Import models so they are registered with Base.metadata
from student_records.models.student import Student  # noqa: F401

# ──────────────────────────────────────────────────────────────
# Initialize structured logging BEFORE anything else
# ──────────────────────────────────────────────────────────────
setup_logging()
logger = get_logger("http")

# No migration tooling: create missing tables on startup
create_tables()
log_with_context(get_logger("db"), "INFO", "Database tables ready")

# ──────────────────────────────────────────────────────────────
# Create FastAPI application
# ──────────────────────────────────────────────────────────────
app = FastAPI(
    title="Student Records",
    description=(
        "Register students and manage their records: "
        "create, list, edit and delete entries with unique emails."
    ),
    version=SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Allows the Streamlit UI (or any configured origin) to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"]
)

setup_error_handling(app)


# ──────────────────────────────────────────────────────────────
# Request ID Middleware
#
# Generates a UUID per incoming request, stores it in a context
# variable for every log entry, returns it in X-Request-ID and
# logs request start/end with latency. Unhandled errors are
# turned into the generic 500 here.
# ──────────────────────────────────────────────────────────────
@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    req_id = generate_request_id()
    request_id_var.set(req_id)

    start_time = time.time()

    log_with_context(logger, "INFO",
        f"Request started: {request.method} {request.url.path}",
        context={"request_id": req_id},
        extra_data={
            "ip": request.client.host if request.client else "unknown",
            "user_agent": request.headers.get("user-agent", ""),
            "query_params": dict(request.query_params)
        })

    try:
        response = await call_next(request)
    except Exception as exc:
        # Built here so the 500 still gets the header and completion log
        response = await general_exception_handler(request, exc)

    duration_ms = (time.time() - start_time) * 1000
    response.headers["X-Request-ID"] = req_id

    log_with_context(logger, "INFO",
        f"Request completed: {request.method} {request.url.path} → {response.status_code}",
        context={"request_id": req_id},
        extra_data={
            "duration_ms": round(duration_ms, 2),
            "status_code": response.status_code
        })

    return response


app.include_router(students.router, tags=["Students"])


@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint for container health checks and monitoring."""
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "service": "Student Records",
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "list": "GET /api/students",
            "create": "POST /api/students",
            "update": "PUT /api/students",
            "delete": "DELETE /api/students?id={id}"
        }
    }


def run():
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_config=None)
