"""
Runtime configuration read from the environment.

Values can also come from a local .env file (loaded once at import time).
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Database URL - hosted PostgreSQL in production, SQLite for local development
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./student_records.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma separated list of allowed origins for the UI
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

SERVICE_NAME = "student-records-backend"
SERVICE_VERSION = "1.0.0"
