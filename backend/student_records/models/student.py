"""
Student model - one row per registered student.

Email uniqueness is checked by the service layer before each write,
not by a database constraint.
"""

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Text, DateTime, String, Index
from student_records.database import Base


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Student(Base):
    """SQLAlchemy model for the students table."""
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
                doc="Server generated student identifier, never changed")
    name = Column(Text, nullable=False,
                  doc="Student's name")
    email = Column(Text, nullable=False,
                   doc="Contact email, unique across students")
    phone = Column(Text, nullable=False,
                   doc="Contact phone number, stored as entered")
    gender = Column(String(16), nullable=False, default=Gender.MALE.value,
                    doc="Male | Female | Other")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        doc="When the row was inserted, used to order the list")

    # Not unique on purpose: uniqueness is a pre-check in the service layer
    __table_args__ = (
        Index("ix_students_email", "email"),
    )

    def to_dict(self) -> dict:
        """Serialize to the API payload shape."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "gender": self.gender,
        }

    def __repr__(self):
        return f"<Student(id={self.id}, name='{self.name}', email='{self.email}')>"
