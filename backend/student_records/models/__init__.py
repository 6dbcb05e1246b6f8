from student_records.models.student import Gender, Student

__all__ = ["Gender", "Student"]
