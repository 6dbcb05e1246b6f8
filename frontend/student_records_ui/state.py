"""
View state of the student registration page.

Kept free of Streamlit so the page logic can be driven directly:
- the draft being typed in the form and the id of the row being edited
- the fetched list and the search text filtering it
- which row's delete button is armed waiting for a confirming click
- a busy flag that blocks a second dispatch while a request runs
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from student_records_ui.client import StudentsApiError

logger = logging.getLogger(__name__)

GENDER_OPTIONS = ("Male", "Female", "Other")
GENDER_LABELS = {"Male": "Male", "Female": "Female", "Other": "Prefer not to say"}
FORM_FIELDS = ("name", "email", "phone", "gender")


def empty_draft() -> dict:
    return {"name": "", "email": "", "phone": "", "gender": "Male"}


def filter_students(students: List[dict], search: str) -> List[dict]:
    """
    Rows whose name or email contains the search text (ignoring case)
    or whose phone contains it. A blank search keeps every row.
    """
    text = (search or "").strip()
    if not text:
        return list(students)
    lowered = text.lower()
    return [
        s for s in students
        if lowered in (s.get("name") or "").lower()
        or lowered in (s.get("email") or "").lower()
        or text in (s.get("phone") or "")
    ]


@dataclass
class BoardState:
    students: List[dict] = field(default_factory=list)
    draft: dict = field(default_factory=empty_draft)
    edit_id: Optional[str] = None
    armed_delete_id: Optional[str] = None
    search: str = ""
    loading: bool = False
    busy: bool = False
    notices: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def editing(self) -> bool:
        return self.edit_id is not None

    @property
    def visible_students(self) -> List[dict]:
        return filter_students(self.students, self.search)

    def notify(self, level: str, message: str):
        self.notices.append((level, message))

    def pop_notices(self) -> List[Tuple[str, str]]:
        notices, self.notices = self.notices, []
        return notices

    def refresh(self, client) -> bool:
        """Re-fetch the full list. On failure the previous list stays."""
        self.loading = True
        try:
            self.students = client.list_students()
            return True
        except StudentsApiError as exc:
            self.notify("error", f"Error: {exc.message}")
            return False
        finally:
            self.loading = False

    def start_edit(self, student: dict):
        self.draft = {name: student.get(name, "") for name in FORM_FIELDS}
        self.edit_id = student.get("id")

    def cancel_edit(self):
        self.draft = empty_draft()
        self.edit_id = None

    def submit(self, client) -> bool:
        """
        Create the draft, or update the row being edited.
        On success the form is cleared and the list re-fetched; on
        failure the draft is kept so it can be corrected.
        """
        if self.busy:
            return False
        self.busy = True
        payload = {name: self.draft.get(name, "") for name in FORM_FIELDS}
        try:
            if self.edit_id:
                client.update_student(self.edit_id, payload)
                self.notify("success", "Student updated successfully")
            else:
                client.create_student(payload)
                self.notify("success", "Student added successfully")
        except StudentsApiError as exc:
            logger.info("Submit rejected: %s", exc.message)
            self.notify("error", f"Error: {exc.message}")
            return False
        finally:
            self.busy = False

        self.cancel_edit()
        self.refresh(client)
        return True

    def request_delete(self, client, student_id: Optional[str]) -> bool:
        """
        First click on a row arms it, a second click on the same row
        sends the delete. Returns True only when a delete succeeded.
        """
        if not student_id or self.busy:
            return False
        if self.armed_delete_id != student_id:
            self.armed_delete_id = student_id
            return False

        self.busy = True
        try:
            message = client.delete_student(student_id)
            self.notify("success", message)
        except StudentsApiError as exc:
            self.notify("error", f"Error: {exc.message}")
            return False
        finally:
            self.busy = False
            self.armed_delete_id = None

        self.refresh(client)
        return True
