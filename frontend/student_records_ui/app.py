# frontend/student_records_ui/app.py
import streamlit as st

# Page configuration MUST be the first Streamlit command
st.set_page_config(
    page_title="Student Registration",
    page_icon="🎓",
    layout="wide"
)

import os
import logging
from dotenv import load_dotenv

from student_records_ui.client import StudentsClient
from student_records_ui.state import BoardState, GENDER_OPTIONS, GENDER_LABELS

load_dotenv()
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

API_URL = os.getenv("STUDENTS_API_URL", "http://localhost:8000")
NOTICE_ICONS = {"success": "✅", "error": "❌"}


# One HTTP client per Streamlit server process
@st.cache_resource
def get_client():
    return StudentsClient(API_URL)


client = get_client()

# Session state initialization
if "board" not in st.session_state:
    st.session_state.board = BoardState()
    st.session_state.form_nonce = 0
    with st.spinner("Loading..."):
        st.session_state.board.refresh(client)

board: BoardState = st.session_state.board


def _reset_form_widgets():
    # A new form key makes the widgets pick up the draft again
    st.session_state.form_nonce += 1


def handle_edit(student):
    board.start_edit(student)
    _reset_form_widgets()


def handle_cancel():
    board.cancel_edit()
    _reset_form_widgets()


def handle_delete(student_id):
    board.request_delete(client, student_id)


form_col, table_col = st.columns([1, 3])

# ── Left side - Form ─────────────────────────────────────────
with form_col:
    st.header("Student Registration Form")
    with st.form(f"student_form_{st.session_state.form_nonce}"):
        name = st.text_input("First Name", value=board.draft["name"], placeholder="John")
        email = st.text_input("Email", value=board.draft["email"], placeholder="john@example.com")
        phone = st.text_input("Phone Number", value=board.draft["phone"], placeholder="+1 (123) 456-7890")
        gender = st.selectbox(
            "Gender",
            GENDER_OPTIONS,
            index=GENDER_OPTIONS.index(board.draft["gender"]) if board.draft["gender"] in GENDER_OPTIONS else 0,
            format_func=lambda value: GENDER_LABELS[value],
        )
        submitted = st.form_submit_button("Update" if board.editing else "Submit", disabled=board.busy)

    if board.editing:
        st.button("Cancel", on_click=handle_cancel)

    if submitted:
        board.draft = {"name": name, "email": email, "phone": phone, "gender": gender}
        missing = [label for label, value in (("First Name", name), ("Email", email), ("Phone Number", phone))
                   if not value.strip()]
        if missing:
            st.warning("Please fill in: " + ", ".join(missing))
        elif board.submit(client):
            _reset_form_widgets()
            st.rerun()

# ── Right side - Table ───────────────────────────────────────
with table_col:
    st.header("Registered Students")
    board.search = st.text_input("Search", placeholder="Search by name, email or phone")

    if board.loading:
        st.write("Loading...")
    else:
        header = st.columns([2, 3, 2, 1, 2])
        for column, title in zip(header, ("Name", "Email", "Phone", "Gender", "Action")):
            column.markdown(f"**{title}**")

        for student in board.visible_students:
            row = st.columns([2, 3, 2, 1, 2])
            row[0].write(student.get("name", ""))
            row[1].write(student.get("email", ""))
            row[2].write(student.get("phone", ""))
            row[3].write(student.get("gender", ""))
            edit_col, delete_col = row[4].columns(2)
            edit_col.button("Edit", key=f"edit_{student['id']}",
                            on_click=handle_edit, args=(student,))
            armed = board.armed_delete_id == student["id"]
            delete_col.button("Confirm" if armed else "Delete", key=f"delete_{student['id']}",
                              type="primary" if armed else "secondary", disabled=board.busy,
                              on_click=handle_delete, args=(student["id"],))

        if not board.visible_students:
            st.caption("No students found.")

for level, message in board.pop_notices():
    st.toast(message, icon=NOTICE_ICONS.get(level))
