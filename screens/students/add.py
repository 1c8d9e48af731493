# screens/students/add.py
"""
Add-student form.

The photo comes from a file upload or the camera. The camera widget is
only mounted while the capture view is open; leaving the page closes it.
"""
from __future__ import annotations

import logging
import time
from datetime import date

import streamlit as st
from pydantic import ValidationError

from core import data_access
from core.camera import CameraCapture, StreamlitCameraStream
from core.entities import GENDERS, Student, to_payload
from core.forms import blank_to_none, flash, form_key, option_labels, reset_form, show_flash
from core.ui import handle_backend_error

logger = logging.getLogger(__name__)


SCOPE = "students_add"


def _k(s: str) -> str:
    return f"{SCOPE}__{s}"


CAMERA_WIDGET_KEY = _k("camera_widget")


def _camera() -> CameraCapture:
    cam = st.session_state.get(_k("camera"))
    if cam is None:
        cam = CameraCapture(lambda: StreamlitCameraStream(CAMERA_WIDGET_KEY))
        st.session_state[_k("camera")] = cam
    return cam


def on_leave() -> None:
    """Route hook: release the camera when navigating away."""
    cam = st.session_state.get(_k("camera"))
    if cam is not None:
        cam.close()


def _render_photo_section() -> None:
    cam = _camera()
    photo = st.session_state.get(_k("photo"))

    if cam.is_open:
        shot = st.camera_input("Take a photo", key=CAMERA_WIDGET_KEY)
        if shot is not None:
            cam.capture(shot.getvalue())
            st.session_state[_k("photo")] = (cam.take_frame(), f"camera_{int(time.time() * 1000)}.jpg", "image/jpeg")
            st.rerun()
        if st.button("✖ Cancel", key=_k("camera_cancel")):
            cam.cancel()
            st.rerun()
        return

    if cam.error:
        st.error(cam.error)
        cam.error = None

    if photo:
        content, name, _ = photo
        st.image(content, width=128, caption=name)
        if st.button("Remove photo", key=_k("photo_remove")):
            for key in ("photo", "photo_upload"):
                st.session_state.pop(_k(key), None)
            st.rerun()

    up_col, cam_col = st.columns(2)
    with up_col:
        uploaded = st.file_uploader(
            "Change Photo" if photo else "Upload File",
            type=["png", "jpg", "jpeg", "webp"],
            key=_k("photo_upload"),
        )
        if uploaded is not None:
            st.session_state[_k("photo")] = (uploaded.getvalue(), uploaded.name, uploaded.type)
    with cam_col:
        if st.button("📷 Use Camera", key=_k("camera_open")):
            cam.open()
            st.rerun()


def _save_student(values: dict) -> None:
    try:
        student = Student(**blank_to_none(values))
    except ValidationError as e:
        st.error("Please fill in first name, last name and admission number.")
        logger.debug("Student form rejected: %s", e)
        return

    photo = st.session_state.get(_k("photo"))
    try:
        if photo:
            content, name, mime = photo
            uploaded = data_access.upload_file(content, f"students/{int(time.time() * 1000)}_{name}", mime)
            if uploaded:
                student.photo_path = uploaded
            else:
                flash(SCOPE, "warning", "Photo upload failed; the student was saved without a photo.")
        data_access.create_entity("students", to_payload(student))
    except Exception as e:
        handle_backend_error(e, "Error saving student.")
        return

    for key in ("photo", "photo_upload"):
        st.session_state.pop(_k(key), None)
    flash(SCOPE, "success", "Student added successfully!")
    reset_form(SCOPE)
    st.rerun()


def render():
    st.title("➕ Add New Student")
    show_flash(SCOPE)

    _, classes, teachers = data_access.load_directory()
    class_options = option_labels(classes, lambda c: f"{c.get('grade')} - {c.get('section')}", "Select Class")
    teacher_options = option_labels(teachers, lambda t: t.get("full_name") or "", "Assign Class Teacher (Optional)")

    st.markdown("#### Photo")
    _render_photo_section()

    with st.form(form_key(SCOPE)):
        c1, c2 = st.columns(2)
        first_name = c1.text_input("First Name")
        last_name = c2.text_input("Last Name")
        admission_no = c1.text_input("Admission No")
        roll_no = c2.text_input("Roll No")
        dob = c1.date_input("Date of birth", value=None, min_value=date(1990, 1, 1))
        gender = c2.selectbox("Gender", GENDERS)
        class_id = c1.selectbox("Class", list(class_options), format_func=class_options.get)
        teacher_id = c2.selectbox("Class Teacher", list(teacher_options), format_func=teacher_options.get)
        notes = st.text_area("Initial Notes...", height=90)
        submitted = st.form_submit_button("Save Student", type="primary")

    if submitted:
        _save_student({
            "first_name": first_name,
            "last_name": last_name,
            "admission_no": admission_no,
            "roll_no": roll_no,
            "dob": dob.isoformat() if dob else None,
            "gender": gender,
            "class_id": class_id,
            "teacher_id": teacher_id,
            "notes": notes,
        })
