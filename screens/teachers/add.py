# screens/teachers/add.py
from __future__ import annotations

import time
from datetime import date

import streamlit as st
from pydantic import ValidationError

from core import data_access
from core.entities import Teacher, to_payload
from core.forms import blank_to_none, flash, form_key, reset_form, show_flash
from core.ui import handle_backend_error


SCOPE = "teachers_add"


def render():
    st.title("➕ Add Teacher")
    show_flash(SCOPE)

    with st.form(form_key(SCOPE)):
        c1, c2 = st.columns(2)
        full_name = c1.text_input("Full Name")
        teacher_no = c2.text_input("Teacher No")
        email = c1.text_input("Email")
        phone = c2.text_input("Phone")
        qualifications = c1.text_input("Qualifications")
        hire_date = c2.date_input("Hire date", value=None, min_value=date(1970, 1, 1))
        photo = st.file_uploader("Photo (optional)", type=["png", "jpg", "jpeg", "webp"])
        submitted = st.form_submit_button("Save Teacher", type="primary")

    if not submitted:
        return

    try:
        teacher = Teacher(**blank_to_none({
            "full_name": full_name,
            "teacher_no": teacher_no,
            "email": email,
            "phone": phone,
            "qualifications": qualifications,
            "hire_date": hire_date.isoformat() if hire_date else None,
        }))
    except ValidationError:
        st.error("Full name is required.")
        return

    try:
        if photo is not None:
            path = data_access.upload_file(photo.getvalue(), f"teachers/{int(time.time() * 1000)}_{photo.name}", photo.type)
            if path:
                teacher.photo_path = path
            else:
                flash(SCOPE, "warning", "Photo upload failed; the teacher was saved without a photo.")
        data_access.create_entity("teachers", to_payload(teacher))
    except Exception as e:
        handle_backend_error(e, "Error saving teacher.")
        return
    flash(SCOPE, "success", f"Teacher {teacher.full_name} added.")
    reset_form(SCOPE)
    st.rerun()
