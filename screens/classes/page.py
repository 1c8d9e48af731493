# screens/classes/page.py
from __future__ import annotations

import datetime

import streamlit as st
from pydantic import ValidationError

from core import data_access
from core.entities import ClassEntity, to_payload
from core.forms import blank_to_none, flash, form_key, option_labels, reset_form, show_flash
from core.ui import confirm_delete, handle_backend_error


def _k(s: str) -> str:
    return f"classes__{s}"


def _delete_class(class_id: str) -> bool:
    try:
        data_access.delete_entity("classes", class_id)
    except Exception as e:
        handle_backend_error(e, "Could not delete class.")
        return False
    return True


def render_list():
    st.title("🏫 Academic Classes")

    try:
        classes = data_access.fetch_classes()
    except Exception as e:
        handle_backend_error(e, "Could not load classes.")
        classes = []

    if not classes:
        st.info("No classes defined.")
        return

    for c in classes:
        with st.container(border=True):
            grade, body, year, actions = st.columns([0.12, 0.5, 0.18, 0.2])
            grade.markdown(f"### {c.get('grade') or ''}")
            body.markdown(f"**Section {c.get('section') or ''}**")
            body.caption(f"Teacher: {c.get('teacher_name') or 'Unassigned'}")
            year.caption(c.get("academic_year") or "")
            with actions:
                confirm_delete(
                    _k(f"del_{c['id']}"),
                    f"class {c.get('grade')}-{c.get('section')}",
                    lambda cid=c["id"]: _delete_class(cid),
                )


def render_add():
    st.title("➕ Add Class")
    show_flash(_k("add"))

    try:
        teachers = data_access.fetch_teachers()
    except Exception as e:
        handle_backend_error(e, "Could not load teachers.")
        teachers = []
    teacher_options = option_labels(teachers, lambda t: t.get("full_name") or "", "Unassigned")

    with st.form(form_key(_k("add"))):
        c1, c2, c3 = st.columns(3)
        grade = c1.text_input("Grade")
        section = c2.text_input("Section")
        academic_year = c3.text_input("Academic year", value=str(datetime.date.today().year))
        class_teacher_id = st.selectbox("Homeroom teacher", list(teacher_options), format_func=teacher_options.get)
        submitted = st.form_submit_button("Save Class", type="primary")

    if not submitted:
        return
    try:
        entity = ClassEntity(**blank_to_none({
            "grade": grade,
            "section": section,
            "academic_year": academic_year,
            "class_teacher_id": class_teacher_id,
        }))
    except ValidationError:
        st.error("Grade and section are required.")
        return
    try:
        data_access.create_entity("classes", to_payload(entity))
    except Exception as e:
        handle_backend_error(e, "Error saving class.")
        return
    flash(_k("add"), "success", f"Class {entity.grade}-{entity.section} created.")
    reset_form(_k("add"))
    st.rerun()
