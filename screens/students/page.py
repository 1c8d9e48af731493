# screens/students/page.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core import data_access
from core.filters import filter_students
from core.report_comments import generate_student_report_comment
from core.ui import confirm_delete, handle_backend_error, initials, render_avatar


def _k(s: str) -> str:
    """Per-page key namespace to avoid collisions if rendered twice."""
    return f"students__{s}"


def _class_label(student: dict) -> str:
    cls = student.get("classes") or {}
    return f"{cls.get('grade') or ''} - {cls.get('section') or ''}"


def _delete_student(student_id: str) -> bool:
    try:
        data_access.delete_entity("students", student_id)
        st.session_state.pop(_k("report"), None)
    except Exception as e:
        handle_backend_error(e, "Could not delete student.")
        return False
    return True


def _render_report_panel() -> None:
    report = st.session_state.get(_k("report"))
    if not report:
        return
    name, text = report
    with st.container(border=True):
        st.markdown(f"#### ✨ AI Insight · {name}")
        st.write(text)
        if st.button("Dismiss", key=_k("dismiss_report")):
            st.session_state.pop(_k("report"), None)
            st.rerun()


def _render_row(s: dict) -> None:
    c_photo, c_name, c_adm, c_class, c_ai, c_del = st.columns([0.08, 0.32, 0.18, 0.16, 0.08, 0.18])
    with c_photo:
        render_avatar(s, initials(s.get("first_name"), s.get("last_name")), width=40)
    c_name.markdown(f"**{s.get('first_name', '')} {s.get('last_name', '')}**  \n{s.get('gender') or ''}")
    c_adm.write(s.get("admission_no") or "")
    c_class.write(_class_label(s))
    if c_ai.button("✨", key=_k(f"ai_{s['id']}"), help="AI report comment"):
        with st.spinner("Generating AI feedback..."):
            text = generate_student_report_comment(s, s.get("notes"))
        st.session_state[_k("report")] = (f"{s.get('first_name', '')} {s.get('last_name', '')}", text)
    with c_del:
        confirm_delete(
            _k(f"del_{s['id']}"),
            f"{s.get('first_name', '')} {s.get('last_name', '')}",
            lambda sid=s["id"]: _delete_student(sid),
        )


def render():
    st.title("🎓 Students Directory")

    try:
        students = data_access.fetch_students()
    except Exception as e:
        handle_backend_error(e, "Could not load students.")
        students = []

    query = st.text_input("Search students...", key=_k("search"), placeholder="Surname or admission no")
    filtered = filter_students(students, query)

    if not filtered:
        st.info("No students found")
    else:
        st.caption(f"{len(filtered)} of {len(students)} students")
        for s in filtered:
            _render_row(s)

        with st.expander("Table view", expanded=False):
            df = pd.DataFrame(
                [
                    {
                        "Admission": s.get("admission_no"),
                        "First name": s.get("first_name"),
                        "Last name": s.get("last_name"),
                        "Gender": s.get("gender"),
                        "Class": _class_label(s),
                        "DOB": s.get("dob"),
                    }
                    for s in filtered
                ]
            )
            st.dataframe(df, use_container_width=True, hide_index=True)

    _render_report_panel()
