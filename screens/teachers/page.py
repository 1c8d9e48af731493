# screens/teachers/page.py
from __future__ import annotations

import streamlit as st

from core import data_access
from core.filters import filter_teachers
from core.navigation import navigate_to
from core.report_comments import summarize_teacher_profile
from core.ui import confirm_delete, handle_backend_error, render_avatar

PAGE_KEY = "teachers"


def _k(s: str) -> str:
    return f"{PAGE_KEY}__{s}"


def _delete_teacher(teacher_id: str) -> bool:
    try:
        data_access.delete_entity("teachers", teacher_id)
    except Exception as e:
        handle_backend_error(e, "Could not delete teacher.")
        return False
    return True


def _render_card(t: dict) -> None:
    with st.container(border=True):
        c_photo, c_body = st.columns([0.25, 0.75])
        with c_photo:
            render_avatar(t, "👤", width=56)
        with c_body:
            st.markdown(f"**{t.get('full_name') or ''}**")
            st.caption(t.get("qualifications") or "")
            st.caption(t.get("email") or "")

        bio_key = _k(f"bio_{t['id']}")
        a, b = st.columns(2)
        if a.button("✨ Bio", key=_k(f"bio_btn_{t['id']}")):
            with st.spinner("Summarizing profile..."):
                st.session_state[bio_key] = summarize_teacher_profile(t)
        with b:
            confirm_delete(_k(f"del_{t['id']}"), t.get("full_name") or "teacher", lambda tid=t["id"]: _delete_teacher(tid))
        if st.session_state.get(bio_key):
            st.write(st.session_state[bio_key])


def render():
    head, action = st.columns([0.75, 0.25])
    head.title("👩‍🏫 Faculty Directory")
    if action.button("+ Add Teacher", key=_k("add")):
        navigate_to("teachers_add")

    try:
        teachers = data_access.fetch_teachers()
    except Exception as e:
        handle_backend_error(e, "Could not load teachers.")
        teachers = []

    query = st.text_input("Search teachers...", key=_k("search"), placeholder="Name or teacher no")
    filtered = filter_teachers(teachers, query)
    if not filtered:
        st.info("No teachers listed yet.")
        return

    cols = st.columns(3)
    for i, t in enumerate(filtered):
        with cols[i % 3]:
            _render_card(t)
