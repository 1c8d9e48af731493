# screens/dashboard.py
"""Landing page after login: headline counts and quick links."""
from __future__ import annotations

import streamlit as st

from core import data_access
from core.forms import tagline
from core.navigation import navigate_to
from core.ui import render_mode_banner


def render():
    st.title("Dashboard Overview")
    tagline()
    render_mode_banner()

    students, classes, teachers = data_access.load_directory()

    c1, c2, c3 = st.columns(3)
    c1.metric("Total Students", len(students))
    c2.metric("Total Teachers", len(teachers))
    c3.metric("Active Classes", len(classes))

    st.markdown("### Quick Actions")
    q1, q2, q3 = st.columns(3)
    if q1.button("➕ Register New Student", key="dashboard__add_student", use_container_width=True):
        navigate_to("students_add")
    if q2.button("➕ Add Faculty Member", key="dashboard__add_teacher", use_container_width=True):
        navigate_to("teachers_add")
    if q3.button("🏫 Create Class", key="dashboard__add_class", use_container_width=True):
        navigate_to("classes_add")
