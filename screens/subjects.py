# screens/subjects.py
from __future__ import annotations

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from core import data_access
from core.entities import Subject, to_payload
from core.forms import blank_to_none, form_key, reset_form
from core.ui import handle_backend_error


def render():
    st.title("📘 Subjects")

    try:
        subjects = data_access.fetch_subjects()
    except Exception as e:
        handle_backend_error(e, "Could not load subjects.")
        subjects = []

    if subjects:
        df = pd.DataFrame([{"Code": s.get("code"), "Name": s.get("name")} for s in subjects])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No subjects defined.")

    with st.expander("Add subject", expanded=not subjects):
        with st.form(form_key("subjects")):
            name = st.text_input("Name")
            code = st.text_input("Code")
            submitted = st.form_submit_button("Save Subject")
        if submitted:
            try:
                subject = Subject(**blank_to_none({"name": name, "code": code}))
            except ValidationError:
                st.error("Subject name is required.")
                return
            try:
                data_access.create_entity("subjects", to_payload(subject))
            except Exception as e:
                handle_backend_error(e, "Error saving subject.")
                return
            st.toast(f"Subject {subject.name} added.")
            reset_form("subjects")
            st.rerun()
