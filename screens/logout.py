# app/screens/logout.py
from __future__ import annotations
import streamlit as st

from core.navigation import navigate_to_login

def render():
    st.title("🚪 Logout")
    st.write(f"Signed in as **{st.session_state.get('username') or 'admin'}**.")

    # Clearing the session flag drops the user back on the login gate.
    if st.button("Sign out", type="primary", key="logout__confirm"):
        navigate_to_login()
