# screens/login.py
import streamlit as st

from core.auth import login, INVALID_CREDENTIALS
from core.settings import load_settings

def render():
    # No sidebar on the login gate
    st.markdown(
        """
        <style>
            section[data-testid="stSidebar"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    settings = load_settings()
    st.title(f"🏫 {settings.app.name}")
    st.caption("Comprehensive School Management System")

    with st.form("login_form"):
        username = st.text_input("Username", key="login__username")
        password = st.text_input("Password", type="password", key="login__password")
        submitted = st.form_submit_button("Sign In", type="primary")

    if submitted:
        if login(username, password):
            st.rerun()
        else:
            st.error(f"{INVALID_CREDENTIALS}. Login failed.")

    st.caption(f"Demo credentials: {settings.auth.demo_user} / {settings.auth.demo_password}")
