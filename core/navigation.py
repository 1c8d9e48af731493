# core/navigation.py
import streamlit as st

ROUTE_KEY = "route"

def current_route(default: str) -> str:
    """The page token held in session state (set to ``default`` on first read)."""
    return st.session_state.setdefault(ROUTE_KEY, default)

def navigate_to(route_key: str, rerun: bool = True):
    """Switch page; the shell runs the old page's on_leave hook on the next render."""
    st.session_state[ROUTE_KEY] = route_key
    if rerun:
        st.rerun()

def navigate_to_login():
    """Drop the session and return to the login gate"""
    from core.auth import logout
    logout()
    st.rerun()
