# core/auth.py
from __future__ import annotations

import logging
from typing import Optional

import bcrypt
import streamlit as st

from core import data_access
from core.settings import Settings, load_settings

logger = logging.getLogger(__name__)

SESSION_KEY = "authenticated"
INVALID_CREDENTIALS = "Invalid credentials"


def _verify_hash(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False


def check_credentials(username: str, password: str, settings: Optional[Settings] = None) -> bool:
    """
    Bypass credential first, then the admin_user table.
    A lookup failure counts as a failed login.
    """
    settings = settings or load_settings()
    username = (username or "").strip()
    if username == settings.auth.demo_user and password == settings.auth.demo_password:
        return True
    if not username or not password:
        return False
    try:
        user = data_access.get_admin_user(username)
    except Exception:
        logger.error("Admin lookup failed for %s", username, exc_info=True)
        return False
    if not user or not user.get("password_hash"):
        return False
    return _verify_hash(password, user["password_hash"])


def is_authenticated() -> bool:
    return bool(st.session_state.get(SESSION_KEY))


def login(username: str, password: str) -> bool:
    ok = check_credentials(username, password)
    if ok:
        st.session_state[SESSION_KEY] = True
        st.session_state["username"] = username.strip()
        logger.info("User %s signed in", username.strip())
    return ok


def logout() -> None:
    for key in (SESSION_KEY, "username", "route"):
        st.session_state.pop(key, None)
