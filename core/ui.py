# core/ui.py
from __future__ import annotations
import datetime
import logging
from typing import Any, Callable, Dict, Optional

import streamlit as st

from core import data_access
from core.settings import load_settings

logger = logging.getLogger(__name__)

def handle_backend_error(e: Exception, user_message: str = "Something went wrong talking to the database."):
    """Log the full exception server-side; the user only sees a generic message."""
    logger.error("Backend error: %s", e, exc_info=True)
    st.error(user_message)

def confirm_delete(key: str, label: str, on_confirm: Callable[[], bool]) -> None:
    """
    Two-step delete: the first click arms a confirmation, the second runs
    ``on_confirm``. Only one pending delete is tracked per ``key``.
    The page reruns only when ``on_confirm`` returns True, so an error it
    rendered stays on screen.
    """
    pending_key = f"{key}__pending"
    if st.session_state.get(pending_key):
        st.warning(f"Delete {label}?")
        yes, no = st.columns(2)
        if yes.button("Yes, delete", key=f"{key}__yes", type="primary"):
            st.session_state.pop(pending_key, None)
            if on_confirm():
                st.rerun()
        if no.button("Cancel", key=f"{key}__no"):
            st.session_state.pop(pending_key, None)
            st.rerun()
    elif st.button("🗑️", key=f"{key}__arm", help=f"Delete {label}"):
        st.session_state[pending_key] = True
        st.rerun()

def initials(first: Optional[str], last: Optional[str]) -> str:
    return f"{(first or ' ')[0]}{(last or ' ')[0]}".strip().upper()

def render_avatar(record: Dict[str, Any], fallback: str, width: int = 48) -> None:
    """Photo thumbnail when the record has one, otherwise the fallback text."""
    url = ""
    if record.get("photo_path"):
        try:
            url = data_access.get_public_url(record["photo_path"])
        except Exception as e:
            logger.warning("Could not resolve photo %s: %s", record["photo_path"], e)
    if url:
        st.image(url, width=width)
    else:
        st.markdown(f"**{fallback or '—'}**")

def render_mode_banner() -> None:
    if data_access.backend_mode() == "demo":
        st.info("Demo mode: data lives in memory and resets when the app restarts.")

def render_footer_global():
    """Render one footer line; call this on every page."""
    settings = load_settings()
    year = datetime.datetime.now().year
    st.markdown(
        f"""
        <div style="
            margin-top: 2rem;
            padding: 0.75rem 0;
            font-size: 0.9rem;
            border-top: 1px solid rgba(0,0,0,0.15);
            opacity: 0.9;
        ">© {year} • {settings.app.name} • {settings.app.environment} • {data_access.backend_mode()} backend</div>
        """,
        unsafe_allow_html=True,
    )
