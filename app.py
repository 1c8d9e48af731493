# app.py
from __future__ import annotations
import logging
import streamlit as st

from core.settings import load_settings
from core import data_access
from core.auth import is_authenticated
from core.navigation import current_route, navigate_to, navigate_to_login
from core.nav_registry import SECTIONS, ROUTE_INDEX, DEFAULT_ROUTE_KEY
from core.ui import render_footer_global

logger = logging.getLogger(__name__)

LAST_ROUTE_KEY = "_last_route"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _ensure_store():
    """Pick the backend once per process; a failure here is shown, not raised."""
    try:
        return data_access.get_store()
    except Exception as e:
        logger.error("Data store initialization failed", exc_info=True)
        st.error("Database initialization failed. See details below.")
        with st.expander("Diagnostics"):
            st.exception(e)
        st.stop()


def _run_leave_hook(route_key: str) -> None:
    """Run the previous page's on_leave hook when the page token changed."""
    last = st.session_state.get(LAST_ROUTE_KEY)
    if last and last != route_key:
        prev = ROUTE_INDEX.get(last)
        if prev and prev.on_leave:
            prev.on_leave()
    st.session_state[LAST_ROUTE_KEY] = route_key


def _render_sidebar(active: str) -> None:
    with st.sidebar:
        st.markdown(f"### 🏫 {load_settings().app.name}")
        st.caption(f"Signed in as **{st.session_state.get('username') or 'admin'}**")
        for section in SECTIONS:
            st.markdown(f"**{section.title}**")
            for route in section.routes:
                if st.button(
                    f"{route.icon} {route.label}",
                    key=f"nav__{route.key}",
                    type="primary" if route.key == active else "secondary",
                    use_container_width=True,
                ):
                    navigate_to(route.key)


def _render_placeholder() -> None:
    st.markdown("## 🏫")
    st.info("Module under construction")


def main():
    settings = load_settings()
    _configure_logging(settings.app.log_level)
    try:
        st.set_page_config(page_title=settings.app.name, page_icon="🏫", layout="wide")
    except Exception:
        pass

    _ensure_store()

    # --- LOGIN GATE ---
    if not is_authenticated():
        from screens.login import render as login_render
        login_render()
        return

    # --- AUTHENTICATED APP FLOW ---
    route_key = current_route(DEFAULT_ROUTE_KEY)
    _run_leave_hook(route_key)
    _render_sidebar(route_key)

    _, right = st.columns([0.85, 0.15])
    with right:
        if st.button("Logout", key="logout_top"):
            navigate_to_login()

    route = ROUTE_INDEX.get(route_key)
    if route is None:
        _render_placeholder()
    else:
        route.render()

    render_footer_global()


if __name__ == "__main__":
    main()
