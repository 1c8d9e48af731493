from __future__ import annotations
from typing import Any, Dict, List, Optional
import streamlit as st

def tagline():
    st.caption("Students • Teachers • Classes • AI report comments")

def form_key(scope: str) -> str:
    """Form key for ``scope``; changes after ``reset_form`` so the widgets start empty."""
    return f"{scope}__form_{st.session_state.get(f'{scope}__form_v', 0)}"

def reset_form(scope: str) -> None:
    st.session_state[f"{scope}__form_v"] = st.session_state.get(f"{scope}__form_v", 0) + 1

def flash(scope: str, level: str, msg: str) -> None:
    """Queue a message for the next render (survives st.rerun)."""
    st.session_state.setdefault(f"{scope}__flash", []).append((level, msg))

def show_flash(scope: str) -> None:
    for level, msg in st.session_state.pop(f"{scope}__flash", []):
        getattr(st, level)(msg)

def blank_to_none(values: Dict[str, Any]) -> Dict[str, Any]:
    """Strip text inputs; empty strings become None so optional fields stay unset."""
    out = {}
    for k, v in values.items():
        if isinstance(v, str):
            v = v.strip() or None
        out[k] = v
    return out

def option_labels(rows: List[Dict[str, Any]], label_fn, empty_label: Optional[str] = None) -> Dict[Optional[str], str]:
    """Map id -> label for a selectbox, optionally led by a None entry."""
    options: Dict[Optional[str], str] = {}
    if empty_label is not None:
        options[None] = empty_label
    for r in rows:
        options[r.get("id")] = label_fn(r)
    return options
