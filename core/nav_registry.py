# core/nav_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, List, Dict

# Page renderer signature: () -> None
PageFn = Callable[[], None]

@dataclass(frozen=True)
class Route:
    key: str                  # stable id, held in st.session_state["route"]
    label: str                # UI label
    icon: str                 # emoji or short string
    render: PageFn            # callable that renders the page
    on_leave: Optional[PageFn] = None  # runs once when navigating away

@dataclass
class Section:
    title: str
    routes: List[Route]

# Prefer "screens" modules to avoid accidental page auto-run code.
from screens.dashboard import render as dashboard_render
from screens.students.page import render as students_list_render
from screens.students.add import render as students_add_render, on_leave as students_add_leave
from screens.teachers.page import render as teachers_list_render
from screens.teachers.add import render as teachers_add_render
from screens.classes.page import render_list as classes_list_render, render_add as classes_add_render
from screens.subjects import render as subjects_render
from screens.logout import render as logout_render

SECTIONS: List[Section] = [
    Section("Overview", [
        Route("dashboard",      "Dashboard",     "🏠", dashboard_render),
    ]),
    Section("Students", [
        Route("students_list",  "Student List",  "🎓", students_list_render),
        Route("students_add",   "Add Student",   "➕", students_add_render, students_add_leave),
    ]),
    Section("Teachers", [
        Route("teachers_list",  "Teacher List",  "👩‍🏫", teachers_list_render),
        Route("teachers_add",   "Add Teacher",   "➕", teachers_add_render),
    ]),
    Section("Academics", [
        Route("classes_list",   "Classes",       "🏫", classes_list_render),
        Route("classes_add",    "Add Class",     "➕", classes_add_render),
        Route("subjects_list",  "Subjects",      "📘", subjects_render),
    ]),
    Section("Account", [
        Route("logout",         "Logout",        "🚪", logout_render),
    ]),
]

# Index for quick lookup (used by router)
ROUTE_INDEX: Dict[str, Route] = {r.key: r for s in SECTIONS for r in s.routes}
DEFAULT_ROUTE_KEY = "dashboard"  # after login, where to land
