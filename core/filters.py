# core/filters.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Sequence

STUDENT_SEARCH_FIELDS = ("last_name", "admission_no")
TEACHER_SEARCH_FIELDS = ("full_name", "teacher_no")


def filter_records(records: Iterable[Dict[str, Any]], query: str, fields: Sequence[str]) -> List[Dict[str, Any]]:
    """Case-insensitive substring match of ``query`` against any of ``fields``."""
    needle = (query or "").strip().lower()
    rows = list(records)
    if not needle:
        return rows
    return [r for r in rows if any(needle in str(r.get(f) or "").lower() for f in fields)]


def filter_students(students: Iterable[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    return filter_records(students, query, STUDENT_SEARCH_FIELDS)


def filter_teachers(teachers: Iterable[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    return filter_records(teachers, query, TEACHER_SEARCH_FIELDS)
