# core/memory_store.py
"""Demo-mode backend: process-local lists, seeded with a small sample school."""
from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Dict, List, Optional

from core.store import (
    COLLECTIONS,
    ORDER_BY,
    DataStore,
    RecordNotFoundError,
    attach_class_labels,
    attach_teacher_names,
    check_collection,
    clean_payload,
    sort_rows,
    to_data_uri,
)

logger = logging.getLogger(__name__)

DEMO_STUDENTS = [
    {"id": "1", "admission_no": "ADM001", "first_name": "John", "last_name": "Doe", "dob": "2015-05-15",
     "gender": "Male", "class_id": "1", "roll_no": "101", "notes": "Excellent in mathematics"},
    {"id": "2", "admission_no": "ADM002", "first_name": "Jane", "last_name": "Smith", "dob": "2016-02-20",
     "gender": "Female", "class_id": "2", "roll_no": "102", "notes": "Needs improvement in reading"},
]

DEMO_TEACHERS = [
    {"id": "1", "teacher_no": "T001", "full_name": "Sarah Connor", "phone": "555-0123",
     "email": "sarah@school.edu", "qualifications": "M.Ed Mathematics", "hire_date": "2020-01-15"},
    {"id": "2", "teacher_no": "T002", "full_name": "James Logan", "phone": "555-0987",
     "email": "logan@school.edu", "qualifications": "B.Sc Physics", "hire_date": "2021-08-20"},
]

DEMO_CLASSES = [
    {"id": "1", "grade": "5", "section": "A", "academic_year": "2024", "class_teacher_id": "1"},
    {"id": "2", "grade": "6", "section": "B", "academic_year": "2024", "class_teacher_id": "2"},
]


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


class MemoryStore(DataStore):
    """
    In-memory rows keyed by collection name.

    Not safe for concurrent writers; Streamlit runs each script rerun on a
    single thread and only reads fan out (see ``load_directory``).
    """

    mode = "demo"

    def __init__(self, seed: bool = True, admin_users: Optional[List[Dict[str, Any]]] = None):
        self._rows: Dict[str, List[Dict[str, Any]]] = {name: [] for name in COLLECTIONS}
        if seed:
            self._rows["students"] = copy.deepcopy(DEMO_STUDENTS)
            self._rows["teachers"] = copy.deepcopy(DEMO_TEACHERS)
            self._rows["classes"] = copy.deepcopy(DEMO_CLASSES)
        self._admin_users = list(admin_users or [])

    def _all(self, collection: str) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._rows[collection]]

    # --- reads ---
    def fetch_students(self) -> List[Dict[str, Any]]:
        rows = sort_rows(self._all("students"), ORDER_BY["students"])
        return attach_class_labels(rows, self._rows["classes"])

    def fetch_teachers(self) -> List[Dict[str, Any]]:
        return sort_rows(self._all("teachers"), ORDER_BY["teachers"])

    def fetch_classes(self) -> List[Dict[str, Any]]:
        rows = sort_rows(self._all("classes"), ORDER_BY["classes"])
        return attach_teacher_names(rows, self._rows["teachers"])

    def fetch_subjects(self) -> List[Dict[str, Any]]:
        return sort_rows(self._all("subjects"), ORDER_BY["subjects"])

    # --- writes ---
    def create_entity(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        check_collection(collection)
        item = {**clean_payload(payload), "id": _new_id()}
        self._rows[collection].append(item)
        logger.debug("demo create %s id=%s", collection, item["id"])
        return dict(item)

    def update_entity(self, collection: str, record_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        check_collection(collection)
        for row in self._rows[collection]:
            if row.get("id") == record_id:
                row.update(clean_payload(payload))
                return dict(row)
        raise RecordNotFoundError(collection, record_id)

    def delete_entity(self, collection: str, record_id: str) -> None:
        check_collection(collection)
        self._rows[collection] = [r for r in self._rows[collection] if r.get("id") != record_id]

    # --- assets ---
    def upload_file(self, content: bytes, path: str, content_type: Optional[str] = None) -> Optional[str]:
        # nothing is written; the asset travels inline
        return to_data_uri(content, path, content_type)

    def resolve_storage_path(self, path: str) -> str:
        return path

    # --- auth ---
    def get_admin_user(self, username: str) -> Optional[Dict[str, Any]]:
        for user in self._admin_users:
            if user.get("username") == username:
                return dict(user)
        return None
