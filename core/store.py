# core/store.py
"""
Storage port shared by the demo, SQL and Supabase backends.

Every backend exposes the same read/write contract over the named
collections below. Join fields (a student's class label, a class's
homeroom teacher name) are computed here so each backend returns rows of
the same shape.
"""
from __future__ import annotations

import base64
import mimetypes
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

COLLECTIONS = ("students", "teachers", "classes", "subjects")

# collection -> column used by fetch_* ordering
ORDER_BY = {
    "students": "last_name",
    "teachers": "full_name",
    "classes": "grade",
    "subjects": "name",
}

# keys added on read that must never reach a write
JOINED_KEYS = ("classes", "teachers", "teacher_name")

MISSING_CLASS = {"grade": "N/A", "section": ""}

PASSTHROUGH_PREFIXES = ("data:", "blob:", "http://", "https://")


class StoreError(Exception):
    """Base class for data-access errors raised by this package."""


class UnknownCollectionError(StoreError, ValueError):
    def __init__(self, collection: str):
        super().__init__(
            f"Unknown collection {collection!r}; expected one of: {', '.join(COLLECTIONS)}"
        )
        self.collection = collection


class RecordNotFoundError(StoreError, LookupError):
    def __init__(self, collection: str, record_id: str):
        super().__init__(f"No record {record_id!r} in {collection}")
        self.collection = collection
        self.record_id = record_id


def check_collection(collection: str) -> str:
    if collection not in COLLECTIONS:
        raise UnknownCollectionError(collection)
    return collection


def clean_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of payload without id and read-time join keys."""
    return {k: v for k, v in (payload or {}).items() if k != "id" and k not in JOINED_KEYS}


def sort_rows(rows: Iterable[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    return sorted(rows, key=lambda r: (r.get(key) is None, str(r.get(key) or "")))


def attach_class_labels(students: Iterable[Dict[str, Any]], classes: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Give each student a ``classes`` mapping with its class grade and section."""
    by_id = {str(c.get("id")): c for c in classes}
    out = []
    for s in students:
        cls = by_id.get(str(s.get("class_id")))
        label = {"grade": cls.get("grade"), "section": cls.get("section")} if cls else dict(MISSING_CLASS)
        out.append({**s, "classes": label})
    return out


def attach_teacher_names(classes: Iterable[Dict[str, Any]], teachers: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Give each class a ``teacher_name`` from its homeroom teacher (None when unassigned)."""
    by_id = {str(t.get("id")): t for t in teachers}
    out = []
    for c in classes:
        teacher = by_id.get(str(c.get("class_teacher_id")))
        out.append({**c, "teacher_name": teacher.get("full_name") if teacher else None})
    return out


def to_data_uri(content: bytes, path: str, content_type: Optional[str] = None) -> str:
    mime = content_type or mimetypes.guess_type(path)[0] or "application/octet-stream"
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def is_direct_reference(path: str) -> bool:
    return str(path).startswith(PASSTHROUGH_PREFIXES)


class DataStore(ABC):
    """Uniform create/read/update/delete contract over COLLECTIONS."""

    mode: str = ""

    @abstractmethod
    def fetch_students(self) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def fetch_teachers(self) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def fetch_classes(self) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def fetch_subjects(self) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def create_entity(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    @abstractmethod
    def update_entity(self, collection: str, record_id: str, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    @abstractmethod
    def delete_entity(self, collection: str, record_id: str) -> None: ...

    @abstractmethod
    def upload_file(self, content: bytes, path: str, content_type: Optional[str] = None) -> Optional[str]: ...

    @abstractmethod
    def resolve_storage_path(self, path: str) -> str: ...

    @abstractmethod
    def get_admin_user(self, username: str) -> Optional[Dict[str, Any]]: ...

    def get_public_url(self, path: Optional[str]) -> str:
        if not path:
            return ""
        if is_direct_reference(path):
            return path
        return self.resolve_storage_path(path)
