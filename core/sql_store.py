# core/sql_store.py
"""
Relational backend over a SQLAlchemy engine (SQLite locally, Postgres in
production). Photos are written below ``media_dir`` and referenced by their
storage-relative path.
"""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine

from core.entities import ClassEntity, Student, Subject, Teacher
from core.store import (
    ORDER_BY,
    DataStore,
    RecordNotFoundError,
    attach_class_labels,
    attach_teacher_names,
    check_collection,
    clean_payload,
)

logger = logging.getLogger(__name__)

_MODELS = {
    "students": Student,
    "teachers": Teacher,
    "classes": ClassEntity,
    "subjects": Subject,
}

# writable columns per table
COLUMNS: Dict[str, List[str]] = {
    name: [f for f in model.model_fields if f not in ("id", "teacher_name")]
    for name, model in _MODELS.items()
}


def _columns_for(collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    allowed = COLUMNS[collection]
    values = {k: v for k, v in clean_payload(payload).items() if k in allowed}
    dropped = set(clean_payload(payload)) - set(values)
    if dropped:
        logger.warning("Ignoring unknown %s columns: %s", collection, ", ".join(sorted(dropped)))
    return values


class SqlStore(DataStore):
    mode = "sql"

    def __init__(self, engine: Engine, media_dir: str | Path = "data/media"):
        self.engine = engine
        self.media_dir = Path(media_dir)

    # --- reads ---
    def _select_all(self, collection: str) -> List[Dict[str, Any]]:
        table = check_collection(collection)
        cols = ", ".join(["id"] + COLUMNS[table])
        with self.engine.connect() as conn:
            rows = conn.execute(
                sa_text(f"SELECT {cols} FROM {table} ORDER BY {ORDER_BY[table]}")
            ).fetchall()
        return [dict(r._mapping) for r in rows]

    def fetch_students(self) -> List[Dict[str, Any]]:
        return attach_class_labels(self._select_all("students"), self._select_all("classes"))

    def fetch_teachers(self) -> List[Dict[str, Any]]:
        return self._select_all("teachers")

    def fetch_classes(self) -> List[Dict[str, Any]]:
        return attach_teacher_names(self._select_all("classes"), self._select_all("teachers"))

    def fetch_subjects(self) -> List[Dict[str, Any]]:
        return self._select_all("subjects")

    def _get(self, conn, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        cols = ", ".join(["id"] + COLUMNS[collection])
        row = conn.execute(
            sa_text(f"SELECT {cols} FROM {collection} WHERE id = :id"), {"id": record_id}
        ).fetchone()
        return dict(row._mapping) if row else None

    # --- writes ---
    def create_entity(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        table = check_collection(collection)
        values = _columns_for(table, payload)
        values["id"] = uuid.uuid4().hex
        cols = ", ".join(values)
        params = ", ".join(f":{c}" for c in values)
        with self.engine.begin() as conn:
            conn.execute(sa_text(f"INSERT INTO {table} ({cols}) VALUES ({params})"), values)
            return self._get(conn, table, values["id"])

    def update_entity(self, collection: str, record_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        table = check_collection(collection)
        values = _columns_for(table, payload)
        with self.engine.begin() as conn:
            if values:
                assignments = ", ".join(f"{c} = :{c}" for c in values)
                conn.execute(
                    sa_text(f"UPDATE {table} SET {assignments} WHERE id = :id"),
                    {**values, "id": record_id},
                )
            row = self._get(conn, table, record_id)
        if row is None:
            raise RecordNotFoundError(table, record_id)
        return row

    def delete_entity(self, collection: str, record_id: str) -> None:
        table = check_collection(collection)
        with self.engine.begin() as conn:
            conn.execute(sa_text(f"DELETE FROM {table} WHERE id = :id"), {"id": record_id})

    # --- assets ---
    def upload_file(self, content: bytes, path: str, content_type: Optional[str] = None) -> Optional[str]:
        target = (self.media_dir / path).resolve()
        if self.media_dir.resolve() not in target.parents:
            logger.error("Refusing upload outside media dir: %s", path)
            return None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError:
            logger.error("Upload error for %s", path, exc_info=True)
            return None
        return path

    def resolve_storage_path(self, path: str) -> str:
        return str((self.media_dir / path.replace("\\", "/")).resolve())

    # --- auth ---
    def get_admin_user(self, username: str) -> Optional[Dict[str, Any]]:
        with self.engine.connect() as conn:
            row = conn.execute(
                sa_text("SELECT id, username, password_hash FROM admin_user WHERE username = :u"),
                {"u": username},
            ).fetchone()
        return dict(row._mapping) if row else None
