# core/supabase_store.py
"""Hosted backend: Supabase tables plus the ``photos`` storage bucket."""
from __future__ import annotations

import logging
import mimetypes
from typing import Any, Dict, List, Optional

from core.store import (
    ORDER_BY,
    DataStore,
    MISSING_CLASS,
    RecordNotFoundError,
    check_collection,
    clean_payload,
)

logger = logging.getLogger(__name__)


def create_supabase_client(url: str, key: str):
    from supabase import create_client
    return create_client(url, key)


class SupabaseStore(DataStore):
    mode = "supabase"

    def __init__(self, client, bucket: str = "photos"):
        self.client = client
        self.bucket = bucket

    # --- reads ---
    def fetch_students(self) -> List[Dict[str, Any]]:
        res = (
            self.client.table("students")
            .select("*, classes(grade, section)")
            .order(ORDER_BY["students"])
            .execute()
        )
        return [{**row, "classes": row.get("classes") or dict(MISSING_CLASS)} for row in res.data or []]

    def fetch_teachers(self) -> List[Dict[str, Any]]:
        res = self.client.table("teachers").select("*").order(ORDER_BY["teachers"]).execute()
        return list(res.data or [])

    def fetch_classes(self) -> List[Dict[str, Any]]:
        res = (
            self.client.table("classes")
            .select("*, teachers(full_name)")
            .order(ORDER_BY["classes"])
            .execute()
        )
        out = []
        for row in res.data or []:
            teacher = row.pop("teachers", None) or {}
            out.append({**row, "teacher_name": teacher.get("full_name")})
        return out

    def fetch_subjects(self) -> List[Dict[str, Any]]:
        res = self.client.table("subjects").select("*").order(ORDER_BY["subjects"]).execute()
        return list(res.data or [])

    # --- writes ---
    def create_entity(self, collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        table = check_collection(collection)
        res = self.client.table(table).insert(clean_payload(payload)).execute()
        return res.data[0]

    def update_entity(self, collection: str, record_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        table = check_collection(collection)
        res = self.client.table(table).update(clean_payload(payload)).eq("id", record_id).execute()
        if not res.data:
            raise RecordNotFoundError(table, record_id)
        return res.data[0]

    def delete_entity(self, collection: str, record_id: str) -> None:
        table = check_collection(collection)
        self.client.table(table).delete().eq("id", record_id).execute()

    # --- assets ---
    def upload_file(self, content: bytes, path: str, content_type: Optional[str] = None) -> Optional[str]:
        mime = content_type or mimetypes.guess_type(path)[0] or "application/octet-stream"
        try:
            res = self.client.storage.from_(self.bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": mime, "upsert": "true"},
            )
        except Exception:
            logger.error("Upload error for %s", path, exc_info=True)
            return None
        return getattr(res, "path", None) or path

    def resolve_storage_path(self, path: str) -> str:
        return self.client.storage.from_(self.bucket).get_public_url(path)

    # --- auth ---
    def get_admin_user(self, username: str) -> Optional[Dict[str, Any]]:
        res = self.client.table("admin_user").select("*").eq("username", username).limit(1).execute()
        return res.data[0] if res.data else None
