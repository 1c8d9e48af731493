# core/data_access.py
"""
Process-wide data access.

The backend is chosen once, the first time a store is needed, and kept for
the life of the process; restart the app to switch modes. Screens call the
module-level functions below and never see which backend answered.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from core.settings import Settings, load_settings
from core.store import DataStore

logger = logging.getLogger(__name__)

MODES = ("demo", "sql", "supabase")

PLACEHOLDER_MARKERS = (
    "xyz.supabase.co",
    "your_supabase",
    "your-project",
    "example.supabase.co",
    "process.env.",
    "changeme",
)

_STORE: Optional[DataStore] = None
_STORE_LOCK = threading.Lock()


def looks_like_placeholder(value: str) -> bool:
    v = (value or "").strip().lower()
    if not v:
        return True
    return any(marker in v for marker in PLACEHOLDER_MARKERS)


def supabase_configured(url: str, key: str) -> bool:
    url = (url or "").strip()
    if not url.startswith("https://") or looks_like_placeholder(url):
        return False
    return not looks_like_placeholder(key)


def select_backend_mode(settings: Settings) -> str:
    """Pick demo, sql or supabase from the configuration."""
    forced = (settings.backend.mode or "auto").strip().lower()
    if forced in MODES:
        return forced
    if forced != "auto":
        logger.warning("Unknown backend mode %r, falling back to auto", forced)
    if supabase_configured(settings.backend.supabase_url, settings.backend.supabase_key):
        return "supabase"
    if (settings.db.url or "").strip():
        return "sql"
    return "demo"


def build_store(settings: Settings) -> DataStore:
    mode = select_backend_mode(settings)
    if mode == "supabase":
        from core.supabase_store import SupabaseStore, create_supabase_client
        client = create_supabase_client(settings.backend.supabase_url, settings.backend.supabase_key)
        store: DataStore = SupabaseStore(client, bucket=settings.backend.photos_bucket)
    elif mode == "sql":
        from core.db import get_engine, init_db
        from core.sql_store import SqlStore
        url = settings.db.url or "sqlite:///data/school.db"
        engine = get_engine(url)
        init_db(engine)
        store = SqlStore(engine, media_dir=settings.storage.media_dir)
    else:
        from core.memory_store import MemoryStore
        store = MemoryStore()
    logger.info("Data access running in %s mode", store.mode)
    return store


def get_store() -> DataStore:
    global _STORE
    if _STORE is None:
        with _STORE_LOCK:
            if _STORE is None:
                _STORE = build_store(load_settings())
    return _STORE


def backend_mode() -> str:
    return get_store().mode


# --- facade -------------------------------------------------------------------

def fetch_students() -> List[Dict[str, Any]]:
    return get_store().fetch_students()

def fetch_teachers() -> List[Dict[str, Any]]:
    return get_store().fetch_teachers()

def fetch_classes() -> List[Dict[str, Any]]:
    return get_store().fetch_classes()

def fetch_subjects() -> List[Dict[str, Any]]:
    return get_store().fetch_subjects()

def create_entity(collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return get_store().create_entity(collection, payload)

def update_entity(collection: str, record_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return get_store().update_entity(collection, record_id, payload)

def delete_entity(collection: str, record_id: str) -> None:
    get_store().delete_entity(collection, record_id)

def upload_file(content: bytes, path: str, content_type: Optional[str] = None) -> Optional[str]:
    return get_store().upload_file(content, path, content_type)

def get_public_url(path: Optional[str]) -> str:
    return get_store().get_public_url(path)

def get_admin_user(username: str) -> Optional[Dict[str, Any]]:
    return get_store().get_admin_user(username)


def load_directory() -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Fetch (students, classes, teachers) concurrently and wait for all three.
    Any failure is logged and yields three empty lists, never a partial set.
    """
    store = get_store()
    with ThreadPoolExecutor(max_workers=3) as pool:
        futures = [
            pool.submit(store.fetch_students),
            pool.submit(store.fetch_classes),
            pool.submit(store.fetch_teachers),
        ]
        try:
            students, classes, teachers = (f.result() for f in futures)
        except Exception:
            logger.error("Failed to load directory data", exc_info=True)
            return [], [], []
    return students, classes, teachers
