# schemas/_seed.py
from __future__ import annotations

import logging
import os
import uuid

import bcrypt
from sqlalchemy import text as sa_text
from core.schema_registry import register

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# admin_user table + optional first admin
# ──────────────────────────────────────────────────────────────────────────────

def _ensure_admin_table(conn):
    """Idempotent: create the admin_user table if missing."""
    conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS admin_user (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """))

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

@register("admin_seed")
def seed_admin(engine) -> None:
    username = (os.getenv("SEED_ADMIN_USERNAME") or "").strip()
    password = os.getenv("SEED_ADMIN_PASSWORD") or ""
    with engine.begin() as conn:
        _ensure_admin_table(conn)
        if not username or not password:
            return
        exists = conn.execute(
            sa_text("SELECT 1 FROM admin_user WHERE username = :u"), {"u": username}
        ).fetchone()
        if exists:
            return
        conn.execute(
            sa_text("INSERT INTO admin_user (id, username, password_hash) VALUES (:id, :u, :h)"),
            {"id": uuid.uuid4().hex, "u": username, "h": hash_password(password)},
        )
        logger.info("Seeded admin user %s", username)
