# core/db.py
from __future__ import annotations
from pathlib import Path
from sqlalchemy import create_engine, event

from core.schema_registry import auto_discover, run_all

def _enable_sqlite_fks(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()

def get_engine(db_url: str):
    engine = create_engine(db_url, future=True)
    if db_url.startswith("sqlite:///"):
        db_file = db_url.replace("sqlite:///", "")
        if db_file and db_file != ":memory:":
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)
        # ON DELETE SET NULL needs this per connection
        event.listen(engine, "connect", _enable_sqlite_fks)
    return engine

def init_db(engine):
    # 1) import schemas/*.py so their installers register
    auto_discover("schemas")

    # 2) run every registered installer (all idempotent)
    run_all(engine)
