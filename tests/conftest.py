import copy
import uuid
from types import SimpleNamespace

import pytest

from core import data_access
from core.db import get_engine, init_db
from core.memory_store import MemoryStore
from core.sql_store import SqlStore

ENV_VARS = (
    "BACKEND_MODE", "SUPABASE_URL", "SUPABASE_KEY", "DATABASE_URL", "MEDIA_DIR",
    "GEMINI_API_KEY", "API_KEY", "GENAI_MODEL", "LOG_LEVEL",
    "SEED_ADMIN_USERNAME", "SEED_ADMIN_PASSWORD",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(data_access, "_STORE", None)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_store(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'school.db'}")
    init_db(engine)
    return SqlStore(engine, media_dir=tmp_path / "media")


@pytest.fixture
def use_store(monkeypatch):
    """Install a store as the process-wide one for facade tests."""
    def _use(store):
        monkeypatch.setattr(data_access, "_STORE", store)
        return store
    return _use


# ──────────────────────────────────────────────────────────────────────────────
# Minimal stand-in for the supabase client query builder
# ──────────────────────────────────────────────────────────────────────────────

class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_col = None
        self.limit_n = None

    def select(self, columns="*"):
        self.action, self.columns = "select", columns
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column):
        self.order_col = column
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def _embed(self, row):
        row = dict(row)
        if "classes(" in self.columns:
            cls = next((c for c in self.db["classes"] if c["id"] == row.get("class_id")), None)
            row["classes"] = {"grade": cls["grade"], "section": cls["section"]} if cls else None
        if "teachers(" in self.columns:
            t = next((t for t in self.db["teachers"] if t["id"] == row.get("class_teacher_id")), None)
            row["teachers"] = {"full_name": t["full_name"]} if t else None
        return row

    def execute(self):
        if self.db.get("_fail"):
            raise RuntimeError("backend down")
        rows = self.db.setdefault(self.table_name, [])
        if self.action == "insert":
            row = {**self.payload, "id": uuid.uuid4().hex}
            rows.append(row)
            return SimpleNamespace(data=[copy.deepcopy(row)])
        if self.action == "update":
            hit = [r for r in rows if self._matches(r)]
            for r in hit:
                r.update(self.payload)
            return SimpleNamespace(data=copy.deepcopy(hit))
        if self.action == "delete":
            hit = [r for r in rows if self._matches(r)]
            self.db[self.table_name] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=hit)
        out = [self._embed(r) for r in rows if self._matches(r)]
        if self.order_col:
            out.sort(key=lambda r: str(r.get(self.order_col) or ""))
        if self.limit_n is not None:
            out = out[: self.limit_n]
        return SimpleNamespace(data=copy.deepcopy(out))


class FakeBucket:
    def __init__(self, storage, name):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.fail_uploads:
            raise RuntimeError("storage unavailable")
        self.storage.objects[path] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://proj.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.fail_uploads = False

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabaseClient:
    def __init__(self):
        self.db = {"students": [], "teachers": [], "classes": [], "subjects": [], "admin_user": []}
        self.storage = FakeStorage()

    def table(self, name):
        return FakeQuery(self.db, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabaseClient()
