import pytest

from core import data_access
from core.memory_store import MemoryStore
from core.settings import Settings, BackendConfig, DBConfig


def _settings(mode="auto", url="", key="", db_url=""):
    return Settings(backend=BackendConfig(mode=mode, supabase_url=url, supabase_key=key), db=DBConfig(url=db_url))


@pytest.mark.parametrize("url,key,expected", [
    ("https://abcd1234.supabase.co", "real-anon-key", "supabase"),
    ("https://xyz.supabase.co", "real-anon-key", "demo"),
    ("https://abcd1234.supabase.co", "", "demo"),
    ("https://abcd1234.supabase.co", "process.env.SUPABASE_KEY", "demo"),
    ("YOUR_SUPABASE_PROJECT_URL_HERE", "key", "demo"),
    ("http://abcd1234.supabase.co", "key", "demo"),
    ("", "", "demo"),
])
def test_auto_mode_detects_placeholder_credentials(url, key, expected):
    assert data_access.select_backend_mode(_settings(url=url, key=key)) == expected


def test_auto_mode_falls_back_to_sql_when_database_url_set():
    assert data_access.select_backend_mode(_settings(db_url="sqlite:///x.db")) == "sql"


def test_forced_mode_wins():
    s = _settings(mode="demo", url="https://abcd1234.supabase.co", key="real")
    assert data_access.select_backend_mode(s) == "demo"


def test_unknown_mode_falls_back_to_auto():
    assert data_access.select_backend_mode(_settings(mode="bogus")) == "demo"


def test_store_selected_once_per_process(monkeypatch):
    calls = []

    def fake_build(settings):
        calls.append(settings)
        return MemoryStore()

    monkeypatch.setattr(data_access, "build_store", fake_build)
    first = data_access.get_store()
    monkeypatch.setenv("BACKEND_MODE", "sql")
    assert data_access.get_store() is first
    assert len(calls) == 1


def test_default_environment_builds_demo_store(monkeypatch, tmp_path):
    monkeypatch.setattr(data_access, "load_settings", lambda: Settings())
    assert data_access.get_store().mode == "demo"


def test_sql_mode_builds_engine_and_tables(tmp_path):
    settings = Settings(
        backend=BackendConfig(mode="sql"),
        db=DBConfig(url=f"sqlite:///{tmp_path / 'x.db'}"),
    )
    store = data_access.build_store(settings)
    assert store.mode == "sql"
    assert store.fetch_students() == []


def test_facade_routes_to_installed_store(use_store):
    use_store(MemoryStore())
    created = data_access.create_entity("students", {"admission_no": "ADM9", "first_name": "Z", "last_name": "Zed"})
    assert created["id"] in [s["id"] for s in data_access.fetch_students()]
    data_access.update_entity("students", created["id"], {"notes": "n"})
    data_access.delete_entity("students", created["id"])
    assert created["id"] not in [s["id"] for s in data_access.fetch_students()]
    assert len(data_access.fetch_teachers()) == 2
    assert len(data_access.fetch_classes()) == 2
    assert data_access.fetch_subjects() == []
    assert data_access.backend_mode() == "demo"
    assert data_access.get_public_url("blob:abc") == "blob:abc"


def test_load_directory_returns_all_three(use_store):
    use_store(MemoryStore())
    students, classes, teachers = data_access.load_directory()
    assert (len(students), len(classes), len(teachers)) == (2, 2, 2)


def test_load_directory_failure_yields_empty_lists(use_store):
    class Broken(MemoryStore):
        def fetch_classes(self):
            raise RuntimeError("backend down")

    use_store(Broken())
    assert data_access.load_directory() == ([], [], [])
