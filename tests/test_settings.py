from core.settings import load_settings


def test_defaults_without_file(tmp_path):
    s = load_settings(tmp_path / "missing.yaml")
    assert s.backend.mode == "auto"
    assert s.auth.demo_user == "admin"
    assert s.genai.model == "gemini-2.5-flash"


def test_yaml_then_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app:\n  name: Test School\nbackend:\n  mode: demo\n  supabase_url: https://a.supabase.co\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("BACKEND_MODE", "sql")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
    monkeypatch.setenv("API_KEY", "k-123")
    s = load_settings(path)
    assert s.app.name == "Test School"
    assert s.backend.mode == "sql"
    assert s.backend.supabase_url == "https://a.supabase.co"
    assert s.db.url == "sqlite:///x.db"
    assert s.genai.api_key == "k-123"


def test_blank_env_values_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "   ")
    assert load_settings(tmp_path / "missing.yaml").backend.supabase_url == ""


def test_shipped_settings_file_loads():
    s = load_settings()
    assert s.backend.photos_bucket == "photos"


def test_environment_from_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("app:\n  environment: production\n", encoding="utf-8")
    assert load_settings(path).app.environment == "production"
