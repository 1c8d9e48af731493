from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

class AppConfig(BaseModel):
    name: str = "SchoolAdmin Pro"
    environment: str = "development"
    log_level: str = "INFO"

class AuthConfig(BaseModel):
    demo_user: str = "admin"
    demo_password: str = "admin123"

class BackendConfig(BaseModel):
    mode: str = "auto"   # auto | demo | sql | supabase
    supabase_url: str = ""
    supabase_key: str = ""
    photos_bucket: str = "photos"

class DBConfig(BaseModel):
    url: str = ""

class StorageConfig(BaseModel):
    media_dir: str = "data/media"

class GenAIConfig(BaseModel):
    api_key: str = ""
    model: str = "gemini-2.5-flash"

class Settings(BaseModel):
    app: AppConfig = AppConfig()
    auth: AuthConfig = AuthConfig()
    backend: BackendConfig = BackendConfig()
    db: DBConfig = DBConfig()
    storage: StorageConfig = StorageConfig()
    genai: GenAIConfig = GenAIConfig()

# env var -> (section, field)
ENV_OVERRIDES = {
    "BACKEND_MODE": ("backend", "mode"),
    "SUPABASE_URL": ("backend", "supabase_url"),
    "SUPABASE_KEY": ("backend", "supabase_key"),
    "DATABASE_URL": ("db", "url"),
    "MEDIA_DIR": ("storage", "media_dir"),
    "GEMINI_API_KEY": ("genai", "api_key"),
    "API_KEY": ("genai", "api_key"),
    "GENAI_MODEL": ("genai", "model"),
    "LOG_LEVEL": ("app", "log_level"),
}

def _apply_env(data: dict) -> dict:
    for var, (section, field) in ENV_OVERRIDES.items():
        value = (os.getenv(var) or "").strip()
        if value:
            data.setdefault(section, {})[field] = value
    return data

def load_settings(path: Optional[str | Path] = None) -> Settings:
    """Read settings.yaml (if present) and layer environment overrides on top."""
    path = Path(path) if path else DEFAULT_SETTINGS_PATH
    data: dict = {}
    if path.is_file():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    data = _apply_env(data)
    return Settings(
        app=AppConfig(**(data.get("app") or {})),
        auth=AuthConfig(**(data.get("auth") or {})),
        backend=BackendConfig(**(data.get("backend") or {})),
        db=DBConfig(**(data.get("db") or {})),
        storage=StorageConfig(**(data.get("storage") or {})),
        genai=GenAIConfig(**(data.get("genai") or {})),
    )
