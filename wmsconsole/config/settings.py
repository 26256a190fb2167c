from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Console settings loaded from the environment / .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "Kiaan WMS Console"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # ── Authentication API ───────────────────────────────────────
    api_base_url: str = "http://localhost:3001"
    auth_request_timeout: Optional[float] = None  # None waits indefinitely

    # ── Navigation ───────────────────────────────────────────────
    login_path: str = "/auth/login"
    landing_path: str = "/"

    # ── Session persistence ──────────────────────────────────────
    session_backend: Literal["memory", "mongodb"] = "memory"
    session_storage_key: str = "wms-auth-storage"
    background_hydration: bool = False
    discard_expired_tokens: bool = True

    # ── Database (mongodb session backend) ───────────────────────
    mongodb_atlas_uri: Optional[str] = None
    database_name: str = "wms_console"
    session_collection: str = "console_sessions"

    class Config:
        env_file = ".env"
        env_prefix = "WMS_"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()
