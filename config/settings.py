"""
config/settings.py
──────────────────
Centralised settings loaded from .env via pydantic-settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Data
    data_dir: Path = Path("./data")
    users_file: str = "users.json"
    sessions_file: str = "sessions.json"

    # Matching
    candidate_limit: int = Field(default=50, ge=1)
    availability_window_days: int = 7
    default_rating: float = 2.0
    distance_placeholder_enabled: bool = False
    distance_seed: int = 42

    # Auth
    session_cookie_name: str = "session_token"

    # Logging
    log_level: str = "INFO"
    log_file: Path = Path("./logs/app.log")

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_file

    @property
    def sessions_path(self) -> Path:
        return self.data_dir / self.sessions_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
