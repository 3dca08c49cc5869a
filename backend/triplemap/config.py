"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Triplemap API"
    active_configuration_id: str = "default"
    source_root: str = "data"
    allowed_sources: list[str] = []
    default_source: str = "universe.ttl"
    source_format: str = "turtle"
    load_timeout_seconds: float | None = 30.0
    max_cached_results: int = 64
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    model_config = SettingsConfigDict(
        env_prefix="TRIPLEMAP_",
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def source_root_path(self) -> Path:
        """Directory that relative sources resolve against; relative roots sit under ``backend/``."""

        root = Path(self.source_root)
        return root if root.is_absolute() else _BACKEND_DIR / root

    @property
    def default_source_location(self) -> str:
        return str(self.source_root_path / self.default_source)


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
