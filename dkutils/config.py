from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Filoperationer
    chunk_size_kb: int = 8  # 8 KiB buffer per read/write

    # Dato og tid
    default_date_format: str = "%Y-%m-%dT%H:%M:%S.%f%z"
    default_time_zone: str = "UTC"

    # Logging konfiguration
    log_level: str = "INFO"
    log_to_file: bool = True
    log_file_path: str = "logs/dkutils.log"
    log_retention_days: int = 30

    model_config = SettingsConfigDict(
        env_prefix="DKUTILS_",
        env_file="settings.env",
        extra="ignore",
    )

    @property
    def chunk_size_bytes(self) -> int:
        """Returnerer chunk størrelsen i bytes"""
        return self.chunk_size_kb * 1024

    @property
    def log_directory(self) -> Path:
        """Returnerer log directory som Path objekt"""
        return Path(self.log_file_path).parent


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings() -> None:
    """Clear the cached Settings so the next call re-reads the environment."""
    get_settings.cache_clear()
