"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pdfmerger.exceptions import SettingsError

logger = logging.getLogger(__name__)

_MEBIBYTE = 1024 * 1024


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "pdfmerger"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    host: str = Field(default="127.0.0.1", validation_alias="HOST", description="Bind address for the API.")
    port: int = Field(default=3000, validation_alias="PORT", ge=1, le=65535, description="Bind port for the API.")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias="CORS_ALLOW_ORIGINS",
        description="Origins allowed by the CORS middleware (JSON list).",
    )

    upload_dir: str = Field(
        default="uploads",
        validation_alias="UPLOAD_DIR",
        description="Directory holding uploaded and merged PDFs.",
    )
    max_upload_files: int = Field(
        default=10,
        validation_alias="MAX_UPLOAD_FILES",
        ge=1,
        description="Maximum number of files accepted by one upload request.",
    )
    max_upload_size_bytes: int = Field(
        default=10 * _MEBIBYTE,
        validation_alias="MAX_UPLOAD_SIZE_BYTES",
        ge=1,
        description="Maximum size of a single uploaded file.",
    )
    min_merge_files: int = Field(
        default=2,
        validation_alias="MIN_MERGE_FILES",
        ge=1,
        description="Number of files a session needs before it can be merged.",
    )

    file_ttl_seconds: float = Field(
        default=3600.0,
        validation_alias="FILE_TTL_SECONDS",
        gt=0,
        description="Age after which stored files are removed by the sweep.",
    )
    sweep_interval_seconds: float = Field(
        default=3600.0,
        validation_alias="SWEEP_INTERVAL_SECONDS",
        gt=0,
        description="Delay between two expiry sweeps.",
    )
    sweep_enabled: bool = Field(
        default=True,
        validation_alias="SWEEP_ENABLED",
        description="Run the periodic expiry sweep inside the API process.",
    )
    download_cleanup_delay_seconds: float = Field(
        default=5.0,
        validation_alias="DOWNLOAD_CLEANUP_DELAY_SECONDS",
        ge=0,
        description="Delay before a downloaded merge result is deleted.",
    )

    @property
    def upload_path(self) -> Path:
        """Return the upload directory as a path."""
        return Path(self.upload_dir)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
