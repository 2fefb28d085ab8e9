"""User configuration for DevFocus.

Stores preferences in ~/.devfocus/config.json (or $DEVFOCUS_HOME).
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from devfocus.domain.session import DEFAULT_MAX_ELAPSED_SECONDS

CONFIG_HOME_ENV = "DEVFOCUS_HOME"
DATABASE_ENV = "DEVFOCUS_DB"
DATABASE_FILENAME = "devfocus.db"


class AppConfig(BaseModel):
    """Runtime settings for the store and the CLI."""

    database_path: str | None = Field(
        default=None,
        description="SQLite file path or SQLAlchemy URL; defaults to the config dir",
    )
    lock_timeout_seconds: float = 5.0
    max_elapsed_seconds: int = DEFAULT_MAX_ELAPSED_SECONDS
    log_level: str = "WARNING"


def get_config_dir() -> Path:
    """Get the DevFocus config directory, creating it if needed."""
    override = os.environ.get(CONFIG_HOME_ENV)
    config_dir = Path(override) if override else Path.home() / ".devfocus"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config() -> AppConfig:
    """Load configuration, falling back to defaults if missing or invalid."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return AppConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError):
            pass
    return AppConfig()


def save_config(config: AppConfig) -> None:
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )


def resolve_database_url(config: AppConfig, explicit: str | None = None) -> str:
    """Work out which database to open.

    Resolution order:
    1. Explicit value (from the --db CLI option)
    2. DEVFOCUS_DB environment variable
    3. ``database_path`` from config.json
    4. devfocus.db in the config directory

    Plain paths become ``sqlite:///`` URLs; values that already look like
    URLs (``sqlite://`` for in-memory) are used as-is.
    """
    value = explicit or os.environ.get(DATABASE_ENV) or config.database_path
    if not value:
        value = str(get_config_dir() / DATABASE_FILENAME)
    if "://" in value:
        return value
    return f"sqlite:///{Path(value).expanduser()}"
