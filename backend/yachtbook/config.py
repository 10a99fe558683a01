import json
import os
from functools import lru_cache
from pathlib import Path
from pydantic import BaseModel, ValidationError, field_validator

from .domain.currency import CurrencyRegistry

# Config directory: use YACHTBOOK_DATA_DIR env var if set (e.g. /data in Docker),
# otherwise fall back to ~/.config/yachtbook for local dev
_data_dir = os.environ.get("YACHTBOOK_DATA_DIR")
DATA_DIR = Path(_data_dir) if _data_dir else Path.home() / ".config" / "yachtbook"
CONFIG_DIR = DATA_DIR / "config" if _data_dir else DATA_DIR
SETTINGS_FILE = CONFIG_DIR / "settings.json"

# Environment variable -> settings field
ENV_OVERRIDES = {
    "YACHTBOOK_BASE_CURRENCY": "base_currency",
    "YACHTBOOK_DATABASE_PATH": "database_path",
    "YACHTBOOK_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Backend settings."""
    base_currency: str = "EUR"
    database_path: Path = DATA_DIR / "ledger.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    @field_validator("base_currency")
    @classmethod
    def _valid_currency(cls, value: str) -> str:
        if not CurrencyRegistry.is_valid(value):
            raise ValueError(f"Invalid ISO 4217 currency code: {value}")
        return CurrencyRegistry.normalize(value)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def ensure_config_dir() -> None:
    """Ensure the config directory exists."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def _read_settings_file(path: Path) -> dict:
    """Read settings.json, ignoring a missing or unreadable file."""
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}
    except (json.JSONDecodeError, OSError):
        return {}


def load_settings(path: Path | None = None, environ: dict | None = None) -> Settings:
    """Load settings from the JSON file, then apply environment overrides."""
    environ = os.environ if environ is None else environ
    file_values = _read_settings_file(path or SETTINGS_FILE)
    env_values = {
        field: environ[env_name]
        for env_name, field in ENV_OVERRIDES.items()
        if environ.get(env_name)
    }

    try:
        return Settings(**{**file_values, **env_values})
    except ValidationError:
        # Invalid file values fall back to defaults; invalid env values still raise
        return Settings(**env_values)


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to the JSON file."""
    ensure_config_dir()
    with open(path or SETTINGS_FILE, "w") as f:
        json.dump(settings.model_dump(mode="json"), f, indent=2)


@lru_cache
def get_settings() -> Settings:
    """Settings for the running process, loaded once."""
    return load_settings()


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
