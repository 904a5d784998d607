"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default: float, cast=float):
    """Read a numeric environment variable, raising a readable error on junk."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PocketLedger"
    DEFAULT_API_URL = "http://localhost:8080/api"
    DEFAULT_PAGE_SIZE = 20
    DEFAULT_TIMEOUT = 10.0

    def __init__(self) -> None:
        self.API_BASE_URL = os.getenv("POCKETLEDGER_API_URL", self.DEFAULT_API_URL).rstrip("/")
        self.PAGE_SIZE = _env_number("POCKETLEDGER_PAGE_SIZE", self.DEFAULT_PAGE_SIZE, int)
        self.REQUEST_TIMEOUT = _env_number("POCKETLEDGER_REQUEST_TIMEOUT", self.DEFAULT_TIMEOUT)
        self.DEV_MODE = _env_bool("POCKETLEDGER_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        if self.PAGE_SIZE < 1:
            raise ValueError("POCKETLEDGER_PAGE_SIZE must be at least 1.")
        if self.REQUEST_TIMEOUT <= 0:
            raise ValueError("POCKETLEDGER_REQUEST_TIMEOUT must be positive.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs are written."""

        data_root = os.getenv("POCKETLEDGER_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            local_app_data = os.getenv("LOCALAPPDATA") or (Path.home() / "AppData" / "Local")
            fallback_path = Path(local_app_data).expanduser() / self.APP_NAME
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()


class DevConfig(BaseConfig):
    """Development configuration pointing at a local backend."""

    DEBUG = True
    TESTING = False
