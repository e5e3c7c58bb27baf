"""
Configuration helpers.

All settings are read from the environment at call time so tests and the
CLI can override them without reloading modules.
"""
import os
import sys
from pathlib import Path
from typing import List

FILTERED_HEADERS_KEY = "harkit_filtered_headers"
SCREEN_MAP_KEY = "harkit_screen_map"
SCREEN_MAP_VERSION = "2.0.0"

DEFAULT_RETRIEVAL_TIMEOUT = 10.0


def get_data_dir() -> Path:
    """
    Get the directory holding harkit's durable state.

    Honours ``HARKIT_DATA_DIR``; otherwise picks the OS-specific
    application data location.

    Returns
    ----
    Path
        Data directory (not created here)
    """
    override = os.getenv("HARKIT_DATA_DIR")
    if override:
        return Path(override).expanduser()

    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "harkit"
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "harkit"

    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else home / ".local" / "share"
    return base / "harkit"


def get_default_store_path() -> Path:
    """Path of the SQLite key-value store (``HARKIT_STORE_PATH`` overrides)."""
    override = os.getenv("HARKIT_STORE_PATH")
    if override:
        return Path(override).expanduser()
    return get_data_dir() / "harkit.db"


def get_retrieval_timeout() -> float:
    """
    Per-exchange body retrieval timeout, in seconds.

    Falls back to the default when ``HARKIT_RETRIEVAL_TIMEOUT`` is unset,
    unparseable or not positive.
    """
    raw = os.getenv("HARKIT_RETRIEVAL_TIMEOUT")
    if not raw:
        return DEFAULT_RETRIEVAL_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_RETRIEVAL_TIMEOUT
    return value if value > 0 else DEFAULT_RETRIEVAL_TIMEOUT


def get_cors_origins() -> List[str]:
    """Allowed CORS origins for the API service."""
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def is_ephemeral() -> bool:
    """Whether ``HARKIT_EPHEMERAL`` asks for in-memory storage only."""
    return os.getenv("HARKIT_EPHEMERAL", "false").lower() == "true"
