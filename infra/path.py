# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "TaskFlow"
COMPANY_NAME = "TaskFlow"

DATA_DIR_ENV = "TASKFLOW_DATA_DIR"


def user_data_dir() -> Path:
    """
    Returns a per-user data directory, unless TASKFLOW_DATA_DIR points elsewhere:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\TaskFlow\\TaskFlow

    macOS:
        ~/Library/Application Support/TaskFlow/TaskFlow

    Linux:
        ~/.local/share/TaskFlow/TaskFlow
    """
    override = os.getenv(DATA_DIR_ENV)
    if override:
        path = Path(override).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    try:
        if sys.platform.startswith("win"):
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

        path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # Last-resort fallback: use home directory
        fallback = Path.home() / f".{APP_NAME.lower()}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def logs_dir() -> Path:
    return user_data_dir() / "logs"


def default_db_path() -> Path:
    """
    The full path to the SQLite database file under the user data dir.
    """
    return user_data_dir() / "taskflow.db"
