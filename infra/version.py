from __future__ import annotations

import os
from importlib import metadata
from pathlib import Path


_DEFAULT_APP_VERSION = "1.0.0"
_DISTRIBUTION = "taskflow-scoring"
_VERSION_FILE = Path(__file__).with_name("app_version.txt")

VERSION_ENV = "TASKFLOW_APP_VERSION"


def _read_version_from_file(path: Path) -> str | None:
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw or None


def _installed_version() -> str | None:
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return None


def get_app_version(version_file: Path | None = None) -> str:
    """
    Version shown by ``taskflow-report --version``.
    Order: TASKFLOW_APP_VERSION, the bundled app_version.txt, the installed
    distribution metadata, then the built-in default.
    """
    env_override = (os.getenv(VERSION_ENV) or "").strip()
    if env_override:
        return env_override

    file_version = _read_version_from_file(version_file or _VERSION_FILE)
    if file_version:
        return file_version

    return _installed_version() or _DEFAULT_APP_VERSION


__all__ = ["VERSION_ENV", "get_app_version"]
