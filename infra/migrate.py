import logging
import sys
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from infra.db.base import resolve_db_url

logger = logging.getLogger(__name__)


def _app_dir() -> Path:
    """
    Returns the directory where the running app lives.
    - For frozen onefile builds, prefer sys._MEIPASS (temporary extraction dir).
    - For onedir builds, use the folder containing the executable.
    - In dev: return the project root (infra -> project root).
    """
    if getattr(sys, "frozen", False):
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass).resolve()
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def _find_script_location(app_dir: Path) -> Path:
    candidates = [
        app_dir / "migration",
        app_dir / "_internal" / "migration",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    raise RuntimeError(
        "Alembic script_location missing. Tried the following locations: "
        + ", ".join(str(p) for p in candidates)
    )


def run_migrations(db_url: Optional[str] = None) -> str:
    """Upgrade the database to head and return the URL that was migrated."""
    script_location = _find_script_location(_app_dir())
    alembic_ini = script_location / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    url = resolve_db_url(db_url)
    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", url)

    logger.info("Running migrations against %s", url)
    command.upgrade(cfg, "head")
    return url
