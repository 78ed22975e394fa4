# infra/db/base.py
from __future__ import annotations
import logging
import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

DB_URL_ENV = "TASKFLOW_DB_URL"

Base = declarative_base()


def resolve_db_url(db_url: Optional[str] = None) -> str:
    """Explicit URL, then TASKFLOW_DB_URL, then the SQLite file in the user data dir."""
    if db_url:
        return db_url
    env_url = os.getenv(DB_URL_ENV)
    if env_url:
        return env_url
    db_path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def make_engine(db_url: Optional[str] = None) -> Engine:
    url = resolve_db_url(db_url)
    logger.info("Using database at: %s", url)
    return create_engine(url, echo=False, future=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
