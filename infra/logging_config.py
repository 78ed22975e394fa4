# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import logs_dir
from infra.operational_support import TraceIdLogFilter

LOG_LEVEL_ENV = "TASKFLOW_LOG_LEVEL"


def _resolve_level(level: str | int | None) -> int:
    raw = level if level is not None else os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(raw, int):
        return raw
    resolved = logging.getLevelName(str(raw).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | int | None = None, log_dir: Path | None = None) -> Path:
    """
    Configure application logging.
    Logs go to the per-user data directory, rotated at 1 MB with 5 backups.
    Returns the log file path.
    """
    log_dir = log_dir or logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "taskflow.log"

    logger = logging.getLogger()
    logger.setLevel(_resolve_level(level))

    # repeated calls must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    trace_filter = TraceIdLogFilter()
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)

    # console goes to stderr so JSON on stdout stays clean
    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    return log_file
