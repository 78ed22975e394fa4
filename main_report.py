from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from core.exceptions import DomainError
from core.reporting.api import generate_performance_excel, generate_progress_excel
from infra.db.base import make_engine, make_session_factory
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_trace_id
from infra.services import build_service_graph
from infra.version import get_app_version

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskflow-report",
        description="Project progress and worker performance scores.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument("--db-url", help="SQLAlchemy database URL (default: TASKFLOW_DB_URL or the local data dir).")
    sub = parser.add_subparsers(dest="command", required=True)

    progress = sub.add_parser("progress", help="Weighted progress of a project.")
    progress.add_argument("project_id")
    progress.add_argument("--excel", metavar="PATH", help="Also write an Excel report to PATH.")

    performance = sub.add_parser("performance", help="Performance score of a worker.")
    performance.add_argument("worker_id")
    performance.add_argument(
        "--pushdown",
        action="store_true",
        help="Compute the score inside the database (no penalty breakdown).",
    )
    performance.add_argument("--excel", metavar="PATH", help="Also write an Excel report to PATH.")

    manager = sub.add_parser("manager", help="Performance score of a project manager.")
    manager.add_argument("manager_id")

    return parser


def _run(service, args: argparse.Namespace) -> dict[str, Any]:
    if args.command == "progress":
        result = service.get_project_progress(args.project_id)
        if args.excel:
            path = generate_progress_excel(service, args.project_id, args.excel, progress=result)
            logger.info("Progress report written to %s", path)
        return result.as_dict()

    if args.command == "performance":
        if args.pushdown:
            result = service.get_worker_performance_summary(args.worker_id)
        else:
            result = service.get_worker_performance(args.worker_id)
        if args.excel:
            path = generate_performance_excel(service, args.worker_id, args.excel, performance=result)
            logger.info("Performance report written to %s", path)
        return result.as_dict()

    return service.get_manager_performance(args.manager_id).as_dict()


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging()
    db_url = run_migrations(args.db_url)

    engine = make_engine(db_url)
    session = make_session_factory(engine)()
    try:
        graph = build_service_graph(session)
        with bind_trace_id() as trace_id:
            logger.info("Running '%s' report", args.command)
            try:
                payload = _run(graph.reporting_service, args)
            except DomainError as exc:
                logger.warning("Report failed [%s]: %s", exc.code, exc)
                print(
                    json.dumps({**exc.as_dict(), "trace": trace_id}),
                    file=sys.stderr,
                )
                return 1
    finally:
        session.close()
        engine.dispose()

    print(json.dumps(payload, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
