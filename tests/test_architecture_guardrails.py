from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _line_count(path: Path) -> int:
    return len(path.read_text(encoding="utf-8", errors="ignore").splitlines())


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        # Keep architecture checks focused on source/test code, not packaged artifacts.
        if "dist" in path.parts or "build" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0:
            yield node.module or ""


def _violations(root: Path, forbidden: tuple[str, ...]) -> list[tuple[str, str]]:
    found = []
    for path in _python_files(root):
        for name in _imported_modules(path):
            top = name.split(".")[0]
            if top in forbidden:
                found.append((str(path.relative_to(ROOT)), name))
    return found


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(ROOT):
        lines = _line_count(path)
        if lines > 1200:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 1200-line limit: {offenders}"


def test_core_layer_does_not_import_infra_or_orm():
    violations = _violations(ROOT / "core", ("infra", "sqlalchemy", "alembic", "main_report"))
    assert not violations, f"Core layer imports infrastructure: {violations}"


def test_scoring_package_is_pure():
    # calculators take plain objects; only the standard library and core.domain/core.exceptions
    allowed_core = ("core.domain", "core.exceptions", "core.services.scoring")
    violations = []
    for path in _python_files(ROOT / "core" / "services" / "scoring"):
        for name in _imported_modules(path):
            if name.startswith("core") and not name.startswith(allowed_core):
                violations.append((str(path.relative_to(ROOT)), name))
            if name.split(".")[0] in ("openpyxl", "sqlalchemy", "infra"):
                violations.append((str(path.relative_to(ROOT)), name))
    assert not violations, f"Scoring package reaches outside its layer: {violations}"


def test_known_large_modules_have_growth_budgets():
    # Guardrail budgets: these files must not keep growing.
    budgets = {
        "core/services/scoring/manager.py": 380,
        "core/services/scoring/progress.py": 300,
        "core/services/scoring/performance.py": 340,
        "core/services/scoring/models.py": 300,
        "core/services/reporting/service.py": 180,
        "core/reporting/renderers/excel.py": 240,
        "infra/db/repositories.py": 200,
        "infra/db/mappers.py": 200,
        "infra/db/scoring_query.py": 180,
    }

    breaches = []
    for rel_path, max_lines in budgets.items():
        path = ROOT / rel_path
        lines = _line_count(path)
        if lines > max_lines:
            breaches.append((rel_path, lines, max_lines))

    assert not breaches, f"Large-module budgets exceeded: {breaches}"
