"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from tree_sitter import Language, Parser, Query
from tree_sitter_language_pack import get_language, get_parser

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def queries_dir() -> Path:
    """Return the path to the queries directory."""
    return _REPO_ROOT / "src" / "tagcase" / "queries"


@pytest.fixture
def go_parser() -> Parser:
    """Return a tree-sitter parser for Go."""
    return get_parser("go")


@pytest.fixture
def go_language() -> Language:
    """Return the tree-sitter Go language."""
    return get_language("go")


@pytest.fixture
def struct_types_query(queries_dir: Path, go_language: Any) -> Query:
    """Load the top-level struct types query."""
    query_text = (queries_dir / "go_struct_types.scm").read_text()
    return Query(go_language, query_text)


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes Go source below ``tmp_path``."""

    def _write(relative: str, source: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write
