"""Shared fixtures and helpers for tests."""

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from highlight_modules.models import AnnotationDataset
from highlight_modules.sources import InMemorySourceTree

_TESTS_ROOT = Path(__file__).parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_TESTS_ROOT)
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Dataset helpers
# ---------------------------------------------------------------------------


def make_range(
    name: str,
    start_line: int,
    end_line: int,
    start_character: int,
    end_character: int,
) -> dict[str, Any]:
    return {
        "name": name,
        "startLine": start_line,
        "endLine": end_line,
        "startCharacter": start_character,
        "endCharacter": end_character,
    }


RED = "#ff0000"
BLUE = "#0000ff"

SCENARIO_SOURCE = "x=1\nabcdef\ny=2"

SAMPLE_SOURCES = {
    "a.py": SCENARIO_SOURCE,
    "pkg/b.py": "def f():\n    return 1\n\nclass C:\n    pass\n",
}

SAMPLE_RAW: dict[str, Any] = {
    "files": {
        "a.py": {
            RED: [make_range("Red", 1, 1, 2, 5)],
        },
        "pkg/b.py": {
            BLUE: [make_range("Blue layer", 0, 1, 4, 12)],
            RED: [make_range("Red", 3, 3, 0, 7)],
        },
    }
}


@pytest.fixture
def sample_raw() -> dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_RAW))


@pytest.fixture
def sample_dataset(sample_raw: dict[str, Any]) -> AnnotationDataset:
    return AnnotationDataset.model_validate(sample_raw)


@pytest.fixture
def sample_sources() -> InMemorySourceTree:
    return InMemorySourceTree(SAMPLE_SOURCES)


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[Mapping[str, str], dict[str, Any]], Path]:
    """Return a helper that lays out source files and ``highlights.json`` under ``tmp_path``."""

    def _write(sources: Mapping[str, str], raw: dict[str, Any]) -> Path:
        for relative_path, text in sources.items():
            target = tmp_path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8", newline="")
        (tmp_path / "highlights.json").write_text(json.dumps(raw, indent=2), encoding="utf-8")
        return tmp_path

    return _write
