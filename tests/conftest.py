"""Pytest configuration for repository test runs."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

from tests.fixture_paths import fixture_path


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def sample_dataset() -> dict[str, Any]:
    """Return a fresh two-image dataset payload."""
    return json.loads(fixture_path("datasets/art.json").read_text(encoding="utf-8"))
