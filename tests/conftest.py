import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from cavern.dungeon.grid import Grid  # noqa: E402


def pytest_configure(config):  # register custom markers
    config.addinivalue_line("markers", "performance: generation runtime guardrails")
    config.addinivalue_line("markers", "structure: structural invariants swept over many seeds")


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch):
    """Keep ambient CAVERN_* settings from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("CAVERN_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def open_grid():
    """20x12 grid with a solid border and an all-floor interior."""

    def _make(width=20, height=12):
        rows = []
        for y in range(height):
            if y in (0, height - 1):
                rows.append("#" * width)
            else:
                rows.append("#" + "." * (width - 2) + "#")
        return Grid.from_rows(rows)

    return _make
