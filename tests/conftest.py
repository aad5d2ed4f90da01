"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import multiprocessing
import os
import sys
import time
from collections.abc import Iterator
from pathlib import Path

import pytest

from codex_highlight.core.isolation import ProcessBoundary
from codex_highlight.core.pipeline import HighlightPipeline
from codex_highlight.engine import PygmentsEngine
from codex_highlight.models import GrammarDescriptor, StyledLine

_REPO_ROOT = Path(__file__).parent.parent

HAS_FORK = "fork" in multiprocessing.get_all_start_methods()

requires_fork = pytest.mark.skipif(not HAS_FORK, reason="needs the fork start method")


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
# Misbehaving engine: the real Pygments engine, except for marked inputs
# ---------------------------------------------------------------------------

CRASH_MARKER = "@@crash@@"
RECURSE_MARKER = "@@recurse@@"
HANG_MARKER = "@@hang@@"


def _recurse(depth: int) -> int:
    return _recurse(depth + 1) + 1


class PoisonedEngine(PygmentsEngine):
    """Kills, overflows or hangs the worker when the code carries a marker."""

    def tokenize(self, code: str, grammar: GrammarDescriptor) -> Iterator[StyledLine]:
        if CRASH_MARKER in code:
            sys.stdout.flush()
            os._exit(70)
        if RECURSE_MARKER in code:
            _recurse(0)
        if HANG_MARKER in code:
            while True:
                time.sleep(0.05)
        return super().tokenize(code, grammar)


class InlineBoundary:
    """Runs the job in the calling process; for tests that don't exercise isolation."""

    def run(self, fn, *args):  # type: ignore[no-untyped-def]
        return fn(*args)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def engine() -> PygmentsEngine:
    return PygmentsEngine()


@pytest.fixture
def fork_boundary() -> ProcessBoundary:
    """A boundary whose children inherit test-only objects instead of unpickling them."""
    if not HAS_FORK:
        pytest.skip("needs the fork start method")
    return ProcessBoundary(start_method="fork", timeout=5.0)


@pytest.fixture
def inline_pipeline(engine: PygmentsEngine) -> HighlightPipeline:
    return HighlightPipeline(engine, InlineBoundary())  # type: ignore[arg-type]


@pytest.fixture
def poisoned_pipeline(fork_boundary: ProcessBoundary) -> HighlightPipeline:
    fork_boundary.timeout = 2.0
    return HighlightPipeline(PoisonedEngine(), fork_boundary)
