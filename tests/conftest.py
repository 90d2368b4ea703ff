from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest


def pytest_configure(config: pytest.Config) -> None:
    # Ensure the local `src/` tree wins over any other editable install that may exist
    # (e.g. a different git worktree pointing at the same project).
    src_dir = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


@pytest.fixture(autouse=True)
def _isolate_diagnostics(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    from nurep.debug import reset_debug_override
    from nurep.trace_log import close_trace_log

    monkeypatch.delenv("NUREP_DEBUG", raising=False)
    reset_debug_override()
    yield
    reset_debug_override()
    close_trace_log()
