# tests/test_debug_log.py
from __future__ import annotations

from pathlib import Path

from shuffle_engine import debug_log as dl


def test_debug_log_disabled_without_env(monkeypatch) -> None:
    monkeypatch.delenv(dl.DEBUG_FILE_ENV, raising=False)
    assert dl.debug_enabled() is False
    assert dl.debug_log_path() is None
    dl.debug_log("nothing happens", [1, 2, 3])


def test_debug_log_appends_label_and_values(monkeypatch, tmp_path: Path) -> None:
    trace = tmp_path / "logs" / "trace.txt"
    monkeypatch.setenv(dl.DEBUG_FILE_ENV, str(trace))

    dl.debug_log("first")
    dl.debug_log("second", (4, 5))

    assert trace.read_text(encoding="utf-8") == "first\nsecond\n  [4, 5]\n"


def test_debug_log_never_raises_on_unwritable_path(monkeypatch, tmp_path: Path) -> None:
    # Pointing the trace at a directory makes the write fail.
    monkeypatch.setenv(dl.DEBUG_FILE_ENV, str(tmp_path))
    dl.debug_log("ignored", [1])
