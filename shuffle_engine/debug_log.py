# shuffle_engine/debug_log.py
#
# Optional debug trace of a shuffle run.
# Enable by setting env var SOFT_SHUFFLE_DEBUG_FILE=/path/to/trace.txt before
# running. With nothing configured every call here is a no-op.
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

DEBUG_FILE_ENV = "SOFT_SHUFFLE_DEBUG_FILE"


def debug_log_path() -> Optional[Path]:
    raw = os.getenv(DEBUG_FILE_ENV)
    return Path(raw) if raw else None


def debug_enabled() -> bool:
    return debug_log_path() is not None


def debug_log(label: str, values: Optional[Sequence[object]] = None) -> None:
    """
    Append a labelled line (and optionally a value list) to the debug trace.

    Best-effort only: a trace file that cannot be written never stops a run.
    """
    path = debug_log_path()
    if path is None:
        return

    lines = [label]
    if values is not None:
        lines.append("  " + repr(list(values)))

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError:
        pass
