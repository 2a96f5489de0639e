# file: shuffle_engine/cli_io.py
#
# Console prompts for the soft shuffle CLI: one setting at a time, the
# instruction pager and the "save as text" question. Every read goes through
# _read so an EOF on stdin surfaces as a RuntimeError.
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .settings import DEFAULT_LIMITS, SETTING_NAMES, SettingLimits, check_setting
from .shuffle_types import ConfigurationOutOfRange

PAGER_PROMPT = "[N]ext, [P]revious, [B]eginning, [Q]uit [N]: "

# Pager key -> move; None means leave the pager.
_PAGER_MOVES: Dict[str, Optional[str]] = {
    "N": "next",
    "P": "previous",
    "B": "beginning",
    "Q": None,
}


def _read(prompt: str) -> str:
    try:
        return input(prompt).strip()
    except EOFError:
        raise RuntimeError("Input aborted (EOF) while prompting user.")


def prompt_setting(setting: str, current: int, limits: SettingLimits = DEFAULT_LIMITS) -> int:
    """
    Ask for one ShuffleSettings field, e.g. prompt_setting("columns", 4).

    Enter keeps `current`. Out-of-range values are reported with the same
    message validate_settings would raise, and asked again.
    """
    minimum, maximum = limits.bounds(setting)
    prompt = f"{SETTING_NAMES[setting]} [{current}] (>={minimum} and <={maximum}): "

    while True:
        raw = _read(prompt)
        if not raw:
            return current

        try:
            value = int(raw)
        except ValueError:
            print(f"{SETTING_NAMES[setting]} must be a whole number.")
            continue

        try:
            check_setting(setting, value, limits)
        except ConfigurationOutOfRange as exc:
            print(exc)
            continue
        return value


def pager_step(position: int, page_count: int) -> Optional[int]:
    """
    Read one pager key and return the page to show next, or None to quit.

    Next stays on the last page and Previous on the first.
    """
    last = page_count - 1
    while True:
        key = _read(f"Page {position + 1} of {page_count}. {PAGER_PROMPT}").upper() or "N"
        if key not in _PAGER_MOVES:
            print("Type N, P, B or Q.")
            continue

        move = _PAGER_MOVES[key]
        if move is None:
            return None
        if move == "next":
            return min(position + 1, last)
        if move == "previous":
            return max(position - 1, 0)
        return 0


def ask_output_path(default_file: str) -> Optional[Path]:
    """Offer to save the instructions; returns the chosen path or None."""
    while True:
        answer = _read("Save these instructions to a text file? (y/N): ").lower()
        if answer in {"", "n", "no"}:
            return None
        if answer in {"y", "yes"}:
            break
        print("Please answer y or n.")

    raw = _read(f"Output file [{default_file}]: ") or default_file
    return Path(raw).expanduser()
