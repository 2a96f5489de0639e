"""
High-level Orchestrator for the soft shuffle engine.

This module provides a top-level CLI that ties together:

- Settings: prompting, validation and the settings report (settings)
- Randomisation: the full pipeline (instruction_output.run_shuffle)
- Output: paging through the instructions, optional TXT file

It implements a main menu:
        1) Check settings
        2) Randomise deck
        3) Exit

The pager only moves an index over pages that are already computed; it
never recomputes anything.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from . import cli_io
from .instruction_output import ShuffleRun, run_shuffle, write_instructions_to_text_file
from .settings import DEFAULT_LIMITS, SettingLimits, SettingsReport, ShuffleSettings, assess_settings
from .shuffle_types import ShuffleError

DEFAULT_OUTPUT_FILE = "soft_shuffle_instructions.txt"

# Mat width is asked before its height.
PROMPT_ORDER = ("num_cards", "columns", "rows", "instruction_rows")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def _prompt_settings(current: ShuffleSettings, limits: SettingLimits = DEFAULT_LIMITS) -> ShuffleSettings:
    """Ask for every setting, offering the current value as the default."""
    values = {
        setting: cli_io.prompt_setting(setting, getattr(current, setting), limits)
        for setting in PROMPT_ORDER
    }
    return ShuffleSettings(**values)


def _check_settings(settings: ShuffleSettings, limits: SettingLimits = DEFAULT_LIMITS) -> Optional[SettingsReport]:
    """Print the settings report. Returns None if the settings are out of range."""
    try:
        report = assess_settings(settings, limits)
    except ShuffleError as exc:
        print("\nCurrent settings are outside allowed values:")
        print(f"  {exc}")
        return None

    print()
    print(report.message)
    return report


# ---------------------------------------------------------------------------
# Instruction pager
# ---------------------------------------------------------------------------


def _show_page(pages: Sequence[str], pos: int) -> None:
    print(f"\n{pos}.")
    print(pages[pos])


def _page_through(pages: Sequence[str]) -> None:
    """Next / Previous / Beginning / Quit over the computed pages."""
    if not pages:
        return

    pos: Optional[int] = 0
    while pos is not None:
        _show_page(pages, pos)
        pos = cli_io.pager_step(pos, len(pages))


# ---------------------------------------------------------------------------
# Randomisation session
# ---------------------------------------------------------------------------


def _run_randomisation_session(settings: ShuffleSettings, limits: SettingLimits = DEFAULT_LIMITS) -> Optional[ShuffleRun]:
    """
    Run a full randomisation:

    1) Validate the settings and work out the pass count.
    2) Randomise and build every pass.
    3) Page through the instructions.
    4) Optionally save them as text.
    """
    print("\n=== Randomise Deck ===")
    try:
        run = run_shuffle(settings, limits=limits)
    except ShuffleError as exc:
        print(f"\nERROR: {exc}")
        print("Adjust the settings, then check them again.")
        return None

    print(
        f"{settings.num_cards} cards randomised in {run.num_passes} deal(s) "
        f"on a {settings.columns}*{settings.rows} mat."
    )
    _page_through(run.pages)

    target = cli_io.ask_output_path(DEFAULT_OUTPUT_FILE)
    if target is not None:
        try:
            path = write_instructions_to_text_file(target, run)
        except ShuffleError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
        else:
            print(f"Instructions written to {path}")
    return run


# ---------------------------------------------------------------------------
# Main menu
# ---------------------------------------------------------------------------


def main_menu(limits: SettingLimits = DEFAULT_LIMITS) -> None:
    """Primary interactive menu used when running the package as a script."""
    settings = ShuffleSettings()
    _check_settings(settings, limits)

    while True:
        print()
        print("=== Soft Shuffle ===")
        print("1) Check settings")
        print("2) Randomise deck")
        print("3) Exit")

        choice = input("Choose [1-3] [3]: ").strip() or "3"

        if choice == "1":
            settings = _prompt_settings(settings, limits)
            _check_settings(settings, limits)
        elif choice == "2":
            _run_randomisation_session(settings, limits)
        elif choice == "3":
            print("Goodbye.")
            break
        else:
            print("Invalid choice, please try again.")


def main() -> None:
    main_menu()


if __name__ == "__main__":  # pragma: no cover
    main()
