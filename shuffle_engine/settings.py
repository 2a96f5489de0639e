"""
Shuffle settings – limits, validation and the settings report.

This module does NOT randomise anything. It only:

    • Holds the host-configured min/max bounds for every input
    • Validates a ShuffleSettings against those bounds
    • Works out the pass count and a GOOD / OK / POOR rating
    • Builds the human-readable settings summary

Every check here runs before any randomisation, so a bad setting never
produces partial instructions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .pass_plan import compute_passes
from .shuffle_types import (
    INSTRUCTIONS_PER_ROW,
    MAX_PASSES,
    ConfigurationOutOfRange,
    PassesInfeasible,
    RatingThresholds,
)


# ---------------------------------------------------------------------------
# Settings and limits
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SettingLimits:
    """Allowed ranges for the user-facing settings (inclusive)."""

    num_cards_min: int = 1
    num_cards_max: int = 10000
    rows_min: int = 1
    rows_max: int = 10
    columns_min: int = 1
    columns_max: int = 10
    instruction_rows_min: int = 1
    instruction_rows_max: int = 10
    max_passes: int = MAX_PASSES

    def bounds(self, setting: str) -> Tuple[int, int]:
        """(min, max) for a ShuffleSettings field, e.g. bounds("rows")."""
        return getattr(self, f"{setting}_min"), getattr(self, f"{setting}_max")


@dataclass(frozen=True)
class ShuffleSettings:
    """What the user asked for: deck size, mat shape, instruction rows per page."""

    num_cards: int = 52
    rows: int = 2
    columns: int = 4
    instruction_rows: int = 2

    @property
    def num_piles(self) -> int:
        return self.rows * self.columns

    @property
    def cards_per_deal(self) -> int:
        return self.instruction_rows * INSTRUCTIONS_PER_ROW


DEFAULT_LIMITS = SettingLimits()

# ShuffleSettings field -> name used in prompts and range errors.
SETTING_NAMES: Dict[str, str] = {
    "num_cards": "Number of cards",
    "rows": "Mat rows",
    "columns": "Mat columns",
    "instruction_rows": "Instruction rows",
}


def _check_range(name: str, value: int, minimum: int, maximum: int) -> None:
    if value < minimum or value > maximum:
        raise ConfigurationOutOfRange(
            f"{name} is {value}, allowed values are {minimum} to {maximum}."
        )


def check_setting(setting: str, value: int, limits: SettingLimits = DEFAULT_LIMITS) -> None:
    """Raise ConfigurationOutOfRange if `value` is outside the bounds for `setting`."""
    minimum, maximum = limits.bounds(setting)
    _check_range(SETTING_NAMES[setting], value, minimum, maximum)


def validate_settings(settings: ShuffleSettings, limits: SettingLimits = DEFAULT_LIMITS) -> None:
    """Raise ConfigurationOutOfRange for the first setting outside its bounds."""
    for setting in SETTING_NAMES:
        check_setting(setting, getattr(settings, setting), limits)


# ---------------------------------------------------------------------------
# Integer roots for the "piles needed" hints
# ---------------------------------------------------------------------------


def ceil_sqrt(n: int) -> int:
    """Smallest p with p*p >= n."""
    if n <= 0:
        return 0
    root = math.isqrt(n)
    return root if root * root == n else root + 1


def ceil_cbrt(n: int) -> int:
    """Smallest p with p**3 >= n."""
    if n <= 0:
        return 0
    p = 1
    while p ** 3 < n:
        p += 1
    return p


# ---------------------------------------------------------------------------
# Settings report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SettingsReport:
    settings: ShuffleSettings
    feasible: bool
    num_passes: Optional[int]
    rating: Optional[str]
    piles_for_two_passes: int
    piles_for_three_passes: int
    max_passes: int = MAX_PASSES
    thresholds: RatingThresholds = field(default_factory=RatingThresholds)

    @property
    def message(self) -> str:
        return format_settings_message(self)


def assess_settings(
    settings: ShuffleSettings,
    limits: SettingLimits = DEFAULT_LIMITS,
    thresholds: RatingThresholds = RatingThresholds(),
) -> SettingsReport:
    """
    Validate the settings and describe how well they will work.

    Out-of-range settings raise ConfigurationOutOfRange. An infeasible pass
    count is reported (feasible=False), not raised; see require_feasible().
    """
    validate_settings(settings, limits)

    num_passes = compute_passes(settings.num_cards, settings.num_piles, limits.max_passes)
    rating = thresholds.rate(num_passes) if num_passes is not None else None

    return SettingsReport(
        settings=settings,
        feasible=num_passes is not None,
        num_passes=num_passes,
        rating=rating,
        piles_for_two_passes=ceil_sqrt(settings.num_cards),
        piles_for_three_passes=ceil_cbrt(settings.num_cards),
        max_passes=limits.max_passes,
        thresholds=thresholds,
    )


def require_feasible(report: SettingsReport) -> int:
    """Pass count of a feasible report, else PassesInfeasible."""
    if report.num_passes is None:
        raise PassesInfeasible(
            f"Too many passes needed (more than {report.max_passes}) for "
            f"{report.settings.num_cards} cards on {report.settings.num_piles} pile(s)."
        )
    return report.num_passes


def format_settings_message(report: SettingsReport) -> str:
    """The settings summary shown to the user before randomising."""
    s = report.settings
    if not report.feasible:
        return (
            f"- Too many passes needed (more than {report.max_passes}).\n\n"
            "- Adjust the settings, then check them again."
        )

    lines = [
        f"- Current Settings: {report.rating}",
        f"({s.num_cards} cards randomised in {report.num_passes} deals.)",
        f"(Mat spaces used (W*H): [{s.columns}*{s.rows}].)",
        "",
        "- Info:",
        f"* [{s.columns} * {s.rows}] mat spaces gives a total of {s.num_piles} piles.",
        f"* {report.piles_for_two_passes}+ piles needed for 2 pass for {s.num_cards} cards.",
        f"* {report.piles_for_three_passes}+ piles needed for 3 pass for {s.num_cards} cards.",
    ]
    return "\n".join(lines)
