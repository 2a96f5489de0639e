"""
Full shuffle run and its instruction output.

Responsibilities
----------------
- Take:
    * ShuffleSettings (validated here before anything else happens)
    * an entropy source (secure by default)
- Produce:
    * ShuffleRun: the permutation, every pass, and the framed list of pages
      a host displays one at a time
    * Optional TXT file of those pages

Page layout
-----------
    [BEGIN_PAGE,
     pass 0 page 1, ..., pass 0 page n, pass 0 gather text,
     pass 1 page 1, ..., pass 1 gather text,
     ...,
     DONE_PAGE]

Errors propagate as ShuffleError subclasses; no pages exist unless every
pass verified correctly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .debug_log import debug_enabled, debug_log
from .mat import Mat
from .pass_plan import PassPlan, build_pass_plan
from .permutation import generate_permutation
from .pile_engine import run_passes
from .settings import DEFAULT_LIMITS, SettingLimits, SettingsReport, ShuffleSettings, assess_settings
from .shuffle_types import Deck, PassResult, RatingThresholds, ShuffleError


# ---------------------------------------------------------------------------
# Exceptions and result types
# ---------------------------------------------------------------------------


class OutputError(ShuffleError):
    """Raised when the instruction text cannot be written."""


BEGIN_PAGE = "Virtual randomisation complete.\n\nMove on for the first deal instruction."
DONE_PAGE = "Done!\n\nDeck randomised and ready for use."


@dataclass(frozen=True)
class ShuffleRun:
    settings: ShuffleSettings
    report: SettingsReport
    plan: PassPlan
    mat: Mat
    permutation: Deck
    passes: Tuple[PassResult, ...]
    pages: Tuple[str, ...]

    @property
    def num_passes(self) -> int:
        return self.plan.num_passes


def pass_pages(mat: Mat, results: List[PassResult], cards_per_deal: int) -> List[List[str]]:
    """Mat-mapped pages for every pass (instruction pages then gather text)."""
    return [mat.map_instructions(r.instructions, cards_per_deal) for r in results]


def frame_pages(per_pass: List[List[str]]) -> List[str]:
    pages = [BEGIN_PAGE]
    for pass_block in per_pass:
        pages.extend(pass_block)
    pages.append(DONE_PAGE)
    return pages


def run_shuffle(
    settings: ShuffleSettings,
    *,
    limits: SettingLimits = DEFAULT_LIMITS,
    thresholds: RatingThresholds = RatingThresholds(),
    source=None,
) -> ShuffleRun:
    """
    Validate, randomise, decompose into passes and build the pages.

    Raises ConfigurationOutOfRange / PassesInfeasible before any randomness is
    drawn, EntropyUnavailable if the secure source fails, and
    DealVerificationError if the passes do not sort the deck.
    """
    report = assess_settings(settings, limits, thresholds)
    plan = build_pass_plan(settings.num_cards, settings.num_piles, limits.max_passes)
    mat = Mat.from_grid(settings.rows, settings.columns)

    if debug_enabled():
        debug_log(
            f"Run: {settings.num_cards} cards, {settings.rows}x{settings.columns} mat, "
            f"{plan.num_passes} pass(es), {settings.cards_per_deal} cards per page"
        )
        debug_log("Mat labels:", mat.labels)

    permutation = generate_permutation(settings.num_cards, source)
    if debug_enabled():
        debug_log("Target permutation (value = final position):", permutation.cards)

    results = run_passes(permutation, plan)
    pages = frame_pages(pass_pages(mat, results, settings.cards_per_deal))

    return ShuffleRun(
        settings=settings,
        report=report,
        plan=plan,
        mat=mat,
        permutation=permutation,
        passes=tuple(results),
        pages=tuple(pages),
    )


def format_run_text(run: ShuffleRun) -> str:
    """Numbered plain-text rendering of every page, for saving or printing."""
    s = run.settings
    header = (
        f"Soft shuffle: {s.num_cards} cards, {s.rows}x{s.columns} mat, "
        f"{run.num_passes} pass(es)"
    )
    blocks = [header]
    for index, page in enumerate(run.pages):
        blocks.append(f"{index}.\n{page}")
    return "\n\n".join(blocks) + "\n"


def write_instructions_to_text_file(path: Path, run: ShuffleRun) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_run_text(run), encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Could not write instructions to {path}: {exc}") from exc
    return path
