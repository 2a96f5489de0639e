# shuffle_engine/pass_plan.py
"""
Pass count solver and per-pass digit extraction.

With P piles, one pass can place up to P cards, two passes up to P^2,
three up to P^3 and so on: the pile for pass k is the k-th base-P digit of
the card's target position. We find the number of passes by multiplying
powers up rather than taking roots, so no floating-point rounding can put a
perfect square or cube on the wrong side of the boundary.

Worked example, 100 cards on 10 piles (2 passes):
    target 75 -> pass 0 uses digit 0 (75 % 10 = 5)  -> pile 5
              -> pass 1 uses digit 1 (75 // 10 % 10 = 7) -> pile 7
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .shuffle_types import MAX_PASSES, Card, PassesInfeasible, Pile


def compute_passes(num_cards: int, num_piles: int, max_passes: int = MAX_PASSES) -> Optional[int]:
    """
    Smallest K with num_piles ** K >= num_cards, or None if K > max_passes.

    A single pile can never spread more than one card, so num_piles <= 1
    with more than one card is infeasible (and must not loop forever).
    """
    if num_cards <= 1 and num_piles >= 1:
        return 1 if max_passes >= 1 else None
    if num_piles <= 1:
        return None

    accumulator = num_piles
    passes = 1
    while passes <= max_passes:
        if accumulator >= num_cards:
            return passes
        passes += 1
        accumulator *= num_piles
    return None


def pile_digit(value: Card, base: int, digit_index: int) -> Pile:
    """The digit_index-th digit of value written in base `base`."""
    return (value // base ** digit_index) % base


def gather_forward_for_pass(pass_index: int, num_passes: int) -> bool:
    """
    Gather direction for a pass.

    Alternates each pass and always ends on a backward gather (pile 0 at
    the bottom), so the first pass gathers forward when num_passes is even.
    """
    return (num_passes - pass_index) % 2 == 0


@dataclass(frozen=True)
class PassPlan:
    """How many passes a (num_cards, num_piles) combination needs, and how to pile."""

    num_cards: int
    num_piles: int
    num_passes: int

    def pile_for(self, card: Card, pass_index: int) -> Pile:
        return pile_digit(card, self.num_piles, pass_index)

    def gather_forward_for(self, pass_index: int) -> bool:
        return gather_forward_for_pass(pass_index, self.num_passes)


def build_pass_plan(num_cards: int, num_piles: int, max_passes: int = MAX_PASSES) -> PassPlan:
    """PassPlan for the inputs, or PassesInfeasible if more than max_passes are needed."""
    num_passes = compute_passes(num_cards, num_piles, max_passes)
    if num_passes is None:
        raise PassesInfeasible(
            f"Too many passes needed (more than {max_passes}) to randomise "
            f"{num_cards} cards on {num_piles} pile(s)."
        )
    return PassPlan(num_cards=num_cards, num_piles=num_piles, num_passes=num_passes)
