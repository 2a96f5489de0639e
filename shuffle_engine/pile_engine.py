"""
Pile decomposition engine.

Given the target permutation and a PassPlan, work out for every pass which
pile each card is dealt to, and simulate the deal and gather to get the deck
that pass leaves behind (which is the input to the next pass).

Conventions
-----------
- Deck.cards[0] is the BOTTOM of the deck. Dealing therefore walks the deck
  from index M-1 down to 0, while each pile is built up from its index 0.
- gather_forward=True is "place pile 0 on pile 1, that pile on pile 2, ...",
  so pile P-1 ends at the bottom of the gathered deck and pile 0 on top.
  gather_forward=False is the mirror: pile 0 at the bottom.
- Cards inside a pile are never reordered by gathering.

With 100 cards on 10 piles the first pass sorts by remainder (units digit),
and gathering leaves a deck whose top holds the remainder-0 pile. The second
pass deals by quotient (tens digit): every pile then receives its cards in
ascending order, and the backward gather stacks piles 0..9 bottom to top,
giving 0..99.
"""

from __future__ import annotations

from typing import List, Sequence

from .debug_log import debug_enabled, debug_log
from .pass_plan import PassPlan
from .shuffle_types import Card, DealInstructions, DealVerificationError, Deck, PassResult


def assign_piles(deck: Deck, plan: PassPlan, pass_index: int) -> DealInstructions:
    """Pile for every deck position (bottom-to-top) for the given pass."""
    piles = tuple(plan.pile_for(card, pass_index) for card in deck.cards)
    return DealInstructions(
        deck_ordered_piles=piles,
        gather_forward=plan.gather_forward_for(pass_index),
    )


def deal_to_piles(deck: Deck, instructions: DealInstructions, num_piles: int) -> List[List[Card]]:
    """Deal from the top of the deck onto the piles named by the instructions."""
    if instructions.num_instructions != deck.size:
        raise ValueError(
            f"{instructions.num_instructions} instructions for a deck of {deck.size} cards."
        )

    piles: List[List[Card]] = [[] for _ in range(num_piles)]
    for i in range(deck.size - 1, -1, -1):
        piles[instructions.deck_ordered_piles[i]].append(deck.cards[i])
    return piles


def gather_piles(piles: Sequence[Sequence[Card]], gather_forward: bool) -> Deck:
    """Stack the piles back into one deck (see module docstring for direction)."""
    ordered = reversed(piles) if gather_forward else piles
    gathered: List[Card] = []
    for pile in ordered:
        gathered.extend(pile)
    return Deck(tuple(gathered))


def apply_instructions(deck: Deck, instructions: DealInstructions, num_piles: int) -> Deck:
    """The deck a human holds after dealing `deck` by `instructions` and gathering."""
    piles = deal_to_piles(deck, instructions, num_piles)
    if debug_enabled():
        debug_log(
            f"Dealt to piles (gather_forward={instructions.gather_forward}), "
            "pile[0] is the first card dealt:",
            piles,
        )
    return gather_piles(piles, instructions.gather_forward)


def run_passes(permutation: Deck, plan: PassPlan) -> List[PassResult]:
    """
    Run every pass of the plan starting from the target permutation.

    Raises DealVerificationError if the final deck is not 0..N-1, so a
    caller either gets a complete, correct set of passes or nothing.
    """
    if permutation.size != plan.num_cards:
        raise ValueError(
            f"Permutation has {permutation.size} cards but the plan is for {plan.num_cards}."
        )

    results: List[PassResult] = []
    current = permutation
    for pass_index in range(plan.num_passes):
        instructions = assign_piles(current, plan, pass_index)
        new_deck = apply_instructions(current, instructions, plan.num_piles)

        if debug_enabled():
            debug_log(f"Pass {pass_index} deck-ordered piles:", instructions.deck_ordered_piles)
            debug_log(f"Pass {pass_index} deal-ordered piles:", instructions.deal_ordered_piles)
            debug_log(f"Deck after pass {pass_index}:", new_deck.cards)

        results.append(PassResult(pass_index=pass_index, instructions=instructions, deck=new_deck))
        current = new_deck

    if not current.is_identity():
        raise DealVerificationError(
            f"Deck is not in order after {plan.num_passes} pass(es) "
            f"({plan.num_cards} cards, {plan.num_piles} piles)."
        )
    return results
