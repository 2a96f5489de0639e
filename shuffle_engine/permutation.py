# shuffle_engine/permutation.py
"""
Permutation generator.

This is where all of the randomisation happens; everything after it is
working out how to deal the cards into the positions chosen here.

The result is a Deck read as:
    * POSITION i  -> the card currently at i in the physical deck
    * VALUE at i  -> the position that card must end up in
"""

from __future__ import annotations

from .sampler import sample
from .shuffle_types import Deck


def generate_permutation(num_cards: int, source=None) -> Deck:
    """
    Uniformly random permutation of 0..num_cards-1 (Fisher-Yates).

    For i from n-1 down to 1, swap position i with a position j drawn
    uniformly from [0, i]. Index 0 is never drawn against itself and the
    bound must be exactly i each time, or the result is biased.
    """
    if num_cards < 1:
        raise ValueError(f"num_cards must be >= 1, got {num_cards}.")

    cards = list(range(num_cards))
    for i in range(num_cards - 1, 0, -1):
        j = sample(i, source)
        cards[i], cards[j] = cards[j], cards[i]

    return Deck(tuple(cards))
