# shuffle_engine/shuffle_types.py
#
# Types, constants, dataclasses and exceptions shared by the shuffle engine.
#
# This is a LEAF module — it has no shuffle_engine imports.
# Everything else imports from here.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Card = int   # a card is identified by its target position
Pile = int   # abstract pile index 0..P-1


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ShuffleError(Exception):
    """Base class for every error raised by the shuffle engine."""


class ConfigurationOutOfRange(ShuffleError):
    """Raised when a setting is outside its configured min/max bounds."""


class PassesInfeasible(ShuffleError):
    """Raised when no pass count <= max_passes gives P^K >= N."""


class EntropyUnavailable(ShuffleError):
    """Raised when the secure random source cannot supply bits."""


class DealVerificationError(ShuffleError):
    """Raised when the simulated passes do not leave the deck in order."""


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Generous ceiling; practical mats never need more than 4.
MAX_PASSES: int = 10

# Dealing instructions are shown in rows of this many entries.
INSTRUCTIONS_PER_ROW: int = 5

# Width of a single draw from the entropy source. Matches a Uint16 draw;
# widened to whole bytes when a bound needs more bits.
DRAW_WIDTH_BITS: int = 16

# Canonical deterministic seed for the opt-in pseudo-random source.
DEFAULT_SEED: int = 778899

RATING_GOOD = "GOOD"
RATING_OK = "OK"
RATING_POOR = "POOR"


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RatingThresholds:
    """
    Qualitative rating of a pass count.

    These are presentation heuristics only; they never gate a run.
    """

    # K <= good_max_passes -> GOOD
    good_max_passes: int = 2
    # K <= ok_max_passes -> OK, anything above -> POOR
    ok_max_passes: int = 3

    def rate(self, num_passes: int) -> str:
        if num_passes <= self.good_max_passes:
            return RATING_GOOD
        if num_passes <= self.ok_max_passes:
            return RATING_OK
        return RATING_POOR


@dataclass(frozen=True)
class Deck:
    """
    An ordered deck of N cards.

    cards[0] is the BOTTOM of the physical deck, cards[N-1] the TOP.
    The cards are always a permutation of 0..N-1.
    """

    cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple.
        object.__setattr__(self, "cards", tuple(self.cards))
        if sorted(self.cards) != list(range(len(self.cards))):
            raise ValueError(
                f"Deck of size {len(self.cards)} is not a permutation of "
                f"0..{len(self.cards) - 1}."
            )

    @classmethod
    def identity(cls, size: int) -> "Deck":
        """Unshuffled deck: every card sits at its own index."""
        return cls(tuple(range(size)))

    @property
    def size(self) -> int:
        return len(self.cards)

    def is_identity(self) -> bool:
        return all(card == i for i, card in enumerate(self.cards))

    def __len__(self) -> int:
        return len(self.cards)


@dataclass(frozen=True)
class DealInstructions:
    """
    Pile assignment for one pass.

    deck_ordered_piles[i] is the pile for the card at deck position i
    (bottom-to-top, to line up with Deck.cards). deal_ordered_piles is the
    same list reversed, i.e. in the order a human actually deals (top card
    first).

    gather_forward:
        True  -> place pile 0 on pile 1, that pile on pile 2, ...
        False -> place pile P-1 on pile P-2, that pile on the previous, ...
    """

    deck_ordered_piles: Tuple[Pile, ...]
    gather_forward: bool
    deal_ordered_piles: Tuple[Pile, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "deck_ordered_piles", tuple(self.deck_ordered_piles))
        object.__setattr__(
            self, "deal_ordered_piles", tuple(reversed(self.deck_ordered_piles))
        )

    @property
    def num_instructions(self) -> int:
        return len(self.deck_ordered_piles)


@dataclass(frozen=True)
class PassResult:
    """What a single pass produces: the instructions and the deck left behind."""

    pass_index: int
    instructions: DealInstructions
    deck: Deck
