# shuffle_engine/mat.py
"""
Mat labels and instruction pages.

The mat is a rows x columns grid of labelled spaces. Labels run left to right
and top to bottom, so in a 2x2 mat pile 0 is A1, pile 1 is A2, pile 2 is B1
and pile 3 is B2. Rows are single letters, which caps a mat at 26 rows.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .shuffle_types import INSTRUCTIONS_PER_ROW, ConfigurationOutOfRange, DealInstructions, Pile

MAX_MAT_ROWS = len(string.ascii_uppercase)

# Entries on one instruction row are separated by a space and an em space.
ENTRY_SEPARATOR = " \u2003"
ROW_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class Mat:
    rows: int
    columns: int
    labels: Tuple[str, ...]

    @classmethod
    def from_grid(cls, rows: int, columns: int) -> "Mat":
        if not 1 <= rows <= MAX_MAT_ROWS:
            raise ConfigurationOutOfRange(
                f"Mat rows must be between 1 and {MAX_MAT_ROWS}, got {rows}."
            )
        if columns < 1:
            raise ConfigurationOutOfRange(f"Mat columns must be >= 1, got {columns}.")

        labels = tuple(
            f"{string.ascii_uppercase[r]}{c}"
            for r in range(rows)
            for c in range(1, columns + 1)
        )
        return cls(rows=rows, columns=columns, labels=labels)

    @property
    def num_piles(self) -> int:
        return len(self.labels)

    def label_for(self, pile: Pile) -> str:
        if not 0 <= pile < self.num_piles:
            raise IndexError(f"Pile {pile} is not on a {self.rows}x{self.columns} mat.")
        return self.labels[pile]

    def deal_labels(self, instructions: DealInstructions) -> List[str]:
        """Mat label for every card, in the order they are physically dealt."""
        return [self.label_for(p) for p in instructions.deal_ordered_piles]

    def gather_instruction(self, gather_forward: bool) -> str:
        """Human-readable text for gathering the piles after a deal."""
        if self.num_piles == 1:
            return f"Gather up pile {self.labels[0]}."

        if gather_forward:
            heading = "Gather the piles from top left:"
            order = self.labels
        else:
            heading = "Gather the piles from bottom right:"
            order = tuple(reversed(self.labels))

        parts = [heading, f"Place pile {order[0]} on {order[1]}."]
        if self.num_piles > 2:
            parts.append(f"Place {order[0]}+{order[1]} pile on {order[2]}.")
            parts.append("And so on.")
        return ROW_SEPARATOR.join(parts)

    def map_instructions(self, instructions: DealInstructions, cards_per_deal: int) -> List[str]:
        """Pages of dealing labels for one pass, followed by the gather text."""
        pages = split_into_pages(self.deal_labels(instructions), cards_per_deal)
        pages.append(self.gather_instruction(instructions.gather_forward))
        return pages


def chunk(entries: Sequence[str], size: int) -> List[List[str]]:
    """Split entries into lists of `size`; the last one may be shorter."""
    if size < 1:
        raise ValueError(f"Chunk size must be >= 1, got {size}.")
    return [list(entries[i:i + size]) for i in range(0, len(entries), size)]


def format_page(entries: Sequence[str], per_row: int = INSTRUCTIONS_PER_ROW) -> str:
    """One display page: `per_row` entries per line, blank line between rows."""
    return ROW_SEPARATOR.join(ENTRY_SEPARATOR.join(row) for row in chunk(entries, per_row))


def split_into_pages(
    labels: Sequence[str],
    cards_per_deal: int,
    per_row: int = INSTRUCTIONS_PER_ROW,
) -> List[str]:
    """
    Chop the deal-ordered labels into pages of `cards_per_deal` entries.

    100 labels at 10 per page -> 10 full pages.
    23 labels at 10 per page  -> 2 full pages and a page of 3.
    """
    return [format_page(page, per_row) for page in chunk(labels, cards_per_deal)]
