#!/usr/bin/env python3
"""
Sampler bias check — empirical look at the rejection sampler and shuffle.

Usage:
    .venv/bin/python sampler_bias_check.py [num_cards] [trials] [--insecure]

Default: 10 cards, 20000 shuffles, secure source. Runs instrumented
Fisher-Yates shuffles and prints:

    * return_range   [bound][value]     values sampled for each upper bound
    * position_value [position][value]  where each card ended up
    * rejections     [bound][0..9,10+]  draws rejected before acceptance
    * swapped        [position]         times each position took part in a swap

plus a chi-square statistic per bound against the uniform distribution.
This is a diagnostic, not part of the shuffle engine.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from shuffle_engine.sampler import InsecureEntropySource, SecureEntropySource, sample_with_rejections

REJECTION_BUCKETS = 11  # 0..9 rejections, then 10+


@dataclass
class BiasCounts:
    num_cards: int
    trials: int = 0
    return_range: List[List[int]] = field(default_factory=list)
    position_value: List[List[int]] = field(default_factory=list)
    rejections: List[List[int]] = field(default_factory=list)
    swapped: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        n = self.num_cards
        self.return_range = [[0] * n for _ in range(n)]
        self.position_value = [[0] * n for _ in range(n)]
        self.rejections = [[0] * REJECTION_BUCKETS for _ in range(n)]
        self.swapped = [0] * n


def run_bias_check(num_cards: int, trials: int, source=None) -> BiasCounts:
    """Shuffle `trials` decks of `num_cards`, recording every draw."""
    if num_cards < 2:
        raise ValueError("Need at least 2 cards to check for bias.")

    counts = BiasCounts(num_cards=num_cards)
    for _ in range(trials):
        deck = list(range(num_cards))
        for i in range(num_cards - 1, 0, -1):
            j, rejected = sample_with_rejections(i, source)
            counts.rejections[i][min(rejected, REJECTION_BUCKETS - 1)] += 1
            counts.return_range[i][j] += 1
            if i != j:
                counts.swapped[i] += 1
                counts.swapped[j] += 1
            deck[i], deck[j] = deck[j], deck[i]

        for position, value in enumerate(deck):
            counts.position_value[position][value] += 1
        counts.trials += 1

    return counts


def chi_square(observed: List[int]) -> float:
    """Chi-square statistic of `observed` against a uniform expectation."""
    total = sum(observed)
    if total == 0 or not observed:
        return 0.0
    expected = total / len(observed)
    return sum((o - expected) ** 2 / expected for o in observed)


def print_results(counts: BiasCounts) -> None:
    n = counts.num_cards
    print(f"\n{'='*72}")
    print(f"  SAMPLER BIAS CHECK — {n} cards, {counts.trials} shuffles")
    print(f"{'='*72}")

    print("\n  Sampled values per bound (value 0..bound), chi-square, dof")
    for bound in range(1, n):
        row = counts.return_range[bound][: bound + 1]
        print(f"  [{bound:>3}] {row}  chi2={chi_square(row):.2f} dof={bound}")

    print("\n  Final position -> value counts, chi-square (dof n-1)")
    for position in range(n):
        row = counts.position_value[position]
        print(f"  [{position:>3}] {row}  chi2={chi_square(row):.2f}")

    print("\n  Rejections per bound (0..9, 10+)")
    for bound in range(1, n):
        print(f"  [{bound:>3}] {counts.rejections[bound]}")

    print(f"\n  Swaps per position: {counts.swapped}")
    print(f"{'='*72}\n")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Empirical bias check of the shuffle sampler.")
    parser.add_argument("num_cards", nargs="?", type=int, default=10)
    parser.add_argument("trials", nargs="?", type=int, default=20000)
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="use the seeded pseudo-random source instead of os.urandom",
    )
    args = parser.parse_args(argv)

    source = InsecureEntropySource() if args.insecure else SecureEntropySource()
    print(f"Running bias check: {args.num_cards} cards, {args.trials} shuffles...")
    print_results(run_bias_check(args.num_cards, args.trials, source))


if __name__ == "__main__":
    main()
