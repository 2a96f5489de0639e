"""
Unbiased integer sampler.

Rejection sampling over a random bit source. We only want to sample from the
minimum number of bits needed to encode the largest value we may return, so
each fixed-width draw is masked down to that many bits. A masked value above
the bound is rejected and we draw again. No modulo reduction is ever used:
wrapping a wider range onto a non-power-of-two range favours low values.

Bits needed per bound (unsigned, so this is ceil(log2(max + 1))):

    max      0  1  2  3  4  5  6  7  8  9  10
    bits     0  1  2  2  3  3  3  3  4  4  4
    mask     0  1  3  3  7  7  7  7 15 15  15

Masking keeps the rejection probability below 0.5, so the expected number of
draws per sample is under 2.

Entropy sources
---------------
SecureEntropySource  – os.urandom; the default and the only production source.
InsecureEntropySource – random.Random; explicit opt-in for tests and for
                        compatibility. It is flagged `secure = False` so a
                        caller can always tell which kind it was handed.
"""

from __future__ import annotations

import os
import random
from typing import Optional, Tuple

from .shuffle_types import DEFAULT_SEED, DRAW_WIDTH_BITS, EntropyUnavailable


# ---------------------------------------------------------------------------
# Entropy sources
# ---------------------------------------------------------------------------


class SecureEntropySource:
    """Operating-system CSPRNG. Never falls back to a pseudo-random generator."""

    secure = True

    def draw(self, width_bits: int) -> int:
        """Return a uniformly random integer of exactly `width_bits` bits."""
        num_bytes = (width_bits + 7) // 8
        try:
            raw = os.urandom(num_bytes)
        except (NotImplementedError, OSError) as exc:
            raise EntropyUnavailable(
                f"Secure random source could not supply {num_bytes} byte(s): {exc}"
            ) from exc
        return int.from_bytes(raw, "big") & ((1 << width_bits) - 1)


class InsecureEntropySource:
    """
    Seedable pseudo-random source.

    NOT for real shuffles: the output is reproducible from the seed. Useful
    for tests and for exploring the algorithm.
    """

    secure = False

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = DEFAULT_SEED if seed is None else seed
        self._rng = random.Random(self.seed)

    def draw(self, width_bits: int) -> int:
        return self._rng.getrandbits(width_bits)


_DEFAULT_SOURCE = SecureEntropySource()


def default_source() -> SecureEntropySource:
    return _DEFAULT_SOURCE


# ---------------------------------------------------------------------------
# Sampling
# ---------------------------------------------------------------------------


def bits_needed(max_value_inclusive: int) -> int:
    """
    Minimum number of bits that can encode max_value_inclusive.

    Integer arithmetic only, so perfect powers of two are never misjudged.
    """
    return max_value_inclusive.bit_length()


def draw_width(num_bits: int) -> int:
    """Width of one draw: DRAW_WIDTH_BITS, widened to whole bytes if needed."""
    if num_bits <= DRAW_WIDTH_BITS:
        return DRAW_WIDTH_BITS
    return ((num_bits + 7) // 8) * 8


def sample_with_rejections(max_value_inclusive: int, source=None) -> Tuple[int, int]:
    """
    Return (value, rejections) with value uniform on [0, max_value_inclusive].

    `rejections` is the number of draws thrown away before `value` was
    accepted; the diagnostic harness uses it.
    """
    if max_value_inclusive < 0:
        raise ValueError(
            f"max_value_inclusive must be >= 0, got {max_value_inclusive}."
        )
    if max_value_inclusive == 0:
        return 0, 0

    if source is None:
        source = _DEFAULT_SOURCE

    num_bits = bits_needed(max_value_inclusive)
    width = draw_width(num_bits)
    mask = (1 << num_bits) - 1

    rejections = 0
    while True:
        masked = source.draw(width) & mask
        if masked <= max_value_inclusive:
            return masked, rejections
        rejections += 1


def sample(max_value_inclusive: int, source=None) -> int:
    """Uniformly random integer in [0, max_value_inclusive]."""
    value, _ = sample_with_rejections(max_value_inclusive, source)
    return value
