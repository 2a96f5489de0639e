from __future__ import annotations

from typing import Iterable, List

import pytest

from shuffle_engine.sampler import InsecureEntropySource


class ScriptedSource:
    """
    Entropy source that replays fixed draws.

    Records the width of every draw so tests can check how the sampler
    asks for bits.
    """

    secure = False

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws: List[int] = list(draws)
        self.widths: List[int] = []

    def draw(self, width_bits: int) -> int:
        self.widths.append(width_bits)
        if not self._draws:
            raise AssertionError("ScriptedSource ran out of draws")
        return self._draws.pop(0)


class ExplodingSource:
    """Entropy source that fails the test if anything draws from it."""

    secure = False

    def draw(self, width_bits: int) -> int:
        raise AssertionError("No entropy should be drawn here")


@pytest.fixture
def scripted_source():
    """Factory: scripted_source([draw, draw, ...])."""
    return ScriptedSource


@pytest.fixture
def exploding_source() -> ExplodingSource:
    return ExplodingSource()


@pytest.fixture
def seeded_source() -> InsecureEntropySource:
    """Reproducible pseudo-random source (DEFAULT_SEED)."""
    return InsecureEntropySource()
