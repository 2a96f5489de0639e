# tests/test_sampler.py
from __future__ import annotations

from collections import Counter

import pytest

from shuffle_engine import sampler
from shuffle_engine.sampler import (
    InsecureEntropySource,
    SecureEntropySource,
    bits_needed,
    draw_width,
    sample,
    sample_with_rejections,
)
from shuffle_engine.shuffle_types import DEFAULT_SEED, EntropyUnavailable


@pytest.mark.parametrize(
    "max_value, bits",
    [(0, 0), (1, 1), (2, 2), (3, 2), (4, 3), (7, 3), (8, 4), (10, 4), (255, 8), (256, 9)],
)
def test_bits_needed_matches_table(max_value: int, bits: int) -> None:
    assert bits_needed(max_value) == bits


def test_draw_width_is_sixteen_bits_until_bound_needs_more() -> None:
    assert draw_width(1) == 16
    assert draw_width(16) == 16
    assert draw_width(17) == 24
    assert draw_width(21) == 24
    assert draw_width(33) == 40


def test_sample_zero_never_draws(exploding_source) -> None:
    for _ in range(5):
        assert sample(0, exploding_source) == 0
    assert sample_with_rejections(0, exploding_source) == (0, 0)


def test_sample_rejects_masked_values_above_bound(scripted_source) -> None:
    # max 4 -> 3 bits, mask 7. 7 and 5 are rejected, 3 accepted.
    source = scripted_source([7, 5, 3])
    value, rejections = sample_with_rejections(4, source)
    assert value == 3
    assert rejections == 2


def test_sample_masks_high_bits_instead_of_reducing_modulo(scripted_source) -> None:
    # 0xFFFA masked to 3 bits is 2; modulo 6 would give 4.
    source = scripted_source([0xFFFA])
    assert sample(5, source) == 2


def test_sample_requests_wider_draws_for_large_bounds(scripted_source) -> None:
    source = scripted_source([1, 1])
    sample(100, source)
    sample(2 ** 20, source)
    assert source.widths == [16, 24]


def test_sample_negative_bound_raises() -> None:
    with pytest.raises(ValueError):
        sample(-1)


def test_sample_stays_in_range_and_covers_every_value(seeded_source) -> None:
    values = [sample(6, seeded_source) for _ in range(2000)]
    assert min(values) == 0
    assert max(values) == 6
    assert set(values) == set(range(7))


def test_sample_is_roughly_uniform(seeded_source) -> None:
    draws = 7000
    counts = Counter(sample(6, seeded_source) for _ in range(draws))
    expected = draws / 7
    # ~7 standard deviations either side
    for value in range(7):
        assert abs(counts[value] - expected) < 200


def test_default_secure_source_samples_in_range() -> None:
    for _ in range(200):
        assert 0 <= sample(9) <= 9


def test_sources_are_clearly_marked() -> None:
    assert SecureEntropySource.secure is True
    assert InsecureEntropySource.secure is False


def test_insecure_source_is_reproducible() -> None:
    a = InsecureEntropySource(seed=42)
    b = InsecureEntropySource(seed=42)
    assert [sample(50, a) for _ in range(20)] == [sample(50, b) for _ in range(20)]
    assert InsecureEntropySource().seed == DEFAULT_SEED


def test_secure_source_failure_raises_entropy_unavailable(monkeypatch) -> None:
    def broken_urandom(n: int) -> bytes:
        raise NotImplementedError("no entropy source")

    monkeypatch.setattr(sampler.os, "urandom", broken_urandom)

    with pytest.raises(EntropyUnavailable) as excinfo:
        sample(5, SecureEntropySource())
    assert isinstance(excinfo.value.__cause__, NotImplementedError)


def test_secure_source_draw_respects_width() -> None:
    source = SecureEntropySource()
    for _ in range(50):
        assert 0 <= source.draw(16) < 2 ** 16
        assert 0 <= source.draw(12) < 2 ** 12
