# tests/test_sampler_bias_check.py
from __future__ import annotations

import pytest

import sampler_bias_check as sbc
from shuffle_engine.sampler import InsecureEntropySource


def test_run_bias_check_counts_every_draw() -> None:
    counts = sbc.run_bias_check(5, 400, InsecureEntropySource())

    assert counts.trials == 400
    for bound in range(1, 5):
        assert sum(counts.return_range[bound]) == 400
        assert sum(counts.rejections[bound]) == 400
        # Nothing outside [0, bound] is ever sampled.
        assert sum(counts.return_range[bound][bound + 1:]) == 0
    for position in range(5):
        assert sum(counts.position_value[position]) == 400


def test_run_bias_check_needs_two_cards() -> None:
    with pytest.raises(ValueError):
        sbc.run_bias_check(1, 10)


def test_chi_square() -> None:
    assert sbc.chi_square([10, 10, 10]) == 0.0
    assert sbc.chi_square([]) == 0.0
    assert sbc.chi_square([20, 0]) == pytest.approx(20.0)


def test_main_prints_report(capsys) -> None:
    sbc.main(["4", "50", "--insecure"])
    out = capsys.readouterr().out
    assert "SAMPLER BIAS CHECK — 4 cards, 50 shuffles" in out
    assert "Rejections per bound" in out
