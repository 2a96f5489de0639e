# file: tests/test_cli_io.py
from __future__ import annotations

import builtins
from pathlib import Path
from typing import List

import pytest

from shuffle_engine import cli_io
from shuffle_engine.settings import SettingLimits


def _scripted_input(monkeypatch, answers: List[str]) -> List[str]:
    prompts: List[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return answers.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)
    return prompts


def test_prompt_setting_shows_name_current_value_and_bounds(monkeypatch):
    prompts = _scripted_input(monkeypatch, ["100"])
    assert cli_io.prompt_setting("num_cards", 52) == 100
    assert prompts == ["Number of cards [52] (>=1 and <=10000): "]


def test_prompt_setting_keeps_current_on_enter(monkeypatch):
    _scripted_input(monkeypatch, [""])
    assert cli_io.prompt_setting("columns", 4) == 4


def test_prompt_setting_reports_the_named_limit(monkeypatch, capsys):
    _scripted_input(monkeypatch, ["eleven", "11", "0", "3"])

    assert cli_io.prompt_setting("rows", 2) == 3

    out = capsys.readouterr().out
    assert "Mat rows must be a whole number." in out
    assert "Mat rows is 11, allowed values are 1 to 10." in out
    assert "Mat rows is 0, allowed values are 1 to 10." in out


def test_prompt_setting_uses_host_limits(monkeypatch, capsys):
    limits = SettingLimits(instruction_rows_min=2, instruction_rows_max=4)
    prompts = _scripted_input(monkeypatch, ["1", "4"])

    assert cli_io.prompt_setting("instruction_rows", 2, limits) == 4
    assert prompts[0] == "Instruction rows [2] (>=2 and <=4): "
    assert "Instruction rows is 1, allowed values are 2 to 4." in capsys.readouterr().out


@pytest.mark.parametrize(
    "key, position, expected",
    [
        ("", 0, 1),
        ("n", 1, 2),
        ("N", 2, 2),
        ("p", 2, 1),
        ("p", 0, 0),
        ("b", 2, 0),
        ("q", 1, None),
    ],
)
def test_pager_step_moves_and_clamps(monkeypatch, key: str, position: int, expected) -> None:
    _scripted_input(monkeypatch, [key])
    assert cli_io.pager_step(position, page_count=3) == expected


def test_pager_step_prompt_and_unknown_key(monkeypatch, capsys):
    prompts = _scripted_input(monkeypatch, ["x", "q"])
    assert cli_io.pager_step(0, page_count=5) is None
    assert prompts[0] == "Page 1 of 5. " + cli_io.PAGER_PROMPT
    assert "Type N, P, B or Q." in capsys.readouterr().out


def test_ask_output_path_declines_by_default(monkeypatch):
    prompts = _scripted_input(monkeypatch, [""])
    assert cli_io.ask_output_path("instructions.txt") is None
    assert len(prompts) == 1


def test_ask_output_path_uses_default_file(monkeypatch):
    prompts = _scripted_input(monkeypatch, ["maybe", "y", ""])
    assert cli_io.ask_output_path("instructions.txt") == Path("instructions.txt")
    assert prompts[-1] == "Output file [instructions.txt]: "


def test_ask_output_path_takes_typed_file(monkeypatch, tmp_path: Path):
    target = tmp_path / "deal.txt"
    _scripted_input(monkeypatch, ["yes", f"  {target}  "])
    assert cli_io.ask_output_path("instructions.txt") == target


def test_eof_is_reported_as_runtime_error(monkeypatch):
    def fake_input(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)
    with pytest.raises(RuntimeError):
        cli_io.prompt_setting("num_cards", 52)
