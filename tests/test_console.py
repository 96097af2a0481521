from __future__ import annotations

import builtins
from pathlib import Path
from typing import Iterable

import pytest

from flip7.console.main import main
from flip7.console.prompts import ConsolePrompter
from flip7.console.render import ConsoleReporter, describe
from flip7.engine.player import PlayerState
from flip7.engine.types import double
from flip7.paths import get_paths
from flip7.services.content import ContentService


def _prompter(answers: Iterable[str]) -> tuple[ConsolePrompter, list[str]]:
    it = iter(answers)
    out: list[str] = []
    return ConsolePrompter(input_fn=lambda _prompt: next(it), output_fn=out.append), out


def test_player_count_reprompts_until_valid() -> None:
    prompter, out = _prompter(["", "one", "1", "3"])
    assert prompter.ask_player_count() == 3
    assert len(out) == 3


def test_player_names_default_and_unique() -> None:
    prompter, out = _prompter(["Ana", "", "Ana", "Cy"])
    assert prompter.ask_player_names(3) == ["Ana", "P2", "Cy"]
    assert out == ["Ana is already taken."]


def test_hit_or_stay_reprompts() -> None:
    player = PlayerState(name="Ana")
    player.add_number(4)
    player.add_modifier(double())
    prompter, out = _prompter(["x", "", "HIT"])
    assert prompter.ask_hit_or_stay(player, 8) == "hit"
    assert "Numbers: [4] | Modifiers: [x2] | Second chance: no" in out
    assert "Staying now banks 8 points." in out

    prompter, _ = _prompter(["s"])
    assert prompter.ask_hit_or_stay(player, 8) == "stay"


def test_choose_player_menu() -> None:
    players = [PlayerState(name="Ben"), PlayerState(name="Cy")]
    prompter, out = _prompter(["0", "3", "two", "2"])
    assert prompter.choose_player(players, "Give it away") == 1
    assert out[:3] == ["Give it away", "  1) Ben", "  2) Cy"]
    assert out.count("Invalid choice.") == 3


def test_choose_player_with_no_candidates() -> None:
    prompter, out = _prompter([])
    assert prompter.choose_player([], "nobody") is None
    assert out == []


def test_reporter_renders_events() -> None:
    lines: list[str] = []
    reporter = ConsoleReporter(output_fn=lines.append)
    reporter.log("DRAW", {"player": "Ana", "card": "#7", "phase": "hit"})
    reporter.log("CHOICE", {"player": "Ana", "choice": "hit"})
    reporter.log("ROUND_SCORE", {"player": "Ana", "gained": 12, "total": 40})
    assert lines == ["-> Ana draws: #7", "Ana scores 12 points (total = 40)"]


def test_every_game_end_line_names_winners() -> None:
    lines = describe("GAME_END", {"winners": ["Ana", "Cy"], "final_scores": [], "rounds": 9})
    assert lines[-1] == "Winner(s): Ana, Cy (best final score)"


def test_main_plays_a_full_game(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    def fake_input(prompt: str) -> str:
        return "1" if "number" in prompt else "s"

    monkeypatch.setattr(builtins, "input", fake_input)
    code = main(["--seed", "7", "--names", "Ana", "Ben", "--target-score", "30", "--log-dir", str(tmp_path)])
    assert code == 0

    logs = list(tmp_path.glob("game-*.jsonl"))
    assert len(logs) == 1
    paths = get_paths()
    assert ContentService(paths.data_dir, paths.schema_dir).validate_event_log(logs[0]) > 0

    out = capsys.readouterr().out
    assert "=== GAME OVER ===" in out
    assert "Winner(s):" in out


def test_main_prompts_for_setup(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["2", "Ana", "Ben"])

    def fake_input(prompt: str) -> str:
        if prompt.startswith(("Number of players", "Name of player")):
            return next(answers)
        return "1" if "number" in prompt else "s"

    monkeypatch.setattr(builtins, "input", fake_input)
    assert main(["--seed", "3", "--target-score", "10", "--log-dir", str(tmp_path)]) == 0


def test_main_validate_log(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.jsonl"
    bad.write_text('{"ts": "x", "type": "DRAW", "payload": {}}\n', encoding="utf-8")
    assert main(["--validate-log", str(bad)]) == 1
    assert "error:" in capsys.readouterr().err


def test_main_reports_closed_input(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def closed(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr(builtins, "input", closed)
    assert main(["--log-dir", str(tmp_path)]) == 1


def test_main_rejects_single_name() -> None:
    with pytest.raises(SystemExit):
        main(["--names", "Solo"])


def test_main_validate_log_rejects_non_utf8(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "binary.jsonl"
    bad.write_bytes(b"\xff\xfe\x00garbage\n")
    assert main(["--validate-log", str(bad)]) == 1
    assert "error:" in capsys.readouterr().err


def test_main_exits_nonzero_when_event_log_unwritable(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    code = main(["--seed", "1", "--names", "Ana", "Ben", "--log-dir", str(blocker / "sub")])
    assert code == 1
    assert capsys.readouterr().err.startswith("error:")


def test_main_rejects_player_count_that_disagrees_with_names() -> None:
    with pytest.raises(SystemExit):
        main(["--players", "3", "--names", "Ana", "Ben"])


@pytest.mark.parametrize("target", ["0", "-5"])
def test_main_rejects_target_score_below_one(target: str) -> None:
    with pytest.raises(SystemExit):
        main(["--target-score", target, "--names", "Ana", "Ben"])
