from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from flip7.engine.deck import DeckInvariantError
from flip7.engine.game import GameConfig, new_game, run_game
from flip7.paths import get_paths
from flip7.services.content import ContentError, ContentService
from flip7.services.telemetry import TelemetryService, log_filename

from .prompts import ConsolePrompter
from .render import ConsoleReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flip7", description="Flip Seven for a shared terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed (random when omitted)")
    parser.add_argument("--target-score", type=int, default=GameConfig.target_score)
    parser.add_argument("--log-dir", type=Path, default=None, help="Event log directory (default ./logs)")
    parser.add_argument("--players", type=int, default=None, help="Number of players (skips the prompt)")
    parser.add_argument("--names", nargs="+", default=None, help="Player names (skips setup prompts)")
    parser.add_argument("--validate-log", type=Path, default=None, help="Validate an event log and exit")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = GameConfig(target_score=args.target_score)

    if args.players is not None and args.players < cfg.min_players:
        parser.error(f"--players must be at least {cfg.min_players}")
    if args.target_score < 1:
        parser.error("--target-score must be at least 1")
    if args.players is not None and args.names is not None and args.players != len(args.names):
        parser.error(f"--players {args.players} does not match {len(args.names)} --names")
    if args.names is not None:
        if len(args.names) < cfg.min_players:
            parser.error(f"--names needs at least {cfg.min_players} names")
        if len(set(args.names)) != len(args.names):
            parser.error("--names must be unique")

    paths = get_paths(args.log_dir)
    content = ContentService(paths.data_dir, paths.schema_dir)
    prompter = ConsolePrompter()

    try:
        if args.validate_log is not None:
            count = content.validate_event_log(args.validate_log)
            print(f"{args.validate_log}: {count} valid records")
            return 0

        composition = content.load_deck_composition()
        print("=== FLIP 7 (text mode) ===")
        names = args.names or prompter.ask_player_names(args.players or prompter.ask_player_count(cfg.min_players))

        log_path = paths.log_dir / log_filename()
        print(f"All events are logged to: {log_path}")
        sink = TelemetryService(log_path, ConsoleReporter())

        state = new_game(names, seed=args.seed, config=cfg, sink=sink, composition=composition)
        run_game(state, prompter, prompter)
    except KeyboardInterrupt:
        print()
        return 130
    except EOFError:
        print("error: input closed", file=sys.stderr)
        return 1
    except (DeckInvariantError, ContentError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
