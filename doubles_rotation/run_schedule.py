"""
Build a doubles rotation from the command line and print it as plain text
(or JSON), followed by the fairness diagnostics.
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path

from doubles_rotation import config
from doubles_rotation.adapters.export import build_copy_text, format_diagnostics, summarize_diagnostics
from doubles_rotation.adapters.parsing import generate_seed, parse_players
from doubles_rotation.adapters.sharing import ShareConfig, ShareTokenError, decode_share_token, encode_share_token
from doubles_rotation.engine.errors import ScheduleInputError
from doubles_rotation.engine.orchestrator import build_schedule
from doubles_rotation.engine.persistence import schedule_to_dict
from doubles_rotation.engine.schemas import ScheduleOptions
from doubles_rotation.logging_config import setup_logging


def _options_from_args(args: argparse.Namespace) -> ScheduleOptions:
    opts = config.default_options()
    if args.weight_team is not None:
        opts.weight_team = args.weight_team
    if args.weight_opponent is not None:
        opts.weight_opponent = args.weight_opponent
    if args.weight_play is not None:
        opts.weight_play = args.weight_play
    if args.beam_width is not None:
        opts.beam_width = args.beam_width
    if args.partner_k is not None:
        opts.partner_k = args.partner_k
    if args.linear_repeats:
        opts.square_repeats = False
    if args.allow_back_to_back:
        opts.avoid_back_to_back = False
    return opts


def _players_from_args(args: argparse.Namespace) -> list[str]:
    if args.players_file:
        path = Path(args.players_file)
        if not path.exists():
            raise SystemExit(f"Players file not found: {path}")
        return parse_players(path.read_text(encoding="utf-8"))
    return parse_players(args.players)


def run(
    players: list[str],
    courts: int,
    rounds: int,
    seed: str,
    options: ScheduleOptions,
    as_json: bool = False,
    share: bool = False,
) -> str:
    try:
        schedule = build_schedule(players, courts, rounds, seed, options)
    except ScheduleInputError as e:
        raise SystemExit(str(e))

    if as_json:
        return json.dumps(schedule_to_dict(schedule), indent=2)

    header = f"Players: {len(schedule.players)} · Courts: {courts} (up to {schedule.max_concurrent_matches}) · Rounds: {rounds}"
    if schedule.seed:
        header += f" · Seed: {schedule.seed}"
    parts = [header]
    parts.extend(f"Warning: {w}" for w in schedule.warnings)
    parts.append("")
    parts.append(build_copy_text(schedule))
    parts.append("")
    parts.append(format_diagnostics(summarize_diagnostics(schedule)))
    if share:
        token = encode_share_token(
            ShareConfig(players=players, courts=courts, rounds=rounds, seed=seed, options=options, auto=True)
        )
        parts.append("")
        parts.append(f"Share token: {token}")
    return "\n".join(parts)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Schedule 2v2 rotations across courts and rounds.")
    parser.add_argument("--players", default="", help="Comma or newline separated player names")
    parser.add_argument("--players-file", default=None, help="File with one player per line (commas also accepted)")
    parser.add_argument("--token", default=None, help="Load the whole configuration from a share token")
    parser.add_argument("--courts", type=int, default=1)
    parser.add_argument("--rounds", type=int, default=8)
    parser.add_argument("--seed", default=None, help="Seed text for reproducibility; a fresh one is generated if omitted")
    parser.add_argument("--weight-team", type=float, default=None)
    parser.add_argument("--weight-opponent", type=float, default=None)
    parser.add_argument("--weight-play", type=float, default=None)
    parser.add_argument("--beam-width", type=int, default=None)
    parser.add_argument("--partner-k", type=int, default=None)
    parser.add_argument("--linear-repeats", action="store_true", help="Penalize repeats linearly instead of squared")
    parser.add_argument("--allow-back-to-back", action="store_true", help="Disable the single-bench back-to-back guard")
    parser.add_argument("--json", action="store_true", help="Print the schedule as JSON")
    parser.add_argument("--share", action="store_true", help="Also print a share token for this configuration")
    parser.add_argument("--log-level", default="WARNING", help="Logs go to stdout; keep quiet by default")
    args = parser.parse_args(argv)

    setup_logging(args.log_level.upper())

    if args.token:
        try:
            cfg = decode_share_token(args.token)
        except ShareTokenError as e:
            raise SystemExit(str(e))
        players, courts, rounds, seed, options = cfg.players, cfg.courts, cfg.rounds, cfg.seed, cfg.options
    else:
        players = _players_from_args(args)
        courts, rounds = args.courts, args.rounds
        seed = args.seed.strip() if args.seed is not None else generate_seed()
        options = _options_from_args(args)

    print(run(players, courts, rounds, seed, options, as_json=args.json, share=args.share))


if __name__ == "__main__":
    main()
