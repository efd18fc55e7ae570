"""Command line front-end for generating and solving Subsets puzzles."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List

from contracts.errors import DescriptorError, ParamsError
from orchestrator.pipeline import default_params_text, run_batch, verify_and_store
from ports import generate, solve_game_id
from project_config import get_section


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)


def _build_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if getattr(args, "bidirectional_arcs", None) is not None:
        env["CLI_SUBSETS_BIDIRECTIONAL_ARCS"] = "1" if args.bidirectional_arcs else "0"
    return env


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def cmd_generate(args: argparse.Namespace) -> int:
    params = args.params or default_params_text()
    seed = args.seed or str(get_section("generator.default_seed", "subsets"))
    env = _build_env(args)
    payload = generate(params, seed=seed, profile=args.profile, env=env)
    if args.save:
        summary = verify_and_store(payload, profile=args.profile, env=env)
        payload["artifact_id"] = summary["artifact_id"]
    _emit(payload)
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    trace_level = args.trace_level or str(get_section("solver.trace_level", "none"))
    payload = solve_game_id(
        args.game_id,
        profile=args.profile,
        env=_build_env(args),
        trace_level=trace_level,
    )
    _emit(payload)
    return 0


def _iter_seeds(path: Path) -> Iterable[str]:
    for line in path.read_text().splitlines():
        value = line.strip()
        if not value or value.startswith("#"):
            continue
        yield value


def cmd_batch_seeds(args: argparse.Namespace) -> int:
    summaries = run_batch(
        _iter_seeds(Path(args.file)),
        params=args.params,
        save=args.save,
        profile=args.profile,
        env=_build_env(args),
    )
    _emit(summaries)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Log every solver deduction")
    common.add_argument("--profile", default=None, help="Feature flag profile")
    common.add_argument(
        "--bidirectional-arcs",
        dest="bidirectional_arcs",
        action="store_true",
        help="Prune candidates on both ends of every clue arrow",
    )
    common.add_argument(
        "--superset-arcs",
        dest="bidirectional_arcs",
        action="store_false",
        help="Prune candidates on the superset end only",
    )
    common.set_defaults(bidirectional_arcs=None)

    parser = argparse.ArgumentParser(description="Subsets puzzle generator and solver")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Generate one puzzle")
    gen.add_argument("--params", default=None, help="Game parameters, e.g. 4x4n4")
    gen.add_argument("--seed", default=None)
    gen.add_argument("--save", action="store_true", help="Verify and store the bundle")
    gen.set_defaults(func=cmd_generate)

    solve = sub.add_parser("solve", parents=[common], help="Solve a game id by deduction")
    solve.add_argument("game_id", help="'<params>:<description>'")
    solve.add_argument(
        "--trace-level",
        choices=("none", "steps"),
        default=None,
        help="Include the per-step rule trace in the output",
    )
    solve.set_defaults(func=cmd_solve)

    batch = sub.add_parser("batch-seeds", parents=[common], help="Run the pipeline for seeds from file")
    batch.add_argument("file")
    batch.add_argument("--params", default=None)
    batch.add_argument("--save", action="store_true")
    batch.set_defaults(func=cmd_batch_seeds)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return args.func(args)
    except (DescriptorError, ParamsError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
