#!/usr/bin/env python3
"""Validate stored puzzle bundles offline."""

from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from artifacts import artifact_store
from contracts import check_bundle
from contracts.bundle import BUNDLE_TYPE
from ports import solve_game_id


def _check(path: Path) -> list[str]:
    payload = json.loads(path.read_text("utf-8"))
    problems: list[str] = []

    report = check_bundle(payload)
    problems.extend(f"{issue.path}: {issue.code}" for issue in report.errors)
    if payload.get("artifact_id") != path.stem:
        problems.append("file name does not match artifact_id")
    elif artifact_store.compute_artifact_id(payload) != path.stem:
        problems.append("content hash does not match artifact_id")

    if report.ok:
        verdict = solve_game_id(payload["game_id"])
        if verdict["status"] != payload["verdict"]:
            problems.append(f"stored verdict {payload['verdict']} but solver says {verdict['status']}")
        elif verdict["solution"] != payload["solution"]:
            problems.append("solver solution differs from stored solution")
    return problems


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    root = Path(args[0]) if args else artifact_store.artifact_root()
    bundle_dir = root / BUNDLE_TYPE

    failures: list[str] = []
    checked = 0
    for path in sorted(bundle_dir.glob("*.json")):
        checked += 1
        failures.extend(f"{path.name}: {problem}" for problem in _check(path))

    if failures:
        for line in failures:
            print(line)
        return 1

    print(f"All {checked} stored bundles are valid.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
