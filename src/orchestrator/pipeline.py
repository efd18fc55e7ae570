"""Generate → verify → store pipeline for Subsets puzzles."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from artifacts import artifact_store
from contracts.bundle import BUNDLE_SCHEMA_VERSION, BUNDLE_TYPE, assert_valid_bundle
from ports import generator_port, solver_port
from project_config import get_section

from . import log as event_log

_LOGGER = logging.getLogger(__name__)

_GENERATE_STAGE = "stage.generate"


def derive_seed(root_seed: str, stage: str, index: int) -> str:
    """Derive a deterministic child seed from the root seed and stage context."""

    material = "|".join([root_seed, stage, str(index)])
    return uuid.uuid5(uuid.NAMESPACE_URL, material).hex


def default_params_text() -> str:
    return str(get_section("PUZZLE.params", "4x4n4"))


def build_bundle(generated: Mapping[str, Any], verdict: str) -> Dict[str, Any]:
    """Wrap a generator payload into a schema-conformant bundle."""

    bundle: Dict[str, Any] = {
        "type": BUNDLE_TYPE,
        "schema_version": BUNDLE_SCHEMA_VERSION,
        "params": generated["params"],
        "seed": generated["seed"],
        "descriptor": generated["descriptor"],
        "game_id": generated["game_id"],
        "hidden": generated["hidden"],
        "values": list(generated["values"]),
        "solution": generated["solution"],
        "verdict": verdict,
    }
    assert_valid_bundle(bundle)
    return bundle


def run_pipeline(
    seed: str,
    *,
    params: Optional[str] = None,
    save: bool = True,
    artifact_root: Path | None = None,
    profile: Optional[str] = None,
    env: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Generate one puzzle, re-solve it from its descriptor and store it."""

    params_text = params or default_params_text()
    generated = generator_port.generate(params_text, seed=seed, profile=profile, env=env)
    return verify_and_store(
        generated,
        save=save,
        artifact_root=artifact_root,
        profile=profile,
        env=env,
    )


def verify_and_store(
    generated: Mapping[str, Any],
    *,
    save: bool = True,
    artifact_root: Path | None = None,
    profile: Optional[str] = None,
    env: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Check a generator payload against the solver, then store and log it.

    Raises :class:`RuntimeError` when the published descriptor does not
    solve back to the generated grid.
    """

    seed = generated["seed"]
    verdict = solver_port.solve_game_id(generated["game_id"], profile=profile, env=env)

    if verdict["status"] != "complete" or verdict["solution"] != generated["solution"]:
        raise RuntimeError(
            f"Puzzle {generated['game_id']} did not solve back to its generated grid "
            f"(status={verdict['status']})"
        )

    bundle = build_bundle(generated, verdict["status"])
    artifact_id: Optional[str] = None
    if save:
        artifact_id = artifact_store.save_artifact(bundle, root=artifact_root)

    summary: Dict[str, Any] = {
        "seed": seed,
        "params": generated["params"],
        "game_id": generated["game_id"],
        "hidden": generated["hidden"],
        "steps": verdict["steps"],
        "verdict": verdict["status"],
        "artifact_id": artifact_id,
    }
    event_log.append_event({"event": "generate", **summary})
    _LOGGER.info("pipeline seed=%s game_id=%s artifact=%s", seed, generated["game_id"], artifact_id)
    return summary


def run_batch(
    seeds: Iterable[str],
    *,
    params: Optional[str] = None,
    save: bool = True,
    artifact_root: Path | None = None,
    profile: Optional[str] = None,
    env: Mapping[str, str] | None = None,
) -> List[Dict[str, Any]]:
    """Run :func:`run_pipeline` once per non-blank seed, in order."""

    results: List[Dict[str, Any]] = []
    for raw in seeds:
        seed = raw.strip()
        if not seed:
            continue
        results.append(
            run_pipeline(
                seed,
                params=params,
                save=save,
                artifact_root=artifact_root,
                profile=profile,
                env=env,
            )
        )
    return results


def derived_seeds(root_seed: str, count: int, *, stage: str = _GENERATE_STAGE) -> List[str]:
    return [derive_seed(root_seed, stage, index) for index in range(count)]


__all__ = [
    "build_bundle",
    "default_params_text",
    "derive_seed",
    "derived_seeds",
    "run_batch",
    "run_pipeline",
    "verify_and_store",
]
