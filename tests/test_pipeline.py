from __future__ import annotations

import json

import pytest

from artifacts import artifact_store
from contracts import assert_valid_bundle
from orchestrator import log as event_log
from orchestrator.pipeline import derive_seed, derived_seeds, run_batch, run_pipeline, verify_and_store
from ports import generate


@pytest.fixture(autouse=True)
def isolated_log(tmp_path):
    event_log.configure(tmp_path / "logs")
    yield tmp_path / "logs"


def _events(log_dir):
    lines = []
    for path in sorted(log_dir.glob("*/generate_*.jsonl")):
        lines.extend(json.loads(line) for line in path.read_text("utf-8").splitlines())
    return lines


def test_derive_seed_is_stable_and_distinct() -> None:
    assert derive_seed("root", "stage.generate", 0) == derive_seed("root", "stage.generate", 0)
    assert derive_seed("root", "stage.generate", 0) != derive_seed("root", "stage.generate", 1)
    assert len(derive_seed("root", "stage.generate", 0)) == 32
    assert derived_seeds("root", 2) == [
        derive_seed("root", "stage.generate", 0),
        derive_seed("root", "stage.generate", 1),
    ]


def test_run_pipeline_stores_a_verified_bundle(tmp_path, isolated_log) -> None:
    store = tmp_path / "store"
    summary = run_pipeline("pipeline-seed", artifact_root=store)
    assert summary["verdict"] == "complete"
    assert summary["params"] == "4x4n4"
    assert summary["artifact_id"].startswith("sha256-")

    bundle = artifact_store.load_artifact(summary["artifact_id"], root=store)
    assert_valid_bundle(bundle)
    assert bundle["game_id"] == summary["game_id"]
    assert bundle["seed"] == "pipeline-seed"

    events = _events(isolated_log)
    assert len(events) == 1
    assert events[0]["event"] == "generate"
    assert events[0]["artifact_id"] == summary["artifact_id"]
    assert "ts" in events[0]


def test_same_seed_same_artifact(tmp_path) -> None:
    first = run_pipeline("repeat", artifact_root=tmp_path / "a")
    second = run_pipeline("repeat", artifact_root=tmp_path / "b")
    other = run_pipeline("other", artifact_root=tmp_path / "a")
    assert first["artifact_id"] == second["artifact_id"]
    assert first["artifact_id"] != other["artifact_id"]


def test_run_without_saving(tmp_path) -> None:
    summary = run_pipeline("no-save", save=False, artifact_root=tmp_path / "store")
    assert summary["artifact_id"] is None
    assert not (tmp_path / "store").exists()


def test_run_batch_skips_blank_seeds(isolated_log) -> None:
    results = run_batch(["one", "", "  ", "two"], save=False)
    assert [result["seed"] for result in results] == ["one", "two"]
    assert len(_events(isolated_log)) == 2


def test_event_log_rolls_over(tmp_path) -> None:
    event_log.configure(tmp_path / "roll", max_bytes=120)
    paths = {event_log.append_event({"event": "tick", "n": n}) for n in range(10)}
    assert len(paths) > 1
    assert event_log.current_log_path() in paths
    assert len(_events(tmp_path / "roll")) == 10


def test_verify_and_store_rejects_a_mismatched_solution(tmp_path, isolated_log) -> None:
    generated = generate("4x4n4", seed="mismatch")
    tampered = dict(generated, solution="S" + ",".join(["0,0"] * 16))
    with pytest.raises(RuntimeError):
        verify_and_store(tampered, artifact_root=tmp_path / "store")
    assert _events(isolated_log) == []

    summary = verify_and_store(generated, artifact_root=tmp_path / "store")
    assert summary["game_id"] == generated["game_id"]
    assert summary["verdict"] == "complete"
