"""Canonical storage for generated puzzle bundles."""

from __future__ import annotations

import copy
import hashlib
import json
import math
import unicodedata
from pathlib import Path
from typing import Any, Dict

from contracts.bundle import BUNDLE_TYPE, assert_valid_bundle
from project_config import get_section, resolve_path


def artifact_root() -> Path:
    """Directory configured under ``[artifacts] root``."""

    return resolve_path(get_section("artifacts.root", "artifacts"))


def _normalize(obj: Any) -> Any:
    """Return a deep-normalised structure suitable for canonical JSON."""

    if isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in sorted(obj.items(), key=lambda item: str(item[0]))}
    if isinstance(obj, (list, tuple)):
        return [_normalize(item) for item in obj]
    if isinstance(obj, str):
        return unicodedata.normalize("NFC", obj)
    if isinstance(obj, float) and not math.isfinite(obj):
        raise ValueError("Non-finite numbers are not allowed in artifacts")
    return obj


def canonicalize(obj: Dict[str, Any]) -> bytes:
    """Serialise *obj* into canonical JSON bytes.

    Keys are sorted, strings are NFC-normalised and no insignificant
    whitespace is emitted.
    """

    normalised = _normalize(obj)
    return json.dumps(normalised, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_artifact_id(obj: Dict[str, Any]) -> str:
    """Hash the canonical form of *obj* without its ``artifact_id`` field."""

    base = {k: v for k, v in obj.items() if k != "artifact_id"}
    digest = hashlib.sha256(canonicalize(base)).hexdigest()
    return f"sha256-{digest}"


def save_artifact(obj: Dict[str, Any], *, root: Path | None = None) -> str:
    """Validate and persist a bundle, returning its identifier.

    Bundles land in ``<root>/<type>/<artifact_id>.json``.  The identifier
    is derived from the content, so saving the same bundle twice is
    idempotent.
    """

    if not isinstance(obj, dict):
        raise TypeError("Artifact must be a mapping")

    artifact_copy: Dict[str, Any] = copy.deepcopy(obj)
    artifact_id = compute_artifact_id(artifact_copy)
    existing_id = artifact_copy.get("artifact_id")
    if existing_id is not None and existing_id != artifact_id:
        raise ValueError("Provided artifact_id does not match canonical hash")
    artifact_copy["artifact_id"] = artifact_id

    artifact_type = artifact_copy.get("type")
    if not isinstance(artifact_type, str) or not artifact_type:
        raise ValueError("Artifact type must be a non-empty string")
    if artifact_type == BUNDLE_TYPE:
        assert_valid_bundle(artifact_copy)

    target_dir = (root or artifact_root()) / artifact_type
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / f"{artifact_id}.json").write_bytes(canonicalize(artifact_copy))

    obj["artifact_id"] = artifact_id
    return artifact_id


def load_artifact(artifact_id: str, *, root: Path | None = None) -> Dict[str, Any]:
    """Load and return an artifact by its identifier."""

    if not artifact_id.startswith("sha256-"):
        raise ValueError("Artifact identifier must start with 'sha256-'")
    base = root or artifact_root()
    for type_dir in sorted(base.glob("*")):
        if not type_dir.is_dir():
            continue
        candidate = type_dir / f"{artifact_id}.json"
        if candidate.exists():
            return json.loads(candidate.read_text("utf-8"))
    raise FileNotFoundError(f"Artifact '{artifact_id}' was not found in the store")


__all__ = [
    "artifact_root",
    "canonicalize",
    "compute_artifact_id",
    "load_artifact",
    "save_artifact",
]
