"""Schema contract for exported puzzle bundles."""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping

import jsonschema

from .errors import BundleValidationError, ValidationIssue, ValidationReport, make_error

_REPO_ROOT = Path(__file__).resolve().parents[2]
_CONTRACT_ROOT = _REPO_ROOT / "PuzzleContracts"

BUNDLE_TYPE = "SubsetsPuzzle"
BUNDLE_SCHEMA_VERSION = "1.0.0"
BUNDLE_SCHEMA_PATH = "subsets_bundle.schema.json"


@lru_cache(maxsize=None)
def _read_schema(schema_path: str) -> Dict[str, Any]:
    if "://" in schema_path:
        raise ValueError("Remote schema paths are not permitted")

    resolved = (_CONTRACT_ROOT / schema_path).resolve()
    if not str(resolved).startswith(str(_CONTRACT_ROOT)):
        raise ValueError("Schema path escapes the contracts directory")
    return json.loads(resolved.read_text("utf-8"))


def load_schema(schema_path: str = BUNDLE_SCHEMA_PATH) -> Dict[str, Any]:
    """Return a private copy of a schema from the local ``PuzzleContracts`` tree."""

    return copy.deepcopy(_read_schema(schema_path))


@lru_cache(maxsize=None)
def _compiled(schema_path: str) -> jsonschema.protocols.Validator:
    schema = _read_schema(schema_path)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _json_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _semantic_checks(bundle: Mapping[str, Any]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    params = bundle.get("params")
    game_id = bundle.get("game_id")
    descriptor = bundle.get("descriptor")
    if isinstance(game_id, str) and game_id != f"{params}:{descriptor}":
        issues.append(make_error("bundle.game_id", "game_id must join params and descriptor", "$.game_id"))

    values = bundle.get("values")
    if isinstance(values, list) and sorted(values) != list(range(len(values))):
        issues.append(make_error("bundle.values", "values must use every subset exactly once", "$.values"))

    if isinstance(descriptor, str) and isinstance(values, list):
        cells = descriptor.split(",")
        if len(cells) != len(values):
            issues.append(make_error("bundle.cells", "descriptor and values disagree on cell count", "$.descriptor"))
        elif bundle.get("hidden") != sum(1 for cell in cells if cell.startswith("_")):
            issues.append(make_error("bundle.hidden", "hidden count does not match descriptor", "$.hidden"))
    return issues


def check_bundle(bundle: Mapping[str, Any]) -> ValidationReport:
    """Validate ``bundle`` against the JSON schema and cross-field rules."""

    validator = _compiled(BUNDLE_SCHEMA_PATH)
    errors = [
        make_error("schema.invalid", error.message, _json_path(error))
        for error in sorted(validator.iter_errors(bundle), key=_json_path)
    ]
    if not errors:
        errors.extend(_semantic_checks(bundle))
    return ValidationReport(ok=not errors, errors=errors, warnings=[])


def assert_valid_bundle(bundle: Mapping[str, Any]) -> None:
    report = check_bundle(bundle)
    if not report.ok:
        raise BundleValidationError(report)


__all__ = [
    "BUNDLE_SCHEMA_PATH",
    "BUNDLE_SCHEMA_VERSION",
    "BUNDLE_TYPE",
    "assert_valid_bundle",
    "check_bundle",
    "load_schema",
]
