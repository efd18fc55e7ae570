"""Runtime feature flag helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

__all__ = ["get_arc_consistency_feature", "is_bidirectional_arcs_enabled", "reload"]

_FEATURES_FILENAME = "config/features.toml"

_BIDIRECTIONAL_OVERRIDE_KEYS = (
    "CLI_SUBSETS_BIDIRECTIONAL_ARCS",
    "SUBSETS_BIDIRECTIONAL_ARCS",
)


def _features_path() -> Path:
    return Path(__file__).resolve().parents[1] / _FEATURES_FILENAME


@lru_cache(maxsize=1)
def _load_features() -> dict[str, Any]:
    path = _features_path()
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def reload() -> None:
    """Clear the cached feature configuration."""

    _load_features.cache_clear()


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def get_arc_consistency_feature(profile: str | None = None) -> dict[str, Any]:
    """Return the ``arc_consistency`` block merged with its profile overrides."""

    entry = _load_features().get("arc_consistency")
    merged: dict[str, Any] = {}
    if not isinstance(entry, dict):
        return merged

    merged.update({key: value for key, value in entry.items() if key != "by_profile"})
    by_profile = entry.get("by_profile")
    if profile and isinstance(by_profile, dict):
        profile_block = by_profile.get(profile.lower())
        if isinstance(profile_block, dict):
            merged.update(profile_block)
    return merged


def is_bidirectional_arcs_enabled(
    env: Mapping[str, str] | None = None, *, profile: str | None = None
) -> bool:
    """Return ``True`` when the solver should prune both sides of clue edges.

    Environment overrides are checked in order and the first parseable one
    wins over the TOML configuration.
    """

    enabled = _coerce_bool(get_arc_consistency_feature(profile).get("bidirectional")) or False

    if env:
        for key in _BIDIRECTIONAL_OVERRIDE_KEYS:
            override = _coerce_bool(env.get(key))
            if override is not None:
                return override

    return enabled
