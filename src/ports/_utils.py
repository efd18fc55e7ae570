"""Utility helpers for port facades."""

from __future__ import annotations

import os
from typing import Dict, Mapping, Tuple

_ENV_PREFIXES: Tuple[str, ...] = ("SUBSETS_", "CLI_SUBSETS_")


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Collect the project's environment switches, with ``overrides`` on top.

    Only ``SUBSETS_*`` and ``CLI_SUBSETS_*`` variables are taken from the
    process environment; overrides are merged verbatim.
    """

    env: Dict[str, str] = {
        str(k): str(v) for k, v in os.environ.items() if str(k).startswith(_ENV_PREFIXES)
    }
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


__all__ = ["build_env"]
