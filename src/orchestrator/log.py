"""Append-only JSONL event log for generation runs.

Events are written to ``<events_dir>/<YYYYMMDD>/generate_NN.jsonl``.  A new
file is started once the active one reaches ``max_bytes``.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from project_config import get_section, resolve_path

__all__ = ["configure", "append_event", "current_log_path"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_LOCK = threading.Lock()
_LOG_DIR: Path | None = None
_MAX_BYTES: int | None = None
_CURRENT_PATH: Path | None = None


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> None:
    """Send all subsequent events to ``base_dir``."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH
    _LOG_DIR = Path(base_dir)
    _MAX_BYTES = max_bytes or _DEFAULT_MAX_BYTES
    _CURRENT_PATH = None


def _settings() -> tuple[Path, int]:
    if _LOG_DIR is None:
        configure(
            resolve_path(get_section("logging.events_dir", "logs/generator")),
            max_bytes=int(get_section("logging.max_bytes", _DEFAULT_MAX_BYTES)),
        )
    assert _LOG_DIR is not None and _MAX_BYTES is not None
    return _LOG_DIR, _MAX_BYTES


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _resolve_log_path() -> Path:
    global _CURRENT_PATH
    log_dir, max_bytes = _settings()
    date_dir = log_dir / _date_prefix()
    date_dir.mkdir(parents=True, exist_ok=True)

    if _CURRENT_PATH is not None and _CURRENT_PATH.parent == date_dir and _CURRENT_PATH.exists():
        if _CURRENT_PATH.stat().st_size < max_bytes:
            return _CURRENT_PATH

    counter = 0
    while True:
        candidate = date_dir / f"generate_{counter:02d}.jsonl"
        if not candidate.exists() or candidate.stat().st_size < max_bytes:
            _CURRENT_PATH = candidate
            return candidate
        counter += 1


def append_event(event: Dict[str, Any]) -> Path:
    """Append ``event`` to the active JSONL file and return the file path."""

    payload = dict(event)
    payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _resolve_log_path()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def current_log_path() -> Path | None:
    return _CURRENT_PATH
