"""Player edits and solution replay.

Edits are encoded as ``"<kind><pos>,<bit>"`` where ``kind`` is ``K``
(bit forced present), ``C`` (bit excluded) or ``U`` (bit unknown).  A
solved grid is replayed with ``"S"`` followed by a ``known,mask`` pair per
cell.  Applying a move never mutates its input; rejected moves return
``None``.
"""

from __future__ import annotations

import re
from typing import Optional

from .state import GridState
from .validator import Status, validate

KNOWN = "K"
CLEARED = "C"
UNKNOWN = "U"
EDIT_KINDS = (KNOWN, CLEARED, UNKNOWN)

_EDIT_PATTERN = re.compile(r"^([KCU])(-?[0-9]+),(-?[0-9]+)$")
_FIELD_PATTERN = re.compile(r"[0-9]+", re.ASCII)

_PRIMARY_CYCLE = {UNKNOWN: KNOWN, KNOWN: CLEARED, CLEARED: UNKNOWN}
_SECONDARY_CYCLE = {UNKNOWN: CLEARED, CLEARED: KNOWN, KNOWN: UNKNOWN}


def encode_edit(kind: str, pos: int, bit: int) -> str:
    if kind not in EDIT_KINDS:
        raise ValueError(f"Unsupported edit kind: {kind!r}")
    return f"{kind}{pos},{bit}"


def bit_kind(state: GridState, pos: int, bit: int) -> str:
    """Current player-visible state of one bit of one cell."""

    flag = 1 << bit
    if state.known[pos] & flag:
        return KNOWN
    if state.mask[pos] & flag:
        return UNKNOWN
    return CLEARED


def next_edit(state: GridState, pos: int, bit: int, action: str) -> Optional[str]:
    """Translate a click on one bit into an edit, or ``None`` for no effect.

    ``primary`` cycles unknown -> known -> excluded, ``secondary`` runs the
    cycle the other way and ``clear`` resets the bit to unknown.
    """

    if not 0 <= pos < state.size or not 0 <= bit < state.n:
        return None
    if state.given[pos]:
        return None

    old = bit_kind(state, pos, bit)
    if action == "primary":
        new = _PRIMARY_CYCLE[old]
    elif action == "secondary":
        new = _SECONDARY_CYCLE[old]
    elif action == "clear":
        new = UNKNOWN
    else:
        new = old

    if new == old:
        return None
    return encode_edit(new, pos, bit)


def encode_solution(state: GridState) -> str:
    return "S" + ",".join(f"{state.known[i]},{state.mask[i]}" for i in range(state.size))


def _apply_solution(state: GridState, move: str) -> Optional[GridState]:
    parts = move[1:].split(",")
    if len(parts) != 2 * state.size:
        return None
    if not all(_FIELD_PATTERN.fullmatch(part) for part in parts):
        return None
    numbers = [int(part) for part in parts]
    if any(number > state.all_bits for number in numbers):
        return None
    ret = state.copy()
    for pos in range(state.size):
        ret.known[pos] = numbers[2 * pos]
        ret.mask[pos] = numbers[2 * pos + 1]
    return ret


def _apply_edit(state: GridState, move: str) -> Optional[GridState]:
    match = _EDIT_PATTERN.match(move)
    if match is None:
        return None
    kind, pos, bit = match.group(1), int(match.group(2)), int(match.group(3))
    if not 0 <= pos < state.size or not 0 <= bit < state.n:
        return None
    if state.given[pos]:
        return None

    flag = 1 << bit
    ret = state.copy()
    if kind == KNOWN:
        ret.known[pos] |= flag
        ret.mask[pos] |= flag
    elif kind == CLEARED:
        ret.known[pos] &= ~flag
        ret.mask[pos] &= ~flag
    else:
        ret.known[pos] &= ~flag
        ret.mask[pos] |= flag

    if validate(ret).status is Status.COMPLETE:
        ret.completed = True
    return ret


def execute_move(state: GridState, move: str) -> Optional[GridState]:
    """Apply ``move`` to a copy of ``state``; ``None`` when it is rejected."""

    if not move:
        return None
    if move[0] == "S":
        return _apply_solution(state, move)
    return _apply_edit(state, move)


__all__ = [
    "CLEARED",
    "EDIT_KINDS",
    "KNOWN",
    "UNKNOWN",
    "bit_kind",
    "encode_edit",
    "encode_solution",
    "execute_move",
    "next_edit",
]
