"""Loading and emitting game descriptions.

A description holds one comma-separated field per cell in row-major
order.  A field is a decimal value for a given cell or ``_`` for an open
one, followed by the letters (``U``, ``R``, ``D``, ``L``) of the clues
leaving that cell.
"""

from __future__ import annotations

import re
from typing import Optional

from contracts.errors import DescriptorError

from .params import DIRECTIONS, LETTER_FLAGS, GameParams
from .state import GridState

_NUMBER = re.compile(r"[0-9]+")


def _parse_cells(state: GridState, desc: str) -> None:
    s = state.size
    full = state.all_bits
    length = len(desc)
    pos = 0
    i = 0

    while pos < length:
        if i >= s:
            raise DescriptorError("Too much data to fill grid")

        match = _NUMBER.match(desc, pos)
        if match is not None:
            num = int(match.group())
            if num > full:
                raise DescriptorError("Out-of-range number in game description")
            state.assign(i, num)
            state.given[i] = True
            pos = match.end()
        elif desc[pos] == "_":
            pos += 1
        else:
            raise DescriptorError("Expecting number in game description")

        while pos < length and desc[pos] in LETTER_FLAGS:
            state.clues[i] |= LETTER_FLAGS[desc[pos]]
            pos += 1
        i += 1

        if pos < length and desc[pos] != ",":
            if desc[pos].isalpha():
                raise DescriptorError("Unrecognised clue letter in game description")
            if i < s:
                raise DescriptorError("Missing separator")
        if pos < length and desc[pos] == ",":
            pos += 1

    if i < s:
        raise DescriptorError("Not enough data to fill grid")


def _check_clues(state: GridState) -> None:
    for i in range(state.size):
        for direction in DIRECTIONS:
            if not state.clues[i] & direction.flag:
                continue
            j = state.neighbour(i, direction)
            if j is None:
                raise DescriptorError("Flags go off grid")
            if state.clues[j] & direction.opposite:
                raise DescriptorError("Flags contradicting each other")


def load_game(params: GameParams, desc: str) -> GridState:
    """Build a :class:`GridState` from ``desc`` or raise :class:`DescriptorError`."""

    state = GridState.from_params(params)
    _parse_cells(state, desc)
    _check_clues(state)
    return state


def validate_desc(params: GameParams, desc: str) -> Optional[str]:
    """Return the reason ``desc`` is unusable, or ``None`` when it loads."""

    try:
        load_game(params, desc)
    except DescriptorError as exc:
        return exc.reason
    return None


def encode_desc(state: GridState) -> str:
    """Emit the description for the state's given cells and clues."""

    fields = []
    for i in range(state.size):
        field = str(state.known[i]) if state.given[i] else "_"
        field += "".join(d.letter for d in DIRECTIONS if state.clues[i] & d.flag)
        fields.append(field)
    return ",".join(fields)


__all__ = ["encode_desc", "load_game", "validate_desc"]
