"""Puzzle parameters and the grid direction table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from contracts.errors import ParamsError

SUPPORTED_SIZE = (4, 4, 4)

_PARAMS_PATTERN = re.compile(r"^(?P<w>\d+)(?:x(?P<h>\d+))?(?:n(?P<n>\d+))?")


def all_bits(n: int) -> int:
    """Return the bitmask with the lowest ``n`` bits set."""

    return (1 << n) - 1


class Direction(NamedTuple):
    """One of the four grid directions a clue can point in."""

    flag: int
    opposite: int
    dx: int
    dy: int
    arrow: str
    letter: str


F_ADJ_UP = 1
F_ADJ_RIGHT = 2
F_ADJ_DOWN = 4
F_ADJ_LEFT = 8

DIRECTIONS: Tuple[Direction, ...] = (
    Direction(F_ADJ_UP, F_ADJ_DOWN, 0, -1, "^", "U"),
    Direction(F_ADJ_RIGHT, F_ADJ_LEFT, 1, 0, ">", "R"),
    Direction(F_ADJ_DOWN, F_ADJ_UP, 0, 1, "v", "D"),
    Direction(F_ADJ_LEFT, F_ADJ_RIGHT, -1, 0, "<", "L"),
)

LETTER_FLAGS = {d.letter: d.flag for d in DIRECTIONS}


@dataclass(frozen=True)
class GameParams:
    """Grid width, height and universe size."""

    w: int = 4
    h: int = 4
    n: int = 4

    @property
    def size(self) -> int:
        return self.w * self.h

    @property
    def n2(self) -> int:
        return 1 << self.n


def default_params() -> GameParams:
    return GameParams()


def decode_params(text: str) -> GameParams:
    """Parse ``"<w>[x<h>][n<n>]"``.

    A single number sets both dimensions and a missing ``n`` keeps the
    default universe size.
    """

    match = _PARAMS_PATTERN.match(text.strip())
    if match is None:
        raise ParamsError(f"Unable to parse parameters {text!r}")
    w = int(match.group("w"))
    h = int(match.group("h")) if match.group("h") is not None else w
    n = int(match.group("n")) if match.group("n") is not None else default_params().n
    return GameParams(w=w, h=h, n=n)


def encode_params(params: GameParams) -> str:
    return f"{params.w}x{params.h}n{params.n}"


def validate_params(params: GameParams) -> Optional[str]:
    """Return a reason string when ``params`` are unsupported, else ``None``."""

    if (params.w, params.h, params.n) != SUPPORTED_SIZE:
        return "Currently only 4x4 puzzles are supported"
    return None


def split_game_id(game_id: str) -> Tuple[GameParams, Optional[str]]:
    """Split ``"4x4n4:<desc>"`` into parameters and the optional description."""

    head, sep, desc = game_id.partition(":")
    params = decode_params(head)
    return params, (desc if sep else None)


__all__ = [
    "DIRECTIONS",
    "Direction",
    "F_ADJ_DOWN",
    "F_ADJ_LEFT",
    "F_ADJ_RIGHT",
    "F_ADJ_UP",
    "GameParams",
    "LETTER_FLAGS",
    "SUPPORTED_SIZE",
    "all_bits",
    "decode_params",
    "default_params",
    "encode_params",
    "split_game_id",
    "validate_params",
]
