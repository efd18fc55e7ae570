"""Plain-text rendering of a grid."""

from __future__ import annotations

from .params import F_ADJ_DOWN, F_ADJ_LEFT, F_ADJ_RIGHT, F_ADJ_UP
from .state import GridState

CELL_WIDTH = 2
CELL_HEIGHT = 2


def _glyph(state: GridState, i: int, bit: int) -> str:
    if bit >= state.n:
        return " "
    if state.known[i] & (1 << bit):
        return chr(ord("A") + bit)
    if not state.mask[i] & (1 << bit):
        return "."
    return "?"


def game_text_format(state: GridState) -> str:
    """Render every cell as a block of element letters with clue arrows between.

    Known elements print as their letter, excluded ones as ``.`` and
    undecided ones as ``?``.
    """

    w, h = state.w, state.h
    lines = []
    for y in range(h):
        for cy in range(CELL_HEIGHT):
            row = []
            for x in range(w):
                i = y * w + x
                row.extend(_glyph(state, i, cy * CELL_WIDTH + cx) for cx in range(CELL_WIDTH))
                if x < w - 1:
                    if cy != 0:
                        row.append(" ")
                    elif state.clues[i] & F_ADJ_RIGHT:
                        row.append(">")
                    elif state.clues[i + 1] & F_ADJ_LEFT:
                        row.append("<")
                    else:
                        row.append(" ")
            lines.append("".join(row))
        if y < h - 1:
            row = []
            for x in range(w):
                i = y * w + x
                if state.clues[i] & F_ADJ_DOWN:
                    row.append("v")
                elif state.clues[i + w] & F_ADJ_UP:
                    row.append("^")
                else:
                    row.append(" ")
                row.append(" " * (CELL_WIDTH - 1))
                if x < w - 1:
                    row.append(" ")
            lines.append("".join(row))
    return "\n".join(lines) + "\n"


__all__ = ["CELL_HEIGHT", "CELL_WIDTH", "game_text_format"]
