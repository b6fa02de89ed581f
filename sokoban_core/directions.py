from __future__ import annotations
from enum import Enum
from typing import Iterable


class Direction(Enum):
    """Player/box movement. Declaration order is the canonical iteration order."""

    UP = (0, -1, "U")
    RIGHT = (1, 0, "R")
    DOWN = (0, 1, "D")
    LEFT = (-1, 0, "L")

    def __init__(self, dx: int, dy: int, symbol: str) -> None:
        self.dx = dx
        self.dy = dy
        self.symbol = symbol

    def __str__(self) -> str:
        return self.symbol

    @property
    def opposite(self) -> "Direction":
        return Direction.from_delta(-self.dx, -self.dy)

    @property
    def perpendicular(self) -> "Direction":
        """One of the two directions at a right angle to this one."""
        return Direction.RIGHT if self.dx == 0 else Direction.DOWN

    def offset(self, width: int) -> int:
        """Index delta of one step on a board of the given width."""
        return self.dy * width + self.dx

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> "Direction":
        for d in cls:
            if d.dx == dx and d.dy == dy:
                return d
        raise ValueError(f"no direction for delta ({dx}, {dy})")

    @classmethod
    def from_symbol(cls, ch: str) -> "Direction":
        up = ch.upper()
        for d in cls:
            if d.symbol == up:
                return d
        raise ValueError(f"unknown move symbol: {ch!r}")


def format_moves(moves: Iterable[Direction]) -> str:
    return "".join(d.symbol for d in moves)


def parse_moves(text: str) -> list:
    """'urDL' -> [UP, RIGHT, DOWN, LEFT]. Case marks pushes in LURD notation and is ignored."""
    return [Direction.from_symbol(ch) for ch in text if not ch.isspace()]
