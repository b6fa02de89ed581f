from __future__ import annotations
from typing import Optional, Set

from .board import Board, has_bit, iter_bits
from .directions import Direction

# vertical/horizontal neighbour pairs around a box
_CORNER_PAIRS = (
    (Direction.UP, Direction.LEFT),
    (Direction.UP, Direction.RIGHT),
    (Direction.DOWN, Direction.LEFT),
    (Direction.DOWN, Direction.RIGHT),
)

# --- simple trap -------------------------------------------------------------

def is_corner_trap(board: Board, box_idx: int) -> bool:
    """Box (not on goal) in a corner of two walls: it can never move again."""
    if board.is_goal(box_idx):
        return False
    for a, b in _CORNER_PAIRS:
        if board.is_wall(board.step(box_idx, a)) and board.is_wall(board.step(box_idx, b)):
            return True
    return False


def _dead_wall_line(board: Board, box_idx: int, wall_side: Direction) -> bool:
    """Every cell of the segment through the box, bounded by walls at both ends,
    has a wall on `wall_side` and none of them is a goal.

    Such a box can only slide along the segment: it cannot be pushed into the
    wall, and pushing it away would need the player to stand inside the wall.
    """
    along = wall_side.perpendicular
    for direction in (along, along.opposite):
        cur = box_idx
        while True:
            if board.is_goal(cur) or not board.is_wall(board.step(cur, wall_side)):
                return False
            nxt = board.step(cur, direction)
            if board.is_wall(nxt):
                break
            cur = nxt
    return True


def is_wall_line_trap(board: Board, box_idx: int) -> bool:
    """Box squeezed against a wall with no goal anywhere it can slide to."""
    if board.is_goal(box_idx):
        return False
    for side in Direction:
        if board.is_wall(board.step(box_idx, side)) and _dead_wall_line(board, box_idx, side):
            return True
    return False


def is_simple_trap(board: Board, box_idx: int) -> bool:
    return is_corner_trap(board, box_idx) or is_wall_line_trap(board, box_idx)


# --- cluster lock ------------------------------------------------------------

def _solid(board: Board, boxes: int, idx: int, assumed: Set[int]) -> bool:
    if board.is_wall(idx):
        return True
    if not has_bit(boxes, idx):
        return False
    return idx in assumed or is_cluster_locked(board, boxes, idx, assumed)


def is_cluster_locked(board: Board, boxes: int, box_idx: int, assumed: Optional[Set[int]] = None) -> bool:
    """The box is blocked on both axes by walls or by boxes that are locked themselves.

    `assumed` holds the boxes whose evaluation is in progress further up the
    chain; they count as locked (mutually supporting boxes freeze each other).
    A box leaves the set once its own evaluation is done.
    """
    if assumed is None:
        assumed = set()
    assumed.add(box_idx)
    try:
        for a, b in _CORNER_PAIRS:
            if _solid(board, boxes, board.step(box_idx, a), assumed) and \
               _solid(board, boxes, board.step(box_idx, b), assumed):
                return True
        return False
    finally:
        assumed.discard(box_idx)


# --- combined API ------------------------------------------------------------

def is_dead_box(board: Board, boxes: int, box_idx: int) -> bool:
    """True if a non-goal box can provably never reach a goal."""
    if board.is_goal(box_idx):
        return False
    return board.is_forbidden(box_idx) or is_simple_trap(board, box_idx) \
        or is_cluster_locked(board, boxes, box_idx)


def has_deadlock(board: Board, boxes: int) -> bool:
    for b in iter_bits(boxes):
        if is_dead_box(board, boxes, b):
            return True
    return False


def push_deadlocks(board: Board, boxes: int, dest: int) -> bool:
    """Deadlock check after a box arrived on `dest`: only the pushed box and
    boxes around it can have become stuck."""
    if is_dead_box(board, boxes, dest):
        return True
    w = board.width
    for off in (-w - 1, -w, -w + 1, -1, 1, w - 1, w, w + 1):
        nb = dest + off
        if has_bit(boxes, nb) and not board.is_goal(nb) and is_cluster_locked(board, boxes, nb):
            return True
    return False
