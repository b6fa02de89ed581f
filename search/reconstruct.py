from __future__ import annotations
from typing import List, Sequence, Tuple

from sokoban_core.board import iter_bits
from sokoban_core.directions import Direction
from sokoban_core.moves import walk_path
from sokoban_core.render import render_state
from sokoban_core.state import SearchState


def push_chain(arena: Sequence[SearchState], handle: int) -> List[SearchState]:
    """States from the root to `handle`, following parent handles."""
    path = [arena[handle]]
    cur = arena[handle]
    while cur.parent >= 0:
        cur = arena[cur.parent]
        path.append(cur)
    path.reverse()
    return path


def push_direction(before: SearchState, after: SearchState) -> Tuple[int, Direction]:
    """(source cell, direction) of the single box that moved between two states."""
    src = list(iter_bits(before.boxes & ~after.boxes))
    dst = list(iter_bits(after.boxes & ~before.boxes))
    if len(src) != 1 or len(dst) != 1:
        raise ValueError(f"states differ by {len(src)} boxes, expected one push")
    board = before.board
    (sc, sr), (dc, dr) = board.point(src[0]), board.point(dst[0])
    return src[0], Direction.from_delta(dc - sc, dr - sr)


def solution_moves(chain: Sequence[SearchState]) -> List[Direction]:
    """Elementary player moves realising a chain of push states."""
    if not chain:
        return []
    board = chain[0].board
    player = chain[0].player
    moves: List[Direction] = []
    for before, after in zip(chain, chain[1:]):
        src, d = push_direction(before, after)
        pusher = board.step(src, d.opposite)
        walk = walk_path(board, before.boxes, player, pusher)
        if walk is None:
            raise RuntimeError(f"no walk to the pushing square {board.point(pusher)}")
        moves.extend(walk)
        moves.append(d)
        player = src
    return moves


def render_chain(chain: Sequence[SearchState]) -> List[str]:
    return [render_state(s) for s in chain]
