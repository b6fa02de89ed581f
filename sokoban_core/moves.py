from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

from .board import Board, bit, has_bit, set_bit, clear_bit
from .directions import Direction


def player_reachable(board: Board, boxes: int, start: int) -> Tuple[int, int]:
    """Cells reachable by the player without pushing boxes.

    Returns (bitmask, canonical) where canonical is the reachable cell with the
    smallest (col, row); it identifies the region independently of where in it
    the player stands.
    """
    key = board.order_key
    visited = bit(start)
    canonical = start
    q = deque([start])

    while q:
        cur = q.popleft()
        for nb in board.neighbors[cur]:
            if has_bit(boxes, nb) or has_bit(visited, nb):
                continue
            visited = set_bit(visited, nb)
            if key[nb] < key[canonical]:
                canonical = nb
            q.append(nb)
    return visited, canonical


def walk_path(board: Board, boxes: int, src: int, dst: int) -> Optional[List[Direction]]:
    """Shortest walk from src to dst with boxes as obstacles, or None."""
    if src == dst:
        return []
    came: Dict[int, Tuple[int, Direction]] = {src: (-1, Direction.UP)}
    q = deque([src])
    while q:
        cur = q.popleft()
        for d in Direction:
            nb = board.step(cur, d)
            if nb in came or board.is_wall(nb) or has_bit(boxes, nb):
                continue
            came[nb] = (cur, d)
            if nb == dst:
                path: List[Direction] = []
                while nb != src:
                    nb, step = came[nb]
                    path.append(step)
                path.reverse()
                return path
            q.append(nb)
    return None


def replay(board: Board, boxes: int, player: int, moves: Iterable[Direction]) -> Tuple[int, int]:
    """Apply elementary moves, pushing boxes. Returns (boxes, player).

    Raises ValueError on a move into a wall or an impossible push.
    """
    for i, d in enumerate(moves):
        nxt = board.step(player, d)
        if board.is_wall(nxt):
            raise ValueError(f"move {i} ({d}) walks into a wall")
        if has_bit(boxes, nxt):
            dest = board.step(nxt, d)
            if board.is_wall(dest) or has_bit(boxes, dest):
                raise ValueError(f"move {i} ({d}) pushes a box into an obstacle")
            boxes = set_bit(clear_bit(boxes, nxt), dest)
        player = nxt
    return boxes, player
