from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Tuple

import numpy as np

from .directions import Direction
from .zobrist import Zobrist

__all__ = [
    "Board",
    "SquareKind",
    "INF",
    "bit",
    "has_bit",
    "set_bit",
    "clear_bit",
    "iter_bits",
    "popcount",
]

INF = 10 ** 9


# Bit helpers

def bit(idx: int) -> int:
    return 1 << idx

def has_bit(mask: int, idx: int) -> bool:
    return (mask >> idx) & 1 == 1

def set_bit(mask: int, idx: int) -> int:
    return mask | bit(idx)

def clear_bit(mask: int, idx: int) -> int:
    return mask & ~bit(idx)

def iter_bits(mask: int) -> Iterable[int]:
    """Iterates over the indices of set bits, lowest first."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low

def popcount(mask: int) -> int:
    return bin(mask).count("1")


class SquareKind(Enum):
    FREE = "free"
    GOAL = "goal"
    WALL = "wall"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """
    Immutable parsed level plus its static analysis.

    Cell indexing: idx = row*width + col. Every border cell is a wall, so
    stepping from a non-wall cell never leaves the grid.
    outside: cells that were blank outside the level (walls, rendered as blanks).
    reach_goals[idx]: bitset over goal_list of goals a box on idx can be pushed to.
    push_dist[g, idx]: fewest pushes moving a box from idx to goal_list[g].
    """

    width: int
    height: int
    walls: int
    goals: int
    outside: int
    start: int
    initial_boxes: int
    goal_list: Tuple[int, ...]
    forbidden: int
    reach_goals: Tuple[int, ...]
    push_dist: np.ndarray
    player_goal_dist: Tuple[int, ...]
    scores: Tuple[int, ...]
    neighbors: Tuple[Tuple[int, ...], ...]
    order_key: Tuple[int, ...]
    zobrist: Zobrist

    @classmethod
    def build(
        cls,
        width: int,
        height: int,
        walls: int,
        goals: int,
        start: int,
        boxes: int,
        outside: int = 0,
        seed: int = 12345,
    ) -> "Board":
        size = width * height
        goal_list = tuple(iter_bits(goals))
        neighbors = _neighbor_table(width, height, walls)
        reach_goals, push_dist = _push_analysis(width, height, walls, goal_list)
        floor = ((1 << size) - 1) & ~walls
        forbidden = 0
        for idx in iter_bits(floor):
            if reach_goals[idx] == 0:
                forbidden = set_bit(forbidden, idx)
        return cls(
            width=width,
            height=height,
            walls=walls,
            goals=goals,
            outside=outside,
            start=start,
            initial_boxes=boxes,
            goal_list=goal_list,
            forbidden=forbidden,
            reach_goals=reach_goals,
            push_dist=push_dist,
            player_goal_dist=_player_goal_distances(size, neighbors, goal_list),
            scores=_goal_scores(width, height, walls, goal_list),
            neighbors=neighbors,
            order_key=tuple((idx % width) * height + idx // width for idx in range(size)),
            zobrist=Zobrist(size, floor, seed),
        )

    # ---- geometry
    @property
    def size(self) -> int:
        return self.width * self.height

    def point(self, idx: int) -> Tuple[int, int]:
        """(col, row) of a cell."""
        return (idx % self.width, idx // self.width)

    def index(self, col: int, row: int) -> int:
        return row * self.width + col

    def step(self, idx: int, d: Direction) -> int:
        return idx + d.offset(self.width)

    # ---- squares
    def is_wall(self, idx: int) -> bool:
        return has_bit(self.walls, idx)

    def is_goal(self, idx: int) -> bool:
        return has_bit(self.goals, idx)

    def is_forbidden(self, idx: int) -> bool:
        return has_bit(self.forbidden, idx)

    def is_outside(self, idx: int) -> bool:
        return has_bit(self.outside, idx)

    def kind(self, idx: int) -> SquareKind:
        if self.is_wall(idx):
            return SquareKind.WALL
        if self.is_goal(idx):
            return SquareKind.GOAL
        if self.is_forbidden(idx):
            return SquareKind.FORBIDDEN
        return SquareKind.FREE

    def reachable_goals(self, idx: int) -> FrozenSet[int]:
        return frozenset(self.goal_list[g] for g in iter_bits(self.reach_goals[idx]))

    def goal_score(self, idx: int) -> int:
        return self.scores[idx]


# ---- static analysis

def _neighbor_table(width: int, height: int, walls: int) -> Tuple[Tuple[int, ...], ...]:
    """Non-wall 4-neighbours of every non-wall cell, in Direction order."""
    table: List[Tuple[int, ...]] = []
    for idx in range(width * height):
        if has_bit(walls, idx):
            table.append(())
            continue
        c, r = idx % width, idx // width
        nbs = []
        for d in Direction:
            nc, nr = c + d.dx, r + d.dy
            if 0 <= nc < width and 0 <= nr < height:
                nb = nr * width + nc
                if not has_bit(walls, nb):
                    nbs.append(nb)
        table.append(tuple(nbs))
    return tuple(table)


def _push_analysis(
    width: int, height: int, walls: int, goal_list: Tuple[int, ...]
) -> Tuple[Tuple[int, ...], np.ndarray]:
    """Reverse (pull) BFS from every goal, ignoring other boxes.

    A box on y may have come from x = y - d when x and the pushing
    square x - d are both non-wall.
    """
    size = width * height
    offsets = [d.offset(width) for d in Direction]
    reach = [0] * size
    dist = np.full((len(goal_list), size), INF, dtype=np.int64)
    for gi, g in enumerate(goal_list):
        row = [INF] * size
        row[g] = 0
        reach[g] |= 1 << gi
        q = deque([g])
        while q:
            y = q.popleft()
            for off in offsets:
                x = y - off
                if has_bit(walls, x) or has_bit(walls, x - off):
                    continue
                if row[x] != INF:
                    continue
                row[x] = row[y] + 1
                reach[x] |= 1 << gi
                q.append(x)
        dist[gi, :] = row
    return tuple(reach), dist


def _player_goal_distances(
    size: int, neighbors: Tuple[Tuple[int, ...], ...], goal_list: Tuple[int, ...]
) -> Tuple[int, ...]:
    dist = [INF] * size
    q = deque()
    for g in goal_list:
        dist[g] = 0
        q.append(g)
    while q:
        cur = q.popleft()
        for nb in neighbors[cur]:
            if dist[nb] == INF:
                dist[nb] = dist[cur] + 1
                q.append(nb)
    return tuple(dist)


def _goal_scores(width: int, height: int, walls: int, goal_list: Tuple[int, ...]) -> Tuple[int, ...]:
    """Goals nested in corners/alcoves score higher; 0 for non-goals."""
    def wall_at(c: int, r: int) -> bool:
        if not (0 <= c < width and 0 <= r < height):
            return True
        return has_bit(walls, r * width + c)

    scores = [0] * (width * height)
    for g in goal_list:
        c, r = g % width, g // width
        s = 1
        for d in Direction:
            if wall_at(c + d.dx, r + d.dy):
                s += 2
            if wall_at(c + 2 * d.dx, r + 2 * d.dy):
                s += 1
        scores[g] = s
    return tuple(scores)
