from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from .board import Board, bit, has_bit, iter_bits, popcount
from .deadlocks import has_deadlock, push_deadlocks
from .directions import Direction
from .moves import player_reachable

__all__ = [
    "Push",
    "SearchState",
]


class Push(NamedTuple):
    box: int
    direction: Direction


@dataclass(eq=False, slots=True)
class SearchState:
    """
    One node of the push-level search.

    boxes: bitset of box cells; player: where the player stands after the push
    that produced this state. parent is the arena handle of the predecessor
    (-1 for the root), push the move that produced it, depth the push count.

    Two states are equal iff they have the same boxes and the player's
    reachable regions share the same canonical cell, i.e. the player is on the
    same side of every enclosed area. Parent, push and depth are ignored.
    Reachability, the deadlock flag and heuristic values are computed lazily
    and cached.
    """

    board: Board
    boxes: int
    player: int
    parent: int = -1
    push: Optional[Push] = None
    depth: int = 0
    box_hash: int = 0
    _reach: int = field(default=0, init=False, repr=False)
    _canonical: int = field(default=-1, init=False, repr=False)
    _deadlocked: Optional[bool] = field(default=None, init=False, repr=False)
    _memo: Optional[Dict[str, object]] = field(default=None, init=False, repr=False)

    @classmethod
    def create(cls, board: Board, boxes: int, player: int) -> "SearchState":
        return cls(board=board, boxes=boxes, player=player,
                   box_hash=board.zobrist.box_hash(boxes))

    @classmethod
    def root(cls, board: Board) -> "SearchState":
        return cls.create(board, board.initial_boxes, board.start)

    # ---- identity
    def _ensure_reach(self) -> None:
        if self._canonical < 0:
            self._reach, self._canonical = player_reachable(self.board, self.boxes, self.player)

    @property
    def reachable(self) -> int:
        self._ensure_reach()
        return self._reach

    @property
    def canonical(self) -> int:
        self._ensure_reach()
        return self._canonical

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchState):
            return NotImplemented
        return self.boxes == other.boxes and self.canonical == other.canonical

    def __hash__(self) -> int:
        return self.board.zobrist.state_hash(self.box_hash, self.canonical)

    # ---- state properties
    def is_goal(self) -> bool:
        """All boxes are on goals: boxes ⊆ goals."""
        return (self.boxes & ~self.board.goals) == 0

    @property
    def num_boxes_on_goals(self) -> int:
        return popcount(self.boxes & self.board.goals)

    def box_indices(self) -> List[int]:
        return list(iter_bits(self.boxes))

    def box_points(self) -> List[Tuple[int, int]]:
        """Box coordinates as (col, row), sorted."""
        return sorted(self.board.point(b) for b in self.box_indices())

    def is_deadlocked(self) -> bool:
        if self._deadlocked is None:
            self._deadlocked = has_deadlock(self.board, self.boxes)
        return self._deadlocked

    def memo(self, key: str, fn: Callable[["SearchState"], object]) -> object:
        if self._memo is None:
            self._memo = {}
        if key not in self._memo:
            self._memo[key] = fn(self)
        return self._memo[key]

    # ---- successors
    def get_available_moves(self) -> List[Push]:
        """Legal pushes that do not lead into a detected deadlock.

        A push of box b in direction d needs the player to reach b - d, and the
        destination b + d to be free floor that is not forbidden.
        """
        board = self.board
        reach = self.reachable
        w = board.width
        moves: List[Push] = []
        for b in self.box_indices():
            for d in Direction:
                off = d.offset(w)
                dest = b + off
                if not has_bit(reach, b - off):
                    continue
                if board.is_wall(dest) or board.is_forbidden(dest) or has_bit(self.boxes, dest):
                    continue
                if push_deadlocks(board, self.boxes ^ bit(b) ^ bit(dest), dest):
                    continue
                moves.append(Push(b, d))
        return moves

    def apply(self, push: Push, parent: int = -1) -> "SearchState":
        """State after `push`; the player ends on the box's old cell."""
        src = push.box
        dst = self.board.step(src, push.direction)
        return SearchState(
            board=self.board,
            boxes=self.boxes ^ bit(src) ^ bit(dst),
            player=src,
            parent=parent,
            push=push,
            depth=self.depth + 1,
            box_hash=self.board.zobrist.moved(self.box_hash, src, dst),
        )
