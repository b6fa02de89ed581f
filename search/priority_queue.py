from __future__ import annotations
import heapq
from typing import Callable, List, Sequence

Compare = Callable[[object, object], int]


class _Entry:
    __slots__ = ("state", "seq", "handle", "compare")

    def __init__(self, state: object, seq: int, handle: int, compare: Compare) -> None:
        self.state = state
        self.seq = seq
        self.handle = handle
        self.compare = compare

    def __lt__(self, other: "_Entry") -> bool:
        c = self.compare(self.state, other.state)
        if c != 0:
            return c < 0
        return self.seq < other.seq


class PriorityQueue:
    """Frontier of arena handles ordered by a state comparator.

    Among states the comparator ties, the earlier insertion comes out first.
    """
    def __init__(self, compare: Compare, arena: Sequence[object]) -> None:
        self._h: List[_Entry] = []
        self._tiebreak = 0
        self._compare = compare
        self._arena = arena

    def push(self, handle: int) -> None:
        self._tiebreak += 1
        heapq.heappush(self._h, _Entry(self._arena[handle], self._tiebreak, handle, self._compare))

    def pop(self) -> int:
        return heapq.heappop(self._h).handle

    def reorder(self, compare: Compare) -> None:
        """Switch to another comparator, keeping the queued handles."""
        self._compare = compare
        for e in self._h:
            e.compare = compare
        heapq.heapify(self._h)

    def __len__(self) -> int:
        return len(self._h)
