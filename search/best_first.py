from __future__ import annotations
import logging
import time
from typing import Dict, List, Optional, Set

from sokoban_core.board import Board
from sokoban_core.state import SearchState
from heuristics.base import Heuristic
from .priority_queue import PriorityQueue
from .reconstruct import push_chain, solution_moves

logger = logging.getLogger(__name__)

Result = Dict[str, object]

SOLVED = "solved"
EXHAUSTED = "exhausted"
TIMEOUT = "timeout"


class Searcher:
    """Greedy best-first search over push states of one board.

    States live in an arena list and refer to their parent by index. The
    visited set and the frontier persist across `run` calls, so a timed-out
    search can continue under another heuristic.
    """

    def __init__(self, board: Board, check_every: int = 256) -> None:
        if check_every < 1:
            raise ValueError("check_every must be >= 1")
        self.board = board
        self.check_every = check_every
        root = SearchState.root(board)
        self.arena: List[SearchState] = [root]
        self.visited: Set[SearchState] = {root}
        self.frontier: Optional[PriorityQueue] = None
        self.expanded = 0
        self.generated = 0
        self.runtime = 0.0
        self.goal: Optional[int] = None
        self.finished = False

    @property
    def root(self) -> SearchState:
        return self.arena[0]

    def run(
        self,
        heuristic: Heuristic,
        time_limit_s: Optional[float] = None,
        node_limit: Optional[int] = None,
    ) -> Result:
        """Expand states until a goal is generated, the frontier empties or a budget runs out.

        Budgets are checked every `check_every` expansions; node_limit counts
        the expansions of this call.
        """
        t0 = time.perf_counter()
        if self.frontier is None:
            self.frontier = PriorityQueue(heuristic.compare, self.arena)
            if self.root.is_goal():
                return self._finish(SOLVED, t0, goal=0)
            if self.root.is_deadlocked():
                logger.info("start position is deadlocked")
                return self._finish(EXHAUSTED, t0)
            self.frontier.push(0)
        elif self.finished:
            return self._result(SOLVED if self.goal is not None else EXHAUSTED)
        else:
            self.frontier.reorder(heuristic.compare)

        arena = self.arena
        visited = self.visited
        frontier = self.frontier
        run_expanded = 0

        while len(frontier) > 0:
            if run_expanded % self.check_every == 0:
                elapsed = time.perf_counter() - t0
                logger.debug("expanded=%d visited=%d frontier=%d elapsed=%.2fs",
                             self.expanded, len(visited), len(frontier), elapsed)
                if (time_limit_s is not None and elapsed >= time_limit_s) or \
                   (node_limit is not None and run_expanded >= node_limit):
                    self.runtime += elapsed
                    logger.info("budget exhausted after %d expansions (%.2fs)", run_expanded, elapsed)
                    return self._result(TIMEOUT)

            handle = frontier.pop()
            state = arena[handle]
            run_expanded += 1
            self.expanded += 1

            for push in state.get_available_moves():
                nxt = state.apply(push, handle)
                self.generated += 1
                if nxt.is_deadlocked() or nxt in visited:
                    continue
                arena.append(nxt)
                nh = len(arena) - 1
                if nxt.is_goal():
                    return self._finish(SOLVED, t0, goal=nh)
                visited.add(nxt)
                frontier.push(nh)

        return self._finish(EXHAUSTED, t0)

    # ---- results
    def _finish(self, status: str, t0: float, goal: Optional[int] = None) -> Result:
        self.runtime += time.perf_counter() - t0
        self.finished = True
        self.goal = goal
        logger.info("search %s: expanded=%d generated=%d visited=%d runtime=%.2fs",
                    status, self.expanded, self.generated, len(self.visited), self.runtime)
        return self._result(status)

    def _result(self, status: str) -> Result:
        res: Result = {
            "status": status,
            "success": status == SOLVED,
            "nodes": self.expanded,
            "generated": self.generated,
            "visited": len(self.visited),
            "runtime": self.runtime,
        }
        if self.goal is not None:
            chain = push_chain(self.arena, self.goal)
            res["path"] = chain
            res["pushes"] = [s.push for s in chain[1:]]
            res["moves"] = solution_moves(chain)
            res["solution_len"] = len(chain) - 1
        return res


def best_first(
    board: Board,
    heuristic: Heuristic,
    time_limit_s: Optional[float] = None,
    node_limit: Optional[int] = None,
    check_every: int = 256,
) -> Result:
    return Searcher(board, check_every=check_every).run(heuristic, time_limit_s, node_limit)
