from __future__ import annotations
import logging
from typing import List, Optional

from sokoban_core.board import Board
from sokoban_core.directions import Direction
from sokoban_core.errors import SearchExhausted, SearchTimeout
from sokoban_core.parser import parse_level_str
from heuristics.selector import get_heuristic
from .best_first import Result, Searcher, TIMEOUT, SOLVED
from .config import SolverConfig

logger = logging.getLogger(__name__)


def solve(board: Board, config: Optional[SolverConfig] = None) -> Result:
    """Best-first search with an optional second phase under the fallback heuristic."""
    config = config or SolverConfig()
    searcher = Searcher(board, check_every=config.check_every)
    res = searcher.run(get_heuristic(config.heuristic, config.seed),
                       time_limit_s=config.time_limit_s, node_limit=config.node_limit)
    res["phase"] = "primary"
    if res["status"] != TIMEOUT or config.fallback is None:
        return res

    logger.info("primary heuristic timed out after %d expansions, switching to fallback", res["nodes"])
    res = searcher.run(get_heuristic(config.fallback, config.seed),
                       time_limit_s=config.fallback_time_limit_s, node_limit=config.fallback_node_limit)
    res["phase"] = "fallback"
    return res


def solve_level(level_str: str, config: Optional[SolverConfig] = None) -> List[Direction]:
    """Solve level text; raises SearchExhausted / SearchTimeout when there is no answer."""
    res = solve(parse_level_str(level_str), config)
    if res["status"] == SOLVED:
        return res["moves"]  # type: ignore
    if res["status"] == TIMEOUT:
        raise SearchTimeout(f"no solution within budget after {res['nodes']} expansions", res)
    raise SearchExhausted(f"no solution: {res['visited']} configurations inspected", res)
