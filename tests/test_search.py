import pytest

from sokoban_core.board import popcount
from sokoban_core.errors import SearchExhausted, SearchTimeout
from sokoban_core.moves import replay
from sokoban_core.parser import parse_level_str
from sokoban_core.directions import format_moves
from heuristics.selector import get_heuristic
from search.best_first import Searcher, best_first
from search.config import SolverConfig
from search.solve import solve, solve_level

CORRIDOR = """
#######
###  ##
#@$   #
###.  #
#######
"""

SOLVED_START = """
#####
#*@ #
#####
"""

TWO_BOXES = """
#######
#     #
# $$@ #
#.   .#
#######
"""

DEAD_START = """
#####
#$  #
# @.#
#####
"""

# the player is walled in and can never reach the box
ISOLATED = """
#######
#@#   #
###$  #
#    .#
#######
"""


def _assert_solves(board, res):
    assert res["success"]
    boxes, _ = replay(board, board.initial_boxes, board.start, res["moves"])
    assert boxes & ~board.goals == 0
    assert popcount(boxes) == popcount(board.initial_boxes)


def test_corridor_solved():
    b = parse_level_str(CORRIDOR)
    res = best_first(b, get_heuristic("done,distance,player"))
    assert res["status"] == "solved"
    assert len(res["moves"]) > 0
    assert res["solution_len"] == len(res["pushes"])
    _assert_solves(b, res)


@pytest.mark.parametrize("h", ["done,distance,player", "matching", "squared", "corner,done,distance", "moves"])
def test_heuristics_all_solve(h):
    b = parse_level_str(TWO_BOXES)
    res = best_first(b, get_heuristic(h))
    _assert_solves(b, res)


def test_already_solved():
    b = parse_level_str(SOLVED_START)
    res = best_first(b, get_heuristic("distance"))
    assert res["success"]
    assert res["moves"] == []
    assert res["nodes"] == 0


def test_dead_start_is_exhausted():
    b = parse_level_str(DEAD_START)
    res = best_first(b, get_heuristic("distance"))
    assert res["status"] == "exhausted"
    assert not res["success"]
    assert res["nodes"] == 0
    assert "moves" not in res


def test_isolated_player_is_exhausted():
    b = parse_level_str(ISOLATED)
    res = best_first(b, get_heuristic("distance"))
    assert res["status"] == "exhausted"
    assert res["nodes"] == 1


def test_node_limit_times_out():
    b = parse_level_str(CORRIDOR)
    res = best_first(b, get_heuristic("distance"), node_limit=1, check_every=1)
    assert res["status"] == "timeout"
    assert res["nodes"] == 1
    assert "path" not in res


def test_time_limit_times_out():
    b = parse_level_str(TWO_BOXES)
    searcher = Searcher(b, check_every=1)
    res = searcher.run(get_heuristic("distance"), time_limit_s=0.0)
    assert res["status"] == "timeout"
    assert not res["success"]
    assert "path" not in res
    assert best_first(b, get_heuristic("distance"), time_limit_s=0.0, check_every=1)["status"] == "timeout"
    # the same searcher picks up where it stopped
    _assert_solves(b, searcher.run(get_heuristic("distance")))


def test_search_resumes_after_timeout():
    b = parse_level_str(CORRIDOR)
    searcher = Searcher(b, check_every=1)
    first = searcher.run(get_heuristic("distance"), node_limit=1)
    assert first["status"] == "timeout"
    second = searcher.run(get_heuristic("corner,distance"))
    _assert_solves(b, second)
    assert second["nodes"] > first["nodes"]
    # a finished searcher keeps its answer
    assert searcher.run(get_heuristic("distance"))["moves"] == second["moves"]


def test_deterministic():
    b = parse_level_str(TWO_BOXES)
    a = best_first(b, get_heuristic("done,distance,player"))
    c = best_first(parse_level_str(TWO_BOXES), get_heuristic("done,distance,player"))
    assert format_moves(a["moves"]) == format_moves(c["moves"])
    assert a["nodes"] == c["nodes"]


def test_path_starts_at_root():
    b = parse_level_str(TWO_BOXES)
    res = best_first(b, get_heuristic("distance"))
    path = res["path"]
    assert path[0].boxes == b.initial_boxes
    assert path[-1].is_goal()
    assert [s.depth for s in path] == list(range(len(path)))


def test_bad_check_every():
    with pytest.raises(ValueError):
        Searcher(parse_level_str(CORRIDOR), check_every=0)


def test_solve_switches_to_fallback():
    cfg = SolverConfig(heuristic="distance", node_limit=1, check_every=1,
                       fallback="corner,done,distance")
    b = parse_level_str(CORRIDOR)
    res = solve(b, cfg)
    assert res["phase"] == "fallback"
    _assert_solves(b, res)


def test_solve_without_fallback_reports_timeout():
    cfg = SolverConfig(heuristic="distance", node_limit=1, check_every=1)
    res = solve(parse_level_str(CORRIDOR), cfg)
    assert res["phase"] == "primary"
    assert res["status"] == "timeout"


def test_solve_level():
    moves = solve_level(CORRIDOR)
    b = parse_level_str(CORRIDOR)
    boxes, _ = replay(b, b.initial_boxes, b.start, moves)
    assert boxes == b.goals


def test_solve_level_failures():
    with pytest.raises(SearchExhausted) as e:
        solve_level(DEAD_START)
    assert e.value.result["status"] == "exhausted"
    with pytest.raises(SearchTimeout):
        solve_level(CORRIDOR, SolverConfig(node_limit=1, check_every=1))
