import pytest

from sokoban_core.directions import Direction, format_moves
from sokoban_core.parser import parse_level_str
from sokoban_core.state import Push, SearchState
from search.reconstruct import push_chain, push_direction, render_chain, solution_moves

CORNER = """
######
#. $ #
#  @ #
######
"""


def _chain(board):
    root = SearchState.root(board)
    a = root.apply(Push(board.index(3, 1), Direction.LEFT), parent=0)
    b = a.apply(Push(board.index(2, 1), Direction.LEFT), parent=1)
    return [root, a, b]


def test_push_chain_follows_parents():
    board = parse_level_str(CORNER)
    arena = _chain(board)
    chain = push_chain(arena, 2)
    assert [s.depth for s in chain] == [0, 1, 2]
    assert push_chain(arena, 0) == [arena[0]]


def test_push_direction():
    board = parse_level_str(CORNER)
    root, a, _ = _chain(board)
    assert push_direction(root, a) == (board.index(3, 1), Direction.LEFT)
    with pytest.raises(ValueError):
        push_direction(root, root)


def test_solution_moves():
    board = parse_level_str(CORNER)
    moves = solution_moves(_chain(board))
    # walk right and up behind the box, then two pushes
    assert format_moves(moves) == "RULL"
    assert solution_moves([]) == []


def test_render_chain():
    board = parse_level_str(CORNER)
    frames = render_chain(_chain(board))
    assert frames[0] == CORNER.strip("\n")
    assert frames[-1].splitlines()[1] == "#*@  #"
