import pytest
from sokoban_core.directions import Direction, format_moves, parse_moves
from sokoban_core.moves import player_reachable, replay, walk_path
from sokoban_core.parser import parse_level_str
from sokoban_core.state import Push, SearchState

LVL = """
#####
#.@ #
# $ #
# . #
#####
"""

# box next to a corner: pushing it right must never be offered
CORNER = """
######
#. $ #
#  @ #
######
"""


def test_available_moves():
    s = SearchState.root(parse_level_str(LVL))
    box = s.board.index(2, 2)
    # right would put the box on a forbidden square
    assert s.get_available_moves() == [
        Push(box, Direction.UP),
        Push(box, Direction.DOWN),
        Push(box, Direction.LEFT),
    ]
    goal_states = [s.apply(m) for m in s.get_available_moves() if s.apply(m).is_goal()]
    assert len(goal_states) == 1


def test_push_into_corner_is_not_offered():
    b = parse_level_str(CORNER)
    s = SearchState.root(b)
    assert not s.is_deadlocked()
    assert s.get_available_moves() == [Push(b.index(3, 1), Direction.LEFT)]
    cornered = s.apply(Push(b.index(3, 1), Direction.RIGHT))
    assert cornered.is_deadlocked()


def test_reachability():
    b = parse_level_str(LVL)
    reach, canonical = player_reachable(b, b.initial_boxes, b.start)
    assert bin(reach).count("1") == 8  # 9 floor cells minus the box
    assert not (reach >> b.index(2, 2)) & 1
    assert canonical == b.index(1, 1)


def test_walk_path_avoids_boxes():
    b = parse_level_str(CORNER)
    path = walk_path(b, b.initial_boxes, b.start, b.index(4, 1))
    assert path == [Direction.RIGHT, Direction.UP]
    assert walk_path(b, b.initial_boxes, b.start, b.start) == []


def test_walk_path_unreachable():
    b = parse_level_str("#####\n#@#.#\n###$#\n#   #\n#####\n")
    assert walk_path(b, b.initial_boxes, b.start, b.index(1, 3)) is None


def test_replay_pushes_boxes():
    b = parse_level_str(LVL)
    boxes, player = replay(b, b.initial_boxes, b.start, [Direction.DOWN])
    assert player == b.index(2, 2)
    assert boxes == 1 << b.index(2, 3)


def test_replay_rejects_illegal_moves():
    b = parse_level_str(LVL)
    with pytest.raises(ValueError):
        replay(b, b.initial_boxes, b.start, [Direction.UP])
    with pytest.raises(ValueError):
        # second push would drive the box into the bottom wall
        replay(b, b.initial_boxes, b.start, [Direction.DOWN, Direction.DOWN])


def test_move_symbols():
    moves = parse_moves("urDL")
    assert moves == [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]
    assert format_moves(moves) == "URDL"
    assert Direction.LEFT.opposite is Direction.RIGHT
    with pytest.raises(ValueError):
        parse_moves("x")
