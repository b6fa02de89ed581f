from sokoban_core.parser import parse_level_str
from sokoban_core.render import render_board
from sokoban_core.state import Push, SearchState
from sokoban_core.directions import Direction

LVL = """
#####
#.@ #
# $ #
# . #
#####
"""

CORRIDOR = """
#######
#@ $. #
#######
"""

ROOM = """
######
#    #
# $  #
#  .@#
######
"""


def test_parse_and_render_basic():
    b = parse_level_str(LVL)
    txt = render_board(b)
    assert txt.splitlines()[0] == "#####"
    assert b.width == 5 and b.height == 5
    assert b.point(b.start) == (2, 1)
    assert txt == LVL.strip("\n")


def test_root_state():
    b = parse_level_str(LVL)
    s = SearchState.root(b)
    assert s.depth == 0 and s.parent == -1 and s.push is None
    assert s.box_points() == [(2, 2)]
    assert s.box_indices() == [b.index(2, 2)]
    assert not s.is_goal()
    assert s.num_boxes_on_goals == 0


def test_apply_push():
    b = parse_level_str(LVL)
    s = SearchState.root(b)
    box = b.index(2, 2)
    nxt = s.apply(Push(box, Direction.DOWN), parent=0)
    assert nxt.is_goal()
    assert nxt.player == box
    assert nxt.depth == 1 and nxt.parent == 0
    assert nxt.box_points() == [(2, 3)]
    # parent is untouched
    assert s.box_points() == [(2, 2)]


def test_equality_uses_player_region():
    b = parse_level_str(CORRIDOR)
    boxes = b.initial_boxes
    left_a = SearchState.create(b, boxes, b.index(1, 1))
    left_b = SearchState.create(b, boxes, b.index(2, 1))
    right = SearchState.create(b, boxes, b.index(5, 1))
    assert left_a == left_b
    assert hash(left_a) == hash(left_b)
    assert left_a != right
    assert left_a.canonical == b.index(1, 1)
    assert right.canonical == b.index(4, 1)


def test_equality_ignores_history():
    b = parse_level_str(ROOM)
    root = SearchState.root(b)
    there = root.apply(Push(b.index(2, 2), Direction.RIGHT), parent=0)
    back = there.apply(Push(b.index(3, 2), Direction.LEFT), parent=1)
    assert back.depth == 2
    assert back.player != root.player
    assert back == root
    assert hash(back) == hash(root)


def test_canonical_is_smallest_col_then_row():
    b = parse_level_str(LVL)
    s = SearchState.root(b)
    # column 1 is fully reachable; (1, 1) is the smallest cell
    assert s.canonical == b.index(1, 1)


def test_state_not_equal_to_other_types():
    b = parse_level_str(LVL)
    assert SearchState.root(b) != (b.initial_boxes, b.start)
