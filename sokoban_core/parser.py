from collections import deque
from typing import List

from .board import Board, bit, has_bit, set_bit, popcount
from .errors import MalformedBoardError

TOK_WALL = "#"
TOK_GOAL = "."
TOK_BOX = "$"
TOK_BOX_ON_GOAL = "*"
TOK_PLAYER = "@"
TOK_PLAYER_ON_GOAL = "+"
TOK_VOID = " "
TOK_FLOOR = ("-", "_")


def parse_level_str(level_str: str, seed: int = 12345) -> Board:
    """Parses ASCII level into Board.

    Supported characters:
      '#': wall
      '.': goal
      '$': box
      '*': box on goal
      '@': player
      '+': player on goal
      ' ', '-', '_': floor; blanks connected to the border are outside the level
    Rows may be ragged; they are padded on the right.
    Raises MalformedBoardError if the level is not enclosed, has no (or two)
    players, unknown characters, or more boxes than goals.
    """
    # trailing blanks are outside the level anyway; padding restores them
    lines = [line.rstrip() for line in level_str.splitlines() if line.strip() != ""]
    if not lines:
        raise MalformedBoardError("Empty level")
    height = len(lines)
    width = max(len(line) for line in lines)
    # align lines with space on the right
    lines = [line.ljust(width, TOK_VOID) for line in lines]

    walls = goals = boxes = blanks = 0
    player_idx = -1

    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            idx = r * width + c
            if ch == TOK_WALL:
                walls = set_bit(walls, idx)
            elif ch == TOK_GOAL:
                goals = set_bit(goals, idx)
            elif ch == TOK_BOX:
                boxes = set_bit(boxes, idx)
            elif ch == TOK_BOX_ON_GOAL:
                boxes = set_bit(boxes, idx)
                goals = set_bit(goals, idx)
            elif ch in (TOK_PLAYER, TOK_PLAYER_ON_GOAL):
                if player_idx != -1:
                    raise MalformedBoardError(f"Second player at row {r}, col {c}")
                player_idx = idx
                if ch == TOK_PLAYER_ON_GOAL:
                    goals = set_bit(goals, idx)
            elif ch == TOK_VOID or ch in TOK_FLOOR:
                blanks = set_bit(blanks, idx)
            else:
                raise MalformedBoardError(f"Unexpected character {ch!r} at row {r}, col {c}")

    if player_idx == -1:
        raise MalformedBoardError("No player '@' or '+' found in level")

    outside = _exterior(blanks, width, height)
    walls |= outside
    _check_enclosed(walls, width, height)

    n_boxes, n_goals = popcount(boxes), popcount(goals)
    if n_boxes > n_goals:
        raise MalformedBoardError(f"More boxes ({n_boxes}) than goals ({n_goals})")

    return Board.build(width=width, height=height, walls=walls, goals=goals,
                       start=player_idx, boxes=boxes, outside=outside, seed=seed)


def parse_level_file(path: str) -> Board:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level_str(f.read())


def _exterior(blanks: int, width: int, height: int) -> int:
    """Blank cells reachable from the grid border through blank cells only."""
    border: List[int] = []
    for c in range(width):
        border += [c, (height - 1) * width + c]
    for r in range(height):
        border += [r * width, r * width + width - 1]

    outside = 0
    q = deque()
    for idx in border:
        if has_bit(blanks, idx) and not has_bit(outside, idx):
            outside = set_bit(outside, idx)
            q.append(idx)
    while q:
        cur = q.popleft()
        r, c = divmod(cur, width)
        for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if 0 <= nr < height and 0 <= nc < width:
                nb = nr * width + nc
                if has_bit(blanks, nb) and not has_bit(outside, nb):
                    outside |= bit(nb)
                    q.append(nb)
    return outside


def _check_enclosed(walls: int, width: int, height: int) -> None:
    for r in range(height):
        for c in range(width):
            if 0 < r < height - 1 and 0 < c < width - 1:
                continue
            if not has_bit(walls, r * width + c):
                raise MalformedBoardError(f"Level is not enclosed by walls at row {r}, col {c}")
