from __future__ import annotations
from typing import Tuple

from ..board import Board
from ..parser import parse_level_str
from .io import split_levels


def parse_level_id(level_id: str) -> Tuple[str, int]:
    """'path/to/pack.txt#3' -> ('path/to/pack.txt', 3); without '#' the first level."""
    path, sep, idx = level_id.rpartition("#")
    if not sep:
        return level_id, 0
    if not idx.strip().lstrip("-").isdigit():
        raise ValueError(f"Bad level index {idx!r} in {level_id!r}")
    return path, int(idx)


def load_level_text(level_id: str) -> str:
    """Text of one level of a pack file, picked by its position in the file."""
    path, wanted = parse_level_id(level_id)
    with open(path, "r", encoding="utf-8") as f:
        levels = split_levels(f.read())
    if not levels:
        raise ValueError(f"No levels found in {path}")
    if not 0 <= wanted < len(levels):
        raise IndexError(f"Index {wanted} out of range for {path} (total {len(levels)})")
    return levels[wanted]


def load_level_by_id(level_id: str) -> Board:
    return parse_level_str(load_level_text(level_id))
