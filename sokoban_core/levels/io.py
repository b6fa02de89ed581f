from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Optional
import os

from sokoban_core.errors import MalformedBoardError
from sokoban_core.parser import parse_level_str, TOK_BOX, TOK_BOX_ON_GOAL

COMMENT = ";"


@dataclass
class LevelRef:
    path: str
    index: int  # position of the level inside its pack file

    @property
    def level_id(self) -> str:
        """Id accepted by `resolve.load_level_by_id`."""
        return f"{self.path}#{self.index}"


def split_levels(text: str) -> List[str]:
    """Split a level pack into level strings.

    A level ends at a blank line or at a ';' line (titles, level numbers).
    """
    blocks: List[str] = []
    cur: List[str] = []

    def flush() -> None:
        if cur:
            blocks.append("\n".join(cur))
            cur.clear()

    for raw in text.splitlines():
        line = raw.rstrip()
        if not line or line.lstrip().startswith(COMMENT):
            flush()
        else:
            cur.append(line)
    flush()
    return blocks


def iterate_level_strings(root_dir: str, rel_dirs: List[str]) -> Iterator[Tuple[LevelRef, str]]:
    """Yields (ref, level string) for every level of every .txt pack in the given subfolders.

    Missing folders are skipped; files are visited in name order.
    """
    for rel in rel_dirs:
        abs_dir = os.path.join(root_dir, rel)
        if not os.path.isdir(abs_dir):
            continue
        packs = sorted(fn for fn in os.listdir(abs_dir) if fn.endswith(".txt"))
        for fname in packs:
            fpath = os.path.join(abs_dir, fname)
            with open(fpath, "r", encoding="utf-8") as f:
                levels = split_levels(f.read())
            for i, level_str in enumerate(levels):
                yield LevelRef(path=fpath, index=i), level_str


def count_boxes(level_str: str) -> int:
    return level_str.count(TOK_BOX) + level_str.count(TOK_BOX_ON_GOAL)


def dims(level_str: str) -> Tuple[int, int]:
    """(width, height) of the text, ignoring blank lines and trailing blanks."""
    rows = [ln.rstrip() for ln in level_str.splitlines() if ln.strip()]
    return max(map(len, rows), default=0), len(rows)


def filter_level(level_str: str, *, max_w: Optional[int], max_h: Optional[int],
                 min_b: Optional[int], max_b: Optional[int]) -> bool:
    """Size and box-count limits (None = unbounded); the level must also parse."""
    w, h = dims(level_str)
    b = count_boxes(level_str)
    if max_w is not None and w > max_w:
        return False
    if max_h is not None and h > max_h:
        return False
    if min_b is not None and b < min_b:
        return False
    if max_b is not None and b > max_b:
        return False
    try:
        parse_level_str(level_str)
    except MalformedBoardError:
        return False
    return True
