from __future__ import annotations
import argparse, yaml

from sokoban_core.board import popcount
from sokoban_core.errors import MalformedBoardError
from sokoban_core.levels.io import iterate_level_strings, filter_level
from sokoban_core.parser import parse_level_str
from sokoban_core.state import SearchState


def main():
    p = argparse.ArgumentParser(description="Parse level packs, report static analysis and start deadlocks")
    p.add_argument("--config", type=str, default="configs/data.yaml")
    args = p.parse_args()

    with open(args.config, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    flt = cfg.get("filters", {})
    counts = {"ok": 0, "filtered": 0, "malformed": 0, "dead_start": 0}
    for ref, s in iterate_level_strings(cfg["levels"]["root_dir"], cfg["levels"]["sources"]):
        name = ref.level_id
        try:
            board = parse_level_str(s)
        except MalformedBoardError as e:
            counts["malformed"] += 1
            print(f"[malformed] {name}: {e}")
            continue
        if not filter_level(s, max_w=flt.get("max_width"), max_h=flt.get("max_height"),
                            min_b=flt.get("min_boxes"), max_b=flt.get("max_boxes")):
            counts["filtered"] += 1
            print(f"[filtered] {name}: {board.width}x{board.height}, {popcount(board.initial_boxes)} boxes")
            continue
        if SearchState.root(board).is_deadlocked():
            counts["dead_start"] += 1
            print(f"[deadlocked] {name}")
            continue
        counts["ok"] += 1
        print(f"[ok] {name}: {board.width}x{board.height}, {popcount(board.initial_boxes)} boxes, "
              f"{popcount(board.forbidden)} forbidden squares")
    print(", ".join(f"{k}: {v}" for k, v in counts.items()))

if __name__ == "__main__":
    main()
