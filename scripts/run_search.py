from __future__ import annotations
import argparse
import logging
import os

from sokoban_core.directions import format_moves
from sokoban_core.levels.resolve import load_level_by_id
from sokoban_core.moves import replay
from sokoban_core.render import render_board
from search.config import SolverConfig, load_config
from search.reconstruct import render_chain
from search.solve import solve


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Solve one level with best-first search")
    p.add_argument(
        "level_id",
        help="Level id like 'path/to/pack.txt#idx'.",
    )
    p.add_argument("--config", type=str, default="configs/solver.yaml", help="solver yaml")
    p.add_argument("--h", type=str, default=None, help="heuristic chain, e.g. 'done,distance,player'")
    p.add_argument("--fallback", type=str, default=None, help="heuristic for the second phase")
    p.add_argument("--time_limit", type=float, default=None)
    p.add_argument("--node_limit", type=int, default=None)
    p.add_argument("--show_path", action="store_true", help="print the board after every push")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def config_from_args(args: argparse.Namespace) -> SolverConfig:
    """Config file (defaults if it does not exist) with command-line overrides."""
    cfg = load_config(args.config) if os.path.exists(args.config) else SolverConfig()
    if args.h is not None:
        cfg.heuristic = args.h
    if args.fallback is not None:
        cfg.fallback = args.fallback
    if args.time_limit is not None:
        cfg.time_limit_s = args.time_limit
    if args.node_limit is not None:
        cfg.node_limit = args.node_limit
    return cfg


def main():
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    cfg = config_from_args(args)
    board = load_level_by_id(args.level_id)
    print(render_board(board))

    res = solve(board, cfg)
    print("Result:", {k: v for k, v in res.items() if k not in ("path", "pushes", "moves")})
    if res.get("success"):
        if args.show_path:
            for i, txt in enumerate(render_chain(res["path"])):  # type: ignore
                print(f"\n-- push {i} --\n{txt}")
        boxes, _ = replay(board, board.initial_boxes, board.start, res["moves"])  # type: ignore
        print(format_moves(res["moves"]))  # type: ignore
        print("verified:", boxes & ~board.goals == 0)

if __name__ == "__main__":
    main()
