from __future__ import annotations
import argparse, csv, os, time
from typing import Dict
from multiprocessing import Pool, cpu_count
from tqdm import tqdm

from sokoban_core.directions import format_moves
from sokoban_core.errors import MalformedBoardError
from sokoban_core.levels.resolve import load_level_by_id
from search.config import SolverConfig, load_config
from search.solve import solve

FIELDS = ["level_id", "heuristic", "status", "phase", "nodes", "visited", "runtime", "solution_len", "moves"]


def _run_one(args_tuple) -> Dict[str, object]:
    level_id, cfg = args_tuple
    row: Dict[str, object] = {"level_id": level_id, "heuristic": str(cfg.heuristic), "status": "error",
                              "phase": "", "nodes": 0, "visited": 0, "runtime": 0.0, "solution_len": -1, "moves": ""}
    try:
        board = load_level_by_id(level_id)
    except (OSError, IndexError, MalformedBoardError) as e:
        row["status"] = f"error: {e}"
        return row
    res = solve(board, cfg)
    row.update({
        "status": res["status"],
        "phase": res.get("phase", ""),
        "nodes": int(res["nodes"]),
        "visited": int(res["visited"]),
        "runtime": float(res["runtime"]),
        "solution_len": int(res.get("solution_len", -1)),
        "moves": format_moves(res.get("moves", [])),
    })
    return row


def main():
    p = argparse.ArgumentParser(description="Batch best-first runs → CSV (flags, parallel)")
    p.add_argument("--list", required=True, help="file with one level id per line")
    p.add_argument("--config", default="configs/solver.yaml")
    p.add_argument("--h", default=None, help="override the primary heuristic chain")
    p.add_argument("--out", default="results/batch.csv")
    p.add_argument("--time_limit", type=float, default=None)
    p.add_argument("--node_limit", type=int, default=None)
    p.add_argument("--jobs", type=int, default=0, help="processes (0→cpu_count)")
    args = p.parse_args()

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)

    cfg = load_config(args.config) if os.path.exists(args.config) else SolverConfig()
    if args.h is not None:
        cfg.heuristic = args.h
    if args.time_limit is not None:
        cfg.time_limit_s = args.time_limit
    if args.node_limit is not None:
        cfg.node_limit = args.node_limit

    with open(args.list, "r", encoding="utf-8") as f:
        level_ids = [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith(";")]

    jobs = args.jobs or cpu_count()
    payload = [(lid, cfg) for lid in level_ids]

    started = time.time()
    if jobs == 1:
        rows = [_run_one(t) for t in tqdm(payload, desc="Solving", unit="level")]
    else:
        with Pool(processes=jobs) as pool:
            rows = list(tqdm(pool.imap_unordered(_run_one, payload), total=len(payload), desc="Solving", unit="level"))

    with open(args.out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)

    solved = sum(1 for r in rows if r["status"] == "solved")
    print(f"done: {solved}/{len(rows)} solved → {args.out}; total_time={time.time()-started:.2f}s; jobs={jobs}")


if __name__ == "__main__":
    main()
