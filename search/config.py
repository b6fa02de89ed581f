from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

import yaml


@dataclass
class SolverConfig:
    """Budgets and heuristics for one solve.

    heuristic/fallback accept anything `heuristics.selector.get_heuristic` does.
    The fallback phase runs only if the primary phase times out, and continues
    with the same visited set.
    """
    heuristic: Any = "done,distance,player"
    fallback: Any = None
    time_limit_s: Optional[float] = 10.0
    node_limit: Optional[int] = 500000
    fallback_time_limit_s: Optional[float] = None
    fallback_node_limit: Optional[int] = None
    check_every: int = 256
    seed: Optional[int] = 12345

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SolverConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown solver config keys: {sorted(unknown)}")
        cfg = cls(**dict(data))
        if cfg.check_every < 1:
            raise ValueError("check_every must be >= 1")
        return cfg


def load_config(path: str) -> SolverConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if isinstance(data, Mapping) and "solver" in data:
        data = data["solver"]
    if not isinstance(data, Mapping):
        raise ValueError(f"{path}: solver config must be a mapping, got {type(data).__name__}")
    return SolverConfig.from_dict(data)
