from __future__ import annotations
from typing import Dict, Mapping, Optional, Type, Union

from heuristics.base import Heuristic, MetricHeuristic, MultipleHeuristic, RandomHeuristic, WeightedHeuristic
from heuristics.classic import (
    BoxesOnGoals,
    GoalDistance,
    GoalScore,
    MatchingDistance,
    MoveCount,
    PlayerGoalDistance,
    SquaredDistance,
)

METRICS: Dict[str, Type[MetricHeuristic]] = {
    cls.name: cls
    for cls in (BoxesOnGoals, GoalDistance, MatchingDistance, SquaredDistance,
                PlayerGoalDistance, MoveCount, GoalScore)
}

HeuristicSpec = Union[str, list, Mapping]


def _single(name: str, seed: Optional[int]) -> Heuristic:
    name = name.strip().lower()
    if name == RandomHeuristic.name:
        return RandomHeuristic(seed)
    if name not in METRICS:
        raise ValueError(f"unknown heuristic: {name}")
    return METRICS[name]()


def _metric(name: str) -> MetricHeuristic:
    name = name.strip().lower()
    if name not in METRICS:
        raise ValueError(f"unknown metric heuristic: {name}")
    return METRICS[name]()


def get_heuristic(spec: HeuristicSpec, seed: Optional[int] = None) -> Heuristic:
    """Builds a heuristic from a name, a chain or a config mapping.

      "distance"                 -> GoalDistance
      "done,distance,player"     -> MultipleHeuristic in that priority order
      ["done", {"name": "corner", "min_moves": 40}]
      {"chain": [...]}           -> same as a list
      {"weighted": {"distance": 1.0, "squared": 0.1}}
    """
    if isinstance(spec, str):
        names = [n for n in spec.split(",") if n.strip()]
        if not names:
            raise ValueError("empty heuristic spec")
        if len(names) == 1:
            return _single(names[0], seed)
        return MultipleHeuristic(_single(n, seed) for n in names)
    if isinstance(spec, list):
        multi = MultipleHeuristic()
        for entry in spec:
            if isinstance(entry, Mapping):
                if "name" not in entry:
                    raise ValueError(f"chain entry without a name: {entry!r}")
                multi.add(_single(entry["name"], seed),
                          min_moves=entry.get("min_moves"),
                          max_moves=entry.get("max_moves"))
            else:
                multi.add(get_heuristic(entry, seed))
        return multi
    if isinstance(spec, Mapping):
        if "chain" in spec:
            return get_heuristic(list(spec["chain"]), seed)
        if "weighted" in spec:
            return WeightedHeuristic([(_metric(n), float(w)) for n, w in spec["weighted"].items()])
        if "name" in spec:
            return _single(spec["name"], seed)
    raise ValueError(f"unknown heuristic spec: {spec!r}")
