from __future__ import annotations
from abc import ABC, abstractmethod
import random
from typing import Iterable, List, Optional, Sequence, Tuple, Union


def _in_range(depth: int, lo: Optional[int], hi: Optional[int]) -> bool:
    if lo is not None and depth < lo:
        return False
    if hi is not None and depth >= hi:
        return False
    return True


class Heuristic(ABC):
    """Total ordering over search states: negative when `a` should be expanded first.

    Orderings come from a per-state sort key (smaller is expanded first), so
    every heuristic is a strict weak ordering and composes without cycles.
    """

    name: str = "base"

    @abstractmethod
    def key(self, state):
        ...

    def compare(self, a, b) -> int:
        ka, kb = self.key(a), self.key(b)
        return (ka > kb) - (ka < kb)

    def __call__(self, a, b) -> int:
        return self.compare(a, b)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MetricHeuristic(Heuristic):
    """Heuristic derived from a per-state number.

    Values are memoised on the state under `name`, so a state is evaluated once
    no matter how often the frontier compares it.
    """

    maximize: bool = False

    @abstractmethod
    def evaluate(self, state) -> float:
        ...

    def value(self, state) -> float:
        return state.memo(self.name, self.evaluate)

    def signed(self, state) -> float:
        """Value oriented so that smaller is better."""
        v = self.value(state)
        return -v if self.maximize else v

    def key(self, state) -> float:
        return self.signed(state)


# ranks after every in-range key of the same entry
_OUT_OF_RANGE = (1,)


class MultipleHeuristic(Heuristic):
    """Applies heuristics in priority order; the first non-zero comparison wins.

    An entry may be limited to a range of move counts [min_moves, max_moves).
    A state outside the range gets a sentinel for that entry that ranks after
    every state inside it; two states outside the range tie on the entry.
    Ties left after all entries go to the state with fewer moves.
    """

    name = "multiple"

    def __init__(self, heuristics: Iterable[Heuristic] = ()) -> None:
        self.entries: List[Tuple[Heuristic, Optional[int], Optional[int]]] = []
        for h in heuristics:
            self.add(h)

    def add(self, heuristic: Heuristic, min_moves: Optional[int] = None,
            max_moves: Optional[int] = None) -> "MultipleHeuristic":
        self.entries.append((heuristic, min_moves, max_moves))
        return self

    def key(self, state) -> tuple:
        parts = []
        for heuristic, lo, hi in self.entries:
            if _in_range(state.depth, lo, hi):
                parts.append((0, heuristic.key(state)))
            else:
                parts.append(_OUT_OF_RANGE)
        parts.append(state.depth)
        return tuple(parts)

    def __repr__(self) -> str:
        return f"MultipleHeuristic({[e[0] for e in self.entries]!r})"


class WeightedHeuristic(Heuristic):
    """Linear combination of metric heuristics (each oriented smaller-is-better)."""

    name = "weighted"

    def __init__(self, terms: Sequence[Tuple[MetricHeuristic, float]] = ()) -> None:
        self.terms: List[Tuple[MetricHeuristic, float]] = list(terms)

    def add(self, heuristic: MetricHeuristic, weight: float = 1.0) -> "WeightedHeuristic":
        self.terms.append((heuristic, weight))
        return self

    def score(self, state) -> float:
        return sum(weight * h.signed(state) for h, weight in self.terms)

    def key(self, state) -> float:
        return self.score(state)

    def __repr__(self) -> str:
        return f"WeightedHeuristic({self.terms!r})"


class RandomHeuristic(MetricHeuristic):
    """Random priority per state, drawn once from a seeded generator. Baseline only."""

    name = "random"

    def __init__(self, seed: Union[int, None] = None) -> None:
        self.rng = random.Random(seed)

    def evaluate(self, state) -> float:
        return self.rng.random()
