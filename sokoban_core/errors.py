from __future__ import annotations
from typing import Dict, Optional


class SokobanError(Exception):
    """Base class for solver errors."""


class MalformedBoardError(SokobanError, ValueError):
    """Level text cannot be turned into an enclosed, playable board."""


class SearchFailed(SokobanError):
    """The search ended without a solution. `result` is the search result dict."""

    def __init__(self, message: str, result: Optional[Dict[str, object]] = None) -> None:
        super().__init__(message)
        self.result = result or {}


class SearchExhausted(SearchFailed):
    """Every reachable configuration was inspected: the level has no solution."""


class SearchTimeout(SearchFailed):
    """Node or time budget ran out before the search finished."""
