from __future__ import annotations
from typing import List

import numpy as np
from scipy.optimize import linear_sum_assignment

from sokoban_core.board import Board, iter_bits
from sokoban_core.state import SearchState
from heuristics.base import MetricHeuristic


# ---- helpers

def squared_distance(board: Board, a: int, b: int) -> int:
    (ac, ar), (bc, br) = board.point(a), board.point(b)
    return (ac - bc) ** 2 + (ar - br) ** 2


def _cost_matrix(board: Board, boxes: List[int]) -> np.ndarray:
    """Push distances, boxes x goals."""
    return board.push_dist[:, boxes].T


def greedy_goal_distance(board: Board, boxes: int) -> int:
    """Each box takes the nearest goal still free, shortest pairs first."""
    box_list = list(iter_bits(boxes))
    if not box_list:
        return 0
    cost = _cost_matrix(board, box_list)
    order = np.argsort(cost, axis=None, kind="stable")
    n_goals = cost.shape[1]
    used_boxes = set()
    used_goals = set()
    total = 0
    for flat in order:
        i, g = divmod(int(flat), n_goals)
        if i in used_boxes or g in used_goals:
            continue
        used_boxes.add(i)
        used_goals.add(g)
        total += int(cost[i, g])
        if len(used_boxes) == len(box_list):
            break
    return total


def matching_goal_distance(board: Board, boxes: int) -> int:
    """Cost = optimal matching of boxes → goals by push distance (a lower bound on pushes)."""
    box_list = list(iter_bits(boxes))
    if not box_list:
        return 0
    C = _cost_matrix(board, box_list)
    r, c = linear_sum_assignment(C)
    return int(C[r, c].sum())


# ---- classical heuristics

class BoxesOnGoals(MetricHeuristic):
    name = "done"
    maximize = True

    def evaluate(self, state: SearchState) -> int:
        return state.num_boxes_on_goals


class GoalDistance(MetricHeuristic):
    name = "distance"

    def evaluate(self, state: SearchState) -> int:
        return greedy_goal_distance(state.board, state.boxes)


class MatchingDistance(MetricHeuristic):
    name = "matching"

    def evaluate(self, state: SearchState) -> int:
        return matching_goal_distance(state.board, state.boxes)


class SquaredDistance(MetricHeuristic):
    """Sum over boxes of squared straight-line distances to every goal. Cheap, ignores walls."""
    name = "squared"

    def evaluate(self, state: SearchState) -> int:
        board = state.board
        return sum(squared_distance(board, b, g)
                   for b in state.box_indices() for g in board.goal_list)


class PlayerGoalDistance(MetricHeuristic):
    name = "player"

    def evaluate(self, state: SearchState) -> int:
        return state.board.player_goal_dist[state.player]


class MoveCount(MetricHeuristic):
    name = "moves"

    def evaluate(self, state: SearchState) -> int:
        return state.depth

    def value(self, state) -> int:
        return state.depth


class GoalScore(MetricHeuristic):
    """Prefers states that filled goals tucked into corners and alcoves."""
    name = "corner"
    maximize = True

    def evaluate(self, state: SearchState) -> int:
        board = state.board
        return sum(board.scores[b] for b in iter_bits(state.boxes & board.goals))
