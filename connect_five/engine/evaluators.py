"""
Board Evaluators - heuristic scoring of non-terminal positions

All evaluators share one window-scanning template (BoardEvaluator.evaluate):
for each of the four line orientations a win_length window is slid over
every start cell where it fits on the board. A window holding pieces of both
sides is blocked and scores 0; otherwise the side present earns the weight
for its piece count. The same pass adds a positional bonus for AI pieces.

Personalities only differ in their hooks:
- ai_weights / opponent_weights: piece count -> weight
- position_bonus(): per-cell bonus for AI pieces
- adjust_total(): final adjustment of the summed score

Positive scores favour the AI seat.
"""

import random
from abc import ABC
from functools import lru_cache
from typing import Dict, Iterator, Optional, Tuple

from connect_five.engine.board import Board
from connect_five.engine.constants import DIRECTIONS, center_columns, opponent_of
from connect_five.models.enums import AIPersonality

Window = Tuple[Tuple[int, int], ...]


@lru_cache(maxsize=None)
def line_windows(rows: int, columns: int, length: int) -> Tuple[Window, ...]:
    """
    Every window of `length` cells that fits on the board, for all four
    orientations, ordered orientation by orientation then row-major by start cell.
    """
    windows = []
    for dr, dc in DIRECTIONS:
        for row in range(rows):
            for col in range(columns):
                end_r = row + dr * (length - 1)
                end_c = col + dc * (length - 1)
                if 0 <= end_r < rows and 0 <= end_c < columns:
                    windows.append(tuple((row + dr * i, col + dc * i) for i in range(length)))
    return tuple(windows)


def iter_window_counts(board: Board, player_id: int, opponent_id: int) -> Iterator[Tuple[int, int]]:
    """Yields (player pieces, opponent pieces) for every window on the board."""
    for window in line_windows(board.rows, board.columns, board.win_length):
        values = [board.get_cell(r, c) for r, c in window]
        yield values.count(player_id), values.count(opponent_id)


class BoardEvaluator(ABC):
    """Shared line-scanning template. Subclasses configure the hooks."""

    personality: AIPersonality
    ai_weights: Dict[int, int] = {}
    opponent_weights: Dict[int, int] = {}

    def evaluate(self, board: Board, ai_player_id: int) -> int:
        opponent_id = opponent_of(ai_player_id)
        score = 0

        for ai_count, opponent_count in iter_window_counts(board, ai_player_id, opponent_id):
            score += self.score_window(ai_count, opponent_count)

        # The positional bonus is collected once per orientation pass
        position_bonus = 0
        for row in range(board.rows):
            for col in range(board.columns):
                position_bonus += self.position_bonus(board, row, col, ai_player_id)
        score += position_bonus * len(DIRECTIONS)

        return self.adjust_total(score)

    def score_window(self, ai_count: int, opponent_count: int) -> int:
        # Mixed windows have no potential
        if ai_count > 0 and opponent_count > 0:
            return 0
        if ai_count:
            return self.ai_weights.get(ai_count, 0)
        if opponent_count:
            return self.opponent_weights.get(opponent_count, 0)
        return 0

    def position_bonus(self, board: Board, row: int, col: int, ai_player_id: int) -> int:
        return 0

    def adjust_total(self, score: int) -> int:
        return score

    def __call__(self, board: Board, ai_player_id: int) -> int:
        return self.evaluate(board, ai_player_id)


class CenterBonusMixin:
    center_bonus = 1

    def position_bonus(self, board: Board, row: int, col: int, ai_player_id: int) -> int:
        if col in center_columns(board.columns) and board.get_cell(row, col) == ai_player_id:
            return self.center_bonus
        return 0


class BalancedEvaluator(CenterBonusMixin, BoardEvaluator):
    personality = AIPersonality.BALANCED
    ai_weights = {5: 100000, 4: 5000, 3: 500, 2: 50, 1: 5}
    opponent_weights = {5: -80000, 4: -4000, 3: -400, 2: -40, 1: -4}
    center_bonus = 1


class AggressiveEvaluator(CenterBonusMixin, BoardEvaluator):
    """Pushes its own lines harder and worries less about the opponent's."""
    personality = AIPersonality.AGGRESSIVE
    ai_weights = {5: 150000, 4: 8000, 3: 800, 2: 80, 1: 8}
    opponent_weights = {5: -80000, 4: -3000, 3: -200, 2: -20, 1: -2}
    center_bonus = 2


class DefensiveEvaluator(BoardEvaluator):
    """Weighs opponent lines above its own; no positional preference."""
    personality = AIPersonality.DEFENSIVE
    ai_weights = {5: 100000, 4: 3000, 3: 300, 2: 30, 1: 3}
    opponent_weights = {5: -120000, 4: -6500, 3: -650, 2: -65, 1: -6}


class TrickyEvaluator(BoardEvaluator):
    """
    Slightly reduced weights, a preference for the outermost columns and
    random jitter both per window and on the total.
    """
    personality = AIPersonality.TRICKY
    ai_weights = {5: 100000, 4: 4500, 3: 450, 2: 45, 1: 4}
    opponent_weights = {5: -80000, 4: -3500, 3: -350, 2: -35, 1: -3}
    edge_bonus = 5
    window_jitter = 10

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def score_window(self, ai_count: int, opponent_count: int) -> int:
        if ai_count > 0 and opponent_count > 0:
            return 0
        score = super().score_window(ai_count, opponent_count)
        return score + self.rng.randint(-self.window_jitter, self.window_jitter)

    def position_bonus(self, board: Board, row: int, col: int, ai_player_id: int) -> int:
        if col in (0, board.columns - 1) and board.get_cell(row, col) == ai_player_id:
            return self.edge_bonus
        return 0

    def adjust_total(self, score: int) -> int:
        # +-10% variance
        spread = abs(score) // 10
        return score + self.rng.randint(-spread, spread)


EVALUATORS = {
    AIPersonality.BALANCED: BalancedEvaluator,
    AIPersonality.AGGRESSIVE: AggressiveEvaluator,
    AIPersonality.DEFENSIVE: DefensiveEvaluator,
    AIPersonality.TRICKY: TrickyEvaluator,
}


def create_evaluator(personality: AIPersonality = AIPersonality.BALANCED,
                     rng: Optional[random.Random] = None) -> BoardEvaluator:
    """Returns the evaluator for a personality. rng only matters for TRICKY."""
    evaluator_cls = EVALUATORS.get(AIPersonality(personality))
    if evaluator_cls is None:
        raise ValueError(f"Unsupported personality: {personality}")
    if evaluator_cls is TrickyEvaluator:
        return TrickyEvaluator(rng)
    return evaluator_cls()
