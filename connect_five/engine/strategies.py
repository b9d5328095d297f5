"""
AI Decision Strategies

One strategy per difficulty:
- EasyStrategy: win, else block, else a random column weighted toward the centre
- MediumStrategy: win, else block, else a uniformly random column
- HardStrategy: alpha-beta minimax with a personality-specific evaluator

Strategies keep no state between calls apart from their random generator,
which can be injected (seeded) for reproducible play.
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional

from connect_five.engine.board import Board
from connect_five.engine.cancellation import CancellationToken, check_cancelled
from connect_five.engine.constants import CENTER_WEIGHT, SEARCH_DEPTH, center_columns
from connect_five.engine.evaluators import BoardEvaluator, create_evaluator
from connect_five.engine.search import MinimaxSearch, SearchResult
from connect_five.models.enums import AIDifficulty, AIPersonality
from connect_five.models.game_state import GameState

logger = logging.getLogger(__name__)


def find_winning_move(board: Board, player_id: int) -> Optional[int]:
    """First column (left to right) where player_id wins immediately, if any."""
    for col in board.get_valid_moves():
        if board.is_winning_move(col, player_id):
            return col
    return None


class AIStrategy(ABC):
    """Abstract base class for move selection"""

    difficulty: AIDifficulty

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @abstractmethod
    def next_move(self, state: GameState, cancel_token: Optional[CancellationToken] = None) -> int:
        """Returns the column to play for state.current_player."""
        pass


class ReactiveStrategy(AIStrategy):
    """Takes an immediate win, then blocks an immediate loss, then falls back to chance."""

    def next_move(self, state: GameState, cancel_token: Optional[CancellationToken] = None) -> int:
        check_cancelled(cancel_token)
        board = state.board
        valid_moves = board.get_valid_moves()
        if not valid_moves:
            logger.warning("%s strategy called with no valid moves", self.difficulty)
            return 0

        # 1. Try to win
        winning_move = find_winning_move(board, state.current_player.id)
        if winning_move is not None:
            logger.debug("%s AI takes winning column %s", self.difficulty, winning_move)
            return winning_move

        # 2. Block opponent's winning move
        blocking_move = find_winning_move(board, state.opponent.id)
        if blocking_move is not None:
            logger.debug("%s AI blocks column %s", self.difficulty, blocking_move)
            return blocking_move

        # 3. Nothing critical on the board
        move = self.rng.choice(self.selection_pool(board, valid_moves))
        logger.debug("%s AI plays random column %s", self.difficulty, move)
        return move

    def selection_pool(self, board: Board, valid_moves: List[int]) -> List[int]:
        return valid_moves


class EasyStrategy(ReactiveStrategy):
    difficulty = AIDifficulty.EASY

    def selection_pool(self, board: Board, valid_moves: List[int]) -> List[int]:
        # Centre columns are entered CENTER_WEIGHT times each
        centre = center_columns(board.columns)
        pool = []
        for col in valid_moves:
            pool.extend([col] * (CENTER_WEIGHT if col in centre else 1))
        return pool


class MediumStrategy(ReactiveStrategy):
    difficulty = AIDifficulty.MEDIUM


class HardStrategy(AIStrategy):
    difficulty = AIDifficulty.HARD

    def __init__(self, personality: AIPersonality = AIPersonality.BALANCED,
                 evaluator: Optional[BoardEvaluator] = None,
                 depth: int = SEARCH_DEPTH,
                 rng: Optional[random.Random] = None):
        super().__init__(rng)
        self.personality = AIPersonality(personality)
        self.evaluator = evaluator or create_evaluator(self.personality, self.rng)
        self.search_engine = MinimaxSearch(self.evaluator, depth=depth, rng=self.rng)
        self.last_result: Optional[SearchResult] = None

    @property
    def depth(self) -> int:
        return self.search_engine.depth

    def next_move(self, state: GameState, cancel_token: Optional[CancellationToken] = None) -> int:
        result = self.search_engine.search(state.board, state.current_player.id, cancel_token)
        self.last_result = result
        return result.best_move
