"""
Win Probability Estimator

Two independent estimates for the player to move:
- estimate_by_rollout: per-column Monte-Carlo playouts with uniformly random moves
- estimate_current: a fast line-scan heuristic mapped onto a 5-95% scale
"""

import logging
import random
from typing import List, Optional

from connect_five.engine.board import Board
from connect_five.engine.cancellation import CancellationToken, check_cancelled
from connect_five.engine.constants import (
    MAX_PROBABILITY,
    MAX_ROLLOUT_PLIES,
    MAX_ROLLOUT_SIMULATIONS,
    MAX_SIMULATIONS_PER_COLUMN,
    MIN_PROBABILITY,
    opponent_of,
)
from connect_five.engine.evaluators import iter_window_counts
from connect_five.models.enums import GameStatus
from connect_five.models.game_state import GameState
from connect_five.schemas.game_schema import ColumnProbability

logger = logging.getLogger(__name__)

# Quick scoring: piece count -> weight (mixed windows score 0)
QUICK_WEIGHTS = {4: 100, 3: 20, 2: 5}


class WinProbabilityEstimator:
    def __init__(self, rng: Optional[random.Random] = None,
                 max_simulations: int = MAX_ROLLOUT_SIMULATIONS,
                 max_per_column: int = MAX_SIMULATIONS_PER_COLUMN,
                 max_plies: int = MAX_ROLLOUT_PLIES):
        self.rng = rng or random.Random()
        self.max_simulations = max_simulations
        self.max_per_column = max_per_column
        self.max_plies = max_plies

    def simulations_per_column(self, simulations: int, column_count: int) -> int:
        """
        Splits the (capped) budget evenly across columns, at most max_per_column
        each and at least one.
        """
        budget = min(simulations, self.max_simulations)
        if column_count == 0:
            return 0
        return max(1, min(self.max_per_column, budget // column_count))

    def estimate_by_rollout(self, state: GameState, simulations: int = 1000,
                            cancel_token: Optional[CancellationToken] = None) -> List[ColumnProbability]:
        """
        Win percentage of the player to move for each playable column,
        sorted from most to least promising. Full columns are left out.
        """
        if simulations < 1:
            raise ValueError(f"simulations must be positive, got {simulations}")

        valid_columns = state.board.get_valid_moves()
        runs = self.simulations_per_column(simulations, len(valid_columns))
        mover_id = state.current_player.id

        probabilities = []
        for column in valid_columns:
            wins = 0
            for _ in range(runs):
                check_cancelled(cancel_token)
                if self.simulate_game(state.board, column, mover_id) == mover_id:
                    wins += 1
            probabilities.append(ColumnProbability(column=column, probability=wins / runs * 100))

        logger.debug("Rollouts: %s columns x %s simulations for player %s", len(valid_columns), runs, mover_id)
        # sorted() is stable, ties keep column order
        return sorted(probabilities, key=lambda p: p.probability, reverse=True)

    def simulate_game(self, board: Board, first_column: int, mover_id: int) -> Optional[int]:
        """
        Plays first_column for mover_id, then random moves for both sides.
        Returns the winner's id, or None for a draw or when the ply cap is hit.
        """
        board, row = board.drop_piece(first_column, mover_id)
        if board.check_win(row, first_column, mover_id):
            return mover_id

        player_id = opponent_of(mover_id)
        for _ in range(self.max_plies):
            valid_moves = board.get_valid_moves()
            if not valid_moves:
                return None

            column = self.rng.choice(valid_moves)
            board, row = board.drop_piece(column, player_id)
            if board.check_win(row, column, player_id):
                return player_id
            player_id = opponent_of(player_id)

        return None

    def estimate_current(self, state: GameState) -> float:
        """Percentage chance for state.current_player to win."""
        if state.status != GameStatus.IN_PROGRESS:
            winner = state.winner
            return 100.0 if winner is not None and winner.id == state.current_player.id else 0.0

        player_id = state.current_player.id
        opponent_id = opponent_of(player_id)
        player_score = self.quick_score(state.board, player_id)
        opponent_score = self.quick_score(state.board, opponent_id)

        score_diff = player_score - opponent_score
        probability = 50 + (score_diff / 100.0) * 10

        # Clamp between 5% and 95%
        return max(MIN_PROBABILITY, min(MAX_PROBABILITY, probability))

    def quick_score(self, board: Board, player_id: int) -> int:
        score = 0
        for own, other in iter_window_counts(board, player_id, opponent_of(player_id)):
            if own and other:
                continue
            if own:
                score += QUICK_WEIGHTS.get(own, 0)
            elif other:
                score -= QUICK_WEIGHTS.get(other, 0)
        return score
