import random
import unittest
from collections import Counter

from connect_five.core.errors import SearchCancelledError
from connect_five.engine.board import Board
from connect_five.engine.cancellation import CancellationToken
from connect_five.engine.win_probability import WinProbabilityEstimator
from connect_five.models.enums import GameStatus
from tests.helpers import COMPUTER, HUMAN, board_with, state_for


class CountingEstimator(WinProbabilityEstimator):
    """Records every rollout instead of only counting wins."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = Counter()

    def simulate_game(self, board, first_column, mover_id):
        self.calls[first_column] += 1
        return super().simulate_game(board, first_column, mover_id)


class TestRolloutEstimate(unittest.TestCase):
    def setUp(self):
        self.estimator = CountingEstimator(rng=random.Random(42))

    def test_full_columns_are_skipped(self):
        cells = [(r, 0, 1 if r % 2 else 2) for r in range(9)]
        result = self.estimator.estimate_by_rollout(state_for(board_with(cells)))
        self.assertEqual(sorted(p.column for p in result), list(range(1, 9)))
        self.assertNotIn(0, self.estimator.calls)

    def test_sorted_best_first(self):
        result = self.estimator.estimate_by_rollout(state_for(board_with([(8, 4, 1), (7, 4, 2)])))
        probabilities = [p.probability for p in result]
        self.assertEqual(probabilities, sorted(probabilities, reverse=True))
        for p in probabilities:
            self.assertTrue(0 <= p <= 100)

    def test_simulation_caps(self):
        self.estimator.estimate_by_rollout(state_for(Board()), simulations=1000)
        self.assertEqual(len(self.estimator.calls), 9)
        self.assertLessEqual(max(self.estimator.calls.values()), 20)
        self.assertLessEqual(sum(self.estimator.calls.values()), 100)

    def test_per_column_cap_with_few_columns(self):
        # Only columns 6, 7, 8 open
        cells = [(r, c, 1 if (c // 2 + r) % 2 == 0 else 2) for r in range(9) for c in range(6)]
        self.estimator.estimate_by_rollout(state_for(board_with(cells)), simulations=1000)
        self.assertEqual(dict(self.estimator.calls), {6: 20, 7: 20, 8: 20})

    def test_simulations_per_column(self):
        self.assertEqual(self.estimator.simulations_per_column(1000, 9), 11)
        self.assertEqual(self.estimator.simulations_per_column(1000, 2), 20)
        self.assertEqual(self.estimator.simulations_per_column(5, 9), 1)
        self.assertEqual(self.estimator.simulations_per_column(100, 0), 0)

    def test_winning_column_is_certain(self):
        cells = [(8, c, 2) for c in range(4)] + [(7, c, 1) for c in range(4)]
        result = self.estimator.estimate_by_rollout(state_for(board_with(cells)), simulations=100)
        by_column = {p.column: p.probability for p in result}
        self.assertEqual(by_column[4], 100.0)
        self.assertEqual(result[0].probability, 100.0)

    def test_rejects_non_positive_simulations(self):
        with self.assertRaises(ValueError):
            self.estimator.estimate_by_rollout(state_for(Board()), simulations=0)

    def test_cancelled(self):
        token = CancellationToken()
        token.cancel()
        with self.assertRaises(SearchCancelledError):
            self.estimator.estimate_by_rollout(state_for(Board()), cancel_token=token)

    def test_simulate_game_respects_ply_cap(self):
        estimator = WinProbabilityEstimator(rng=random.Random(0), max_plies=0)
        self.assertIsNone(estimator.simulate_game(Board(), 4, 1))


class TestCurrentEstimate(unittest.TestCase):
    def setUp(self):
        self.estimator = WinProbabilityEstimator(rng=random.Random(0))

    def finished(self, status, to_move):
        return state_for(Board(), to_move).model_copy(update={"status": status})

    def test_terminal_states(self):
        self.assertEqual(self.estimator.estimate_current(self.finished(GameStatus.PLAYER2_WON, 2)), 100.0)
        self.assertEqual(self.estimator.estimate_current(self.finished(GameStatus.PLAYER2_WON, 1)), 0.0)
        self.assertEqual(self.estimator.estimate_current(self.finished(GameStatus.PLAYER1_WON, 1)), 100.0)
        self.assertEqual(self.estimator.estimate_current(self.finished(GameStatus.DRAW, 1)), 0.0)

    def test_empty_board_is_even(self):
        self.assertEqual(self.estimator.estimate_current(state_for(Board())), 50.0)

    def test_in_progress_is_clamped(self):
        # Five overlapping fours on the bottom row for the computer
        strong = board_with([(8, c, 2) for c in range(9) if c != 4])
        self.assertEqual(self.estimator.estimate_current(state_for(strong, 2)), 95.0)
        self.assertEqual(self.estimator.estimate_current(state_for(strong, 1)), 5.0)

    def test_quick_score(self):
        board = board_with([(8, 4, 1), (8, 5, 1)])
        # Four horizontal windows hold both pieces; single pieces score nothing
        self.assertEqual(self.estimator.quick_score(board, 1), 4 * 5)
        self.assertEqual(self.estimator.quick_score(board, 2), -4 * 5)

    def test_players_are_seated(self):
        state = state_for(Board(), 1)
        self.assertEqual(state.current_player, HUMAN)
        self.assertEqual(state.opponent, COMPUTER)


if __name__ == "__main__":
    unittest.main()
