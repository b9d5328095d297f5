import random
import unittest

from connect_five.core.errors import SearchCancelledError
from connect_five.engine.board import Board
from connect_five.engine.cancellation import CancellationToken
from connect_five.engine.constants import SEARCH_DEPTH, WIN_SCORE
from connect_five.engine.evaluators import AggressiveEvaluator, BalancedEvaluator, TrickyEvaluator
from connect_five.engine.strategies import (
    EasyStrategy,
    HardStrategy,
    MediumStrategy,
    find_winning_move,
)
from connect_five.engine.strategy_factory import create_strategy
from connect_five.models.enums import AIDifficulty, AIPersonality
from tests.helpers import board_with, state_for

# Computer (2) has four on the bottom row with column 4 open
COMPUTER_FOUR = [(8, c, 2) for c in range(4)] + [(7, c, 1) for c in range(4)]
# Human (1) has four on the bottom row, computer stacked on top without a line of its own
HUMAN_FOUR = [(8, c, 1) for c in range(4)] + [(7, 0, 2), (7, 1, 2), (7, 3, 2)]


class TestFindWinningMove(unittest.TestCase):
    def test_finds_open_end(self):
        board = board_with(COMPUTER_FOUR)
        self.assertEqual(find_winning_move(board, 2), 4)
        self.assertIsNone(find_winning_move(Board(), 2))


class TestReactiveStrategies(unittest.TestCase):
    def strategies(self):
        return [EasyStrategy(random.Random(1)), MediumStrategy(random.Random(1))]

    def test_takes_the_win(self):
        state = state_for(board_with(COMPUTER_FOUR))
        for strategy in self.strategies():
            self.assertEqual(strategy.next_move(state), 4)

    def test_blocks_the_opponent(self):
        state = state_for(board_with(HUMAN_FOUR))
        for strategy in self.strategies():
            self.assertEqual(strategy.next_move(state), 4)

    def test_win_beats_block(self):
        # Both sides threaten: computer on row 8 (col 4), human on column 8
        cells = [(8, c, 2) for c in range(4)] + [(8 - i, 8, 1) for i in range(4)] + [(7, 0, 1)]
        state = state_for(board_with(cells))
        for strategy in self.strategies():
            self.assertEqual(strategy.next_move(state), 4)

    def test_random_move_is_valid(self):
        # Columns 0 and 1 full
        cells = [(r, c, 1 if (r + c) % 2 else 2) for r in range(9) for c in (0, 1)]
        state = state_for(board_with(cells))
        for strategy in self.strategies():
            for _ in range(50):
                self.assertIn(strategy.next_move(state), state.board.get_valid_moves())

    def test_no_valid_moves_returns_zero(self):
        cells = [(r, c, 1 if (c // 2 + r) % 2 == 0 else 2) for r in range(9) for c in range(9)]
        state = state_for(board_with(cells))
        for strategy in self.strategies():
            self.assertEqual(strategy.next_move(state), 0)

    def test_easy_pool_favours_centre(self):
        board = Board()
        pool = EasyStrategy(random.Random(0)).selection_pool(board, board.get_valid_moves())
        self.assertEqual(len(pool), 9 + 4 * 2)
        for col in (2, 3, 4, 5):
            self.assertEqual(pool.count(col), 3)
        for col in (0, 1, 6, 7, 8):
            self.assertEqual(pool.count(col), 1)

    def test_medium_pool_is_uniform(self):
        board = Board()
        pool = MediumStrategy(random.Random(0)).selection_pool(board, board.get_valid_moves())
        self.assertEqual(pool, list(range(9)))

    def test_seeded_strategies_repeat(self):
        state = state_for(board_with([(8, 4, 1)]))
        a = [EasyStrategy(random.Random(5)).next_move(state) for _ in range(3)]
        b = [EasyStrategy(random.Random(5)).next_move(state) for _ in range(3)]
        self.assertEqual(a, b)

    def test_cancelled_token(self):
        token = CancellationToken()
        token.cancel()
        with self.assertRaises(SearchCancelledError):
            MediumStrategy().next_move(state_for(Board()), token)


class TestHardStrategy(unittest.TestCase):
    def test_takes_the_win_at_any_depth(self):
        state = state_for(board_with(COMPUTER_FOUR))
        for depth in (1, 2, 5):
            strategy = HardStrategy(depth=depth, rng=random.Random(0))
            self.assertEqual(strategy.next_move(state), 4)
            self.assertTrue(strategy.last_result.immediate_win)

    def test_blocks_the_opponent(self):
        state = state_for(board_with(HUMAN_FOUR))
        strategy = HardStrategy(depth=2, rng=random.Random(0))
        self.assertEqual(strategy.next_move(state), 4)

    def test_blocks_at_default_depth(self):
        strategy = HardStrategy(rng=random.Random(0))
        self.assertEqual(strategy.depth, SEARCH_DEPTH)

        self.assertEqual(strategy.next_move(state_for(board_with(HUMAN_FOUR))), 4)
        self.assertFalse(strategy.last_result.immediate_win)
        self.assertGreater(strategy.last_result.nodes_searched, 0)
        self.assertGreater(strategy.last_result.score, -WIN_SCORE)

    def test_every_personality_blocks(self):
        state = state_for(board_with(HUMAN_FOUR))
        for personality in AIPersonality:
            strategy = HardStrategy(personality, depth=2, rng=random.Random(0))
            self.assertEqual(strategy.next_move(state), 4, personality)

    def test_evaluator_follows_personality(self):
        self.assertIsInstance(HardStrategy().evaluator, BalancedEvaluator)
        self.assertIsInstance(HardStrategy(AIPersonality.AGGRESSIVE).evaluator, AggressiveEvaluator)
        self.assertIsInstance(HardStrategy("tricky").evaluator, TrickyEvaluator)

    def test_balanced_is_reproducible(self):
        state = state_for(board_with([(8, 4, 1), (8, 3, 2), (7, 4, 1)]))
        a = HardStrategy(depth=2, rng=random.Random(1)).next_move(state)
        b = HardStrategy(depth=2, rng=random.Random(2)).next_move(state)
        self.assertEqual(a, b)

    def test_cancelled_search_raises(self):
        token = CancellationToken()
        token.cancel()
        with self.assertRaises(SearchCancelledError):
            HardStrategy(depth=3).next_move(state_for(board_with([(8, 4, 1)])), token)


class TestStrategyFactory(unittest.TestCase):
    def test_difficulty_mapping(self):
        self.assertIsInstance(create_strategy(AIDifficulty.EASY), EasyStrategy)
        self.assertIsInstance(create_strategy(AIDifficulty.MEDIUM), MediumStrategy)
        self.assertIsInstance(create_strategy("hard"), HardStrategy)

    def test_hard_options(self):
        strategy = create_strategy(AIDifficulty.HARD, AIPersonality.DEFENSIVE, depth=3)
        self.assertEqual(strategy.personality, AIPersonality.DEFENSIVE)
        self.assertEqual(strategy.depth, 3)

    def test_hard_defaults_to_balanced(self):
        self.assertEqual(create_strategy(AIDifficulty.HARD).personality, AIPersonality.BALANCED)

    def test_personality_ignored_below_hard(self):
        strategy = create_strategy(AIDifficulty.EASY, AIPersonality.TRICKY)
        self.assertIsInstance(strategy, EasyStrategy)

    def test_unknown_difficulty(self):
        with self.assertRaises(ValueError):
            create_strategy("impossible")


if __name__ == "__main__":
    unittest.main()
