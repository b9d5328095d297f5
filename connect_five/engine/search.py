"""
Minimax search with alpha-beta pruning.

The root orders candidates centre-first, returns any immediate win without
searching, and otherwise runs a fixed-depth minimax from each candidate,
starting with the opponent's reply. Leaves are scored by the configured
BoardEvaluator from the AI's point of view.

Immediate wins inside the tree short-circuit with WIN_SCORE + remaining depth,
so a win found sooner outranks one found deeper (and a loss found sooner is
worse than one found later).
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import List, Optional

from connect_five.engine.board import Board
from connect_five.engine.cancellation import CancellationToken, check_cancelled
from connect_five.engine.constants import SCORE_INF, SEARCH_DEPTH, WIN_SCORE, opponent_of
from connect_five.engine.evaluators import BalancedEvaluator, BoardEvaluator

logger = logging.getLogger(__name__)


@dataclass
class SearchContext:
    """State of one search call: its cancellation token and node counter."""
    cancel_token: Optional[CancellationToken] = None
    nodes: int = 0


@dataclass
class SearchResult:
    """Result of a root search."""
    best_move: int
    score: int
    nodes_searched: int
    elapsed_ms: int
    immediate_win: bool = False


def order_center_first(moves: List[int], columns: int) -> List[int]:
    """Ascending distance from the centre column; sorted() keeps ties in column order."""
    center = columns // 2
    return sorted(moves, key=lambda m: abs(m - center))


class MinimaxSearch:
    def __init__(self, evaluator: Optional[BoardEvaluator] = None, depth: int = SEARCH_DEPTH,
                 rng: Optional[random.Random] = None):
        self.evaluator = evaluator or BalancedEvaluator()
        self.depth = depth
        self.rng = rng or random.Random()

    def search(self, board: Board, ai_player_id: int,
               cancel_token: Optional[CancellationToken] = None) -> SearchResult:
        """
        Root entry point.
        Raises SearchCancelledError if the token trips mid-search.
        """
        context = SearchContext(cancel_token)
        start = time.perf_counter()

        valid_moves = board.get_valid_moves()
        if not valid_moves:
            # Defensive fallback: nothing to play
            logger.warning("Search called on a board with no valid moves")
            return self._result(0, 0, start, context)

        ordered_moves = order_center_first(valid_moves, board.columns)

        # 1. Immediate wins are taken without searching
        for move in ordered_moves:
            if board.is_winning_move(move, ai_player_id):
                return self._result(move, WIN_SCORE + self.depth, start, context, immediate_win=True)

        if len(valid_moves) == 1:
            return self._result(valid_moves[0], 0, start, context)

        # 2. Full window search over the ordered candidates
        best_move = None
        best_score = -SCORE_INF
        alpha = -SCORE_INF
        beta = SCORE_INF

        for move in ordered_moves:
            next_board = board.place_piece(move, ai_player_id)
            score = self.minimax(next_board, self.depth - 1, alpha, beta, False, ai_player_id, context)

            if score > best_score:
                best_score = score
                best_move = move
                alpha = max(alpha, score)

            if alpha >= beta:
                break

        # 3. Nothing improved on the sentinel
        if best_move is None:
            best_move = self.rng.choice(valid_moves)
            logger.warning("No candidate improved the search score, playing random column %s", best_move)

        return self._result(best_move, best_score, start, context)

    def minimax(self, board: Board, depth: int, alpha: int, beta: int,
                maximizing: bool, ai_player_id: int, context: Optional[SearchContext] = None) -> int:
        if context is None:
            context = SearchContext()
        context.nodes += 1
        check_cancelled(context.cancel_token)

        valid_moves = board.get_valid_moves()

        # Base cases
        if depth <= 0 or not valid_moves:
            return self.evaluator.evaluate(board, ai_player_id)

        if maximizing:
            max_score = -SCORE_INF
            for move in valid_moves:
                next_board, row = board.drop_piece(move, ai_player_id)
                # Faster wins score higher
                if next_board.check_win(row, move, ai_player_id):
                    return WIN_SCORE + depth

                score = self.minimax(next_board, depth - 1, alpha, beta, False, ai_player_id, context)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Beta cut-off
            return max_score

        opponent_id = opponent_of(ai_player_id)
        min_score = SCORE_INF
        for move in valid_moves:
            next_board, row = board.drop_piece(move, opponent_id)
            if next_board.check_win(row, move, opponent_id):
                return -(WIN_SCORE + depth)

            score = self.minimax(next_board, depth - 1, alpha, beta, True, ai_player_id, context)
            min_score = min(min_score, score)
            beta = min(beta, score)
            if beta <= alpha:
                break  # Alpha cut-off
        return min_score

    def _result(self, move: int, score: int, start: float, context: SearchContext,
                immediate_win: bool = False) -> SearchResult:
        result = SearchResult(
            best_move=move,
            score=score,
            nodes_searched=context.nodes,
            elapsed_ms=int((time.perf_counter() - start) * 1000),
            immediate_win=immediate_win,
        )
        logger.debug(
            "Search depth=%s move=%s score=%s nodes=%s time=%sms",
            self.depth, result.best_move, result.score, result.nodes_searched, result.elapsed_ms
        )
        return result
