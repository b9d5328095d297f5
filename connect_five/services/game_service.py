"""
Game Service - Centralized Game Logic

This service is the single source of truth for game state transitions.
It handles:
- Game creation (players + AI strategy)
- Move processing (human and AI)
- Win / draw detection
- Game completion notifications for the leaderboard collaborator
- Win probability queries

Game states are immutable: every move returns a new GameState and never
touches the previous one.
"""

import logging
import random
import time
from typing import List, Optional

from connect_five.core.errors import (
    GameOverError,
    InvalidMoveError,
    MissingDifficultyError,
    NoAIConfiguredError,
    NotAITurnError,
)
from connect_five.core.events import GameEvents
from connect_five.core.settings import EngineSettings, get_settings
from connect_five.engine.board import Board
from connect_five.engine.cancellation import CancellationToken
from connect_five.engine.strategies import AIStrategy
from connect_five.engine.strategy_factory import create_strategy
from connect_five.engine.win_probability import WinProbabilityEstimator
from connect_five.models.enums import (
    AIDifficulty,
    AIPersonality,
    GameStatus,
    PlayerGameResult,
    PlayerType,
)
from connect_five.models.game_state import GameState
from connect_five.models.player import Player
from connect_five.schemas.game_schema import ColumnProbability, GameResultRecord, MoveRecord

logger = logging.getLogger(__name__)


class GameService:
    """Runs one game session at a time."""

    def __init__(self, settings: Optional[EngineSettings] = None,
                 events: Optional[GameEvents] = None,
                 rng: Optional[random.Random] = None):
        self.settings = settings or get_settings()
        self.events = events or GameEvents()
        self.rng = rng or random.Random(self.settings.seed)
        self.estimator = WinProbabilityEstimator(
            rng=self.rng,
            max_simulations=self.settings.rollout.max_simulations,
            max_per_column=self.settings.rollout.max_per_column,
            max_plies=self.settings.rollout.max_plies,
        )
        self._strategy: Optional[AIStrategy] = None
        self._history: List[MoveRecord] = []
        self._started_at = time.monotonic()
        self._last_move_at = self._started_at

    @property
    def strategy(self) -> Optional[AIStrategy]:
        return self._strategy

    @property
    def move_history(self) -> List[MoveRecord]:
        return list(self._history)

    def start_new_game(self, player1_name: str, player2_name: str, is_ai_opponent: bool = False,
                       difficulty: Optional[AIDifficulty] = None,
                       personality: Optional[AIPersonality] = None) -> GameState:
        """Player 1 is always human; player 2 is the AI when is_ai_opponent is set."""
        if is_ai_opponent and difficulty is None:
            raise MissingDifficultyError("AI difficulty must be specified for AI opponents")

        player1 = Player(id=1, name=player1_name, type=PlayerType.HUMAN)
        player2 = Player(
            id=2,
            name=player2_name,
            type=PlayerType.AI if is_ai_opponent else PlayerType.HUMAN,
            ai_difficulty=difficulty if is_ai_opponent else None,
        )

        if is_ai_opponent:
            self._strategy = create_strategy(
                difficulty,
                personality if difficulty == AIDifficulty.HARD else None,
                depth=self.settings.search.depth,
                rng=self.rng,
            )
        else:
            self._strategy = None

        self._history = []
        self._started_at = time.monotonic()
        self._last_move_at = self._started_at

        board_cfg = self.settings.board
        board = Board(board_cfg.rows, board_cfg.columns, board_cfg.win_length)
        opponent_kind = "human"
        if is_ai_opponent:
            opponent_kind = f"AI {difficulty}"
            if difficulty == AIDifficulty.HARD:
                opponent_kind += f"/{self._strategy.personality}"
        logger.info("New game: %s vs %s (%s)", player1_name, player2_name, opponent_kind)
        return GameState.create_new(player1, player2, board)

    def make_move(self, state: GameState, column: int) -> GameState:
        """Applies the current player's move and returns the next state."""
        if state.status != GameStatus.IN_PROGRESS:
            raise GameOverError("Game is already finished")

        if not state.board.is_valid_move(column):
            raise InvalidMoveError(column)

        mover = state.current_player
        new_board, row = state.board.drop_piece(column, mover.id)
        is_win = new_board.check_win(row, column, mover.id)
        is_draw = not is_win and new_board.is_full()

        if is_win:
            status = GameStatus.PLAYER1_WON if mover.id == state.player1.id else GameStatus.PLAYER2_WON
        elif is_draw:
            status = GameStatus.DRAW
        else:
            status = GameStatus.IN_PROGRESS

        next_player = state.opponent if status == GameStatus.IN_PROGRESS else mover

        new_state = GameState(
            board=new_board,
            player1=state.player1,
            player2=state.player2,
            current_player=next_player,
            status=status,
            winning_column=column if is_win else None,
        )

        now = time.monotonic()
        self._history.append(MoveRecord(
            player=mover.id,
            column=column,
            row=row,
            duration=round(now - self._last_move_at, 3),
        ))
        self._last_move_at = now

        if new_state.is_terminal:
            logger.info("Game over: %s after %s moves", status, len(self._history))
            self._publish_result(new_state)

        return new_state

    def is_valid_move(self, state: GameState, column: int) -> bool:
        return state.board.is_valid_move(column)

    def get_ai_move(self, state: GameState, cancel_token: Optional[CancellationToken] = None) -> int:
        if self._strategy is None:
            raise NoAIConfiguredError("No AI player configured")

        if state.current_player.type != PlayerType.AI:
            raise NotAITurnError("Not AI's turn")

        return self._strategy.next_move(state, cancel_token)

    def estimate_win_probabilities(self, state: GameState, simulations: int = 1000,
                                   cancel_token: Optional[CancellationToken] = None) -> List[ColumnProbability]:
        return self.estimator.estimate_by_rollout(state, simulations, cancel_token)

    def estimate_current_win_probability(self, state: GameState) -> float:
        return self.estimator.estimate_current(state)

    def _publish_result(self, state: GameState):
        """Reports the human player's result of a game against the AI."""
        ai_player = state.player2 if state.player2.is_ai else None
        if ai_player is None or ai_player.ai_difficulty is None:
            return

        human = state.player1
        if state.status == GameStatus.DRAW:
            result = PlayerGameResult.DRAW
        elif state.winner is not None and state.winner.id == human.id:
            result = PlayerGameResult.WIN
        else:
            result = PlayerGameResult.LOSS

        record = GameResultRecord(
            player_name=human.name,
            difficulty=ai_player.ai_difficulty,
            result=result,
            game_duration_ms=round((time.monotonic() - self._started_at) * 1000, 1),
        )
        self.events.notify_complete(record)
