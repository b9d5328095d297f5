from typing import Optional

from pydantic import BaseModel, ConfigDict

from connect_five.engine.board import Board
from connect_five.models.enums import GameStatus
from connect_five.models.player import Player


class GameState(BaseModel):
    """
    Snapshot of a game: the board plus turn and status metadata.
    Frozen; every move produces a new GameState.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    board: Board
    player1: Player
    player2: Player
    current_player: Player
    status: GameStatus = GameStatus.IN_PROGRESS
    winning_column: Optional[int] = None

    @classmethod
    def create_new(cls, player1: Player, player2: Player, board: Optional[Board] = None) -> "GameState":
        """Empty board, player 1 to move."""
        return cls(
            board=board if board is not None else Board(),
            player1=player1,
            player2=player2,
            current_player=player1,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def opponent(self) -> Player:
        return self.player2 if self.current_player.id == self.player1.id else self.player1

    @property
    def winner(self) -> Optional[Player]:
        if self.status == GameStatus.PLAYER1_WON:
            return self.player1
        if self.status == GameStatus.PLAYER2_WON:
            return self.player2
        return None

    def player_by_id(self, player_id: int) -> Player:
        return self.player1 if player_id == self.player1.id else self.player2
