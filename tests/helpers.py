from connect_five.engine.board import Board
from connect_five.models.enums import AIDifficulty, PlayerType
from connect_five.models.game_state import GameState
from connect_five.models.player import Player

HUMAN = Player(id=1, name="Alice", type=PlayerType.HUMAN)
COMPUTER = Player(id=2, name="Computer", type=PlayerType.AI, ai_difficulty=AIDifficulty.HARD)


def board_with(cells, rows=9, columns=9):
    """cells: iterable of (row, col, player)"""
    matrix = [[0] * columns for _ in range(rows)]
    for r, c, p in cells:
        matrix[r][c] = p
    return Board.from_matrix(matrix)


def state_for(board, to_move=2):
    """Human (1) vs computer (2) on the given board, with to_move on turn."""
    return GameState(
        board=board,
        player1=HUMAN,
        player2=COMPUTER,
        current_player=COMPUTER if to_move == 2 else HUMAN,
    )
