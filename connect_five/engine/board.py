import logging
from typing import List, Optional, Sequence, Tuple

from connect_five.core.errors import ColumnFullError, ColumnOutOfRangeError
from connect_five.engine.constants import COLS, DIRECTIONS, EMPTY, FULL_COLUMN, ROWS, WIN_LENGTH

# Logger setup
logger = logging.getLogger(__name__)

Cells = Tuple[Tuple[int, ...], ...]


class Board:
    """
    Immutable Connect Five grid.

    Board uses (row, col) indexing.
    Row 0 is the TOP of the board.
    Row rows-1 is the BOTTOM of the board.
    Values: 0=Empty, 1=Player1, 2=Player2

    Placing a piece never touches this instance; it returns a new Board.
    """

    __slots__ = ("rows", "columns", "win_length", "_cells")

    def __init__(self, rows: int = ROWS, columns: int = COLS, win_length: int = WIN_LENGTH,
                 cells: Optional[Cells] = None):
        self.rows = rows
        self.columns = columns
        self.win_length = win_length
        if cells is None:
            cells = tuple(tuple(EMPTY for _ in range(columns)) for _ in range(rows))
        self._cells = cells

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]], win_length: int = WIN_LENGTH) -> "Board":
        """Builds a board from a row-major matrix (row 0 = top). No gravity checks."""
        cells = tuple(tuple(int(v) for v in row) for row in matrix)
        return cls(len(cells), len(cells[0]), win_length, cells)

    def get_cell(self, row: int, col: int) -> int:
        return self._cells[row][col]

    def to_matrix(self) -> List[List[int]]:
        return [list(row) for row in self._cells]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def is_valid_move(self, col: int) -> bool:
        if col < 0 or col >= self.columns:
            return False
        return self._cells[0][col] == EMPTY

    def get_valid_moves(self) -> List[int]:
        """Returns the column indices that are not full, in column order."""
        return [c for c in range(self.columns) if self._cells[0][c] == EMPTY]

    def has_valid_moves(self) -> bool:
        return any(self._cells[0][c] == EMPTY for c in range(self.columns))

    def is_full(self) -> bool:
        return not self.has_valid_moves()

    def get_target_row(self, col: int) -> int:
        """Lowest empty row of the column, or FULL_COLUMN."""
        self._check_column(col)
        # Gravity: scan from the bottom row upward
        for r in range(self.rows - 1, -1, -1):
            if self._cells[r][col] == EMPTY:
                return r
        return FULL_COLUMN

    def drop_piece(self, col: int, player_id: int) -> Tuple["Board", int]:
        """
        Drops a piece into the column.
        Returns the new board and the row the piece landed on.
        """
        row = self.get_target_row(col)
        if row == FULL_COLUMN:
            raise ColumnFullError(col)

        new_row = self._cells[row][:col] + (player_id,) + self._cells[row][col + 1:]
        cells = self._cells[:row] + (new_row,) + self._cells[row + 1:]
        return Board(self.rows, self.columns, self.win_length, cells), row

    def place_piece(self, col: int, player_id: int) -> "Board":
        board, _ = self.drop_piece(col, player_id)
        return board

    def check_win(self, row: int, col: int, player_id: int) -> bool:
        """
        Checks for win_length in a row through (row, col).
        The origin counts as player_id's piece whether or not it is filled yet,
        so this works for the piece just placed and for a hypothetical one.
        """
        for dr, dc in DIRECTIONS:
            count = 1
            # Check positive direction
            r, c = row + dr, col + dc
            while self.in_bounds(r, c) and self._cells[r][c] == player_id:
                count += 1
                r, c = r + dr, c + dc
            # Check negative direction
            r, c = row - dr, col - dc
            while self.in_bounds(r, c) and self._cells[r][c] == player_id:
                count += 1
                r, c = r - dr, c - dc

            if count >= self.win_length:
                return True
        return False

    def is_winning_move(self, col: int, player_id: int) -> bool:
        """True if dropping player_id's piece into col wins immediately."""
        if not self.is_valid_move(col):
            return False
        return self.check_win(self.get_target_row(col), col, player_id)

    def count_pieces(self) -> int:
        return sum(1 for row in self._cells for v in row if v != EMPTY)

    def _check_column(self, col: int):
        if col < 0 or col >= self.columns:
            raise ColumnOutOfRangeError(col, self.columns)

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid representation."""
        symbols = {0: ".", 1: "X", 2: "O"}
        header = " " + " ".join(str(i) for i in range(self.columns))
        rows_str = []
        for row in self._cells:
            rows_str.append("|" + "|".join(symbols[v] for v in row) + "|")
        return header + "\n" + "\n".join(rows_str)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.win_length == other.win_length and self._cells == other._cells

    def __hash__(self) -> int:
        return hash((self.win_length, self._cells))

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, columns={self.columns}, pieces={self.count_pieces()})"
