"""
Engine Errors

Every error raised by the engine derives from ConnectFiveError so callers can
catch the whole family. The concrete classes also derive from the closest
builtin (IndexError, ValueError) so generic handlers keep working.
"""


class ConnectFiveError(Exception):
    """Base class for all engine errors"""


class ColumnOutOfRangeError(ConnectFiveError, IndexError):
    def __init__(self, column: int, columns: int):
        super().__init__(f"Column {column} is outside the board (0-{columns - 1})")
        self.column = column


class InvalidGameStateError(ConnectFiveError):
    """The requested operation is not allowed in the current game state."""


class ColumnFullError(InvalidGameStateError):
    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class InvalidMoveError(InvalidGameStateError):
    def __init__(self, column: int):
        super().__init__(f"Invalid move: column {column}")
        self.column = column


class GameOverError(InvalidGameStateError):
    pass


class NoAIConfiguredError(InvalidGameStateError):
    pass


class NotAITurnError(InvalidGameStateError):
    pass


class MissingDifficultyError(ConnectFiveError, ValueError):
    pass


class SearchCancelledError(ConnectFiveError):
    pass


class SettingsError(ConnectFiveError, ValueError):
    pass
