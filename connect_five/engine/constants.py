# connect_five/engine/constants.py

# --- Board Dimensions ---
ROWS = 9
COLS = 9
WIN_LENGTH = 5

# Returned by Board.get_target_row when a column has no empty cell
FULL_COLUMN = -1

# Player ids double as cell markers
EMPTY = 0
PLAYER_ONE = 1
PLAYER_TWO = 2

# --- Search ---
SEARCH_DEPTH = 5

# Logic: Score = WIN_SCORE + remaining depth
# A win found with more depth left (i.e. sooner) scores higher.
WIN_SCORE = 100000
SCORE_INF = 10 ** 9

# Line orientations as (row delta, column delta):
# Horizontal, Vertical, Diagonal \, Diagonal /
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))

# --- Reactive strategies ---
# Each centre column enters the Easy selection pool this many times
CENTER_WEIGHT = 3

# --- Win probability ---
MAX_ROLLOUT_SIMULATIONS = 100
MAX_SIMULATIONS_PER_COLUMN = 20
MAX_ROLLOUT_PLIES = 50
MIN_PROBABILITY = 5.0
MAX_PROBABILITY = 95.0


def opponent_of(player_id: int) -> int:
    return PLAYER_ONE if player_id == PLAYER_TWO else PLAYER_TWO


def center_columns(columns: int = COLS) -> range:
    """The four columns nearest the centre (2..5 on a 9 wide board)."""
    return range(columns // 2 - 2, columns // 2 + 2)
