from enum import StrEnum

class GameStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    PLAYER1_WON = "PLAYER1_WON"
    PLAYER2_WON = "PLAYER2_WON"
    DRAW = "DRAW"

class PlayerType(StrEnum):
    HUMAN = "human"
    AI = "ai"

class AIDifficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

class AIPersonality(StrEnum):
    # Only used by HARD
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    TRICKY = "tricky"

class PlayerGameResult(StrEnum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
