from pydantic import BaseModel, ConfigDict, Field

from connect_five.models.enums import AIDifficulty, PlayerGameResult


class MoveRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: int
    column: int
    row: int
    # Seconds the mover spent on the move (AI thinking time, or human time since the last move)
    duration: float = 0.0


class GameResultRecord(BaseModel):
    """Handed to the leaderboard collaborator when a game against the AI ends."""
    model_config = ConfigDict(frozen=True)

    player_name: str = Field(min_length=1, max_length=50)
    difficulty: AIDifficulty
    result: PlayerGameResult
    game_duration_ms: float = Field(ge=0)


class ColumnProbability(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: int
    probability: float = Field(ge=0, le=100)
