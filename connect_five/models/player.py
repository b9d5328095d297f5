from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from connect_five.models.enums import AIDifficulty, PlayerType


class Player(BaseModel):
    """A seat at the board. The id is also the piece marker on the grid."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=2)
    name: str
    type: PlayerType = PlayerType.HUMAN
    ai_difficulty: Optional[AIDifficulty] = None

    @property
    def is_ai(self) -> bool:
        return self.type == PlayerType.AI
