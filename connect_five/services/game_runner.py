"""
Game Runner - Async AI Turns

Runs AI turns off the event loop so an interactive front end stays responsive
while the HARD search is thinking. Each turn gets its own CancellationToken;
cancel() or a timeout trips it and the search stops at its next node.
"""

import asyncio
import logging
from typing import Optional

from connect_five.core.errors import SearchCancelledError
from connect_five.engine.cancellation import CancellationToken
from connect_five.models.game_state import GameState
from connect_five.services.game_service import GameService

logger = logging.getLogger(__name__)


class GameRunner:
    def __init__(self, service: GameService):
        self.service = service
        self._token: Optional[CancellationToken] = None

    @property
    def is_thinking(self) -> bool:
        return self._token is not None

    async def play_ai_turn(self, state: GameState, timeout: Optional[float] = None) -> GameState:
        """Computes and applies one AI move. Raises SearchCancelledError on timeout or cancel()."""
        token = CancellationToken(timeout)
        self._token = token
        try:
            column = await asyncio.wait_for(asyncio.to_thread(self.service.get_ai_move, state, token), timeout)
        except asyncio.TimeoutError:
            token.cancel()
            logger.warning("AI turn timed out after %ss", timeout)
            raise SearchCancelledError(f"AI move not found within {timeout}s")
        finally:
            self._token = None

        # Service state is only touched on the loop thread, and never for a cancelled turn
        token.raise_if_cancelled()
        logger.debug("AI plays column %s", column)
        return self.service.make_move(state, column)

    async def play_until_human(self, state: GameState, timeout: Optional[float] = None) -> GameState:
        """Plays AI turns until a human is to move or the game is over."""
        while not state.is_terminal and state.current_player.is_ai:
            state = await self.play_ai_turn(state, timeout)
        return state

    def cancel(self):
        """Stops the AI turn in progress, if any."""
        if self._token is not None:
            self._token.cancel()
