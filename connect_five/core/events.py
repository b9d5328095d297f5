import logging
from typing import Callable, List

from connect_five.schemas.game_schema import GameResultRecord

logger = logging.getLogger(__name__)

ResultListener = Callable[[GameResultRecord], None]


class GameEvents:
    """
    Game-completion hook for outside collaborators (e.g. a leaderboard).
    A failing listener is logged and never interrupts the game.
    """

    def __init__(self):
        self._on_complete_listeners: List[ResultListener] = []

    def subscribe_complete(self, callback: ResultListener):
        self._on_complete_listeners.append(callback)

    def unsubscribe_complete(self, callback: ResultListener):
        if callback in self._on_complete_listeners:
            self._on_complete_listeners.remove(callback)

    def notify_complete(self, record: GameResultRecord):
        for listener in list(self._on_complete_listeners):
            try:
                listener(record)
            except Exception:
                logger.exception("Game result listener %r failed", listener)
