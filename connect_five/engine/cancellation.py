"""
Cancellation Token

Lets a caller stop a running search or rollout batch, either explicitly via
cancel() or by giving the token a deadline. The search checks the token at
every node and raises SearchCancelledError once it trips.

The token is safe to cancel from another thread (e.g. the event loop while the
search runs in a worker thread).
"""

import threading
import time
from typing import Optional

from connect_five.core.errors import SearchCancelledError


class CancellationToken:
    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds from now after which the token counts as cancelled.
                None means no deadline.
        """
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self):
        if self.cancelled:
            raise SearchCancelledError("Search cancelled")


def check_cancelled(token: Optional[CancellationToken]):
    """No-op for a missing token."""
    if token is not None:
        token.raise_if_cancelled()
