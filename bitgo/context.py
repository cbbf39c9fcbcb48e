"""
BitGo SDK - Context Module

Cancellation handle passed to every API call.
"""

import threading
from typing import Optional

from .errors import ContextCancelledError


class Context:
    """
    Signals that an operation has been abandoned.

    A context is checked before each round trip, so cancelling it stops a
    paginated listing between pages. Cancellation is thread-safe and can
    be triggered from a signal handler.

    Example:
        >>> ctx = Context.background()
        >>> signal.signal(signal.SIGINT, lambda *_: ctx.cancel())
        >>> client.wallet.unspents(ctx, wallet_id, {}, print)
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize context.

        Args:
            timeout: Optional per-request timeout in seconds handed to the
                transport. None waits indefinitely.
        """
        self.timeout = timeout
        self._done = threading.Event()

    @classmethod
    def background(cls) -> 'Context':
        """Create a context that is never cancelled unless asked to."""
        return cls()

    def cancel(self) -> None:
        """Mark the context as abandoned. Safe to call more than once."""
        self._done.set()

    @property
    def cancelled(self) -> bool:
        return self._done.is_set()

    def wait(self, seconds: float) -> bool:
        """
        Sleep up to seconds, waking early on cancellation.

        Returns:
            True if the context was cancelled
        """
        return self._done.wait(seconds)

    def check(self) -> None:
        """Raise ContextCancelledError if the context was cancelled."""
        if self._done.is_set():
            raise ContextCancelledError('context canceled')
