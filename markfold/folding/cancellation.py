"""Cooperative cancellation for folding computations."""

from __future__ import annotations

import threading


class CancellationToken:
    """Signals that the caller no longer needs a result.

    The engine polls the token between embedded provider invocations and
    discards everything computed so far once it is set. Safe to cancel
    from another thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
