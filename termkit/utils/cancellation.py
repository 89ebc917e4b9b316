"""Cancellation tokens for blocking prompts.

A token is polled by the line editor between key polls; cancelling it from
another thread (or from a timer) aborts the pending capture.
"""
from __future__ import annotations

import threading
from typing import Optional

from termkit.core.errors import InputCancelled


class CancellationToken:
    """Thread-safe, one-way cancellation flag."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._timer: Optional[threading.Timer] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def cancel_after(self, seconds: float) -> "CancellationToken":
        """Cancel the token once ``seconds`` have elapsed."""

        self.dispose()
        self._timer = threading.Timer(seconds, self.cancel)
        self._timer.daemon = True
        self._timer.start()
        return self

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise InputCancelled("input cancelled")

    def dispose(self) -> None:
        """Stop a pending ``cancel_after`` timer."""

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
