"""Cooperative cancellation for scans that may run on a worker thread."""

from __future__ import annotations

import threading

from .errors import CancelledError


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError("Silence detection cancelled")


__all__ = ["CancellationToken"]
