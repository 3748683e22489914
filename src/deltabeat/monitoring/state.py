from __future__ import annotations

import threading

PREPARING = "Preparing"


class ExposedState:
    """Latest status block, written by the reporter and read by the status server."""

    def __init__(self, initial: str = PREPARING) -> None:
        self._lock = threading.Lock()
        self._text = initial
        self._updates = 0

    def get(self) -> str:
        with self._lock:
            return self._text

    def set(self, text: str) -> None:
        with self._lock:
            self._text = text
            self._updates += 1

    @property
    def updates(self) -> int:
        with self._lock:
            return self._updates
