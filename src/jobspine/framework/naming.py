"""Unique job names for one pipeline run."""

from __future__ import annotations

import threading


class JobNameCounter:
    """
    Hands out ``<prefix>-<n>`` names with a run-wide increasing ``n``.

    Create one per pipeline run and pass it to every freeze. Thread-safe:
    concurrent freezes never receive the same number.

    Example:
        names = JobNameCounter()
        names.next_name("Q-4242")  # "Q-4242-1"
        names.next_name("Q-4242")  # "Q-4242-2"
    """

    def __init__(self, start: int = 0) -> None:
        self._index = start
        self._lock = threading.Lock()

    def next_name(self, prefix: str) -> str:
        with self._lock:
            self._index += 1
            index = self._index
        return f"{prefix}-{index}"

    @property
    def issued(self) -> int:
        """Number of the last name handed out."""
        with self._lock:
            return self._index
