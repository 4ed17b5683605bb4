# webcrawler/crawler/synchronizer.py
"""
Dynamic join counter used to finish one BFS level before the next one starts.

The counter starts at a baseline (the orchestrator's own party). Every fetch or
extraction task registers one unit before it is submitted and deregisters as
its last action. A task that spawns another task registers the child before
deregistering itself, so the count can only reach the baseline once all work
descended from the level is done.
"""
from __future__ import annotations

import threading
from typing import Optional


class LevelSynchronizer:
    """Register/deregister counter with a blocking wait for the baseline."""

    def __init__(self, parties: int = 1) -> None:
        if parties < 0:
            raise ValueError("parties must be >= 0")
        self._baseline = parties
        self._count = parties
        self._cond = threading.Condition()
        self.phase = 0

    def register(self) -> None:
        with self._cond:
            self._count += 1

    def arrive_and_deregister(self) -> None:
        with self._cond:
            if self._count <= self._baseline:
                raise RuntimeError("arrive_and_deregister() without a registered unit")
            self._count -= 1
            if self._count <= self._baseline:
                self._cond.notify_all()

    def await_advance(self, timeout: Optional[float] = None) -> bool:
        """Block until every registered unit has deregistered; False on timeout."""
        with self._cond:
            if not self._cond.wait_for(lambda: self._count <= self._baseline, timeout):
                return False
            self.phase += 1
            return True

    @property
    def outstanding(self) -> int:
        with self._cond:
            return self._count - self._baseline
