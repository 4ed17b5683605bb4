# webcrawler/crawler/admission.py
"""
Per-host admission control: at most ``per_host`` simultaneous fetches to one host.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class HostAdmissionController:
    """Family of bounded semaphores keyed by host, created lazily and kept for the controller's lifetime."""

    def __init__(self, per_host: int) -> None:
        if per_host < 1:
            raise ValueError("per_host must be >= 1")
        self.per_host = per_host
        self._gates: Dict[str, threading.BoundedSemaphore] = {}
        self._lock = threading.Lock()

    def _gate(self, host: str) -> threading.BoundedSemaphore:
        with self._lock:
            gate = self._gates.get(host)
            if gate is None:
                gate = self._gates[host] = threading.BoundedSemaphore(self.per_host)
            return gate

    def acquire(self, host: str) -> None:
        """Block until *host* has a free slot, then take it."""
        self._gate(host).acquire()

    def release(self, host: str) -> None:
        """Give back one slot of *host*; ValueError if none is held."""
        self._gate(host).release()

    @contextmanager
    def admit(self, host: str) -> Iterator[None]:
        gate = self._gate(host)
        gate.acquire()
        try:
            yield
        finally:
            gate.release()

    @property
    def hosts(self) -> List[str]:
        with self._lock:
            return list(self._gates)
