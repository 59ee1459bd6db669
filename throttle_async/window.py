"""Mutable window record shared by every call through one entry point."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(slots=True)
class Window:
    """State of the current throttle window.

    ``ticket`` is the sequence number of the latest call; ``None`` means no
    window is open. ``started_at`` is in event-loop clock seconds.
    """

    ticket: int | None = None
    superseded: bool = False
    started_at: float | None = None
    timer: asyncio.TimerHandle | None = None

    @property
    def is_open(self) -> bool:
        return self.ticket is not None

    def open(self, ticket: int, now: float) -> None:
        self.ticket = ticket
        self.started_at = now
        self.superseded = False

    def claim(self, ticket: int) -> None:
        """Make ``ticket`` the latest call, superseding the previous one."""
        self.ticket = ticket
        self.superseded = True

    def is_stale(self, ticket: int) -> bool:
        return ticket != self.ticket

    def elapsed(self, now: float) -> float:
        if self.started_at is None:
            return 0.0
        return now - self.started_at

    def close(self) -> None:
        if self.timer is not None and not self.timer.cancelled():
            self.timer.cancel()
        self.ticket = None
        self.superseded = False
        self.started_at = None
        self.timer = None
