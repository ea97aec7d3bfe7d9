"""core/contracts/scheduling.py
=============================

Deferred, cancellable callbacks.

Implementations must tolerate cancelling a handle that already fired.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class ITimerScheduler(ABC):
    """Schedules one-shot callbacks."""

    @abstractmethod
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Any:
        """Run *callback* after *delay_s* seconds and return a cancellation handle."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback. Must be idempotent."""
