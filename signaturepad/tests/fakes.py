"""Test doubles for the collaborator contracts (no Tk display needed)."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from core.contracts.rendering import IClearableSink, IPenWidthAware, IRenderSink
from core.contracts.scheduling import ITimerScheduler


class ManualScheduler(ITimerScheduler):
    """Timers only fire when the test says so."""

    def __init__(self) -> None:
        self.pending: Dict[int, Tuple[float, Callable[[], None]]] = {}
        self.cancelled: List[int] = []
        self._next = 0

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> int:
        self._next += 1
        self.pending[self._next] = (delay_s, callback)
        return self._next

    def cancel(self, handle: Any) -> None:
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def fire_all(self) -> None:
        for handle in list(self.pending):
            _delay, cb = self.pending.pop(handle)
            cb()


class RecordingSink(IRenderSink, IClearableSink, IPenWidthAware):
    def __init__(self) -> None:
        self.calls: List[tuple] = []
        self.pen_width = None

    def begin_stroke(self) -> None:
        self.calls.append(("begin",))

    def move_to(self, point) -> None:
        self.calls.append(("move", point))

    def line_to(self, point) -> None:
        self.calls.append(("line", point))

    def end_stroke(self) -> None:
        self.calls.append(("end",))

    def clear(self) -> None:
        self.calls.append(("clear",))

    def set_pen_width(self, width: int) -> None:
        self.pen_width = width

    def lines(self) -> List[tuple]:
        """(from, to) pairs drawn so far."""
        out = []
        start = None
        for call in self.calls:
            if call[0] == "move":
                start = call[1]
            elif call[0] == "line":
                out.append((start, call[1]))
        return out


class FakeLogger:
    def __init__(self) -> None:
        self.events: List[tuple] = []

    def log(self, feature: str, event: str, **kwargs) -> None:
        self.events.append((feature, event, kwargs))
