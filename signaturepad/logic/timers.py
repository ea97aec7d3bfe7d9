# signaturepad/logic/timers.py
from __future__ import annotations

import threading
from typing import Callable

from core.contracts.scheduling import ITimerScheduler


class ThreadingTimerScheduler(ITimerScheduler):
    """
    Default scheduler for headless use. Callbacks run on a daemon timer thread,
    so the receiver must serialize access to its own state.
    """

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_s, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        if handle is not None:
            handle.cancel()
