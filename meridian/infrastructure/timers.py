"""Timer Scheduling - cancellable one-shot callbacks for session expiry.

Invariants:
    - schedule() returns a handle whose cancel() is idempotent
    - A cancelled callback never runs

Design Decisions:
    - Running event loop preferred (loop.call_later): the callback runs on the
      same thread as in-flight calls, no cross-thread mutation
    - Daemon threading.Timer fallback when create() is called outside a loop
      (scripts, sync tests); SessionStore locks its mutations for this path
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    """Contract for arming a one-shot callback after delay_seconds."""
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopTimerScheduler:
    """call_later on the running loop, or a daemon thread timer without one."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(delay_seconds, callback)
            timer.daemon = True
            timer.start()
            return timer
        return loop.call_later(delay_seconds, callback)
