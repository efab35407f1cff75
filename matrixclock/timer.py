"""Millisecond tick counter and software timers measured against it."""

from __future__ import annotations

_UINT32_MASK = 0xFFFFFFFF


class TickCounter:
    """A 32-bit millisecond counter that wraps around like a hardware tick."""

    def __init__(self) -> None:
        self._milliseconds = 0

    def tick(self, count: int = 1) -> None:
        """Advance the counter by ``count`` milliseconds."""
        if count < 0:
            raise ValueError("tick count cannot be negative")
        self._milliseconds = (self._milliseconds + count) & _UINT32_MASK

    def now(self) -> int:
        """Current counter value in milliseconds."""
        return self._milliseconds


class SoftTimer:
    """A one-shot timeout measured on a TickCounter."""

    def __init__(self, counter: TickCounter) -> None:
        self._counter = counter
        self.start_time = 0
        self.timeout = 0
        self.active = False

    def start(self, timeout: int) -> None:
        """Arm the timer to expire after ``timeout`` milliseconds."""
        self.active = True
        self.start_time = self._counter.now()
        self.timeout = timeout

    def check(self) -> bool:
        """True once more than the timeout has elapsed on an active timer."""
        if not self.active:
            return False
        elapsed = (self._counter.now() - self.start_time) & _UINT32_MASK
        return elapsed > self.timeout

    def stop(self) -> None:
        """Disarm the timer."""
        self.active = False

    def restart(self) -> None:
        """Restart the elapsed time from now, keeping the timeout."""
        self.start_time = self._counter.now()