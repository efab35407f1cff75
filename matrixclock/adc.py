"""Running average of the last few light-sensor samples."""

from __future__ import annotations

AVERAGE_SIZE = 3
ADC_MAX = 255


class AdcAverager:
    """Keeps the last AVERAGE_SIZE 8-bit samples and reports their mean."""

    def __init__(self) -> None:
        self._samples = [0] * AVERAGE_SIZE
        self._index = 0

    def add_sample(self, value: int) -> None:
        """Store a new sample, replacing the oldest one."""
        if not 0 <= value <= ADC_MAX:
            raise ValueError(f"sample out of range: {value!r}")
        self._samples[self._index] = value
        self._index = (self._index + 1) % AVERAGE_SIZE

    def value(self) -> int:
        """Integer mean of the stored samples."""
        return sum(self._samples) // AVERAGE_SIZE