"""Fixed-capacity byte FIFO used for serial receive and transmit queues."""

from __future__ import annotations

RING_BUFFER_SIZE = 32


class RingBuffer:
    """A bounded first-in first-out queue of bytes.

    Pushing into a full buffer drops the byte. Popping from an empty
    buffer yields ``None``.
    """

    def __init__(self, size: int = RING_BUFFER_SIZE) -> None:
        if size <= 0:
            raise ValueError("ring buffer size must be positive")
        self._buffer = [0] * size
        self._size = size
        self._head = 0
        self._tail = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        """Maximum number of bytes the buffer holds."""
        return self._size

    def push_back(self, byte: int) -> bool:
        """Append a byte; return False if the buffer was full and it was dropped."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte value: {byte!r}")
        if self._count == self._size:
            return False
        self._buffer[self._head] = byte
        self._head = (self._head + 1) % self._size
        self._count += 1
        return True

    def pop_front(self) -> int | None:
        """Remove and return the oldest byte, or None if the buffer is empty."""
        if self._count == 0:
            return None
        byte = self._buffer[self._tail]
        self._tail = (self._tail + 1) % self._size
        self._count -= 1
        return byte

    def clear(self) -> None:
        """Discard all stored bytes."""
        self._head = 0
        self._tail = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count