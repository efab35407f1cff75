import pytest

from matrixclock.ringbuffer import RING_BUFFER_SIZE, RingBuffer


def test_default_capacity():
    assert RingBuffer().capacity == RING_BUFFER_SIZE


def test_fifo_order():
    rb = RingBuffer(4)
    for b in (10, 20, 30):
        assert rb.push_back(b) is True
    assert [rb.pop_front() for _ in range(3)] == [10, 20, 30]
    assert len(rb) == 0


def test_pop_empty_returns_none():
    rb = RingBuffer(4)
    assert rb.pop_front() is None
    assert len(rb) == 0


def test_overflow_drops_new_byte():
    rb = RingBuffer(3)
    for b in (1, 2, 3):
        rb.push_back(b)
    assert rb.push_back(4) is False
    assert len(rb) == 3
    assert [rb.pop_front() for _ in range(3)] == [1, 2, 3]


def test_wraparound_preserves_order():
    rb = RingBuffer(3)
    out = []
    for b in range(10):
        rb.push_back(b)
        if len(rb) == 2:
            out.append(rb.pop_front())
    while len(rb):
        out.append(rb.pop_front())
    assert out == list(range(10))


def test_clear_empties_buffer():
    rb = RingBuffer(4)
    rb.push_back(5)
    rb.push_back(6)
    rb.clear()
    assert len(rb) == 0
    assert rb.pop_front() is None
    rb.push_back(7)
    assert rb.pop_front() == 7


@pytest.mark.parametrize("value", [-1, 256])
def test_rejects_non_byte(value):
    with pytest.raises(ValueError):
        RingBuffer(4).push_back(value)


def test_rejects_bad_size():
    with pytest.raises(ValueError):
        RingBuffer(0)