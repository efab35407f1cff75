"""Real-time clock chip access over a two-wire bus, and BCD time editing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Protocol

CLOCK_ADDR = 0x68
M41T81_CAL_MSK = 0x1F
CLOCK_MAX_ABS_CAL_VAL = M41T81_CAL_MSK

SECOND_UNITS_MAX = 9
SECOND_TENS_MAX = 5
MINUTE_UNITS_MAX = 9
MINUTE_TENS_MAX = 5
HOUR_UNITS_MAX = 9
HOUR_TENS_MAX_24 = 2
HOUR_TENS_MAX_12 = 1

BUS_TIMEOUT_EXCEEDED = 0xE0
BUS_ERROR = 0xFF

_DS1307_HOURS_12_24_MSK = 1 << 6
_DS1307_HOURS_24_MSK = 0x3F
_M41T81_CB_MSK = 1 << 6
_M41T81_CEB_MSK = 1 << 7
_M41T81_S_MSK = 1 << 5
_M41T81_FT_MSK = 1 << 6
_M41T81_CAL_REG_ADDR = 8
_M41T81_HT_REG_ADDR = 0x0C
_M41T81_HT_MSK = 0x40
_CLOCK_HALT_MSK = 0x80
_BLOCK_SIZE = 8  # time (3) + date (4) + control (1)


class BusError(Exception):
    """A transfer on the two-wire bus failed."""

    def __init__(self, status: int, message: str | None = None) -> None:
        super().__init__(message or f"bus error, status 0x{status:02x}")
        self.status = status


class Bus(Protocol):
    def write(self, address: int, data: bytes) -> None: ...

    def read(self, address: int, length: int) -> bytes: ...


class ClockChip(IntEnum):
    DS1307 = 1
    M41T81 = 2


class TimeFormat(IntEnum):
    H12 = 0
    H24 = 1


class TimePos(IntEnum):
    SECOND_UNITS = 0
    SECOND_TENS = 1
    MINUTE_UNITS = 2
    MINUTE_TENS = 3
    HOUR_UNITS = 4
    HOUR_TENS = 5


@dataclass(frozen=True)
class Time:
    """Time of day as packed BCD bytes, as stored by the clock chip."""

    seconds: int = 0
    minutes: int = 0
    hours: int = 0

    def __post_init__(self) -> None:
        for name in ("seconds", "minutes", "hours"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} is not a byte: {value!r}")


def _digit_change(digit: int, diff: int, digit_max: int) -> int:
    return (digit + diff) % (digit_max + 1)


def _units(value: int, diff: int, maximum: int) -> int:
    return ((value & 0xF0) + _digit_change(value & 0x0F, diff, maximum)) & 0xFF


def _tens(value: int, diff: int, maximum: int) -> int:
    return ((value & 0x0F) + (_digit_change(value >> 4, diff, maximum) << 4)) & 0xFF


def change_time(time: Time, diff: int, time_format: TimeFormat, pos: TimePos) -> Time:
    """Step one BCD digit of ``time`` by ``diff``, wrapping within its range."""
    pos = TimePos(pos)
    time_format = TimeFormat(time_format)

    if pos is TimePos.SECOND_UNITS:
        return replace(time, seconds=_units(time.seconds, diff, SECOND_UNITS_MAX))
    if pos is TimePos.SECOND_TENS:
        return replace(time, seconds=_tens(time.seconds, diff, SECOND_TENS_MAX))
    if pos is TimePos.MINUTE_UNITS:
        return replace(time, minutes=_units(time.minutes, diff, MINUTE_UNITS_MAX))
    if pos is TimePos.MINUTE_TENS:
        return replace(time, minutes=_tens(time.minutes, diff, MINUTE_TENS_MAX))

    if time_format is TimeFormat.H24:
        tens_max, last_tens, last_units_max = HOUR_TENS_MAX_24, 2, 4
    else:
        tens_max, last_tens, last_units_max = HOUR_TENS_MAX_12, 1, 2

    if pos is TimePos.HOUR_UNITS:
        hours = _units(time.hours, diff, HOUR_UNITS_MAX)
        if (hours & 0x0F) > last_units_max and (hours >> 4) == last_tens:
            hours &= 0x0F
    else:
        hours = _tens(time.hours, diff, tens_max)
        if (hours >> 4) == last_tens and (hours & 0x0F) > last_units_max:
            hours &= 0xF0
    return replace(time, hours=hours)


class RealTimeClock:
    """DS1307 or M41T81 clock chip reached through ``bus``.

    The bus has ``write(address, data)`` and ``read(address, length)``
    methods using 7-bit addresses, and raises BusError on failure.
    """

    def __init__(self, bus: Bus, chip: ClockChip = ClockChip.DS1307) -> None:
        self._bus = bus
        self.chip = ClockChip(chip)
        self._seconds_reg = 1 if self.chip is ClockChip.M41T81 else 0

    def _read_reg(self, reg: int) -> int:
        self._bus.write(CLOCK_ADDR, bytes([reg]))
        data = self._bus.read(CLOCK_ADDR, 1)
        if len(data) != 1:
            raise BusError(BUS_ERROR, "short read from clock")
        return data[0]

    def _write_reg(self, reg: int, value: int) -> None:
        self._bus.write(CLOCK_ADDR, bytes([reg, value & 0xFF]))

    def _read_block(self) -> bytearray:
        self._bus.write(CLOCK_ADDR, bytes([self._seconds_reg]))
        data = bytearray(self._bus.read(CLOCK_ADDR, _BLOCK_SIZE))
        if len(data) != _BLOCK_SIZE:
            raise BusError(BUS_ERROR, "short read from clock")
        return data

    def _write_block(self, block: bytearray) -> None:
        self._bus.write(CLOCK_ADDR, bytes([self._seconds_reg]) + bytes(block))

    def init(self) -> None:
        """Start the oscillator and switch the chip to 24-hour mode."""
        if self.chip is ClockChip.M41T81:
            ht = self._read_reg(_M41T81_HT_REG_ADDR)
            if ht & _M41T81_HT_MSK:
                self._write_reg(_M41T81_HT_REG_ADDR, ht & ~_M41T81_HT_MSK)

        block = self._read_block()
        if block[0] & _CLOCK_HALT_MSK:
            block[0] &= ~_CLOCK_HALT_MSK & 0xFF
            self._write_block(block)

        if self.chip is ClockChip.M41T81:
            century = _M41T81_CEB_MSK | _M41T81_CB_MSK
            if block[2] & century:
                block[2] &= ~century & 0xFF
                self._write_block(block)
        elif block[2] & _DS1307_HOURS_12_24_MSK:
            block[2] &= ~_DS1307_HOURS_12_24_MSK & 0xFF
            self._write_block(block)

    def get_time(self) -> Time:
        """Read the current time."""
        block = self._read_block()
        return Time(block[0], block[1], block[2] & _DS1307_HOURS_24_MSK)

    def set_time(self, time: Time) -> None:
        """Write a new time, leaving the date and control bytes untouched."""
        block = self._read_block()
        block[0:3] = bytes([time.seconds, time.minutes, time.hours])
        self._write_block(block)

    def calibration_get(self) -> int:
        """Signed oscillator calibration; always 0 on chips without one."""
        if self.chip is not ClockChip.M41T81:
            return 0
        cal = self._read_reg(_M41T81_CAL_REG_ADDR)
        magnitude = cal & M41T81_CAL_MSK
        return magnitude if cal & _M41T81_S_MSK else -magnitude

    def calibration_set(self, value: int) -> None:
        """Set the signed calibration, clamped to ±CLOCK_MAX_ABS_CAL_VAL."""
        if self.chip is not ClockChip.M41T81:
            return
        cal = self._read_reg(_M41T81_CAL_REG_ADDR)
        cal &= ~(_M41T81_FT_MSK | M41T81_CAL_MSK) & 0xFF
        if value > 0:
            cal |= _M41T81_S_MSK
        else:
            cal &= ~_M41T81_S_MSK & 0xFF
            value = -value
        value = min(value, M41T81_CAL_MSK)
        cal |= value & M41T81_CAL_MSK
        self._write_reg(_M41T81_CAL_REG_ADDR, cal)