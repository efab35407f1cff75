"""Hardware status flags, CRC-8 and small display-text helpers."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from .adc import ADC_MAX

ENTER_TIME_BUTTONS_TIMEOUT = 15000
ENTER_TIME_BLINK_TIMEOUT = 400
CODE_ENTER_TIMEOUT = 5000
SETTINGS_UPDATE_TIMEOUT = 10000
SENSORS_DATA_OFFSET_TIMEOUT = 50

CO2_CALIBRATION_OK = 0
CO2_CALIBRATION_FAIL = 1
CALIBRATION_CO2_TIME = 20  # minutes

_CRC8_POLY = 0x31
_CRC8_INIT = 0xFF


class HwBit(IntEnum):
    """Bit positions of the hardware status word."""

    CLOCK_OK = 0
    EEPROM_OK = 1
    BME_OK = 2
    MHZ19B_OK = 3


class HardwareState:
    """Set of hardware components that reported themselves healthy."""

    def __init__(self) -> None:
        self._bits = 0

    @property
    def value(self) -> int:
        """The raw status word."""
        return self._bits

    def set(self, bit: HwBit) -> None:
        self._bits |= 1 << HwBit(bit)

    def clear(self, bit: HwBit) -> None:
        self._bits &= ~(1 << HwBit(bit))

    def get(self, bit: HwBit) -> bool:
        return bool(self._bits & (1 << HwBit(bit)))


def crc8(data: Iterable[int]) -> int:
    """CRC-8 with polynomial 0x31, initial value 0xFF, no reflection, no final xor."""
    crc = _CRC8_INIT
    for byte in bytes(data):
        crc ^= byte
        for _ in range(8):
            crc = ((crc << 1) ^ _CRC8_POLY) if crc & 0x80 else (crc << 1)
            crc &= 0xFF
    return crc


def format_value(value: int, unit: str) -> str:
    """Text shown while editing a numeric value: the number followed by its unit."""
    return f"{value}{unit}"


def sensor_select_text(sensor: str, state: bool) -> str:
    """Text such as ``T:OK`` or ``T:NO`` for a sensor's on/off selection."""
    return f"{sensor}:{'OK' if state else 'NO'}"


def brightness_level(adc_value: int, start: int, size: int) -> int:
    """Display intensity for a light reading, spread over ``size + 1`` steps from ``start``."""
    if not 0 <= adc_value <= ADC_MAX:
        raise ValueError(f"light reading out of range: {adc_value!r}")
    return (adc_value * (size + 1) // ADC_MAX + start) & 0xFF