"""MH-Z19B CO2 sensor protocol over a serial line."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Protocol

from .timer import SoftTimer, TickCounter

START_BYTE = 0xFF
SENSOR = 0x01
AUTO_CALIBRATION_OFF = 0x00
AUTO_CALIBRATION_ON = 0xA0
MEASURE_TIMEOUT = 2000
BAUD_RATE = 9600
PACKET_SIZE = 9
RANGE_VALUES = (2000, 5000)
_NO_ANSWER_LIMIT = 10
_CONCENTRATION_MARKER = bytes([START_BYTE, 0x86])


class Command(IntEnum):
    DETECTION_RANGE = 0x99
    AUTO_CALIBRATION = 0x79
    CALIBRATE_SPAN_POINT = 0x88
    CALIBRATE_ZERO_POINT = 0x87
    READ_CO2_CONCENTRATION = 0x86


class SensorState(IntEnum):
    OK = 0
    NOT_ANSWER = 1
    CALIBRATING = 2


class _Phase(Enum):
    NONE = 0
    START_MEASURE = 1
    WAIT_FOR_ANSWER = 2
    CALIBRATING = 3


class Uart(Protocol):
    def configure(self, baudrate: int) -> None: ...

    def send(self, data: bytes) -> None: ...

    def receive(self) -> bytes: ...


def checksum(packet: bytes) -> int:
    """Checksum over bytes 1 to 7: the two's complement of their sum."""
    if len(packet) < PACKET_SIZE - 1:
        raise ValueError("packet too short for a checksum")
    return (-sum(packet[1:8])) & 0xFF


def build_command(cmd: Command, parameter: int = 0) -> bytes:
    """Build the 9-byte command packet for ``cmd``."""
    try:
        cmd = Command(cmd)
    except ValueError:
        raise ValueError(f"unknown command: {cmd!r}") from None
    content = bytearray(6)
    content[0] = cmd
    if cmd is Command.DETECTION_RANGE:
        if parameter not in RANGE_VALUES:
            raise ValueError(f"detection range must be 2000 or 5000, not {parameter!r}")
        content[4:6] = parameter.to_bytes(2, "big")
    elif cmd is Command.CALIBRATE_SPAN_POINT:
        if parameter not in RANGE_VALUES:
            raise ValueError(f"span point must be 2000 or 5000, not {parameter!r}")
        content[1:3] = parameter.to_bytes(2, "big")
    elif cmd is Command.AUTO_CALIBRATION:
        content[1] = parameter & 0xFF
    packet = bytearray([START_BYTE, SENSOR]) + content + b"\x00"
    packet[8] = checksum(packet)
    return bytes(packet)


def parse_concentration(data: bytes) -> int | None:
    """CO2 ppm from a concentration answer found in ``data``, or None."""
    index = data.find(_CONCENTRATION_MARKER)
    if index < 0 or index + 4 > len(data):
        return None
    return data[index + 2] * 256 + data[index + 3]


class Mhz19b:
    """Periodically polls the sensor and keeps the latest concentration."""

    def __init__(self, uart: Uart, counter: TickCounter) -> None:
        self._uart = uart
        self._timer = SoftTimer(counter)
        self._phase = _Phase.NONE
        self._no_answer_count = 0
        self.concentration = 0
        self.state = SensorState.OK

    def init(self) -> None:
        """Configure the line, select the 5000 ppm range and turn auto-calibration off."""
        self._uart.configure(BAUD_RATE)
        self.send_command(Command.DETECTION_RANGE, 5000)
        self.send_command(Command.AUTO_CALIBRATION, AUTO_CALIBRATION_OFF)

    def send_command(self, cmd: Command, parameter: int = 0) -> None:
        self._uart.send(build_command(cmd, parameter))

    def process(self) -> None:
        """Advance the measurement cycle by one step; call periodically."""
        if self._phase is _Phase.CALIBRATING:
            return
        if self._phase is _Phase.NONE:
            self._phase = _Phase.START_MEASURE
        elif self._phase is _Phase.START_MEASURE:
            self._timer.start(MEASURE_TIMEOUT)
            self.send_command(Command.READ_CO2_CONCENTRATION)
            self._phase = _Phase.WAIT_FOR_ANSWER
        elif self._phase is _Phase.WAIT_FOR_ANSWER:
            if self._timer.check() and self.state is SensorState.OK:
                self._timer.restart()
                self._read_answer()
                self._phase = _Phase.START_MEASURE
        if self.state is SensorState.CALIBRATING:
            self._phase = _Phase.CALIBRATING

    def _read_answer(self) -> None:
        answer = self._uart.receive()
        if answer:
            value = parse_concentration(answer)
            if value is not None:
                self.concentration = value
            self.state = SensorState.OK
        elif self._no_answer_count < _NO_ANSWER_LIMIT:
            self._no_answer_count += 1
            if self._no_answer_count == _NO_ANSWER_LIMIT:
                self.state = SensorState.NOT_ANSWER

    def start_calibrating(self) -> None:
        """Start zero-point calibration; polling stops from then on."""
        self.state = SensorState.CALIBRATING
        self.send_command(Command.CALIBRATE_ZERO_POINT)