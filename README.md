# matrixclock

The logic of an LED-matrix desk clock as plain Python objects: real-time
clock handling, sensor protocols and compensation, button handling and
software timers. Every hardware access goes through a callable or object
you pass in, so the code runs against real buses or against test doubles.
It has no dependencies beyond the standard library.

## Modules

- `matrixclock.ringbuffer.RingBuffer` is a fixed-capacity byte FIFO
  (32 bytes by default). `push_back` returns `False` and drops the byte
  when the buffer is full; `pop_front` returns `None` when it is empty.
- `matrixclock.timer.TickCounter` is a wrapping 32-bit millisecond counter
  that you advance with `tick()`. `matrixclock.timer.SoftTimer` is a
  one-shot timeout on it with `start`, `check`, `stop` and `restart`.
- `matrixclock.adc.AdcAverager` keeps the last three 8-bit samples and
  reports their integer mean.
- `matrixclock.buttons.Buttons` polls five keys (`Button.ENTER`, `UP`,
  `DOWN`, `LEFT`, `RIGHT`) through a `pin_reader(button) -> bool` callable.
  Call `process()` periodically; it records a click when a key is released
  and a long press after a key is held for 2000 ms.
- `matrixclock.rtc.RealTimeClock` drives a DS1307 or M41T81 clock chip
  (`ClockChip`) through a bus object with `write(address, data)` and
  `read(address, length)`. It starts the oscillator and selects 24-hour
  mode in `init()`, reads and writes `Time` values (packed BCD bytes), and
  on the M41T81 gets and sets the signed oscillator calibration.
  `change_time` steps one BCD digit (`TimePos`) of a `Time` and keeps the
  hour valid for `TimeFormat.H12` or `TimeFormat.H24`.
- `matrixclock.utils` holds the hardware status flags (`HardwareState`,
  `HwBit`), `crc8` (polynomial 0x31, initial value 0xFF), and the helpers
  `format_value`, `sensor_select_text` and `brightness_level`.
- `matrixclock.mhz19b` speaks the MH-Z19B CO2 sensor's serial protocol:
  `build_command`, `checksum` and `parse_concentration`, and the `Mhz19b`
  poller, which works through a UART object with `configure(baudrate)`,
  `send(data)` and `receive()`.
- `matrixclock.bmp280.Bmp280` is a driver for the BMP280 pressure and
  temperature sensor over `read(dev_id, reg, length)`,
  `write(dev_id, reg, data)` and `delay_ms(ms)` callables. The pure
  calibration parsing, range checks and compensation formulas are in
  `matrixclock.bmp280_comp`; register definitions, the data classes and
  `Bmp280Error` are in `matrixclock.bmp280_defs`.

## Example

```python
from matrixclock.rtc import Time, TimeFormat, TimePos, change_time
from matrixclock.utils import crc8

t = Time(seconds=0x00, minutes=0x59, hours=0x23)
t = change_time(t, 1, TimeFormat.H24, TimePos.MINUTE_UNITS)
print(hex(t.minutes))           # 0x50

print(hex(crc8(b"123456789")))  # 0xf7
```

## Errors

Failures are raised as exceptions. The BMP280 driver raises `Bmp280Error`,
whose `code` is an `ErrorCode`; an `OSError` from your read or write
callable becomes `ErrorCode.COMM_FAIL`. `RealTimeClock` raises `BusError`
when the bus returns fewer bytes than asked for; your bus object may raise
`BusError` itself for other failures. `build_command` raises `ValueError`
for an unknown command or a range parameter other than 2000 or 5000.

## What this package does not do

It does not drive the LED matrix or render text on it, has no settings
menu, no persistent settings storage, no BME280 humidity support and no
main loop tying the parts together. It does not open serial ports or I²C
buses: you supply the objects and callables that talk to the hardware.

## Tests

```
pip install .[test]
pytest
```