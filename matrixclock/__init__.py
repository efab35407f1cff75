"""Desk-clock logic: RTC time editing, BMP280 and MH-Z19B sensors, buttons and soft timers."""

__version__ = "0.1.0"