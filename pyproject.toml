[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matrixclock"
version = "0.1.0"
description = "Logic for an LED-matrix desk clock: RTC time editing, BMP280 compensation, MH-Z19B CO2 protocol, buttons and soft timers"
requires-python = ">=3.10"
dependencies = []
keywords = ["clock", "rtc", "bmp280", "mhz19b", "co2", "sensor", "crc8", "ring-buffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["matrixclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
