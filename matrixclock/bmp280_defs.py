"""Register map, constants and data records of the BMP280 pressure sensor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# Chip identifiers for sample and mass-production parts.
CHIP_ID1 = 0x56
CHIP_ID2 = 0x57
CHIP_ID3 = 0x58
CHIP_IDS = (CHIP_ID1, CHIP_ID2, CHIP_ID3)

I2C_ADDR_PRIM = 0x76
I2C_ADDR_SEC = 0x77

# Calibration parameter block.
DIG_T1_LSB_ADDR = 0x88
CALIB_DATA_SIZE = 24
CALIB_FIELDS = (
    "dig_t1", "dig_t2", "dig_t3",
    "dig_p1", "dig_p2", "dig_p3", "dig_p4", "dig_p5",
    "dig_p6", "dig_p7", "dig_p8", "dig_p9",
)
UNSIGNED_CALIB_FIELDS = frozenset({"dig_t1", "dig_p1"})

# Other registers.
CHIP_ID_ADDR = 0xD0
SOFT_RESET_ADDR = 0xE0
STATUS_ADDR = 0xF3
CTRL_MEAS_ADDR = 0xF4
CONFIG_ADDR = 0xF5
PRES_MSB_ADDR = 0xF7
PRES_LSB_ADDR = 0xF8
PRES_XLSB_ADDR = 0xF9
TEMP_MSB_ADDR = 0xFA
TEMP_LSB_ADDR = 0xFB
TEMP_XLSB_ADDR = 0xFC

# Power modes.
SLEEP_MODE = 0x00
FORCED_MODE = 0x01
NORMAL_MODE = 0x03

SOFT_RESET_CMD = 0xB6

# Output data rate (standby duration) options.
ODR_0_5_MS = 0x00
ODR_62_5_MS = 0x01
ODR_125_MS = 0x02
ODR_250_MS = 0x03
ODR_500_MS = 0x04
ODR_1000_MS = 0x05
ODR_2000_MS = 0x06
ODR_4000_MS = 0x07

# Oversampling options.
OS_NONE = 0x00
OS_1X = 0x01
OS_2X = 0x02
OS_4X = 0x03
OS_8X = 0x04
OS_16X = 0x05

# IIR filter coefficients.
FILTER_OFF = 0x00
FILTER_COEFF_2 = 0x01
FILTER_COEFF_4 = 0x02
FILTER_COEFF_8 = 0x03
FILTER_COEFF_16 = 0x04

SPI3_WIRE_ENABLE = 1
SPI3_WIRE_DISABLE = 0

MEAS_DONE = 0
MEAS_ONGOING = 1
IM_UPDATE_DONE = 0
IM_UPDATE_ONGOING = 1

# Bit positions and masks.
STATUS_IM_UPDATE_POS = 0
STATUS_IM_UPDATE_MASK = 0x01
STATUS_MEAS_POS = 3
STATUS_MEAS_MASK = 0x08
OS_TEMP_POS = 5
OS_TEMP_MASK = 0xE0
OS_PRES_POS = 2
OS_PRES_MASK = 0x1C
POWER_MODE_POS = 0
POWER_MODE_MASK = 0x03
STANDBY_DURN_POS = 5
STANDBY_DURN_MASK = 0xE0
FILTER_POS = 2
FILTER_MASK = 0x1C
SPI3_ENABLE_POS = 0
SPI3_ENABLE_MASK = 0x01

# Self-test bounds for trimming values.
ST_DIG_T1_MIN, ST_DIG_T1_MAX = 19000, 35000
ST_DIG_T2_MIN, ST_DIG_T2_MAX = 22000, 30000
ST_DIG_T3_MIN, ST_DIG_T3_MAX = -3000, -1000
ST_DIG_P1_MIN, ST_DIG_P1_MAX = 30000, 42000
ST_DIG_P2_MIN, ST_DIG_P2_MAX = -12970, -8000
ST_DIG_P3_MIN, ST_DIG_P3_MAX = -5000, 8000
ST_DIG_P4_MIN, ST_DIG_P4_MAX = -10000, 18000
ST_DIG_P5_MIN, ST_DIG_P5_MAX = -500, 1100
ST_DIG_P6_MIN, ST_DIG_P6_MAX = -1000, 1000
ST_DIG_P7_MIN, ST_DIG_P7_MAX = -32768, 32767
ST_DIG_P8_MIN, ST_DIG_P8_MAX = -30000, 10000
ST_DIG_P9_MIN, ST_DIG_P9_MAX = -10000, 30000

# Register holding custom trimming values and the API revision.
ST_TRIMCUSTOM_REG = 0x87
ST_TRIMCUSTOM_REG_APIREV_POS = 1
ST_TRIMCUSTOM_REG_APIREV_MASK = 0x06
ST_MAX_APIREVISION = 0x00

# Raw ADC output range.
ST_ADC_T_MIN = 0x00000
ST_ADC_T_MAX = 0xFFFF0
ST_ADC_P_MIN = 0x00000
ST_ADC_P_MAX = 0xFFFF0

# Plausible compensated values: degrees Celsius and hPa.
ST_PLAUSIBLE_TEMP_MIN = 0
ST_PLAUSIBLE_TEMP_MAX = 40
ST_PLAUSIBLE_PRESS_MIN = 900
ST_PLAUSIBLE_PRESS_MAX = 1100
ST_TEMPERATURE_RESOLUTION_INT32 = 100
ST_PRESSURE_RESOLUTION_INT32 = 100


class ErrorCode(IntEnum):
    """Failure codes reported by the driver."""

    NULL_PTR = -1
    DEV_NOT_FOUND = -2
    INVALID_LEN = -3
    COMM_FAIL = -4
    INVALID_MODE = -5
    BOND_WIRE = -6
    IMPLAUS_TEMP = -7
    IMPLAUS_PRESS = -8
    CAL_PARAM_RANGE = -9
    UNCOMP_TEMP_RANGE = -10
    UNCOMP_PRES_RANGE = -11
    UNCOMP_TEMP_AND_PRESS_RANGE = -12
    UNCOMP_DATA_CALC = -13
    COMP_TEMP_32BIT = -14
    COMP_PRESS_32BIT = -15
    COMP_PRESS_64BIT = -16
    COMP_TEMP_DOUBLE = -17
    COMP_PRESS_DOUBLE = -18


class Bmp280Error(Exception):
    """A driver operation failed; ``code`` tells which way."""

    def __init__(self, code: ErrorCode | int, message: str | None = None) -> None:
        try:
            code = ErrorCode(code)
        except ValueError:
            pass
        name = code.name if isinstance(code, ErrorCode) else str(code)
        super().__init__(message or f"BMP280 error {name}")
        self.code = code


class Interface(IntEnum):
    SPI = 0
    I2C = 1


@dataclass
class CalibParam:
    """Factory trimming values; ``t_fine`` carries temperature into pressure compensation."""

    dig_t1: int = 0
    dig_t2: int = 0
    dig_t3: int = 0
    dig_p1: int = 0
    dig_p2: int = 0
    dig_p3: int = 0
    dig_p4: int = 0
    dig_p5: int = 0
    dig_p6: int = 0
    dig_p7: int = 0
    dig_p8: int = 0
    dig_p9: int = 0
    t_fine: int = 0


@dataclass
class Config:
    """Oversampling, standby, filter and 3-wire SPI settings."""

    os_temp: int = OS_NONE
    os_pres: int = OS_NONE
    odr: int = ODR_0_5_MS
    filter: int = FILTER_OFF
    spi3w_en: int = SPI3_WIRE_DISABLE


@dataclass(frozen=True)
class Status:
    measuring: int = MEAS_DONE
    im_update: int = IM_UPDATE_DONE


@dataclass(frozen=True)
class UncompData:
    """Raw 20-bit ADC readings."""

    uncomp_temp: int = 0
    uncomp_press: int = 0


def get_bits(value: int, mask: int, pos: int) -> int:
    """Extract the field selected by ``mask`` and shift it down by ``pos``."""
    return (value & mask) >> pos


def set_bits(reg: int, mask: int, pos: int, value: int) -> int:
    """Return the byte ``reg`` with the field under ``mask`` replaced by ``value``."""
    return ((reg & ~mask) | ((value << pos) & mask)) & 0xFF