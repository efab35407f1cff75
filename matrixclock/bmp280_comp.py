"""BMP280 calibration parsing, range checks and fixed/floating point compensation."""

from __future__ import annotations

from .bmp280_defs import (
    CALIB_DATA_SIZE,
    CALIB_FIELDS,
    ST_ADC_P_MAX,
    ST_ADC_P_MIN,
    ST_ADC_T_MAX,
    ST_ADC_T_MIN,
    ST_DIG_P1_MAX,
    ST_DIG_P1_MIN,
    ST_DIG_P2_MAX,
    ST_DIG_P2_MIN,
    ST_DIG_P3_MAX,
    ST_DIG_P3_MIN,
    ST_DIG_P4_MAX,
    ST_DIG_P4_MIN,
    ST_DIG_P5_MAX,
    ST_DIG_P5_MIN,
    ST_DIG_P6_MAX,
    ST_DIG_P6_MIN,
    ST_DIG_P8_MAX,
    ST_DIG_P8_MIN,
    ST_DIG_P9_MAX,
    ST_DIG_P9_MIN,
    ST_DIG_T1_MAX,
    ST_DIG_T1_MIN,
    ST_DIG_T2_MAX,
    ST_DIG_T2_MIN,
    ST_DIG_T3_MAX,
    ST_DIG_T3_MIN,
    ST_PLAUSIBLE_PRESS_MAX,
    ST_PLAUSIBLE_PRESS_MIN,
    ST_PLAUSIBLE_TEMP_MAX,
    ST_PLAUSIBLE_TEMP_MIN,
    ST_PRESSURE_RESOLUTION_INT32,
    ST_TEMPERATURE_RESOLUTION_INT32,
    UNSIGNED_CALIB_FIELDS,
    Bmp280Error,
    CalibParam,
    Config,
    ErrorCode,
    UncompData,
)

UNCOMP_DATA_SIZE = 6

_CAL_BOUNDS = (
    ("dig_t1", ST_DIG_T1_MIN, ST_DIG_T1_MAX),
    ("dig_t2", ST_DIG_T2_MIN, ST_DIG_T2_MAX),
    ("dig_t3", ST_DIG_T3_MIN, ST_DIG_T3_MAX),
    ("dig_p1", ST_DIG_P1_MIN, ST_DIG_P1_MAX),
    ("dig_p2", ST_DIG_P2_MIN, ST_DIG_P2_MAX),
    ("dig_p3", ST_DIG_P3_MIN, ST_DIG_P3_MAX),
    ("dig_p4", ST_DIG_P4_MIN, ST_DIG_P4_MAX),
    ("dig_p5", ST_DIG_P5_MIN, ST_DIG_P5_MAX),
    ("dig_p6", ST_DIG_P6_MIN, ST_DIG_P6_MAX),
    ("dig_p8", ST_DIG_P8_MIN, ST_DIG_P8_MAX),
    ("dig_p9", ST_DIG_P9_MIN, ST_DIG_P9_MAX),
)


def _u32(value: int) -> int:
    return value & 0xFFFFFFFF


def _i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def parse_calib(data: bytes) -> CalibParam:
    """Decode the 24-byte little-endian trimming block."""
    if len(data) < CALIB_DATA_SIZE:
        raise ValueError(f"calibration block needs {CALIB_DATA_SIZE} bytes, got {len(data)}")
    values = {}
    for index, name in enumerate(CALIB_FIELDS):
        chunk = bytes(data[index * 2:index * 2 + 2])
        values[name] = int.from_bytes(chunk, "little", signed=name not in UNSIGNED_CALIB_FIELDS)
    return CalibParam(**values)


def parse_uncomp_data(data: bytes) -> UncompData:
    """Decode the six pressure and temperature data bytes into raw 20-bit readings."""
    if len(data) < UNCOMP_DATA_SIZE:
        raise ValueError(f"data block needs {UNCOMP_DATA_SIZE} bytes, got {len(data)}")
    press = (data[0] << 12) | (data[1] << 4) | (data[2] >> 4)
    temp = (data[3] << 12) | (data[4] << 4) | (data[5] >> 4)
    return UncompData(uncomp_temp=temp, uncomp_press=press)


def check_boundaries(utemperature: int, upressure: int) -> None:
    """Raise Bmp280Error if a raw reading lies outside the valid ADC range."""
    temp_bad = utemperature <= ST_ADC_T_MIN or utemperature >= ST_ADC_T_MAX
    pres_bad = upressure <= ST_ADC_P_MIN or upressure >= ST_ADC_P_MAX
    if temp_bad and pres_bad:
        raise Bmp280Error(ErrorCode.UNCOMP_TEMP_AND_PRESS_RANGE)
    if temp_bad:
        raise Bmp280Error(ErrorCode.UNCOMP_TEMP_RANGE)
    if pres_bad:
        raise Bmp280Error(ErrorCode.UNCOMP_PRES_RANGE)


def check_sensor_range(temperature: int, pressure: int) -> None:
    """Raise Bmp280Error unless 0.01 degC temperature and Pa pressure are plausible."""
    if (temperature < ST_PLAUSIBLE_TEMP_MIN
            or temperature > ST_PLAUSIBLE_TEMP_MAX * ST_TEMPERATURE_RESOLUTION_INT32):
        raise Bmp280Error(ErrorCode.IMPLAUS_TEMP)
    if (pressure < ST_PLAUSIBLE_PRESS_MIN * ST_PRESSURE_RESOLUTION_INT32
            or pressure > ST_PLAUSIBLE_PRESS_MAX * ST_PRESSURE_RESOLUTION_INT32):
        raise Bmp280Error(ErrorCode.IMPLAUS_PRESS)


def check_cal_param(calib: CalibParam) -> None:
    """Raise Bmp280Error if any trimming value is outside its permitted range."""
    for name, low, high in _CAL_BOUNDS:
        value = getattr(calib, name)
        if value < low or value > high:
            raise Bmp280Error(ErrorCode.CAL_PARAM_RANGE, f"{name}={value} out of range")


def comp_temp_32bit(calib: CalibParam, uncomp_temp: int) -> int:
    """Temperature in 0.01 degC; stores ``t_fine`` in ``calib`` for pressure compensation."""
    t1, t2, t3 = calib.dig_t1, calib.dig_t2, calib.dig_t3
    var1 = _div(_i32((_div(uncomp_temp, 8) - (t1 << 1)) * t2), 2048)
    delta = _div(uncomp_temp, 16) - t1
    var2 = _div(_i32(_div(_i32(delta * delta), 4096) * t3), 16384)
    calib.t_fine = _i32(var1 + var2)
    return _div(_i32(calib.t_fine * 5 + 128), 256)


def comp_pres_32bit(calib: CalibParam, uncomp_pres: int) -> int:
    """Pressure in Pa using 32-bit integer arithmetic."""
    c = calib
    var1 = _div(c.t_fine, 2) - 64000
    quarter = _div(var1, 4)
    var2 = _i32(_div(_i32(quarter * quarter), 2048) * c.dig_p6)
    var2 = _i32(var2 + _i32(var1 * c.dig_p5) * 2)
    var2 = _i32(_div(var2, 4) + c.dig_p4 * 65536)
    var1 = _div(
        _i32(_div(_i32(c.dig_p3 * _div(_i32(quarter * quarter), 8192)), 8) + _div(_i32(c.dig_p2 * var1), 2)),
        262144,
    )
    var1 = _div(_i32((32768 + var1) * c.dig_p1), 32768)
    pres = _u32((_u32(1048576 - uncomp_pres) - _div(var2, 4096)) * 3125)
    if var1 == 0:
        raise Bmp280Error(ErrorCode.COMP_PRESS_32BIT)
    divisor = _u32(var1)
    if pres < 0x80000000:
        pres = _u32(pres << 1) // divisor
    else:
        pres = _u32((pres // divisor) * 2)
    var1 = _div(_i32(c.dig_p9 * _i32(_u32((pres // 8) * (pres // 8)) // 8192)), 4086)
    var2 = _div(_i32(_i32(pres // 4) * c.dig_p8), 8192)
    return _u32(_i32(pres) + _div(var1 + var2 + c.dig_p7, 16))


def comp_pres_64bit(calib: CalibParam, uncomp_pres: int) -> int:
    """Pressure in Pa as Q24.8 fixed point (divide by 256), using 64-bit arithmetic."""
    c = calib
    var1 = c.t_fine - 128000
    var2 = var1 * var1 * c.dig_p6
    var2 = var2 + var1 * c.dig_p5 * 131072
    var2 = var2 + c.dig_p4 * 34359738368
    var1 = _div(var1 * var1 * c.dig_p3, 256) + var1 * c.dig_p2 * 4096
    var1 = _div((0x800000000000 + var1) * c.dig_p1, 8589934592)
    if var1 == 0:
        raise Bmp280Error(ErrorCode.COMP_PRESS_64BIT)
    p = 1048576 - uncomp_pres
    p = _div(((p << 31) - var2) * 3125, var1)
    var1 = _div(c.dig_p9 * _div(p, 8192) * _div(p, 8192), 33554432)
    var2 = _div(c.dig_p8 * p, 524288)
    p = _div(p + var1 + var2, 256) + c.dig_p7 * 16
    return _u32(p)


def comp_temp_double(calib: CalibParam, uncomp_temp: int) -> float:
    """Temperature in degC; stores ``t_fine`` in ``calib`` for pressure compensation."""
    t1 = float(calib.dig_t1)
    var1 = (uncomp_temp / 16384.0 - t1 / 1024.0) * calib.dig_t2
    delta = uncomp_temp / 131072.0 - t1 / 8192.0
    var2 = delta * delta * calib.dig_t3
    calib.t_fine = _i32(int(var1 + var2))
    return (var1 + var2) / 5120.0


def comp_pres_double(calib: CalibParam, uncomp_pres: int) -> float:
    """Pressure in Pa using double precision."""
    c = calib
    var1 = c.t_fine / 2.0 - 64000.0
    var2 = var1 * var1 * c.dig_p6 / 32768.0
    var2 = var2 + var1 * c.dig_p5 * 2.0
    var2 = var2 / 4.0 + c.dig_p4 * 65536.0
    var1 = (c.dig_p3 * var1 * var1 / 524288.0 + c.dig_p2 * var1) / 524288.0
    var1 = (1.0 + var1 / 32768.0) * c.dig_p1
    pres = _i32(_u32(int(1048576.0 - uncomp_pres)))
    if var1 == 0:
        raise Bmp280Error(ErrorCode.COMP_PRESS_DOUBLE)
    pres = _i32(_u32(int((pres - var2 / 4096.0) * 6250.0 / var1)))
    var1 = c.dig_p9 * pres * pres / 2147483648.0
    var2 = pres * c.dig_p8 / 32768.0
    return pres + (var1 + var2 + c.dig_p7) / 16.0


def compute_meas_time(config: Config) -> int:
    """Measurement time in milliseconds for the given oversampling settings."""
    startup = 1000
    period_per_osrs = 2000
    t_dur = period_per_osrs * ((1 << config.os_temp) >> 1)
    p_dur = period_per_osrs * ((1 << config.os_pres) >> 1)
    p_startup = 500 if config.os_pres else 0
    period = (startup + t_dur + p_startup + p_dur + 500) // 1000
    return period & 0xFF