import struct

import pytest

from matrixclock.bmp280_comp import (
    check_boundaries,
    check_cal_param,
    check_sensor_range,
    comp_pres_32bit,
    comp_pres_64bit,
    comp_pres_double,
    comp_temp_32bit,
    comp_temp_double,
    compute_meas_time,
    parse_calib,
    parse_uncomp_data,
)
from matrixclock.bmp280_defs import (
    OS_16X,
    OS_1X,
    OS_NONE,
    Bmp280Error,
    CalibParam,
    Config,
    ErrorCode,
)

# Worked example of the sensor's datasheet.
DATASHEET = dict(
    dig_t1=27504, dig_t2=26435, dig_t3=-1000,
    dig_p1=36477, dig_p2=-10685, dig_p3=3024, dig_p4=2855, dig_p5=140,
    dig_p6=-7, dig_p7=15500, dig_p8=-14600, dig_p9=6000,
)
ADC_T = 519888
ADC_P = 415148


def make_calib(**overrides):
    values = dict(DATASHEET)
    values.update(overrides)
    return CalibParam(**values)


def calib_bytes(values):
    order = ["dig_t1", "dig_t2", "dig_t3", "dig_p1", "dig_p2", "dig_p3",
             "dig_p4", "dig_p5", "dig_p6", "dig_p7", "dig_p8", "dig_p9"]
    return struct.pack("<HhhHhhhhhhhh", *(values[name] for name in order))


def test_parse_calib_round_trip():
    calib = parse_calib(calib_bytes(DATASHEET))
    assert calib == make_calib()


def test_parse_calib_signedness():
    values = dict(DATASHEET, dig_t1=0xFFFF, dig_t2=-1)
    calib = parse_calib(calib_bytes(values))
    assert calib.dig_t1 == 0xFFFF
    assert calib.dig_t2 == -1


def test_parse_calib_short_data():
    with pytest.raises(ValueError):
        parse_calib(bytes(10))


def test_parse_uncomp_data_round_trip():
    press, temp = ADC_P, ADC_T
    data = bytes([
        press >> 12, (press >> 4) & 0xFF, (press & 0x0F) << 4,
        temp >> 12, (temp >> 4) & 0xFF, (temp & 0x0F) << 4,
    ])
    raw = parse_uncomp_data(data)
    assert raw.uncomp_press == press
    assert raw.uncomp_temp == temp


def test_parse_uncomp_data_short():
    with pytest.raises(ValueError):
        parse_uncomp_data(bytes(5))


@pytest.mark.parametrize(
    "ut, up, code",
    [
        (0, 500000, ErrorCode.UNCOMP_TEMP_RANGE),
        (0xFFFF0, 500000, ErrorCode.UNCOMP_TEMP_RANGE),
        (500000, 0, ErrorCode.UNCOMP_PRES_RANGE),
        (500000, 0xFFFF0, ErrorCode.UNCOMP_PRES_RANGE),
        (0, 0xFFFF0, ErrorCode.UNCOMP_TEMP_AND_PRESS_RANGE),
    ],
)
def test_check_boundaries_errors(ut, up, code):
    with pytest.raises(Bmp280Error) as info:
        check_boundaries(ut, up)
    assert info.value.code == code


def test_check_boundaries_accepts_valid():
    assert check_boundaries(ADC_T, ADC_P) is None


@pytest.mark.parametrize(
    "temp, pres, code",
    [
        (-1, 100000, ErrorCode.IMPLAUS_TEMP),
        (4001, 100000, ErrorCode.IMPLAUS_TEMP),
        (2500, 89999, ErrorCode.IMPLAUS_PRESS),
        (2500, 110001, ErrorCode.IMPLAUS_PRESS),
        (-1, 0, ErrorCode.IMPLAUS_TEMP),
    ],
)
def test_check_sensor_range_errors(temp, pres, code):
    with pytest.raises(Bmp280Error) as info:
        check_sensor_range(temp, pres)
    assert info.value.code == code


def test_check_sensor_range_limits_inclusive():
    assert check_sensor_range(0, 90000) is None
    assert check_sensor_range(4000, 110000) is None


def test_check_cal_param_datasheet_ok_and_out_of_range():
    assert check_cal_param(make_calib()) is None
    with pytest.raises(Bmp280Error) as info:
        check_cal_param(make_calib(dig_t1=18999))
    assert info.value.code == ErrorCode.CAL_PARAM_RANGE


def test_check_cal_param_ignores_p7():
    assert check_cal_param(make_calib(dig_p7=-32768)) is None


def test_comp_temp_32bit_datasheet():
    calib = make_calib()
    assert comp_temp_32bit(calib, ADC_T) == 2508
    assert calib.t_fine != 0


def test_comp_temp_double_matches_integer():
    calib_int = make_calib()
    calib_dbl = make_calib()
    t_int = comp_temp_32bit(calib_int, ADC_T)
    t_dbl = comp_temp_double(calib_dbl, ADC_T)
    assert abs(t_dbl - t_int / 100) < 0.01
    assert abs(calib_dbl.t_fine - calib_int.t_fine) <= 2


def test_pressure_decreases_with_raw_reading():
    calib = make_calib()
    comp_temp_32bit(calib, ADC_T)
    assert comp_pres_64bit(calib, ADC_P + 1000) < comp_pres_64bit(calib, ADC_P)
    assert comp_pres_32bit(calib, ADC_P + 1000) < comp_pres_32bit(calib, ADC_P)


@pytest.mark.parametrize(
    "func, code",
    [
        (comp_pres_32bit, ErrorCode.COMP_PRESS_32BIT),
        (comp_pres_64bit, ErrorCode.COMP_PRESS_64BIT),
        (comp_pres_double, ErrorCode.COMP_PRESS_DOUBLE),
    ],
)
def test_pressure_zero_divisor(func, code):
    calib = make_calib(dig_p1=0)
    comp_temp_32bit(calib, ADC_T)
    with pytest.raises(Bmp280Error) as info:
        func(calib, ADC_P)
    assert info.value.code == code


def test_compute_meas_time_values():
    assert compute_meas_time(Config(os_temp=OS_NONE, os_pres=OS_NONE)) == 1
    assert compute_meas_time(Config(os_temp=OS_1X, os_pres=OS_1X)) == 6


def test_compute_meas_time_grows_with_oversampling():
    low = compute_meas_time(Config(os_temp=OS_1X, os_pres=OS_1X))
    high = compute_meas_time(Config(os_temp=OS_16X, os_pres=OS_16X))
    assert high > low