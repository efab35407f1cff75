import pytest

from matrixclock.bmp280_defs import (
    CALIB_DATA_SIZE,
    CALIB_FIELDS,
    FILTER_MASK,
    FILTER_POS,
    OS_16X,
    OS_1X,
    OS_TEMP_MASK,
    OS_TEMP_POS,
    POWER_MODE_MASK,
    POWER_MODE_POS,
    NORMAL_MODE,
    Bmp280Error,
    CalibParam,
    Config,
    ErrorCode,
    Status,
    UncompData,
    get_bits,
    set_bits,
)


def test_get_bits_extracts_temperature_oversampling():
    assert get_bits(0xA0, OS_TEMP_MASK, OS_TEMP_POS) == OS_16X


@pytest.mark.parametrize("reg", [0x00, 0xFF, 0x5A, 0xA5])
@pytest.mark.parametrize("value", range(8))
def test_set_then_get_round_trip(reg, value):
    result = set_bits(reg, FILTER_MASK, FILTER_POS, value)
    assert get_bits(result, FILTER_MASK, FILTER_POS) == value
    assert result & ~FILTER_MASK & 0xFF == reg & ~FILTER_MASK & 0xFF


def test_set_bits_truncates_value_to_field():
    result = set_bits(0x00, POWER_MODE_MASK, POWER_MODE_POS, 0xFF)
    assert result == POWER_MODE_MASK


def test_set_bits_power_mode_keeps_oversampling():
    reg = set_bits(0x00, OS_TEMP_MASK, OS_TEMP_POS, OS_1X)
    reg = set_bits(reg, POWER_MODE_MASK, POWER_MODE_POS, NORMAL_MODE)
    assert get_bits(reg, OS_TEMP_MASK, OS_TEMP_POS) == OS_1X
    assert get_bits(reg, POWER_MODE_MASK, POWER_MODE_POS) == NORMAL_MODE
    assert 0 <= reg <= 0xFF


def test_error_from_int_code_maps_to_enum():
    err = Bmp280Error(-4)
    assert err.code is ErrorCode.COMM_FAIL
    assert "COMM_FAIL" in str(err)


def test_error_keeps_unknown_code():
    err = Bmp280Error(-99)
    assert err.code == -99
    assert not isinstance(err.code, ErrorCode)


def test_error_custom_message():
    err = Bmp280Error(ErrorCode.DEV_NOT_FOUND, "no chip")
    assert err.code is ErrorCode.DEV_NOT_FOUND
    assert "no chip" in str(err)


@pytest.mark.parametrize("code", list(ErrorCode))
def test_every_error_code_maps_back_from_its_value(code):
    err = Bmp280Error(code.value)
    assert err.code is code
    assert err.code.value < 0


def test_default_config_matches_reset_values():
    assert Config() == Config(0, 0, 0, 0, 0)


def test_calib_fields_fill_calibration_block():
    assert len(CALIB_FIELDS) * 2 == CALIB_DATA_SIZE
    calib = CalibParam(**{name: 1 for name in CALIB_FIELDS})
    assert calib.t_fine == 0
    assert all(getattr(calib, name) == 1 for name in CALIB_FIELDS)


def test_status_and_uncomp_are_immutable():
    status = Status()
    with pytest.raises(AttributeError):
        status.measuring = 1
    data = UncompData(uncomp_temp=519888, uncomp_press=415148)
    assert data.uncomp_temp == 519888
    with pytest.raises(AttributeError):
        data.uncomp_press = 0