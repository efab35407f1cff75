"""BMP280 pressure and temperature sensor driver over caller-supplied register access."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from . import bmp280_comp as comp
from .bmp280_defs import (
    CALIB_DATA_SIZE,
    CHIP_ID_ADDR,
    CHIP_IDS,
    CONFIG_ADDR,
    CTRL_MEAS_ADDR,
    DIG_T1_LSB_ADDR,
    FILTER_MASK,
    FILTER_POS,
    FORCED_MODE,
    I2C_ADDR_PRIM,
    OS_1X,
    OS_PRES_MASK,
    OS_PRES_POS,
    OS_TEMP_MASK,
    OS_TEMP_POS,
    POWER_MODE_MASK,
    POWER_MODE_POS,
    PRES_MSB_ADDR,
    SLEEP_MODE,
    SOFT_RESET_ADDR,
    SOFT_RESET_CMD,
    SPI3_ENABLE_MASK,
    SPI3_ENABLE_POS,
    STANDBY_DURN_MASK,
    STANDBY_DURN_POS,
    STATUS_ADDR,
    STATUS_IM_UPDATE_MASK,
    STATUS_IM_UPDATE_POS,
    STATUS_MEAS_MASK,
    STATUS_MEAS_POS,
    Bmp280Error,
    CalibParam,
    Config,
    ErrorCode,
    Interface,
    Status,
    UncompData,
    get_bits,
    set_bits,
)

ReadFunc = Callable[[int, int, int], bytes]
WriteFunc = Callable[[int, int, bytes], None]
DelayFunc = Callable[[int], None]

_INIT_TRIES = 5
_MAX_BURST = 4


class Bmp280:
    """A BMP280 reached through ``read``, ``write`` and ``delay_ms`` callables.

    ``read(dev_id, reg_addr, length)`` returns the register bytes and
    ``write(dev_id, reg_addr, data)`` sends a (possibly interleaved) burst;
    both raise OSError when the transfer fails.
    """

    def __init__(
        self,
        read: ReadFunc,
        write: WriteFunc,
        delay_ms: DelayFunc,
        dev_id: int = I2C_ADDR_PRIM,
        intf: Interface = Interface.I2C,
    ) -> None:
        if read is None or write is None or delay_ms is None:
            raise Bmp280Error(ErrorCode.NULL_PTR, "read, write and delay_ms are required")
        self._read = read
        self._write = write
        self._delay = delay_ms
        self.dev_id = dev_id
        self.intf = Interface(intf)
        self.chip_id = 0
        self.calib = CalibParam()
        self.config = Config()

    def get_regs(self, reg_addr: int, length: int) -> bytes:
        """Read ``length`` bytes starting at ``reg_addr``."""
        if self.intf is Interface.SPI:
            reg_addr |= 0x80
        try:
            data = bytes(self._read(self.dev_id, reg_addr, length))
        except OSError as exc:
            raise Bmp280Error(ErrorCode.COMM_FAIL) from exc
        if len(data) != length:
            raise Bmp280Error(ErrorCode.COMM_FAIL, "short read")
        return data

    def set_regs(self, reg_addrs: Sequence[int], reg_data: Sequence[int]) -> None:
        """Write each byte of ``reg_data`` to the matching register; at most four."""
        if len(reg_addrs) != len(reg_data):
            raise ValueError("register addresses and data differ in length")
        addrs = list(reg_addrs)[:_MAX_BURST]
        data = list(reg_data)[:_MAX_BURST]
        if not data:
            raise Bmp280Error(ErrorCode.INVALID_LEN)
        if self.intf is Interface.SPI:
            addrs = [addr & 0x7F for addr in addrs]
        buffer = [data[0]]
        for addr, value in zip(addrs[1:], data[1:]):
            buffer.extend((addr, value))
        try:
            self._write(self.dev_id, addrs[0], bytes(buffer))
        except OSError as exc:
            raise Bmp280Error(ErrorCode.COMM_FAIL) from exc

    def soft_reset(self) -> None:
        """Reset the sensor and wait the 2 ms start-up time."""
        try:
            self.set_regs([SOFT_RESET_ADDR], [SOFT_RESET_CMD])
        finally:
            self._delay(2)

    def init(self) -> None:
        """Find the chip, reset it and load its calibration."""
        for _ in range(_INIT_TRIES):
            try:
                self.chip_id = self.get_regs(CHIP_ID_ADDR, 1)[0]
                found = self.chip_id in CHIP_IDS
            except Bmp280Error:
                found = False
            if found:
                self.soft_reset()
                self.calib = comp.parse_calib(self.get_regs(DIG_T1_LSB_ADDR, CALIB_DATA_SIZE))
                break
            self._delay(10)
        else:
            raise Bmp280Error(ErrorCode.DEV_NOT_FOUND)
        self.config = Config()

    def get_config(self) -> Config:
        """Read the current configuration from the sensor."""
        ctrl, cfg = self.get_regs(CTRL_MEAS_ADDR, 2)
        config = Config(
            os_temp=get_bits(ctrl, OS_TEMP_MASK, OS_TEMP_POS),
            os_pres=get_bits(ctrl, OS_PRES_MASK, OS_PRES_POS),
            odr=get_bits(cfg, STANDBY_DURN_MASK, STANDBY_DURN_POS),
            filter=get_bits(cfg, FILTER_MASK, FILTER_POS),
            spi3w_en=get_bits(cfg, SPI3_ENABLE_MASK, SPI3_ENABLE_POS),
        )
        self.config = replace(config)
        return config

    def set_config(self, config: Config) -> None:
        """Write a configuration; the sensor is left in sleep mode."""
        self._conf_sensor(SLEEP_MODE, config)

    def get_status(self) -> Status:
        byte = self.get_regs(STATUS_ADDR, 1)[0]
        return Status(
            measuring=get_bits(byte, STATUS_MEAS_MASK, STATUS_MEAS_POS),
            im_update=get_bits(byte, STATUS_IM_UPDATE_MASK, STATUS_IM_UPDATE_POS),
        )

    def get_power_mode(self) -> int:
        byte = self.get_regs(CTRL_MEAS_ADDR, 1)[0]
        return get_bits(byte, POWER_MODE_MASK, POWER_MODE_POS)

    def set_power_mode(self, mode: int) -> None:
        """Switch power mode, keeping the current configuration."""
        self._conf_sensor(mode, self.config)

    def get_uncomp_data(self) -> UncompData:
        """Read the raw temperature and pressure readings and check their range."""
        try:
            raw = self.get_regs(PRES_MSB_ADDR, comp.UNCOMP_DATA_SIZE)
        except Bmp280Error as exc:
            raise Bmp280Error(ErrorCode.UNCOMP_DATA_CALC) from exc
        data = comp.parse_uncomp_data(raw)
        comp.check_boundaries(data.uncomp_temp, data.uncomp_press)
        return data

    def comp_temp_32bit(self, uncomp_temp: int) -> int:
        return comp.comp_temp_32bit(self.calib, uncomp_temp)

    def comp_pres_32bit(self, uncomp_pres: int) -> int:
        return comp.comp_pres_32bit(self.calib, uncomp_pres)

    def comp_pres_64bit(self, uncomp_pres: int) -> int:
        return comp.comp_pres_64bit(self.calib, uncomp_pres)

    def comp_temp_double(self, uncomp_temp: int) -> float:
        return comp.comp_temp_double(self.calib, uncomp_temp)

    def comp_pres_double(self, uncomp_pres: int) -> float:
        return comp.comp_pres_double(self.calib, uncomp_pres)

    def compute_meas_time(self) -> int:
        """Measurement time in milliseconds for the active configuration."""
        return comp.compute_meas_time(self.config)

    def selftest(self) -> tuple[int, int]:
        """Run a forced measurement and check it; return (0.01 degC, Pa)."""
        self.soft_reset()
        try:
            comp.check_cal_param(self.calib)
            self.set_config(Config(os_temp=OS_1X, os_pres=OS_1X))
            self.set_power_mode(FORCED_MODE)
        finally:
            self._delay(10)
        data = self.get_uncomp_data()
        temperature = self.comp_temp_32bit(data.uncomp_temp)
        pressure = self.comp_pres_32bit(data.uncomp_press)
        comp.check_sensor_range(temperature, pressure)
        return temperature, pressure

    def _conf_sensor(self, mode: int, config: Config) -> None:
        if config is None:
            raise Bmp280Error(ErrorCode.NULL_PTR, "configuration is required")
        ctrl, cfg = self.get_regs(CTRL_MEAS_ADDR, 2)
        self.soft_reset()
        ctrl = set_bits(ctrl, OS_TEMP_MASK, OS_TEMP_POS, config.os_temp)
        ctrl = set_bits(ctrl, OS_PRES_MASK, OS_PRES_POS, config.os_pres)
        cfg = set_bits(cfg, STANDBY_DURN_MASK, STANDBY_DURN_POS, config.odr)
        cfg = set_bits(cfg, FILTER_MASK, FILTER_POS, config.filter)
        cfg = set_bits(cfg, SPI3_ENABLE_MASK, SPI3_ENABLE_POS, config.spi3w_en)
        self.set_regs([CTRL_MEAS_ADDR, CONFIG_ADDR], [ctrl, cfg])
        self.config = replace(config)
        if mode != SLEEP_MODE:
            ctrl = set_bits(ctrl, POWER_MODE_MASK, POWER_MODE_POS, mode)
            self.set_regs([CTRL_MEAS_ADDR], [ctrl])