"""STM32F4 I2C peripherals: busy-flag erratum recovery and bus frequency."""

from __future__ import annotations

import enum
import logging
from typing import Optional, Protocol

_log = logging.getLogger(__name__)

MAX_FREQUENCY_HZ = 400000

CR1_PE = 0x0001
CR1_SWRST = 0x8000


class FrequencyNotSupportedError(ValueError):
    """The requested bus frequency exceeds what the peripheral supports."""

    code = 0

    def __init__(self, source: str, hz: int) -> None:
        super().__init__(
            f"{source}: frequency {hz} Hz not supported, "
            f"max frequency is {MAX_FREQUENCY_HZ} Hz"
        )
        self.source = source
        self.hz = hz


class PinMode(enum.Enum):
    """Configuration of an I2C pin."""

    OUTPUT_OD = "output open-drain"
    AF_OD = "alternate function open-drain"


class _Pin(Protocol):
    def configure(self, mode: PinMode, alternate: Optional[int]) -> None: ...

    def write(self, level: bool) -> None: ...

    def read(self) -> bool: ...


class _I2cHandle(Protocol):
    busy: bool
    cr1: int
    clock_speed: int

    def init(self) -> None: ...


class I2cPeripheral:
    """Common behaviour of the STM32F4 I2C master and slave.

    The handle exposes the ``busy`` flag, the ``cr1`` control register,
    the configured ``clock_speed`` and an ``init()`` method.
    """

    def __init__(self, handle: _I2cHandle) -> None:
        self.handle = handle

    @staticmethod
    def _wait_for(pin: _Pin, level: bool) -> None:
        while bool(pin.read()) != level:
            pass

    def clear_busy_flag_erratum(self, scl: _Pin, sda: _Pin, alternate: int) -> None:
        """Recover a bus stuck busy at startup by toggling the lines by hand.

        Pins are driven as open-drain outputs with pull-up at high speed,
        then handed back to the peripheral with the given alternate function.
        Does nothing if the busy flag is not set.
        """
        handle = self.handle
        if not handle.busy:
            return

        handle.cr1 = handle.cr1 & ~CR1_PE

        scl.configure(PinMode.OUTPUT_OD, None)
        scl.write(True)
        sda.configure(PinMode.OUTPUT_OD, None)
        sda.write(True)

        self._wait_for(scl, True)
        self._wait_for(sda, True)

        sda.write(False)
        self._wait_for(sda, False)

        scl.write(False)
        self._wait_for(scl, False)

        scl.write(True)
        self._wait_for(scl, True)

        sda.write(True)
        self._wait_for(sda, True)

        scl.configure(PinMode.AF_OD, alternate)
        sda.configure(PinMode.AF_OD, alternate)

        handle.cr1 = handle.cr1 | CR1_SWRST
        handle.cr1 = handle.cr1 & ~CR1_SWRST
        handle.cr1 = handle.cr1 | CR1_PE

        handle.init()

    def set_frequency(self, hz: int) -> None:
        """Set the bus clock speed; at most 400 kHz is supported."""
        if hz > MAX_FREQUENCY_HZ:
            _log.error("frequency not supported, max frequency is 400kHz")
            raise FrequencyNotSupportedError(type(self).__name__, hz)
        self.handle.clock_speed = hz


class I2cMaster(I2cPeripheral):
    """I2C peripheral in master mode."""


class I2cSlave(I2cPeripheral):
    """I2C peripheral in slave mode."""