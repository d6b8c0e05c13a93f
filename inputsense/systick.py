"""The Cortex-M SysTick timer as a single instance per timer class."""

from __future__ import annotations

import logging
from typing import ClassVar, Dict, Optional, Type, TypeVar

from inputsense.digitalin import Signal

_log = logging.getLogger(__name__)

SYST_CSR = 0xE000E010
SYST_CVR = 0xE000E018
_UINT32 = 0xFFFFFFFF

_T = TypeVar("_T", bound="SysTick")


class Registers:
    """A bank of 32-bit memory-mapped registers; unwritten registers read as 0."""

    def __init__(self) -> None:
        self._values: Dict[int, int] = {}

    def read(self, address: int) -> int:
        """The value of the register at an address."""
        return self._values.get(address, 0)

    def write(self, address: int, value: int) -> None:
        """Store a 32-bit value at an address."""
        self._values[address] = value & _UINT32


class SysTick:
    """SysTick timer; ``instance()`` gives the one timer of each class."""

    _instances: ClassVar[Dict[type, "SysTick"]] = {}

    def __init__(self, registers: Optional[Registers] = None) -> None:
        self.registers = registers if registers is not None else Registers()
        self.timeout = Signal()

    @classmethod
    def instance(cls: Type[_T]) -> _T:
        """The single timer of this class, created on first use."""
        timer = SysTick._instances.get(cls)
        if timer is None:
            timer = cls()
            SysTick._instances[cls] = timer
        return timer  # type: ignore[return-value]

    @classmethod
    def isr(cls) -> None:
        """Interrupt handler: emit the timeout signal of the single instance."""
        timer = cls.instance()
        _log.debug("timeout")
        timer.timeout.emit()

    def start(self) -> None:
        """Set the enable bit of the control register."""
        self.registers.write(SYST_CSR, self.registers.read(SYST_CSR) | 1)

    def stop(self) -> None:
        """Clear the enable bit of the control register."""
        self.registers.write(SYST_CSR, self.registers.read(SYST_CSR) & 0xFFFFFFFE)

    def reset(self) -> None:
        """Clear the current value register."""
        self.registers.write(SYST_CVR, 0)