"""Signals and the basic digital input with optional inversion."""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, List, Protocol

_log = logging.getLogger(__name__)


class _Gpio(Protocol):
    def state(self) -> bool: ...


class Signal:
    """A list of slots that are called, in connection order, on emit."""

    def __init__(self) -> None:
        self._slots: List[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Add a slot; connecting the same slot twice calls it twice."""
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove every connection of a slot; unknown slots are ignored."""
        self._slots = [s for s in self._slots if s != slot]

    def reconnect(self, slot: Callable[..., Any]) -> None:
        """Connect a slot so that it is connected exactly once."""
        self.disconnect(slot)
        self.connect(slot)

    def emit(self, *args: Any) -> None:
        """Call every connected slot with the given arguments."""
        for slot in list(self._slots):
            slot(*args)

    __call__ = emit

    def __len__(self) -> int:
        return len(self._slots)


class State(enum.IntEnum):
    """Logical level of a digital input."""

    LOW = 0
    HIGH = 1


class DigitalIn:
    """Access to the level of a digital input, optionally inverted."""

    def __init__(self, gpio: _Gpio, inverted: bool = False) -> None:
        self._gpio = gpio
        self._inverted = bool(inverted)
        self.changed_to_high = Signal()
        self.changed_to_low = Signal()

    @property
    def gpio(self) -> _Gpio:
        """The GPIO the level is read from."""
        return self._gpio

    def set_gpio(self, gpio: _Gpio) -> None:
        """Use another GPIO; this also clears the inversion."""
        _log.debug("set new gpio and not inverted")
        self._gpio = gpio
        self._inverted = False

    @property
    def inverted(self) -> bool:
        """Whether a high pin level reads as low and vice versa."""
        return self._inverted

    @inverted.setter
    def inverted(self, value: bool) -> None:
        _log.debug("set inverted: %s", value)
        self._inverted = bool(value)

    def pin_state(self) -> State:
        """The present hardware level, with inversion applied."""
        level = bool(self._gpio.state())
        return State(level != self._inverted)

    def state(self) -> State:
        """The level of the input."""
        return self.pin_state()