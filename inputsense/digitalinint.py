"""Digital input driven by an external interrupt."""

from __future__ import annotations

import logging
from typing import Any

from inputsense.digitalin import DigitalIn, State, _Gpio

_log = logging.getLogger(__name__)


class DigitalInInt(DigitalIn):
    """Emits level changes whenever the external interrupt's changed signal fires.

    The interrupt object must carry a ``changed`` signal.
    """

    def __init__(self, external_interrupt: Any, gpio: _Gpio, inverted: bool = False) -> None:
        super().__init__(gpio, inverted)
        self._external_interrupt = external_interrupt
        external_interrupt.changed.reconnect(self._on_changed)

    @property
    def external_interrupt(self) -> Any:
        """The interrupt source this input listens to."""
        return self._external_interrupt

    def set_external_interrupt(self, external_interrupt: Any, gpio: _Gpio) -> None:
        """Listen to another interrupt and read another GPIO; clears the inversion."""
        _log.debug("set new external interrupt and gpio")
        self._external_interrupt.changed.disconnect(self._on_changed)
        self._external_interrupt = external_interrupt
        external_interrupt.changed.reconnect(self._on_changed)
        self.set_gpio(gpio)

    def _on_changed(self) -> None:
        if self.state() is State.HIGH:
            _log.debug("changed to high")
            self.changed_to_high.emit()
        else:
            _log.debug("changed to low")
            self.changed_to_low.emit()