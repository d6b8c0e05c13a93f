"""Frequency measurement on a capture input."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from inputsense.digitalin import Signal

_log = logging.getLogger(__name__)

_UINT32 = 0xFFFFFFFF


class _InputCapture(Protocol):
    data_available: Signal

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def ticks(self) -> int: ...

    def max_ticks(self) -> int: ...

    def ticks_per_second(self) -> int: ...


class FrequencyIn:
    """Measures the period between successive captures of an input capture unit.

    The capture object must provide a ``data_available`` signal and the methods
    ``start``, ``stop``, ``ticks``, ``max_ticks`` and ``ticks_per_second``.
    """

    def __init__(self, input_capture: _InputCapture) -> None:
        self._input_capture = input_capture
        self._lock = threading.Lock()
        self._last_ticks = 0
        self._last_period = 0
        self.data_available = Signal()
        input_capture.data_available.connect(self.on_data_available)

    @property
    def input_capture(self) -> _InputCapture:
        """The capture unit the period is measured with."""
        return self._input_capture

    def set_input_capture(self, input_capture: _InputCapture) -> None:
        """Measure with another capture unit."""
        self._input_capture.data_available.disconnect(self.on_data_available)
        self._input_capture = input_capture
        input_capture.data_available.connect(self.on_data_available)

    def start(self) -> None:
        """Start capturing."""
        _log.debug("start")
        self._input_capture.start()

    def stop(self) -> None:
        """Stop capturing."""
        _log.debug("stop")
        self._input_capture.stop()

    def reset(self) -> None:
        """Forget the last measured period."""
        _log.debug("reset")
        with self._lock:
            self._last_period = 0

    def period_ticks(self) -> int:
        """Ticks between the last two captures."""
        with self._lock:
            return self._last_period

    def period_ms(self) -> int:
        """Time between the last two captures in milliseconds, 0 if the tick rate is unknown."""
        ticks_per_second = self._input_capture.ticks_per_second()
        if ticks_per_second == 0:
            return 0
        return ((self.period_ticks() * 1000) & _UINT32) // ticks_per_second

    def frequency(self) -> int:
        """Measured frequency in hertz, 0 if no period was measured."""
        ticks = self.period_ticks()
        if ticks == 0:
            return 0
        return self._input_capture.ticks_per_second() // ticks

    def on_data_available(self) -> None:
        """Take a new capture value and update the period; emits data_available."""
        with self._lock:
            current = self._input_capture.ticks() & _UINT32
            if self._last_ticks < current:
                self._last_period = current - self._last_ticks
            else:
                self._last_period = (
                    (self._input_capture.max_ticks() - self._last_ticks) + current
                ) & _UINT32
            self._last_ticks = current
        self.data_available.emit()