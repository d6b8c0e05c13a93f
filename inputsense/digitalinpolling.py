"""Digital inputs read by polling, with and without debouncing."""

from __future__ import annotations

import logging

from inputsense.digitalin import DigitalIn, State, _Gpio

_log = logging.getLogger(__name__)


class DigitalInPolling(DigitalIn):
    """A digital input whose level is sampled on every call of tick()."""

    def __init__(self, gpio: _Gpio, inverted: bool = False) -> None:
        super().__init__(gpio, inverted)
        self._state = self.pin_state()

    def tick(self) -> None:
        """Sample the pin and emit a signal if the level changed."""
        new_state = self.pin_state()
        if self._state is State.LOW and new_state is State.HIGH:
            self._set_state(State.HIGH)
            _log.debug("changed to high")
            self.changed_to_high.emit()
        elif self._state is State.HIGH and new_state is State.LOW:
            self._set_state(State.LOW)
            _log.debug("changed to low")
            self.changed_to_low.emit()

    def state(self) -> State:
        """The level seen at the last tick."""
        return self._state

    def _set_state(self, state: State) -> None:
        _log.debug("set state to %s", "high" if state is State.HIGH else "low")
        self._state = state


class DebouncedDigitalInPolling(DigitalInPolling):
    """A polled input that changes level only after it was stable for a number of ticks."""

    def __init__(
        self,
        gpio: _Gpio,
        debounce_low_time: int,
        debounce_high_time: int,
        inverted: bool = False,
    ) -> None:
        super().__init__(gpio, inverted)
        self._debounce_low_time = debounce_low_time
        self._debounce_high_time = debounce_high_time
        self._low_time = 0
        self._high_time = 0

    @property
    def debounce_high_time(self) -> int:
        """Ticks needed to change from low to high."""
        return self._debounce_high_time

    @debounce_high_time.setter
    def debounce_high_time(self, time: int) -> None:
        _log.debug("set high time to %d", time)
        self._debounce_high_time = time

    @property
    def debounce_low_time(self) -> int:
        """Ticks needed to change from high to low."""
        return self._debounce_low_time

    @debounce_low_time.setter
    def debounce_low_time(self, time: int) -> None:
        _log.debug("set low time to %d", time)
        self._debounce_low_time = time

    def tick(self) -> None:
        """Sample the pin and count the debounce time."""
        old_state = self.state()
        new_state = self.pin_state()
        if old_state is State.LOW and new_state is State.HIGH:
            self._low_time = 0
            self._high_time += 1
            if self._high_time >= self._debounce_high_time:
                self._set_state(State.HIGH)
                _log.debug("changed to high")
                self.changed_to_high.emit()
        elif old_state is State.HIGH and new_state is State.LOW:
            self._high_time = 0
            self._low_time += 1
            if self._low_time >= self._debounce_low_time:
                self._set_state(State.LOW)
                _log.debug("changed to low")
                self.changed_to_low.emit()
        else:
            self._low_time = 0
            self._high_time = 0