"""Output compare channel of an STM32F4 timer and its configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class Polarity(enum.Enum):
    """Active level of an output compare output."""

    HIGH = "high"
    LOW = "low"


class IdleState(enum.Enum):
    """Output level while the timer is idle."""

    RESET = "reset"
    SET = "set"


@dataclass
class OutputCompareConfig:
    """Configuration of one output compare channel."""

    mode: Any
    pulse: int = 0
    polarity: Polarity = Polarity.HIGH
    n_polarity: Polarity = Polarity.HIGH
    fast_mode: bool = False
    idle_state: IdleState = IdleState.RESET
    n_idle_state: IdleState = IdleState.RESET


class OutputCompare:
    """Output compare channel of a timer.

    For the timing-only mode, pass channel zero. ``timer_frequency`` is the
    timer's base frequency before prescaling, in kHz.
    """

    def __init__(self, mode: Any, handle: Any, channel: int, timer_frequency: int) -> None:
        self.mode = mode
        self.handle = handle
        self.channel = channel
        self.timer_frequency = timer_frequency
        self._config = OutputCompareConfig(
            mode=mode,
            polarity=Polarity.HIGH,
            n_polarity=Polarity.HIGH,
            fast_mode=False,
            idle_state=IdleState.RESET,
        )

    def configuration(self) -> OutputCompareConfig:
        """The channel configuration; changes to it apply to this channel."""
        return self._config