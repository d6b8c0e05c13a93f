"""Models of digital inputs, debouncing, frequency measurement and STM32 peripherals."""

__version__ = "0.1.0"