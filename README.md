# inputsense

This package has pure-Python models of embedded input handling and of a few
STM32 peripherals. Use them to simulate and test firmware logic on a desktop
machine.

None of the classes talk to hardware. Each one works on an object you supply
that has a small set of methods and attributes, such as a GPIO with a
`state()` method. A fake object in a test works just as well as a real one.

## Modules

### `inputsense.digitalin`

- `Signal` holds a list of slots and calls them in the order they were
  connected.
  - `connect(slot)` adds a slot. A slot connected twice is called twice.
  - `disconnect(slot)` removes every connection of that slot. It does nothing
    if the slot is not connected.
  - `reconnect(slot)` makes sure the slot is connected exactly once.
  - `emit(*args)` calls the slots with the given arguments. Calling the signal
    directly does the same. `len()` gives the number of connections.
- `State` is an `IntEnum` with the members `LOW` and `HIGH`.
- `DigitalIn(gpio, inverted=False)` reads `gpio.state()`.
  - `pin_state()` and `state()` return the level with inversion applied.
  - The `inverted` property can be read and set.
  - `set_gpio(gpio)` switches to another GPIO and also clears the inversion.
  - Every input has two signals, `changed_to_high` and `changed_to_low`.

### `inputsense.digitalinpolling`

- `DigitalInPolling(gpio, inverted=False)` records the level when it is
  created.
  - Each call to `tick()` samples the pin. If the level changed, it emits
    `changed_to_high` or `changed_to_low`.
  - `state()` returns the level seen at the last tick. `pin_state()` still
    reads the pin directly.
- `DebouncedDigitalInPolling(gpio, debounce_low_time, debounce_high_time,
  inverted=False)` counts ticks instead of reacting at once.
  - It changes level only after the new level has been seen on
    `debounce_high_time` ticks in a row (low to high) or `debounce_low_time`
    ticks in a row (high to low).
  - Both times are properties that can be changed.

### `inputsense.digitalinint`

- `DigitalInInt(external_interrupt, gpio, inverted=False)` connects to the
  interrupt object's `changed` signal. Each time that signal fires, it reads
  the level and emits `changed_to_high` or `changed_to_low`.
- `set_external_interrupt(external_interrupt, gpio)` disconnects from the old
  interrupt, connects to the new one and switches the GPIO. Like `set_gpio`, it
  clears the inversion.

### `inputsense.frequencyin`

`FrequencyIn(input_capture)` connects to the capture object's `data_available`
signal. The capture object must also provide `start()`, `stop()`, `ticks()`,
`max_ticks()` and `ticks_per_second()`.

- On each capture, `on_data_available()` stores the number of ticks since the
  previous capture and then emits `FrequencyIn.data_available`. When the
  counter has wrapped, `max_ticks()` is used. Arithmetic is done in 32 bits.
- `period_ticks()` returns that tick count.
- `period_ms()` returns the period in milliseconds. It returns 0 when the tick
  rate is 0.
- `frequency()` returns the frequency in hertz. It returns 0 when no period has
  been measured.
- `reset()` clears the period.
- `start()` and `stop()` are passed on to the capture unit.
- `set_input_capture(input_capture)` moves the connection to another capture
  unit.

### `inputsense.flashlayout`

`FlashLayout(size_kb)` describes the sector map of the STM32F4 internal flash.
It supports 512 KB, 1024 KB and 2048 KB parts. Sectors are 16, 64 or 128 KB.

- `sector(address)` returns the sector that holds an address.
- `address(sector)` returns the start address of a sector.
- `sector_size(sector)` returns the size of a sector in bytes.
- `number_of_sectors()` returns 8, 12 or 24 for the supported sizes and 0 for
  any other size.

An address beyond the flash size raises `FlashLayoutError`, which is a
`ValueError`. So does a sector outside 0 to 23.

### `inputsense.devicefamily`

- `family_of(device)` maps a device name such as `"STM32F407xx"` to a `Family`
  (`L0`, `F0`, `G0`, `F1`, `F3`, `F4` or `F7`). It returns `None` for unknown
  names.
- `header_for(device)` returns the series header name, for example
  `"stm32f4xx.h"`. It also returns `None` for unknown names.

### `inputsense.systick`

- `Registers` is a bank of 32-bit registers addressed by number. A register
  that has not been written reads as 0.
- `SysTick.instance()` returns the single timer of each class and creates it on
  first use.
  - `SysTick.isr()` emits that timer's `timeout` signal.
  - `start()` sets bit 0 of the control register `SYST_CSR` (`0xE000E010`).
  - `stop()` clears that bit.
  - `reset()` writes 0 to the current value register `SYST_CVR`
    (`0xE000E018`).

### `inputsense.i2c`

`I2cMaster` and `I2cSlave` both extend `I2cPeripheral(handle)`. The handle has
the attributes `busy`, `cr1` and `clock_speed`, and an `init()` method.

- `clear_busy_flag_erratum(scl, sda, alternate)` runs the recovery sequence for
  a bus that is stuck busy. It does nothing if `busy` is false. The steps are:
  1. Disable the peripheral.
  2. Drive both pins as open-drain outputs through the stuck-bus pattern.
  3. Give the pins back to the peripheral with the `alternate` function.
  4. Pulse the software reset.
  5. Re-enable the peripheral.
  6. Call `handle.init()`.

  The pins must provide `configure(mode, alternate)`, `write(level)` and
  `read()`. Each step busy-waits until the pin reads back the expected level.
- `set_frequency(hz)` sets `handle.clock_speed`. Any value above 400000 raises
  `FrequencyNotSupportedError`, which is a `ValueError`.

### `inputsense.outputcompare`

`OutputCompare(mode, handle, channel, timer_frequency)` holds an
`OutputCompareConfig`. The config starts with:

- the given mode
- high polarity (`Polarity.HIGH`)
- fast mode off
- idle state `IdleState.RESET`

`configuration()` returns the config object itself, so changes to it apply to
the channel.

### `inputsense.usbvcp`

`UsbVcp(usb, rx_cache_size)` presents a USB CDC device as a UART.

- `init()` calls, in order, the device's `stop`, `deinit`, `init`,
  `register_class`, `register_interface` and `start`. The first one that
  returns false raises `UsbVcpError`, whose `step` attribute names the step
  that failed.
- `write(data)` transmits the data when the device is configured. If it cannot
  send, it emits `data_written` at once.
- `read(size)` emits `data_available` with the bytes once `size` bytes have
  been received. Data that is already buffered is used first.
- The class methods `cdc_init_callback`, `cdc_tx_callback`, `cdc_rx_callback`
  and `cdc_control_callback` are meant to be called by a USB stack. They pass
  each event to every port, and each port acts only on events from its own
  device.
- `SET_LINE_CODING` and `GET_LINE_CODING` update or fill in the port's
  `line_coding`. `LineCoding` converts between its 7-byte wire form and its
  fields with `to_bytes()` and `from_bytes()`.
- Every port created is added to a class-wide list and stays in it.

## Example

```python
from inputsense.digitalin import State
from inputsense.digitalinpolling import DebouncedDigitalInPolling

class Pin:
    level = False
    def state(self):
        return self.level

pin = Pin()
button = DebouncedDigitalInPolling(pin, 3, 3, False)
button.changed_to_high.connect(lambda: print("pressed"))

pin.level = True
for _ in range(3):
    button.tick()          # prints "pressed" on the third tick
assert button.state() is State.HIGH
```

## What it does not do

The package only models behaviour:

- It does not drive real GPIOs, timers, I2C buses or USB devices.
- It has no command-line program.

The objects you pass in decide what "hardware" means.

## Installing

```
pip install .
```

The tests use pytest. Installing with the `test` extra brings it in.