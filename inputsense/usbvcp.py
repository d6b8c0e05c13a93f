"""USB virtual COM port (CDC ACM) that behaves like a UART."""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Protocol

from inputsense.digitalin import Signal

_log = logging.getLogger(__name__)

FS_PACKET_SIZE = 64
HS_PACKET_SIZE = 512

_LINE_CODING = struct.Struct("<IBBB")


class UsbVcpError(RuntimeError):
    """A step of bringing up the USB device failed."""

    class Step(enum.IntEnum):
        """The initialisation step that failed."""

        STOP = 0
        DEINIT = 1
        INIT = 2
        REGISTER_CLASS = 3
        REGISTER_INTERFACE = 4
        START = 5

    def __init__(self, step: "UsbVcpError.Step") -> None:
        super().__init__(f"USB initialisation failed at step {step.name.lower()}")
        self.step = step


class CdcCommand(enum.IntEnum):
    """CDC class requests."""

    SEND_ENCAPSULATED_COMMAND = 0x00
    GET_ENCAPSULATED_RESPONSE = 0x01
    SET_COMM_FEATURE = 0x02
    GET_COMM_FEATURE = 0x03
    CLEAR_COMM_FEATURE = 0x04
    SET_LINE_CODING = 0x20
    GET_LINE_CODING = 0x21
    SET_CONTROL_LINE_STATE = 0x22
    SEND_BREAK = 0x23


@dataclass
class LineCoding:
    """Serial settings of the CDC interface: baud rate, stop bits, parity, data bits."""

    bitrate: int = 115200
    format: int = 0
    parity_type: int = 0
    data_type: int = 8

    def to_bytes(self) -> bytes:
        """The 7-byte wire form of the line coding."""
        return _LINE_CODING.pack(
            self.bitrate & 0xFFFFFFFF,
            self.format & 0xFF,
            self.parity_type & 0xFF,
            self.data_type & 0xFF,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "LineCoding":
        """Parse the 7-byte wire form; extra bytes are ignored."""
        if len(data) < _LINE_CODING.size:
            raise ValueError(
                f"line coding needs {_LINE_CODING.size} bytes, got {len(data)}"
            )
        bitrate, fmt, parity, data_type = _LINE_CODING.unpack_from(bytes(data))
        return cls(bitrate, fmt, parity, data_type)


class _UsbDevice(Protocol):
    high_speed: bool
    configured: bool

    def stop(self) -> bool: ...

    def deinit(self) -> bool: ...

    def init(self) -> bool: ...

    def register_class(self, vcp: "UsbVcp") -> bool: ...

    def register_interface(self) -> bool: ...

    def start(self) -> bool: ...

    def transmit(self, data: bytes) -> bool: ...


class _PendingRead:
    def __init__(self, size: int) -> None:
        self.buffer = bytearray(size)
        self.available = 0

    @property
    def size(self) -> int:
        return len(self.buffer)

    @property
    def missing(self) -> int:
        return self.size - self.available


class UsbVcp:
    """A UART over a USB CDC device.

    The device object reports ``high_speed`` and ``configured``, and has
    ``stop``, ``deinit``, ``init``, ``register_class``, ``register_interface``,
    ``start`` and ``transmit`` methods that return true on success. The USB
    stack calls the class-level ``cdc_*_callback`` methods; they are passed on
    to every port, and each port acts on those of its own device.

    ``data_available`` is emitted with the bytes of a completed ``read``;
    ``data_written`` is emitted when a ``write`` is done.
    """

    _ports: ClassVar[List["UsbVcp"]] = []

    def __init__(self, usb: _UsbDevice, rx_cache_size: int) -> None:
        self.usb = usb
        self.line_coding = LineCoding()
        self.data_available = Signal()
        self.data_written = Signal()
        self._rx_cache = bytearray(rx_cache_size)
        self._write_pos = 0
        self._read_pos = 0
        self._pending: Optional[_PendingRead] = None
        UsbVcp._ports.append(self)

    @property
    def buffered(self) -> int:
        """Bytes received and not yet handed to a read."""
        return self._write_pos - self._read_pos

    def init(self) -> None:
        """Restart the USB device with this port's class and interface registered."""
        usb = self.usb
        steps = (
            (UsbVcpError.Step.STOP, usb.stop),
            (UsbVcpError.Step.DEINIT, usb.deinit),
            (UsbVcpError.Step.INIT, usb.init),
            (UsbVcpError.Step.REGISTER_CLASS, lambda: usb.register_class(self)),
            (UsbVcpError.Step.REGISTER_INTERFACE, usb.register_interface),
            (UsbVcpError.Step.START, usb.start),
        )
        for step, action in steps:
            if not action():
                _log.error("usb init failed at %s", step.name.lower())
                raise UsbVcpError(step)

    @classmethod
    def cdc_init_callback(cls, usb: _UsbDevice) -> bool:
        """Class init from the USB stack; false if no port uses this device."""
        if not any(port.usb is usb for port in cls._ports):
            return False
        for port in list(cls._ports):
            port._cdc_init(usb)
        return True

    @classmethod
    def cdc_tx_callback(cls, usb: _UsbDevice) -> None:
        """A transmission on a device has completed."""
        for port in list(cls._ports):
            port._cdc_tx(usb)

    @classmethod
    def cdc_rx_callback(cls, usb: _UsbDevice, data: bytes) -> None:
        """A packet has arrived on a device."""
        for port in list(cls._ports):
            port._cdc_rx(usb, data)

    @classmethod
    def cdc_control_callback(cls, cmd: int, buffer: bytearray) -> None:
        """A CDC class request; GET_LINE_CODING fills the buffer in place."""
        for port in list(cls._ports):
            port._cdc_control(cmd, buffer)

    def write(self, data: bytes) -> None:
        """Send data; ``data_written`` follows at once if nothing can be sent."""
        if self.usb.configured and self.usb.transmit(bytes(data)):
            return
        # A UART has no connection state, so a write always completes.
        self.data_written.emit()

    def read(self, size: int) -> None:
        """Ask for ``size`` bytes; ``data_available`` is emitted once they are there."""
        self._pending = _PendingRead(size)
        if self._write_pos > self._read_pos:
            count = min(self._write_pos - self._read_pos, size)
            self._take(count)
        if self._write_pos <= self._read_pos:
            self._write_pos = 0
            self._read_pos = 0

    def _take(self, count: int) -> None:
        pending = self._pending
        if pending is None:
            return
        chunk = self._rx_cache[self._read_pos:self._read_pos + count]
        pending.buffer[pending.available:pending.available + len(chunk)] = chunk
        pending.available += len(chunk)
        self._read_pos += len(chunk)
        if pending.available == pending.size:
            self._pending = None
            self.data_available.emit(bytes(pending.buffer))

    def _cdc_init(self, usb: _UsbDevice) -> None:
        if usb is self.usb:
            self._write_pos = 0
            self._read_pos = 0

    def _cdc_tx(self, usb: _UsbDevice) -> None:
        if usb is self.usb:
            self.data_written.emit()

    def _cdc_rx(self, usb: _UsbDevice, data: bytes) -> None:
        if usb is not self.usb:
            return
        room = len(self._rx_cache) - self._write_pos
        received = bytes(data)[:max(room, 0)]
        self._rx_cache[self._write_pos:self._write_pos + len(received)] = received
        if received:
            self._write_pos += len(received)
            if self._pending is not None:
                self._take(min(len(received), self._pending.missing))

        packet = HS_PACKET_SIZE if self.usb.high_speed else FS_PACKET_SIZE
        if len(self._rx_cache) < self._write_pos + packet:
            self._write_pos = 0
            self._read_pos = 0

    def _cdc_control(self, cmd: int, buffer: bytearray) -> None:
        if cmd == CdcCommand.SET_LINE_CODING:
            self.line_coding = LineCoding.from_bytes(buffer)
        elif cmd == CdcCommand.GET_LINE_CODING:
            buffer[:_LINE_CODING.size] = self.line_coding.to_bytes()