import pytest

from inputsense.usbvcp import CdcCommand, LineCoding, UsbVcp, UsbVcpError


class FakeUsb:
    def __init__(self, high_speed=False, configured=True, fail=None, transmit_ok=True):
        self.high_speed = high_speed
        self.configured = configured
        self.fail = fail
        self.transmit_ok = transmit_ok
        self.calls = []
        self.sent = []

    def _step(self, name):
        self.calls.append(name)
        return name != self.fail

    def stop(self):
        return self._step("stop")

    def deinit(self):
        return self._step("deinit")

    def init(self):
        return self._step("init")

    def register_class(self, vcp):
        return self._step("register_class")

    def register_interface(self):
        return self._step("register_interface")

    def start(self):
        return self._step("start")

    def transmit(self, data):
        self.sent.append(data)
        return self.transmit_ok


def collect(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_line_coding_default_wire_form():
    assert LineCoding().to_bytes() == bytes([0x00, 0xC2, 0x01, 0x00, 0x00, 0x00, 0x08])


def test_line_coding_round_trip():
    coding = LineCoding(bitrate=9600, format=2, parity_type=1, data_type=7)
    assert LineCoding.from_bytes(coding.to_bytes()) == coding


def test_line_coding_too_short():
    with pytest.raises(ValueError):
        LineCoding.from_bytes(b"\x00\x01")


def test_init_runs_all_steps_in_order():
    usb = FakeUsb()
    UsbVcp(usb, 256).init()
    assert usb.calls == [
        "stop", "deinit", "init", "register_class", "register_interface", "start",
    ]


def test_init_failure_raises_with_step():
    usb = FakeUsb(fail="register_interface")
    with pytest.raises(UsbVcpError) as info:
        UsbVcp(usb, 256).init()
    assert info.value.step is UsbVcpError.Step.REGISTER_INTERFACE
    assert usb.calls[-1] == "register_interface"


def test_control_set_and_get_line_coding():
    port = UsbVcp(FakeUsb(), 256)
    wanted = LineCoding(bitrate=57600, format=0, parity_type=2, data_type=8)
    UsbVcp.cdc_control_callback(CdcCommand.SET_LINE_CODING, bytearray(wanted.to_bytes()))
    assert port.line_coding == wanted
    buffer = bytearray(7)
    UsbVcp.cdc_control_callback(CdcCommand.GET_LINE_CODING, buffer)
    assert LineCoding.from_bytes(buffer) == wanted


def test_init_callback_unknown_device():
    UsbVcp(FakeUsb(), 256)
    assert UsbVcp.cdc_init_callback(FakeUsb()) is False


def test_init_callback_known_device_clears_cache():
    usb = FakeUsb()
    port = UsbVcp(usb, 256)
    UsbVcp.cdc_rx_callback(usb, b"abc")
    assert port.buffered == 3
    assert UsbVcp.cdc_init_callback(usb) is True
    assert port.buffered == 0


def test_received_data_then_read():
    usb = FakeUsb()
    port = UsbVcp(usb, 256)
    got = collect(port.data_available)
    UsbVcp.cdc_rx_callback(usb, b"hello")
    port.read(5)
    assert got == [(b"hello",)]
    assert port.buffered == 0


def test_partial_read_keeps_rest():
    usb = FakeUsb()
    port = UsbVcp(usb, 256)
    got = collect(port.data_available)
    UsbVcp.cdc_rx_callback(usb, b"hello")
    port.read(2)
    assert got == [(b"he",)]
    port.read(3)
    assert got[-1] == (b"llo",)


def test_pending_read_completed_by_packets():
    usb = FakeUsb()
    port = UsbVcp(usb, 256)
    got = collect(port.data_available)
    port.read(4)
    UsbVcp.cdc_rx_callback(usb, b"ab")
    assert got == []
    UsbVcp.cdc_rx_callback(usb, b"cdef")
    assert got == [(b"abcd",)]
    port.read(2)
    assert got[-1] == (b"ef",)


def test_rx_only_reaches_own_device():
    usb_a, usb_b = FakeUsb(), FakeUsb()
    port_a = UsbVcp(usb_a, 256)
    port_b = UsbVcp(usb_b, 256)
    UsbVcp.cdc_rx_callback(usb_b, b"xyz")
    assert port_a.buffered == 0
    assert port_b.buffered == 3


def test_cache_reset_when_no_room_for_packet():
    usb = FakeUsb()
    port = UsbVcp(usb, 128)
    got = collect(port.data_available)
    UsbVcp.cdc_rx_callback(usb, bytes(64))
    assert port.buffered == 64
    UsbVcp.cdc_rx_callback(usb, bytes(64))
    assert port.buffered == 0
    port.read(1)
    assert got == []


def test_write_unconfigured_completes_at_once():
    usb = FakeUsb(configured=False)
    port = UsbVcp(usb, 256)
    written = collect(port.data_written)
    port.write(b"data")
    assert written == [()]
    assert usb.sent == []


def test_write_configured_waits_for_tx_callback():
    usb = FakeUsb()
    port = UsbVcp(usb, 256)
    written = collect(port.data_written)
    port.write(b"data")
    assert usb.sent == [b"data"]
    assert written == []
    UsbVcp.cdc_tx_callback(usb)
    assert written == [()]


def test_write_failed_transmit_completes_at_once():
    usb = FakeUsb(transmit_ok=False)
    port = UsbVcp(usb, 256)
    written = collect(port.data_written)
    port.write(b"data")
    assert written == [()]