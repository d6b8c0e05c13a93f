from inputsense.digitalin import Signal, State
from inputsense.digitalinint import DigitalInInt


class FakeGpio:
    def __init__(self, level=False):
        self.level = level

    def state(self):
        return self.level


class FakeInterrupt:
    def __init__(self):
        self.changed = Signal()


def _record(din):
    events = []
    din.changed_to_high.connect(lambda: events.append("high"))
    din.changed_to_low.connect(lambda: events.append("low"))
    return events


def test_interrupt_emits_current_level():
    gpio = FakeGpio(True)
    irq = FakeInterrupt()
    din = DigitalInInt(irq, gpio)
    events = _record(din)
    irq.changed.emit()
    gpio.level = False
    irq.changed.emit()
    assert events == ["high", "low"]


def test_inverted_interrupt_emits_inverse():
    gpio = FakeGpio(True)
    irq = FakeInterrupt()
    din = DigitalInInt(irq, gpio, inverted=True)
    events = _record(din)
    irq.changed.emit()
    assert events == ["low"]
    assert din.state() is State.LOW


def test_constructor_connects_once():
    irq = FakeInterrupt()
    DigitalInInt(irq, FakeGpio())
    assert len(irq.changed) == 1


def test_set_external_interrupt_switches_source():
    old_irq = FakeInterrupt()
    new_irq = FakeInterrupt()
    din = DigitalInInt(old_irq, FakeGpio(False), inverted=True)
    events = _record(din)
    new_gpio = FakeGpio(True)
    din.set_external_interrupt(new_irq, new_gpio)
    assert din.external_interrupt is new_irq
    assert din.gpio is new_gpio
    assert din.inverted is False
    old_irq.changed.emit()
    assert events == []
    new_irq.changed.emit()
    assert events == ["high"]


def test_set_same_interrupt_stays_single_connection():
    irq = FakeInterrupt()
    din = DigitalInInt(irq, FakeGpio())
    din.set_external_interrupt(irq, FakeGpio())
    assert len(irq.changed) == 1