"""Mapping of STM32 device names to their series and vendor header."""

from __future__ import annotations

import enum
from typing import Dict, Optional


class Family(enum.Enum):
    """STM32 series."""

    L0 = "STM32L0"
    F0 = "STM32F0"
    G0 = "STM32G0"
    F1 = "STM32F1"
    F3 = "STM32F3"
    F4 = "STM32F4"
    F7 = "STM32F7"

    @property
    def header(self) -> str:
        """Name of the series' device header."""
        return f"{self.value.lower()}xx.h"


_DEVICES = {
    Family.L0: ("STM32L053xx", "STM32L052xx", "STM32L073xx"),
    Family.F0: ("STM32F030x8",),
    Family.G0: ("STM32G0B1xx",),
    Family.F1: (
        "STM32F100xB", "STM32F100xE", "STM32F101x6", "STM32F101xB", "STM32F101xE",
        "STM32F101xG", "STM32F102x6", "STM32F102xB", "STM32F103x6", "STM32F103xB",
        "STM32F103xE", "STM32F103xG", "STM32F105xC", "STM32F107xC",
    ),
    Family.F3: (
        "STM32F301x8", "STM32F302x8", "STM32F318xx", "STM32F302xC", "STM32F303xC",
        "STM32F358xx", "STM32F303x8", "STM32F334x8", "STM32F328xx", "STM32F302xE",
        "STM32F303xE", "STM32F398xx", "STM32F373xC", "STM32F378xx",
    ),
    Family.F4: (
        "STM32F405xx", "STM32F415xx", "STM32F407xx", "STM32F417xx", "STM32F427xx",
        "STM32F437xx", "STM32F429xx", "STM32F439xx", "STM32F401xC", "STM32F401xE",
        "STM32F410Tx", "STM32F410Cx", "STM32F410Rx", "STM32F411xE", "STM32F446xx",
        "STM32F469xx", "STM32F479xx", "STM32F412Cx", "STM32F412Rx", "STM32F412Vx",
        "STM32F412Zx", "STM32F413xx", "STM32F423xx",
    ),
    Family.F7: (
        "STM32F756xx", "STM32F746xx", "STM32F745xx", "STM32F767xx", "STM32F769xx",
        "STM32F777xx", "STM32F779xx", "STM32F722xx", "STM32F723xx", "STM32F732xx",
        "STM32F733xx", "STM32F730xx", "STM32F750xx",
    ),
}

_FAMILY_BY_DEVICE: Dict[str, Family] = {
    device: family for family, devices in _DEVICES.items() for device in devices
}


def family_of(device: str) -> Optional[Family]:
    """The series of a device name such as ``STM32F407xx``, or None if unsupported."""
    return _FAMILY_BY_DEVICE.get(device)


def header_for(device: str) -> Optional[str]:
    """The vendor header to include for a device, or None if unsupported."""
    family = family_of(device)
    return family.header if family is not None else None