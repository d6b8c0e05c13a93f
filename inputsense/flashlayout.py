"""Sector layout of the internal flash of STM32F4 devices."""

from __future__ import annotations

import bisect
import logging

_log = logging.getLogger(__name__)

_SECTOR_STARTS = (
    0x08000000,
    0x08004000,
    0x08008000,
    0x0800C000,
    0x08010000,
    0x08020000,
    0x08040000,
    0x08060000,
    0x08080000,
    0x080A0000,
    0x080C0000,
    0x080E0000,
    0x08100000,
    0x08104000,
    0x08108000,
    0x0810C000,
    0x08110000,
    0x08120000,
    0x08140000,
    0x08160000,
    0x08180000,
    0x081A0000,
    0x081C0000,
    0x081E0000,
)
FLASH_END = 0x08200000

_SECTORS_BY_SIZE = {512: 8, 1024: 12, 2048: 24}


class FlashLayoutError(ValueError):
    """An address or sector outside the flash."""


class FlashLayout:
    """Maps addresses to sectors for a flash of the given size in kilobytes."""

    def __init__(self, size_kb: int) -> None:
        self.size_kb = size_kb

    def sector(self, address: int) -> int:
        """The sector holding an address."""
        if (
            (address >= _SECTOR_STARTS[8] and self.size_kb <= 512)
            or (address >= _SECTOR_STARTS[12] and self.size_kb <= 1024)
            or address >= FLASH_END
        ):
            _log.error("invalid address %d", address)
            raise FlashLayoutError(f"invalid address {address:#x}")
        return max(bisect.bisect_right(_SECTOR_STARTS, address) - 1, 0)

    def address(self, sector: int) -> int:
        """The start address of a sector."""
        if not 0 <= sector < len(_SECTOR_STARTS):
            _log.error("invalid sector %d", sector)
            raise FlashLayoutError(f"invalid sector {sector}")
        return _SECTOR_STARTS[sector]

    def sector_size(self, sector: int) -> int:
        """The size of a sector in bytes."""
        if sector < 0 or sector > 23:
            _log.error("invalid sector %d", sector)
            raise FlashLayoutError(f"invalid sector {sector}")
        bank_sector = sector % 12
        if bank_sector <= 3:
            return 16 * 1024
        if bank_sector == 4:
            return 64 * 1024
        return 128 * 1024

    def number_of_sectors(self) -> int:
        """Sectors of this flash size, 0 for unsupported sizes."""
        return _SECTORS_BY_SIZE.get(self.size_kb, 0)