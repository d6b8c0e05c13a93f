import pytest

from inputsense.flashlayout import FLASH_END, FlashLayout, FlashLayoutError


@pytest.fixture
def big():
    return FlashLayout(2048)


@pytest.mark.parametrize("size, count", [(512, 8), (1024, 12), (2048, 24), (256, 0)])
def test_number_of_sectors(size, count):
    assert FlashLayout(size).number_of_sectors() == count


def test_known_addresses(big):
    assert big.address(0) == 0x08000000
    assert big.address(1) == 0x08004000
    assert big.address(23) == 0x081E0000


def test_known_sizes(big):
    assert big.sector_size(0) == 16 * 1024
    assert big.sector_size(4) == 64 * 1024
    assert big.sector_size(11) == 128 * 1024
    assert big.sector_size(12) == 16 * 1024
    assert big.sector_size(16) == 64 * 1024


def test_sectors_are_contiguous(big):
    for n in range(23):
        assert big.address(n) + big.sector_size(n) == big.address(n + 1)
    assert big.address(23) + big.sector_size(23) == FLASH_END


def test_address_round_trip(big):
    for n in range(big.number_of_sectors()):
        start = big.address(n)
        assert big.sector(start) == n
        assert big.sector(start + big.sector_size(n) - 1) == n


def test_small_flash_rejects_high_addresses():
    small = FlashLayout(512)
    assert small.sector(0x08060000) == 7
    with pytest.raises(FlashLayoutError):
        small.sector(0x08080000)


def test_medium_flash_rejects_second_bank():
    medium = FlashLayout(1024)
    assert medium.sector(0x080E0000) == 11
    with pytest.raises(FlashLayoutError):
        medium.sector(0x08100000)


def test_end_address_rejected(big):
    with pytest.raises(FlashLayoutError):
        big.sector(FLASH_END)


@pytest.mark.parametrize("sector", [24, -1])
def test_invalid_sector(big, sector):
    with pytest.raises(FlashLayoutError):
        big.address(sector)
    with pytest.raises(FlashLayoutError):
        big.sector_size(sector)