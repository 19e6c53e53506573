import pytest

from chipvm.errors import MemoryOutOfBoundError
from chipvm.memory import FONT_ADDRESS, FONTS, MEMORY_SIZE, Memory


def test_fonts_loaded():
    mem = Memory()
    assert mem.read(0x50) == 0xF0
    assert mem.read_range(FONT_ADDRESS, len(FONTS)) == FONTS
    assert mem.read_range(0x50, 5) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])


def test_rest_is_zeroed():
    mem = Memory()
    assert mem.read(0x200) == 0
    assert mem.read(MEMORY_SIZE - 1) == 0
    assert len(mem) == 0x1000


def test_write_read_round_trip():
    mem = Memory()
    mem.write(0x300, 0x7F)
    assert mem.read(0x300) == 0x7F


def test_word_round_trip_big_endian():
    mem = Memory()
    mem.write_word(0x300, 0xABCD)
    assert mem.read_word(0x300) == 0xABCD
    assert mem.read(0x300) == 0xAB
    assert mem.read(0x301) == 0xCD


def test_word_at_last_valid_address():
    mem = Memory()
    mem.write_word(0xFFE, 0x1234)
    assert mem.read_word(0xFFE) == 0x1234


@pytest.mark.parametrize("addr", [0x1000, 0xFFFF])
def test_read_write_out_of_bounds(addr):
    mem = Memory()
    with pytest.raises(MemoryOutOfBoundError):
        mem.read(addr)
    with pytest.raises(MemoryOutOfBoundError):
        mem.write(addr, 1)


def test_word_out_of_bounds():
    mem = Memory()
    with pytest.raises(MemoryOutOfBoundError):
        mem.read_word(0xFFF)
    with pytest.raises(MemoryOutOfBoundError):
        mem.write_word(0xFFF, 0x1234)


def test_read_range_past_end_is_empty():
    mem = Memory()
    assert mem.read_range(0xFFF, 2) == b""
    assert len(mem.read_range(0xFFE, 2)) == 2


def test_bytes_snapshot_matches_reads():
    mem = Memory()
    mem.write(0x400, 9)
    snapshot = bytes(mem)
    assert snapshot[0x400] == mem.read(0x400)
    assert len(snapshot) == MEMORY_SIZE