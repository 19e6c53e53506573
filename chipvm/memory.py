"""The machine's 4 KiB byte-addressed memory with the built-in font."""

from __future__ import annotations

from .errors import MemoryOutOfBoundError

MEMORY_SIZE = 0x1000
FONT_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5

FONTS = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


class Memory:
    """Byte memory, pre-loaded with the hexadecimal font at FONT_ADDRESS."""

    def __init__(self) -> None:
        self._data = bytearray(MEMORY_SIZE)
        self._data[FONT_ADDRESS : FONT_ADDRESS + len(FONTS)] = FONTS

    def __len__(self) -> int:
        return MEMORY_SIZE

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    @staticmethod
    def _check(addr: int, span: int = 1) -> None:
        if addr < 0 or addr + span > MEMORY_SIZE:
            raise MemoryOutOfBoundError(addr)

    def read(self, addr: int) -> int:
        self._check(addr)
        return self._data[addr]

    def write(self, addr: int, value: int) -> None:
        self._check(addr)
        self._data[addr] = value

    def read_word(self, addr: int) -> int:
        """Read a big-endian 16-bit word."""
        self._check(addr, 2)
        return (self._data[addr] << 8) | self._data[addr + 1]

    def write_word(self, addr: int, value: int) -> None:
        """Write a big-endian 16-bit word."""
        self._check(addr, 2)
        self._data[addr] = (value >> 8) & 0xFF
        self._data[addr + 1] = value & 0xFF

    def read_range(self, start: int, length: int) -> bytes:
        """Bytes from ``start``; empty if the range runs past the end."""
        end = start + length
        if start < 0 or end > MEMORY_SIZE:
            return b""
        return bytes(self._data[start:end])