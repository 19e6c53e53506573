"""Monochrome 64x32 display backed by a packed row-major frame buffer."""

from __future__ import annotations

from collections.abc import Iterable

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32


class Display:
    """Frame buffer of one bit per pixel, most significant bit leftmost."""

    def __init__(self) -> None:
        self.width = DISPLAY_WIDTH
        self.height = DISPLAY_HEIGHT
        self.framebuffer = self._alloc()

    def _alloc(self) -> bytearray:
        return bytearray(self.height * self.width // 8)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self) -> None:
        self.framebuffer = self._alloc()

    def pixel_to_bit_offset(self, x: int, y: int) -> tuple[int, int]:
        """Byte index and bit index of pixel (x, y) in the frame buffer."""
        offset = y * self.width // 8
        return x // 8 + offset, 7 - x % 8

    def get_pixel(self, x: int, y: int) -> bool:
        """Pixel state; pixels off screen read as unset."""
        if not self._in_bounds(x, y):
            return False
        byte_idx, bit_idx = self.pixel_to_bit_offset(x, y)
        return bool((self.framebuffer[byte_idx] >> bit_idx) & 1)

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        """Set a pixel; writes off screen are ignored."""
        if not self._in_bounds(x, y):
            return
        byte_idx, bit_idx = self.pixel_to_bit_offset(x, y)
        if value:
            self.framebuffer[byte_idx] |= 1 << bit_idx
        else:
            self.framebuffer[byte_idx] &= ~(1 << bit_idx) & 0xFF

    def toggle_pixel(self, x: int, y: int) -> None:
        if self._in_bounds(x, y):
            self.set_pixel(x, y, not self.get_pixel(x, y))

    def draw_sprite(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        """XOR a sprite onto the screen; return True if any set pixel was erased."""
        collision = False
        for row, sprite_byte in enumerate(sprite):
            y_pos = y + row
            if y_pos > self.height:
                break
            for bit in range(8):
                x_pos = x + bit
                if x_pos > self.width:
                    break
                if (sprite_byte >> (7 - bit)) & 1:
                    if self.get_pixel(x_pos, y_pos):
                        collision = True
                    self.toggle_pixel(x_pos, y_pos)
        return collision