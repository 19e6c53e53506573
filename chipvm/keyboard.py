"""State of the sixteen-key hexadecimal keypad."""

from __future__ import annotations

from dataclasses import dataclass

KEY_COUNT = 16


@dataclass
class Keyboard:
    """Pressed keys, one bit per key in ``mask``."""

    mask: int = 0

    @staticmethod
    def _valid(key: int) -> bool:
        return 0 <= key < KEY_COUNT

    def is_key_pressed(self, key: int) -> bool:
        """Whether ``key`` is held; keys outside 0x0..0xF are never pressed."""
        if not self._valid(key):
            return False
        return bool(self.mask & (1 << key))

    def any_key_pressed(self) -> bool:
        return self.mask != 0

    def clear_all_keys(self) -> None:
        self.mask = 0

    def set_key(self, key: int, pressed: bool) -> None:
        """Press or release ``key``; keys outside 0x0..0xF are ignored."""
        if not self._valid(key):
            return
        if pressed:
            self.mask |= 1 << key
        else:
            self.mask &= ~(1 << key)

    def first_pressed_key(self) -> int | None:
        """The lowest pressed key, or None when no key is held."""
        return next((k for k in range(KEY_COUNT) if self.is_key_pressed(k)), None)