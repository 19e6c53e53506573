"""Interface between the machine and the host that shows and drives it."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod

from .display import Display
from .keyboard import Keyboard


class ExecutionMode(enum.Enum):
    """How the machine advances during a frame."""

    RUNNING = enum.auto()
    PAUSED = enum.auto()
    STEP = enum.auto()


class Platform(ABC):
    """Host services the machine relies on while running frames."""

    @abstractmethod
    def get_keys(self) -> Keyboard:
        """Current state of the keypad."""

    @abstractmethod
    def draw_display(self, display: Display) -> None:
        """Present the display contents."""

    @abstractmethod
    def play_sound(self, enabled: bool) -> None:
        """Turn the buzzer on or off."""

    @abstractmethod
    def get_time(self) -> float:
        """Monotonic time in seconds."""

    @abstractmethod
    def get_execution_mode(self) -> ExecutionMode:
        """Whether the machine runs, is paused or steps one instruction."""