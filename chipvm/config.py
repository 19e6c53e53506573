"""Machine configuration and compatibility quirks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Quirks:
    """Behaviour switches for instructions that differ between interpreters.

    ``shift``: when set, 8XY6 and 8XYE shift VX in place instead of
    shifting VY into VX.
    """

    shift: bool = False


@dataclass
class Config:
    """Clock rates and quirks the machine runs with."""

    quirks: Quirks = field(default_factory=Quirks)
    cpu_frequency: int = 500
    timer_frequency: int = 60