"""A sequence of instructions that can be assembled into machine words."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .instruction import Instruction


@dataclass
class Program:
    """An ordered list of instructions."""

    instructions: list[Instruction] = field(default_factory=list)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def words(self) -> list[int]:
        """The program encoded as 16-bit words."""
        return [inst.encode() for inst in self.instructions]

    def dump(self) -> str:
        """One line per instruction: its position and its opcode in hex."""
        return "".join(
            f"0x{pos:04X}:\t0x{word:04X}\n" for pos, word in enumerate(self.words())
        )