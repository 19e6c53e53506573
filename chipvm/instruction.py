"""Instruction set: decoding 16-bit words into instructions and back."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import InvalidInstructionError


class Op(enum.Enum):
    """Every operation the machine knows."""

    CLEAR = enum.auto()  # 00E0
    RETURN = enum.auto()  # 00EE
    SYSCALL = enum.auto()  # 0NNN
    JUMP = enum.auto()  # 1NNN
    CALL = enum.auto()  # 2NNN
    SKIP_IF_EQUAL_IMM = enum.auto()  # 3XKK
    SKIP_IF_NOT_EQUAL_IMM = enum.auto()  # 4XKK
    SKIP_IF_EQUAL = enum.auto()  # 5XY0
    SET_IMMEDIATE = enum.auto()  # 6XKK
    ADD_IMMEDIATE = enum.auto()  # 7XKK
    SET = enum.auto()  # 8XY0
    OR = enum.auto()  # 8XY1
    AND = enum.auto()  # 8XY2
    XOR = enum.auto()  # 8XY3
    ADD = enum.auto()  # 8XY4
    SUBTRACT = enum.auto()  # 8XY5
    SHIFT_RIGHT = enum.auto()  # 8XY6
    SUBTRACT_NEGATE = enum.auto()  # 8XY7
    SHIFT_LEFT = enum.auto()  # 8XYE
    SKIP_IF_NOT_EQUAL = enum.auto()  # 9XY0
    SET_INDEX = enum.auto()  # ANNN
    JUMP_OFFSET = enum.auto()  # BNNN
    RND = enum.auto()  # CXKK
    DRAW = enum.auto()  # DXYN
    SKIP_IF_KEY = enum.auto()  # EX9E
    SKIP_IF_NOT_KEY = enum.auto()  # EXA1
    LOAD_DELAY_TIMER = enum.auto()  # FX07
    WAIT_FOR_KEY = enum.auto()  # FX0A
    SET_DELAY_TIMER = enum.auto()  # FX15
    SET_SOUND_TIMER = enum.auto()  # FX18
    ADD_INDEX = enum.auto()  # FX1E
    LOAD_FONT = enum.auto()  # FX29
    STORE_BCD = enum.auto()  # FX33
    STORE_REGISTERS = enum.auto()  # FX55
    LOAD_REGISTERS = enum.auto()  # FX65


_CLEAR_WORD = 0x00E0
_RETURN_WORD = 0x00EE

# q NNN
_ADDR_OPS = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0xA: Op.SET_INDEX,
    0xB: Op.JUMP_OFFSET,
}

# q X KK
_IMM_OPS = {
    0x3: Op.SKIP_IF_EQUAL_IMM,
    0x4: Op.SKIP_IF_NOT_EQUAL_IMM,
    0x6: Op.SET_IMMEDIATE,
    0x7: Op.ADD_IMMEDIATE,
    0xC: Op.RND,
}

# q X Y w
_REG_OPS = {
    (0x5, 0x0): Op.SKIP_IF_EQUAL,
    (0x8, 0x0): Op.SET,
    (0x8, 0x1): Op.OR,
    (0x8, 0x2): Op.AND,
    (0x8, 0x3): Op.XOR,
    (0x8, 0x4): Op.ADD,
    (0x8, 0x5): Op.SUBTRACT,
    (0x8, 0x6): Op.SHIFT_RIGHT,
    (0x8, 0x7): Op.SUBTRACT_NEGATE,
    (0x8, 0xE): Op.SHIFT_LEFT,
    (0x9, 0x0): Op.SKIP_IF_NOT_EQUAL,
}

# q X kk with a constant low byte
_SINGLE_REG_OPS = {
    (0xE, 0x9E): Op.SKIP_IF_KEY,
    (0xE, 0xA1): Op.SKIP_IF_NOT_KEY,
    (0xF, 0x07): Op.LOAD_DELAY_TIMER,
    (0xF, 0x0A): Op.WAIT_FOR_KEY,
    (0xF, 0x15): Op.SET_DELAY_TIMER,
    (0xF, 0x18): Op.SET_SOUND_TIMER,
    (0xF, 0x1E): Op.ADD_INDEX,
    (0xF, 0x29): Op.LOAD_FONT,
    (0xF, 0x33): Op.STORE_BCD,
    (0xF, 0x55): Op.STORE_REGISTERS,
    (0xF, 0x65): Op.LOAD_REGISTERS,
}

_ADDR_CODES = {op: q for q, op in _ADDR_OPS.items()}
_IMM_CODES = {op: q for q, op in _IMM_OPS.items()}
_REG_CODES = {op: key for key, op in _REG_OPS.items()}
_SINGLE_REG_CODES = {op: key for key, op in _SINGLE_REG_OPS.items()}


def nibbles(word: int) -> tuple[int, int, int, int]:
    """Split a 16-bit word into its four nibbles, most significant first."""
    return (
        (word & 0xF000) >> 12,
        (word & 0x0F00) >> 8,
        (word & 0x00F0) >> 4,
        word & 0x000F,
    )


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction.

    Only the operands relevant to ``op`` are meaningful; the others stay 0.
    ``vx`` also holds the register operand of single-register instructions.
    """

    op: Op
    vx: int = 0
    vy: int = 0
    kk: int = 0
    n: int = 0
    addr: int = 0

    @classmethod
    def decode(cls, word: int) -> Instruction:
        """Decode a 16-bit word; raise InvalidInstructionError if unknown."""
        q, vx, vy, n = nibbles(word)
        kk = word & 0x00FF
        nnn = word & 0x0FFF

        if q == 0x0:
            if word == _CLEAR_WORD:
                return cls(Op.CLEAR)
            if word == _RETURN_WORD:
                return cls(Op.RETURN)
            return cls(Op.SYSCALL, addr=nnn)
        if q in _ADDR_OPS:
            return cls(_ADDR_OPS[q], addr=nnn)
        if q in _IMM_OPS:
            return cls(_IMM_OPS[q], vx=vx, kk=kk)
        if q == 0xD:
            return cls(Op.DRAW, vx=vx, vy=vy, n=n)
        if (q, n) in _REG_OPS:
            return cls(_REG_OPS[q, n], vx=vx, vy=vy)
        if (q, kk) in _SINGLE_REG_OPS:
            return cls(_SINGLE_REG_OPS[q, kk], vx=vx)
        raise InvalidInstructionError(word)

    def encode(self) -> int:
        """Encode the instruction into its 16-bit word."""
        op = self.op
        if op is Op.CLEAR:
            return _CLEAR_WORD
        if op is Op.RETURN:
            return _RETURN_WORD
        if op is Op.SYSCALL:
            return self.addr & 0xFFF
        if op in _ADDR_CODES:
            return (_ADDR_CODES[op] << 12) | (self.addr & 0xFFF)
        if op in _IMM_CODES:
            return (_IMM_CODES[op] << 12) | (self.vx << 8) | self.kk
        if op is Op.DRAW:
            return (0xD << 12) | (self.vx << 8) | (self.vy << 4) | self.n
        if op in _REG_CODES:
            q, w = _REG_CODES[op]
            return (q << 12) | (self.vx << 8) | (self.vy << 4) | w
        q, low = _SINGLE_REG_CODES[op]
        return (q << 12) | (self.vx << 8) | low

    def __int__(self) -> int:
        return self.encode()