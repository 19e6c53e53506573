"""The virtual machine: CPU state, instruction execution and frame timing."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Iterable

from .config import Config
from .display import Display
from .errors import (
    IndexOverflowError,
    InvalidIndexAddressError,
    InvalidProgramCounterError,
    StackOverflowError,
    StackUnderflowError,
    UnalignedProgramCounterError,
)
from .instruction import Instruction, Op
from .keyboard import Keyboard
from .memory import FONT_ADDRESS, FONT_GLYPH_SIZE, MEMORY_SIZE, Memory
from .platform import ExecutionMode, Platform
from .program import Program

PROGRAM_START = 0x200
REGISTER_COUNT = 16
STACK_SIZE = 16
_FLAG = 0xF


def _timer_period(cfg: Config) -> float:
    return (1000 // cfg.timer_frequency) / 1000


class Machine:
    """CPU, memory, display and keypad of the virtual machine."""

    def __init__(self, config: Config | None = None, seed: int | None = None) -> None:
        self.config = config if config is not None else Config()
        self.memory = Memory()
        self.display = Display()
        self.keys = Keyboard()
        self.registers = [0] * REGISTER_COUNT
        self.stack = [0] * STACK_SIZE
        self.pc = 0
        self.sp = 0
        self.delay_timer = 0
        self.sound_timer = 0
        self.index = 0
        self._rng = random.Random(seed)
        self._last_frame_time = 0.0
        self._timer_period = _timer_period(self.config)
        self._timer_accumulator = 0.0

    def reset(self) -> None:
        """Reset memory, display, keys, registers, stack and timers.

        The random generator keeps its state.
        """
        self.memory = Memory()
        self.keys.clear_all_keys()
        self.display.clear()
        self.registers = [0] * REGISTER_COUNT
        self.stack = [0] * STACK_SIZE
        self.delay_timer = 0
        self.sound_timer = 0
        self.pc = 0
        self.sp = 0
        self.index = 0
        self._timer_accumulator = 0.0
        self._last_frame_time = 0.0

    def run_frame(self, platform: Platform) -> bool:
        """Run one frame against ``platform``; return False if execution stopped."""
        mode = platform.get_execution_mode()
        frame_start = platform.get_time()
        self.keys = platform.get_keys()

        if mode is ExecutionMode.PAUSED:
            count = 0
        elif mode is ExecutionMode.STEP:
            count = 1
        else:
            count = self._instructions_for_frame(frame_start)

        for _ in range(count):
            if not self.step():
                return False

        if mode is ExecutionMode.RUNNING:
            self._update_timers(platform.get_time() - frame_start)

        platform.draw_display(self.display)
        platform.play_sound(self.sound_timer > 0)
        return True

    def step(self) -> bool:
        """Fetch, decode and execute one instruction."""
        if self.pc < PROGRAM_START or self.pc >= MEMORY_SIZE - 2:
            raise InvalidProgramCounterError(self.pc)
        if self.pc % 2:
            raise UnalignedProgramCounterError(self.pc)

        word = self.memory.read_word(self.pc)
        self.pc += 2
        instruction = Instruction.decode(word)
        _DISPATCH[instruction.op](self, instruction)
        return True

    def load_program(self, program: Program | Iterable[int]) -> None:
        """Reset the machine and load ``program`` at the program start address."""
        self.reset()
        self.pc = PROGRAM_START
        words = program.words() if isinstance(program, Program) else program
        for i, word in enumerate(words):
            self.memory.write_word(PROGRAM_START + i * 2, word)

    def _instructions_for_frame(self, current_time: float) -> int:
        delta = current_time - self._last_frame_time
        expected = self.config.cpu_frequency * delta
        self._last_frame_time = current_time
        return max(0, math.floor(expected + 0.5))

    def _update_timers(self, delta: float) -> None:
        self._timer_accumulator += delta
        if self._timer_accumulator < self._timer_period:
            return
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
        self._timer_accumulator -= self._timer_period

    # debugging output

    def dump_registers(self) -> str:
        """Table of the general registers, PC and SP."""
        lines = [
            "REG     | HEX    | BIN                | DEC\n",
            "--------|--------|--------------------|----\n",
        ]
        lines.extend(
            f"0x{i:X}\t| 0x{val:04X} | 0b{val:016b} | {val}\n"
            for i, val in enumerate(self.registers)
        )
        for name, val in (("PC", self.pc), ("SP", self.sp)):
            lines.append(f"{name}\t| 0x{val:04X} | 0b{val:016b} | {val}\n")
        return "".join(lines)

    def dump_memory_hex(self, start: int, length: int) -> str:
        """Hex dump of a memory range, sixteen bytes per line."""
        parts = []
        for i, byte in enumerate(self.memory.read_range(start, length)):
            if i % 16 == 0:
                parts.append(f"0x{start + i:04X}: ")
            parts.append(f"0x{byte:02X} ")
            if i % 16 == 15:
                parts.append("\n")
        return "".join(parts)

    def dump_screen(self) -> str:
        """The display as text, one line per row."""
        return "".join(
            "".join(
                "█" if self.display.get_pixel(x, y) else "·"
                for x in range(self.display.width)
            )
            + "\n"
            for y in range(self.display.height)
        )

    # system operations

    def _op_clear(self, inst: Instruction) -> None:
        self.display.clear()

    def _op_syscall(self, inst: Instruction) -> None:
        pass

    def _op_rnd(self, inst: Instruction) -> None:
        self.registers[inst.vx] = self._rng.getrandbits(8) & inst.kk

    def _op_set_delay_timer(self, inst: Instruction) -> None:
        self.delay_timer = self.registers[inst.vx]

    def _op_set_sound_timer(self, inst: Instruction) -> None:
        self.sound_timer = self.registers[inst.vx]

    def _op_load_delay_timer(self, inst: Instruction) -> None:
        self.registers[inst.vx] = self.delay_timer

    # flow control

    def _op_return(self, inst: Instruction) -> None:
        if self.sp == 0:
            raise StackUnderflowError()
        self.pc = self.stack[self.sp]
        self.sp -= 1

    def _op_call(self, inst: Instruction) -> None:
        if self.sp == STACK_SIZE - 1:
            raise StackOverflowError()
        self.stack[self.sp] = self.pc
        self.sp += 1
        self.pc = inst.addr

    def _op_jump(self, inst: Instruction) -> None:
        self.pc = inst.addr

    def _op_jump_offset(self, inst: Instruction) -> None:
        self.pc = inst.addr + self.registers[0]

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.pc += 2

    def _op_skip_if_equal_imm(self, inst: Instruction) -> None:
        self._skip_if(self.registers[inst.vx] == inst.kk)

    def _op_skip_if_not_equal_imm(self, inst: Instruction) -> None:
        self._skip_if(self.registers[inst.vx] != inst.kk)

    def _op_skip_if_equal(self, inst: Instruction) -> None:
        self._skip_if(self.registers[inst.vx] == self.registers[inst.vy])

    def _op_skip_if_not_equal(self, inst: Instruction) -> None:
        self._skip_if(self.registers[inst.vx] != self.registers[inst.vy])

    # register operations

    def _op_set_immediate(self, inst: Instruction) -> None:
        self.registers[inst.vx] = inst.kk

    def _op_set(self, inst: Instruction) -> None:
        self.registers[inst.vx] = self.registers[inst.vy]

    def _check_index(self, addr: int) -> None:
        if addr < PROGRAM_START:
            raise InvalidIndexAddressError(addr)
        if addr >= MEMORY_SIZE:
            raise IndexOverflowError(addr)

    def _op_set_index(self, inst: Instruction) -> None:
        self._check_index(inst.addr)
        self.index = inst.addr

    def _op_add_index(self, inst: Instruction) -> None:
        target = self.index + self.registers[inst.vx]
        self._check_index(target)
        self.index = target

    # arithmetic and logic

    def _op_add_immediate(self, inst: Instruction) -> None:
        self.registers[inst.vx] = (self.registers[inst.vx] + inst.kk) & 0xFF

    def _op_add(self, inst: Instruction) -> None:
        total = self.registers[inst.vx] + self.registers[inst.vy]
        self.registers[_FLAG] = int(total > 0xFF)
        self.registers[inst.vx] = total & 0xFF

    def _op_subtract(self, inst: Instruction) -> None:
        x, y = self.registers[inst.vx], self.registers[inst.vy]
        self.registers[_FLAG] = int(x >= y)
        self.registers[inst.vx] = (x - y) & 0xFF

    def _op_subtract_negate(self, inst: Instruction) -> None:
        x, y = self.registers[inst.vx], self.registers[inst.vy]
        self.registers[_FLAG] = int(y >= x)
        self.registers[inst.vx] = (y - x) & 0xFF

    def _op_or(self, inst: Instruction) -> None:
        self.registers[inst.vx] |= self.registers[inst.vy]

    def _op_and(self, inst: Instruction) -> None:
        self.registers[inst.vx] &= self.registers[inst.vy]

    def _op_xor(self, inst: Instruction) -> None:
        self.registers[inst.vx] ^= self.registers[inst.vy]

    def _op_shift_right(self, inst: Instruction) -> None:
        source = inst.vx if self.config.quirks.shift else inst.vy
        self.registers[_FLAG] = self.registers[source] & 0x01
        self.registers[inst.vx] = self.registers[source] >> 1

    def _op_shift_left(self, inst: Instruction) -> None:
        source = inst.vx if self.config.quirks.shift else inst.vy
        self.registers[_FLAG] = (self.registers[source] & 0x80) >> 7
        self.registers[inst.vx] = (self.registers[source] << 1) & 0xFF

    # input and output

    def _op_skip_if_key(self, inst: Instruction) -> None:
        self._skip_if(self.keys.is_key_pressed(self.registers[inst.vx]))

    def _op_skip_if_not_key(self, inst: Instruction) -> None:
        self._skip_if(not self.keys.is_key_pressed(self.registers[inst.vx]))

    def _op_wait_for_key(self, inst: Instruction) -> None:
        key = self.keys.first_pressed_key()
        if key is None:
            # repeat this instruction until a key is pressed
            self.pc -= 2
        else:
            self.registers[inst.vx] = key

    def _op_draw(self, inst: Instruction) -> None:
        sprite = self.memory.read_range(self.index, inst.n)
        x, y = self.registers[inst.vx], self.registers[inst.vy]
        self.registers[_FLAG] = int(self.display.draw_sprite(x, y, sprite))

    # memory operations

    def _op_load_font(self, inst: Instruction) -> None:
        self.index = FONT_ADDRESS + self.registers[inst.vx] * FONT_GLYPH_SIZE

    def _op_store_bcd(self, inst: Instruction) -> None:
        value = self.registers[inst.vx]
        for offset, digit in enumerate((value // 100, value // 10 % 10, value % 10)):
            self.memory.write(self.index + offset, digit)

    def _op_store_registers(self, inst: Instruction) -> None:
        for i, value in enumerate(self.registers[: inst.vx + 1]):
            self.memory.write(self.index + i, value)

    def _op_load_registers(self, inst: Instruction) -> None:
        for i in range(inst.vx + 1):
            self.registers[i] = self.memory.read(self.index + i)


_DISPATCH: dict[Op, Callable[[Machine, Instruction], None]] = {
    Op.CLEAR: Machine._op_clear,
    Op.SYSCALL: Machine._op_syscall,
    Op.RND: Machine._op_rnd,
    Op.SET_DELAY_TIMER: Machine._op_set_delay_timer,
    Op.SET_SOUND_TIMER: Machine._op_set_sound_timer,
    Op.LOAD_DELAY_TIMER: Machine._op_load_delay_timer,
    Op.JUMP: Machine._op_jump,
    Op.JUMP_OFFSET: Machine._op_jump_offset,
    Op.CALL: Machine._op_call,
    Op.RETURN: Machine._op_return,
    Op.SKIP_IF_EQUAL_IMM: Machine._op_skip_if_equal_imm,
    Op.SKIP_IF_NOT_EQUAL_IMM: Machine._op_skip_if_not_equal_imm,
    Op.SKIP_IF_EQUAL: Machine._op_skip_if_equal,
    Op.SKIP_IF_NOT_EQUAL: Machine._op_skip_if_not_equal,
    Op.SET_IMMEDIATE: Machine._op_set_immediate,
    Op.SET: Machine._op_set,
    Op.SET_INDEX: Machine._op_set_index,
    Op.ADD_INDEX: Machine._op_add_index,
    Op.ADD_IMMEDIATE: Machine._op_add_immediate,
    Op.OR: Machine._op_or,
    Op.AND: Machine._op_and,
    Op.XOR: Machine._op_xor,
    Op.ADD: Machine._op_add,
    Op.SUBTRACT: Machine._op_subtract,
    Op.SUBTRACT_NEGATE: Machine._op_subtract_negate,
    Op.SHIFT_RIGHT: Machine._op_shift_right,
    Op.SHIFT_LEFT: Machine._op_shift_left,
    Op.SKIP_IF_KEY: Machine._op_skip_if_key,
    Op.SKIP_IF_NOT_KEY: Machine._op_skip_if_not_key,
    Op.WAIT_FOR_KEY: Machine._op_wait_for_key,
    Op.DRAW: Machine._op_draw,
    Op.STORE_BCD: Machine._op_store_bcd,
    Op.STORE_REGISTERS: Machine._op_store_registers,
    Op.LOAD_REGISTERS: Machine._op_load_registers,
    Op.LOAD_FONT: Machine._op_load_font,
}