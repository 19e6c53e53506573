# chipvm

`chipvm` is a CHIP-8 virtual machine library. It has no runtime dependencies. It is made of these modules:

- `chipvm.instruction` decodes and encodes instructions: `Instruction`, `Op` and `nibbles`.
- `chipvm.memory` holds the 4 KiB of memory (`Memory`), with the hexadecimal font loaded at `0x050`.
- `chipvm.display` is a 64×32 monochrome frame buffer (`Display`).
- `chipvm.keyboard` tracks the 16-key keypad (`Keyboard`).
- `chipvm.program` holds a list of instructions (`Program`).
- `chipvm.machine` is the CPU core (`Machine`).
- `chipvm.platform` is the interface to a host (`Platform`, `ExecutionMode`).
- `chipvm.config` holds clock rates and quirks (`Config`, `Quirks`).
- `chipvm.errors` holds the exceptions, all derived from `MachineError`.

## Installation

```
pip install chipvm
```

## Assembling and running a program

```python
from chipvm.instruction import Instruction, Op
from chipvm.program import Program
from chipvm.machine import Machine

program = Program([
    Instruction(Op.SET_IMMEDIATE, vx=0, kk=0x1),
    Instruction(Op.SET_IMMEDIATE, vx=1, kk=0x1),
    Instruction(Op.LOAD_FONT, vx=0),
    Instruction(Op.DRAW, vx=0, vy=1, n=5),
])

print(program.dump())          # position / opcode listing

machine = Machine(seed=42)
machine.load_program(program)  # a Program or any iterable of 16-bit words
for _ in range(4):
    machine.step()

print(machine.dump_screen())            # the frame buffer as text
print(machine.dump_registers())         # V0-VF, PC and SP
print(machine.dump_memory_hex(0x200, 8))
```

### Decoding and encoding

`Instruction.decode(word)` turns a 16-bit opcode into an `Instruction`. If the word does not match any known instruction, it raises `InvalidInstructionError`. `Instruction.encode()` (also `int(instruction)`) does the reverse.

### Loading programs

`Machine.load_program` does two things:

- It resets the machine. Memory, display, keys, registers, stack, timers and index are cleared. The random generator is not reset.
- It writes the words big-endian from address `0x200`, and sets the program counter there.

### Machine state

Machine state is held in plain attributes:

- `registers`
- `pc`, `sp` and `stack`
- `index`
- `delay_timer` and `sound_timer`
- `memory`, `display` and `keys`

Pass `seed=` for reproducible results from the `CXKK` random instruction.

## Frame-driven execution

For an interactive front end, subclass `chipvm.platform.Platform` and implement these methods:

- `get_keys()` returns a `Keyboard`.
- `get_time()` returns monotonic time in seconds.
- `get_execution_mode()` returns `ExecutionMode.RUNNING`, `PAUSED` or `STEP`.
- `draw_display(display)` presents the display.
- `play_sound(enabled)` turns the buzzer on or off.

Then call `machine.run_frame(platform)` once per frame. What happens depends on the execution mode:

- **`RUNNING`**: the machine runs as many instructions as the CPU frequency and the time since the last frame call for, then counts the delay and sound timers down.
- **`STEP`**: it runs one instruction.
- **`PAUSED`**: it runs none.

After that it draws the display and sets the sound from the sound timer.

`chipvm.config.Config` sets these values:

- `cpu_frequency`, default 500
- `timer_frequency`, default 60
- `quirks`: when `Quirks.shift` is set, `8XY6` and `8XYE` shift VX in place instead of shifting VY into VX.

Pass it as `Machine(config=...)`.

## Errors

Faults the machine detects raise subclasses of `chipvm.errors.MachineError`:

- `MemoryOutOfBoundError`
- `InvalidInstructionError`
- `StackOverflowError` and `StackUnderflowError`
- `InvalidIndexAddressError` and `IndexOverflowError`
- `InvalidProgramCounterError` and `UnalignedProgramCounterError`

## What it does not do

This is a library only. It has no command, no window, no audio output and no ROM file loader. A host program provides these by implementing `Platform` and by reading ROM bytes into 16-bit words for `load_program`.

## Development

```
pip install -e ".[test]"
pytest
```