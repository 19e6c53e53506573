"""Exceptions raised by the virtual machine and its components."""


class MachineError(Exception):
    """Base class for every error the machine reports."""


class MemoryOutOfBoundError(MachineError):
    """An address lies outside the 4 KiB address space."""

    def __init__(self, addr: int | None = None) -> None:
        self.addr = addr
        if addr is None:
            super().__init__("memory access out of bounds")
        else:
            super().__init__(f"memory access out of bounds at 0x{addr:04X}")


class _ValueError(MachineError):
    """Error that carries the offending value."""

    _template = "invalid value {value}"

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(self._template.format(value=value))


class InvalidInstructionError(_ValueError):
    """A word does not decode to any known instruction."""

    _template = "invalid instruction 0x{value:04X}"

    @property
    def word(self) -> int:
        return self.value


class StackUnderflowError(MachineError):
    """A return was executed with an empty call stack."""

    def __init__(self) -> None:
        super().__init__("stack underflow")


class StackOverflowError(MachineError):
    """A call was executed with a full call stack."""

    def __init__(self) -> None:
        super().__init__("stack overflow")


class InvalidIndexAddressError(_ValueError):
    """The index register would point below program memory."""

    _template = "invalid index address 0x{value:04X}"

    @property
    def addr(self) -> int:
        return self.value


class IndexOverflowError(_ValueError):
    """The index register would point past the end of memory."""

    _template = "index overflow 0x{value:04X}"

    @property
    def addr(self) -> int:
        return self.value


class InvalidProgramCounterError(_ValueError):
    """The program counter points outside program memory."""

    _template = "invalid program counter 0x{value:04X}"

    @property
    def pc(self) -> int:
        return self.value


class UnalignedProgramCounterError(_ValueError):
    """The program counter is not on an instruction boundary."""

    _template = "unaligned program counter 0x{value:04X}"

    @property
    def pc(self) -> int:
        return self.value


class InvalidKeyIndexError(_ValueError):
    """A key index outside 0x0..0xF was used."""

    _template = "invalid key index {value}"

    @property
    def key(self) -> int:
        return self.value