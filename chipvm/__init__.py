"""A CHIP-8 virtual machine: instruction codec, memory, display, keyboard and CPU core."""

__version__ = "0.1.0"