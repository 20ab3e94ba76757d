"""CHIP-8 emulator errors.

Every error here is fatal to the running program, never to the process: the
caller decides whether to halt or reset the machine.
"""


class Chip8Error(Exception):
    """Base class for all emulator errors."""


class IncompatibleProgramError(Chip8Error):
    """The program uses the 0NNN machine code routine call, which is not supported."""

    def __init__(self, raw: int):
        self.raw = raw
        super().__init__(f"program is not compatible: native call 0x{raw:04X} is not supported")


class MalformedInstructionError(Chip8Error):
    """The opcode does not decode to any instruction."""

    def __init__(self, raw: int):
        self.raw = raw
        super().__init__(f"malformed instruction 0x{raw:04X}")


class StackOverflowError(Chip8Error):
    """A call was made with a full stack."""


class StackUnderflowError(Chip8Error):
    """A return was made with an empty stack."""


class LoadTooLargeError(Chip8Error):
    """The program image does not fit in memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"program of {size} bytes exceeds the {capacity} bytes available")
