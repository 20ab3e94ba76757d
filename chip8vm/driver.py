"""Cycle driver: runs the CPU one cycle at a time and talks to the platform layer."""

from typing import Optional

import jax

from chip8vm.channels import FrameChannel, KeyChannel
from chip8vm.constants import NUM_KEYS
from chip8vm.display import to_frame
from chip8vm.emulator import step, fetch
from chip8vm.errors import Chip8Error
from chip8vm.logging import ConsoleLogger, get_logger
from chip8vm.state import EmulatorState, key_event, reset_state
from chip8vm.timers import tick_timers


class CycleDriver:
    """Owns the emulator state for one program.

    ``cycle`` and ``tick_timers`` are meant to be called by an external
    scheduler at two independent rates. Nothing here sleeps or blocks.
    """

    def __init__(
        self,
        program: bytes,
        frames: Optional[FrameChannel] = None,
        keys: Optional[KeyChannel] = None,
        rng: Optional[jax.Array] = None,
        logger: Optional[ConsoleLogger] = None,
    ):
        """Initialize the driver and load the program.

        Args:
            program: Raw program image, loaded at 0x200
            frames: Where finished frames are published (optional)
            keys: Where key events are read from (optional)
            rng: PRNG key for the Random instruction
            logger: Console logger, defaults to the shared "chip8vm" one
        """
        self.program = bytes(program)
        self.frames = frames
        self.keys = keys
        self.rng = rng if rng is not None else jax.random.PRNGKey(0)
        self.logger = logger or get_logger()
        self.cycles = 0
        self.state: EmulatorState = reset_state(self.program, self.rng)

    @classmethod
    def from_rom(cls, filename: str, **kwargs) -> "CycleDriver":
        with open(filename, 'rb') as f:
            return cls(f.read(), **kwargs)

    def reset(self) -> None:
        """Re-initialize the machine and reload the same program."""
        self.state = reset_state(self.program, self.rng)
        self.cycles = 0
        self.logger.info(f"Machine reset, {len(self.program)} byte program reloaded")

    def press_key(self, key: Optional[int]) -> None:
        """Press a key directly (None releases it), as if it came from the key channel."""
        if key is not None and not 0 <= key < NUM_KEYS:
            raise ValueError(f"key must be in 0..{NUM_KEYS - 1} or None, got {key}")
        self.state = key_event(self.state, key)

    def _poll_keys(self) -> None:
        if self.keys is None:
            return
        for key in self.keys.poll():
            self.state = key_event(self.state, key)

    def cycle(self) -> bool:
        """Run one fetch-decode-execute cycle.

        Returns True when the display changed and a frame was published.
        Decode and stack errors propagate; the state is left as it was
        before the failing instruction.
        """
        self._poll_keys()
        try:
            self.state, redraw = step(self.state)
        except Chip8Error as error:
            pc = int(self.state.pc)
            self.logger.error(f"Fatal error at PC=0x{pc:03X} (opcode 0x{fetch(self.state):04X}): {error}")
            raise
        self.cycles += 1

        if redraw and self.frames is not None:
            self.frames.publish(self.frame())
        return redraw

    def tick_timers(self) -> None:
        """60 Hz timer tick."""
        self.state = tick_timers(self.state)

    def frame(self) -> bytes:
        """Current display snapshot."""
        return to_frame(self.state.display)
