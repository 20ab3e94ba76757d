"""CHIP-8 emulator state structures.

Registers, PC and I are plain ints and the memory, register file, display
and stack are small numpy arrays. Handlers never write to an array they
received: they copy it, change the copy and ``replace`` it into a new state.
"""

from typing import Optional

import jax
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE, FONT_START, FONT_DATA, NUM_REGISTERS, STACK_SIZE,
    FLAG_REGISTER,
)
from chip8vm.display import create_display
from chip8vm.errors import LoadTooLargeError
from chip8vm.timers import Timer


@dataclass
class StackState:
    """Stack state for subroutine calls."""
    data: np.ndarray = field(default_factory=lambda: np.zeros(STACK_SIZE, dtype=np.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``key`` is the key currently held on the keypad (or None) and is what
    EX9E/EXA1 test. ``key_press`` is a press that arrived since the last
    cycle; only such a press ends an FX0A wait. ``awaiting_key`` is the
    register an FX0A instruction is waiting to fill.
    """
    rng: jax.Array
    memory: np.ndarray = field(default_factory=lambda: np.zeros(MEMORY_SIZE, dtype=np.uint8))
    pc: int = PROGRAM_START
    display: np.ndarray = field(default_factory=create_display)
    stack: StackState = field(default_factory=StackState)
    delay_timer: Timer = field(default_factory=Timer.create)
    sound_timer: Timer = field(default_factory=Timer.create)
    V: np.ndarray = field(default_factory=lambda: np.zeros(NUM_REGISTERS, dtype=np.uint8))
    I: int = 0
    key: Optional[int] = field(pytree_node=False, default=None)
    key_press: Optional[int] = field(pytree_node=False, default=None)
    awaiting_key: Optional[int] = field(pytree_node=False, default=None)


def set_register(state: EmulatorState, index: int, value: int, flag: Optional[int] = None) -> EmulatorState:
    """Write VX, then VF when a flag is given, so the flag wins when X is F."""
    V = state.V.copy()
    V[index] = value
    if flag is not None:
        V[FLAG_REGISTER] = flag
    return state.replace(V=V)


def write_memory(state: EmulatorState, addresses: np.ndarray, values) -> EmulatorState:
    memory = state.memory.copy()
    memory[addresses] = values
    return state.replace(memory=memory)


def key_event(state: EmulatorState, key: Optional[int]) -> EmulatorState:
    """Apply a key event: a key going down (0-15) or the key being released (None)."""
    if key is None:
        return state.replace(key=None)
    return state.replace(key=key, key_press=key)


def create_state(rng: jax.Array = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng)
    state.memory[FONT_START:FONT_START + len(FONT_DATA)] = FONT_DATA
    return state


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy a program image into memory at PROGRAM_START."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise LoadTooLargeError(len(program), MAX_PROGRAM_SIZE)
    if not program:
        return state
    memory = state.memory.copy()
    memory[PROGRAM_START:PROGRAM_START + len(program)] = np.frombuffer(bytes(program), dtype=np.uint8)
    return state.replace(memory=memory)


def reset_state(program: bytes, rng: jax.Array = None) -> EmulatorState:
    """Fresh machine with the program loaded and PC at PROGRAM_START."""
    return load_program(create_state(rng), program)
