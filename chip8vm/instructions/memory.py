"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp

from chip8vm.state import EmulatorState, set_register
from chip8vm.constants import ADDRESS_MASK, BYTE_MASK
from chip8vm.decode import SetImmediate, AddImmediate, SetIndexRegister, Random


def execute_set(state: EmulatorState, instruction: SetImmediate) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return set_register(state, instruction.vx, instruction.nn)


def execute_add(state: EmulatorState, instruction: AddImmediate) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping, VF untouched."""
    result = (int(state.V[instruction.vx]) + instruction.nn) & BYTE_MASK
    return set_register(state, instruction.vx, result)


def execute_set_index(state: EmulatorState, instruction: SetIndexRegister) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=instruction.nnn & ADDRESS_MASK)


def execute_random(state: EmulatorState, instruction: Random) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))
    return set_register(state.replace(rng=key), instruction.vx, random_value & instruction.nn)
