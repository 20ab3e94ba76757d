"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import numpy as np
from chip8vm import create_state, decode, execute


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


def run(state, raw):
    """Decode and execute a raw opcode."""
    return execute(state, decode(raw))


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10)."""
    V = state.V.copy()
    for name, value in registers.items():
        V[int(name[1:], 16)] = value
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    memory = state.memory.copy()
    memory[address:address+len(sprite_bytes)] = np.array(sprite_bytes, dtype=np.uint8)
    return state.replace(memory=memory)


def program(*opcodes):
    """Assemble 16-bit opcodes into a big-endian program image."""
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)
