"""Tests for state creation and program loading."""

import pytest
import numpy as np
from chip8vm import create_state, load_program, reset_state
from chip8vm.constants import PROGRAM_START, MAX_PROGRAM_SIZE, MEMORY_SIZE, FONT_START, FONT_DATA, SCREEN_SIZE
from chip8vm.errors import LoadTooLargeError


class TestCreateState:
    """Machine reset values."""

    def test_initial_values(self, fresh_state):
        assert fresh_state.pc == PROGRAM_START
        assert fresh_state.I == 0
        assert int(np.sum(fresh_state.V)) == 0
        assert fresh_state.stack.pointer == 0
        assert fresh_state.delay_timer.get() == 0
        assert fresh_state.sound_timer.get() == 0
        assert fresh_state.key is None
        assert fresh_state.key_press is None
        assert fresh_state.awaiting_key is None
        assert fresh_state.memory.shape == (MEMORY_SIZE,)
        assert fresh_state.display.shape == (SCREEN_SIZE,)

    def test_font_loaded(self, fresh_state):
        font = [int(b) for b in fresh_state.memory[FONT_START:FONT_START + len(FONT_DATA)]]
        assert font == FONT_DATA


class TestLoadProgram:
    """Program images at 0x200."""

    def test_load_program(self, fresh_state):
        state = load_program(fresh_state, b"\x12\x34\x56")
        assert [int(b) for b in state.memory[PROGRAM_START:PROGRAM_START + 4]] == [0x12, 0x34, 0x56, 0]

    def test_load_largest_program(self, fresh_state):
        state = load_program(fresh_state, b"\xAB" * MAX_PROGRAM_SIZE)
        assert int(state.memory[MEMORY_SIZE - 1]) == 0xAB

    def test_load_too_large(self, fresh_state):
        with pytest.raises(LoadTooLargeError) as excinfo:
            load_program(fresh_state, bytes(MAX_PROGRAM_SIZE + 1))
        assert excinfo.value.size == MAX_PROGRAM_SIZE + 1
        assert excinfo.value.capacity == MAX_PROGRAM_SIZE

    def test_reset_state(self):
        state = reset_state(b"\x60\x05")
        assert state.pc == PROGRAM_START
        assert int(state.memory[PROGRAM_START]) == 0x60
        assert int(state.memory[FONT_START]) == FONT_DATA[0]
