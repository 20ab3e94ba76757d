"""CHIP-8 miscellaneous instructions (Fxxx)."""

import numpy as np

from chip8vm.state import EmulatorState, set_register, write_memory
from chip8vm.constants import ADDRESS_MASK, FONT_START, FONT_GLYPH_SIZE
from chip8vm.decode import (
    SetVxToDelayTimer, AwaitKeyInput, SetDelayTimer, SetSoundTimer, AddToIndex,
    SetIndexToFontCharacter, SetIndexToBinaryCodedVx, DumpRegisters, LoadRegisters,
)


def execute_get_delay_timer(state: EmulatorState, instruction: SetVxToDelayTimer) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return set_register(state, instruction.vx, state.delay_timer.get())


def execute_set_delay_timer(state: EmulatorState, instruction: SetDelayTimer) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.delay_timer.set(state.V[instruction.vx]))


def execute_set_sound_timer(state: EmulatorState, instruction: SetSoundTimer) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.sound_timer.set(state.V[instruction.vx]))


def execute_add_to_index(state: EmulatorState, instruction: AddToIndex) -> EmulatorState:
    """FX1E - Add VX to I register, wrapping at 12 bits, VF untouched."""
    return state.replace(I=(state.I + int(state.V[instruction.vx])) & ADDRESS_MASK)


def execute_wait_for_key(state: EmulatorState, instruction: AwaitKeyInput) -> EmulatorState:
    """FX0A - Wait for key press.

    The PC is moved back onto this instruction and the machine enters the
    awaiting state. A key that is already held does not count; the wait ends
    on the next key press.
    """
    return state.replace(pc=(state.pc - 2) & ADDRESS_MASK, awaiting_key=instruction.vx)


def execute_font_character(state: EmulatorState, instruction: SetIndexToFontCharacter) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.vx]) & 0xF
    return state.replace(I=FONT_START + digit * FONT_GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: SetIndexToBinaryCodedVx) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.vx])
    digits = [value // 100, (value // 10) % 10, value % 10]

    indices = (state.I + np.arange(3)) & ADDRESS_MASK
    return write_memory(state, indices, digits)


def execute_store_registers(state: EmulatorState, instruction: DumpRegisters) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.vx + 1
    indices = (state.I + np.arange(count)) & ADDRESS_MASK
    return write_memory(state, indices, state.V[:count])


def execute_load_registers(state: EmulatorState, instruction: LoadRegisters) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.vx + 1
    indices = (state.I + np.arange(count)) & ADDRESS_MASK
    V = state.V.copy()
    V[:count] = state.memory[indices]
    return state.replace(V=V)
