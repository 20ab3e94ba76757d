"""Main CHIP-8 emulator execution engine."""

from typing import Optional

from chip8vm.state import EmulatorState, set_register
from chip8vm.constants import ADDRESS_MASK
from chip8vm import decode as isa
from chip8vm.decode import Instruction, decode, REDRAW_INSTRUCTIONS
from chip8vm.instructions.system import execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_jump_with_offset,
    execute_skip_if_equal_immediate, execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register, execute_skip_if_not_equal_register,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed,
)
from chip8vm.instructions.alu import (
    execute_copy, execute_or, execute_and, execute_xor, execute_add_registers,
    execute_subtract, execute_shift_right, execute_subtract_reversed, execute_shift_left,
)
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer, execute_set_sound_timer,
    execute_add_to_index, execute_font_character, execute_bcd_conversion,
    execute_store_registers, execute_load_registers,
)

_HANDLERS = {
    isa.Clear: execute_clear_screen,
    isa.Return: execute_return,
    isa.Jump: execute_jump,
    isa.Call: execute_call,
    isa.SkipIfRegisterEquals: execute_skip_if_equal_immediate,
    isa.SkipIfRegisterNotEquals: execute_skip_if_not_equal_immediate,
    isa.SkipIfRegisterVxEqualsVy: execute_skip_if_equal_register,
    isa.SetImmediate: execute_set,
    isa.AddImmediate: execute_add,
    isa.Copy: execute_copy,
    isa.BitwiseOr: execute_or,
    isa.BitwiseAnd: execute_and,
    isa.BitwiseXor: execute_xor,
    isa.Add: execute_add_registers,
    isa.Subtract: execute_subtract,
    isa.RightShift: execute_shift_right,
    isa.SetVxToVyMinusVx: execute_subtract_reversed,
    isa.LeftShift: execute_shift_left,
    isa.SkipIfRegisterVxNotEqualsVy: execute_skip_if_not_equal_register,
    isa.SetIndexRegister: execute_set_index,
    isa.JumpWithPcOffset: execute_jump_with_offset,
    isa.Random: execute_random,
    isa.Draw: execute_display,
    isa.SkipIfKeyPressed: execute_skip_if_key_pressed,
    isa.SkipIfKeyNotPressed: execute_skip_if_key_not_pressed,
    isa.SetVxToDelayTimer: execute_get_delay_timer,
    isa.AwaitKeyInput: execute_wait_for_key,
    isa.SetDelayTimer: execute_set_delay_timer,
    isa.SetSoundTimer: execute_set_sound_timer,
    isa.AddToIndex: execute_add_to_index,
    isa.SetIndexToFontCharacter: execute_font_character,
    isa.SetIndexToBinaryCodedVx: execute_bcd_conversion,
    isa.DumpRegisters: execute_store_registers,
    isa.LoadRegisters: execute_load_registers,
}


def execute(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """Execute single decoded CHIP-8 instruction.

    PC is advanced past the instruction first; jumps, calls and returns then
    overwrite it and skips add another 2.
    """
    state = state.replace(pc=(state.pc + 2) & ADDRESS_MASK)
    return _HANDLERS[type(instruction)](state, instruction)


def fetch(state: EmulatorState) -> int:
    """Read the big-endian opcode at PC."""
    pc = state.pc
    return (int(state.memory[pc & ADDRESS_MASK]) << 8) | int(state.memory[(pc + 1) & ADDRESS_MASK])


def resume_key_wait(state: EmulatorState, press: Optional[int]) -> EmulatorState:
    """Finish a pending FX0A with a fresh key press, otherwise leave the state alone."""
    if press is None:
        return state
    return set_register(state, state.awaiting_key, press).replace(
        pc=(state.pc + 2) & ADDRESS_MASK,
        awaiting_key=None,
    )


def step(state: EmulatorState) -> tuple[EmulatorState, bool]:
    """Run one fetch-decode-execute cycle.

    Returns the new state and whether the display should be republished.
    A key press is only seen by the cycle right after it arrives. While an
    FX0A is waiting for one nothing is fetched.
    """
    press = state.key_press
    if press is not None:
        state = state.replace(key_press=None)
    if state.awaiting_key is not None:
        return resume_key_wait(state, press), False

    instruction = decode(fetch(state))
    state = execute(state, instruction)
    return state, isinstance(instruction, REDRAW_INSTRUCTIONS)
