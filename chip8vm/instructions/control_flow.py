"""CHIP-8 control flow instructions."""

from chip8vm.state import EmulatorState
from chip8vm.constants import ADDRESS_MASK
from chip8vm.decode import Jump, Call, JumpWithPcOffset
from chip8vm.stack import push


def _jump_to(state: EmulatorState, address: int) -> EmulatorState:
    return state.replace(pc=address & ADDRESS_MASK)


def execute_jump(state: EmulatorState, instruction: Jump) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return _jump_to(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: Call) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return _jump_to(state, instruction.nnn)


def execute_jump_with_offset(state: EmulatorState, instruction: JumpWithPcOffset) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    return _jump_to(state, instruction.nnn + int(state.V[0]))


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return state.replace(pc=(state.pc + 2) & ADDRESS_MASK)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.vx] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.vx] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.vx] == state.V[inst.vy]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.vx] != state.V[inst.vy]
)


def _key_pressed(state: EmulatorState, register: int) -> bool:
    return state.key is not None and state.key == int(state.V[register]) & 0xF


# EX9E/EXA1 - Skip if key pressed/not pressed
execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: _key_pressed(state, inst.vx)
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst.vx)
)
