"""CHIP-8 ALU operations (8xxx).

Each operation takes the current VX and VY values and returns the new VX
and the new VF, or None for VF when the operation leaves the flag alone.
"""

from typing import Optional

from chip8vm.state import EmulatorState, set_register
from chip8vm.constants import BYTE_MASK


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & BYTE_MASK, int(result > BYTE_MASK)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return (vx - vy) & BYTE_MASK, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return (vy - vx) & BYTE_MASK, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & BYTE_MASK, (vx & 0x80) >> 7


def make_alu_instruction(operation):
    """Factory for 8XYN handlers.

    VF is written after VX so the flag wins when X is F.
    """
    def alu_instruction(state: EmulatorState, instruction) -> EmulatorState:
        vx = int(state.V[instruction.vx])
        # Shifts only carry VX
        vy = int(state.V[instruction.vy]) if hasattr(instruction, "vy") else 0
        result, vf = operation(vx, vy)
        return set_register(state, instruction.vx, result, flag=vf)
    return alu_instruction


execute_copy = make_alu_instruction(alu_set)
execute_or = make_alu_instruction(alu_or)
execute_and = make_alu_instruction(alu_and)
execute_xor = make_alu_instruction(alu_xor)
execute_add_registers = make_alu_instruction(alu_add)
execute_subtract = make_alu_instruction(alu_sub_xy)
execute_shift_right = make_alu_instruction(alu_shift_right)
execute_subtract_reversed = make_alu_instruction(alu_sub_yx)
execute_shift_left = make_alu_instruction(alu_shift_left)
