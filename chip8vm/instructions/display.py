"""CHIP-8 display operations."""

import numpy as np

from chip8vm.state import EmulatorState, set_register
from chip8vm.constants import ADDRESS_MASK, FLAG_REGISTER
from chip8vm.decode import Draw
from chip8vm.display import draw_sprite


def execute_display(state: EmulatorState, instruction: Draw) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    x = int(state.V[instruction.vx])
    y = int(state.V[instruction.vy])
    addresses = (state.I + np.arange(instruction.n)) & ADDRESS_MASK
    sprite = state.memory[addresses]

    display, collision = draw_sprite(state.display, sprite, x, y)
    return set_register(state.replace(display=display), FLAG_REGISTER, int(collision))
