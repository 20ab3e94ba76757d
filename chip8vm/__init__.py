"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, create_state, load_program, reset_state
from chip8vm.emulator import execute, fetch, step
from chip8vm.decode import Instruction, decode
from chip8vm.display import clear, invert, draw_sprite, to_frame
from chip8vm.timers import Timer, tick_timers
from chip8vm.driver import CycleDriver
from chip8vm.channels import FrameChannel, KeyChannel
from chip8vm.scheduler import FixedRateScheduler, EmulatorThread
from chip8vm.config import RunConfig
from chip8vm.errors import (
    Chip8Error,
    IncompatibleProgramError,
    MalformedInstructionError,
    StackOverflowError,
    StackUnderflowError,
    LoadTooLargeError,
)
from chip8vm.constants import *
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme

__version__ = "0.1.0"

__all__ = [
    "EmulatorState",
    "create_state",
    "load_program",
    "reset_state",
    "fetch",
    "execute",
    "step",
    "Instruction",
    "decode",
    "clear",
    "invert",
    "draw_sprite",
    "to_frame",
    "Timer",
    "tick_timers",
    "CycleDriver",
    "FrameChannel",
    "KeyChannel",
    "FixedRateScheduler",
    "EmulatorThread",
    "RunConfig",
    "Chip8Error",
    "IncompatibleProgramError",
    "MalformedInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "LoadTooLargeError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
