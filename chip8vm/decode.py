"""CHIP-8 instruction decoding.

Opcodes are 16-bit big-endian words. Operands always live at the same
positions regardless of the instruction:

- X: bits 8-11 (VX register)
- Y: bits 4-7 (VY register)
- N: bits 0-3 (4-bit immediate)
- NN: bits 0-7 (8-bit immediate)
- NNN: bits 0-11 (12-bit address)

``decode`` turns an opcode into exactly one instruction variant, or raises
``IncompatibleProgramError`` for the unsupported 0NNN machine code call and
``MalformedInstructionError`` for anything else that is not an instruction.
"""

from typing import Union

from chex import dataclass

from chip8vm.errors import IncompatibleProgramError, MalformedInstructionError


@dataclass(frozen=True)
class Clear:
    """00E0 - Clear the display."""

    def __str__(self):
        return "CLS"


@dataclass(frozen=True)
class Return:
    """00EE - Return from subroutine."""

    def __str__(self):
        return "RET"


@dataclass(frozen=True)
class Jump:
    """1NNN - Jump to address NNN."""
    nnn: int

    def __str__(self):
        return f"JP 0x{self.nnn:03X}"


@dataclass(frozen=True)
class Call:
    """2NNN - Call subroutine at NNN."""
    nnn: int

    def __str__(self):
        return f"CALL 0x{self.nnn:03X}"


@dataclass(frozen=True)
class SkipIfRegisterEquals:
    """3XNN - Skip next instruction if VX == NN."""
    vx: int
    nn: int

    def __str__(self):
        return f"SE V{self.vx:X}, 0x{self.nn:02X}"


@dataclass(frozen=True)
class SkipIfRegisterNotEquals:
    """4XNN - Skip next instruction if VX != NN."""
    vx: int
    nn: int

    def __str__(self):
        return f"SNE V{self.vx:X}, 0x{self.nn:02X}"


@dataclass(frozen=True)
class SkipIfRegisterVxEqualsVy:
    """5XY0 - Skip next instruction if VX == VY."""
    vx: int
    vy: int

    def __str__(self):
        return f"SE V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class SetImmediate:
    """6XNN - Set VX = NN."""
    vx: int
    nn: int

    def __str__(self):
        return f"LD V{self.vx:X}, 0x{self.nn:02X}"


@dataclass(frozen=True)
class AddImmediate:
    """7XNN - Add NN to VX, no carry flag."""
    vx: int
    nn: int

    def __str__(self):
        return f"ADD V{self.vx:X}, 0x{self.nn:02X}"


@dataclass(frozen=True)
class Copy:
    """8XY0 - Set VX = VY."""
    vx: int
    vy: int

    def __str__(self):
        return f"LD V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class BitwiseOr:
    """8XY1 - VX |= VY."""
    vx: int
    vy: int

    def __str__(self):
        return f"OR V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class BitwiseAnd:
    """8XY2 - VX &= VY."""
    vx: int
    vy: int

    def __str__(self):
        return f"AND V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class BitwiseXor:
    """8XY3 - VX ^= VY."""
    vx: int
    vy: int

    def __str__(self):
        return f"XOR V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class Add:
    """8XY4 - VX += VY, VF = carry."""
    vx: int
    vy: int

    def __str__(self):
        return f"ADD V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class Subtract:
    """8XY5 - VX -= VY, VF = not borrow."""
    vx: int
    vy: int

    def __str__(self):
        return f"SUB V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class RightShift:
    """8XY6 - VX >>= 1, VF = bit shifted out."""
    vx: int

    def __str__(self):
        return f"SHR V{self.vx:X}"


@dataclass(frozen=True)
class SetVxToVyMinusVx:
    """8XY7 - VX = VY - VX, VF = not borrow."""
    vx: int
    vy: int

    def __str__(self):
        return f"SUBN V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class LeftShift:
    """8XYE - VX <<= 1, VF = bit shifted out."""
    vx: int

    def __str__(self):
        return f"SHL V{self.vx:X}"


@dataclass(frozen=True)
class SkipIfRegisterVxNotEqualsVy:
    """9XY0 - Skip next instruction if VX != VY."""
    vx: int
    vy: int

    def __str__(self):
        return f"SNE V{self.vx:X}, V{self.vy:X}"


@dataclass(frozen=True)
class SetIndexRegister:
    """ANNN - Set I = NNN."""
    nnn: int

    def __str__(self):
        return f"LD I, 0x{self.nnn:03X}"


@dataclass(frozen=True)
class JumpWithPcOffset:
    """BNNN - Jump to NNN + V0."""
    nnn: int

    def __str__(self):
        return f"JP V0, 0x{self.nnn:03X}"


@dataclass(frozen=True)
class Random:
    """CXNN - Set VX = random byte & NN."""
    vx: int
    nn: int

    def __str__(self):
        return f"RND V{self.vx:X}, 0x{self.nn:02X}"


@dataclass(frozen=True)
class Draw:
    """DXYN - Draw an 8xN sprite from memory at I to (VX, VY), VF = collision."""
    vx: int
    vy: int
    n: int

    def __str__(self):
        return f"DRW V{self.vx:X}, V{self.vy:X}, {self.n}"


@dataclass(frozen=True)
class SkipIfKeyPressed:
    """EX9E - Skip next instruction if the key in VX is pressed."""
    vx: int

    def __str__(self):
        return f"SKP V{self.vx:X}"


@dataclass(frozen=True)
class SkipIfKeyNotPressed:
    """EXA1 - Skip next instruction if the key in VX is not pressed."""
    vx: int

    def __str__(self):
        return f"SKNP V{self.vx:X}"


@dataclass(frozen=True)
class SetVxToDelayTimer:
    """FX07 - Set VX = delay timer."""
    vx: int

    def __str__(self):
        return f"LD V{self.vx:X}, DT"


@dataclass(frozen=True)
class AwaitKeyInput:
    """FX0A - Wait for a key press and store it in VX."""
    vx: int

    def __str__(self):
        return f"LD V{self.vx:X}, K"


@dataclass(frozen=True)
class SetDelayTimer:
    """FX15 - Set delay timer = VX."""
    vx: int

    def __str__(self):
        return f"LD DT, V{self.vx:X}"


@dataclass(frozen=True)
class SetSoundTimer:
    """FX18 - Set sound timer = VX."""
    vx: int

    def __str__(self):
        return f"LD ST, V{self.vx:X}"


@dataclass(frozen=True)
class AddToIndex:
    """FX1E - I += VX."""
    vx: int

    def __str__(self):
        return f"ADD I, V{self.vx:X}"


@dataclass(frozen=True)
class SetIndexToFontCharacter:
    """FX29 - Set I to the font glyph for the low nibble of VX."""
    vx: int

    def __str__(self):
        return f"LD F, V{self.vx:X}"


@dataclass(frozen=True)
class SetIndexToBinaryCodedVx:
    """FX33 - Store the decimal digits of VX at I, I+1, I+2."""
    vx: int

    def __str__(self):
        return f"LD B, V{self.vx:X}"


@dataclass(frozen=True)
class DumpRegisters:
    """FX55 - Store V0..VX in memory starting at I."""
    vx: int

    def __str__(self):
        return f"LD [I], V{self.vx:X}"


@dataclass(frozen=True)
class LoadRegisters:
    """FX65 - Load V0..VX from memory starting at I."""
    vx: int

    def __str__(self):
        return f"LD V{self.vx:X}, [I]"


Instruction = Union[
    Clear, Return, Jump, Call,
    SkipIfRegisterEquals, SkipIfRegisterNotEquals,
    SkipIfRegisterVxEqualsVy, SkipIfRegisterVxNotEqualsVy,
    SetImmediate, AddImmediate,
    Copy, BitwiseOr, BitwiseAnd, BitwiseXor, Add, Subtract,
    RightShift, SetVxToVyMinusVx, LeftShift,
    SetIndexRegister, JumpWithPcOffset, Random, Draw,
    SkipIfKeyPressed, SkipIfKeyNotPressed,
    SetVxToDelayTimer, AwaitKeyInput, SetDelayTimer, SetSoundTimer,
    AddToIndex, SetIndexToFontCharacter, SetIndexToBinaryCodedVx,
    DumpRegisters, LoadRegisters,
]

# Instructions after which the display must be republished
REDRAW_INSTRUCTIONS = (Clear, Draw)


def _decode_system(raw: int) -> Instruction:
    if raw == 0x00E0:
        return Clear()
    if raw == 0x00EE:
        return Return()
    # Any other 0NNN is a call into host machine code.
    raise IncompatibleProgramError(raw)


def _decode_alu(raw: int, vx: int, vy: int) -> Instruction:
    n = raw & 0x000F
    if n == 0x0:
        return Copy(vx=vx, vy=vy)
    if n == 0x1:
        return BitwiseOr(vx=vx, vy=vy)
    if n == 0x2:
        return BitwiseAnd(vx=vx, vy=vy)
    if n == 0x3:
        return BitwiseXor(vx=vx, vy=vy)
    if n == 0x4:
        return Add(vx=vx, vy=vy)
    if n == 0x5:
        return Subtract(vx=vx, vy=vy)
    if n == 0x6:
        return RightShift(vx=vx)
    if n == 0x7:
        return SetVxToVyMinusVx(vx=vx, vy=vy)
    if n == 0xE:
        return LeftShift(vx=vx)
    raise MalformedInstructionError(raw)


def _decode_key(raw: int, vx: int) -> Instruction:
    nn = raw & 0x00FF
    if nn == 0x9E:
        return SkipIfKeyPressed(vx=vx)
    if nn == 0xA1:
        return SkipIfKeyNotPressed(vx=vx)
    raise MalformedInstructionError(raw)


_MISC_INSTRUCTIONS = {
    0x07: SetVxToDelayTimer,
    0x0A: AwaitKeyInput,
    0x15: SetDelayTimer,
    0x18: SetSoundTimer,
    0x1E: AddToIndex,
    0x29: SetIndexToFontCharacter,
    0x33: SetIndexToBinaryCodedVx,
    0x55: DumpRegisters,
    0x65: LoadRegisters,
}


def _decode_misc(raw: int, vx: int) -> Instruction:
    variant = _MISC_INSTRUCTIONS.get(raw & 0x00FF)
    if variant is None:
        raise MalformedInstructionError(raw)
    return variant(vx=vx)


def decode(raw: int) -> Instruction:
    """Decode a 16-bit opcode into an instruction."""
    raw = int(raw)
    if not 0 <= raw <= 0xFFFF:
        raise MalformedInstructionError(raw)

    opcode = (raw & 0xF000) >> 12
    vx = (raw & 0x0F00) >> 8
    vy = (raw & 0x00F0) >> 4
    n = raw & 0x000F
    nn = raw & 0x00FF
    nnn = raw & 0x0FFF

    if opcode == 0x0:
        return _decode_system(raw)
    if opcode == 0x1:
        return Jump(nnn=nnn)
    if opcode == 0x2:
        return Call(nnn=nnn)
    if opcode == 0x3:
        return SkipIfRegisterEquals(vx=vx, nn=nn)
    if opcode == 0x4:
        return SkipIfRegisterNotEquals(vx=vx, nn=nn)
    if opcode == 0x5:
        return SkipIfRegisterVxEqualsVy(vx=vx, vy=vy)
    if opcode == 0x6:
        return SetImmediate(vx=vx, nn=nn)
    if opcode == 0x7:
        return AddImmediate(vx=vx, nn=nn)
    if opcode == 0x8:
        return _decode_alu(raw, vx, vy)
    if opcode == 0x9:
        return SkipIfRegisterVxNotEqualsVy(vx=vx, vy=vy)
    if opcode == 0xA:
        return SetIndexRegister(nnn=nnn)
    if opcode == 0xB:
        return JumpWithPcOffset(nnn=nnn)
    if opcode == 0xC:
        return Random(vx=vx, nn=nn)
    if opcode == 0xD:
        return Draw(vx=vx, vy=vy, n=n)
    if opcode == 0xE:
        return _decode_key(raw, vx)
    return _decode_misc(raw, vx)
