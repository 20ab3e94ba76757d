"""CHIP-8 display buffer.

The display is a flat, row-major array of ``SCREEN_WIDTH * SCREEN_HEIGHT``
bytes, each 0 (unlit) or 1 (lit), with the origin in the top-left corner.
The pixel at (x, y) lives at ``y * SCREEN_WIDTH + x``.
"""

import numpy as np

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_SIZE

# Bit offsets within a sprite row, most significant bit first
_SPRITE_COLUMNS = np.arange(8)


def create_display() -> np.ndarray:
    """Create a blank display."""
    return np.zeros(SCREEN_SIZE, dtype=np.uint8)


def clear(display: np.ndarray) -> np.ndarray:
    """Return a display with every pixel unlit."""
    return np.zeros_like(display)


def pixel_address(x: int, y: int) -> int:
    """Row-major address of (x, y), wrapping both coordinates."""
    return (y % SCREEN_HEIGHT) * SCREEN_WIDTH + (x % SCREEN_WIDTH)


def invert(display: np.ndarray, x: int, y: int) -> tuple[np.ndarray, bool]:
    """Flip the pixel at (x, y).

    Returns the new display and the new value of the pixel (True when lit).
    A pixel going from lit to unlit is what the draw instruction reports as a
    collision.
    """
    address = pixel_address(x, y)
    lit = not display[address]
    display = display.copy()
    display[address] = lit
    return display, lit


def draw_sprite(display: np.ndarray, sprite: np.ndarray, x: int, y: int) -> tuple[np.ndarray, bool]:
    """XOR a sprite onto the display.

    Args:
        display: Current display buffer
        sprite: One byte per row, most significant bit is the leftmost pixel
        x: Column of the sprite's top-left corner
        y: Row of the sprite's top-left corner

    Returns:
        The new display and whether any lit pixel was turned off.

    Pixels past the right or bottom edge wrap around to the other side. The
    result is the same as calling ``invert`` for every set bit.
    """
    sprite = np.asarray(sprite, dtype=np.uint8)
    bits = np.unpackbits(sprite[:, None], axis=1)

    columns = (x + _SPRITE_COLUMNS) % SCREEN_WIDTH
    rows = (y + np.arange(sprite.shape[0])) % SCREEN_HEIGHT
    addresses = (rows[:, None] * SCREEN_WIDTH + columns[None, :]).ravel()

    mask = np.zeros_like(display)
    np.bitwise_or.at(mask, addresses, bits.ravel().astype(display.dtype))
    collision = bool(np.any(display & mask))
    return display ^ mask, collision


def to_frame(display: np.ndarray) -> bytes:
    """Snapshot the display as one byte per pixel, row-major."""
    return np.asarray(display, dtype=np.uint8).tobytes()
