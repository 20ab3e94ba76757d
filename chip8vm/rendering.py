"""CHIP-8 rendering utilities for visualization."""

from typing import Tuple, Union

import numpy as np

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_SIZE

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
}


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )

    return COLOR_SCHEMES[scheme]


def frame_to_pixels(frame: Union[bytes, np.ndarray]) -> np.ndarray:
    """Reshape a row-major frame into a (height, width) boolean array."""
    if isinstance(frame, (bytes, bytearray)):
        pixels = np.frombuffer(frame, dtype=np.uint8)
    else:
        pixels = np.asarray(frame, dtype=np.uint8)
    if pixels.size != SCREEN_SIZE:
        raise ValueError(f"Expected a frame of {SCREEN_SIZE} pixels, got {pixels.size}")
    return pixels.reshape(SCREEN_HEIGHT, SCREEN_WIDTH).astype(np.bool_)


def chip8_display_to_rgb(
    frame: Union[bytes, np.ndarray],
    scale: int = 8,
    on_color: Color = (0, 255, 0),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert a CHIP-8 frame to an RGB array with optional upscaling.

    Args:
        frame: Row-major frame of 64*32 pixels with values 0/1
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    pixels = frame_to_pixels(frame)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame
