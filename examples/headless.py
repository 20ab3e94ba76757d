import jax

from chip8vm import CycleDriver, FrameChannel, FixedRateScheduler
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.logging import get_logger

# Draws the hex digits 0..7 across the top of the screen, then spins
PROGRAM = bytes([
    0x60, 0x00,  # LD V0, 0x00    digit
    0x61, 0x01,  # LD V1, 0x01    x
    0x62, 0x01,  # LD V2, 0x01    y
    0xF0, 0x29,  # LD F, V0
    0xD1, 0x25,  # DRW V1, V2, 5
    0x70, 0x01,  # ADD V0, 0x01
    0x71, 0x06,  # ADD V1, 0x06
    0x30, 0x08,  # SE V0, 0x08
    0x12, 0x06,  # JP 0x206
    0x12, 0x12,  # JP 0x212
])


def print_frame(frame: bytes):
    for y in range(SCREEN_HEIGHT // 4):
        row = frame[y * SCREEN_WIDTH:(y + 1) * SCREEN_WIDTH]
        print("".join("#" if pixel else "." for pixel in row))


if __name__ == "__main__":
    logger = get_logger(log_level="DEBUG")
    frames = FrameChannel()
    driver = CycleDriver(PROGRAM, frames=frames, rng=jax.random.PRNGKey(0), logger=logger)
    scheduler = FixedRateScheduler(driver, instruction_hz=700, logger=logger)

    scheduler.run(max_cycles=200)

    print(f"cycles={scheduler.cycles} ticks={scheduler.ticks} frames dropped={frames.dropped}")
    print_frame(frames.latest())
