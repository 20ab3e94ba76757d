"""
pygame front end: window, keyboard and frame presentation for the CHIP-8 VM
"""

import argparse
import os
import sys

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame
import jax

from chip8vm import CycleDriver, FrameChannel, KeyChannel, FixedRateScheduler, EmulatorThread, RunConfig
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.errors import Chip8Error
from chip8vm.logging import get_logger, default_log_level
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme, COLOR_SCHEMES

# COSMAC VIP keypad on the left side of a QWERTY keyboard
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="CHIP-8 virtual machine")
    parser.add_argument("-r", "--rom", required=True, help="path to the ROM that will be loaded")
    parser.add_argument("--hz", type=float, default=RunConfig.instruction_hz, help="instructions per second")
    parser.add_argument("--scale", type=int, default=RunConfig.scale, help="window upscaling factor")
    parser.add_argument("--colors", default=RunConfig.color_scheme, choices=sorted(COLOR_SCHEMES))
    parser.add_argument("--log-level", default=default_log_level(), help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--seed", type=int, default=RunConfig.seed)
    parser.add_argument("--no-restart", action="store_true", help="stop instead of restarting after a fatal error")
    return parser.parse_args(argv)


def run_emulator(rom_filename: str, config: RunConfig) -> int:
    """Start the CPU thread and run the presentation loop until the window closes."""
    logger = get_logger(log_level=config.log_level)

    frames = FrameChannel()
    keys = KeyChannel()
    try:
        driver = CycleDriver.from_rom(
            rom_filename, frames=frames, keys=keys, rng=jax.random.PRNGKey(config.seed), logger=logger
        )
    except (OSError, Chip8Error) as e:
        logger.error(f"Could not load {rom_filename}: {e}")
        return 1
    logger.info(f"Loaded: {rom_filename}")

    scheduler = FixedRateScheduler(
        driver,
        instruction_hz=config.instruction_hz,
        timer_hz=config.timer_hz,
        restart_on_error=config.restart_on_error,
        logger=logger,
    )
    worker = EmulatorThread(scheduler)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
    pygame.display.set_caption("CHIP-8 Emulator")
    clock = pygame.time.Clock()
    on_color, off_color = create_color_scheme(config.color_scheme)
    screen.fill(off_color)

    worker.start()
    held = []
    running = True
    try:
        while running and worker.is_alive():
            clock.tick(config.frame_hz)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_BACKSPACE:
                        # The CPU thread performs the reset before its next cycle
                        scheduler.request_reset()
                        logger.info("Restarting program...")
                    elif event.key in KEY_MAP:
                        held.append(KEY_MAP[event.key])
                        keys.send(held[-1])
                elif event.type == pygame.KEYUP and event.key in KEY_MAP:
                    key = KEY_MAP[event.key]
                    if key in held:
                        held.remove(key)
                    keys.send(held[-1] if held else None)

            frame = frames.latest()
            if frame is not None:
                rgb = chip8_display_to_rgb(frame, config.scale, on_color, off_color)
                # pygame surfaces are indexed (x, y)
                pygame.surfarray.blit_array(screen, rgb.swapaxes(0, 1))
                pygame.display.flip()
    finally:
        worker.stop()
        pygame.quit()

    if scheduler.error is not None:
        logger.error(f"Program stopped: {scheduler.error}")
        return 1
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = RunConfig(
            instruction_hz=args.hz,
            scale=args.scale,
            color_scheme=args.colors,
            log_level=args.log_level,
            restart_on_error=not args.no_restart,
            seed=args.seed,
        ).validate()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return run_emulator(args.rom, config)


if __name__ == "__main__":
    sys.exit(main())
