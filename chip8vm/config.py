"""Run configuration for the emulator front end and scheduler."""

import dataclasses

from chip8vm.constants import INSTRUCTION_HZ, TIMER_HZ, FRAME_HZ
from chip8vm.logging import LEVEL_ORDER, default_log_level
from chip8vm.rendering import COLOR_SCHEMES


@dataclasses.dataclass
class RunConfig:
    """Settings for a run.

    Attributes:
        instruction_hz: CHIP-8 CPU frequency in Hz
        timer_hz: Delay/sound timer frequency in Hz (60 on real hardware)
        frame_hz: Presenter refresh rate
        scale: Upscaling factor for the window
        color_scheme: Color scheme name, see ``rendering.COLOR_SCHEMES``
        log_level: Console log level
        restart_on_error: Reset and reload the program after a fatal error
        seed: Seed for the Random instruction
    """
    instruction_hz: float = INSTRUCTION_HZ
    timer_hz: float = TIMER_HZ
    frame_hz: float = FRAME_HZ
    scale: int = 8
    color_scheme: str = "classic"
    log_level: str = dataclasses.field(default_factory=default_log_level)
    restart_on_error: bool = True
    seed: int = 0

    def validate(self) -> "RunConfig":
        for name in ("instruction_hz", "timer_hz", "frame_hz", "scale"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(
                f"Unknown color scheme '{self.color_scheme}'. Available: {list(COLOR_SCHEMES)}"
            )
        if self.log_level.upper() not in LEVEL_ORDER:
            raise ValueError(f"Unknown log level '{self.log_level}'. Available: {list(LEVEL_ORDER)}")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "RunConfig":
        """Defaults with the log level taken from CHIP8_LOG."""
        return cls(**overrides).validate()
