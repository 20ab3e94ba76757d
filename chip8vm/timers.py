"""CHIP-8 delay and sound timers.

Both timers count down at 60 Hz, driven by the scheduler's timer tick and
never by instruction execution. Instructions only read and write them.
"""

from flax.struct import dataclass


@dataclass
class Timer:
    """8-bit countdown counter saturating at zero."""
    value: int = 0

    @classmethod
    def create(cls, value: int = 0) -> "Timer":
        return cls(value=int(value) & 0xFF)

    def decrement(self) -> "Timer":
        """Count down by one, staying at zero."""
        if self.value == 0:
            return self
        return self.replace(value=self.value - 1)

    def set(self, value) -> "Timer":
        return self.replace(value=int(value) & 0xFF)

    def get(self) -> int:
        return self.value


def tick_timers(state):
    """Decrement the delay and sound timers of an emulator state."""
    return state.replace(
        delay_timer=state.delay_timer.decrement(),
        sound_timer=state.sound_timer.decrement(),
    )


def sound_active(state) -> bool:
    """Whether the buzzer should be sounding."""
    return state.sound_timer.get() > 0
