"""Tests for the countdown timers."""

import pytest
from chip8vm import create_state, tick_timers
from chip8vm.timers import Timer, sound_active


class TestTimer:
    """Saturating 8-bit countdown."""

    def test_decrement(self):
        assert Timer.create(10).decrement().get() == 9

    def test_decrement_from_zero_stays_zero(self):
        """No underflow."""
        timer = Timer.create(0)
        for _ in range(3):
            timer = timer.decrement()
        assert timer.get() == 0

    def test_counts_down_to_zero(self):
        timer = Timer.create(3)
        values = []
        for _ in range(5):
            timer = timer.decrement()
            values.append(timer.get())
        assert values == [2, 1, 0, 0, 0]

    def test_set_masks_to_byte(self):
        assert Timer.create().set(0x1FF).get() == 0xFF

    def test_immutable(self):
        """decrement returns a new timer."""
        timer = Timer.create(5)
        timer.decrement()
        assert timer.get() == 5


class TestTickTimers:
    """Timer tick on a full emulator state."""

    def test_tick_decrements_both(self):
        state = create_state()
        state = state.replace(delay_timer=state.delay_timer.set(2), sound_timer=state.sound_timer.set(1))

        state = tick_timers(state)
        assert state.delay_timer.get() == 1
        assert state.sound_timer.get() == 0

        state = tick_timers(state)
        assert state.delay_timer.get() == 0
        assert state.sound_timer.get() == 0

    def test_sound_active(self):
        state = create_state()
        assert not sound_active(state)
        state = state.replace(sound_timer=state.sound_timer.set(1))
        assert sound_active(state)
        assert not sound_active(tick_timers(state))
