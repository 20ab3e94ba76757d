"""Tests for fixed-rate scheduling with a simulated clock."""

import time

import pytest
from conftest import program
from chip8vm import CycleDriver, FixedRateScheduler, EmulatorThread
from chip8vm.logging import ConsoleLogger


class FakeClock:
    """Clock whose time only moves when the scheduler sleeps."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


@pytest.fixture
def quiet_logger():
    return ConsoleLogger(log_level="CRITICAL")


def make_scheduler(code, quiet_logger, **kwargs):
    clock = FakeClock()
    driver = CycleDriver(code, logger=quiet_logger)
    scheduler = FixedRateScheduler(driver, clock=clock, sleep=clock.sleep, logger=quiet_logger, **kwargs)
    return scheduler, driver, clock


class CountingDriver:
    """Stands in for a driver and records calls."""

    def __init__(self):
        self.cycles = 0
        self.ticks = 0
        self.resets = 0

    def cycle(self):
        self.cycles += 1
        return False

    def tick_timers(self):
        self.ticks += 1

    def reset(self):
        self.resets += 1


class TestRates:
    """Instruction and timer rates are independent."""

    @pytest.mark.parametrize("instruction_hz", [120, 500, 700, 1000])
    def test_timer_rate_is_fixed(self, instruction_hz, quiet_logger):
        clock = FakeClock()
        driver = CountingDriver()
        scheduler = FixedRateScheduler(
            driver, instruction_hz=instruction_hz, clock=clock, sleep=clock.sleep, logger=quiet_logger
        )

        scheduler.run(duration=2.0)

        assert abs(driver.cycles - 2 * instruction_hz) <= 1
        assert abs(driver.ticks - 120) <= 1
        assert scheduler.cycles == driver.cycles
        assert scheduler.ticks == driver.ticks

    def test_max_cycles(self, quiet_logger):
        scheduler, driver, clock = make_scheduler(program(0x1200), quiet_logger, instruction_hz=600)
        scheduler.run(max_cycles=60)
        assert scheduler.cycles == 60
        assert clock.now == pytest.approx(59 / 600)

    def test_delay_timer_counts_in_real_time(self, quiet_logger):
        """A delay of 60 expires after one second whatever the CPU speed."""
        code = program(0x603C, 0xF015, 0x1204)  # DT = 60, spin
        scheduler, driver, clock = make_scheduler(code, quiet_logger, instruction_hz=2000)

        scheduler.run(duration=0.5)
        assert 28 <= driver.state.delay_timer.get() <= 32

        scheduler.run(duration=0.6)
        assert driver.state.delay_timer.get() == 0

    def test_stall_is_not_replayed(self, quiet_logger):
        """After a long stall the scheduler re-anchors instead of bursting."""
        clock = FakeClock()
        driver = CountingDriver()
        stalled = []

        def cycle():
            driver.cycles += 1
            if driver.cycles == 10 and not stalled:
                stalled.append(True)
                clock.now += 5.0

        driver.cycle = cycle
        scheduler = FixedRateScheduler(
            driver, instruction_hz=100, clock=clock, sleep=clock.sleep, logger=quiet_logger
        )
        scheduler.run(duration=6.0)

        # One second of running time at 100 Hz, not six
        assert driver.cycles < 150
        assert 490 <= scheduler.skipped_cycles <= 500

    def test_real_clock_keeps_default_rate(self, quiet_logger):
        """The real core holds 700 Hz on the wall clock without skipping."""
        code = program(0x6000, 0xF029, 0x7101, 0xD125, 0x1204)
        driver = CycleDriver(code, logger=quiet_logger)
        scheduler = FixedRateScheduler(driver, instruction_hz=700, logger=quiet_logger)

        scheduler.run(duration=0.5)

        assert scheduler.cycles >= 300
        assert scheduler.skipped_cycles == 0

    def test_invalid_rates(self, quiet_logger):
        with pytest.raises(ValueError):
            FixedRateScheduler(CountingDriver(), instruction_hz=0, logger=quiet_logger)


class TestRestartPolicy:
    """Fatal program errors restart or stop the run."""

    def test_restart_on_error(self, quiet_logger):
        scheduler, driver, clock = make_scheduler(program(0x6001, 0x00EE), quiet_logger)
        scheduler.run(max_cycles=5)

        assert scheduler.error is None
        assert scheduler.cycles == 5
        assert driver.state.pc in (0x200, 0x202)

    def test_stop_on_error(self, quiet_logger):
        scheduler, driver, clock = make_scheduler(program(0x6001, 0x0123), quiet_logger, restart_on_error=False)
        scheduler.run(max_cycles=5)

        assert scheduler.error is not None
        assert scheduler.cycles == 1
        assert driver.state.V[0] == 1


class TestResetRequest:
    """Resets requested from outside run on the scheduler's own loop."""

    def test_reset_before_next_cycle(self, quiet_logger):
        scheduler, driver, clock = make_scheduler(program(0x7001, 0x1200), quiet_logger)
        scheduler.run(max_cycles=10)
        assert driver.state.V[0] == 5

        scheduler.request_reset()
        scheduler.run(max_cycles=11)

        assert driver.state.V[0] == 1
        assert driver.state.pc == 0x202
        assert driver.cycles == 1

    def test_reset_from_another_thread(self, quiet_logger):
        driver = CountingDriver()
        scheduler = FixedRateScheduler(driver, instruction_hz=1000, logger=quiet_logger)
        worker = EmulatorThread(scheduler)

        worker.start()
        scheduler.request_reset()
        time.sleep(0.1)
        worker.stop()

        assert driver.resets == 1


class TestEmulatorThread:
    """The scheduler on its own thread."""

    def test_thread_runs_and_stops(self, quiet_logger):
        driver = CountingDriver()
        scheduler = FixedRateScheduler(driver, instruction_hz=1000, logger=quiet_logger)
        worker = EmulatorThread(scheduler)

        worker.start()
        time.sleep(0.2)
        worker.stop()

        assert not worker.is_alive()
        assert driver.cycles > 0
        assert driver.ticks > 0
