"""Fixed-rate scheduling of the cycle driver.

Instruction cycles and timer ticks run on two independent deadlines, each
advanced by its own period. The 60 Hz timer rate is never derived from the
instruction count.
"""

import threading
import time
from typing import Callable, Optional

from chip8vm.constants import INSTRUCTION_HZ, TIMER_HZ
from chip8vm.driver import CycleDriver
from chip8vm.errors import Chip8Error
from chip8vm.logging import ConsoleLogger, get_logger


class FixedRateScheduler:
    """Drives ``CycleDriver.cycle`` and ``CycleDriver.tick_timers`` at fixed rates."""

    def __init__(
        self,
        driver: CycleDriver,
        instruction_hz: float = INSTRUCTION_HZ,
        timer_hz: float = TIMER_HZ,
        restart_on_error: bool = True,
        max_lag: float = 0.25,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[ConsoleLogger] = None,
    ):
        if instruction_hz <= 0 or timer_hz <= 0:
            raise ValueError("rates must be positive")
        self.driver = driver
        self.cycle_period = 1.0 / instruction_hz
        self.tick_period = 1.0 / timer_hz
        self.restart_on_error = restart_on_error
        self.max_lag = max_lag
        self.clock = clock
        self.sleep = sleep
        self.logger = logger or get_logger()

        self.cycles = 0
        self.ticks = 0
        self.skipped_cycles = 0
        self.error: Optional[Chip8Error] = None
        self._reset_requested = threading.Event()

    def request_reset(self) -> None:
        """Ask the running loop to reset the driver before its next cycle.

        Safe to call from any thread; the reset itself happens on the thread
        running ``run``.
        """
        self._reset_requested.set()

    def _run_cycle(self) -> bool:
        """One instruction; returns False when the run must stop."""
        try:
            self.driver.cycle()
        except Chip8Error as error:
            if not self.restart_on_error:
                self.error = error
                return False
            self.logger.warning(f"Restarting program after: {error}")
            self.driver.reset()
        self.cycles += 1
        return True

    def run(
        self,
        stop_event: Optional[threading.Event] = None,
        max_cycles: Optional[int] = None,
        duration: Optional[float] = None,
    ) -> None:
        """Run until stopped, until ``max_cycles`` cycles or for ``duration`` seconds."""
        stop_event = stop_event or threading.Event()
        start = self.clock()
        next_cycle = next_tick = start
        report_at = start + 1.0
        reported_cycles = 0

        while not stop_event.is_set():
            now = self.clock()
            if duration is not None and now - start >= duration:
                break

            if self._reset_requested.is_set():
                self._reset_requested.clear()
                self.driver.reset()

            # Re-anchor instead of bursting after a long stall
            if now - min(next_cycle, next_tick) > self.max_lag:
                skipped = int((now - next_cycle) / self.cycle_period) if now > next_cycle else 0
                self.skipped_cycles += skipped
                self.logger.warning(
                    f"Scheduler fell {now - min(next_cycle, next_tick):.3f}s behind, skipped {skipped} cycles"
                )
                next_cycle = max(next_cycle, now)
                next_tick = max(next_tick, now)

            if now >= next_tick:
                self.driver.tick_timers()
                self.ticks += 1
                next_tick += self.tick_period

            if now >= next_cycle:
                if not self._run_cycle():
                    break
                next_cycle += self.cycle_period
                if max_cycles is not None and self.cycles >= max_cycles:
                    break

            if now >= report_at:
                self.logger.debug(f"CPS: {self.cycles - reported_cycles}")
                reported_cycles = self.cycles
                report_at += 1.0

            delay = min(next_cycle, next_tick) - self.clock()
            if delay > 0:
                self.sleep(delay)


class EmulatorThread(threading.Thread):
    """Worker thread that exclusively owns a driver and its scheduler.

    Only the frame and key channels attached to the driver cross the thread
    boundary.
    """

    def __init__(self, scheduler: FixedRateScheduler):
        super().__init__(name="chip8vm-cpu", daemon=True)
        self.scheduler = scheduler
        self._stop_event = threading.Event()

    def run(self):
        self.scheduler.run(self._stop_event)

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout)
