#!/usr/bin/env python3

"""
Cycle Driver

Runs the CPU at a fixed number of instructions per second, and handles
everything that happens between instructions:

    1. Pump host input (which may request a quit)
    2. Execute one instruction
    3. Tick the 60Hz timers as many times as the instruction count says are due
    4. Push the framebuffer to the renderer if it has changed
    5. Start or stop the buzzer to follow the sound timer
    6. Sleep until the next instruction is due

The timers are derived from the instruction count rather than the wall clock,
so a lagging host slows the whole machine down evenly instead of letting the
timers run ahead of the program.

In frame sync mode, the framebuffer is only pushed on timer ticks (60Hz),
rather than after every instruction that changes it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ

logger = logging.getLogger(__name__)


class DriverError(Exception):
    pass


class CycleDriver:
    def __init__(self, cpu, framebuffer, keypad, inputs, audio, clock_speed=DEFAULT_CLOCK_SPEED, frame_sync=False,
                 exit_on_halt=False):
        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        if clock_speed < 1:
            raise DriverError("Clock speed must be at least 1 instruction per second")

        self.cpu = cpu
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.inputs = inputs
        self.audio = audio
        self.frame_sync = frame_sync
        self.exit_on_halt = exit_on_halt
        self.clock_speed = clock_speed
        self.core_interval = 1.0 / clock_speed
        self.cycles = 0
        self.ticks = 0
        self.halt_reported = False

    def run(self, max_cycles=None):
        # Returns the number of cycles run.  Stops on quit, on reaching max_cycles, or on halting if exit_on_halt is
        # set.
        start_cycles = self.cycles
        next_time = perf_counter()
        logger.info(
            "Running at %d instructions per second, timers at %dHz", self.clock_speed, TIMER_FREQ
        )
        # Lag allowed before the driver stops trying to catch up.  At least one timer tick's worth of instructions.
        max_lag = max(self.core_interval, 1.0 / TIMER_FREQ)

        try:
            while max_cycles is None or self.cycles - start_cycles < max_cycles:
                if self.inputs.process_messages() or self.keypad.is_quit_requested():
                    logger.info("Quit requested")
                    break

                if self.cpu.is_halted() and not self._report_halt():
                    break

                self.cycle()

                # Wait for next CPU instruction.  Deadlines are absolute, so time spent on this instruction is taken
                # into account.
                next_time += self.core_interval
                delay = next_time - perf_counter()

                if delay > 0:
                    sleep(delay)
                elif delay < -max_lag:
                    # More than a whole tick behind (e.g. after a keypress wait).  Don't try to catch up.
                    next_time = perf_counter()
        finally:
            self.audio.stop()
            self.framebuffer.refresh_display()

        return self.cycles - start_cycles

    def cycle(self):
        self.cpu.step()
        self.cycles += 1

        # Integer maths keeps the timers at exactly 60 ticks per emulated second, whatever the clock speed.  Slow
        # clocks can owe several ticks after one instruction, fast ones none.
        due = self.cycles * TIMER_FREQ // self.clock_speed
        ticked = due > self.ticks

        while self.ticks < due:
            self.cpu.tick_timers()
            self.ticks += 1

        if ticked or not self.frame_sync:
            self.framebuffer.refresh_display()

        if self.cpu.is_sound_on():
            if not self.audio.is_playing():
                self.audio.start()
        elif self.audio.is_playing():
            self.audio.stop()

    def _report_halt(self):
        # Returns True if the driver should keep going (presenting the screen and waiting for a quit)
        if not self.halt_reported:
            self.halt_reported = True
            logger.info("Program ended")
            self.framebuffer.renderer.set_title("{} - Program ended".format(APP_NAME))

        return not self.exit_on_halt
