# evosim/scheduler.py
import logging
from enum import Enum

import pygame

import config
from evosim.mathutils import clamp

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class CancellationToken:
    """One token per run; once cancelled no further tick may execute."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self):
        return self._cancelled


class TickScheduler:
    """
    Drives a tick callback once per frame while running.

    The clock is anything with pygame.time.Clock's `tick(framerate)` (returns
    elapsed milliseconds) and `get_fps()`. Each frame's delta time is the
    elapsed time, clamped to MAX_FRAME_TIME, times the speed multiplier.
    """

    def __init__(self, tick_callback, clock=None, target_fps=config.FPS):
        self.tick_callback = tick_callback
        self.clock = clock if clock is not None else pygame.time.Clock()
        self.target_fps = target_fps
        self.state = SchedulerState.STOPPED
        self.speed = config.DEFAULT_SPEED
        self.frame_count = 0
        self._token = None

    @property
    def is_running(self):
        return self.state is SchedulerState.RUNNING

    @property
    def fps(self):
        return self.clock.get_fps()

    def set_speed(self, speed):
        """Takes effect on the next frame, no restart needed."""
        self.speed = clamp(speed, config.MIN_SPEED, config.MAX_SPEED)
        return self.speed

    def start(self, speed=None):
        if speed is not None:
            self.set_speed(speed)
        if self.is_running:
            logger.info("Simulation speed updated to %.2f", self.speed)
            return
        self.state = SchedulerState.RUNNING
        self._token = CancellationToken()
        # Reset the clock so the first frame doesn't include idle time
        self.clock.tick()
        logger.info("Simulation started with speed %.2f", self.speed)

    def stop(self):
        if not self.is_running:
            return
        self._token.cancel()
        self.state = SchedulerState.STOPPED
        logger.info("Simulation stopped")

    def run_frame(self):
        """Runs at most one tick. Returns False when nothing ran."""
        if not self.is_running:
            return False
        token = self._token
        elapsed_ms = self.clock.tick(self.target_fps)
        if token.cancelled:
            return False
        delta_time = min(elapsed_ms / 1000.0, config.MAX_FRAME_TIME) * self.speed
        self.tick_callback(delta_time)
        self.frame_count += 1
        return True

    def run(self, max_frames=None):
        """Blocks, running frames until stopped or `max_frames` have run."""
        frames = 0
        while max_frames is None or frames < max_frames:
            if not self.run_frame():
                break
            frames += 1
        return frames
