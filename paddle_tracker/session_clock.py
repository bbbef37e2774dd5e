"""
Session clock: Idle -> Active -> Paused -> Active ... -> Idle.

Elapsed time is always derived from the wall clock (now - origin), never
from how many ticks were delivered, so a late or missed tick only delays the
readout, it never loses time. Every command is defined for every phase;
commands that make no sense in the current phase are ignored.
"""

import logging
import threading
import time
from enum import Enum

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    IDLE = 'idle'
    ACTIVE = 'active'
    PAUSED = 'paused'


class SessionClock:
    """Tracks elapsed active time across pause/resume."""

    def __init__(self, clock=time.time):
        """
        Args:
            clock (callable): Returns the current time in seconds
        """
        self.clock = clock
        self.phase = SessionPhase.IDLE
        self.elapsed = 0.0
        self.origin = None
        self.paused_elapsed = 0.0

    @property
    def is_active(self):
        return self.phase is SessionPhase.ACTIVE

    def start(self):
        """Start a new session, or resume a paused one without losing time."""
        now = self.clock()
        if self.phase is SessionPhase.IDLE:
            self.origin = now
            self.elapsed = 0.0
            self.paused_elapsed = 0.0
            self.phase = SessionPhase.ACTIVE
            logger.info("session started")
        elif self.phase is SessionPhase.PAUSED:
            self.origin = now - self.paused_elapsed
            self.phase = SessionPhase.ACTIVE
            logger.info("session resumed at %.1fs", self.paused_elapsed)
        else:
            logger.debug("start ignored: session already active")

    def pause(self):
        if self.phase is not SessionPhase.ACTIVE:
            logger.debug("pause ignored: session is %s", self.phase.value)
            return
        self.tick()
        self.paused_elapsed = self.elapsed
        self.phase = SessionPhase.PAUSED
        logger.info("session paused at %.1fs", self.elapsed)

    def tick(self):
        """Refresh elapsed time. No-op unless active."""
        if self.phase is SessionPhase.ACTIVE:
            # A clock stepping backwards must not make elapsed time go down
            self.elapsed = max(self.elapsed, self.clock() - self.origin)
        return self.elapsed

    def reset(self):
        self.phase = SessionPhase.IDLE
        self.elapsed = 0.0
        self.origin = None
        self.paused_elapsed = 0.0


class SessionTicker(threading.Thread):
    """
    Fire-and-forget periodic tick source.

    Calls ``callback`` every ``interval`` seconds until stop() is called.
    Cancellation only stops further ticks; there is no in-flight work.
    """

    def __init__(self, callback, interval=0.1):
        super().__init__(daemon=True, name='session-ticker')
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval!r}")
        self.callback = callback
        self.interval = interval
        self.stop_event = threading.Event()

    def run(self):
        while not self.stop_event.wait(self.interval):
            self.callback()

    def stop(self, timeout=1.0):
        self.stop_event.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout)
