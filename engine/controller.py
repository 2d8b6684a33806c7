"""
controller.py — Cooperative Execution Controller
=================================================
Every algorithm runs as one asyncio task that suspends at well-defined
points.  This module owns the two pieces of shared state those tasks
observe — the "running" and "paused" flags — and the suspension
primitive that sleeps between visible steps.

State machine (per Controller):
    IDLE      →  begin()     →  RUNNING
    RUNNING   →  pause()     →  PAUSED
    PAUSED    →  resume()    →  RUNNING
    RUNNING   →  finish()    →  FINISHED
    any       →  cancel()    →  ABORTED   (only if a run was active)

Cancellation is cooperative: cancel() clears the run's Flag and returns
immediately.  It never waits for the task; the task stops mutating the
grid / array the next time it checks the flag.  Each begin() hands out a
brand-new Flag, so a late-returning task from an earlier run can never be
revived by a later one.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared mutable cell
# ---------------------------------------------------------------------------
class Flag:
    """Single-field mutable container passed by reference into a run."""

    __slots__ = ("value",)

    def __init__(self, value: bool = False):
        self.value: bool = value

    def set(self) -> None:
        self.value = True

    def clear(self) -> None:
        self.value = False

    def is_set(self) -> bool:
        return self.value

    def __bool__(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f"Flag({self.value})"


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"
    ABORTED  = "aborted"


async def sleep_ms(ms: float) -> None:
    await asyncio.sleep(max(0.0, ms) / 1000.0)


# ---------------------------------------------------------------------------
# Suspension primitive
# ---------------------------------------------------------------------------
class Suspender:
    """
    Attributes:
        running  : The run's cancellation Flag.
        paused   : Optional pause Flag (sorting only).
        delay_ms : Sleep per visible step.  Read at every suspension, so a
                   speed change applies to the run already in flight.
        poll_ms  : Poll interval while paused.
    """

    def __init__(
        self,
        running: Flag,
        paused: Optional[Flag] = None,
        delay_ms: float = 30.0,
        poll_ms: float = 100.0,
    ):
        self.running:  Flag           = running
        self.paused:   Optional[Flag] = paused
        self.delay_ms: float          = delay_ms
        self.poll_ms:  float          = poll_ms

    async def step(self, delay_ms: Optional[float] = None) -> bool:
        """Sleep one step.  Returns True if the run is still active afterwards."""
        await sleep_ms(self.delay_ms if delay_ms is None else delay_ms)
        return self.running.is_set()

    async def stop_or_pause(self) -> bool:
        """
        Sorting suspension point.  Returns True when the caller must stop.

        Blocks (polling) while paused; counters and array state are left
        exactly as they were.
        """
        if not self.running:
            return True
        while self.paused is not None and self.paused:
            await sleep_ms(self.poll_ms)
            if not self.running:
                return True
        await sleep_ms(self.delay_ms)
        return not self.running


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class Controller:
    """
    Owns the flags of the current run for one workspace.

    Attributes:
        running : Flag of the current (or last) run.
        paused  : Pause Flag of the current run.
        state   : Current RunState.
    """

    def __init__(self, name: str = "run"):
        self.name:    str      = name
        self.running: Flag     = Flag(False)
        self.paused:  Flag     = Flag(False)
        self.state:   RunState = RunState.IDLE

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def begin(self) -> Flag:
        """Cancel whatever is in flight and hand out a fresh running Flag."""
        self.cancel()
        self.running = Flag(True)
        self.paused = Flag(False)
        self.state = RunState.RUNNING
        logger.debug("%s: run started", self.name)
        return self.running

    def cancel(self) -> bool:
        """Idempotent.  Returns True if a run was actually active."""
        was_active = self.running.is_set()
        self.running.clear()
        self.paused.clear()
        if was_active:
            self.state = RunState.ABORTED
            logger.info("%s: run cancelled", self.name)
        return was_active

    def finish(self, flag: Flag) -> None:
        """Mark `flag`'s run finished — a no-op if that run was superseded."""
        if flag is not self.running:
            return
        if flag.is_set() or self.state in (RunState.RUNNING, RunState.PAUSED):
            flag.clear()
            self.paused.clear()
            self.state = RunState.FINISHED
            logger.debug("%s: run finished", self.name)

    def reset(self) -> None:
        self.cancel()
        self.state = RunState.IDLE

    # ------------------------------------------------------------------
    # Pause / Resume
    # ------------------------------------------------------------------
    def pause(self) -> None:
        if self.running:
            self.paused.set()
            self.state = RunState.PAUSED

    def resume(self) -> None:
        self.paused.clear()
        if self.running:
            self.state = RunState.RUNNING

    def toggle_pause(self) -> bool:
        """Returns the new paused value."""
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused.is_set()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.running.is_set()

    @property
    def is_paused(self) -> bool:
        return self.paused.is_set()
