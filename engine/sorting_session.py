"""
sorting_session.py — Sorting Workspace
========================================
Owns the visible bar array, the counters, the pause / running flags and
the shuffle animation, and hands each sort a SortingContext.

    session = SortingSession(config)
    await session.generate()          # shuffle animation, then fresh values
    await session.run("merge_sort")   # returns once sorted or stopped
    session.toggle_pause(); session.stop()

The visible array is replaced as a whole list on every change, so a
snapshot taken from another thread is always complete.  Every callback
handed to a sort is bound to that run's Flag and goes quiet once the run
is stopped or superseded.

Threading:
    Handlers call stop() / set_size() on the request thread while the
    sort writes from the background loop.  Each write checks its Flag and
    replaces the array under `_lock`, and stop() clears the Flag under the
    same lock, so once stop() returns the stale run cannot change a bar.
    Tones are played after the lock is released.
"""

import logging
import math
import random
import threading
from typing import List, Optional

from config import ARRAY_SIZES, SPEED_MULTIPLIERS, VisualizerConfig
from model import ArrayElement, ElementStatus, random_elements, values_of
from engine.controller import Controller, Flag, Suspender, sleep_ms
from engine.stats import SortingCounters
from engine.tones import bar_frequency, play_tone
from algorithms import SORTING, SORTING_KIND, AlgoInfo, SortingContext, get_algorithm


logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "selection_sort"


class SortingSession:
    """
    Attributes:
        config        : VisualizerConfig in effect.
        array         : Visible ArrayElements (replaced, never mutated).
        size          : Number of bars (one of ARRAY_SIZES).
        speed         : Key into SPEED_MULTIPLIERS.
        algorithm_key : Currently selected SORTING key.
        controller    : Running / paused flags of the current run.
        counters      : Comparisons and array accesses of the current run.
        shuffling     : Set while the shuffle animation plays.
    """

    def __init__(
        self,
        config: Optional[VisualizerConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config:        VisualizerConfig   = config or VisualizerConfig()
        self.size:          int                = self.config.array_size
        self.speed:         str                = self.config.sort_speed
        self.algorithm_key: str                = DEFAULT_ALGORITHM
        self.controller:    Controller         = Controller("sorting")
        self.counters:      SortingCounters    = SortingCounters()
        self.shuffling:     Flag               = Flag(False)
        self._rng:          random.Random      = rng or random.Random()
        self._suspender:    Optional[Suspender] = None
        self.array:         List[ArrayElement] = self._fresh_values(self.size)
        self._lock = threading.RLock()

    def _fresh_values(self, size: int) -> List[ArrayElement]:
        return random_elements(size, self.config.min_value, self.config.max_value, self._rng)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def delay_ms(self) -> float:
        return self.config.sort_base_delay_ms / SPEED_MULTIPLIERS[self.speed]

    @property
    def is_running(self) -> bool:
        return self.controller.is_running

    @property
    def is_paused(self) -> bool:
        return self.controller.is_paused

    @property
    def algorithm(self) -> AlgoInfo:
        return SORTING[self.algorithm_key]

    def values(self) -> List[int]:
        return values_of(self.array)

    # ------------------------------------------------------------------
    # Visible array mutations
    # ------------------------------------------------------------------
    def _reset_statuses(self) -> None:
        with self._lock:
            self.array = [ArrayElement(e.value) for e in self.array]

    def update_item(
        self,
        index: int,
        status: ElementStatus,
        value: Optional[int] = None,
        flag: Optional[Flag] = None,
    ) -> bool:
        """
        Restyle (and optionally revalue) one bar.  With `flag`, nothing
        happens once that run is stopped.  Returns True if the bar changed.
        """
        with self._lock:
            if flag is not None and not flag:
                return False
            updated = list(self.array)
            updated[index] = updated[index].with_status(status, value)
            self.array = updated
            shown = updated[index].value
        if status is ElementStatus.COMPARING:
            play_tone(bar_frequency(shown), intensity=50, muted=self.config.muted)
        return True

    def swap(self, i: int, j: int, flag: Optional[Flag] = None) -> bool:
        """Swap two bars' values (statuses stay put).  Counts 2 reads + 2 writes."""
        with self._lock:
            if flag is not None and not flag:
                return False
            updated = list(self.array)
            a, b = updated[i], updated[j]
            updated[i] = ArrayElement(b.value, a.status)
            updated[j] = ArrayElement(a.value, b.status)
            self.array = updated
            self.counters.add_accesses(4)
        play_tone(bar_frequency(updated[i].value), muted=self.config.muted)
        play_tone(bar_frequency(updated[j].value), muted=self.config.muted)
        return True

    async def verify_sorted(self, flag: Optional[Flag] = None) -> bool:
        """Sweep left to right painting bars sorted; False at the first inversion."""
        n = len(self.array)
        if n == 0:
            return True
        if not self.update_item(0, ElementStatus.COMPARING, flag=flag):
            return False
        for i in range(1, n):
            if self.array[i - 1].value > self.array[i].value:
                return False
            self.update_item(i - 1, ElementStatus.SORTED, flag=flag)
            if not self.update_item(i, ElementStatus.COMPARING, flag=flag):
                return False
            await sleep_ms(self.config.verify_delay_ms)
        return self.update_item(n - 1, ElementStatus.SORTED, flag=flag)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def select_algorithm(self, key: str) -> AlgoInfo:
        info = get_algorithm(key, SORTING_KIND)
        if info is None:
            raise ValueError(f"Unknown sorting algorithm: {key}")
        if self.is_running:
            self.stop()
        self.algorithm_key = key
        return info

    def set_speed(self, speed: str) -> float:
        """Switch the multiplier; a run in flight picks it up at its next step."""
        if speed not in SPEED_MULTIPLIERS:
            raise ValueError(f"Unknown speed: {speed}")
        self.speed = speed
        if self._suspender is not None:
            self._suspender.delay_ms = self.delay_ms
        return self.delay_ms

    def set_size(self, size: int) -> None:
        if size not in ARRAY_SIZES:
            raise ValueError(f"Unsupported array size: {size}")
        with self._lock:
            self.stop()
            self.size = size
            self.array = self._fresh_values(size)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def stop(self) -> bool:
        """Abort the sort (or shuffle) and zero the counters."""
        with self._lock:
            cancelled = self.controller.cancel()
            self.shuffling.clear()
            self.counters = SortingCounters()
            self._reset_statuses()
        return cancelled

    def toggle_pause(self) -> bool:
        """Returns the new paused value (always False when idle)."""
        if not self.is_running:
            return False
        paused = self.controller.toggle_pause()
        logger.debug("sorting: %s", "paused" if paused else "resumed")
        return paused

    async def generate(self) -> None:
        """Stop any sort, play the shuffle animation, then load fresh values."""
        if self.is_running:
            self.stop()
        if self.shuffling:
            return
        self.shuffling.set()
        try:
            with self._lock:
                if len(self.array) != self.size:
                    self.array = self._fresh_values(self.size)
                values = self.values()
            n = len(values)
            swaps_per_step = math.ceil(n / 3)

            for _ in range(self.config.shuffle_steps):
                if not self.shuffling or n == 0:
                    break
                statuses = [ElementStatus.DEFAULT] * n
                for _ in range(swaps_per_step):
                    i, j = self._rng.randrange(n), self._rng.randrange(n)
                    if i == j:
                        continue
                    play_tone(bar_frequency(values[i]), muted=self.config.muted)
                    statuses[i] = ElementStatus.COMPARING
                    statuses[j] = ElementStatus.SWAP
                    values[i], values[j] = values[j], values[i]
                with self._lock:
                    if not self.shuffling:
                        break
                    self.array = [ArrayElement(v, s) for v, s in zip(values, statuses)]
                await sleep_ms(self.delay_ms / 2)

            with self._lock:
                if self.shuffling:
                    self.array = self._fresh_values(self.size)
                    self.counters.reset()
        finally:
            self.shuffling.clear()

    def _bind(self, flag: Flag):
        """Callbacks for one run: silent once `flag` is cleared."""

        def update_item(index: int, status: ElementStatus, value: Optional[int] = None) -> None:
            self.update_item(index, status, value, flag=flag)

        def swap(i: int, j: int) -> None:
            self.swap(i, j, flag=flag)

        async def verify_sorted() -> bool:
            if not flag:
                return False
            return await self.verify_sorted(flag=flag)

        return update_item, swap, verify_sorted

    async def run(self, key: Optional[str] = None) -> bool:
        """
        Sort the visible array.  Returns False without doing anything if a
        sort or shuffle is already in progress.
        """
        key = key or self.algorithm_key
        info = get_algorithm(key, SORTING_KIND)
        if info is None:
            raise ValueError(f"Unknown sorting algorithm: {key}")

        with self._lock:
            if self.is_running or self.shuffling:
                return False
            flag = self.controller.begin()
            self.algorithm_key = key
            self.counters = SortingCounters()
            self._reset_statuses()
            snapshot = list(self.array)

        self._suspender = Suspender(
            flag,
            self.controller.paused,
            delay_ms=self.delay_ms,
            poll_ms=self.config.pause_poll_ms,
        )
        update_item, swap, verify_sorted = self._bind(flag)
        ctx = SortingContext(
            array=snapshot,
            update_item=update_item,
            swap=swap,
            stop_or_pause=self._suspender.stop_or_pause,
            verify_sorted=verify_sorted,
            counters=self.counters,
            running=flag,
        )
        logger.info("sorting: %s on %d bars", info.label, len(snapshot))

        try:
            await info.fn(ctx)
        except Exception:
            logger.exception("sorting: %s crashed", key)
        finally:
            self.controller.finish(flag)

        logger.info(
            "sorting: %s %s, %d comparisons, %d array accesses",
            key, self.controller.state.value, ctx.counters.comparisons, ctx.counters.array_accesses,
        )
        return True

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> dict:
        with self._lock:
            array = list(self.array)
            counters = self.counters.to_dict()
        return {
            "array":     [e.to_dict() for e in array],
            "counters":  counters,
            "algorithm": self.algorithm.to_dict(),
            "state":     self.controller.state.value,
            "running":   self.is_running,
            "paused":    self.is_paused,
            "shuffling": self.shuffling.is_set(),
            "speed":     self.speed,
            "size":      self.size,
            "delay_ms":  self.delay_ms,
        }
