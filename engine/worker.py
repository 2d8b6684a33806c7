"""
worker.py — Background Event Loop
==================================
The web layer is synchronous (Flask), the algorithms are coroutines.  A
BackgroundLoop owns one asyncio loop running forever on a daemon thread;
request handlers hand it coroutines with submit() and return at once.

    loop = BackgroundLoop()
    loop.start()
    future = loop.submit(session.run("dijkstra"))   # concurrent.futures.Future
    ...
    loop.stop()

Every run shares the one loop, so all grid / array mutations happen on a
single thread; handlers only flip flags and read snapshots.
"""

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Coroutine, Optional


logger = logging.getLogger(__name__)


class BackgroundLoop:

    def __init__(self, name: str = "visualizer-loop"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def _run(self, loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()
        loop.close()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._loop = asyncio.new_event_loop()
            self._thread = threading.Thread(
                target=self._run, args=(self._loop,), name=self.name, daemon=True
            )
            self._thread.start()
            logger.debug("background loop %s started", self.name)

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def submit(self, coro: Coroutine) -> Future:
        """Schedule `coro` on the loop (starting it if needed)."""
        self.start()
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def stop(self, timeout: float = 1.0) -> None:
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout=timeout)
        logger.debug("background loop %s stopped", self.name)
