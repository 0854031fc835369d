"""
Periodic Task

Runs a callable on a dedicated daemon thread at a fixed interval until stopped.
The stop event is the only cancellation point: a tick in progress always runs
to completion, `stop()` then wakes the worker and joins it.
"""

import threading
from typing import Callable, Optional

from src.platform.logging.loguru_io import Logger


class PeriodicTask:
    def __init__(self, *, name: str, interval_seconds: float, task: Callable[[], object]) -> None:
        if interval_seconds <= 0:
            raise ValueError('interval_seconds must be > 0')
        self.name = name
        self.interval_seconds = interval_seconds
        self._task = task
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        Logger.base.info(f'⏱️ [{self.name}] started, interval={self.interval_seconds}s')

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            Logger.base.info(f'🛑 [{self.name}] stopped')

    def _run(self) -> None:
        # wait() returns True once stop() sets the event
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self._task()
            except Exception as e:
                Logger.base.exception(f'❌ [{self.name}] tick failed, will retry next tick: {e}')
