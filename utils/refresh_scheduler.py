from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

from utils.constants import DEFAULT_SHUTDOWN_TIMEOUT

__all__ = ["RefreshScheduler"]


class RefreshScheduler:
    """Runs a task on a fixed period in background threads, never more than one at a time.

    A ticker thread fires every ``interval_seconds``; each tick hands the task to a
    worker thread. If the previous run is still in flight the tick is skipped.
    """

    def __init__(self, task: Callable[[], Any], interval_seconds: float, name: str = "refresh") -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._task = task
        self._interval = interval_seconds
        self._name = name
        self._stop_event = threading.Event()
        self._run_guard = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._ticker: threading.Thread | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def start(self, run_immediately: bool = True) -> None:
        """Start ticking. With ``run_immediately`` the first run fires right away."""
        with self._lock:
            if self._ticker is not None:
                raise RuntimeError(f"{self._name} scheduler already started")
            self._ticker = threading.Thread(
                target=self._tick_loop,
                args=(run_immediately,),
                name=f"{self._name}-ticker",
                daemon=True,
            )
        self._ticker.start()
        logger.info(f"Started {self._name} scheduler (every {self._interval:.0f}s)")

    def trigger(self) -> bool:
        """Dispatch one run unless stopped or a run is already in flight.

        Returns True when a run was started.
        """
        if self.is_stopped():
            return False
        if not self._run_guard.acquire(blocking=False):
            logger.info(f"Previous {self._name} run still in progress; skipping tick")
            return False

        thread = threading.Thread(target=self._run_guarded, name=f"{self._name}-worker", daemon=True)
        try:
            thread.start()
        except RuntimeError as exc:
            self._run_guard.release()
            logger.error(f"Could not start {self._name} worker thread: {exc}")
            return False
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
        logger.debug(f"Started background thread: {thread.name}")
        return True

    def is_running(self) -> bool:
        """Check if a run is currently in flight."""
        return self._run_guard.locked()

    def is_stopped(self) -> bool:
        """Check if the scheduler has been stopped."""
        return self._stop_event.is_set()

    def shutdown(self, timeout: float = DEFAULT_SHUTDOWN_TIMEOUT) -> None:
        """Stop scheduling further ticks and wait for in-flight threads to finish."""
        logger.info(f"Shutting down {self._name} scheduler...")
        self._stop_event.set()

        with self._lock:
            threads = list(self._threads)
            if self._ticker is not None:
                threads.insert(0, self._ticker)

        for thread in threads:
            if thread.is_alive():
                logger.debug(f"Waiting for thread {thread.name} to finish...")
                thread.join(timeout=timeout)
                if thread.is_alive():
                    logger.warning(f"Thread {thread.name} did not finish within {timeout}s")

        logger.info(f"{self._name.capitalize()} scheduler shutdown complete")

    def _tick_loop(self, run_immediately: bool) -> None:
        if run_immediately:
            self.trigger()
        while not self._stop_event.wait(self._interval):
            self.trigger()

    def _run_guarded(self) -> None:
        try:
            self._task()
        except Exception as exc:
            logger.exception(f"Scheduled {self._name} run failed: {exc}")
        finally:
            self._run_guard.release()

    def __enter__(self) -> RefreshScheduler:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
