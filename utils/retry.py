"""Bounded retry with a constant pause between attempts."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from utils.errors import RetryExhaustedError

T = TypeVar("T")


def retry_call(
    func: Callable[[], T],
    max_attempts: int,
    backoff_seconds: float,
    *,
    accept: Callable[[T], bool] | None = None,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Any] = time.sleep,
    description: str | None = None,
) -> T:
    """
    Call ``func`` until it returns an accepted value or the attempt budget runs out.

    Args:
        func: Zero-argument callable to invoke
        max_attempts: Total number of attempts (at least 1)
        backoff_seconds: Fixed pause between attempts; never grows
        accept: Predicate deciding whether a returned value counts as success
            (default: every value is accepted)
        exceptions: Exception types treated as a failed attempt; others propagate
        sleep: Function used to pause, injectable for tests and other runtimes
        description: Label used in log messages (defaults to the function name)

    Returns:
        The first accepted value

    Raises:
        RetryExhaustedError: If no attempt produced an accepted value
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    label = description or getattr(func, "__name__", "operation")
    last_error: BaseException | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            value = func()
        except exceptions as exc:
            last_error = exc
            logger.warning(f"{label} attempt {attempt}/{max_attempts} failed: {exc}")
        else:
            if accept is None or accept(value):
                return value
            last_error = None
            logger.warning(f"{label} attempt {attempt}/{max_attempts} returned an unusable result")

        if attempt < max_attempts:
            logger.debug(f"Retrying {label} in {backoff_seconds:.1f}s")
            sleep(backoff_seconds)

    raise RetryExhaustedError(
        f"{label} failed after {max_attempts} attempts",
        attempts=max_attempts,
        last_error=last_error,
    ) from last_error


__all__ = ["retry_call"]
