"""
Polling primitive shared by the page objects and helpers.

wait_until() keeps evaluating a predicate until it returns truthy or the
wall-clock deadline passes. Exceptions raised by the predicate count as
"not yet". Unlike a bare loop it always reports how the wait ended, so a
caller can tell success from timeout without re-checking page state.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from utils.exceptions import WaitTimeoutError

logger = logging.getLogger("automation")

DEFAULT_TIMEOUT_MS = 3000
DEFAULT_POLL_MS = 50

Predicate = Callable[[], object]
Sleeper = Callable[[float], None]


def _default_sleep(ms: float) -> None:
    time.sleep(ms / 1000.0)


@dataclass(frozen=True)
class WaitResult:
    """Outcome of a wait_until() call; truthy only when the predicate held."""
    succeeded: bool
    attempts: int
    elapsed_ms: float
    last_error: Optional[BaseException] = None
    description: Optional[str] = None

    @property
    def timed_out(self) -> bool:
        return not self.succeeded

    def __bool__(self) -> bool:
        return self.succeeded

    def summary(self) -> str:
        label = self.description or "condition"
        status = "met" if self.succeeded else "timed out"
        text = f"{label} {status} after {self.attempts} attempt(s) in {self.elapsed_ms:.0f}ms"
        if not self.succeeded and self.last_error is not None:
            text += f" (last error: {type(self.last_error).__name__}: {self.last_error})"
        return text


def wait_until(
    predicate: Predicate,
    timeout_ms: float = DEFAULT_TIMEOUT_MS,
    poll_ms: float = DEFAULT_POLL_MS,
    *,
    sleep: Optional[Sleeper] = None,
    description: Optional[str] = None,
    raise_on_timeout: bool = False,
) -> WaitResult:
    """
    Poll ``predicate`` until it returns truthy or ``timeout_ms`` elapses.

    Args:
        predicate: zero-argument callable; exceptions it raises are treated
            as a falsy result and the last one is kept on the WaitResult.
        timeout_ms: wall-clock limit in milliseconds.
        poll_ms: pause between evaluations in milliseconds.
        sleep: callable taking milliseconds. Pass ``page.wait_for_timeout``
            when polling Playwright state so events keep being dispatched.
        description: label used in logs and in WaitTimeoutError.
        raise_on_timeout: raise WaitTimeoutError instead of returning a
            failed result.

    Returns:
        WaitResult
    """
    if timeout_ms < 0:
        raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")
    if poll_ms <= 0:
        raise ValueError(f"poll_ms must be > 0, got {poll_ms}")

    sleep = sleep or _default_sleep
    start = time.monotonic()
    deadline = start + timeout_ms / 1000.0
    attempts = 0
    last_error: Optional[BaseException] = None

    while True:
        attempts += 1
        try:
            if predicate():
                return WaitResult(
                    succeeded=True,
                    attempts=attempts,
                    elapsed_ms=(time.monotonic() - start) * 1000,
                    last_error=None,
                    description=description,
                )
        except Exception as e:
            last_error = e

        remaining_ms = (deadline - time.monotonic()) * 1000
        if remaining_ms <= 0:
            break
        sleep(min(poll_ms, remaining_ms))

    result = WaitResult(
        succeeded=False,
        attempts=attempts,
        elapsed_ms=(time.monotonic() - start) * 1000,
        last_error=last_error,
        description=description,
    )
    logger.debug(result.summary())
    if raise_on_timeout:
        raise WaitTimeoutError(result.summary(), result)
    return result
