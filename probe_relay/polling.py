from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union


@dataclass(frozen=True)
class PollPolicy:
    initial_delay_s: float
    attempt_timeout_s: float
    interval_s: float
    max_attempts: int


@dataclass(frozen=True)
class Found:
    value: Any
    attempts: int


@dataclass(frozen=True)
class Exhausted:
    attempts: int


PollResult = Union[Found, Exhausted]


def poll_until(
    fetch: Callable[[float], Optional[Any]],
    policy: PollPolicy,
) -> PollResult:
    """
    Wait ``initial_delay_s``, then call ``fetch(attempt_timeout_s)`` up to
    ``max_attempts`` times, sleeping ``interval_s`` between attempts.

    ``fetch`` returns None while the value is not ready. Exceptions raised by
    ``fetch`` propagate and end the loop.
    """
    time.sleep(policy.initial_delay_s)

    for attempt in range(1, policy.max_attempts + 1):
        value = fetch(policy.attempt_timeout_s)
        if value is not None:
            return Found(value=value, attempts=attempt)
        if attempt < policy.max_attempts:
            time.sleep(policy.interval_s)

    return Exhausted(attempts=max(policy.max_attempts, 0))
