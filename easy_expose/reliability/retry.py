"""
Retry delay policy for the redirect supervisor.

The supervisor retries a failed redirect attempt forever, so the policy here
only decides how long to wait between attempts. The default is a fixed delay
with no jitter. Exponential backoff and jitter can be switched on through
configuration for hosts that are slow to come back.
"""

import random
from dataclasses import dataclass
from enum import Enum

from easy_expose.env import Env


class BackoffStrategy(Enum):
    """
    How the base delay grows with consecutive failures.

    FIXED: delay = base
    EXPONENTIAL: delay = min(cap, base * 2^attempt)
    """

    FIXED = "fixed"
    EXPONENTIAL = "exponential"


class JitterStrategy(Enum):
    """
    Jitter applied on top of the backoff delay.

    FULL: delay = random(0, delay)
    EQUAL: delay = delay/2 + random(0, delay/2)
    NONE: delay unchanged
    """

    FULL = "full"
    EQUAL = "equal"
    NONE = "none"


@dataclass(slots=True)
class RetryConfig:
    """Configuration for retry behavior."""

    base_delay: float = 10.0  # seconds
    max_delay: float = 600.0  # cap
    backoff: BackoffStrategy = BackoffStrategy.FIXED
    jitter: JitterStrategy = JitterStrategy.NONE

    @classmethod
    def from_env(cls, env: Env):
        return cls(
            base_delay=env.retry_delay,
            max_delay=env.retry_max_delay,
            backoff=BackoffStrategy(env.EASY_EXPOSE_RETRY_BACKOFF),
            jitter=JitterStrategy(env.EASY_EXPOSE_RETRY_JITTER),
        )


# keeps base_delay * 2**attempt a finite float
MAX_BACKOFF_EXPONENT = 62


def calculate_delay(
    attempt: int,
    config: RetryConfig,
) -> float:
    """
    Calculate the wait before the next attempt.

    Args:
        attempt: Zero-based count of consecutive failures before this wait
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    if config.backoff == BackoffStrategy.EXPONENTIAL:
        delay = min(config.max_delay, config.base_delay * (2 ** min(attempt, MAX_BACKOFF_EXPONENT)))

    else:
        delay = config.base_delay

    if config.jitter == JitterStrategy.FULL:
        return random.uniform(0, delay)

    elif config.jitter == JitterStrategy.EQUAL:
        return delay / 2 + random.uniform(0, delay / 2)

    return delay
