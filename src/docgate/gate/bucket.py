"""Admission bucket state shared by the thread and asyncio gates.

The bucket is a fixed-window counter with a token-bucket shaped API: it
starts full, each admission takes one token, and once a whole window has
elapsed since the last refill an empty bucket is reset to full capacity.
Refills are never proportional to elapsed time, so up to twice the
capacity can be admitted around a window boundary.

The bucket itself is not synchronized. Gates call ``try_consume`` while
holding their own lock and do any waiting after releasing it.
"""

import math
from datetime import timedelta
from numbers import Real

from pydantic import BaseModel, ConfigDict, Field

from docgate.exceptions import InvalidConfigurationError
from docgate.logger import get_logger

logger = get_logger(__name__)


class BucketState(BaseModel):
    """Point-in-time view of a bucket.

    Attributes:
        capacity: Maximum admissions per window.
        window: Refill period in seconds.
        available_tokens: Tokens left in the current window.
        last_refill: Monotonic timestamp of the last refill.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    capacity: int = Field(..., gt=0)
    window: float = Field(..., gt=0)
    available_tokens: int = Field(..., ge=0)
    last_refill: float


def validate_capacity(capacity: object) -> int:
    """Return ``capacity`` if it is a positive integer.

    Raises:
        InvalidConfigurationError: If capacity is not a positive int.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidConfigurationError(
            f"Capacity must be an integer, got {type(capacity).__name__}",
            field_path="capacity",
        )
    if capacity <= 0:
        raise InvalidConfigurationError(
            f"Capacity must be positive, got {capacity}", field_path="capacity"
        )
    return capacity


def validate_window(window: object) -> float:
    """Normalize a window given in seconds or as a timedelta.

    Returns:
        Window length in seconds.

    Raises:
        InvalidConfigurationError: If the window is not a finite positive duration.
    """
    if isinstance(window, timedelta):
        seconds = window.total_seconds()
    elif isinstance(window, Real) and not isinstance(window, bool):
        seconds = float(window)
    else:
        raise InvalidConfigurationError(
            f"Window must be seconds or a timedelta, got {type(window).__name__}",
            field_path="window",
        )

    if not math.isfinite(seconds) or seconds <= 0:
        raise InvalidConfigurationError(
            f"Window must be a positive duration, got {seconds}s",
            field_path="window",
        )
    return seconds


class Bucket:
    """Token counter with full reset at window boundaries.

    Attributes:
        capacity: Maximum admissions per window.
        window: Refill period in seconds.
        available_tokens: Tokens left, always within 0..capacity.
        last_refill: Monotonic timestamp of the last refill.
    """

    def __init__(self, capacity: int, window: float | timedelta, started_at: float):
        """Create a full bucket.

        Args:
            capacity: Maximum admissions per window.
            window: Refill period in seconds or as a timedelta.
            started_at: Monotonic time the first window starts at.

        Raises:
            InvalidConfigurationError: If capacity or window is not positive.
        """
        self.capacity = validate_capacity(capacity)
        self.window = validate_window(window)
        self.available_tokens = self.capacity
        self.last_refill = started_at

    def try_consume(self, now: float) -> float:
        """Run one admission attempt at time ``now``.

        Args:
            now: Current monotonic time.

        Returns:
            0.0 if a token was taken, otherwise the seconds left until the
            current window ends. State is untouched when a wait is returned.
        """
        if self.available_tokens > 0:
            self.available_tokens -= 1
            return 0.0

        elapsed = now - self.last_refill
        if elapsed >= self.window:
            logger.debug(
                "Bucket refilled: capacity=%d, elapsed=%.3fs", self.capacity, elapsed
            )
            self.available_tokens = self.capacity - 1
            self.last_refill = now
            return 0.0

        return self.window - elapsed

    def snapshot(self) -> BucketState:
        return BucketState(
            capacity=self.capacity,
            window=self.window,
            available_tokens=self.available_tokens,
            last_refill=self.last_refill,
        )

    def __repr__(self) -> str:
        return (
            f"Bucket(capacity={self.capacity}, window={self.window}, "
            f"available_tokens={self.available_tokens})"
        )
