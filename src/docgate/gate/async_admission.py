"""Admission gate for asyncio tasks.

Same fixed-window algorithm as the thread gate, with ``asyncio.Lock``
guarding each attempt and ``asyncio.sleep`` as the suspension point.
"""

import asyncio
import functools
import time
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from docgate.exceptions import AdmissionCancelledError
from docgate.gate.bucket import Bucket, BucketState
from docgate.gate.units import TimeUnit
from docgate.logger import get_logger

if TYPE_CHECKING:
    from docgate.config.profile import GateConfig

logger = get_logger(__name__)

T = TypeVar("T")


async def _wait_for_event(event: asyncio.Event, timeout: float) -> bool:
    """Return True if ``event`` is set within ``timeout`` seconds."""
    try:
        await asyncio.wait_for(event.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        return False
    return True


class AsyncAdmissionGate:
    """Admit at most ``capacity`` coroutines per window.

    A task cancelled while waiting receives ``asyncio.CancelledError`` and
    leaves the bucket untouched.

    Attributes:
        capacity: Maximum admissions per window.
        window: Refill period in seconds.
    """

    def __init__(
        self,
        window: float | timedelta,
        capacity: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """Create a gate with a full bucket.

        Args:
            window: Refill period in seconds or as a timedelta.
            capacity: Maximum admissions per window.
            clock: Monotonic time source.
            sleep: Awaitable sleep used when no cancel event is supplied.

        Raises:
            InvalidConfigurationError: If capacity or window is not positive.
        """
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._bucket = Bucket(capacity, window, clock())

        logger.info(
            "Async admission gate ready: capacity=%d, window=%.3fs",
            self._bucket.capacity,
            self._bucket.window,
        )

    @classmethod
    def per(
        cls, unit: TimeUnit | str, capacity: int, count: float = 1, **kwargs: Any
    ) -> "AsyncAdmissionGate":
        return cls(TimeUnit.parse(unit).to_seconds(count), capacity, **kwargs)

    @classmethod
    def from_config(cls, config: "GateConfig", **kwargs: Any) -> "AsyncAdmissionGate":
        return cls(config.window, config.capacity, **kwargs)

    @property
    def capacity(self) -> int:
        return self._bucket.capacity

    @property
    def window(self) -> float:
        return self._bucket.window

    @property
    def available_tokens(self) -> int:
        # Single-threaded event loop; no await between read and return
        return self._bucket.available_tokens

    @property
    def state(self) -> BucketState:
        return self._bucket.snapshot()

    async def acquire(self, cancel_event: asyncio.Event | None = None) -> None:
        """Suspend until a token is available, then consume it.

        Args:
            cancel_event: Optional event; setting it aborts a pending wait.

        Raises:
            AdmissionCancelledError: If ``cancel_event`` is set while waiting.
            asyncio.CancelledError: If the task is cancelled while waiting.
        """
        while True:
            async with self._lock:
                wait_time = self._bucket.try_consume(self._clock())

            if wait_time <= 0:
                return

            logger.debug("Admission pending: wait=%.3fs", wait_time)

            if cancel_event is None:
                await self._sleep(wait_time)
            elif await _wait_for_event(cancel_event, wait_time):
                logger.info("Admission cancelled while waiting")
                raise AdmissionCancelledError()

    async def call(
        self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        """Acquire admission, then await ``operation`` and return its result."""
        await self.acquire()
        return await operation(*args, **kwargs)

    def limit(
        self, func: Callable[..., Awaitable[T]]
    ) -> Callable[..., Awaitable[T]]:
        """Decorate a coroutine function so every call is admitted first."""

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await self.call(func, *args, **kwargs)

        return wrapper

    async def __aenter__(self) -> "AsyncAdmissionGate":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def __repr__(self) -> str:
        return f"AsyncAdmissionGate(window={self.window}, capacity={self.capacity})"
