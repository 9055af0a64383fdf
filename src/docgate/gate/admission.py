"""Thread-safe admission gate.

Callers block in ``acquire`` until the gate's bucket has a token for them.
Each attempt runs under a lock; waiting for the next window happens after
the lock is released so other threads can check, refill or consume.
"""

import functools
import threading
import time
from collections.abc import Callable
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


class AdmissionGate:
    """Admit at most ``capacity`` operations per window across threads.

    Share one instance between every component that draws on the same
    quota; each gate owns its own bucket.

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
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Create a gate with a full bucket.

        Args:
            window: Refill period in seconds or as a timedelta.
            capacity: Maximum admissions per window.
            clock: Monotonic time source.
            sleep: Blocking sleep used when no cancel event is supplied.

        Raises:
            InvalidConfigurationError: If capacity or window is not positive.
        """
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._bucket = Bucket(capacity, window, clock())

        logger.info(
            "Admission gate ready: capacity=%d, window=%.3fs",
            self._bucket.capacity,
            self._bucket.window,
        )

    @classmethod
    def per(
        cls, unit: TimeUnit | str, capacity: int, count: float = 1, **kwargs: Any
    ) -> "AdmissionGate":
        """Build a gate admitting ``capacity`` calls per ``count`` units.

        Example:
            >>> gate = AdmissionGate.per(TimeUnit.SECOND, 5)
        """
        return cls(TimeUnit.parse(unit).to_seconds(count), capacity, **kwargs)

    @classmethod
    def from_config(cls, config: "GateConfig", **kwargs: Any) -> "AdmissionGate":
        return cls(config.window, config.capacity, **kwargs)

    @property
    def capacity(self) -> int:
        return self._bucket.capacity

    @property
    def window(self) -> float:
        return self._bucket.window

    @property
    def available_tokens(self) -> int:
        with self._lock:
            return self._bucket.available_tokens

    @property
    def state(self) -> BucketState:
        with self._lock:
            return self._bucket.snapshot()

    def acquire(self, cancel_event: threading.Event | None = None) -> None:
        """Block until a token is available, then consume it.

        Args:
            cancel_event: Optional event; setting it aborts a pending wait.

        Raises:
            AdmissionCancelledError: If ``cancel_event`` is set while waiting.
                No token is consumed in that case.
        """
        while True:
            with self._lock:
                wait_time = self._bucket.try_consume(self._clock())

            if wait_time <= 0:
                return

            logger.debug("Admission pending: wait=%.3fs", wait_time)

            if cancel_event is None:
                self._sleep(wait_time)
            elif cancel_event.wait(wait_time):
                logger.info("Admission cancelled while waiting")
                raise AdmissionCancelledError()

    def call(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Acquire admission, then run ``operation`` and return its result.

        Exceptions raised by the operation propagate unchanged; the token
        stays consumed.
        """
        self.acquire()
        return operation(*args, **kwargs)

    def limit(self, func: Callable[..., T]) -> Callable[..., T]:
        """Decorate ``func`` so every call is admitted through this gate."""

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return self.call(func, *args, **kwargs)

        return wrapper

    def __enter__(self) -> "AdmissionGate":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def __repr__(self) -> str:
        return f"AdmissionGate(window={self.window}, capacity={self.capacity})"
