"""
Request throttling for catalog calls.

A fixed delay applied before each collection detail fetch keeps the
request rate against the catalog API low. Sequential traversal makes a
plain sleep sufficient.
"""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_DELAY = 0.1


class RequestThrottle:
    """
    Fixed inter-request delay.

    Attributes:
        delay: Seconds to wait on every call to wait() (0 disables)
    """

    def __init__(
        self,
        delay: float = DEFAULT_REQUEST_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the throttle.

        Args:
            delay: Seconds to wait before each throttled request
            sleep: Sleep function (injected by tests)

        Raises:
            ValueError: If delay is negative
        """
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay
        self._sleep = sleep

    def wait(self) -> None:
        """Block for the configured delay."""
        if self.delay > 0:
            logger.debug(f"Throttling for {self.delay:.2f}s")
            self._sleep(self.delay)
