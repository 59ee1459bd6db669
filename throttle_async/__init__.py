"""throttle_async - coalesce bursts of async calls into leading/trailing invocations.

Example:
    from throttle_async import throttle

    @throttle(0.1)
    async def save(doc):
        ...
"""

from loguru import logger

from throttle_async.errors import CANCELED, Superseded, ThrottleError
from throttle_async.logging import LogConfig, setup_logging, teardown_logging
from throttle_async.options import Computed, Fixed, ThrottleOptions, Wait, duration
from throttle_async.settle import settle
from throttle_async.throttle import Throttled, throttle
from throttle_async.window import Window

logger.disable("throttle_async")

__all__ = [
    # Controller
    "throttle",
    "Throttled",
    "Window",
    # Configuration
    "ThrottleOptions",
    "Wait",
    "Fixed",
    "Computed",
    "duration",
    # Errors
    "CANCELED",
    "ThrottleError",
    "Superseded",
    # Utilities
    "settle",
    # Logging
    "LogConfig",
    "setup_logging",
    "teardown_logging",
]
