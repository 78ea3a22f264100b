# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Fixed-interval polling used by element discovery.
#
# Element waits block the caller: they poll at the session's poll interval
# until the condition holds or the session timeout is spent. There is no
# backoff and no partial result on timeout.
#
# Usage:
#   elements = poll_until(check_all_visible, timeout=10, interval=0.5,
#                         description="elements visible: css=.row")
#
# ================================================================================

import time
from typing import Callable, Tuple, TypeVar

from loguru import logger

from webhelper.framework.exceptions import ElementWaitTimeout


T = TypeVar('T')


def poll_until(
    check_fn: Callable[[], Tuple[bool, T]],
    timeout: float,
    interval: float = 0.5,
    description: str = "Waiting for condition",
) -> T:
    """
    Call ``check_fn`` until it reports success or ``timeout`` elapses.

    Args:
        check_fn: Function that returns (success: bool, result: T)
        timeout: Total time budget in seconds
        interval: Sleep between attempts in seconds
        description: Human-readable description for logging

    Returns:
        Result from check_fn when successful

    Raises:
        ElementWaitTimeout: If the condition never held within ``timeout``
    """
    deadline = time.monotonic() + timeout
    attempt = 0
    last_error = None

    while True:
        attempt += 1

        try:
            success, result = check_fn()
            if success:
                logger.debug(f"Wait successful after {attempt} attempts: {description}")
                return result
        except Exception as e:
            # Stale or detached elements are expected while the page changes
            last_error = str(e)
            logger.debug(f"Attempt {attempt} failed with error: {e}")

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            error_msg = (
                f"Timeout after {timeout}s waiting for: {description}. "
                f"Attempts: {attempt}, Last error: {last_error}"
            )
            logger.error(error_msg)
            raise ElementWaitTimeout(error_msg)

        time.sleep(min(interval, remaining))


__all__ = [
    "poll_until",
]
