"""
================================================================================
Action Executor
================================================================================

Runs a unit of browser work with uniform telemetry:

    STARTING ACTION -> work() -> ACTION SUCCESS (+ screenshot)
                              -> ACTION FAILED  (+ screenshot, teardown,
                                                 elapsed time, ActionFailure)

Every failure is fatal to the session: the browser is torn down before the
error reaches the caller. Each action is also reported as an Allure step.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, TypeVar

import allure
from loguru import logger

from webhelper.framework.exceptions import ActionFailure
from webhelper.framework.screenshot import ScreenshotCapturer

if TYPE_CHECKING:
    from webhelper.framework.session import Session


T = TypeVar("T")


class ActionExecutor:
    """
    Wraps actions against one Session.

    Example:
        executor = ActionExecutor(session)
        title = executor.execute("Getting the page title", session.page.title)
    """

    def __init__(self, session: "Session", capturer: Optional[ScreenshotCapturer] = None):
        self.session = session
        self.capturer = capturer or ScreenshotCapturer(session)

    def execute(
        self,
        description: str,
        work: Callable[[], T],
        screenshot: bool = True,
    ) -> T:
        """
        Run ``work`` and return its result.

        Args:
            description: Human-readable action description
            work: Callable doing the browser work
            screenshot: Capture a screenshot on success

        Raises:
            ActionFailure: ``work`` raised; the session has been torn down
        """
        description = description.strip()
        with allure.step(description):
            logger.info(f"STARTING ACTION: {description}")
            try:
                result = work()
            except ActionFailure:
                # A nested action already ran the failure sequence
                logger.error(f"ACTION FAILED: {description}")
                raise
            except Exception as e:
                self._fail(description, e)
                raise ActionFailure(description, str(e)) from e

            logger.info(f"ACTION SUCCESS: {description}")
            if screenshot:
                self._capture(f"{description} - SUCCESS")
            return result

    def execute_or_default(
        self,
        description: str,
        work: Callable[[], T],
        default: T = None,
    ) -> T:
        """
        Like execute(), but returns ``default`` instead of raising.

        The failure side effects (screenshot, teardown, elapsed time) still
        happen. Used by the read-only getters.
        """
        try:
            return self.execute(description, work)
        except ActionFailure as e:
            logger.warning(f"{description} returned {default!r} after failure: {e}")
            return default

    def _capture(self, label: str) -> None:
        if not (self.session.screenshots_enabled and self.session.is_live):
            return
        try:
            self.capturer.capture(label)
        except Exception as e:
            logger.error(f"Error while taking screenshot: {e}")

    def _fail(self, description: str, error: Exception) -> None:
        logger.error(f"ACTION FAILED: {description} - Error: {error}")
        self._capture(f"{description} - FAILED")

        if self.session.manager is not None:
            self.session.manager.teardown(self.session)
        else:
            try:
                self.session.close()
            except Exception as e:
                logger.error(f"Failed to close browser: {e}")

        logger.info(f"Total time spent: {self.session.elapsed():.3f} seconds")


__all__ = [
    "ActionExecutor",
]
