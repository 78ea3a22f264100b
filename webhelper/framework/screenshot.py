"""
================================================================================
Screenshot Capturer
================================================================================

Step-numbered screenshots for action telemetry.

Files are named ``Step_{n}_{label}_{yyyy-MM-dd_HH-mm-ss}.png`` where ``n`` is
the session's step counter. Capture never raises: every problem is logged and
reported as a ``None`` return.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import allure
from loguru import logger

from webhelper.common.global_config import get_config

if TYPE_CHECKING:
    from webhelper.framework.session import Session


_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\-_]+")
_REPEATED_UNDERSCORES = re.compile(r"_+")


def sanitize_label(label: str) -> str:
    """Make ``label`` safe for use in a file name."""
    normalized = _UNSAFE_CHARS.sub("_", label)
    normalized = _REPEATED_UNDERSCORES.sub("_", normalized)
    return normalized.strip("_")


class ScreenshotCapturer:
    """Writes screenshots of a session's current page."""

    def __init__(
        self,
        session: "Session",
        directory: Optional[Union[str, Path]] = None,
    ):
        self.session = session
        self.directory = Path(directory or get_config("screenshots.dir", "screenshots"))

    def screenshot_name(self, label: str) -> str:
        """Next file name; advances the session's step counter."""
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        return f"Step_{self.session.next_step()}_{sanitize_label(label)}_{timestamp}.png"

    def capture(self, label: str) -> Optional[Path]:
        """
        Save a screenshot of the current page.

        Args:
            label: Free-form description, sanitized into the file name

        Returns:
            Absolute path of the written file, or None if nothing was written
        """
        if not self.session.screenshots_enabled:
            logger.info(f"Screenshot capturing is disabled for action: {label}")
            return None
        if not self.session.is_live:
            logger.debug(f"No live session, skipping screenshot for action: {label}")
            return None

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create screenshots directory: {self.directory} ({e})")
            return None

        filepath = (self.directory / self.screenshot_name(label)).absolute()
        try:
            data = self.session.page.screenshot()
            filepath.write_bytes(data)
        except Exception as e:
            logger.error(f"Failed to save screenshot for action '{label}': {e}")
            return None

        allure.attach(data, name=filepath.stem, attachment_type=allure.attachment_type.PNG)
        logger.info(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "sanitize_label",
    "ScreenshotCapturer",
]
