"""
================================================================================
UI Automation Framework
================================================================================

Playwright-based action layer with fail-fast semantics.

Components:
    - session: browser session lifecycle
    - action_executor: start/success/failure telemetry and teardown on failure
    - screenshot: step-numbered screenshot capture
    - element_actions: element discovery and interactions

Author: Automation Team
License: MIT
================================================================================
"""

from .action_executor import ActionExecutor
from .element_actions import ElementActions
from .screenshot import ScreenshotCapturer
from .session import Session, SessionManager, SessionOptions

__all__ = [
    "ActionExecutor",
    "ElementActions",
    "ScreenshotCapturer",
    "Session",
    "SessionManager",
    "SessionOptions",
]
