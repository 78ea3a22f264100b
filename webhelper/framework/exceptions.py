"""
================================================================================
Exceptions
================================================================================

Error taxonomy for the locator and action layers.

Two branches are kept apart on purpose:
    - ConfigPathError / UnsupportedLocatorTypeError: raised by the resolver,
      propagate directly to the caller with no side effects.
    - ActionFailure: raised by the action executor after its failure sequence
      (screenshot, teardown, elapsed-time log). Session-fatal.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class WebHelperError(Exception):
    """Base class for all webhelper errors."""
    pass


class ConfigLoadError(WebHelperError):
    """Raised when the configuration document cannot be read or parsed."""
    pass


class ConfigPathError(WebHelperError):
    """
    Raised when a '#'-delimited config path cannot be resolved.

    Attributes:
        path: The full path that was requested
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class NotAnObjectError(ConfigPathError):
    """A navigation segment does not lead to a nested object."""
    pass


class KeyNotFoundError(ConfigPathError):
    """The final field is missing from the resolved object."""
    pass


class TypeMismatchError(ConfigPathError):
    """The final field exists but is not a string."""
    pass


class UnsupportedLocatorTypeError(WebHelperError):
    """The locator 'type' field names a strategy that is not supported."""

    def __init__(self, locator_type: str, path: str = ""):
        super().__init__(f"Invalid locator type: '{locator_type}' (path: '{path}')")
        self.locator_type = locator_type
        self.path = path


class ElementWaitTimeout(WebHelperError):
    """Raised when an element did not reach the expected state in time."""
    pass


class TextMismatchError(WebHelperError):
    """Raised when the read-back value of an input differs from the sent value."""

    def __init__(self, target: str, expected: str, actual: str):
        super().__init__(
            f"Failed to send keys to element: {target}. "
            f"Expected value: '{expected}', Actual value: '{actual}'"
        )
        self.expected = expected
        self.actual = actual


class NoSuchWindowError(WebHelperError):
    """Raised when switching to a window handle that is not open."""
    pass


class SessionNotLiveError(WebHelperError):
    """Raised when an operation needs a live session and there is none."""
    pass


class ActionFailure(WebHelperError):
    """
    Fatal, non-retryable action failure.

    Raised only after the executor has logged the failure, attempted a
    screenshot and torn the session down. The original error is available
    as ``__cause__``.
    """

    def __init__(self, description: str, reason: Optional[str] = None):
        message = f"ACTION FAILED: {description}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.description = description


__all__ = [
    "WebHelperError",
    "ConfigLoadError",
    "ConfigPathError",
    "NotAnObjectError",
    "KeyNotFoundError",
    "TypeMismatchError",
    "UnsupportedLocatorTypeError",
    "ElementWaitTimeout",
    "TextMismatchError",
    "NoSuchWindowError",
    "SessionNotLiveError",
    "ActionFailure",
]
