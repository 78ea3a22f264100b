"""
================================================================================
webhelper
================================================================================

Config-driven browser automation helpers on top of Playwright.

Components:
    - locators: '#'-path config resolution and locator descriptors
    - framework: session lifecycle, action executor, screenshots, element actions
    - pages: config-path page objects
    - common: settings and logging

Author: Automation Team
License: MIT
================================================================================
"""

from webhelper.framework.element_actions import ElementActions
from webhelper.framework.exceptions import ActionFailure, ConfigPathError, WebHelperError
from webhelper.framework.session import Session, SessionManager, SessionOptions, acquire, teardown
from webhelper.locators.config_resolver import ConfigResolver
from webhelper.locators.locator import LocatorDescriptor, LocatorKind, build_locator

__version__ = "0.1.0"

__all__ = [
    "ElementActions",
    "ActionFailure",
    "ConfigPathError",
    "WebHelperError",
    "Session",
    "SessionManager",
    "SessionOptions",
    "acquire",
    "teardown",
    "ConfigResolver",
    "LocatorDescriptor",
    "LocatorKind",
    "build_locator",
]
