"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Elements are addressed by config path instead of raw selectors, so a page
object only knows the names defined in the locator document:

    {
        "login": {
            "username": {"type": "id", "locator": "user-input"},
            "password": {"type": "name", "locator": "password"},
            "submit":   {"type": "css", "locator": "button[type=submit]"}
        }
    }

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import List, Optional

from loguru import logger
from playwright.sync_api import Locator

from webhelper.framework.element_actions import ElementActions
from webhelper.locators.config_resolver import PATH_DELIMITER


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"
            SECTION = "login"

            def login(self, username: str, password: str) -> None:
                self.fill("username", username)
                self.fill("password", password)
                self.click("submit")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    # Config path prefix for this page's elements ("" means absolute paths)
    SECTION: str = ""

    def __init__(self, actions: ElementActions, base_url: str = ""):
        """
        Initialize page object.

        Args:
            actions: ElementActions bound to the live session
            base_url: Base URL for the application
        """
        self.actions = actions
        if not base_url:
            # Demo-safe default. Real deployments should override via config/env.
            base_url = os.getenv("UI_BASE_URL", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def path(self, name: str) -> str:
        """Full config path of an element of this page."""
        if not self.SECTION:
            return name
        return f"{self.SECTION}{PATH_DELIMITER}{name}"

    def open(self) -> "BasePage":
        """Navigate to this page and wait for it to load."""
        self.actions.navigate(self.url)
        self.actions.wait_for_page_load()
        logger.debug(f"Opened page: {self.url}")
        return self

    def element(self, name: str) -> Locator:
        return self.actions.find_element(self.path(name))

    def elements(self, name: str) -> List[Locator]:
        return self.actions.find_elements(self.path(name))

    def click(self, name: str) -> None:
        self.actions.click(self.path(name))

    def fill(self, name: str, value: str) -> None:
        self.actions.send_text(self.path(name), value)

    def press(self, name: str, key: str) -> None:
        self.actions.send_key(self.path(name), key)

    def text(self, name: str) -> str:
        return self.actions.get_text(self.path(name))

    def is_current(self) -> bool:
        """True when the browser is on this page's URL."""
        current: Optional[str] = self.actions.current_url()
        return current is not None and current.startswith(self.url)


__all__ = [
    "BasePage",
]
