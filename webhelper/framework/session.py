"""
================================================================================
Session Manager
================================================================================

Browser session lifecycle for webhelper.

A Session owns the Playwright driver (playwright, browser, context, page), the
wait timeout, the screenshot flag, the screenshot step counter and the start
timestamp. A SessionManager makes sure at most one Session is live at a time.

Usage:
    manager = SessionManager()
    session = manager.acquire(SessionOptions(timeout=5))
    actions = ElementActions(session)
    actions.navigate("https://example.com")
    manager.teardown()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Frame, Page, Playwright, sync_playwright

from webhelper.common.global_config import as_bool, get_config, init_logger
from webhelper.framework.exceptions import NoSuchWindowError, SessionNotLiveError, WebHelperError
from webhelper.locators.config_resolver import ConfigResolver


BROWSER_MODE_KEY = "browser-mode"


@dataclass
class SessionOptions:
    """
    Settings applied when a Session is created.

    Attributes:
        timeout: Element wait timeout in seconds
        screenshots: Capture a screenshot after every action
        browser_type: 'chromium', 'firefox' or 'webkit'
        poll_interval: Seconds between polls in element waits
        config_path: Locator document path (None uses the locators.file setting)
    """
    timeout: float = 10
    screenshots: bool = True
    browser_type: str = "chromium"
    poll_interval: float = 0.5
    config_path: Optional[str] = None

    @classmethod
    def from_config(cls) -> "SessionOptions":
        """Build options from the framework settings (config.yaml / env)."""
        return cls(
            timeout=float(get_config("session.timeout", 10)),
            screenshots=as_bool(get_config("session.screenshots", True)),
            browser_type=str(get_config("session.browser", "chromium")),
            poll_interval=float(get_config("session.poll_interval", 0.5)),
            config_path=get_config("locators.file", None),
        )


class Session:
    """
    One live browser automation context.

    Operations reach the page through ``scope``, which is the current frame
    after switch_to_frame() and the page otherwise.
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "args": ["--ignore-certificate-errors"],
    }

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        options: SessionOptions,
        headless: bool = False,
        manager: Optional["SessionManager"] = None,
    ):
        self.options = options
        self.headless = headless
        self.manager = manager

        self.timeout = options.timeout
        self.screenshots_enabled = options.screenshots
        self.step_count = 0
        self.started_at: Optional[float] = None

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self._frame: Optional[Frame] = None
        self._window_ids: List[tuple] = []

    def start(self) -> None:
        """Start Playwright and open the first page."""
        if self.page is not None:
            logger.info("Browser is already initialized. Skipping setup.")
            return

        self._playwright = sync_playwright().start()

        if self.options.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.options.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {**self.DEFAULT_LAUNCH_OPTIONS, "headless": self.headless}
        if self.options.browser_type != "chromium":
            launch_options.pop("args")

        self._browser = browser_launcher.launch(**launch_options)
        self._context = self._browser.new_context(**self.DEFAULT_CONTEXT_OPTIONS)
        self.page = self._context.new_page()
        self.started_at = time.monotonic()

        logger.debug(
            f"Browser started: {self.options.browser_type} "
            f"(headless={self.headless}, timeout={self.timeout}s)"
        )

    def close(self) -> None:
        """Close the driver. Fields are cleared even when closing raises."""
        try:
            if self._browser is not None:
                self._browser.close()
        finally:
            playwright = self._playwright
            self._playwright = None
            self._browser = None
            self._context = None
            self.page = None
            self._frame = None
            self._window_ids = []
            if playwright is not None:
                playwright.stop()

    @property
    def is_live(self) -> bool:
        return self.page is not None

    @property
    def has_driver(self) -> bool:
        return self._browser is not None or self._playwright is not None

    @property
    def scope(self):
        """Page or Frame that element lookups run against."""
        if self.page is None:
            raise SessionNotLiveError("Browser session is not live")
        return self._frame or self.page

    def elapsed(self) -> float:
        """Seconds since the browser was started."""
        if self.started_at is None:
            return 0.0
        return time.monotonic() - self.started_at

    def next_step(self) -> int:
        """Return the current step number and advance the counter."""
        step = self.step_count
        self.step_count += 1
        return step

    # =========================================================================
    # Windows and frames
    # =========================================================================

    def _pages(self) -> List[Page]:
        if self._context is None:
            raise SessionNotLiveError("Browser session is not live")
        return list(self._context.pages)

    def _handle_for(self, page: Page) -> str:
        for known, handle in self._window_ids:
            if known is page:
                return handle
        handle = uuid.uuid4().hex
        self._window_ids.append((page, handle))
        return handle

    def window_handle(self) -> str:
        """Stable id of the current page."""
        if self.page is None:
            raise SessionNotLiveError("Browser session is not live")
        return self._handle_for(self.page)

    def window_handles(self) -> List[str]:
        """Ids of every open page, in opening order."""
        pages = self._pages()
        self._window_ids = [(p, h) for p, h in self._window_ids if any(p is q for q in pages)]
        return [self._handle_for(page) for page in pages]

    def switch_window(self, handle: str) -> None:
        for page in self._pages():
            if self._handle_for(page) == handle:
                self.page = page
                self._frame = None
                page.bring_to_front()
                return
        raise NoSuchWindowError(f"No open window with handle: {handle}")

    def enter_frame(self, frame: Frame) -> None:
        if self.page is None:
            raise SessionNotLiveError("Browser session is not live")
        self._frame = frame

    def leave_frames(self) -> None:
        if self.page is None:
            raise SessionNotLiveError("Browser session is not live")
        self._frame = None


class SessionManager:
    """
    Creates and tears down the shared Session.

    acquire() and teardown() are guarded by one re-entrant lock, so only one
    caller can build a Session; the executor may tear down from inside
    acquire() when the browser fails to start.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._session: Optional[Session] = None

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_live(self) -> bool:
        return self._session is not None

    def acquire(self, options: Optional[SessionOptions] = None) -> Session:
        """
        Return the live Session, creating it first if there is none.

        Options passed while a Session is already live are ignored; a warning
        is logged when they differ from the live Session's options.
        """
        # Imported here: the executor module imports this one for typing.
        from webhelper.framework.action_executor import ActionExecutor

        init_logger()

        with self._lock:
            if self._session is not None:
                logger.info("Session already exists. Returning existing instance.")
                if options is not None and options != self._session.options:
                    logger.warning(
                        f"Ignoring options for already live session: {options} "
                        f"(live: {self._session.options})"
                    )
                return self._session

            options = options or SessionOptions.from_config()
            logger.info(f"Creating session with options: {options}")

            session = Session(options, headless=self._read_headless(options), manager=self)
            self._session = session
            ActionExecutor(session).execute("Setting up browser", session.start, screenshot=False)
            logger.info("Session created.")
            return session

    def teardown(self, session: Optional[Session] = None) -> None:
        """
        Close a Session's driver.

        Args:
            session: Session to close. Defaults to the live Session. A Session
                that is no longer the live one is closed on its own and the
                live Session is left untouched.
        """
        action = "Quitting browser"
        with self._lock:
            if session is not None and session is not self._session:
                logger.info(f"STARTING ACTION: {action} (stale session)")
                if not session.has_driver:
                    logger.warning("Browser session is not live. No action taken.")
                    return
                try:
                    session.close()
                    logger.info(f"ACTION SUCCESS: {action} (stale session)")
                except Exception as e:
                    logger.error(f"ACTION FAILED: {action} - Error: {e}")
                return

            session = self._session
            try:
                logger.info(f"STARTING ACTION: {action}")
                if session is not None and session.has_driver:
                    session.close()
                    logger.info(f"ACTION SUCCESS: {action}")
                else:
                    logger.warning("Browser session is not live. No action taken.")
            except Exception as e:
                logger.error(f"ACTION FAILED: {action} - Error: {e}")
            finally:
                self._session = None

    @staticmethod
    def _read_headless(options: SessionOptions) -> bool:
        try:
            browser_mode = ConfigResolver(options.config_path).resolve(BROWSER_MODE_KEY)
        except WebHelperError:
            logger.info(f"{BROWSER_MODE_KEY} not set in config. Starting browser in non-headless mode")
            return False
        return browser_mode == "headless"


# Process-wide manager for callers that do not keep their own
default_manager = SessionManager()


def acquire(options: Optional[SessionOptions] = None) -> Session:
    return default_manager.acquire(options)


def teardown(session: Optional[Session] = None) -> None:
    default_manager.teardown(session)


__all__ = [
    "SessionOptions",
    "Session",
    "SessionManager",
    "default_manager",
    "acquire",
    "teardown",
]
