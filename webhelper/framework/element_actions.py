# ================================================================================
# Element Actions Module
# ================================================================================
#
# Browser interactions built on the action executor.
#
# Key Features:
#   - Element discovery with bounded waits (single element / all visible)
#   - Click, text entry with read-back verification, key presses
#   - Navigation, window and frame switching
#   - Read-only page getters that return a sentinel on failure
#
# Targets can be given as a LocatorDescriptor, as a config path
# ("login#username") resolved through ConfigResolver, or, where noted, as an
# already found Playwright Locator.
#
# Any failure tears the session down (see ActionExecutor). Config path errors
# are raised before the action starts and leave the session untouched.
#
# ================================================================================

from typing import List, Optional, Union

from loguru import logger
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from webhelper.framework.action_executor import ActionExecutor
from webhelper.framework.exceptions import (
    ElementWaitTimeout,
    SessionNotLiveError,
    TextMismatchError,
    WebHelperError,
)
from webhelper.framework.session import Session
from webhelper.framework.wait_helpers import poll_until
from webhelper.locators.config_resolver import ConfigResolver
from webhelper.locators.locator import LocatorDescriptor, build_locator


Target = Union[LocatorDescriptor, str]

NOT_FOUND = "NOT FOUND"


class ElementActions:
    """
    Element and page operations against one Session.

    Example:
        actions = ElementActions(session)
        actions.navigate("https://example.com/login")
        actions.send_text("login#username", "demo_user")
        actions.send_key("login#password", "Enter")
    """

    def __init__(
        self,
        session: Session,
        resolver: Optional[ConfigResolver] = None,
        executor: Optional[ActionExecutor] = None,
    ):
        """
        Args:
            session: Live session to operate on
            resolver: Resolver for config path targets. Defaults to the
                session's configured locator document.
            executor: Action executor. Defaults to one bound to ``session``.
        """
        self.session = session
        self.resolver = resolver or ConfigResolver(session.options.config_path)
        self.executor = executor or ActionExecutor(session)

    @property
    def timeout_ms(self) -> int:
        return int(self.session.timeout * 1000)

    def _page(self) -> Page:
        if self.session.page is None:
            raise SessionNotLiveError("Browser session is not live")
        return self.session.page

    def descriptor(self, target: Target) -> LocatorDescriptor:
        """Resolve a config path to a descriptor; descriptors pass through."""
        if isinstance(target, LocatorDescriptor):
            return target
        return build_locator(self.resolver, target)

    # =========================================================================
    # Element discovery
    # =========================================================================

    def find_element(self, target: Target) -> Locator:
        """
        Wait until the first match is attached to the document.

        Raises:
            ActionFailure: Not present within the session timeout
        """
        descriptor = self.descriptor(target)

        def work() -> Locator:
            locator = self.session.scope.locator(descriptor.selector).first
            try:
                locator.wait_for(state="attached", timeout=self.timeout_ms)
            except PlaywrightTimeout as e:
                raise ElementWaitTimeout(
                    f"Element not present after {self.session.timeout}s: {descriptor}"
                ) from e
            return locator

        return self.executor.execute(f"Finding element: {descriptor}", work)

    def find_elements(self, target: Target) -> List[Locator]:
        """
        Wait until at least one element matches and every match is visible.

        Raises:
            ActionFailure: Condition not met within the session timeout
        """
        descriptor = self.descriptor(target)

        def check_all_visible():
            locator = self.session.scope.locator(descriptor.selector)
            elements = [locator.nth(i) for i in range(locator.count())]
            return bool(elements) and all(e.is_visible() for e in elements), elements

        def work() -> List[Locator]:
            return poll_until(
                check_all_visible,
                timeout=self.session.timeout,
                interval=self.session.options.poll_interval,
                description=f"all elements visible: {descriptor}",
            )

        return self.executor.execute(f"Finding elements: {descriptor}", work)

    # =========================================================================
    # Interactions
    # =========================================================================

    def navigate(self, url: str) -> bool:
        """Open ``url`` unless the current page is already there."""
        action = f"Navigating to URL: {url}"
        if self.session.is_live and self.session.page.url == url:
            logger.info(f"{action} - URL already loaded. No action taken.")
            return True

        self.executor.execute(action, lambda: self._page().goto(url))
        return True

    def wait_for_page_load(self) -> None:
        """Wait for document.readyState to become 'complete'."""
        self.executor.execute(
            "Waiting for page to load",
            lambda: self._page().wait_for_function(
                "() => document.readyState === 'complete'", timeout=self.timeout_ms
            ),
        )

    def click(self, target: Union[Target, Locator]) -> None:
        """
        Click an element.

        A descriptor or config path is located first; a Locator is scrolled
        into view and clicked directly.
        """
        if isinstance(target, (LocatorDescriptor, str)):
            descriptor = self.descriptor(target)
            self.executor.execute(
                f"Clicking element: {descriptor}",
                lambda: self.find_element(descriptor).click(),
            )
            return

        def click_handle() -> None:
            target.scroll_into_view_if_needed()
            target.click()

        self.executor.execute("Clicking on a specified web element", click_handle)

    def send_text(self, target: Target, value: str) -> None:
        """
        Type ``value`` into an input and verify it by reading it back.

        Both values are trimmed before comparing. A mismatch is fatal; there
        is no second attempt.
        """
        descriptor = self.descriptor(target)
        shown = "*" * len(value) if "password" in str(target).lower() else value

        def work() -> None:
            element = self.find_element(descriptor)
            element.press_sequentially(value)

            # Re-find the element so the value is read from the live DOM
            element = self.find_element(descriptor)
            actual = (element.input_value() or "").strip()
            expected = value.strip()
            if actual != expected:
                raise TextMismatchError(str(descriptor), expected, actual)

        self.executor.execute(f"Sending keys to element: {descriptor}, value: {shown}", work)

    def send_key(self, target: Target, key: str) -> None:
        """Press a single key (e.g. "Enter", "Tab") on an element."""
        descriptor = self.descriptor(target)
        self.executor.execute(
            f"Sending keys to element: {descriptor}, value: {key}",
            lambda: self.find_element(descriptor).press(key),
        )

    def get_text(self, target: Union[Target, Locator]) -> str:
        """Visible text of an element, or "NOT FOUND"."""
        try:
            if isinstance(target, (LocatorDescriptor, str)):
                target = self.find_element(target)
            return target.inner_text(timeout=self.timeout_ms)
        except Exception as e:
            logger.debug(f"Could not read text of {target}: {e}")
            return NOT_FOUND

    # =========================================================================
    # Windows and frames
    # =========================================================================

    def switch_window(self, handle: str) -> None:
        self.executor.execute(
            f"Switching to window with handle: {handle}",
            lambda: self.session.switch_window(handle),
        )

    def switch_to_frame(self, frame: Union[Target, Locator]) -> None:
        """Scope element lookups to the document of an <iframe> element."""

        def work() -> None:
            element = self.find_element(frame) if isinstance(frame, (LocatorDescriptor, str)) else frame
            content = element.element_handle().content_frame()
            if content is None:
                raise WebHelperError(f"Element is not a frame: {frame}")
            self.session.enter_frame(content)

        self.executor.execute(f"Switching to frame: {frame}", work)

    def switch_to_default_content(self) -> None:
        self.executor.execute("Switching to default content", self.session.leave_frames)

    # =========================================================================
    # Read-only getters
    #
    # These keep the failure side effects (screenshot, teardown) but return a
    # sentinel instead of raising.
    # =========================================================================

    def title(self) -> Optional[str]:
        return self.executor.execute_or_default(
            "Getting the page title", lambda: self._page().title()
        )

    def current_url(self) -> Optional[str]:
        return self.executor.execute_or_default(
            "Getting current URL", lambda: self._page().url
        )

    def page_source(self) -> Optional[str]:
        return self.executor.execute_or_default(
            "Getting page source", lambda: self._page().content()
        )

    def window_handle(self) -> Optional[str]:
        return self.executor.execute_or_default(
            "Getting the current window handle", self.session.window_handle
        )

    def window_handles(self) -> List[str]:
        return self.executor.execute_or_default(
            "Getting all window handles", self.session.window_handles, default=[]
        )


__all__ = [
    "ElementActions",
    "NOT_FOUND",
]
