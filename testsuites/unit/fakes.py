"""
In-memory stand-ins for the Playwright sync API.

A FakePage holds a tiny "DOM": a mapping of selector -> list of FakeElement.
Tests add elements with `page.add(selector, ...)`.
"""

from typing import Dict, List, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeout


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


class FakeElement:
    def __init__(self, text="", value="", visible=True, frame=None, echo=None):
        self.text = text
        self.value = value
        self.visible = visible
        self.frame = frame
        # Optional transform applied to typed text (simulates inputs that alter values)
        self.echo = echo
        self.clicks = 0
        self.scrolled = 0
        self.keys: List[str] = []


class FakeElementHandle:
    def __init__(self, element: FakeElement):
        self._element = element

    def content_frame(self):
        return self._element.frame


class FakeLocator:
    def __init__(self, scope: "FakeScope", selector: str, index: Optional[int] = None):
        self.scope = scope
        self.selector = selector
        self.index = index

    def _matches(self) -> List[FakeElement]:
        return self.scope.elements.get(self.selector, [])

    def _element(self) -> FakeElement:
        matches = self._matches()
        index = self.index or 0
        if index >= len(matches):
            raise PlaywrightTimeout(f"Timeout waiting for {self.selector}")
        return matches[index]

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.scope, self.selector, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.scope, self.selector, index)

    def count(self) -> int:
        return len(self._matches())

    def wait_for(self, state="visible", timeout=None):
        self.scope.waits.append((self.selector, state, timeout))
        self._element()

    def is_visible(self) -> bool:
        return self._element().visible

    def click(self):
        self._element().clicks += 1
        self.scope.log.append(("click", self.selector))

    def scroll_into_view_if_needed(self):
        self._element().scrolled += 1
        self.scope.log.append(("scroll", self.selector))

    def press_sequentially(self, text: str):
        element = self._element()
        typed = element.echo(text) if element.echo else text
        element.value += typed

    def input_value(self) -> str:
        return self._element().value

    def press(self, key: str):
        self._element().keys.append(key)

    def inner_text(self, timeout=None) -> str:
        return self._element().text

    def element_handle(self) -> FakeElementHandle:
        return FakeElementHandle(self._element())


class FakeScope:
    """Common lookup behaviour of pages and frames."""

    def __init__(self):
        self.elements: Dict[str, List[FakeElement]] = {}
        self.waits: list = []
        self.log: list = []

    def add(self, selector: str, *elements: FakeElement) -> List[FakeElement]:
        items = list(elements) or [FakeElement()]
        self.elements.setdefault(selector, []).extend(items)
        return items

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)


class FakeFrame(FakeScope):
    pass


class FakePage(FakeScope):
    def __init__(self, url: str = "about:blank"):
        super().__init__()
        self.url = url
        self.title_text = "Fake Page"
        self.html = "<html></html>"
        self.gotos: List[str] = []
        self.screenshot_error: Optional[Exception] = None
        self.screenshots = 0
        self.fronted = 0
        self.ready = True

    def goto(self, url: str):
        self.gotos.append(url)
        self.url = url

    def title(self) -> str:
        return self.title_text

    def content(self) -> str:
        return self.html

    def screenshot(self) -> bytes:
        self.screenshots += 1
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return PNG_BYTES

    def bring_to_front(self):
        self.fronted += 1

    def wait_for_function(self, expression, timeout=None):
        if not self.ready:
            raise PlaywrightTimeout("Timeout waiting for function")


class FakeContext:
    def __init__(self, options):
        self.options = options
        self.pages: List[FakePage] = []

    def new_page(self) -> FakePage:
        page = FakePage()
        self.pages.append(page)
        return page


class FakeBrowser:
    def __init__(self, launch_options):
        self.launch_options = launch_options
        self.contexts: List[FakeContext] = []
        self.closed = 0
        self.close_error: Optional[Exception] = None

    def new_context(self, **options) -> FakeContext:
        context = FakeContext(options)
        self.contexts.append(context)
        return context

    def close(self):
        self.closed += 1
        if self.close_error is not None:
            raise self.close_error


class FakeLauncher:
    def __init__(self, name: str):
        self.name = name
        self.browsers: List[FakeBrowser] = []
        self.launch_error: Optional[Exception] = None

    def launch(self, **options) -> FakeBrowser:
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(options)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self):
        self.chromium = FakeLauncher("chromium")
        self.firefox = FakeLauncher("firefox")
        self.webkit = FakeLauncher("webkit")
        self.starts = 0
        self.stops = 0

    def stop(self):
        self.stops += 1

    @property
    def launches(self) -> int:
        return sum(len(l.browsers) for l in (self.chromium, self.firefox, self.webkit))


class FakePlaywrightContextManager:
    def __init__(self, playwright: FakePlaywright):
        self._playwright = playwright

    def start(self) -> FakePlaywright:
        self._playwright.starts += 1
        return self._playwright

