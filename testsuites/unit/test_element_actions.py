import pytest

from webhelper.framework.element_actions import NOT_FOUND
from webhelper.framework.exceptions import (
    ActionFailure,
    ConfigPathError,
    ElementWaitTimeout,
    NoSuchWindowError,
    TextMismatchError,
)
from webhelper.locators.locator import LocatorDescriptor, LocatorKind

from fakes import FakeElement, FakeFrame

USERNAME = "id=user-input"
PASSWORD = 'css=[name="password"]'
SUBMIT = "css=button[type=submit]"
ROWS = 'css=[class~="row"]'


# ================================================================================
# Element discovery
# ================================================================================

def test_find_element_by_config_path(actions, page):
    page.add(USERNAME)

    locator = actions.find_element("login#username")

    assert locator.selector == USERNAME
    assert page.waits[-1] == (USERNAME, "attached", 200)


def test_find_element_by_descriptor(actions, page):
    page.add("css=.banner")
    locator = actions.find_element(LocatorDescriptor(LocatorKind.CSS, ".banner"))
    assert locator.selector == "css=.banner"


def test_find_element_timeout_is_fatal(actions, manager, teardown_calls):
    with pytest.raises(ActionFailure) as exc_info:
        actions.find_element("login#username")

    assert isinstance(exc_info.value.__cause__, ElementWaitTimeout)
    assert len(teardown_calls) == 1
    assert manager.session is None


def test_config_errors_propagate_without_teardown(actions, manager, teardown_calls):
    with pytest.raises(ConfigPathError):
        actions.find_element("login#missing")

    assert teardown_calls == []
    assert manager.session is not None


def test_find_elements_waits_for_all_visible(actions, page):
    page.add(ROWS, FakeElement(text="a"), FakeElement(text="b"))

    elements = actions.find_elements("results#rows")

    assert [e.inner_text() for e in elements] == ["a", "b"]


def test_find_elements_fails_when_one_is_hidden(actions, page, teardown_calls):
    page.add(ROWS, FakeElement(), FakeElement(visible=False))

    with pytest.raises(ActionFailure) as exc_info:
        actions.find_elements("results#rows")

    assert isinstance(exc_info.value.__cause__, ElementWaitTimeout)
    assert len(teardown_calls) == 1


def test_find_elements_fails_when_none_match(actions, teardown_calls):
    with pytest.raises(ActionFailure):
        actions.find_elements("results#rows")
    assert len(teardown_calls) == 1


# ================================================================================
# Navigation
# ================================================================================

def test_navigate_opens_url(actions, page):
    assert actions.navigate("https://example.com/login") is True
    assert page.gotos == ["https://example.com/login"]


def test_navigate_to_current_url_is_noop(actions, page, tmp_path):
    page.url = "https://example.com/login"

    assert actions.navigate("https://example.com/login") is True

    assert page.gotos == []
    assert page.screenshots == 0


def test_navigate_without_live_session_is_fatal(actions, manager):
    manager.teardown()
    with pytest.raises(ActionFailure):
        actions.navigate("https://example.com")


def test_wait_for_page_load(actions, page, teardown_calls):
    actions.wait_for_page_load()
    assert teardown_calls == []

    page.ready = False
    with pytest.raises(ActionFailure):
        actions.wait_for_page_load()
    assert len(teardown_calls) == 1


# ================================================================================
# Interactions
# ================================================================================

def test_click_by_path(actions, page):
    (button,) = page.add(SUBMIT)

    actions.click("login#submit")

    assert button.clicks == 1
    assert button.scrolled == 0


def test_click_handle_scrolls_into_view_first(actions, page):
    (button,) = page.add(SUBMIT)
    handle = page.locator(SUBMIT).first

    actions.click(handle)

    assert page.log == [("scroll", SUBMIT), ("click", SUBMIT)]
    assert button.clicks == 1


def test_click_missing_element_tears_down_once(actions, teardown_calls):
    with pytest.raises(ActionFailure):
        actions.click("login#submit")
    assert len(teardown_calls) == 1


def test_send_text_verifies_trimmed_value(actions, page):
    (field,) = page.add(USERNAME, FakeElement(echo=str.strip))

    actions.send_text("login#username", " hello ")

    assert field.value == "hello"


def test_send_text_mismatch_is_fatal(actions, page, teardown_calls):
    page.add(USERNAME, FakeElement(echo=lambda text: text[:3]))

    with pytest.raises(ActionFailure) as exc_info:
        actions.send_text("login#username", "hello")

    cause = exc_info.value.__cause__
    assert isinstance(cause, TextMismatchError)
    assert cause.expected == "hello"
    assert cause.actual == "hel"
    assert "Expected value: 'hello', Actual value: 'hel'" in str(exc_info.value)
    assert len(teardown_calls) == 1


def test_send_text_masks_password_in_description(actions, page, log_messages):
    page.add(PASSWORD)

    actions.send_text("login#password", "secret")

    assert not any("secret" in m for m in log_messages)
    assert any("value: ******" in m for m in log_messages)


def test_send_key_presses_without_readback(actions, page):
    (field,) = page.add(PASSWORD)

    actions.send_key("login#password", "Enter")

    assert field.keys == ["Enter"]
    assert field.value == ""


def test_get_text(actions, page):
    page.add(SUBMIT, FakeElement(text="Sign in"))
    assert actions.get_text("login#submit") == "Sign in"
    assert actions.get_text(page.locator(SUBMIT).first) == "Sign in"


def test_get_text_of_stale_handle_is_not_found(actions, page, teardown_calls):
    assert actions.get_text(page.locator("css=.gone").first) == NOT_FOUND
    assert teardown_calls == []


# ================================================================================
# Windows and frames
# ================================================================================

def test_switch_window(actions, session, page):
    popup = session._context.new_page()
    handles = actions.window_handles()

    actions.switch_window(handles[1])

    assert session.page is popup
    assert popup.fronted == 1
    assert actions.window_handle() == handles[1]


def test_switch_to_unknown_window_is_fatal(actions, teardown_calls):
    with pytest.raises(ActionFailure) as exc_info:
        actions.switch_window("no-such-handle")
    assert isinstance(exc_info.value.__cause__, NoSuchWindowError)
    assert len(teardown_calls) == 1


def test_switch_to_frame_and_back(actions, session, page):
    frame = FakeFrame()
    (inner,) = frame.add(SUBMIT)
    page.add("css=iframe", FakeElement(frame=frame))

    actions.switch_to_frame("login#frame")
    actions.click("login#submit")
    actions.switch_to_default_content()

    assert inner.clicks == 1
    assert session.scope is page


def test_switch_to_non_frame_element_is_fatal(actions, page, teardown_calls):
    page.add("css=iframe", FakeElement(frame=None))

    with pytest.raises(ActionFailure):
        actions.switch_to_frame(page.locator("css=iframe").first)
    assert len(teardown_calls) == 1


# ================================================================================
# Read-only getters
# ================================================================================

def test_getters(actions, page):
    page.url = "https://example.com/home"
    page.title_text = "Home"
    page.html = "<html><body>home</body></html>"

    assert actions.title() == "Home"
    assert actions.current_url() == "https://example.com/home"
    assert actions.page_source() == "<html><body>home</body></html>"
    assert len(actions.window_handles()) == 1
    assert actions.window_handle() == actions.window_handles()[0]


def test_getters_return_sentinels_after_teardown_side_effects(actions, manager, page, teardown_calls):
    def broken_title():
        raise RuntimeError("page crashed")

    page.title = broken_title

    assert actions.title() is None
    assert len(teardown_calls) == 1
    assert manager.session is None

    assert actions.current_url() is None
    assert actions.page_source() is None
    assert actions.window_handle() is None
    assert actions.window_handles() == []
