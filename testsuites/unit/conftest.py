"""
================================================================================
Unit Test Configuration
================================================================================

Fixtures wiring the fake Playwright objects (see fakes.py) into real
SessionManager / ElementActions instances, so the session, executor and
element action layers run without a browser.

================================================================================
"""

import json
from pathlib import Path
from typing import List

import pytest
from loguru import logger

from webhelper.common.global_config import init_logger
from webhelper.framework.element_actions import ElementActions
from webhelper.framework.session import SessionManager, SessionOptions

from fakes import FakePage, FakePlaywright, FakePlaywrightContextManager


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(scope="session", autouse=True)
def _logging_initialized():
    """Configure loguru once, before any test adds its own sink."""
    init_logger()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Run each test in its own directory so screenshots land in tmp_path."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_playwright(monkeypatch) -> FakePlaywright:
    playwright = FakePlaywright()
    monkeypatch.setattr(
        "webhelper.framework.session.sync_playwright",
        lambda: FakePlaywrightContextManager(playwright),
    )
    return playwright


@pytest.fixture
def locator_document() -> dict:
    return {
        "login": {
            "username": {"type": "id", "locator": "user-input"},
            "password": {"type": "name", "locator": "password"},
            "submit": {"type": "css", "locator": "button[type=submit]"},
            "frame": {"type": "tagname", "locator": "iframe"},
        },
        "results": {
            "rows": {"type": "classname", "locator": "row"},
        },
    }


@pytest.fixture
def config_file(tmp_path, locator_document) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(locator_document), encoding="utf-8")
    return path


@pytest.fixture
def options(config_file) -> SessionOptions:
    return SessionOptions(timeout=0.2, poll_interval=0.01, config_path=str(config_file))


@pytest.fixture
def manager():
    manager = SessionManager()
    yield manager
    manager.teardown()


@pytest.fixture
def session(manager, fake_playwright, options):
    return manager.acquire(options)


@pytest.fixture
def page(session) -> FakePage:
    return session.page


@pytest.fixture
def actions(session) -> ElementActions:
    return ElementActions(session)


@pytest.fixture
def teardown_calls(manager, monkeypatch) -> list:
    """Records every SessionManager.teardown call on ``manager``."""
    calls = []
    original = manager.teardown

    def counting_teardown(session=None):
        calls.append(session or manager.session)
        original(session)

    monkeypatch.setattr(manager, "teardown", counting_teardown)
    return calls


@pytest.fixture
def log_messages():
    """Collects loguru records as 'LEVEL message' strings."""
    messages: List[str] = []
    sink_id = logger.add(lambda m: messages.append(f"{m.record['level'].name} {m.record['message']}"))
    yield messages
    logger.remove(sink_id)
