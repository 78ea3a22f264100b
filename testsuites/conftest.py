"""
================================================================================
Root Pytest Configuration
================================================================================

Registers project-wide markers and the report header.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "unit: Tests that run without a browser"
    )
    config.addinivalue_line(
        "markers", "browser: Tests that need a real Playwright browser"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the 'unit' marker to tests under testsuites/unit."""
    for item in items:
        if "unit" in Path(str(item.fspath)).parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "webhelper - config-driven browser automation",
        "=" * 60,
        "",
    ]
