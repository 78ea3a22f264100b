"""
Repository-level pytest configuration.

Keeps local runs predictable:
  - demo-safe defaults for the environment variables page objects read
  - no dependence on a developer's own config/config.yaml overrides
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """Set demo-safe environment defaults if not already provided by the user/CI."""
    defaults = {
        "UI_BASE_URL": "http://localhost:3000",
        "ENVIRONMENT": "test",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
