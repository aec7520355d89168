"""Pytest configuration and fixtures.

Provides environment isolation and configuration-cache hygiene. All
fixtures here are autouse unless noted.
"""

from __future__ import annotations

import os

import pytest

from fallible import config as config_module
from tests.helpers import MockResource

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "fallible.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_fallible_env(request, monkeypatch):
    """Ensure a clean FALLIBLE_* environment and a fresh default config.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith(config_module.ENV_PREFIX):
                monkeypatch.delenv(key, raising=False)
    config_module._default_config.cache_clear()
    yield
    config_module._default_config.cache_clear()


# =============================================================================
# Test Doubles
# =============================================================================


@pytest.fixture
def resource() -> MockResource:
    """A closable resource that counts its releases."""
    return MockResource()
