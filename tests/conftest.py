"""Shared pytest configuration and fixtures for loopback-redirect tests."""

import logging

import httpx
import pytest

from loopback_redirect.core.config.schema import ConfigSchema
from loopback_redirect.core.redirect import ListenerSettings, RedirectListener


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (real loopback sockets)"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "tests/unit/" in path or "tests/cli/" in path:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in path:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def clean_redirect_env(monkeypatch):
    """Make sure no configuration from the shell or a .env file leaks into tests."""
    for spec in ConfigSchema.all_specs().values():
        monkeypatch.delenv(spec.name, raising=False)


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level changed by configure_root_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fast_settings():
    """Listener settings with short timeouts so shutdown paths finish quickly."""
    return ListenerSettings(request_timeout=1.0, shutdown_timeout=2.0)


@pytest.fixture
def listener(fast_settings):
    """A listener that is always stopped after the test."""
    redirect_listener = RedirectListener(fast_settings)
    yield redirect_listener
    redirect_listener.stop()


@pytest.fixture
def redirect_client():
    """HTTP client standing in for the browser following the redirect.

    trust_env=False keeps proxy environment variables away from loopback traffic.
    """
    with httpx.Client(trust_env=False, timeout=5.0) as client:
        yield client
