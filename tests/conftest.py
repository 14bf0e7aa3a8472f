"""
Pytest configuration and shared fixtures for Hybrid Join Watcher tests.
"""

import logging
import os
import tempfile
from unittest.mock import Mock

import pytest

from src.hybrid_join_watcher.core.config import WatcherSettings
from tests.event_helpers import make_snapshot


@pytest.fixture
def settings():
    """Watcher settings with the production timing values."""
    return WatcherSettings(domain="test.example.com")


@pytest.fixture
def event_reader():
    """Event reader that reports no events unless told otherwise."""
    reader = Mock()
    reader.snapshot.return_value = make_snapshot()
    return reader


@pytest.fixture
def prober():
    """Connectivity prober that reports the domain as reachable."""
    mock_prober = Mock()
    mock_prober.is_reachable.return_value = True
    return mock_prober


@pytest.fixture
def task_runner():
    """Scheduled task runner that always starts successfully."""
    runner = Mock()
    runner.start.return_value = True
    return runner


@pytest.fixture
def sleep():
    """Recording replacement for time.sleep."""
    return Mock()


@pytest.fixture
def config_file():
    """Write a temporary YAML configuration file."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(
            """
watcher:
  domain: "ad.example.org"
  poll_interval: 30
  retry_delay: 2
  max_iterations: 10
  exhaustive_probe: true
scheduled_task:
  name: "Custom-Join"
probe:
  ping_count: 4
  tcp_timeout: 1.5
paths:
  tag_file: "/tmp/watcher.tag"
logging:
  level: "DEBUG|INFO"
"""
        )
        temp_config_path = f.name

    try:
        yield temp_config_path
    finally:
        if os.path.exists(temp_config_path):
            os.unlink(temp_config_path)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep tests that install handlers from leaking them into other tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
