import logging

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    """Capture package debug logs so SQL logging paths are exercised."""
    caplog.set_level(logging.DEBUG, logger='h2temporal')
    yield


pytest_plugins = [
    'tests.fixtures.mocks',
    'tests.fixtures.values',
    'tests.fixtures.sqlite',
]
