"""
Pytest configuration for lazyviews tests.

This file ensures that the repository root is in the Python path so the
tests import the package from the working tree, and provides shared
fixtures.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest

from lazyviews.config import reset_settings


@pytest.fixture
def numbers():
    """The numbers 1..10 as a fresh list"""
    return list(range(1, 11))


@pytest.fixture
def call_log():
    """A list plus a wrapper that records every call made through it"""
    calls = []

    def track(fn):
        def wrapper(x):
            calls.append(x)
            return fn(x)
        return wrapper

    return calls, track


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends with default settings"""
    reset_settings()
    yield
    reset_settings()
