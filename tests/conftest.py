"""Test configuration and fixtures."""

from datetime import datetime

import pytest

from tests.factories import NOW


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time for time-based ranking and karma decay."""
    return NOW
