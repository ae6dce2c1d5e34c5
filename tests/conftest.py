"""Shared fixtures for the shimmerview test suite."""

from __future__ import annotations

from datetime import datetime

import pytest
from builders import FIXED_NOW


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW
