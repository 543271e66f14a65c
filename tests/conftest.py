"""
Shared fixtures for Anticafe tests.
"""
from datetime import datetime, timedelta

import pytest


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    """A manual clock starting at noon on a fixed day."""
    return ManualClock(datetime(2024, 1, 1, 12, 0, 0))
