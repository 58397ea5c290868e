"""
Shared test fixtures for unit tests.

Provides common fixtures for testing the flange dashboard engine,
including sample flange records, stores, and deterministic trend providers.
"""

from datetime import datetime
from typing import Any

import numpy as np
import pytest

from frontend.flange_dashboard.models import TrendPoint
from frontend.flange_dashboard.storage import InMemoryKeyValueStore
from frontend.flange_dashboard.trend import SyntheticTrendProvider


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """
    Small hand-written flange record set.

    Returns:
        Records covering every status, two systems, and missing values
    """
    return [
        {
            "id": 1,
            "job_number": "81148-",
            "status": "Completed",
            "percent_complete": 100,
            "system": "CA1-030",
            "flange_type": "RFWN",
            "flange_size": "16.000",
            "flange_material": "CS",
            "inspection_status": "Passed",
        },
        {
            "id": 2,
            "job_number": "81148-",
            "status": "In Progress",
            "percent_complete": 60,
            "system": "CA1-030",
            "flange_type": "RFWN",
            "flange_size": "10.000",
            "flange_material": "CS",
            "inspection_status": "Pending",
        },
        {
            "id": 3,
            "job_number": "81148-",
            "status": "Not Started",
            "percent_complete": 0,
            "system": "CA1-030",
            "flange_type": "RFSW",
            "flange_size": "10.000",
            "flange_material": "SS",
            "inspection_status": "Not Inspected",
        },
        {
            "id": 4,
            "job_number": "999999",
            "status": "Completed",
            "percent_complete": 100,
            "system": "Test System",
            "flange_type": None,
            "flange_size": None,
            "flange_material": None,
            "inspection_status": "Passed",
        },
        {
            "id": 5,
            "job_number": "999999",
            "status": "Delayed",
            "percent_complete": 30,
            "system": "Test System",
            "flange_type": "RFBL",
            "flange_size": "6.000",
            "flange_material": "CS",
            "inspection_status": "Failed",
        },
    ]


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    """Deterministic random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 17 October 2026."""
    return lambda: datetime(2026, 10, 17, 12, 0, 0)


@pytest.fixture
def trend_provider(seeded_rng, fixed_clock) -> SyntheticTrendProvider:
    """Synthetic trend provider with a seeded generator and fixed clock."""
    return SyntheticTrendProvider(rng=seeded_rng, clock=fixed_clock)


class StaticTrendProvider:
    """Trend provider returning a fixed series and recording requested timeframes."""

    def __init__(self, points: list[TrendPoint]):
        self.points = points
        self.requested: list[Any] = []

    def completion_trend(self, timeframe):
        self.requested.append(timeframe)
        return list(self.points)


@pytest.fixture
def static_trend() -> StaticTrendProvider:
    """Trend provider with three fixed points."""
    return StaticTrendProvider(
        [
            TrendPoint(date="Oct 15", completed=10, total=100),
            TrendPoint(date="Oct 16", completed=40, total=110),
            TrendPoint(date="Oct 17", completed=80, total=120),
        ]
    )


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()
