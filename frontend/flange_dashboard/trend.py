"""Completion trend synthesis.

Flange records carry no completion history, so the completion trend is
fabricated: a randomized series whose shape depends only on the timeframe.
It lives behind the ``TrendProvider`` protocol so a provider backed by real
timestamped history can replace it without touching the aggregator.
"""

import math
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Protocol, Union

import numpy as np

from .models import Timeframe, TrendPoint

# timeframe -> (days spanned, days between samples, date label format)
TIMEFRAME_SAMPLING = {
    Timeframe.WEEK.value: (7, 1, "short"),
    Timeframe.MONTH.value: (30, 3, "short"),
    Timeframe.QUARTER.value: (90, 7, "short"),
    Timeframe.YEAR.value: (365, 30, "month"),
}

STARTING_TOTAL_RANGE = (100, 150)
TOTAL_GROWTH_PROBABILITY = 0.3


class TrendProvider(Protocol):
    """Source of completion trend series."""

    def completion_trend(self, timeframe: Union[str, Timeframe]) -> list[TrendPoint]:
        """Return the completion series for a timeframe, oldest point first."""
        ...


def format_trend_date(date: datetime, label_format: str) -> str:
    """Render a sample date as ``Oct 17`` or, for month-only labels, ``October``."""
    if label_format == "month":
        return f"{date:%B}"
    return f"{date:%b} {date.day}"


def sampling_for(timeframe: Union[str, Timeframe]) -> tuple[int, int, str]:
    """Sampling parameters for a timeframe; unknown timeframes sample a week."""
    key = timeframe.value if isinstance(timeframe, Enum) else timeframe
    return TIMEFRAME_SAMPLING.get(key, TIMEFRAME_SAMPLING[Timeframe.WEEK.value])


class SyntheticTrendProvider:
    """Randomized completion trend.

    Not reproducible unless a seeded generator is supplied. Every series has
    one point per sampled day offset, dates in ascending order, and
    ``completed <= total`` at each point.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize provider.

        Args:
            rng: Random generator (a fresh unseeded one by default)
            clock: Returns the date the series ends on
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock

    def completion_trend(self, timeframe: Union[str, Timeframe]) -> list[TrendPoint]:
        """Synthesize a completion series for the timeframe."""
        days, step, label_format = sampling_for(timeframe)
        now = self.clock()

        total = int(self.rng.integers(*STARTING_TOTAL_RANGE))
        points = []

        for offset in range(days, -1, -step):
            progress = min(100.0, (days - offset) + self.rng.random() * 20)
            points.append(
                TrendPoint(
                    date=format_trend_date(now - timedelta(days=offset), label_format),
                    completed=math.floor(total * progress / 100),
                    total=total,
                )
            )

            if self.rng.random() < TOTAL_GROWTH_PROBABILITY:
                total += int(self.rng.integers(1, 6))

        return points
