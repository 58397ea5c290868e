"""Metric aggregation over filtered flange records.

Every metric is a pure function of the record set (and, for the completion
trend, of the widget's timeframe). Results take one of four shapes:

- ``int`` for count metrics
- ``list[BreakdownItem]`` for group-by-count metrics, in first-seen group order
- ``list[ProgressRow]`` for ``system_progress``, most complete system first
- ``list[TrendPoint]`` for ``completion_trend``

An unknown metric id yields ``None`` so the widget can show its no-data state.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from .colors import get_inspection_status_color, get_status_color, hash_color
from .models import BreakdownItem, ProgressRow, Timeframe, TrendPoint, WidgetType
from .trend import SyntheticTrendProvider, TrendProvider

logger = logging.getLogger(__name__)

AggregateResult = Union[int, list[BreakdownItem], list[ProgressRow], list[TrendPoint], None]

RECORD_COLUMNS = [
    "status",
    "percent_complete",
    "inspection_status",
    "system",
    "flange_type",
    "flange_size",
    "flange_material",
]
CATEGORICAL_COLUMNS = [c for c in RECORD_COLUMNS if c != "percent_complete"]

UNKNOWN_LABEL = "Unknown"
NOT_INSPECTED_LABEL = "Not Inspected"
UNSPECIFIED_SYSTEM = "Unspecified"


class MetricCategory(str, Enum):
    """Metric result shape enumeration."""

    COUNT = "count"
    BREAKDOWN = "breakdown"
    PROGRESS = "progress"
    TREND = "trend"


class MetricDefinition(BaseModel):
    """Catalog entry for a metric."""

    id: str = Field(description="Metric ID")
    name: str = Field(description="Display name")
    category: MetricCategory = Field(description="Result shape")
    icon: Optional[str] = Field(None, description="Suggested summary icon")
    color: Optional[str] = Field(None, description="Suggested summary icon color")


METRICS = [
    MetricDefinition(id=metric_id, name=name, category=category, icon=icon, color=color)
    for metric_id, name, category, icon, color in [
        ("total_flanges", "Total Flanges", "count", "gauge", "blue"),
        ("completed_flanges", "Completed Flanges", "count", "check", "green"),
        ("in_progress_flanges", "In Progress Flanges", "count", "settings", "blue"),
        ("not_started_flanges", "Not Started Flanges", "count", "alert", "red"),
        ("delayed_flanges", "Delayed Flanges", "count", "alert", "orange"),
        ("on_hold_flanges", "On Hold Flanges", "count", "alert", "yellow"),
        ("inspection_passed", "Inspection Passed", "count", "check", "green"),
        ("inspection_failed", "Inspection Failed", "count", "alert", "red"),
        ("pending_inspection", "Pending Inspection", "count", "alert", "purple"),
        ("status_breakdown", "Status Breakdown", "breakdown", None, None),
        ("system_progress", "System Progress", "progress", None, None),
        ("flange_size_distribution", "Flange Size Distribution", "breakdown", None, None),
        ("flange_type_distribution", "Flange Type Distribution", "breakdown", None, None),
        ("flange_material_distribution", "Flange Material Distribution", "breakdown", None, None),
        ("completion_trend", "Completion Trend", "trend", None, None),
        ("inspection_status", "Inspection Status", "breakdown", None, None),
    ]
]

METRICS_BY_ID = {metric.id: metric for metric in METRICS}

# Metric categories offered when picking a metric for each widget type
WIDGET_METRIC_CATEGORIES = {
    WidgetType.SUMMARY.value: {MetricCategory.COUNT},
    WidgetType.PIE.value: {MetricCategory.BREAKDOWN},
    WidgetType.LINE.value: {MetricCategory.TREND},
}


def get_metric(metric_id: str) -> Optional[MetricDefinition]:
    """Catalog entry for a metric id, if known."""
    return METRICS_BY_ID.get(metric_id)


def compatible_metrics(widget_type: Union[str, WidgetType]) -> list[MetricDefinition]:
    """Metrics offered for a widget type; bar and table widgets offer every metric."""
    key = widget_type.value if isinstance(widget_type, Enum) else widget_type
    categories = WIDGET_METRIC_CATEGORIES.get(key)
    if categories is None:
        return list(METRICS)
    return [metric for metric in METRICS if metric.category in categories]


def records_to_frame(records: Sequence[Any]) -> pd.DataFrame:
    """Build the aggregation frame; fields absent from every record are all-null columns."""
    rows = [r.model_dump() if isinstance(r, BaseModel) else dict(r) for r in records]
    frame = pd.DataFrame(rows).reindex(columns=RECORD_COLUMNS)

    frame[CATEGORICAL_COLUMNS] = frame[CATEGORICAL_COLUMNS].astype(object)
    frame["percent_complete"] = pd.to_numeric(frame["percent_complete"], errors="coerce")
    return frame


# Count predicates
def _completed(frame: pd.DataFrame) -> pd.Series:
    return (frame["status"] == "Completed") | (frame["percent_complete"] == 100)


def _in_progress(frame: pd.DataFrame) -> pd.Series:
    pct = frame["percent_complete"]
    return (frame["status"] == "In Progress") | ((pct > 0) & (pct < 100))


def _not_started(frame: pd.DataFrame) -> pd.Series:
    pct = frame["percent_complete"]
    return (frame["status"] == "Not Started") | (pct == 0) | pct.isna()


def _status_is(status: str) -> Callable[[pd.DataFrame], pd.Series]:
    return lambda frame: frame["status"] == status


def _inspection_is(status: str) -> Callable[[pd.DataFrame], pd.Series]:
    return lambda frame: frame["inspection_status"] == status


COUNT_PREDICATES: dict[str, Callable[[pd.DataFrame], pd.Series]] = {
    "total_flanges": lambda frame: pd.Series(True, index=frame.index),
    "completed_flanges": _completed,
    "in_progress_flanges": _in_progress,
    "not_started_flanges": _not_started,
    "delayed_flanges": _status_is("Delayed"),
    "on_hold_flanges": _status_is("On Hold"),
    "inspection_passed": _inspection_is("Passed"),
    "inspection_failed": _inspection_is("Failed"),
    "pending_inspection": _inspection_is("Pending"),
}

# metric id -> (record field, label for empty values, color policy)
BREAKDOWN_METRICS: dict[str, tuple[str, str, Callable[[str], str]]] = {
    "status_breakdown": ("status", UNKNOWN_LABEL, get_status_color),
    "flange_type_distribution": ("flange_type", UNKNOWN_LABEL, hash_color),
    "flange_size_distribution": ("flange_size", UNKNOWN_LABEL, hash_color),
    "flange_material_distribution": ("flange_material", UNKNOWN_LABEL, hash_color),
    "inspection_status": ("inspection_status", NOT_INSPECTED_LABEL, get_inspection_status_color),
}


def _labels(column: pd.Series, default: str) -> pd.Series:
    present = column.notna() & (column != "")
    return column.where(present, default).astype(str)


def count_metric(frame: pd.DataFrame, metric_id: str) -> int:
    """Number of records satisfying a count metric's predicate."""
    return int(COUNT_PREDICATES[metric_id](frame).sum())


def breakdown_metric(frame: pd.DataFrame, metric_id: str) -> list[BreakdownItem]:
    """Group-by-count of a breakdown metric's field, in first-seen order."""
    field, default, color_for = BREAKDOWN_METRICS[metric_id]
    labels = _labels(frame[field], default)
    counts = labels.groupby(labels, sort=False).size()

    return [
        BreakdownItem(name=name, value=int(count), color=color_for(name))
        for name, count in counts.items()
    ]


def system_progress(frame: pd.DataFrame) -> list[ProgressRow]:
    """Complete/total per system, sorted by completion percentage descending.

    Percentages are rounded half up, so a system at 12.5% reports 13.
    """
    if frame.empty:
        return []

    progress = pd.DataFrame(
        {
            "system": _labels(frame["system"], UNSPECIFIED_SYSTEM),
            "complete": _completed(frame).astype(int),
        }
    )
    grouped = (
        progress.groupby("system", sort=False)["complete"]
        .agg(["sum", "size"])
        .rename(columns={"sum": "complete", "size": "total"})
    )
    grouped["percentage"] = np.floor(grouped["complete"] / grouped["total"] * 100 + 0.5)
    grouped = grouped.sort_values("percentage", ascending=False, kind="stable")

    return [
        ProgressRow(
            system=str(system),
            complete=int(row["complete"]),
            total=int(row["total"]),
            percentage=int(row["percentage"]),
        )
        for system, row in grouped.iterrows()
    ]


def _widget_option(widget: Any, name: str) -> Any:
    if widget is None:
        return None
    if isinstance(widget, Mapping):
        return widget.get(name)
    return getattr(widget, name, None)


class MetricAggregator:
    """Computes widget metrics from a filtered record set."""

    def __init__(self, trend_provider: Optional[TrendProvider] = None):
        """Initialize aggregator.

        Args:
            trend_provider: Source of the completion trend series
        """
        self.trend_provider = trend_provider or SyntheticTrendProvider()

    def aggregate(
        self, metric_id: str, records: Sequence[Any], widget: Any = None
    ) -> AggregateResult:
        """Compute one metric.

        Args:
            metric_id: Metric identifier
            records: Filtered records (mappings or ``FlangeRecord`` models)
            widget: Widget config or option mapping; supplies ``timeframe``

        Returns:
            Metric result, or None for an unknown metric id
        """
        if metric_id == "completion_trend":
            timeframe = _widget_option(widget, "timeframe") or Timeframe.WEEK.value
            return self.trend_provider.completion_trend(timeframe)

        if metric_id in COUNT_PREDICATES:
            return count_metric(records_to_frame(records), metric_id)
        if metric_id in BREAKDOWN_METRICS:
            return breakdown_metric(records_to_frame(records), metric_id)
        if metric_id == "system_progress":
            return system_progress(records_to_frame(records))

        logger.debug(f"Unknown metric requested: {metric_id}")
        return None


_default_aggregator = MetricAggregator()


def aggregate(
    metric_id: str,
    records: Sequence[Any],
    widget: Any = None,
    trend_provider: Optional[TrendProvider] = None,
) -> AggregateResult:
    """Compute one metric with the default (or the given) trend provider."""
    if trend_provider is not None:
        return MetricAggregator(trend_provider).aggregate(metric_id, records, widget)
    return _default_aggregator.aggregate(metric_id, records, widget)
