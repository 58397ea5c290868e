"""Built-in dashboards, default layouts, and new-widget defaults.

Every accessor returns fresh model instances so callers can mutate them
without touching the built-in definitions.
"""

from typing import Any

from .models import WIDGET_ADAPTER, WIDGET_LIST_ADAPTER, TABLE_COLUMNS, Dashboard, WidgetType

SAMPLE_DASHBOARDS: list[dict[str, Any]] = [
    {
        "id": "sample-dashboard-1",
        "name": "Flange Overview",
        "description": "Overview of flange status and progress",
        "layout": "grid",
        "widgets": [
            {
                "id": "widget-1",
                "type": "summary",
                "size": "medium",
                "title": "Total Flanges",
                "metric": "total_flanges",
                "icon": "gauge",
                "color": "blue",
            },
            {
                "id": "widget-2",
                "type": "summary",
                "size": "medium",
                "title": "Completed",
                "metric": "completed_flanges",
                "icon": "check",
                "color": "green",
            },
            {
                "id": "widget-3",
                "type": "summary",
                "size": "medium",
                "title": "In Progress",
                "metric": "in_progress_flanges",
                "icon": "settings",
                "color": "blue",
            },
            {
                "id": "widget-4",
                "type": "bar",
                "size": "large",
                "title": "Status Breakdown",
                "metric": "status_breakdown",
                "showLegend": True,
                "orientation": "vertical",
            },
            {
                "id": "widget-5",
                "type": "pie",
                "size": "medium",
                "title": "Flange Types",
                "metric": "flange_type_distribution",
                "showLegend": True,
                "donut": True,
            },
            {
                "id": "widget-6",
                "type": "table",
                "size": "large",
                "title": "System Progress",
                "metric": "system_progress",
                "pageSize": 5,
                "columns": TABLE_COLUMNS,
            },
        ],
        "filters": [
            {"id": "job", "name": "Job Number", "enabled": True},
            {"id": "system", "name": "System", "enabled": True},
        ],
    }
]

# Layout of the single flange dashboard page
DEFAULT_WIDGETS: list[dict[str, Any]] = [
    {
        "id": "summary-total",
        "type": "summary",
        "title": "Total Flanges",
        "size": "small",
        "metric": "total_flanges",
        "icon": "gauge",
        "color": "blue",
    },
    {
        "id": "summary-completed",
        "type": "summary",
        "title": "Completed",
        "size": "small",
        "metric": "completed_flanges",
        "icon": "check",
        "color": "green",
    },
    {
        "id": "summary-in-progress",
        "type": "summary",
        "title": "In Progress",
        "size": "small",
        "metric": "in_progress_flanges",
        "icon": "settings",
        "color": "blue",
    },
    {
        "id": "summary-not-started",
        "type": "summary",
        "title": "Not Started",
        "size": "small",
        "metric": "not_started_flanges",
        "icon": "alert",
        "color": "red",
    },
    {
        "id": "bar-status",
        "type": "bar",
        "title": "Status Breakdown",
        "size": "medium",
        "metric": "status_breakdown",
        "orientation": "vertical",
        "showLegend": True,
    },
    {
        "id": "pie-types",
        "type": "pie",
        "title": "Flange Types",
        "size": "medium",
        "metric": "flange_type_distribution",
        "donut": True,
        "showLegend": True,
    },
    {
        "id": "table-systems",
        "type": "table",
        "title": "System Progress",
        "size": "large",
        "metric": "system_progress",
        "pageSize": 5,
        "columns": TABLE_COLUMNS,
    },
]

# Initial options of a widget added in the dashboard builder
DEFAULT_WIDGET_CONFIGS: dict[str, dict[str, Any]] = {
    WidgetType.SUMMARY.value: {
        "title": "Summary",
        "metric": "total_flanges",
        "icon": "gauge",
        "color": "blue",
    },
    WidgetType.BAR.value: {
        "title": "Bar Chart",
        "metric": "status_breakdown",
        "showLegend": True,
        "orientation": "vertical",
    },
    WidgetType.PIE.value: {
        "title": "Pie Chart",
        "metric": "status_breakdown",
        "showLegend": True,
        "donut": False,
    },
    WidgetType.LINE.value: {
        "title": "Line Chart",
        "metric": "completion_trend",
        "showLegend": True,
        "timeframe": "week",
    },
    WidgetType.TABLE.value: {
        "title": "Data Table",
        "metric": "system_progress",
        "pageSize": 5,
        "columns": TABLE_COLUMNS,
    },
}

WIDGET_TYPE_NAMES = {
    WidgetType.SUMMARY.value: "Summary Card",
    WidgetType.BAR.value: "Bar Chart",
    WidgetType.PIE.value: "Pie Chart",
    WidgetType.LINE.value: "Line Chart",
    WidgetType.TABLE.value: "Data Table",
}

WIDGET_TYPE_DESCRIPTIONS = {
    WidgetType.SUMMARY.value: (
        "Summary cards display a single metric with an optional icon. "
        "Ideal for key performance indicators."
    ),
    WidgetType.BAR.value: "Bar charts compare values across categories.",
    WidgetType.PIE.value: "Pie charts show the share of each category in the whole.",
    WidgetType.LINE.value: (
        "Line charts display trends over time. Useful for showing progress or changes in metrics."
    ),
    WidgetType.TABLE.value: "Data tables list per-system progress with pagination.",
}

DEFAULT_COLUMN_SETTINGS: dict[str, bool] = {column: True for column in TABLE_COLUMNS}


def sample_dashboards() -> list[Dashboard]:
    """Dashboards shown before the user has saved any."""
    return [Dashboard.model_validate(blob) for blob in SAMPLE_DASHBOARDS]


def default_widgets() -> list:
    """Default layout of the flange dashboard page."""
    return WIDGET_LIST_ADAPTER.validate_python(DEFAULT_WIDGETS)


def default_column_settings() -> dict[str, bool]:
    """All table columns visible."""
    return dict(DEFAULT_COLUMN_SETTINGS)


def new_widget(widget_type: str, **overrides: Any):
    """Widget of the given type with builder defaults and a fresh id."""
    config = {"type": widget_type, "size": "medium", **DEFAULT_WIDGET_CONFIGS.get(widget_type, {})}
    config.update(overrides)
    return WIDGET_ADAPTER.validate_python(config)
