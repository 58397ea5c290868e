"""Dashboard editing.

``DashboardBuilder`` edits a working copy of one saved dashboard, which only
reaches the repository through ``build()``. ``LayoutEditor`` edits the single
flange dashboard page and persists after every change.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .exceptions import FilterError, ValidationError, WidgetError
from .filters import AVAILABLE_FILTERS, get_filter_name
from .metrics import get_metric
from .models import (
    TABLE_COLUMNS,
    WIDGET_ADAPTER,
    Dashboard,
    DashboardFilter,
    LayoutType,
    WidgetSize,
    WidgetType,
)
from .storage import LayoutRepository
from .templates import default_column_settings, default_widgets, new_widget

logger = logging.getLogger(__name__)

WIDGET_TYPES = tuple(t.value for t in WidgetType)


def move_item(items: list, source: int, destination: Optional[int]) -> bool:
    """Move ``items[source]`` to ``destination`` in place.

    A missing destination (a drop outside the list) leaves the list unchanged.
    Destinations past the end append.

    Returns:
        True if the list was reordered
    """
    if destination is None or not 0 <= source < len(items):
        return False
    item = items.pop(source)
    items.insert(max(destination, 0), item)
    return True


class DashboardBuilder:
    """Builds or edits one dashboard."""

    def __init__(self, dashboard: Optional[Dashboard] = None):
        """Initialize builder.

        Args:
            dashboard: Dashboard to edit; a blank dashboard with a fresh id if omitted
        """
        self.dashboard = dashboard.model_copy(deep=True) if dashboard else Dashboard()

    @classmethod
    def for_dashboard(
        cls, dashboards: list[Dashboard], dashboard_id: Optional[str] = None
    ) -> "DashboardBuilder":
        """Builder editing the dashboard with the given id, or a new dashboard."""
        existing = next((d for d in dashboards if d.id == dashboard_id), None)
        if dashboard_id and existing is None:
            logger.warning(f"Dashboard {dashboard_id} not found, starting a new one")
        return cls(existing)

    # Widgets
    def add_widget(self, widget_type: str) -> Any:
        """Append a widget of the given type with its default options."""
        if widget_type not in WIDGET_TYPES:
            raise ValidationError(
                f"Unknown widget type: {widget_type}",
                dashboard_id=self.dashboard.id,
                validation_field="type",
                validation_rule="one_of",
                provided_value=widget_type,
            )

        widget = new_widget(widget_type)
        self.dashboard.widgets.append(widget)
        logger.info(f"Added {widget_type} widget {widget.id} to dashboard {self.dashboard.id}")
        return widget

    def remove_widget(self, widget_id: str) -> bool:
        before = len(self.dashboard.widgets)
        self.dashboard.widgets = [w for w in self.dashboard.widgets if w.id != widget_id]
        return len(self.dashboard.widgets) < before

    def update_widget(self, widget_id: str, **updates: Any) -> Any:
        """Merge option updates into a widget and re-validate it.

        Raises:
            WidgetError: If no widget has the id
            ValidationError: If the merged options are invalid
        """
        for index, widget in enumerate(self.dashboard.widgets):
            if widget.id != widget_id:
                continue

            data = widget.model_dump()
            data.update(updates)
            data["id"] = widget_id
            try:
                updated = WIDGET_ADAPTER.validate_python(data)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid widget options: {e.errors()[0]['msg']}",
                    dashboard_id=self.dashboard.id,
                    validation_field=".".join(str(p) for p in e.errors()[0]["loc"]),
                    validation_rule="widget_options",
                    provided_value=updates,
                ) from e

            self.dashboard.widgets[index] = updated
            return updated

        raise WidgetError(
            f"Widget {widget_id} not found", widget_id=widget_id, dashboard_id=self.dashboard.id
        )

    def move_widget(self, source: int, destination: Optional[int]) -> bool:
        return move_item(self.dashboard.widgets, source, destination)

    # Filters
    def add_filter(self, filter_id: str) -> DashboardFilter:
        """Declare a filter on the dashboard.

        Raises:
            FilterError: If the filter id is not an available filter
            ValidationError: If the filter is already declared
        """
        if filter_id not in {option["id"] for option in AVAILABLE_FILTERS}:
            raise FilterError(
                f"Unknown filter: {filter_id}", filter_id=filter_id, dashboard_id=self.dashboard.id
            )
        if any(f.id == filter_id for f in self.dashboard.filters):
            raise ValidationError(
                "Filter already added",
                dashboard_id=self.dashboard.id,
                validation_field="filters",
                validation_rule="unique",
                provided_value=filter_id,
                details={"description": "This filter is already in use on this dashboard."},
            )

        dashboard_filter = DashboardFilter(id=filter_id, name=get_filter_name(filter_id))
        self.dashboard.filters.append(dashboard_filter)
        return dashboard_filter

    def remove_filter(self, filter_id: str) -> bool:
        before = len(self.dashboard.filters)
        self.dashboard.filters = [f for f in self.dashboard.filters if f.id != filter_id]
        return len(self.dashboard.filters) < before

    def toggle_filter(self, filter_id: str, enabled: bool) -> None:
        for dashboard_filter in self.dashboard.filters:
            if dashboard_filter.id == filter_id:
                dashboard_filter.enabled = enabled

    # Dashboard fields
    def set_name(self, name: str) -> None:
        self.dashboard.name = name

    def set_description(self, description: str) -> None:
        self.dashboard.description = description

    def set_layout(self, layout: str) -> None:
        if layout not in {t.value for t in LayoutType}:
            raise ValidationError(
                f"Unknown layout: {layout}",
                dashboard_id=self.dashboard.id,
                validation_field="layout",
                validation_rule="one_of",
                provided_value=layout,
            )
        self.dashboard.layout = layout

    def build(self) -> Dashboard:
        """Validated copy of the dashboard, ready to save.

        Raises:
            ValidationError: If the name is blank
        """
        if not self.dashboard.name.strip():
            raise ValidationError(
                "Dashboard name required",
                dashboard_id=self.dashboard.id,
                validation_field="name",
                validation_rule="required",
                provided_value=self.dashboard.name,
                details={"description": "Please provide a name for your dashboard."},
            )
        return self.dashboard.model_copy(deep=True)


class LayoutEditor:
    """Editable widget layout of the flange dashboard page."""

    def __init__(self, repository: LayoutRepository):
        self.repository = repository
        self.widgets = repository.load_widgets()
        self.column_settings = repository.load_column_settings()

    def _save(self) -> None:
        self.repository.save_widgets(self.widgets)

    def add_widget(
        self, widget_type: str, metric: Optional[str] = None, title: Optional[str] = None
    ) -> Any:
        """Append a small widget.

        The title defaults to the metric's name; a summary card also takes
        its icon and color from the metric catalog.

        Raises:
            ValidationError: If the type is missing or a summary has no metric
        """
        if not widget_type:
            raise ValidationError(
                "Widget type required",
                validation_field="type",
                validation_rule="required",
                details={"description": "Please select a widget type"},
            )
        if widget_type == WidgetType.SUMMARY.value and not metric:
            raise ValidationError(
                "Metric required",
                validation_field="metric",
                validation_rule="required",
                details={"description": "Please select a metric for the summary widget"},
            )

        definition = get_metric(metric) if metric else None
        options: dict[str, Any] = {
            "type": widget_type,
            "title": title or (definition.name if definition else "New Widget"),
            "size": WidgetSize.SMALL.value,
            "metric": metric or "total_flanges",
        }
        if widget_type == WidgetType.SUMMARY.value:
            options["icon"] = (definition.icon if definition else None) or "gauge"
            options["color"] = (definition.color if definition else None) or "blue"

        widget = WIDGET_ADAPTER.validate_python(options)
        self.widgets.append(widget)
        self._save()
        logger.info(f"Added {widget_type} widget {widget.id} to the flange dashboard")
        return widget

    def delete_widget(self, widget_id: str) -> bool:
        before = len(self.widgets)
        self.widgets = [w for w in self.widgets if w.id != widget_id]
        self._save()
        return len(self.widgets) < before

    def move_widget(self, source: int, destination: Optional[int]) -> bool:
        moved = move_item(self.widgets, source, destination)
        if moved:
            self._save()
        return moved

    def reset(self) -> None:
        """Restore the default layout."""
        self.widgets = default_widgets()
        self._save()

    def set_column(self, column: str, visible: bool) -> None:
        """Show or hide a table column on every table widget."""
        if column not in TABLE_COLUMNS:
            raise ValidationError(
                f"Unknown column: {column}",
                validation_field="columns",
                validation_rule="one_of",
                provided_value=column,
            )
        self.column_settings = {**self.column_settings, column: visible}
        self.repository.save_column_settings(self.column_settings)

    def reset_columns(self) -> None:
        self.column_settings = default_column_settings()
        self.repository.save_column_settings(self.column_settings)
