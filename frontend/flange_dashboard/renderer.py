"""Widget rendering dispatch.

Maps each widget to the metric it declares and shapes the result for display.
Views are plain data (bar lengths, pie arcs, trend heights, table pages), so
the Streamlit pages and the Plotly figure builders only draw them.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from pydantic import BaseModel, Field

from .colors import get_icon_color
from .filters import apply_filters
from .metrics import AggregateResult, MetricAggregator
from .models import (
    TABLE_COLUMNS,
    BreakdownItem,
    Dashboard,
    LayoutType,
    ProgressRow,
    SummaryIcon,
    TrendPoint,
    WidgetSize,
    WidgetType,
)
from .pagination import paginate

logger = logging.getLogger(__name__)

BAR_CHART_HEIGHT_PX = 200
MAX_DATE_LABELS = 10
NO_DATA_MESSAGE = "No data available"
UNKNOWN_WIDGET_MESSAGE = "Unknown widget type"

COLUMN_LABELS = {
    "system": "System",
    "complete": "Complete",
    "total": "Total",
    "percentage": "Progress",
}


# View models
class WidgetView(BaseModel):
    """Fields every rendered widget carries."""

    widget_id: str
    type: Optional[str] = None
    title: str = ""
    size: str = WidgetSize.MEDIUM.value
    loading: bool = False
    empty: bool = False


class SummaryView(WidgetView):
    value: int = 0
    icon: str = SummaryIcon.GAUGE.value
    color: str = "blue"
    icon_color: str = Field(default_factory=lambda: get_icon_color("blue"))


class BarItem(BaseModel):
    name: str
    value: int
    color: str
    length: float = Field(description="Bar height in px (vertical) or width in % (horizontal)")


class BarView(WidgetView):
    orientation: str = "vertical"
    show_legend: bool = True
    items: list[BarItem] = Field(default_factory=list)


class PieSlice(BaseModel):
    name: str
    value: int
    color: str
    fraction: float
    start_angle: float
    end_angle: float
    path: str = Field(description="SVG path in a 100x100 viewBox")


class PieView(WidgetView):
    donut: bool = False
    show_legend: bool = True
    total: int = 0
    slices: list[PieSlice] = Field(default_factory=list)


class TrendBar(BaseModel):
    date: str
    completed: int
    total: int
    total_height: float = Field(description="Total as % of the tallest total")
    completed_height: float = Field(description="Completed as % of the tallest total")
    show_label: bool


class LineView(WidgetView):
    show_legend: bool = True
    max_total: int = 0
    points: list[TrendBar] = Field(default_factory=list)


class TableView(WidgetView):
    columns: list[str] = Field(default_factory=list)
    column_labels: dict[str, str] = Field(default_factory=dict)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    page: int = 0
    page_count: int = 0
    page_size: int = 5
    total_rows: int = 0


class UnknownView(WidgetView):
    message: str = UNKNOWN_WIDGET_MESSAGE


# Presentation helpers
def _scale(value: float, maximum: float, extent: float) -> float:
    return value / maximum * extent if maximum > 0 else 0.0


def bar_items(data: Sequence[BreakdownItem], orientation: str) -> list[BarItem]:
    """Scale breakdown values against the largest one."""
    extent = BAR_CHART_HEIGHT_PX if orientation == "vertical" else 100
    maximum = max((item.value for item in data), default=0)
    return [
        BarItem(
            name=item.name,
            value=item.value,
            color=item.color,
            length=_scale(item.value, maximum, extent),
        )
        for item in data
    ]


def _point(angle: float) -> tuple[float, float]:
    radians = math.radians(angle)
    return 50 + 50 * math.cos(radians), 50 + 50 * math.sin(radians)


def arc_path(start_angle: float, end_angle: float) -> str:
    """SVG path of a pie slice centred in a 100x100 viewBox."""
    sweep = end_angle - start_angle
    if sweep >= 360:
        return "M 50 50 m -50 0 a 50 50 0 1 0 100 0 a 50 50 0 1 0 -100 0 Z"

    x1, y1 = _point(start_angle)
    x2, y2 = _point(end_angle)
    large_arc = 1 if sweep > 180 else 0
    return f"M 50 50 L {x1:.3f} {y1:.3f} A 50 50 0 {large_arc} 1 {x2:.3f} {y2:.3f} Z"


def pie_slices(data: Sequence[BreakdownItem]) -> list[PieSlice]:
    """Proportional slices whose sweeps add up to 360 degrees."""
    total = sum(item.value for item in data)
    if total <= 0:
        return []

    slices = []
    start = 0.0
    for item in data:
        fraction = item.value / total
        end = start + fraction * 360
        slices.append(
            PieSlice(
                name=item.name,
                value=item.value,
                color=item.color,
                fraction=fraction,
                start_angle=start,
                end_angle=end,
                path=arc_path(start, end),
            )
        )
        start = end
    return slices


def label_interval(point_count: int) -> int:
    """Label every n-th trend point so at most about ten dates are shown."""
    return max(1, math.ceil(point_count / MAX_DATE_LABELS))


def trend_bars(data: Sequence[TrendPoint]) -> list[TrendBar]:
    """Completed-over-total bars with sparse date labels."""
    maximum = max((point.total for point in data), default=0)
    interval = label_interval(len(data))
    return [
        TrendBar(
            date=point.date,
            completed=point.completed,
            total=point.total,
            total_height=_scale(point.total, maximum, 100),
            completed_height=_scale(point.completed, maximum, 100),
            show_label=index % interval == 0,
        )
        for index, point in enumerate(data)
    ]


def visible_columns(
    widget_columns: Sequence[str], column_settings: Optional[Mapping[str, bool]] = None
) -> list[str]:
    """Columns to show, in table order; column settings override the widget's own list."""
    if column_settings is not None:
        selected = {column for column, enabled in column_settings.items() if enabled}
    else:
        selected = set(widget_columns)
    return [column for column in TABLE_COLUMNS if column in selected]


def normalize_icon(icon: Optional[str]) -> str:
    """Summary icons outside the known set fall back to the gauge."""
    known = {i.value for i in SummaryIcon}
    return icon if icon in known else SummaryIcon.GAUGE.value


def grid_columns(layout: str) -> int:
    """Columns of the dashboard grid on a wide screen."""
    return 1 if layout == LayoutType.ROWS.value else 3


def column_span(size: str, columns: int) -> int:
    """Grid columns a widget of the given size occupies."""
    if size == WidgetSize.LARGE.value:
        return columns
    if size == WidgetSize.MEDIUM.value and columns >= 4:
        return columns // 2
    return 1


def _is_list_of(data: Any, item_type: type) -> bool:
    return isinstance(data, list) and all(isinstance(item, item_type) for item in data)


class WidgetRenderer:
    """Dispatches widgets to their metric and presentation shape."""

    def __init__(self, aggregator: Optional[MetricAggregator] = None):
        self.aggregator = aggregator or MetricAggregator()
        self._renderers = {
            WidgetType.SUMMARY.value: self._render_summary,
            WidgetType.BAR.value: self._render_bar,
            WidgetType.PIE.value: self._render_pie,
            WidgetType.LINE.value: self._render_line,
            WidgetType.TABLE.value: self._render_table,
        }

    def render(
        self,
        widget: Any,
        records: Sequence[Any],
        loading: bool = False,
        page: int = 0,
        column_settings: Optional[Mapping[str, bool]] = None,
    ) -> WidgetView:
        """Render one widget against already filtered records.

        Args:
            widget: Widget configuration
            records: Filtered records
            loading: Records are being (re)loaded; skip aggregation
            page: Current table page (tables only)
            column_settings: Column visibility overriding a table's columns

        Returns:
            View for the widget's type, or an ``UnknownView``
        """
        base = {
            "widget_id": widget.id,
            "type": widget.type,
            "title": widget.title,
            "size": widget.size,
            "loading": loading,
        }

        render_fn = self._renderers.get(widget.type)
        if render_fn is None:
            logger.warning(f"Unknown widget type {widget.type!r} for widget {widget.id}")
            return UnknownView(**base)

        data = None if loading else self.aggregator.aggregate(widget.metric, records, widget)
        return render_fn(widget, data, base, page=page, column_settings=column_settings)

    def _render_summary(self, widget, data: AggregateResult, base: dict, **_: Any) -> SummaryView:
        is_count = isinstance(data, int)
        return SummaryView(
            **base,
            empty=not is_count and not base["loading"],
            value=data if is_count else 0,
            icon=normalize_icon(widget.icon),
            color=widget.color,
            icon_color=get_icon_color(widget.color),
        )

    def _render_bar(self, widget, data: AggregateResult, base: dict, **_: Any) -> BarView:
        items = bar_items(data, widget.orientation) if self._is_breakdown(data) else []
        return BarView(
            **base,
            empty=not items,
            orientation=widget.orientation,
            show_legend=widget.show_legend,
            items=items,
        )

    def _render_pie(self, widget, data: AggregateResult, base: dict, **_: Any) -> PieView:
        slices = pie_slices(data) if self._is_breakdown(data) else []
        return PieView(
            **base,
            empty=not slices,
            donut=widget.donut,
            show_legend=widget.show_legend,
            total=sum(s.value for s in slices),
            slices=slices,
        )

    def _render_line(self, widget, data: AggregateResult, base: dict, **_: Any) -> LineView:
        points = trend_bars(data) if data and _is_list_of(data, TrendPoint) else []
        return LineView(
            **base,
            empty=not points,
            show_legend=widget.show_legend,
            max_total=max((p.total for p in points), default=0),
            points=points,
        )

    def _render_table(
        self,
        widget,
        data: AggregateResult,
        base: dict,
        page: int = 0,
        column_settings: Optional[Mapping[str, bool]] = None,
        **_: Any,
    ) -> TableView:
        rows = data if data and _is_list_of(data, ProgressRow) else []
        columns = visible_columns(widget.columns, column_settings)
        current = paginate(rows, widget.page_size, page)

        return TableView(
            **base,
            empty=not rows,
            columns=columns,
            column_labels={column: COLUMN_LABELS[column] for column in columns},
            rows=[{column: getattr(row, column) for column in columns} for row in current.items],
            page=current.page,
            page_count=current.page_count,
            page_size=current.page_size,
            total_rows=current.total_items,
        )

    @staticmethod
    def _is_breakdown(data: AggregateResult) -> bool:
        return bool(data) and _is_list_of(data, BreakdownItem)


class DashboardRenderer:
    """Renders every widget of a dashboard against the filtered record set."""

    def __init__(self, widget_renderer: Optional[WidgetRenderer] = None):
        self.widget_renderer = widget_renderer or WidgetRenderer()

    def render(
        self,
        dashboard: Dashboard,
        records: Sequence[Any],
        filter_values: Optional[Mapping[str, str]] = None,
        loading: bool = False,
        pages: Optional[Mapping[str, int]] = None,
        column_settings: Optional[Mapping[str, bool]] = None,
    ) -> list[WidgetView]:
        """Render all widgets in layout order.

        Args:
            dashboard: Dashboard to render
            records: Unfiltered records
            filter_values: Filter id -> selected value
            loading: Records are being (re)loaded
            pages: Widget id -> current table page
            column_settings: Column visibility for table widgets

        Returns:
            One view per widget
        """
        filtered = apply_filters(records, filter_values or {})
        pages = pages or {}

        return [
            self.widget_renderer.render(
                widget,
                filtered,
                loading=loading,
                page=pages.get(widget.id, 0),
                column_settings=column_settings,
            )
            for widget in dashboard.widgets
        ]
