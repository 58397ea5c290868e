"""Dashboard models for flange records, widgets, filters, and dashboards.

This module defines Pydantic models for the flange dashboard. Widgets are a
tagged union keyed on ``type``; each variant carries only the options that
make sense for it. Stored dashboards keep the camelCase option keys
(``showLegend``, ``pageSize``) they have always been persisted with.
"""

import uuid
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter


class FlangeStatus(str, Enum):
    """Flange lifecycle status enumeration."""

    COMPLETED = "Completed"
    IN_PROGRESS = "In Progress"
    NOT_STARTED = "Not Started"
    DELAYED = "Delayed"
    ON_HOLD = "On Hold"


class InspectionStatus(str, Enum):
    """Flange inspection status enumeration."""

    PASSED = "Passed"
    FAILED = "Failed"
    PENDING = "Pending"
    NOT_INSPECTED = "Not Inspected"


class WidgetType(str, Enum):
    """Widget type enumeration."""

    SUMMARY = "summary"
    BAR = "bar"
    PIE = "pie"
    LINE = "line"
    TABLE = "table"


class WidgetSize(str, Enum):
    """Widget size class enumeration."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class LayoutType(str, Enum):
    """Dashboard layout type enumeration."""

    GRID = "grid"
    COLUMNS = "columns"
    ROWS = "rows"


class BarOrientation(str, Enum):
    """Bar chart orientation enumeration."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Timeframe(str, Enum):
    """Completion trend timeframe enumeration."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class SummaryIcon(str, Enum):
    """Summary card icon enumeration."""

    GAUGE = "gauge"
    SETTINGS = "settings"
    CHECK = "check"
    ALERT = "alert"


TABLE_COLUMNS = ["system", "complete", "total", "percentage"]


# Record models
class FlangeRecord(BaseModel):
    """One tracked flange from the flange log."""

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: int = Field(description="Record ID")
    job: Optional[str] = Field(None, description="Job code")
    job_number: Optional[str] = Field(None, description="Job number")
    drawing_id: Optional[str] = Field(None, description="Drawing reference")
    flange_number: Optional[int] = Field(None, description="Flange number on the drawing")
    flange_type: Optional[str] = Field(None, description="Flange type (RFWN, RFSW, ...)")
    flange_size: Optional[str] = Field(None, description="Nominal size")
    flange_rating: Optional[str] = Field(None, description="Pressure rating class")
    flange_material: Optional[str] = Field(None, description="Flange material")
    gasket_type: Optional[str] = Field(None, description="Gasket type")
    gasket_material: Optional[str] = Field(None, description="Gasket material")
    primary_scope: Optional[str] = Field(None, description="Primary scope")
    system_no: Optional[str] = Field(None, description="System number")
    system: Optional[str] = Field(None, description="System the flange belongs to")
    client: Optional[str] = Field(None, description="Client name")
    line_number: Optional[str] = Field(None, description="Line number")
    status: Optional[FlangeStatus] = Field(None, description="Lifecycle status")
    percent_complete: Optional[int] = Field(None, ge=0, le=100, description="Completion %")
    inspection_status: Optional[InspectionStatus] = Field(None, description="Inspection status")
    inspection_date: Optional[str] = Field(None, description="Inspection timestamp")
    created_at: Optional[str] = Field(None, description="Creation timestamp")
    created_by: Optional[str] = Field(None, description="Creator user")
    updated_at: Optional[str] = Field(None, description="Last update timestamp")
    updated_by: Optional[str] = Field(None, description="Last updating user")


class FlangeLogResponse(BaseModel):
    """Flange log endpoint payload."""

    success: bool = Field(description="Whether the query succeeded")
    data: list[FlangeRecord] = Field(default_factory=list, description="Flange records")
    count: int = Field(default=0, description="Number of records returned")
    error: Optional[str] = Field(None, description="Error message on failure")


# Aggregate result models
class BreakdownItem(BaseModel):
    """One group of a group-by-count metric."""

    name: str
    value: int
    color: str


class ProgressRow(BaseModel):
    """Completion progress of one system."""

    system: str
    complete: int
    total: int
    percentage: int


class TrendPoint(BaseModel):
    """One sample of the completion trend."""

    date: str
    completed: int
    total: int


# Widget models
class WidgetBase(BaseModel):
    """Fields shared by every widget."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Widget ID")
    title: str = Field(default="New Widget", description="Widget title")
    size: WidgetSize = Field(default=WidgetSize.MEDIUM, description="Widget size class")
    metric: str = Field(default="total_flanges", description="Metric identifier")


class SummaryWidget(WidgetBase):
    """Single number card."""

    type: Literal["summary"] = "summary"
    icon: str = Field(default=SummaryIcon.GAUGE.value, description="Icon name")
    color: str = Field(default="blue", description="Icon color name")


class BarWidget(WidgetBase):
    """Bar chart of a breakdown metric."""

    type: Literal["bar"] = "bar"
    metric: str = "status_breakdown"
    orientation: BarOrientation = Field(default=BarOrientation.VERTICAL)
    show_legend: bool = Field(default=True, alias="showLegend")


class PieWidget(WidgetBase):
    """Pie or donut chart of a breakdown metric."""

    type: Literal["pie"] = "pie"
    metric: str = "status_breakdown"
    donut: bool = Field(default=False, description="Render with a donut hole")
    show_legend: bool = Field(default=True, alias="showLegend")


class LineWidget(WidgetBase):
    """Completion trend chart."""

    type: Literal["line"] = "line"
    metric: str = "completion_trend"
    timeframe: Timeframe = Field(default=Timeframe.WEEK)
    show_legend: bool = Field(default=True, alias="showLegend")


class TableWidget(WidgetBase):
    """Paginated progress table."""

    type: Literal["table"] = "table"
    metric: str = "system_progress"
    page_size: int = Field(default=5, ge=1, alias="pageSize")
    columns: list[str] = Field(default_factory=lambda: list(TABLE_COLUMNS))


class UnknownWidget(WidgetBase):
    """Widget whose type tag this version does not know; kept so it round-trips."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None


_WIDGET_TAGS = tuple(t.value for t in WidgetType)


def _widget_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, Enum):
        kind = kind.value
    return kind if kind in _WIDGET_TAGS else "unknown"


Widget = Annotated[
    Union[
        Annotated[SummaryWidget, Tag("summary")],
        Annotated[BarWidget, Tag("bar")],
        Annotated[PieWidget, Tag("pie")],
        Annotated[LineWidget, Tag("line")],
        Annotated[TableWidget, Tag("table")],
        Annotated[UnknownWidget, Tag("unknown")],
    ],
    Discriminator(_widget_tag),
]

WIDGET_ADAPTER: TypeAdapter = TypeAdapter(Widget)
WIDGET_LIST_ADAPTER: TypeAdapter = TypeAdapter(list[Widget])


# Dashboard models
class DashboardFilter(BaseModel):
    """Filter declared on a dashboard."""

    id: str = Field(description="Filter ID (job, system, flange_type, ...)")
    name: str = Field(description="Display name")
    enabled: bool = Field(default=True, description="Shown on the dashboard")


class Dashboard(BaseModel):
    """Named, ordered collection of widgets plus filter declarations."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Dashboard ID")
    name: str = Field(default="New Dashboard", description="Dashboard name")
    description: Optional[str] = Field(default="", description="Dashboard description")
    layout: LayoutType = Field(default=LayoutType.GRID, description="Layout mode")
    widgets: list[Widget] = Field(default_factory=list, description="Ordered widgets")
    filters: list[DashboardFilter] = Field(default_factory=list, description="Filters")

    def get_widget(self, widget_id: str) -> Optional[WidgetBase]:
        """Return the widget with the given id, if any."""
        return next((w for w in self.widgets if w.id == widget_id), None)

    def to_blob(self) -> dict[str, Any]:
        """Serialize with the persisted key names."""
        return self.model_dump(mode="json", by_alias=True)
