"""Configurable flange progress dashboards.

This package turns a flat collection of flange records into dashboard
widgets: filters narrow the records, metrics aggregate them, and the
renderer shapes each widget's result for display. Dashboards and the flange
page layout are persisted as JSON blobs in a key-value store.
"""

from .builder import DashboardBuilder, LayoutEditor
from .colors import get_inspection_status_color, get_status_color, hash_color
from .exceptions import (
    DashboardError,
    DataSourceError,
    FilterError,
    StorageError,
    ValidationError,
    WidgetError,
)
from .filters import ALL, AVAILABLE_FILTERS, apply_filters, get_filter_options
from .manager import DashboardManager
from .metrics import METRICS, MetricAggregator, aggregate, compatible_metrics
from .models import (
    BarWidget,
    Dashboard,
    DashboardFilter,
    FlangeRecord,
    LayoutType,
    LineWidget,
    PieWidget,
    SummaryWidget,
    TableWidget,
    UnknownWidget,
    WidgetSize,
    WidgetType,
)
from .records import FlangeLogClient, MockFlangeLoader, RecordStore
from .renderer import DashboardRenderer, WidgetRenderer, column_span, grid_columns
from .storage import (
    DashboardRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    LayoutRepository,
)
from .trend import SyntheticTrendProvider, TrendProvider

__all__ = [
    # Models
    "FlangeRecord",
    "Dashboard",
    "DashboardFilter",
    "SummaryWidget",
    "BarWidget",
    "PieWidget",
    "LineWidget",
    "TableWidget",
    "UnknownWidget",
    "WidgetType",
    "WidgetSize",
    "LayoutType",
    # Filtering and aggregation
    "ALL",
    "AVAILABLE_FILTERS",
    "apply_filters",
    "get_filter_options",
    "METRICS",
    "MetricAggregator",
    "aggregate",
    "compatible_metrics",
    "TrendProvider",
    "SyntheticTrendProvider",
    "get_status_color",
    "get_inspection_status_color",
    "hash_color",
    # Rendering
    "WidgetRenderer",
    "DashboardRenderer",
    "column_span",
    "grid_columns",
    # Editing and persistence
    "DashboardBuilder",
    "LayoutEditor",
    "DashboardManager",
    "DashboardRepository",
    "LayoutRepository",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Records
    "RecordStore",
    "FlangeLogClient",
    "MockFlangeLoader",
    # Exceptions
    "DashboardError",
    "WidgetError",
    "FilterError",
    "ValidationError",
    "StorageError",
    "DataSourceError",
]
