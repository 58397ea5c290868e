"""Unit tests for widget rendering dispatch and presentation helpers."""

import math

import pytest

from frontend.flange_dashboard.metrics import MetricAggregator
from frontend.flange_dashboard.models import (
    TABLE_COLUMNS,
    WIDGET_ADAPTER,
    BarWidget,
    BreakdownItem,
    Dashboard,
    DashboardFilter,
    LineWidget,
    PieWidget,
    SummaryWidget,
    TableWidget,
    TrendPoint,
)
from frontend.flange_dashboard.pagination import page_count, paginate
from frontend.flange_dashboard.renderer import (
    BAR_CHART_HEIGHT_PX,
    BarView,
    DashboardRenderer,
    LineView,
    PieView,
    SummaryView,
    TableView,
    UnknownView,
    WidgetRenderer,
    arc_path,
    bar_items,
    column_span,
    grid_columns,
    label_interval,
    normalize_icon,
    pie_slices,
    trend_bars,
    visible_columns,
)


@pytest.fixture
def renderer(static_trend) -> WidgetRenderer:
    """Widget renderer with a fixed trend series."""
    return WidgetRenderer(MetricAggregator(trend_provider=static_trend))


class TestPresentationHelpers:
    """Test pure layout computations."""

    def test_vertical_bars_scale_to_chart_height(self):
        """Test pixel lengths against the largest value."""
        data = [
            BreakdownItem(name="a", value=10, color="#000"),
            BreakdownItem(name="b", value=5, color="#111"),
        ]

        items = bar_items(data, "vertical")

        assert [item.length for item in items] == [BAR_CHART_HEIGHT_PX, BAR_CHART_HEIGHT_PX / 2]

    def test_horizontal_bars_scale_to_percent(self):
        """Test percentage widths."""
        data = [
            BreakdownItem(name="a", value=4, color="#000"),
            BreakdownItem(name="b", value=1, color="#111"),
        ]

        assert [item.length for item in bar_items(data, "horizontal")] == [100, 25]

    def test_zero_values_have_zero_length(self):
        """Test that an all-zero breakdown does not divide by zero."""
        data = [BreakdownItem(name="a", value=0, color="#000")]

        assert bar_items(data, "vertical")[0].length == 0

    def test_pie_slices_cover_the_circle(self):
        """Test that slice sweeps add up to 360 degrees."""
        data = [
            BreakdownItem(name="a", value=1, color="#000"),
            BreakdownItem(name="b", value=2, color="#111"),
            BreakdownItem(name="c", value=1, color="#222"),
        ]

        slices = pie_slices(data)

        assert slices[0].start_angle == 0
        assert math.isclose(slices[-1].end_angle, 360)
        assert math.isclose(sum(s.fraction for s in slices), 1)
        assert slices[1].start_angle == slices[0].end_angle

    def test_single_slice_is_a_full_circle(self):
        """Test the full-circle path."""
        slices = pie_slices([BreakdownItem(name="a", value=3, color="#000")])

        assert slices[0].path == arc_path(0, 360)
        assert " a 50 50 " in slices[0].path

    def test_large_arc_flag(self):
        """Test the SVG large-arc flag for sweeps over 180 degrees."""
        assert " 0 1 1 " in arc_path(0, 270)
        assert " 0 0 1 " in arc_path(0, 90)

    def test_empty_pie(self):
        """Test that zero totals produce no slices."""
        assert pie_slices([]) == []

    @pytest.mark.parametrize("count, interval", [(0, 1), (8, 1), (10, 1), (11, 2), (13, 2), (31, 4)])
    def test_label_interval(self, count, interval):
        """Test that about ten labels are shown."""
        assert label_interval(count) == interval

    def test_trend_bars(self):
        """Test heights relative to the tallest total."""
        points = [
            TrendPoint(date="Oct 16", completed=50, total=100),
            TrendPoint(date="Oct 17", completed=100, total=200),
        ]

        bars = trend_bars(points)

        assert bars[0].total_height == 50
        assert bars[0].completed_height == 25
        assert bars[1].total_height == 100
        assert bars[0].show_label is True

    def test_visible_columns_keep_table_order(self):
        """Test fixed column order."""
        assert visible_columns(["percentage", "system"]) == ["system", "percentage"]

    def test_column_settings_override_widget_columns(self):
        """Test that page-level settings win."""
        settings = {"system": True, "complete": False, "total": True, "percentage": False}

        assert visible_columns(["system"], settings) == ["system", "total"]

    def test_normalize_icon(self):
        """Test the gauge fallback."""
        assert normalize_icon("check") == "check"
        assert normalize_icon("rocket") == "gauge"
        assert normalize_icon(None) == "gauge"

    @pytest.mark.parametrize(
        "size, columns, span",
        [("large", 3, 3), ("medium", 3, 1), ("medium", 4, 2), ("small", 4, 1), ("large", 1, 1)],
    )
    def test_column_span(self, size, columns, span):
        """Test grid spans per size class."""
        assert column_span(size, columns) == span

    def test_grid_columns(self):
        """Test columns per layout."""
        assert grid_columns("grid") == 3
        assert grid_columns("rows") == 1


class TestPagination:
    """Test table pagination."""

    def test_page_count(self):
        """Test ceiling division."""
        assert page_count(0, 5) == 0
        assert page_count(5, 5) == 1
        assert page_count(6, 5) == 2

    def test_invalid_page_size(self):
        """Test that page sizes must be positive."""
        with pytest.raises(ValueError):
            page_count(3, 0)

    def test_paginate(self):
        """Test slicing a middle page."""
        page = paginate(list(range(12)), 5, 1)

        assert page.items == [5, 6, 7, 8, 9]
        assert page.has_previous and page.has_next

    def test_out_of_range_page_is_clamped(self):
        """Test clamping to the last page."""
        page = paginate(list(range(12)), 5, 9)

        assert page.page == 2
        assert page.items == [10, 11]
        assert not page.has_next


class TestWidgetRenderer:
    """Test per-widget dispatch."""

    def test_summary(self, renderer, sample_records):
        """Test a count summary card."""
        widget = SummaryWidget(title="Completed", metric="completed_flanges", color="green")

        view = renderer.render(widget, sample_records)

        assert isinstance(view, SummaryView)
        assert view.value == 2
        assert view.icon_color == "#22c55e"
        assert not view.empty

    def test_summary_with_breakdown_metric_is_empty(self, renderer, sample_records):
        """Test a type and metric mismatch."""
        view = renderer.render(SummaryWidget(metric="status_breakdown"), sample_records)

        assert view.empty

    def test_summary_with_unknown_metric_is_empty(self, renderer, sample_records):
        """Test that unknown metrics render the no-data state."""
        assert renderer.render(SummaryWidget(metric="nope"), sample_records).empty

    def test_summary_with_zero_count_is_not_empty(self, renderer):
        """Test that a zero count is still a value."""
        view = renderer.render(SummaryWidget(metric="total_flanges"), [])

        assert view.value == 0
        assert not view.empty

    def test_bar(self, renderer, sample_records):
        """Test a status bar chart."""
        view = renderer.render(BarWidget(orientation="horizontal"), sample_records)

        assert isinstance(view, BarView)
        assert view.items[0].name == "Completed"
        assert view.items[0].length == 100

    def test_bar_with_count_metric_is_empty(self, renderer, sample_records):
        """Test a bar chart over a scalar metric."""
        view = renderer.render(BarWidget(metric="total_flanges"), sample_records)

        assert view.empty
        assert view.items == []

    def test_pie(self, renderer, sample_records):
        """Test a donut of flange types."""
        widget = PieWidget(metric="flange_type_distribution", donut=True)

        view = renderer.render(widget, sample_records)

        assert isinstance(view, PieView)
        assert view.donut
        assert view.total == len(sample_records)

    def test_pie_without_records_is_empty(self, renderer):
        """Test the no-data state."""
        assert renderer.render(PieWidget(), []).empty

    def test_line(self, renderer, static_trend):
        """Test the completion trend."""
        view = renderer.render(LineWidget(timeframe="quarter"), [])

        assert isinstance(view, LineView)
        assert view.max_total == 120
        assert len(view.points) == 3
        assert static_trend.requested == ["quarter"]

    def test_table_paginates(self, renderer):
        """Test a paged progress table."""
        records = [{"id": i, "system": f"S{i}", "status": "Completed"} for i in range(7)]
        widget = TableWidget(page_size=5)

        first = renderer.render(widget, records)
        second = renderer.render(widget, records, page=1)

        assert isinstance(first, TableView)
        assert len(first.rows) == 5
        assert len(second.rows) == 2
        assert first.page_count == 2
        assert first.total_rows == 7

    def test_table_column_subset(self, renderer, sample_records):
        """Test visible columns in rows and labels."""
        widget = TableWidget(columns=["system", "percentage"])

        view = renderer.render(widget, sample_records)

        assert view.columns == ["system", "percentage"]
        assert view.rows[0] == {"system": "Test System", "percentage": 50}
        assert view.column_labels == {"system": "System", "percentage": "Progress"}

    def test_table_with_breakdown_metric_is_empty(self, renderer, sample_records):
        """Test a table over a breakdown metric."""
        view = renderer.render(TableWidget(metric="status_breakdown"), sample_records)

        assert view.empty
        assert view.columns == TABLE_COLUMNS

    def test_unknown_type(self, renderer, sample_records):
        """Test the unknown widget placeholder."""
        widget = WIDGET_ADAPTER.validate_python({"id": "x", "type": "gauge", "title": "Dial"})

        view = renderer.render(widget, sample_records)

        assert isinstance(view, UnknownView)
        assert view.title == "Dial"

    def test_loading_skips_aggregation(self, sample_records):
        """Test that a loading render does not compute metrics."""

        class FailingAggregator:
            def aggregate(self, *args, **kwargs):
                raise AssertionError("aggregate called while loading")

        renderer = WidgetRenderer(FailingAggregator())

        view = renderer.render(SummaryWidget(), sample_records, loading=True)

        assert view.loading
        assert not view.empty


class TestDashboardRenderer:
    """Test whole-dashboard rendering."""

    def test_filters_apply_to_every_widget(self, sample_records, static_trend):
        """Test that filtered records feed every widget."""
        dashboard = Dashboard(
            name="Test",
            widgets=[SummaryWidget(metric="total_flanges"), TableWidget()],
            filters=[DashboardFilter(id="job", name="Job Number")],
        )
        renderer = DashboardRenderer(WidgetRenderer(MetricAggregator(static_trend)))

        views = renderer.render(dashboard, sample_records, filter_values={"job": "999999"})

        assert views[0].value == 2
        assert [row["system"] for row in views[1].rows] == ["Test System"]

    def test_views_follow_widget_order(self, sample_records):
        """Test layout order."""
        dashboard = Dashboard(widgets=[TableWidget(id="t"), SummaryWidget(id="s")])

        views = DashboardRenderer().render(dashboard, sample_records)

        assert [view.widget_id for view in views] == ["t", "s"]

    def test_table_pages_per_widget(self, sample_records):
        """Test that each table keeps its own page."""
        dashboard = Dashboard(widgets=[TableWidget(id="t", page_size=1)])

        views = DashboardRenderer().render(dashboard, sample_records, pages={"t": 1})

        assert views[0].page == 1
        assert views[0].rows[0]["system"] == "CA1-030"
