"""Unit tests for dashboard and record models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from frontend.flange_dashboard.models import (
    WIDGET_ADAPTER,
    WIDGET_LIST_ADAPTER,
    BarWidget,
    Dashboard,
    FlangeRecord,
    LineWidget,
    SummaryWidget,
    TableWidget,
    UnknownWidget,
)
from frontend.flange_dashboard.templates import (
    DEFAULT_WIDGET_CONFIGS,
    default_widgets,
    new_widget,
    sample_dashboards,
)


class TestFlangeRecord:
    """Test flange record validation."""

    def test_minimal_record(self):
        """Test that only the id is required."""
        record = FlangeRecord(id=1)

        assert record.status is None
        assert record.percent_complete is None

    def test_status_stored_as_string(self):
        """Test enum values are kept as plain strings."""
        record = FlangeRecord(id=1, status="On Hold", inspection_status="Failed")

        assert record.status == "On Hold"
        assert record.model_dump()["inspection_status"] == "Failed"

    def test_invalid_status_rejected(self):
        """Test the status vocabulary."""
        with pytest.raises(PydanticValidationError):
            FlangeRecord(id=1, status="Finished")

    def test_percent_complete_bounds(self):
        """Test the 0-100 range."""
        with pytest.raises(PydanticValidationError):
            FlangeRecord(id=1, percent_complete=101)

    def test_extra_fields_kept(self):
        """Test that unknown columns survive."""
        record = FlangeRecord(id=1, area="North")

        assert record.model_dump()["area"] == "North"


class TestWidgets:
    """Test the widget tagged union."""

    def test_dispatch_on_type(self):
        """Test that each tag selects its model."""
        widgets = WIDGET_LIST_ADAPTER.validate_python(
            [{"type": "summary"}, {"type": "bar"}, {"type": "line"}, {"type": "table"}]
        )

        assert [type(w) for w in widgets] == [SummaryWidget, BarWidget, LineWidget, TableWidget]

    def test_camel_case_options(self):
        """Test persisted option names."""
        widget = WIDGET_ADAPTER.validate_python({"type": "table", "pageSize": 10})

        assert widget.page_size == 10
        assert widget.model_dump(by_alias=True)["pageSize"] == 10

    def test_unknown_type_round_trips(self):
        """Test that unknown widgets keep their options."""
        blob = {"id": "w1", "type": "gauge", "title": "Dial", "needle": "red"}

        widget = WIDGET_ADAPTER.validate_python(blob)
        dumped = widget.model_dump(by_alias=True)

        assert isinstance(widget, UnknownWidget)
        assert dumped["type"] == "gauge"
        assert dumped["needle"] == "red"

    def test_widget_ids_unique(self):
        """Test generated ids."""
        assert SummaryWidget().id != SummaryWidget().id

    def test_invalid_page_size(self):
        """Test table page size validation."""
        with pytest.raises(PydanticValidationError):
            TableWidget(page_size=0)


class TestDashboard:
    """Test dashboard serialization."""

    def test_defaults(self):
        """Test a new dashboard."""
        dashboard = Dashboard()

        assert dashboard.name == "New Dashboard"
        assert dashboard.layout == "grid"
        assert dashboard.widgets == []

    def test_blob_round_trip(self):
        """Test that a dashboard survives its persisted form."""
        dashboard = sample_dashboards()[0]

        restored = Dashboard.model_validate(dashboard.to_blob())

        assert restored == dashboard
        assert dashboard.to_blob()["widgets"][3]["showLegend"] is True

    def test_get_widget(self):
        """Test widget lookup."""
        dashboard = sample_dashboards()[0]

        assert dashboard.get_widget("widget-5").donut is True
        assert dashboard.get_widget("missing") is None


class TestTemplates:
    """Test built-in layouts and defaults."""

    def test_sample_dashboard(self):
        """Test the sample dashboard content."""
        dashboards = sample_dashboards()

        assert [d.id for d in dashboards] == ["sample-dashboard-1"]
        assert len(dashboards[0].widgets) == 6
        assert [f.id for f in dashboards[0].filters] == ["job", "system"]

    def test_default_widgets(self):
        """Test the flange page layout."""
        widgets = default_widgets()

        assert [w.id for w in widgets][:4] == [
            "summary-total",
            "summary-completed",
            "summary-in-progress",
            "summary-not-started",
        ]
        assert widgets[-1].size == "large"

    def test_accessors_return_fresh_copies(self):
        """Test that callers cannot mutate the built-ins."""
        default_widgets()[0].title = "Changed"

        assert default_widgets()[0].title == "Total Flanges"

    @pytest.mark.parametrize("widget_type", sorted(DEFAULT_WIDGET_CONFIGS))
    def test_new_widget_defaults(self, widget_type):
        """Test builder defaults per type."""
        widget = new_widget(widget_type)

        assert widget.type == widget_type
        assert widget.size == "medium"
        assert widget.title == DEFAULT_WIDGET_CONFIGS[widget_type]["title"]
