"""
Dashboard Builder Page
======================
Create or edit a flange dashboard.

Features:
- Name, description, and layout settings
- Add, configure, reorder, and remove widgets
- Declare and toggle dashboard filters
- Live preview against the current flange data
"""

import sys
from pathlib import Path

import streamlit as st

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.flange_dashboard.builder import DashboardBuilder  # noqa: E402
from frontend.flange_dashboard.exceptions import DashboardError  # noqa: E402
from frontend.flange_dashboard.filters import AVAILABLE_FILTERS  # noqa: E402
from frontend.flange_dashboard.metrics import compatible_metrics  # noqa: E402
from frontend.flange_dashboard.models import (  # noqa: E402
    TABLE_COLUMNS,
    BarOrientation,
    LayoutType,
    SummaryIcon,
    Timeframe,
    WidgetSize,
    WidgetType,
)
from frontend.flange_dashboard.renderer import COLUMN_LABELS, DashboardRenderer  # noqa: E402
from frontend.flange_dashboard.colors import ICON_COLORS  # noqa: E402
from frontend.flange_dashboard.streamlit_components import (  # noqa: E402
    get_dashboard_manager,
    inject_styles,
    render_grid,
    show_error,
)
from frontend.flange_dashboard.templates import (  # noqa: E402
    WIDGET_TYPE_DESCRIPTIONS,
    WIDGET_TYPE_NAMES,
)
from shared.logging.config import configure_logging  # noqa: E402

configure_logging()

# Page config
st.set_page_config(
    page_title="Dashboard Builder - Flange Dashboard",
    page_icon=None,
    layout="wide",
)

inject_styles()

manager = get_dashboard_manager()
editing_id = st.session_state.get("editing_dashboard_id")

# A new builder whenever a different dashboard is opened
if st.session_state.get("builder_for") != editing_id or "dashboard_builder" not in st.session_state:
    st.session_state.dashboard_builder = DashboardBuilder.for_dashboard(
        manager.dashboards, editing_id
    )
    st.session_state.builder_for = editing_id

builder: DashboardBuilder = st.session_state.dashboard_builder
dashboard = builder.dashboard


def _leave() -> None:
    st.session_state.pop("dashboard_builder", None)
    st.session_state.pop("builder_for", None)
    st.switch_page("pages/1_Dashboards.py")


st.title("Edit Dashboard" if editing_id else "New Dashboard")

back_col, _, cancel_col, save_col = st.columns([2, 4, 1, 1])
with back_col:
    if st.button("Back to Dashboards"):
        _leave()
with cancel_col:
    if st.button("Cancel", use_container_width=True):
        _leave()
with save_col:
    if st.button("Save Dashboard", type="primary", use_container_width=True):
        try:
            manager.save(builder.build())
        except DashboardError as e:
            show_error(e)
        else:
            st.toast("Dashboard saved")
            _leave()

config_col, options_col = st.columns([2, 1])

# Dashboard configuration
with config_col:
    with st.container(border=True):
        st.subheader("Dashboard Configuration")
        name_col, layout_col = st.columns(2)
        with name_col:
            builder.set_name(st.text_input("Dashboard Name", value=dashboard.name))
        with layout_col:
            layouts = [t.value for t in LayoutType]
            builder.set_layout(
                st.selectbox(
                    "Layout",
                    layouts,
                    index=layouts.index(dashboard.layout),
                    format_func=str.title,
                )
            )
        builder.set_description(
            st.text_area("Description", value=dashboard.description or "", height=80)
        )

    st.subheader("Preview")
    if not dashboard.widgets:
        st.info("Add widgets to see a preview.")
    else:
        store = manager.record_store
        views = DashboardRenderer().render(dashboard, store.records, loading=store.is_loading)
        render_grid(views, dashboard.layout, key_prefix="preview_")

# Widgets and filters
with options_col:
    widgets_tab, filters_tab = st.tabs(["Widgets", "Filters"])

    with widgets_tab:
        widget_types = [t.value for t in WidgetType]
        new_type = st.selectbox(
            "Widget type", widget_types, format_func=lambda t: WIDGET_TYPE_NAMES[t]
        )
        st.caption(WIDGET_TYPE_DESCRIPTIONS[new_type])
        if st.button("Add Widget", use_container_width=True):
            builder.add_widget(new_type)
            st.rerun()

        for index, widget in enumerate(list(dashboard.widgets)):
            with st.expander(f"{widget.title} ({widget.type})"):
                key = f"w_{widget.id}"
                updates = {
                    "title": st.text_input("Title", value=widget.title, key=f"{key}_title"),
                    "size": st.selectbox(
                        "Size",
                        [s.value for s in WidgetSize],
                        index=[s.value for s in WidgetSize].index(widget.size),
                        key=f"{key}_size",
                    ),
                }

                metrics = compatible_metrics(widget.type)
                metric_ids = [m.id for m in metrics]
                metric_names = {m.id: m.name for m in metrics}
                if widget.metric not in metric_ids:
                    metric_ids.insert(0, widget.metric)
                updates["metric"] = st.selectbox(
                    "Metric",
                    metric_ids,
                    index=metric_ids.index(widget.metric),
                    format_func=lambda m: metric_names.get(m, m),
                    key=f"{key}_metric",
                )

                if widget.type == WidgetType.SUMMARY.value:
                    icons = [i.value for i in SummaryIcon]
                    colors = list(ICON_COLORS)
                    updates["icon"] = st.selectbox(
                        "Icon",
                        icons,
                        index=icons.index(widget.icon) if widget.icon in icons else 0,
                        key=f"{key}_icon",
                    )
                    updates["color"] = st.selectbox(
                        "Color",
                        colors,
                        index=colors.index(widget.color) if widget.color in colors else 0,
                        key=f"{key}_color",
                    )
                if widget.type == WidgetType.BAR.value:
                    orientations = [o.value for o in BarOrientation]
                    updates["orientation"] = st.radio(
                        "Orientation",
                        orientations,
                        index=orientations.index(widget.orientation),
                        horizontal=True,
                        key=f"{key}_orientation",
                    )
                if widget.type == WidgetType.PIE.value:
                    updates["donut"] = st.checkbox(
                        "Donut", value=widget.donut, key=f"{key}_donut"
                    )
                if widget.type == WidgetType.LINE.value:
                    timeframes = [t.value for t in Timeframe]
                    updates["timeframe"] = st.selectbox(
                        "Timeframe",
                        timeframes,
                        index=timeframes.index(widget.timeframe),
                        format_func=str.title,
                        key=f"{key}_timeframe",
                    )
                if widget.type in (WidgetType.BAR.value, WidgetType.PIE.value, WidgetType.LINE.value):
                    updates["show_legend"] = st.checkbox(
                        "Show legend", value=widget.show_legend, key=f"{key}_legend"
                    )
                if widget.type == WidgetType.TABLE.value:
                    updates["page_size"] = st.number_input(
                        "Rows per page",
                        min_value=1,
                        max_value=50,
                        value=widget.page_size,
                        key=f"{key}_page_size",
                    )
                    updates["columns"] = st.multiselect(
                        "Columns",
                        TABLE_COLUMNS,
                        default=[c for c in TABLE_COLUMNS if c in widget.columns],
                        format_func=lambda c: COLUMN_LABELS[c],
                        key=f"{key}_columns",
                    )

                if widget.type in widget_types:
                    try:
                        builder.update_widget(widget.id, **updates)
                    except DashboardError as e:
                        show_error(e)

                up_col, down_col, remove_col = st.columns(3)
                with up_col:
                    if st.button("Up", key=f"{key}_up", disabled=index == 0):
                        builder.move_widget(index, index - 1)
                        st.rerun()
                with down_col:
                    last = index == len(dashboard.widgets) - 1
                    if st.button("Down", key=f"{key}_down", disabled=last):
                        builder.move_widget(index, index + 1)
                        st.rerun()
                with remove_col:
                    if st.button("Remove", key=f"{key}_remove"):
                        builder.remove_widget(widget.id)
                        st.rerun()

    with filters_tab:
        filter_names = {f["id"]: f["name"] for f in AVAILABLE_FILTERS}
        filter_id = st.selectbox(
            "Filter", list(filter_names), format_func=lambda f: filter_names[f]
        )
        if st.button("Add Filter", use_container_width=True):
            try:
                builder.add_filter(filter_id)
            except DashboardError as e:
                show_error(e)
            else:
                st.rerun()

        for dashboard_filter in list(dashboard.filters):
            toggle_col, remove_col = st.columns([3, 1])
            with toggle_col:
                builder.toggle_filter(
                    dashboard_filter.id,
                    st.toggle(
                        dashboard_filter.name,
                        value=dashboard_filter.enabled,
                        key=f"filter_{dashboard_filter.id}",
                    ),
                )
            with remove_col:
                if st.button("Remove", key=f"filter_{dashboard_filter.id}_remove"):
                    builder.remove_filter(dashboard_filter.id)
                    st.rerun()
