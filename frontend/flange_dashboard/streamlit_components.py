"""Streamlit components shared by the dashboard pages.

Session-scoped services live in ``st.session_state`` so they survive the
script re-runs Streamlit performs on every interaction.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

import pandas as pd
import streamlit as st

from shared.config.settings import settings

from .builder import LayoutEditor
from .charts import bar_figure, line_figure, pie_figure
from .exceptions import DashboardError
from .filters import (
    ALL,
    FILTER_FIELDS,
    get_filter_options,
    initial_filter_values,
    sync_filter_values,
    update_filter_value,
)
from .manager import DashboardManager
from .models import Dashboard
from .records import RecordStore
from .renderer import (
    NO_DATA_MESSAGE,
    BarView,
    LineView,
    PieView,
    SummaryView,
    TableView,
    UnknownView,
    WidgetView,
    column_span,
    grid_columns,
)
from .storage import DashboardRepository, JsonFileKeyValueStore, LayoutRepository

SUMMARY_ICONS = {
    "gauge": "⏲",
    "settings": "⚙",
    "check": "✔",
    "alert": "⚠",
}

FIGURE_BUILDERS = {BarView: bar_figure, PieView: pie_figure, LineView: line_figure}

CARD_CSS = """
<style>
    .main {
        padding: 0rem 1rem;
    }
    h1 {
        color: #1a1a1a;
        padding-bottom: 1rem;
        border-bottom: 1px solid #e0e0e0;
        font-weight: 600;
    }
    .metric-card {
        background: #ffffff;
        padding: 0.75rem 1rem;
        border-radius: 8px;
        margin: 0.25rem 0;
    }
    .metric-card h3 {
        color: #1a1a1a;
        font-size: 1.75rem;
        font-weight: 700;
        margin: 0;
    }
    .metric-card p {
        color: #666;
        font-size: 0.9rem;
        margin: 0 0 0.25rem 0;
    }
</style>
"""


def inject_styles() -> None:
    """Custom CSS for widget cards."""
    st.markdown(CARD_CSS, unsafe_allow_html=True)


# Session services
def get_record_store() -> RecordStore:
    """Record store of this session; loads records on first use."""
    if "record_store" not in st.session_state:
        store = RecordStore()
        store.refresh()
        st.session_state.record_store = store
    return st.session_state.record_store


def _key_value_store() -> JsonFileKeyValueStore:
    if "key_value_store" not in st.session_state:
        st.session_state.key_value_store = JsonFileKeyValueStore(settings.storage_dir)
    return st.session_state.key_value_store


def get_dashboard_manager() -> DashboardManager:
    if "dashboard_manager" not in st.session_state:
        st.session_state.dashboard_manager = DashboardManager(
            DashboardRepository(_key_value_store()), get_record_store()
        )
    return st.session_state.dashboard_manager


def get_layout_editor() -> LayoutEditor:
    if "layout_editor" not in st.session_state:
        st.session_state.layout_editor = LayoutEditor(LayoutRepository(_key_value_store()))
    return st.session_state.layout_editor


def show_error(error: DashboardError) -> None:
    """Transient notification for a rejected user action."""
    description = error.details.get("description", "")
    st.toast(f"{error.message}. {description}".strip(), icon="⚠️")


def render_error_banner(store: RecordStore) -> None:
    """Banner with a retry button when the last load failed."""
    if not store.error:
        return
    st.error(f"Error loading flange data: {store.error}")
    if st.button("Retry", key="retry_load"):
        store.refresh()
        st.rerun()


# Filters
def filter_widget_key(state_key: str, filter_id: str) -> str:
    return f"{state_key}_{filter_id}"


def reset_filters(dashboard: Dashboard, state_key: str) -> None:
    """Set every enabled filter back to ``"all"``.

    Runs as a button callback, before the selectboxes are created again, so
    their stored values can be cleared.
    """
    st.session_state[state_key] = initial_filter_values(dashboard.filters)
    for dashboard_filter in dashboard.filters:
        st.session_state.pop(filter_widget_key(state_key, dashboard_filter.id), None)


def render_filter_bar(
    dashboard: Dashboard, records: Sequence[Mapping[str, Any]], state_key: str
) -> dict[str, str]:
    """Selectboxes for the dashboard's enabled filters, plus a reset button.

    Returns:
        Filter id -> selected value (``"all"`` when unconstrained), covering
        exactly the enabled filters
    """
    values = sync_filter_values(dashboard.filters, st.session_state.get(state_key))
    enabled = [f for f in dashboard.filters if f.enabled and f.id in FILTER_FIELDS]
    if not enabled:
        st.session_state[state_key] = values
        return dict(values)

    columns = st.columns(len(enabled) + 1)
    for column, dashboard_filter in zip(columns, enabled):
        options = [ALL] + get_filter_options(records, dashboard_filter.id)
        current = values.get(dashboard_filter.id, ALL)
        with column:
            selected = st.selectbox(
                dashboard_filter.name,
                options,
                index=options.index(current) if current in options else 0,
                format_func=lambda v, name=dashboard_filter.name: f"All {name}s" if v == ALL else v,
                key=filter_widget_key(state_key, dashboard_filter.id),
            )
        values = update_filter_value(values, dashboard_filter.id, selected)

    with columns[-1]:
        st.button(
            "Reset Filters",
            key=f"{state_key}_reset",
            on_click=reset_filters,
            args=(dashboard, state_key),
            use_container_width=True,
        )

    st.session_state[state_key] = values
    return dict(values)


# Widgets
def _render_summary(view: SummaryView) -> None:
    icon = SUMMARY_ICONS.get(view.icon, SUMMARY_ICONS["gauge"])
    st.markdown(
        f"""
<div class="metric-card">
    <p>{view.title} <span style="color: {view.icon_color}; float: right;">{icon}</span></p>
    <h3>{view.value}</h3>
</div>
""",
        unsafe_allow_html=True,
    )


def _render_table(view: TableView, page_key: str) -> None:
    frame = pd.DataFrame(view.rows, columns=view.columns).rename(columns=view.column_labels)
    if "Progress" in frame.columns:
        frame["Progress"] = frame["Progress"].map(lambda p: f"{p}%")
    st.dataframe(frame, hide_index=True, use_container_width=True)

    if view.page_count > 1:
        previous_col, label_col, next_col = st.columns([1, 2, 1])
        with previous_col:
            if st.button("Previous", key=f"{page_key}_prev", disabled=view.page == 0):
                st.session_state[page_key] = view.page - 1
                st.rerun()
        with label_col:
            st.caption(f"Page {view.page + 1} of {view.page_count}")
        with next_col:
            if st.button(
                "Next", key=f"{page_key}_next", disabled=view.page + 1 >= view.page_count
            ):
                st.session_state[page_key] = view.page + 1
                st.rerun()


def render_widget(view: WidgetView, key_prefix: str = "") -> None:
    """Draw one rendered widget inside a bordered container."""
    with st.container(border=True):
        if not isinstance(view, SummaryView) or view.loading or view.empty:
            st.markdown(f"**{view.title}**")

        if isinstance(view, UnknownView):
            st.warning(view.message)
        elif view.loading:
            st.caption("Loading...")
        elif view.empty:
            st.info(NO_DATA_MESSAGE)
        elif isinstance(view, SummaryView):
            _render_summary(view)
        elif isinstance(view, (BarView, PieView, LineView)):
            figure = FIGURE_BUILDERS[type(view)](view)
            st.plotly_chart(
                figure, use_container_width=True, key=f"{key_prefix}chart_{view.widget_id}"
            )
        elif isinstance(view, TableView):
            _render_table(view, table_page_key(key_prefix, view.widget_id))


def table_page_key(key_prefix: str, widget_id: str) -> str:
    return f"{key_prefix}page_{widget_id}"


def _rows(views: Sequence[WidgetView], columns: int) -> list[list[tuple[WidgetView, int]]]:
    rows: list[list[tuple[WidgetView, int]]] = []
    used = columns
    for view in views:
        span = column_span(view.size, columns)
        if used + span > columns:
            rows.append([])
            used = 0
        rows[-1].append((view, span))
        used += span
    return rows


def render_grid(views: Sequence[WidgetView], layout: str, key_prefix: str = "") -> None:
    """Place widgets left to right, wrapping when a row is full."""
    columns = grid_columns(layout)
    for row in _rows(views, columns):
        spans = [span for _, span in row]
        remaining = columns - sum(spans)
        cells = st.columns(spans + ([remaining] if remaining else []))
        for cell, (view, _) in zip(cells, row):
            with cell:
                render_widget(view, key_prefix)


def table_pages(views_or_widgets: Sequence[Any], key_prefix: str = "") -> dict[str, int]:
    """Current table page per widget id, from session state."""
    pages: dict[str, int] = {}
    for item in views_or_widgets:
        widget_id = getattr(item, "id", None) or getattr(item, "widget_id", None)
        pages[widget_id] = st.session_state.get(table_page_key(key_prefix, widget_id), 0)
    return pages


def last_updated_caption(store: RecordStore) -> Optional[str]:
    if store.last_loaded_at is None:
        return None
    return f"{len(store.records)} records, updated {store.last_loaded_at:%H:%M:%S}"
