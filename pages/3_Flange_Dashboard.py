"""
Flange Dashboard Page
=====================
The single editable flange progress dashboard.

Features:
- Summary cards, status and type charts, and system progress table
- Edit mode: add, delete, and reorder widgets, reset to the default layout
- Table column settings remembered between sessions
"""

import sys
from pathlib import Path

import streamlit as st

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.flange_dashboard.exceptions import DashboardError  # noqa: E402
from frontend.flange_dashboard.metrics import compatible_metrics  # noqa: E402
from frontend.flange_dashboard.models import TABLE_COLUMNS, Dashboard, WidgetType  # noqa: E402
from frontend.flange_dashboard.renderer import COLUMN_LABELS, DashboardRenderer  # noqa: E402
from frontend.flange_dashboard.streamlit_components import (  # noqa: E402
    get_layout_editor,
    get_record_store,
    inject_styles,
    last_updated_caption,
    render_error_banner,
    render_grid,
    show_error,
    table_pages,
)
from frontend.flange_dashboard.templates import WIDGET_TYPE_NAMES  # noqa: E402
from shared.logging.config import configure_logging  # noqa: E402

configure_logging()

# Page config
st.set_page_config(
    page_title="Flange Dashboard",
    page_icon=None,
    layout="wide",
)

inject_styles()

st.title("Flange Dashboard")

store = get_record_store()
editor = get_layout_editor()
edit_mode = st.session_state.setdefault("flange_edit_mode", False)

# Toolbar
edit_col, refresh_col, columns_col, _ = st.columns([1, 1, 1, 3])
with edit_col:
    if st.button("Done Editing" if edit_mode else "Edit Layout", use_container_width=True):
        st.session_state.flange_edit_mode = not edit_mode
        st.rerun()
with refresh_col:
    if st.button("Refresh", use_container_width=True):
        with st.spinner("Loading flange data..."):
            store.refresh()
        st.rerun()
with columns_col:
    with st.popover("Table Columns", use_container_width=True):
        for column in TABLE_COLUMNS:
            visible = st.checkbox(
                COLUMN_LABELS[column],
                value=editor.column_settings.get(column, True),
                key=f"column_{column}",
            )
            if visible != editor.column_settings.get(column, True):
                editor.set_column(column, visible)

render_error_banner(store)

caption = last_updated_caption(store)
if caption:
    st.caption(caption)

# Edit controls
if edit_mode:
    with st.container(border=True):
        st.subheader("Add New Widget")
        type_col, metric_col, title_col = st.columns(3)
        widget_types = [t.value for t in WidgetType]
        with type_col:
            new_type = st.selectbox(
                "Widget Type", widget_types, format_func=lambda t: WIDGET_TYPE_NAMES[t]
            )
        with metric_col:
            metrics = compatible_metrics(new_type)
            metric_names = {m.id: m.name for m in metrics}
            new_metric = st.selectbox(
                "Metric",
                [""] + list(metric_names),
                format_func=lambda m: metric_names.get(m, "Select a metric"),
            )
        with title_col:
            new_title = st.text_input("Title", placeholder="Defaults to the metric name")

        add_col, reset_col, _ = st.columns([1, 1, 4])
        with add_col:
            if st.button("Add Widget", type="primary", use_container_width=True):
                try:
                    editor.add_widget(new_type, metric=new_metric or None, title=new_title or None)
                except DashboardError as e:
                    show_error(e)
                else:
                    st.toast("Widget added. New widget has been added to the dashboard")
                    st.rerun()
        with reset_col:
            if st.button("Reset Layout", use_container_width=True):
                editor.reset()
                st.toast("Layout reset. Dashboard layout has been reset to default")
                st.rerun()

    with st.container(border=True):
        st.subheader("Widgets")
        for index, widget in enumerate(list(editor.widgets)):
            label_col, up_col, down_col, delete_col = st.columns([4, 1, 1, 1])
            with label_col:
                st.markdown(f"**{widget.title}** ({widget.type}, {widget.size})")
            with up_col:
                if st.button("Up", key=f"layout_{widget.id}_up", disabled=index == 0):
                    editor.move_widget(index, index - 1)
                    st.rerun()
            with down_col:
                last = index == len(editor.widgets) - 1
                if st.button("Down", key=f"layout_{widget.id}_down", disabled=last):
                    editor.move_widget(index, index + 1)
                    st.rerun()
            with delete_col:
                if st.button("Delete", key=f"layout_{widget.id}_delete"):
                    editor.delete_widget(widget.id)
                    st.toast("Widget removed. Widget has been removed from the dashboard")
                    st.rerun()

# Widgets
page = Dashboard(id="flange-dashboard", name="Flange Dashboard", widgets=editor.widgets)
key_prefix = "flange_"
views = DashboardRenderer().render(
    page,
    store.records,
    loading=store.is_loading,
    pages=table_pages(page.widgets, key_prefix),
    column_settings=editor.column_settings,
)
render_grid(views, page.layout, key_prefix)
