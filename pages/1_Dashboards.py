"""
Dashboards Page
===============
View saved flange dashboards.

Features:
- Switch between saved dashboards
- Filter records by job, system, and flange attributes
- Refresh flange data
- Create, edit, and delete dashboards
"""

import sys
from pathlib import Path

import streamlit as st

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.flange_dashboard.renderer import DashboardRenderer  # noqa: E402
from frontend.flange_dashboard.streamlit_components import (  # noqa: E402
    get_dashboard_manager,
    inject_styles,
    last_updated_caption,
    render_error_banner,
    render_filter_bar,
    render_grid,
    reset_filters,
    table_pages,
)
from shared.logging.config import configure_logging  # noqa: E402

configure_logging()

# Page config
st.set_page_config(
    page_title="Dashboards - Flange Dashboard",
    page_icon=None,
    layout="wide",
)

inject_styles()

st.title("Dashboards")

manager = get_dashboard_manager()
store = manager.record_store

# Toolbar
if not manager.dashboards:
    st.info("No dashboards yet. Create one to get started.")
    if st.button("Create Dashboard", type="primary"):
        st.session_state.editing_dashboard_id = None
        st.switch_page("pages/2_Dashboard_Builder.py")
    st.stop()

ids = [d.id for d in manager.dashboards]
names = {d.id: d.name for d in manager.dashboards}
active_index = ids.index(manager.active_dashboard_id) if manager.active_dashboard_id in ids else 0

select_col, refresh_col, new_col, edit_col, delete_col = st.columns([4, 1, 1, 1, 1])
with select_col:
    selected_id = st.selectbox(
        "Dashboard",
        ids,
        index=active_index,
        format_func=lambda dashboard_id: names[dashboard_id],
        label_visibility="collapsed",
    )
    manager.set_active(selected_id)

with refresh_col:
    if st.button("Refresh", use_container_width=True):
        with st.spinner("Loading flange data..."):
            manager.refresh()
        st.rerun()

with new_col:
    if st.button("New", use_container_width=True):
        st.session_state.editing_dashboard_id = None
        st.switch_page("pages/2_Dashboard_Builder.py")

with edit_col:
    if st.button("Edit", use_container_width=True):
        st.session_state.editing_dashboard_id = manager.active_dashboard_id
        st.switch_page("pages/2_Dashboard_Builder.py")

with delete_col:
    if st.button("Delete", use_container_width=True):
        deleted = manager.active_dashboard
        manager.delete(deleted.id)
        st.toast(f"Dashboard deleted. {deleted.name} has been deleted.")
        st.rerun()

dashboard = manager.active_dashboard

if dashboard.description:
    st.markdown(dashboard.description)

render_error_banner(store)

caption = last_updated_caption(store)
if caption:
    st.caption(caption)

# Filters and widgets
filter_state_key = f"filters_{dashboard.id}"
# Switching dashboards starts from an unfiltered view
if st.session_state.get("viewed_dashboard_id") != dashboard.id:
    reset_filters(dashboard, filter_state_key)
    st.session_state.viewed_dashboard_id = dashboard.id
filter_values = render_filter_bar(dashboard, store.records, filter_state_key)

if not dashboard.widgets:
    st.info("This dashboard has no widgets. Edit it to add some.")
else:
    key_prefix = f"{dashboard.id}_"
    views = DashboardRenderer().render(
        dashboard,
        store.records,
        filter_values=filter_values,
        loading=store.is_loading,
        pages=table_pages(dashboard.widgets, key_prefix),
    )
    render_grid(views, dashboard.layout, key_prefix)
