"""
Flange Dashboard Streamlit Application
======================================
Main entry point for the multi-page Streamlit UI.

Features:
- Configurable dashboards over the flange log
- Dashboard builder with live preview
- Editable single-page flange progress dashboard
"""

import sys
from pathlib import Path

import streamlit as st

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from frontend.flange_dashboard.streamlit_components import (  # noqa: E402
    get_dashboard_manager,
    get_record_store,
    inject_styles,
    last_updated_caption,
    render_error_banner,
)
from shared.config.settings import settings  # noqa: E402
from shared.logging.config import configure_logging  # noqa: E402

configure_logging()

# Page configuration
st.set_page_config(
    page_title=settings.app_name,
    page_icon=None,
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "About": f"# {settings.app_name}\nFlange completion and inspection tracking",
    },
)

inject_styles()

st.title(settings.app_name)
st.markdown(
    """
**Flange Progress Tracking**
Track completion and inspection of flanges across jobs and systems.
"""
)

store = get_record_store()
manager = get_dashboard_manager()

render_error_banner(store)

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Flange records", len(store.records))
with col2:
    st.metric("Saved dashboards", len(manager.dashboards))
with col3:
    caption = last_updated_caption(store)
    st.caption(caption or "No data loaded yet")

st.markdown("---")

nav1, nav2, nav3 = st.columns(3)
with nav1:
    st.markdown("### Dashboards")
    st.markdown("View saved dashboards with filters.")
    st.page_link("pages/1_Dashboards.py", label="Open Dashboards")
with nav2:
    st.markdown("### Dashboard Builder")
    st.markdown("Create a new dashboard from widgets and filters.")
    if st.button("New Dashboard"):
        st.session_state.editing_dashboard_id = None
        st.switch_page("pages/2_Dashboard_Builder.py")
with nav3:
    st.markdown("### Flange Dashboard")
    st.markdown("The editable flange progress overview.")
    st.page_link("pages/3_Flange_Dashboard.py", label="Open Flange Dashboard")

# Sidebar
st.sidebar.title("Navigation")
st.sidebar.markdown("---")
st.sidebar.caption(f"Version {settings.app_version}")
