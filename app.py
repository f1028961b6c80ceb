"""Studio Space Planner — Streamlit entry point."""

import logging
import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from config.defaults import LOG_LEVEL
from tabs import (
    tab_space_data,
    tab_room_selection,
    tab_allocation,
    tab_floor_summary,
    tab_finance,
)

logging.basicConfig(
    level=os.environ.get("STUDIO_PLANNER_LOG_LEVEL", LOG_LEVEL),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main():
    st.set_page_config(
        page_title="Studio Space Planner",
        page_icon="🏫",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "🗂️ Space Data",
        "🚪 Room Selection",
        "🧩 Allocation",
        "🏢 Floors & Diagnostics",
        "💰 Finance",
    ])

    with tab1:
        tab_space_data.render(sidebar_state)
    with tab2:
        tab_room_selection.render(sidebar_state)
    with tab3:
        tab_allocation.render(sidebar_state)
    with tab4:
        tab_floor_summary.render(sidebar_state)
    with tab5:
        tab_finance.render(sidebar_state)


if __name__ == "__main__":
    main()
