"""Tab 4: Floors & Diagnostics — floor buffer usage and placement issues."""

import streamlit as st
import pandas as pd

from data.session_store import get_allocation_session, is_data_loaded
from data.exporter import floor_rows
from engine.spatial import get_floor_utilization
from components.charts import floor_buffer_bar, floor_utilization_bar
from components.tables import render_floor_table
from components.metrics_cards import render_diagnostics


def render(sidebar_state):
    """Render the Floors & Diagnostics tab."""
    st.header("Floors & Diagnostics")

    if not is_data_loaded():
        st.info("No data loaded. Please upload data in the Space Data tab.")
        return

    result = get_allocation_session().result
    if result is None:
        st.info("No allocation results available. Run one from the Allocation tab.")
        return

    col1, col2 = st.columns([3, 2])

    with col1:
        st.subheader("Floor Limits")
        rows = floor_rows(result)
        if rows:
            render_floor_table(pd.DataFrame(rows))
            st.plotly_chart(floor_buffer_bar(rows), use_container_width=True)
        else:
            st.info("No floor data in this run.")

    with col2:
        render_diagnostics(result)

    utilization = get_floor_utilization(result)
    if utilization:
        st.divider()
        st.plotly_chart(floor_utilization_bar(utilization), use_container_width=True)

        exhausted = [u for u in utilization if u["buffer_exhausted"] and u["total_capacity"] > u["base_capacity"]]
        if exhausted:
            for u in exhausted:
                st.warning(
                    f"**{u['building']} · {u['floor_label']}**: floor buffer fully used "
                    f"({u['used_seats']} seats placed on {u['base_capacity']} base)"
                )
        else:
            st.success("Every floor still has buffer headroom.")
