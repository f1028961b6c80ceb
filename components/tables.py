"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Optional

WARNING_STYLE = "background-color: #ffcccc; color: #cc0000; font-weight: bold"


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    use_container_width: bool = True,
):
    """Render a styled, non-editable dataframe."""
    if title:
        st.subheader(title)
    st.dataframe(df, height=height, use_container_width=use_container_width, hide_index=True)


def render_studio_table(df: pd.DataFrame, status_column: str = "Status"):
    """Studio table with unassigned rows highlighted."""
    def color_row(row):
        if row.get(status_column) == "Unassigned":
            return [WARNING_STYLE] * len(row)
        return [""] * len(row)

    if status_column in df.columns and not df.empty:
        st.dataframe(df.style.apply(color_row, axis=1), use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)


def render_floor_table(df: pd.DataFrame, buffer_column: str = "Remaining Buffer"):
    """Floor table with exhausted buffers highlighted."""
    def color_buffer(val):
        try:
            if float(val) <= 0:
                return WARNING_STYLE
        except (ValueError, TypeError):
            pass
        return ""

    if buffer_column in df.columns and not df.empty:
        styled = df.style.map(color_buffer, subset=[buffer_column])
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)
