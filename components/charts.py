"""Plotly chart builders for the Studio Space Planner."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List


def floor_buffer_bar(
    floor_rows: List[dict],
    title: str = "Floor Buffer: Allowed vs Used",
) -> go.Figure:
    """Grouped bar of extra capacity allowed and used per floor."""
    df = pd.DataFrame(floor_rows)
    fig = px.bar(
        df, x="Floor ID", y=["Extra Allowance", "Extra Used"],
        barmode="group",
        labels={"value": "Seats", "Floor ID": "Floor", "variable": ""},
        title=title,
        color_discrete_map={"Extra Allowance": "#4A90D9", "Extra Used": "#E8734A"},
    )
    fig.update_layout(legend_title_text="", height=400, xaxis_type="category")
    return fig


def floor_utilization_bar(utilization: List[dict]) -> go.Figure:
    """Horizontal bar of seats placed against base capacity per floor."""
    df = pd.DataFrame(utilization)
    df["label"] = df["building"] + " · " + df["floor_label"]
    df = df.sort_values(["building", "floor_label"], ascending=False)

    fig = px.bar(
        df, x="utilization_pct", y="label",
        orientation="h",
        title="Floor Utilization (of base capacity)",
        labels={"utilization_pct": "Utilization %", "label": "Floor"},
        color="utilization_pct",
        color_continuous_scale=["#4A90D9", "#F5C542", "#E8734A"],
        range_color=[0, 1.2],
    )
    fig.update_layout(height=max(300, len(df) * 35), yaxis_type="category")
    fig.update_traces(texttemplate="%{x:.0%}", textposition="auto")
    return fig


def room_fill_bar(room_rows: List[dict]) -> go.Figure:
    """Stacked bar: base seats used and borrowed overflow per room."""
    df = pd.DataFrame(room_rows)
    df["Within Base"] = df["Seats Used"] - df["Extra Used"]

    fig = go.Figure()
    fig.add_trace(go.Bar(name="Within Base", x=df["Room ID"], y=df["Within Base"], marker_color="#4A90D9"))
    fig.add_trace(go.Bar(name="Floor Buffer", x=df["Room ID"], y=df["Extra Used"], marker_color="#E8734A"))
    fig.add_trace(go.Scatter(
        name="Base Capacity", x=df["Room ID"], y=df["Base Capacity"],
        mode="markers", marker=dict(symbol="line-ew-open", size=18, color="#333333"),
    ))
    fig.update_layout(
        barmode="stack",
        title="Room Fill",
        xaxis_title="Room",
        yaxis_title="Students",
        xaxis_type="category",
        height=400,
    )
    return fig


def assignment_donut(assigned: int, total: int, title: str = "Studios Placed") -> go.Figure:
    """Donut chart of assigned vs unassigned studios."""
    unassigned = total - assigned
    fig = go.Figure(data=[go.Pie(
        labels=["Assigned", "Unassigned"],
        values=[assigned, unassigned],
        hole=0.6,
        marker_colors=["#4A90D9", "#E8734A"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{assigned}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def finance_breakdown_bar(breakdown_rows: List[dict]) -> go.Figure:
    """Stacked cost components per staff role."""
    df = pd.DataFrame(breakdown_rows)
    components = ["Compensation", "ERE", "Risk", "Tech Fee", "Admin Charge"]
    fig = px.bar(
        df, x="Role", y=components,
        labels={"value": "USD", "variable": ""},
        title="Annual Cost by Role",
    )
    fig.update_layout(barmode="stack", legend_title_text="", height=400)
    return fig
