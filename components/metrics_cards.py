"""KPI cards for space totals and allocation outcomes."""

import streamlit as st


def format_currency(value: float) -> str:
    return f"${value:,.2f}"


def render_space_totals(totals: dict):
    """Rooms, floors, included capacity and students required, side by side."""
    students = totals.get("total_students")
    cards = [
        ("Rooms", totals.get("room_count", 0)),
        ("Floors", totals.get("floor_count", 0)),
        ("Max Capacity", f"{totals.get('total_capacity', 0):,}"),
        ("Students Required", f"{students:,}" if students is not None else "—"),
    ]
    for col, (label, value) in zip(st.columns(len(cards)), cards):
        col.metric(label, value)


def render_allocation_kpis(result, studio_summary):
    total = studio_summary.total_studios if studio_summary else 0
    unassigned = len(result.unassigned_studios) if result else total
    borrowed = sum(a.extra_capacity_used for a in result.assignments) if result else 0

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Studios", total)
    col2.metric("Assigned", total - unassigned)
    col3.metric(
        "Unassigned", unassigned,
        delta=f"{unassigned} studios" if unassigned else "None",
        delta_color="inverse" if unassigned else "off",
    )
    col4.metric("Buffer Seats Borrowed", borrowed)


def render_diagnostics(result):
    """Diagnostics panel: message list plus unassigned studios."""
    st.subheader("Diagnostics")
    if result is None:
        st.info("Run an allocation to see diagnostics.")
        return

    if not result.diagnostics:
        st.success("All studios fit within current constraints.")
    else:
        for message in result.diagnostics:
            st.warning(message, icon="🟡")

    if result.unassigned_studios:
        lines = "\n".join(f"- {s.studio_id} ({s.size} students)" for s in result.unassigned_studios)
        st.error(f"**Unassigned Studios**\n\n{lines}", icon="🔴")
