"""Tab 5: Finance — staffing cost estimate for the current run."""

import streamlit as st
import pandas as pd

from data.session_store import get_allocation_session
from components.charts import finance_breakdown_bar
from components.metrics_cards import format_currency


def breakdown_rows(finance) -> list:
    return [{
        "Role": row.role,
        "Compensation": row.compensation,
        "ERE": row.ere,
        "Risk": row.risk,
        "Tech Fee": row.tech_fee,
        "Admin Charge": row.admin_charge,
        "Total Cost": row.total_cost,
    } for row in finance.breakdown]


def render(sidebar_state):
    """Render the Finance tab."""
    st.header("Finance Summary")

    finance = get_allocation_session().finance
    if finance is None:
        st.info("Run an allocation to see the staffing cost estimate.")
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Students", f"{finance.effective_total_students:,}")
    col2.metric("Studios", finance.number_of_studios)
    col3.metric("Suggested TAs/FAs", finance.suggested_ta_count)

    if finance.effective_total_students != finance.auto_total_students:
        st.caption(f"Override in use; generated studios hold {finance.auto_total_students:,} students.")

    col1, col2, col3 = st.columns(3)
    col1.metric("Cost / Semester", format_currency(finance.cost_per_semester))
    col2.metric("Cost / Year", format_currency(finance.cost_per_year))
    col3.metric("Total Annual Cost", format_currency(finance.total_annual_cost))

    st.divider()

    rows = breakdown_rows(finance)
    df = pd.DataFrame(rows)
    money_columns = [c for c in df.columns if c != "Role"]
    st.subheader("Compensation Breakdown")
    st.dataframe(
        df.style.format({c: format_currency for c in money_columns}),
        use_container_width=True,
        hide_index=True,
    )
    st.plotly_chart(finance_breakdown_bar(rows), use_container_width=True)

    csv = df.to_csv(index=False)
    st.download_button("Export Finance Breakdown (CSV)", csv, "finance_breakdown.csv", "text/csv")
