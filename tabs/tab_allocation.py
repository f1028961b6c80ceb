"""Tab 3: Allocation — program inputs, run, rotate, and export."""

import streamlit as st
import pandas as pd

from data.session_store import get_allocation_session, get_rooms, get_floors, is_data_loaded
from data.validator import validate_allocation_payload
from data.exporter import build_allocation_csv, studio_rows, room_rows
from engine.orchestrator import AllocationPayload, run_allocation, rotate_allocation
from engine.explainer import explain_studio_generation, explain_placement
from engine.spatial import compute_space_totals
from models.program import ProgramInput
from models.finance import StaffCounts
from components.metrics_cards import render_space_totals, render_allocation_kpis
from components.tables import render_studio_table, render_styled_table
from components.charts import room_fill_bar, assignment_donut
from config.defaults import (
    DEFAULT_PROGRAM_COUNT, MIN_PROGRAM_COUNT, MAX_PROGRAM_COUNT,
    DEFAULT_PROGRAM_SIZE, NEW_PROGRAM_SIZE,
    DEFAULT_STUDIO_CAP, MIN_STUDIO_CAP, DEFAULT_ALLOW_MIXING,
    DEFAULT_SEMESTERS_PER_YEAR, MIN_SEMESTERS_PER_YEAR, MAX_SEMESTERS_PER_YEAR,
    DEFAULT_TA_COMPENSATION, DEFAULT_STAFF_COUNTS, EXPORT_FILENAME,
)


def _render_form():
    """Allocation parameters. Returns a payload on submit, else None."""
    program_count = st.number_input(
        "Number of Programs",
        min_value=MIN_PROGRAM_COUNT, max_value=MAX_PROGRAM_COUNT,
        value=DEFAULT_PROGRAM_COUNT, step=1,
        key="alloc_program_count",
    )

    with st.form("allocation_form"):
        st.subheader("Allocation Parameters")
        col1, col2 = st.columns(2)
        with col1:
            studio_cap = st.number_input(
                "Studio Cap (max students per studio)",
                min_value=MIN_STUDIO_CAP, value=DEFAULT_STUDIO_CAP, step=1,
            )
        with col2:
            allow_mixing = st.checkbox("Allow multi-program mixing", value=DEFAULT_ALLOW_MIXING)

        st.markdown("**Program Sizes**")
        programs = []
        for idx in range(int(program_count)):
            c_label, c_size = st.columns([2, 1])
            default_size = DEFAULT_PROGRAM_SIZE if idx < DEFAULT_PROGRAM_COUNT else NEW_PROGRAM_SIZE
            label = c_label.text_input("Label", value=f"Program {idx + 1}", key=f"program_label_{idx}")
            size = c_size.number_input("Size", min_value=0, value=default_size, step=1, key=f"program_size_{idx}")
            programs.append(ProgramInput(program_id=f"p-{idx + 1}", label=label.strip(), size=int(size)))

        st.markdown("**Financial Inputs**")
        col1, col2, col3 = st.columns(3)
        with col1:
            override_raw = st.text_input("Total Students (override)", value="", help="Optional - defaults to studio total")
        with col2:
            semesters = st.number_input(
                "Semesters per Year",
                min_value=MIN_SEMESTERS_PER_YEAR, max_value=MAX_SEMESTERS_PER_YEAR,
                value=DEFAULT_SEMESTERS_PER_YEAR, step=1,
            )
        with col3:
            ta_comp = st.number_input("TA/FA Compensation (per semester, $)", min_value=0, value=DEFAULT_TA_COMPENSATION, step=100)

        st.markdown("**Staff Counts (Scenario Modeling)**")
        col1, col2, col3 = st.columns(3)
        faculty = col1.number_input("Faculty", min_value=0, value=DEFAULT_STAFF_COUNTS["faculty"], step=1)
        ta_fa = col2.number_input("TAs / FAs", min_value=0, value=DEFAULT_STAFF_COUNTS["ta_fa"], step=1)
        grader = col3.number_input("Graders", min_value=0, value=DEFAULT_STAFF_COUNTS["grader"], step=1)

        submitted = st.form_submit_button("Run Allocation", type="primary")

    if not submitted:
        return None

    override = None
    if override_raw.strip():
        try:
            override = int(override_raw.strip())
        except ValueError:
            st.error("Total students override must be a whole number.")
            return None

    return AllocationPayload(
        programs=programs,
        studio_cap=int(studio_cap),
        allow_mixing=allow_mixing,
        total_students_override=override,
        semesters_per_year=int(semesters),
        ta_compensation=ta_comp,
        staff_counts=StaffCounts(faculty=int(faculty), ta_fa=int(ta_fa), grader=int(grader)),
    )


def render(sidebar_state):
    """Render the Allocation tab."""
    st.header("Allocation")

    if not is_data_loaded():
        st.info("No data loaded. Please upload data in the Space Data tab.")
        return

    session = get_allocation_session()

    payload = _render_form()
    if payload is not None:
        validation = validate_allocation_payload(payload)
        for w in validation.warnings:
            st.warning(w)
        if validation.is_valid:
            run_allocation(session, payload)
        else:
            for e in validation.errors:
                st.error(e)

    summary = session.studio_summary
    render_space_totals(compute_space_totals(
        get_rooms(), get_floors(), summary.total_students if summary else None,
    ))

    st.divider()

    # --- Actions ---
    result = session.result
    col_rotate, col_export, col_seed = st.columns([1, 1, 2])
    with col_rotate:
        if st.button("Rotate Allocation", disabled=result is None, key="btn_rotate",
                     help="Re-run with the next shuffle seed for an alternate layout."):
            rotate_allocation(session)
            st.rerun()
    with col_export:
        st.download_button(
            "Export CSV",
            build_allocation_csv(result) if result else "",
            EXPORT_FILENAME,
            "text/csv",
            disabled=result is None,
        )
    with col_seed:
        st.caption(f"Current seed: {session.seed}")

    if sidebar_state.is_stale:
        st.warning("Room selection changed since the last run. Re-run to apply it.")

    if summary is None:
        st.info("Submit the parameters above to generate studios.")
        return

    if not summary.studios:
        st.info("No studios were generated — check program sizes and the studio cap.")
        return

    render_allocation_kpis(result, summary)

    payload = session.last_payload
    with st.expander("How this allocation was built"):
        for step in explain_studio_generation(
            summary, payload.allow_mixing, payload.studio_cap,
            len([p for p in payload.programs if p.size > 0]),
        ):
            st.markdown(f"- {step}")
        if result:
            for step in explain_placement(result):
                st.markdown(f"- {step}")

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Studios")
        render_studio_table(pd.DataFrame(studio_rows(summary.studios, result)))
    with col2:
        rows = room_rows(result)
        if rows:
            render_styled_table(pd.DataFrame(rows), title="Rooms")
        else:
            st.subheader("Rooms")
            st.info("No rooms received studios.")

    if result and result.assignments:
        col1, col2 = st.columns([3, 2])
        with col1:
            st.plotly_chart(room_fill_bar(room_rows(result)), use_container_width=True)
        with col2:
            st.plotly_chart(
                assignment_donut(result.assigned_count, summary.total_studios),
                use_container_width=True,
            )
