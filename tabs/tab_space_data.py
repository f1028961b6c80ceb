"""Tab 1: Space Data — upload, validate, and configure the room inventory."""

import streamlit as st
import pandas as pd

from data.loader import load_file, load_space_workbook, build_space_dataset
from data.validator import validate_space_division, validate_combined_spaces, validate_cross_file
from data.sample_data import generate_space_division_df, generate_combined_spaces_df
from data.session_store import (
    set_space_data, set_space_frames, set_data_loaded, get_space_frames,
    get_rule_config, set_rule_config, reset_allocation_session,
    get_rooms, get_floors, is_data_loaded,
)
from config.defaults import MIN_FLOOR_BUFFER_RATIO, MAX_FLOOR_BUFFER_RATIO, DEFAULT_SEED


def _load_and_validate(space_df: pd.DataFrame, combined_df) -> bool:
    """Validate and store uploaded space data."""
    errors = []
    warnings = []

    for r in [validate_space_division(space_df), validate_combined_spaces(combined_df)]:
        errors.extend(r.errors)
        warnings.extend(r.warnings)

    if not errors:
        warnings.extend(validate_cross_file(space_df, combined_df).warnings)

    if errors:
        for e in errors:
            st.error(e)
        return False

    for w in warnings:
        st.warning(w)

    rooms, floors = build_space_dataset(space_df, combined_df, get_rule_config())
    if not rooms:
        st.error("No rooms with a usable occupancy were found.")
        return False

    set_space_frames(space_df, combined_df)
    set_space_data(rooms, floors)
    set_data_loaded(True)
    reset_allocation_session()

    zones = sum(1 for r in rooms if r.is_zone)
    st.success(f"Data loaded: {len(rooms)} rooms ({zones} zones) on {len(floors)} floors")
    return True


def _render_health_check():
    rooms = get_rooms()
    floors = get_floors()
    base = sum(f.base_capacity for f in floors)
    total = sum(f.total_capacity for f in floors)

    st.subheader("Data Health Check")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Rooms", len(rooms))
    col2.metric("Floors", len(floors))
    col3.metric("Base Capacity", f"{base:,}")
    col4.metric("With Floor Buffer", f"{total:,}")

    empty_floors = [f.floor_id for f in floors if f.base_capacity == 0]
    if empty_floors:
        st.warning(f"Floors with no capacity: {', '.join(empty_floors)}")

    floor_df = pd.DataFrame([{
        "Floor ID": f.floor_id,
        "Building": f.building,
        "Floor": f.floor,
        "Base Capacity": f.base_capacity,
        "Max Capacity": f.total_capacity,
        "Buffer": f.buffer_capacity,
    } for f in floors])
    st.dataframe(floor_df, use_container_width=True, hide_index=True)


def render(sidebar_state):
    """Render the Space Data tab."""
    st.header("Space Data")

    upload_mode = st.radio(
        "Upload mode",
        ["Two CSV files", "Single Excel workbook"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Two CSV files":
        col1, col2 = st.columns(2)
        with col1:
            space_file = st.file_uploader("Space Division", type=["csv", "xlsx"], key="upload_space")
        with col2:
            combined_file = st.file_uploader(
                "Combined Spaces (optional)", type=["csv", "xlsx"], key="upload_combined",
            )
    else:
        st.caption(
            "Upload one `.xlsx` file with a **Space Division** sheet and an optional "
            "**Combined Spaces** sheet (aliases like 'Rooms' or 'Zones' are accepted)."
        )
        workbook = st.file_uploader("Space workbook", type=["xlsx"], key="upload_workbook")

    col_upload, col_sample = st.columns(2)
    with col_upload:
        if st.button("Upload & Validate", type="primary", key="btn_upload"):
            try:
                if upload_mode == "Two CSV files":
                    if space_file:
                        combined_df = load_file(combined_file) if combined_file else None
                        _load_and_validate(load_file(space_file), combined_df)
                    else:
                        st.warning("Please upload a space division file.")
                elif workbook:
                    space_df, combined_df = load_space_workbook(workbook)
                    _load_and_validate(space_df, combined_df)
                else:
                    st.warning("Please upload an Excel workbook.")
            except ValueError as e:
                st.error(f"Error loading file: {e}")

    with col_sample:
        if st.button("Load Sample Data", key="btn_sample"):
            _load_and_validate(generate_space_division_df(), generate_combined_spaces_df())

    st.divider()

    # --- Rule Configuration ---
    st.subheader("Rule Configuration")
    config = dict(get_rule_config())

    col1, col2 = st.columns(2)
    with col1:
        ratio_pct = st.slider(
            "Floor buffer (%)",
            min_value=int(MIN_FLOOR_BUFFER_RATIO * 100),
            max_value=int(MAX_FLOOR_BUFFER_RATIO * 100),
            value=round(config.get("floor_buffer_ratio", 0.15) * 100),
            step=1,
            key="cfg_floor_buffer",
            help="Extra capacity each floor lets its rooms borrow above their base capacity.",
        )
    with col2:
        default_seed = st.number_input(
            "Starting shuffle seed",
            min_value=0,
            value=int(config.get("default_seed", DEFAULT_SEED)),
            step=1,
            key="cfg_default_seed",
        )

    if st.button("Apply Configuration", key="btn_apply_config"):
        config["floor_buffer_ratio"] = ratio_pct / 100.0
        config["default_seed"] = int(default_seed)
        set_rule_config(config)
        frames = get_space_frames()
        if frames is not None:
            # Floors are rebuilt from the source rows; room selections reset.
            rooms, floors = build_space_dataset(frames[0], frames[1], config)
            set_space_data(rooms, floors)
        reset_allocation_session()
        st.success("Configuration applied.")
        st.rerun()

    if is_data_loaded():
        st.divider()
        _render_health_check()
