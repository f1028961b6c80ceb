"""Global sidebar: data status, current seed, and last run."""

import streamlit as st
from dataclasses import dataclass
from typing import Optional
from datetime import datetime

from data.session_store import (
    get_allocation_session, get_rooms, get_floors, get_last_space_edit, is_data_loaded,
)


@dataclass
class SidebarState:
    seed: int
    has_result: bool
    last_run_at: Optional[datetime]
    is_stale: bool


def render_sidebar() -> SidebarState:
    """Render the global sidebar and return current state."""
    session = get_allocation_session()
    last_edit = get_last_space_edit()
    is_stale = bool(
        session.last_run_at and last_edit and last_edit > session.last_run_at
    )

    with st.sidebar:
        st.title("Studio Space Planner")
        st.divider()

        if is_data_loaded():
            included = sum(1 for r in get_rooms() if r.included)
            st.success(f"Space data loaded: {included} rooms on {len(get_floors())} floors")
        else:
            st.warning("No space data loaded — go to the Space Data tab")

        st.metric("Shuffle Seed", session.seed)
        if session.last_run_at:
            st.caption(f"Last run: {session.last_run_at:%H:%M:%S}")
        if session.result is not None:
            unassigned = len(session.result.unassigned_studios)
            st.caption(f"Unassigned studios: {unassigned}")
        if is_stale:
            st.warning("Room selection changed since the last run.")

    return SidebarState(
        seed=session.seed,
        has_result=session.result is not None,
        last_run_at=session.last_run_at,
        is_stale=is_stale,
    )
