"""Tab 2: Room Selection — include or exclude rooms and zone members."""

import streamlit as st

from data.session_store import (
    get_rooms, is_data_loaded,
    update_room_included, update_member_included, update_floor_included,
)
from engine.spatial import group_rooms_by_floor


def _reset_widgets(rooms):
    """Drop checkbox state so widgets pick up bulk changes."""
    for room in rooms:
        st.session_state.pop(f"room_{room.room_id}", None)


def _render_zone(room):
    included_members = sum(1 for m in room.member_rooms if m.included)
    header = (
        f"{room.name} · {included_members}/{len(room.member_rooms)} rooms · "
        f"{room.base_capacity} seats"
    )
    with st.container(border=True):
        checked = st.checkbox(
            header,
            value=room.included,
            key=f"room_{room.room_id}",
            disabled=included_members == 0,
        )
        if checked != room.included:
            update_room_included(room.room_id, checked)
            st.rerun()

        cols = st.columns(min(len(room.member_rooms), 4))
        for idx, member in enumerate(room.member_rooms):
            with cols[idx % len(cols)]:
                member_checked = st.checkbox(
                    f"{member.name} ({member.capacity})",
                    value=member.included,
                    key=f"member_{room.room_id}_{member.room_id}",
                )
                if member_checked != member.included:
                    update_member_included(room.room_id, member.room_id, member_checked)
                    _reset_widgets([room])
                    st.rerun()


def render(sidebar_state):
    """Render the Room Selection tab."""
    st.header("Room Selection")

    if not is_data_loaded():
        st.info("No data loaded. Please upload data in the Space Data tab.")
        return

    rooms = get_rooms()
    groups = group_rooms_by_floor(rooms)
    included_capacity = sum(g["included_capacity"] for g in groups)
    total_capacity = sum(g["total_capacity"] for g in groups)
    st.caption(f"{included_capacity} / {total_capacity} capacity included")

    for group in groups:
        label = (
            f"{group['building']} · {group['floor']} — "
            f"{group['included_capacity']} / {group['total_capacity']} seats"
        )
        with st.expander(label):
            col_all, col_none = st.columns(2)
            if col_all.button("Include all", key=f"all_{group['floor_id']}"):
                update_floor_included(group["floor_id"], True)
                _reset_widgets(group["rooms"])
                st.rerun()
            if col_none.button("Exclude all", key=f"none_{group['floor_id']}"):
                update_floor_included(group["floor_id"], False)
                _reset_widgets(group["rooms"])
                st.rerun()

            for room in group["rooms"]:
                if room.is_zone:
                    _render_zone(room)
                    continue
                checked = st.checkbox(
                    f"{room.name} · {room.base_capacity} seats",
                    value=room.included,
                    key=f"room_{room.room_id}",
                )
                if checked != room.included:
                    update_room_included(room.room_id, checked)
                    st.rerun()
