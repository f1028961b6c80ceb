"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from datetime import datetime
from typing import List, Optional

import pandas as pd

from models.building import Floor, FloorId, Room
from engine.orchestrator import AllocationSession
from engine.spatial import toggle_room, toggle_member_room, set_floor_included
from config.defaults import DEFAULT_FLOOR_BUFFER_RATIO, DEFAULT_SEED


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "rooms": [],
        "floors": [],
        "space_frames": None,
        "data_loaded": False,
        "last_space_edit": None,
        "allocation_session": AllocationSession(),
        "rule_config": {
            "floor_buffer_ratio": DEFAULT_FLOOR_BUFFER_RATIO,
            "default_seed": DEFAULT_SEED,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_rooms() -> List[Room]:
    return st.session_state.get("rooms", [])


def get_floors() -> List[Floor]:
    return st.session_state.get("floors", [])


def get_allocation_session() -> AllocationSession:
    return st.session_state["allocation_session"]


def get_space_frames() -> Optional[tuple]:
    return st.session_state.get("space_frames")


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


def get_last_space_edit() -> Optional[datetime]:
    return st.session_state.get("last_space_edit")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def _sync_session():
    session = get_allocation_session()
    session.rooms = get_rooms()
    session.floors = get_floors()


def set_space_data(rooms: List[Room], floors: List[Floor]):
    st.session_state["rooms"] = rooms
    st.session_state["floors"] = floors
    st.session_state["last_space_edit"] = datetime.now()
    _sync_session()


def set_space_frames(space_df: pd.DataFrame, combined_df: Optional[pd.DataFrame]):
    st.session_state["space_frames"] = (space_df, combined_df)


def set_data_loaded(loaded: bool):
    st.session_state["data_loaded"] = loaded


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config


def reset_allocation_session():
    """Fresh session on new space data; seed restarts at the configured default."""
    seed = get_rule_config().get("default_seed", DEFAULT_SEED)
    st.session_state["allocation_session"] = AllocationSession(
        rooms=get_rooms(), floors=get_floors(), seed=seed,
    )


# --- Room selection ---

def _set_rooms(rooms: List[Room]):
    st.session_state["rooms"] = rooms
    st.session_state["last_space_edit"] = datetime.now()
    _sync_session()


def update_room_included(room_id: str, included: bool):
    _set_rooms(toggle_room(get_rooms(), room_id, included))


def update_member_included(zone_id: str, member_id: str, included: bool):
    _set_rooms(toggle_member_room(get_rooms(), zone_id, member_id, included))


def update_floor_included(floor_id: FloorId, included: bool):
    _set_rooms(set_floor_included(get_rooms(), floor_id, included))
