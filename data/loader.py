"""File upload parsing — space division and combined spaces into rooms and floors."""

import logging
import re
from typing import Dict, List, Optional, Set, Tuple

import pandas as pd

from models.building import Floor, MemberRoom, Room, RoomId
from engine.spatial import summarize_floors
from config.defaults import (
    DEFAULT_FLOOR_BUFFER_RATIO,
    SPACE_COLUMN_BUILDING, SPACE_COLUMN_LEVEL, SPACE_COLUMN_STUDIO,
    SPACE_COLUMN_ROOM, SPACE_COLUMN_OCCUPANCY,
    COMBINED_COLUMN_ID, COMBINED_COLUMN_MEMBERS,
    COMBINED_COLUMN_CAPACITY_OVERRIDE, COMBINED_COLUMN_MODE,
)

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_WHITESPACE = re.compile(r"\s+")


def _cell(row: pd.Series, column: str) -> str:
    value = row.get(column)
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_number(value) -> float:
    """Lenient number parse: '24 seats' -> 24, blanks and junk -> 0."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return 0.0 if pd.isna(value) else float(value)
    if value is None:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _as_capacity(value: float):
    return int(value) if float(value).is_integer() else value


def build_room_name(studio: str, room_id: str) -> str:
    cleaned = _WHITESPACE.sub(" ", studio or "").strip()
    if cleaned and cleaned != "-":
        return f"{cleaned} ({room_id})"
    return f"Room {room_id}"


def parse_space_rows(df: pd.DataFrame) -> List[Room]:
    """Convert a space division DataFrame into Room objects.

    BUILDING and LEVEL carry forward from the last non-blank row. Rows without
    a room id or with no usable occupancy are skipped.
    """
    rooms = []
    current_building = ""
    current_level = ""

    for _, row in df.iterrows():
        building = _cell(row, SPACE_COLUMN_BUILDING)
        if building:
            current_building = building
        level = _cell(row, SPACE_COLUMN_LEVEL)
        if level:
            current_level = level

        room_id = _cell(row, SPACE_COLUMN_ROOM)
        if not room_id:
            continue

        capacity = parse_number(row.get(SPACE_COLUMN_OCCUPANCY))
        if not capacity:
            logger.debug("Skipping room %s: no occupancy", room_id)
            continue

        capacity = _as_capacity(capacity)
        rooms.append(Room(
            room_id=RoomId(room_id),
            building=current_building,
            floor=current_level,
            name=build_room_name(_cell(row, SPACE_COLUMN_STUDIO), room_id),
            base_capacity=capacity,
            area=capacity,  # no area column; capacity stands in
        ))
    return rooms


def parse_combined_spaces(df: Optional[pd.DataFrame], rooms: List[Room]) -> Tuple[List[Room], Set[str]]:
    """Build zone rooms from combined space rows. Returns (zones, consumed member ids)."""
    zones: List[Room] = []
    consumed: Set[str] = set()
    if df is None or df.empty:
        return zones, consumed

    room_map: Dict[str, Room] = {r.room_id: r for r in rooms}

    for _, row in df.iterrows():
        combined_id = _cell(row, COMBINED_COLUMN_ID)
        members = [m.strip() for m in _cell(row, COMBINED_COLUMN_MEMBERS).split(",") if m.strip()]
        if not combined_id or not members:
            continue

        member_rooms = [room_map[m] for m in members if m in room_map]
        if not member_rooms:
            logger.warning("Zone %s skipped: none of its members %s are known rooms", combined_id, members)
            continue

        consumed.update(r.room_id for r in member_rooms)

        override = parse_number(row.get(COMBINED_COLUMN_CAPACITY_OVERRIDE))
        base_capacity = _as_capacity(override) if override else sum(r.base_capacity for r in member_rooms)
        reference = member_rooms[0]
        mode = _cell(row, COMBINED_COLUMN_MODE) or None

        zones.append(Room(
            room_id=RoomId(combined_id),
            building=reference.building,
            floor=reference.floor,
            name=f"Zone {combined_id}",
            base_capacity=base_capacity,
            area=sum(r.area for r in member_rooms),
            combined_members=members,
            member_rooms=[
                MemberRoom(room_id=r.room_id, name=r.name, capacity=r.base_capacity, included=True)
                for r in member_rooms
            ],
            mode=mode,
        ))
    return zones, consumed


def build_space_dataset(
    space_df: pd.DataFrame,
    combined_df: Optional[pd.DataFrame] = None,
    rule_config: Optional[dict] = None,
) -> Tuple[List[Room], List[Floor]]:
    """Full ingest: rooms (zones first, then standalone rooms) and floor summaries."""
    cfg = rule_config or {}
    buffer_ratio = cfg.get("floor_buffer_ratio", DEFAULT_FLOOR_BUFFER_RATIO)

    raw_rooms = parse_space_rows(space_df)
    zones, consumed = parse_combined_spaces(combined_df, raw_rooms)
    rooms = zones + [r for r in raw_rooms if r.room_id not in consumed]
    floors = summarize_floors(rooms, buffer_ratio)

    logger.info("Loaded %d rooms (%d zones) on %d floors", len(rooms), len(zones), len(floors))
    return rooms, floors


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame of strings."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file, dtype=str, keep_default_na=False, skip_blank_lines=True)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl", dtype=str).fillna("")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for a two-tab Excel workbook (case-insensitive matching)
SHEET_ALIASES = {
    "space_division": ["space_division", "space division", "spaces", "rooms", "room master"],
    "combined_spaces": ["combined_spaces", "combined spaces", "combined", "zones"],
}


def _match_sheet(sheet_names: List[str], category: str, required: bool = True) -> Optional[str]:
    """Find a sheet name matching the given category."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    if not required:
        return None
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_space_workbook(uploaded_file) -> Tuple[pd.DataFrame, Optional[pd.DataFrame]]:
    """Load one Excel file with a space division sheet and an optional combined spaces sheet.

    Returns (space_df, combined_df); combined_df is None when the sheet is absent.
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    space_sheet = _match_sheet(xl.sheet_names, "space_division")
    combined_sheet = _match_sheet(xl.sheet_names, "combined_spaces", required=False)

    space_df = pd.read_excel(xl, sheet_name=space_sheet, dtype=str).fillna("")
    combined_df = None
    if combined_sheet:
        combined_df = pd.read_excel(xl, sheet_name=combined_sheet, dtype=str).fillna("")
    return space_df, combined_df
