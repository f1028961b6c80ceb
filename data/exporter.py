"""CSV export and table rows for allocation results."""

import csv
import io
from typing import List, Optional

from models.allocation import AllocationResult
from models.program import Studio
from config.defaults import UNASSIGNED_SECTION_TITLE

EXPORT_HEADER = [
    "Room ID",
    "Room Name",
    "Building",
    "Floor",
    "Base Capacity",
    "Dynamic Capacity",
    "Extra Capacity Used",
    "Assigned Studios",
]


def format_studio_list(studios: List[Studio]) -> str:
    return " | ".join(f"{s.studio_id} ({s.size})" for s in studios)


def build_allocation_csv(result: AllocationResult) -> str:
    """Room-by-room export, followed by an Unassigned Studios section when needed."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)

    for a in result.assignments:
        writer.writerow([
            a.room_id,
            a.room_name,
            a.building,
            a.floor,
            a.base_capacity,
            a.dynamic_capacity,
            a.extra_capacity_used,
            format_studio_list(a.studios),
        ])

    if result.unassigned_studios:
        writer.writerow([])
        writer.writerow([UNASSIGNED_SECTION_TITLE])
        for s in result.unassigned_studios:
            writer.writerow([s.studio_id, s.size])

    return buffer.getvalue()


def studio_rows(studios: List[Studio], result: Optional[AllocationResult]) -> List[dict]:
    """One row per generated studio with its room (if any)."""
    room_names = {}
    if result:
        for a in result.assignments:
            for s in a.studios:
                room_names[s.studio_id] = a.room_name

    rows = []
    for s in studios:
        assigned = result.studio_to_room.get(s.studio_id) if result else None
        rows.append({
            "Studio ID": s.studio_id,
            "Size": s.size,
            "Program Mix": s.program_mix(),
            "Assigned Room": room_names.get(s.studio_id, "—"),
            "Status": "Assigned" if assigned else "Unassigned",
        })
    return rows


def room_rows(result: Optional[AllocationResult]) -> List[dict]:
    if not result:
        return []
    rows = []
    for a in result.assignments:
        rows.append({
            "Room ID": a.room_id,
            "Room": a.room_name,
            "Building": a.building,
            "Floor": a.floor,
            "Base Capacity": a.base_capacity,
            "Dynamic Capacity": a.dynamic_capacity,
            "Extra Used": a.extra_capacity_used,
            "Seats Used": a.used_capacity,
            "Studios": format_studio_list(a.studios),
            "Member Rooms": ", ".join(a.member_rooms) if a.member_rooms else a.room_id,
        })
    return rows


def floor_rows(result: Optional[AllocationResult]) -> List[dict]:
    if not result:
        return []
    return [{
        "Floor ID": fs.floor_id,
        "Building": fs.building,
        "Floor": fs.floor_label,
        "Base Capacity": fs.base_capacity,
        "Max Capacity": fs.total_capacity,
        "Extra Allowance": fs.extra_capacity_allowed,
        "Extra Used": fs.extra_capacity_used,
        "Remaining Buffer": fs.remaining_buffer,
    } for fs in result.floor_states]
