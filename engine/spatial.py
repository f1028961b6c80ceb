"""Floor summaries, room/zone inclusion toggles, and per-floor utilization."""

import math
from dataclasses import replace
from typing import Dict, List, Optional

from models.building import Floor, FloorId, Room, build_floor_id
from models.allocation import AllocationResult
from config.defaults import DEFAULT_FLOOR_BUFFER_RATIO


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize_floors(rooms: List[Room], buffer_ratio: float = DEFAULT_FLOOR_BUFFER_RATIO) -> List[Floor]:
    """Aggregate rooms into floors, in first-seen order."""
    totals: Dict[FloorId, dict] = {}
    for room in rooms:
        fid = build_floor_id(room.building, room.floor)
        if fid not in totals:
            totals[fid] = {"building": room.building, "floor": room.floor, "area": 0.0, "base": 0}
        totals[fid]["area"] += room.area
        totals[fid]["base"] += room.base_capacity

    floors = []
    for fid, t in totals.items():
        floors.append(Floor(
            floor_id=fid,
            building=t["building"],
            floor=t["floor"],
            base_capacity=t["base"],
            total_capacity=round_half_up(t["base"] * (1 + buffer_ratio)),
            total_area=t["area"],
        ))
    return floors


def toggle_room(rooms: List[Room], room_id: str, included: bool) -> List[Room]:
    """Return a new room list with one room included or excluded."""
    return [replace(r, included=included) if r.room_id == room_id else r for r in rooms]


def toggle_member_room(rooms: List[Room], zone_id: str, member_id: str, included: bool) -> List[Room]:
    """Return a new room list with one zone member toggled.

    The zone's capacity becomes the sum of its included members; a zone with no
    included members is excluded.
    """
    return [
        r.with_member_included(member_id, included) if r.room_id == zone_id else r
        for r in rooms
    ]


def set_floor_included(rooms: List[Room], floor_id: FloorId, included: bool) -> List[Room]:
    """Include or exclude every room on a floor.

    Zones with every member excluded stay excluded; they have no seats to offer.
    """
    updated = rooms
    for r in rooms:
        if r.floor_id != floor_id:
            continue
        if included and r.is_zone and not r.included_member_ids():
            continue
        updated = toggle_room(updated, r.room_id, included)
    return updated


def group_rooms_by_floor(rooms: List[Room]) -> List[dict]:
    """Rooms grouped per building/floor, sorted by building then floor label."""
    groups: Dict[FloorId, dict] = {}
    for room in rooms:
        fid = room.floor_id
        if fid not in groups:
            groups[fid] = {
                "floor_id": fid,
                "building": room.building,
                "floor": room.floor,
                "rooms": [],
                "included_capacity": 0,
                "total_capacity": 0,
            }
        g = groups[fid]
        g["rooms"].append(room)
        if room.member_rooms:
            g["total_capacity"] += sum(m.capacity for m in room.member_rooms)
        else:
            g["total_capacity"] += room.base_capacity
        if room.included:
            g["included_capacity"] += room.base_capacity

    return sorted(groups.values(), key=lambda g: (g["building"], g["floor"]))


def compute_space_totals(
    rooms: List[Room],
    floors: List[Floor],
    total_students: Optional[int] = None,
) -> dict:
    included = [r for r in rooms if r.included is not False]
    return {
        "room_count": len(included),
        "floor_count": len(floors),
        "total_capacity": sum(r.base_capacity for r in included),
        "total_students": total_students,
    }


def get_floor_utilization(result: AllocationResult) -> List[dict]:
    """Seats placed per floor against base capacity and buffer."""
    placed: Dict[FloorId, int] = {}
    rooms_used: Dict[FloorId, int] = {}
    for a in result.assignments:
        fid = build_floor_id(a.building, a.floor)
        placed[fid] = placed.get(fid, 0) + a.used_capacity
        rooms_used[fid] = rooms_used.get(fid, 0) + 1

    rows = []
    for fs in result.floor_states:
        used = placed.get(fs.floor_id, 0)
        rows.append({
            "floor_id": fs.floor_id,
            "building": fs.building,
            "floor_label": fs.floor_label,
            "base_capacity": fs.base_capacity,
            "total_capacity": fs.total_capacity,
            "used_seats": used,
            "rooms_used": rooms_used.get(fs.floor_id, 0),
            "utilization_pct": used / fs.base_capacity if fs.base_capacity > 0 else 0,
            "buffer_used_pct": (
                fs.extra_capacity_used / fs.extra_capacity_allowed
                if fs.extra_capacity_allowed > 0 else 0
            ),
            "buffer_exhausted": fs.remaining_buffer <= 0,
        })
    return rows
