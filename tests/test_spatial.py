"""Tests for floor summaries and room selection."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.building import MemberRoom, Room, build_floor_id
from models.program import Studio
from engine.allocation_engine import allocate_studios_to_rooms
from engine.spatial import (
    compute_space_totals,
    get_floor_utilization,
    group_rooms_by_floor,
    round_half_up,
    set_floor_included,
    summarize_floors,
    toggle_member_room,
    toggle_room,
)


def make_room(room_id="R1", capacity=20, building="DC", floor="Level 1", included=True):
    return Room(room_id, building, floor, f"Room {room_id}", capacity, capacity, included=included)


def make_zone(zone_id="Z1", capacities=(10, 15)):
    members = [MemberRoom(f"M{i}", f"Room M{i}", cap) for i, cap in enumerate(capacities, start=1)]
    return Room(
        zone_id, "DC", "Level 1", f"Zone {zone_id}", sum(capacities), sum(capacities),
        combined_members=[m.room_id for m in members],
        member_rooms=members,
    )


class TestSummarizeFloors:
    def test_buffer_applied_and_rounded(self):
        floors = summarize_floors([make_room(capacity=20)], 0.15)
        assert floors[0].base_capacity == 20
        assert floors[0].total_capacity == 23
        assert floors[0].buffer_capacity == 3

    def test_half_rounds_up(self):
        assert round_half_up(7.5) == 8
        assert summarize_floors([make_room(capacity=5)], 0.5)[0].total_capacity == 8

    def test_zero_buffer(self):
        assert summarize_floors([make_room(capacity=20)], 0.0)[0].total_capacity == 20

    def test_groups_by_building_and_floor(self):
        rooms = [
            make_room("A", 10, floor="Level 1"),
            make_room("B", 15, floor="Level 1"),
            make_room("C", 12, floor="Level 2"),
            make_room("D", 8, building="SH", floor="Level 1"),
        ]
        floors = summarize_floors(rooms)

        assert [f.floor_id for f in floors] == [
            build_floor_id("DC", "Level 1"),
            build_floor_id("DC", "Level 2"),
            build_floor_id("SH", "Level 1"),
        ]
        assert floors[0].base_capacity == 25
        assert floors[0].total_area == 25

    def test_floor_id_format(self):
        assert build_floor_id("DC", "Level 1") == "DC__Level 1"


class TestToggles:
    def test_toggle_room_returns_new_list(self):
        rooms = [make_room("R1"), make_room("R2")]
        updated = toggle_room(rooms, "R1", False)

        assert updated[0].included is False
        assert updated[1].included is True
        assert rooms[0].included is True

    def test_toggle_member_recomputes_zone_capacity(self):
        rooms = [make_zone(capacities=(10, 15))]
        updated = toggle_member_room(rooms, "Z1", "M1", False)

        zone = updated[0]
        assert zone.base_capacity == 15
        assert zone.included is True
        assert zone.included_member_ids() == ["M2"]

    def test_zone_excluded_when_no_members_left(self):
        rooms = [make_zone(capacities=(10, 15))]
        updated = toggle_member_room(rooms, "Z1", "M1", False)
        updated = toggle_member_room(updated, "Z1", "M2", False)

        assert updated[0].base_capacity == 0
        assert updated[0].included is False

    def test_member_toggle_on_plain_room_is_noop(self):
        rooms = [make_room("R1")]
        assert toggle_member_room(rooms, "R1", "M1", False) == rooms

    def test_set_floor_included(self):
        rooms = [make_room("A", floor="Level 1"), make_room("B", floor="Level 1"), make_room("C", floor="Level 2")]
        updated = set_floor_included(rooms, build_floor_id("DC", "Level 1"), False)
        assert [r.included for r in updated] == [False, False, True]

    def test_include_floor_skips_empty_zone(self):
        zone = make_zone(capacities=(10, 15))
        rooms = toggle_member_room([zone, make_room("R1")], "Z1", "M1", False)
        rooms = toggle_member_room(rooms, "Z1", "M2", False)
        floor_id = build_floor_id("DC", "Level 1")

        rooms = set_floor_included(rooms, floor_id, False)
        rooms = set_floor_included(rooms, floor_id, True)

        assert rooms[0].included is False
        assert rooms[0].base_capacity == 0
        assert rooms[1].included is True

    def test_include_floor_restores_zone_with_members(self):
        rooms = toggle_member_room([make_zone(capacities=(10, 15))], "Z1", "M1", False)
        floor_id = build_floor_id("DC", "Level 1")

        rooms = set_floor_included(rooms, floor_id, False)
        assert rooms[0].included is False
        rooms = set_floor_included(rooms, floor_id, True)
        assert rooms[0].included is True
        assert rooms[0].base_capacity == 15

    def test_toggles_do_not_change_floors(self):
        rooms = [make_room("A", 20), make_room("B", 20)]
        floors = summarize_floors(rooms)
        toggle_room(rooms, "A", False)
        assert floors[0].base_capacity == 40


class TestGroupRoomsByFloor:
    def test_sorted_with_capacity_totals(self):
        rooms = [
            make_room("C", 12, building="SH"),
            make_room("A", 10, included=False),
            make_room("B", 15),
        ]
        groups = group_rooms_by_floor(rooms)

        assert [g["building"] for g in groups] == ["DC", "SH"]
        assert groups[0]["included_capacity"] == 15
        assert groups[0]["total_capacity"] == 25
        assert [r.room_id for r in groups[0]["rooms"]] == ["A", "B"]

    def test_zone_total_counts_every_member(self):
        zone = toggle_member_room([make_zone(capacities=(10, 15))], "Z1", "M1", False)[0]
        group = group_rooms_by_floor([zone])[0]
        assert group["total_capacity"] == 25
        assert group["included_capacity"] == 15


class TestSpaceTotals:
    def test_counts_included_rooms_only(self):
        rooms = [make_room("A", 10), make_room("B", 15, included=False)]
        totals = compute_space_totals(rooms, summarize_floors(rooms), total_students=120)

        assert totals == {"room_count": 1, "floor_count": 1, "total_capacity": 10, "total_students": 120}


class TestFloorUtilization:
    def test_utilization_calculation(self):
        rooms = [make_room("R1", 20)]
        floors = summarize_floors(rooms, 0.15)
        studios = [Studio("S-001", 15, {"A": 15}), Studio("S-002", 8, {"A": 8})]
        result = allocate_studios_to_rooms(rooms, floors, studios)

        row = get_floor_utilization(result)[0]
        assert row["used_seats"] == 23
        assert row["rooms_used"] == 1
        assert row["utilization_pct"] == 23 / 20
        assert row["buffer_used_pct"] == 1.0
        assert row["buffer_exhausted"] is True

    def test_unused_floor(self):
        rooms = [make_room("R1", 20, floor="Level 1"), make_room("R2", 20, floor="Level 2")]
        result = allocate_studios_to_rooms(rooms, summarize_floors(rooms), [Studio("S-001", 20)])

        rows = get_floor_utilization(result)
        assert sorted(r["used_seats"] for r in rows) == [0, 20]
