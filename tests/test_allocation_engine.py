"""Tests for the room placement engine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.building import Floor, MemberRoom, Room, build_floor_id
from models.program import Studio
from engine.allocation_engine import (
    NO_SPACE_DIAGNOSTIC,
    RoomState,
    allocate_studios_to_rooms,
    create_room_state,
    next_lcg_seed,
    place_studio,
    rank_candidates,
    shuffle_with_seed,
)
from engine.capacity import create_floor_capacity_tracker
from engine.spatial import summarize_floors


def make_room(room_id="R1", capacity=20, building="DC", floor="Level 1", included=True):
    return Room(room_id, building, floor, f"Room {room_id}", capacity, capacity, included=included)


def make_floor(building="DC", floor="Level 1", base=20, total=23):
    return Floor(build_floor_id(building, floor), building, floor, base, total)


def make_studio(studio_id="S-001", size=20):
    return Studio(studio_id, size, {"A": size})


def all_placed_ids(result):
    ids = [s.studio_id for a in result.assignments for s in a.studios]
    ids += [s.studio_id for s in result.unassigned_studios]
    return ids


class TestSeededShuffle:
    def test_lcg_step(self):
        assert next_lcg_seed(0) == 1013904223
        assert next_lcg_seed(1) == 1015568748
        assert next_lcg_seed(2**32 - 1) == (1664525 * (2**32 - 1) + 1013904223) % 2**32

    def test_two_items_swap_on_low_draw(self):
        # seed 0 draws 1013904223 < 2**31, so j == 0
        assert shuffle_with_seed(["a", "b"], 0) == ["b", "a"]

    def test_two_items_stay_on_high_draw(self):
        # seed 1000 draws 2678429223 >= 2**31, so j == 1
        assert shuffle_with_seed(["a", "b"], 1000) == ["a", "b"]

    def test_same_seed_same_order(self):
        items = list(range(12))
        assert shuffle_with_seed(items, 17) == shuffle_with_seed(items, 17)

    def test_is_a_permutation(self):
        items = list(range(12))
        shuffled = shuffle_with_seed(items, 99)
        assert sorted(shuffled) == items
        assert items == list(range(12))

    def test_short_lists(self):
        assert shuffle_with_seed([], 5) == []
        assert shuffle_with_seed(["only"], 5) == ["only"]

    def test_pinned_order_for_seed_17(self):
        draws = []
        seed = 17
        for _ in range(5):
            seed = next_lcg_seed(seed)
            draws.append(seed)
        assert draws == [1042201148, 3524153451, 1973856974, 1276228565, 3066622768]

        # swaps (5, 1), (4, 4), (3, 1), (2, 0), (1, 1)
        assert shuffle_with_seed(list(range(6)), 17) == [2, 3, 0, 5, 4, 1]


class TestRankCandidates:
    def test_tightest_room_first(self):
        states = [RoomState(make_room("BIG", 30), dynamic_capacity=30),
                  RoomState(make_room("SMALL", 20), dynamic_capacity=20)]
        ranked = rank_candidates(states, make_studio(size=20), "strict")
        assert [s.room.room_id for s in ranked] == ["SMALL", "BIG"]

    def test_strict_excludes_rooms_too_small(self):
        states = [RoomState(make_room("R1", 10), dynamic_capacity=10)]
        assert rank_candidates(states, make_studio(size=20), "strict") == []
        assert len(rank_candidates(states, make_studio(size=20), "dynamic")) == 1

    def test_ties_keep_input_order(self):
        states = [RoomState(make_room(f"R{i}", 20), dynamic_capacity=20) for i in range(4)]
        ranked = rank_candidates(states, make_studio(size=5), "strict")
        assert [s.room.room_id for s in ranked] == ["R0", "R1", "R2", "R3"]


class TestPlaceStudio:
    def test_next_strategy_uses_granted_overflow(self):
        floor = make_floor(base=20, total=23)
        tracker = create_floor_capacity_tracker([floor])
        tracker[floor.floor_id].charge(3)
        # Room already holds 20 seats with 3 buffer seats granted to it
        state = RoomState(make_room("R1", 20), used_capacity=20, dynamic_capacity=23, extra_used=3)
        studio = make_studio("S-009", 3)

        assert rank_candidates([state], studio, "strict") == []
        assert rank_candidates([state], studio, "next") == [state]

        placed = place_studio([state], studio, tracker, [])

        assert placed is state
        assert state.used_capacity == 23
        assert state.extra_used == 3
        assert tracker[floor.floor_id].extra_capacity_used == 3

    def test_refused_room_falls_through_to_next_candidate(self):
        rooms = [make_room("R1", 20, floor="Level 1"), make_room("R2", 30, floor="Level 2")]
        floors = [
            make_floor(floor="Level 1", base=20, total=20),
            make_floor(floor="Level 2", base=30, total=40),
        ]
        studio = make_studio("S-001", 35)

        states = [create_room_state(r) for r in rooms]
        ranked = rank_candidates(states, studio, "dynamic")
        assert [s.room.room_id for s in ranked] == ["R1", "R2"]

        result = allocate_studios_to_rooms(rooms, floors, [studio])

        assert result.studio_to_room == {"S-001": "R2"}
        assert result.assignments[0].extra_capacity_used == 5
        assert result.diagnostics == []

    def test_floor_allowance_holds_after_every_step(self):
        rooms = [make_room(f"R{i}", 10 + 2 * i, floor=f"Level {i % 3}") for i in range(7)]
        floors = summarize_floors(rooms, 0.25)
        studios = [make_studio(f"S-{i:03d}", 3 + (i * 5) % 9) for i in range(1, 25)]

        tracker = create_floor_capacity_tracker(floors)
        states = [create_room_state(r) for r in shuffle_with_seed(rooms, 11)]
        diagnostics = []

        for studio in sorted(studios, key=lambda s: s.size, reverse=True):
            place_studio(states, studio, tracker, diagnostics)
            for entry in tracker.values():
                assert entry.extra_capacity_used <= entry.extra_capacity_allowed
            for state in states:
                assert state.used_capacity <= state.dynamic_capacity
        assert diagnostics == []


class TestAllocateStudiosToRooms:
    def test_floor_buffer_too_small_leaves_studio_unassigned(self):
        rooms = [make_room("R1", 20)]
        floors = [make_floor(base=20, total=23)]
        studios = [make_studio("S-002", 10), make_studio("S-001", 15)]

        result = allocate_studios_to_rooms(rooms, floors, studios, shuffle_seed=17)

        assert len(result.assignments) == 1
        assert [s.studio_id for s in result.assignments[0].studios] == ["S-001"]
        assert result.assignments[0].extra_capacity_used == 0
        assert [s.studio_id for s in result.unassigned_studios] == ["S-002"]
        assert result.studio_to_room == {"S-001": "R1", "S-002": None}
        assert "Unable to place S-002 (size 10). Marked as unassignable." in result.diagnostics

    def test_dynamic_strategy_borrows_floor_buffer(self):
        rooms = [make_room("R1", 20)]
        floors = [make_floor(base=20, total=23)]
        studios = [make_studio("S-001", 15), make_studio("S-002", 8)]

        result = allocate_studios_to_rooms(rooms, floors, studios)

        assert result.unassigned_studios == []
        assignment = result.assignments[0]
        assert assignment.extra_capacity_used == 3
        assert assignment.dynamic_capacity == 23
        assert assignment.used_capacity == 23
        assert result.floor_states[0].extra_capacity_used == 3
        assert result.floor_states[0].remaining_buffer == 0

    def test_spare_room_preferred_over_borrowing(self):
        rooms = [make_room("R1", 20), make_room("R2", 40)]
        floors = summarize_floors(rooms, 0.5)
        studios = [make_studio("S-001", 15), make_studio("S-002", 8)]

        result = allocate_studios_to_rooms(rooms, floors, studios)

        assert result.studio_to_room == {"S-001": "R1", "S-002": "R2"}
        assert all(a.extra_capacity_used == 0 for a in result.assignments)
        assert result.floor_states[0].extra_capacity_used == 0

    def test_tightest_room_wins_regardless_of_seed(self):
        rooms = [make_room("BIG", 40), make_room("FIT", 20)]
        floors = summarize_floors(rooms)
        for seed in (1, 17, 1000):
            result = allocate_studios_to_rooms(rooms, floors, [make_studio(size=20)], shuffle_seed=seed)
            assert result.studio_to_room["S-001"] == "FIT"

    def test_largest_studios_placed_first(self):
        rooms = [make_room("R1", 20)]
        floors = [make_floor(base=20, total=20)]
        studios = [make_studio("S-001", 5), make_studio("S-002", 20)]

        result = allocate_studios_to_rooms(rooms, floors, studios)
        assert result.studio_to_room["S-002"] == "R1"
        assert result.studio_to_room["S-001"] is None

    def test_every_studio_appears_exactly_once(self):
        rooms = [make_room(f"R{i}", 12 + 3 * i, floor=f"Level {i % 2}") for i in range(5)]
        floors = summarize_floors(rooms)
        studios = [make_studio(f"S-{i:03d}", 6 + (i % 4) * 4) for i in range(1, 15)]

        result = allocate_studios_to_rooms(rooms, floors, studios, shuffle_seed=5)

        ids = all_placed_ids(result)
        assert sorted(ids) == sorted(s.studio_id for s in studios)
        assert len(ids) == len(set(ids))
        assert set(result.studio_to_room) == {s.studio_id for s in studios}

    def test_floor_extra_never_exceeds_allowance(self):
        rooms = [make_room(f"R{i}", 10 + i, floor=f"Level {i % 3}") for i in range(9)]
        floors = summarize_floors(rooms, 0.3)
        studios = [make_studio(f"S-{i:03d}", 4 + (i * 7) % 11) for i in range(1, 30)]

        result = allocate_studios_to_rooms(rooms, floors, studios, shuffle_seed=42)

        for fs in result.floor_states:
            assert fs.extra_capacity_used <= fs.extra_capacity_allowed
        for a in result.assignments:
            assert a.used_capacity <= a.dynamic_capacity

    def test_same_seed_is_idempotent(self):
        rooms = [make_room(f"R{i}", 20, floor=f"Level {i % 2}") for i in range(6)]
        floors = summarize_floors(rooms)
        studios = [make_studio(f"S-{i:03d}", 10) for i in range(1, 9)]

        first = allocate_studios_to_rooms(rooms, floors, studios, shuffle_seed=23)
        second = allocate_studios_to_rooms(rooms, floors, studios, shuffle_seed=23)
        assert first == second

    def test_excluded_rooms_are_ignored(self):
        rooms = [make_room("R1", 20, included=False), make_room("R2", 20)]
        floors = summarize_floors(rooms)

        result = allocate_studios_to_rooms(rooms, floors, [make_studio(size=10)])
        assert result.studio_to_room["S-001"] == "R2"
        assert all(a.room_id != "R1" for a in result.assignments)

    def test_no_rooms_short_circuits(self):
        studios = [make_studio("S-001", 10), make_studio("S-002", 10)]
        result = allocate_studios_to_rooms([], [make_floor()], studios)

        assert result.assignments == []
        assert result.floor_states == []
        assert result.diagnostics == [NO_SPACE_DIAGNOSTIC]
        assert result.unassigned_studios == studios
        assert result.studio_to_room == {"S-001": None, "S-002": None}

    def test_no_floors_short_circuits(self):
        result = allocate_studios_to_rooms([make_room()], [], [make_studio()])
        assert result.diagnostics == [NO_SPACE_DIAGNOSTIC]

    def test_missing_floor_reported_once_per_room(self):
        orphan = make_room("ORPHAN", 50, floor="Level 9")
        rooms = [orphan, make_room("R1", 10)]
        floors = [make_floor(base=10, total=10)]
        studios = [make_studio("S-001", 20), make_studio("S-002", 20)]

        result = allocate_studios_to_rooms(rooms, floors, studios)

        missing = [d for d in result.diagnostics if d.startswith("Floor context missing")]
        assert missing == ["Floor context missing for Room ORPHAN."]
        assert len(result.unassigned_studios) == 2

    def test_zone_assignment_lists_included_members(self):
        zone = Room(
            "Z1", "DC", "Level 1", "Zone Z1", 25, 25,
            combined_members=["M1", "M2", "M3"],
            member_rooms=[
                MemberRoom("M1", "Room M1", 10),
                MemberRoom("M2", "Room M2", 15),
                MemberRoom("M3", "Room M3", 5, included=False),
            ],
        )
        floors = summarize_floors([zone])

        result = allocate_studios_to_rooms([zone], floors, [make_studio(size=20)])
        assert result.assignments[0].member_rooms == ["M1", "M2"]

    def test_plain_room_has_no_members(self):
        rooms = [make_room()]
        result = allocate_studios_to_rooms(rooms, summarize_floors(rooms), [make_studio(size=10)])
        assert result.assignments[0].member_rooms is None
