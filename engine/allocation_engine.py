"""Room placement — the core business engine.

Studios are packed into rooms largest-first. Rooms are visited in a seeded,
reproducible shuffle so that "rotate" can produce an alternate layout, and each
studio escalates through three strategies:

    strict   fits inside the room's base capacity
    next     fits inside overflow the room was already granted
    dynamic  may borrow new overflow from the floor buffer

Within a strategy the tightest room (least base capacity left) is tried first.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, TypeVar

from models.building import Floor, FloorId, Room, RoomId
from models.program import Studio
from models.allocation import AllocationResult, FloorAllocationState, RoomAssignment
from engine.capacity import FloorCapacityTracker, create_floor_capacity_tracker, floor_id_for_room
from config.defaults import (
    DEFAULT_SEED, LCG_MULTIPLIER, LCG_INCREMENT, LCG_MODULUS, PLACEMENT_STRATEGIES,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_SPACE_DIAGNOSTIC = "No room or floor data available."


@dataclass
class RoomState:
    """Placement bookkeeping for one room during a single run."""
    room: Room
    used_capacity: int = 0
    dynamic_capacity: int = 0
    extra_used: int = 0
    studios: List[Studio] = field(default_factory=list)

    @property
    def strict_remaining(self) -> int:
        return self.room.base_capacity - self.used_capacity

    @property
    def dynamic_remaining(self) -> int:
        return self.dynamic_capacity - self.used_capacity


def create_room_state(room: Room) -> RoomState:
    return RoomState(room=room, dynamic_capacity=room.base_capacity)


# --- Seeded shuffle ---

def next_lcg_seed(seed: int) -> int:
    return (LCG_MULTIPLIER * seed + LCG_INCREMENT) % LCG_MODULUS


def shuffle_with_seed(items: List[T], seed: int) -> List[T]:
    """Fisher-Yates shuffle driven by the LCG. Returns a new list.

    The draw-to-index mapping is floor(seed / 2**32 * (i + 1)), computed in
    integer arithmetic so the order is identical on every platform.
    """
    shuffled = list(items)
    current = seed
    for i in range(len(shuffled) - 1, 0, -1):
        current = next_lcg_seed(current)
        j = (current * (i + 1)) // LCG_MODULUS
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


# --- Strategies ---

STRATEGY_PREDICATES: Dict[str, Callable[[RoomState, Studio], bool]] = {
    "strict": lambda state, studio: state.strict_remaining >= studio.size,
    "next": lambda state, studio: state.dynamic_remaining >= studio.size,
    "dynamic": lambda state, studio: True,
}


def rank_candidates(states: List[RoomState], studio: Studio, strategy: str) -> List[RoomState]:
    """Eligible rooms for a strategy, tightest strict fit first (stable)."""
    predicate = STRATEGY_PREDICATES[strategy]
    eligible = [s for s in states if predicate(s, studio)]
    return sorted(eligible, key=lambda s: s.strict_remaining)


def assign_studio(
    state: RoomState,
    studio: Studio,
    tracker: Dict[FloorId, FloorCapacityTracker],
    diagnostics: List[str],
    missing_floor_rooms: Optional[Set[RoomId]] = None,
) -> bool:
    """Try to place a studio in a room, charging any new overflow to its floor."""
    floor_tracker = tracker.get(floor_id_for_room(state.room))
    if floor_tracker is None:
        reported = missing_floor_rooms if missing_floor_rooms is not None else set()
        if state.room.room_id not in reported:
            diagnostics.append(f"Floor context missing for {state.room.name}.")
            reported.add(state.room.room_id)
        return False

    projected_usage = state.used_capacity + studio.size
    extra_needed = max(projected_usage - state.room.base_capacity, 0)
    incremental_extra = max(extra_needed - state.extra_used, 0)

    if not floor_tracker.can_absorb(incremental_extra):
        logger.debug(
            "No floor buffer left for %s: %s needs %d extra, %d remaining",
            state.room.name, studio.studio_id, incremental_extra, floor_tracker.remaining_buffer,
        )
        return False

    floor_tracker.charge(incremental_extra)
    state.extra_used += incremental_extra
    state.dynamic_capacity = state.room.base_capacity + state.extra_used
    state.used_capacity = projected_usage
    state.studios.append(studio)
    return True


def place_studio(
    states: List[RoomState],
    studio: Studio,
    tracker: Dict[FloorId, FloorCapacityTracker],
    diagnostics: List[str],
    missing_floor_rooms: Optional[Set[RoomId]] = None,
) -> Optional[RoomState]:
    """Walk the strategies in order; return the room that accepted the studio."""
    for strategy in PLACEMENT_STRATEGIES:
        for candidate in rank_candidates(states, studio, strategy):
            if assign_studio(candidate, studio, tracker, diagnostics, missing_floor_rooms):
                logger.debug("Placed %s in %s (%s)", studio.studio_id, candidate.room.room_id, strategy)
                return candidate
    return None


# --- Result assembly ---

def build_room_assignments(states: List[RoomState]) -> List[RoomAssignment]:
    assignments = []
    for state in states:
        if not state.studios:
            continue
        room = state.room
        assignments.append(RoomAssignment(
            room_id=room.room_id,
            room_name=room.name,
            building=room.building,
            floor=room.floor,
            base_capacity=room.base_capacity,
            dynamic_capacity=room.base_capacity + state.extra_used,
            extra_capacity_used=state.extra_used,
            studios=list(state.studios),
            member_rooms=room.included_member_ids() if room.combined_members or room.member_rooms else None,
        ))
    return assignments


def build_floor_state_summary(tracker: Dict[FloorId, FloorCapacityTracker]) -> List[FloorAllocationState]:
    summary = []
    for entry in tracker.values():
        summary.append(FloorAllocationState(
            floor_id=entry.floor.floor_id,
            building=entry.floor.building,
            floor_label=entry.floor.floor,
            total_capacity=entry.floor.total_capacity,
            base_capacity=entry.floor.base_capacity,
            extra_capacity_allowed=entry.extra_capacity_allowed,
            extra_capacity_used=entry.extra_capacity_used,
            remaining_buffer=entry.remaining_buffer,
        ))
    return summary


def allocate_studios_to_rooms(
    rooms: List[Room],
    floors: List[Floor],
    studios: List[Studio],
    shuffle_seed: Optional[int] = None,
) -> AllocationResult:
    """Full placement pass. Capacity refusals never raise; they end up in diagnostics."""
    included_rooms = [r for r in rooms if r.included is not False]

    if not included_rooms or not floors:
        logger.warning("Allocation skipped: %d included rooms, %d floors", len(included_rooms), len(floors))
        return AllocationResult(
            assignments=[],
            floor_states=[],
            unassigned_studios=list(studios),
            studio_to_room={s.studio_id: None for s in studios},
            diagnostics=[NO_SPACE_DIAGNOSTIC],
        )

    seed = DEFAULT_SEED if shuffle_seed is None else shuffle_seed
    tracker = create_floor_capacity_tracker(floors)
    states = [create_room_state(r) for r in shuffle_with_seed(included_rooms, seed)]
    ordered_studios = sorted(studios, key=lambda s: s.size, reverse=True)

    diagnostics: List[str] = []
    missing_floor_rooms: Set[RoomId] = set()
    studio_to_room: Dict[str, Optional[RoomId]] = {}
    unassigned: List[Studio] = []

    for studio in ordered_studios:
        placed = place_studio(states, studio, tracker, diagnostics, missing_floor_rooms)
        if placed is not None:
            studio_to_room[studio.studio_id] = placed.room.room_id
            continue

        diagnostics.append(f"Unable to place {studio.studio_id} (size {studio.size}). Marked as unassignable.")
        studio_to_room[studio.studio_id] = None
        unassigned.append(studio)

    logger.info(
        "Placed %d/%d studios across %d rooms (seed=%d)",
        len(studios) - len(unassigned), len(studios), len(included_rooms), seed,
    )

    return AllocationResult(
        assignments=build_room_assignments(states),
        floor_states=build_floor_state_summary(tracker),
        unassigned_studios=unassigned,
        studio_to_room=studio_to_room,
        diagnostics=diagnostics,
    )
