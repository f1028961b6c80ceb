"""Per-floor overflow budget used while placing studios."""

from dataclasses import dataclass
from typing import Dict, List

from models.building import Floor, FloorId, Room


@dataclass
class FloorCapacityTracker:
    floor: Floor
    extra_capacity_allowed: int
    extra_capacity_used: int = 0

    @property
    def remaining_buffer(self) -> int:
        return max(self.extra_capacity_allowed - self.extra_capacity_used, 0)

    def can_absorb(self, extra: int) -> bool:
        return self.extra_capacity_allowed - self.extra_capacity_used >= extra

    def charge(self, extra: int):
        if extra < 0:
            raise ValueError(f"Cannot release floor buffer on {self.floor.floor_id}: {extra}")
        if not self.can_absorb(extra):
            raise ValueError(
                f"Floor {self.floor.floor_id} buffer exceeded: "
                f"{self.extra_capacity_used} + {extra} > {self.extra_capacity_allowed}"
            )
        self.extra_capacity_used += extra


def create_floor_capacity_tracker(floors: List[Floor]) -> Dict[FloorId, FloorCapacityTracker]:
    """Fresh tracker per run, keyed by floor id."""
    tracker: Dict[FloorId, FloorCapacityTracker] = {}
    for f in floors:
        tracker[f.floor_id] = FloorCapacityTracker(
            floor=f,
            extra_capacity_allowed=max(f.total_capacity - f.base_capacity, 0),
        )
    return tracker


def floor_id_for_room(room: Room) -> FloorId:
    return room.floor_id
