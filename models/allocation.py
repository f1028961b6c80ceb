from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.building import FloorId, RoomId
from models.program import Studio


@dataclass(frozen=True)
class RoomAssignment:
    room_id: RoomId
    room_name: str
    building: str
    floor: str
    base_capacity: int
    dynamic_capacity: int       # base + floor buffer granted to this room
    extra_capacity_used: int
    studios: List[Studio] = field(default_factory=list)
    member_rooms: Optional[List[str]] = None

    @property
    def used_capacity(self) -> int:
        return sum(s.size for s in self.studios)


@dataclass(frozen=True)
class FloorAllocationState:
    floor_id: FloorId
    building: str
    floor_label: str
    total_capacity: int
    base_capacity: int
    extra_capacity_allowed: int
    extra_capacity_used: int
    remaining_buffer: int


@dataclass(frozen=True)
class AllocationResult:
    assignments: List[RoomAssignment] = field(default_factory=list)
    floor_states: List[FloorAllocationState] = field(default_factory=list)
    unassigned_studios: List[Studio] = field(default_factory=list)
    studio_to_room: Dict[str, Optional[RoomId]] = field(default_factory=dict)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def assigned_count(self) -> int:
        return sum(len(a.studios) for a in self.assignments)

    @property
    def has_issues(self) -> bool:
        return bool(self.diagnostics or self.unassigned_studios)
