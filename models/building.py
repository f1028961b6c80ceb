from dataclasses import dataclass, replace
from typing import List, NewType, Optional

from config.defaults import FLOOR_ID_SEPARATOR

RoomId = NewType("RoomId", str)
FloorId = NewType("FloorId", str)


def build_floor_id(building: str, floor: str) -> FloorId:
    """Composite building+floor key. Treat the result as opaque."""
    return FloorId(f"{building}{FLOOR_ID_SEPARATOR}{floor}")


@dataclass(frozen=True)
class MemberRoom:
    room_id: RoomId
    name: str
    capacity: int
    included: bool = True


@dataclass(frozen=True)
class Room:
    room_id: RoomId
    building: str
    floor: str
    name: str
    base_capacity: int
    area: float
    combined_members: Optional[List[str]] = None   # zone member ids as listed in the source
    member_rooms: Optional[List[MemberRoom]] = None
    mode: Optional[str] = None
    included: bool = True

    @property
    def floor_id(self) -> FloorId:
        return build_floor_id(self.building, self.floor)

    @property
    def is_zone(self) -> bool:
        return bool(self.member_rooms)

    def included_member_ids(self) -> List[str]:
        if self.member_rooms:
            return [m.room_id for m in self.member_rooms if m.included]
        return list(self.combined_members or [])

    def with_member_included(self, member_id: str, included: bool) -> "Room":
        """Return a copy with one zone member toggled and capacity recomputed."""
        if not self.member_rooms:
            return self
        members = [
            replace(m, included=included) if m.room_id == member_id else m
            for m in self.member_rooms
        ]
        return replace(
            self,
            member_rooms=members,
            base_capacity=sum(m.capacity for m in members if m.included),
            included=any(m.included for m in members),
        )


@dataclass(frozen=True)
class Floor:
    floor_id: FloorId
    building: str
    floor: str
    base_capacity: int
    total_capacity: int   # base plus the floor buffer, rounded
    total_area: float = 0.0

    @property
    def buffer_capacity(self) -> int:
        return max(self.total_capacity - self.base_capacity, 0)
