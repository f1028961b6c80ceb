from models.building import Floor, FloorId, MemberRoom, Room, RoomId, build_floor_id
from models.program import ProgramInput, Studio, StudioSummary
from models.allocation import AllocationResult, FloorAllocationState, RoomAssignment
from models.finance import CompensationBreakdown, FinanceInputs, FinanceSummary, StaffCounts
