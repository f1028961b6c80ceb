from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class StaffCounts:
    faculty: int = 0
    ta_fa: int = 0
    grader: int = 0

    def count_for(self, key: str) -> int:
        return getattr(self, key, 0) or 0


@dataclass(frozen=True)
class FinanceInputs:
    studio_cap: int
    semesters_per_year: int
    ta_compensation: float          # per semester
    staff_counts: StaffCounts = field(default_factory=StaffCounts)
    total_students_override: Optional[int] = None


@dataclass(frozen=True)
class CompensationBreakdown:
    role: str
    compensation: float
    ere: float
    risk: float
    tech_fee: float
    admin_charge: float
    total_cost: float


@dataclass(frozen=True)
class FinanceSummary:
    auto_total_students: int
    effective_total_students: int
    number_of_studios: int
    suggested_ta_count: int
    staff_counts: StaffCounts
    cost_per_semester: float
    cost_per_year: float
    total_annual_cost: float
    breakdown: List[CompensationBreakdown] = field(default_factory=list)
