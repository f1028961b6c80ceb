"""Allocation orchestration — generate, place, cost, and rotate."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from models.building import Floor, Room
from models.program import ProgramInput, StudioSummary
from models.allocation import AllocationResult
from models.finance import FinanceInputs, FinanceSummary, StaffCounts
from engine.grouping import generate_studios
from engine.allocation_engine import allocate_studios_to_rooms
from engine.finance import build_finance_summary
from config.defaults import (
    DEFAULT_SEED, DEFAULT_SEMESTERS_PER_YEAR, DEFAULT_TA_COMPENSATION,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllocationPayload:
    """One submitted set of allocation parameters."""
    programs: List[ProgramInput]
    studio_cap: int
    allow_mixing: bool
    total_students_override: Optional[int] = None
    semesters_per_year: int = DEFAULT_SEMESTERS_PER_YEAR
    ta_compensation: float = DEFAULT_TA_COMPENSATION
    staff_counts: StaffCounts = field(default_factory=StaffCounts)

    def finance_inputs(self) -> FinanceInputs:
        return FinanceInputs(
            studio_cap=self.studio_cap,
            semesters_per_year=self.semesters_per_year,
            ta_compensation=self.ta_compensation,
            staff_counts=self.staff_counts,
            total_students_override=self.total_students_override,
        )


@dataclass
class AllocationSession:
    """Run context: the space inventory plus the last payload and seed."""
    rooms: List[Room] = field(default_factory=list)
    floors: List[Floor] = field(default_factory=list)
    seed: int = DEFAULT_SEED
    last_payload: Optional[AllocationPayload] = None
    studio_summary: Optional[StudioSummary] = None
    result: Optional[AllocationResult] = None
    finance: Optional[FinanceSummary] = None
    last_run_at: Optional[datetime] = None


def run_allocation(
    session: AllocationSession,
    payload: AllocationPayload,
    seed: Optional[int] = None,
) -> Optional[AllocationResult]:
    """Regenerate studios from the payload and place them.

    Studios are rebuilt on every call. An explicit seed applies to this run
    only; the session seed changes only through rotate_allocation.
    """
    session.last_payload = payload
    summary = generate_studios(payload.programs, payload.allow_mixing, payload.studio_cap)
    session.studio_summary = summary
    session.finance = build_finance_summary(summary, payload.finance_inputs())
    session.last_run_at = datetime.now()

    if not summary.studios:
        logger.info("No studios generated; allocation cleared")
        session.result = None
        return None

    run_seed = session.seed if seed is None else seed
    session.result = allocate_studios_to_rooms(
        session.rooms, session.floors, summary.studios, shuffle_seed=run_seed,
    )
    return session.result


def rotate_allocation(session: AllocationSession) -> Optional[AllocationResult]:
    """Re-run the last payload with the next seed. No-op without a prior run."""
    payload = session.last_payload
    if payload is None:
        return None
    session.seed += 1
    logger.info("Rotating allocation to seed %d", session.seed)
    return run_allocation(session, payload, session.seed)
