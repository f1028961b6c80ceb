"""Studio generation — turns program sizes and a mixing policy into sized studios."""

import logging
from typing import List

from models.program import ProgramInput, Studio, StudioSummary
from config.defaults import STUDIO_ID_PREFIX, STUDIO_ID_WIDTH

logger = logging.getLogger(__name__)


def format_studio_id(counter: int) -> str:
    return f"{STUDIO_ID_PREFIX}{counter:0{STUDIO_ID_WIDTH}d}"


def compute_initial_share(studio_cap: int, program_count: int) -> int:
    """Per-program seats in a mixed studio, clamped to [1, studio_cap]."""
    share = studio_cap // program_count
    return max(1, min(share, studio_cap))


def _generate_separate(
    programs: List[ProgramInput],
    remaining: List[int],
    studio_cap: int,
    studios: List[Studio],
) -> List[int]:
    """Carve each program on its own into studios of at most studio_cap."""
    remaining = list(remaining)
    for idx, program in enumerate(programs):
        while remaining[idx] > 0:
            size = min(studio_cap, remaining[idx])
            studios.append(Studio(
                studio_id=format_studio_id(len(studios) + 1),
                size=size,
                programs={program.label: size},
            ))
            remaining[idx] -= size
    return remaining


def _generate_mixed(
    programs: List[ProgramInput],
    remaining: List[int],
    studio_cap: int,
    studios: List[Studio],
) -> List[int]:
    """Emit rounds of studios that take an equal share from every program.

    The share starts at studio_cap // program_count and drops by one whenever
    some program can no longer supply it. The loop ends when the share hits 0.
    """
    remaining = list(remaining)
    program_count = len(programs)
    share = compute_initial_share(studio_cap, program_count)

    while share > 0:
        possible_studios = min(r // share for r in remaining)
        if possible_studios == 0:
            share -= 1
            continue

        logger.debug("Mixed round: %d studios of %d per program", possible_studios, share)
        for _ in range(possible_studios):
            distribution = {}
            for idx, program in enumerate(programs):
                remaining[idx] -= share
                distribution[program.label] = distribution.get(program.label, 0) + share
            studios.append(Studio(
                studio_id=format_studio_id(len(studios) + 1),
                size=share * program_count,
                programs=distribution,
            ))
    return remaining


def generate_studios(
    programs: List[ProgramInput],
    allow_mixing: bool,
    studio_cap: int,
) -> StudioSummary:
    """Generate studios for all programs. Input programs are never modified."""
    active = [p for p in programs if p.size > 0]
    total_students = sum(p.size for p in active)

    if total_students == 0 or studio_cap <= 0:
        return StudioSummary()

    studios: List[Studio] = []
    remaining = [p.size for p in active]

    if allow_mixing:
        remaining = _generate_mixed(active, remaining, studio_cap, studios)
    else:
        remaining = _generate_separate(active, remaining, studio_cap, studios)

    remainder = sum(remaining)
    logger.info(
        "Generated %d studios for %d students (mixing=%s, cap=%d, remainder=%d)",
        len(studios), total_students, allow_mixing, studio_cap, remainder,
    )

    return StudioSummary(
        studios=studios,
        total_students=total_students,
        total_studios=len(studios),
        remainder=remainder,
    )
