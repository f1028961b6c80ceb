"""Generates human-readable explanations for studio generation and placement."""

from typing import List

from models.program import StudioSummary
from models.allocation import AllocationResult
from engine.grouping import compute_initial_share


def explain_studio_generation(
    summary: StudioSummary,
    allow_mixing: bool,
    studio_cap: int,
    program_count: int,
) -> List[str]:
    """Produce step-by-step explanation for how studios were formed."""
    steps = []

    if summary.total_students == 0:
        steps.append("No students to group — every program is empty.")
        return steps

    steps.append(
        f"Step 1 - Demand: {summary.total_students} students across "
        f"{program_count} program{'s' if program_count != 1 else ''}, studio cap {studio_cap}"
    )

    if allow_mixing and program_count > 0:
        share = compute_initial_share(studio_cap, program_count)
        steps.append(
            f"Step 2 - Mixing: each studio takes an equal share from every program, "
            f"starting at {share} per program ({share * program_count} per studio) "
            f"and shrinking when a program runs short"
        )
    else:
        steps.append(
            f"Step 2 - Separate programs: each program is split into studios of at most {studio_cap}"
        )

    sizes = sorted({s.size for s in summary.studios}, reverse=True)
    size_text = ", ".join(str(s) for s in sizes) if sizes else "none"
    steps.append(f"Step 3 - Result: {summary.total_studios} studios (sizes: {size_text})")

    if summary.remainder > 0:
        steps.append(
            f"Note: {summary.remainder} students could not be placed into evenly mixed studios"
        )

    return steps


def explain_placement(result: AllocationResult) -> List[str]:
    """Summarize how a placement pass went."""
    steps = []
    total = len(result.studio_to_room)

    steps.append(
        f"Placed {result.assigned_count} of {total} studios into {len(result.assignments)} rooms"
    )

    overflow_rooms = [a for a in result.assignments if a.extra_capacity_used > 0]
    if overflow_rooms:
        borrowed = sum(a.extra_capacity_used for a in overflow_rooms)
        steps.append(
            f"{len(overflow_rooms)} rooms borrowed {borrowed} seats from their floor buffers"
        )

    exhausted = [fs for fs in result.floor_states if fs.extra_capacity_allowed > 0 and fs.remaining_buffer == 0]
    if exhausted:
        names = ", ".join(f"{fs.building} {fs.floor_label}" for fs in exhausted)
        steps.append(f"Floor buffer exhausted on: {names}")

    if result.unassigned_studios:
        seats = sum(s.size for s in result.unassigned_studios)
        steps.append(
            f"{len(result.unassigned_studios)} studios ({seats} students) could not be placed — "
            f"include more rooms or lower the studio cap"
        )

    return steps
