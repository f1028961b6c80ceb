"""Schema validation for uploaded space files and allocation parameters."""

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from config.defaults import (
    SPACE_COLUMN_BUILDING, SPACE_COLUMN_LEVEL, SPACE_COLUMN_ROOM, SPACE_COLUMN_OCCUPANCY,
    COMBINED_COLUMN_ID, COMBINED_COLUMN_MEMBERS,
    MIN_PROGRAM_COUNT, MAX_PROGRAM_COUNT, MIN_STUDIO_CAP,
    MIN_SEMESTERS_PER_YEAR, MAX_SEMESTERS_PER_YEAR,
)


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def error(self, message: str):
        self.is_valid = False
        self.errors.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.is_valid = self.is_valid and other.is_valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


SPACE_REQUIRED_COLUMNS = [
    SPACE_COLUMN_ROOM,
    SPACE_COLUMN_OCCUPANCY,
]

SPACE_RECOMMENDED_COLUMNS = [
    SPACE_COLUMN_BUILDING,
    SPACE_COLUMN_LEVEL,
]

COMBINED_REQUIRED_COLUMNS = [
    COMBINED_COLUMN_ID,
    COMBINED_COLUMN_MEMBERS,
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.error(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.error(f"{file_label}: File contains no data rows.")
    return result


def _split_members(value) -> List[str]:
    return [m.strip() for m in str(value or "").split(",") if m.strip()]


def validate_space_division(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, SPACE_REQUIRED_COLUMNS, "Space Division")
    if not result.is_valid:
        return result

    missing_recommended = [c for c in SPACE_RECOMMENDED_COLUMNS if c not in df.columns]
    if missing_recommended:
        result.warnings.append(
            f"Space Division: No {', '.join(missing_recommended)} column — "
            "rooms will share a blank building/floor."
        )

    room_ids = df[SPACE_COLUMN_ROOM].astype(str).str.strip()
    room_ids = room_ids[room_ids != ""]
    dupes = room_ids[room_ids.duplicated()].unique().tolist()
    if dupes:
        result.error(f"Space Division: Duplicate room ids: {dupes}")

    return result


def validate_combined_spaces(df: Optional[pd.DataFrame]) -> ValidationResult:
    if df is None:
        return ValidationResult()
    result = _check_required_columns(df, COMBINED_REQUIRED_COLUMNS, "Combined Spaces")
    if not result.is_valid:
        return result

    ids = df[COMBINED_COLUMN_ID].astype(str).str.strip()
    dupes = ids[(ids != "") & ids.duplicated()].unique().tolist()
    if dupes:
        result.error(f"Combined Spaces: Duplicate zone ids: {dupes}")
    return result


def validate_cross_file(space_df: pd.DataFrame, combined_df: Optional[pd.DataFrame]) -> ValidationResult:
    """Check that zone members refer to rooms in the space division file."""
    result = ValidationResult()
    if combined_df is None or combined_df.empty:
        return result

    room_ids = set(space_df[SPACE_COLUMN_ROOM].astype(str).str.strip())
    seen = {}
    for _, row in combined_df.iterrows():
        zone_id = str(row.get(COMBINED_COLUMN_ID, "")).strip()
        members = _split_members(row.get(COMBINED_COLUMN_MEMBERS))
        unknown = [m for m in members if m not in room_ids]
        if unknown:
            result.warnings.append(
                f"Zone {zone_id}: Unknown member rooms {', '.join(unknown)} will be ignored."
            )
        for m in members:
            if m in seen and seen[m] != zone_id:
                result.warnings.append(f"Room {m} is listed in zones {seen[m]} and {zone_id}.")
            seen.setdefault(m, zone_id)
    return result


def validate_allocation_payload(payload) -> ValidationResult:
    """Check allocation parameters before a run."""
    result = ValidationResult()
    programs = payload.programs

    if not MIN_PROGRAM_COUNT <= len(programs) <= MAX_PROGRAM_COUNT:
        result.error(f"Programs: Between {MIN_PROGRAM_COUNT} and {MAX_PROGRAM_COUNT} programs required.")

    labels = []
    for idx, program in enumerate(programs, start=1):
        if not str(program.label).strip():
            result.error(f"Program {idx}: Label required.")
        if int(program.size) != program.size:
            result.error(f"Program {idx}: Whole numbers only.")
        elif program.size < 1:
            result.error(f"Program {idx}: At least 1 student.")
        labels.append(str(program.label).strip())

    dupes = sorted({l for l in labels if l and labels.count(l) > 1})
    if dupes:
        result.warnings.append(f"Programs: Duplicate labels {dupes} will be merged in studio mixes.")

    if payload.studio_cap < MIN_STUDIO_CAP:
        result.error(f"Studio cap: Studios should have at least {MIN_STUDIO_CAP} students.")
    elif payload.allow_mixing and programs and payload.studio_cap < len(programs):
        result.error("Studio cap: Studio cap must be at least the number of programs to keep mixes even.")

    override = payload.total_students_override
    if override is not None and override < 0:
        result.error("Total students override cannot be negative.")

    if not MIN_SEMESTERS_PER_YEAR <= payload.semesters_per_year <= MAX_SEMESTERS_PER_YEAR:
        result.error(
            f"Semesters per year must be between {MIN_SEMESTERS_PER_YEAR} and {MAX_SEMESTERS_PER_YEAR}."
        )

    if payload.ta_compensation < 0:
        result.error("TA/FA compensation cannot be negative.")

    counts = payload.staff_counts
    for label, value in [("Faculty", counts.faculty), ("TAs / FAs", counts.ta_fa), ("Graders", counts.grader)]:
        if value < 0:
            result.error(f"Staff counts: {label} cannot be negative.")

    return result
