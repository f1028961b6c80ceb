from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class ProgramInput:
    program_id: str
    label: str
    size: int   # students in the cohort


@dataclass(frozen=True)
class Studio:
    studio_id: str
    size: int
    programs: Dict[str, int] = field(default_factory=dict)   # program label -> students

    def program_mix(self) -> str:
        if not self.programs:
            return "—"
        return " | ".join(f"{label}: {count}" for label, count in self.programs.items())


@dataclass(frozen=True)
class StudioSummary:
    studios: List[Studio] = field(default_factory=list)
    total_students: int = 0
    total_studios: int = 0
    remainder: int = 0   # students left unconsumed by generation
