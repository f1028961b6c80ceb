"""Tests for upload and parameter validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd

from data.validator import (
    validate_allocation_payload,
    validate_combined_spaces,
    validate_cross_file,
    validate_space_division,
)
from engine.orchestrator import AllocationPayload
from models.finance import StaffCounts
from models.program import ProgramInput


def make_space_df(room_ids=("DC101", "DC102"), with_location=True):
    rows = []
    for rid in room_ids:
        row = {"ROOM": rid, "ASTRA OCCUPANCY": "20"}
        if with_location:
            row.update({"BUILDING": "DC", "LEVEL": "Level 1"})
        rows.append(row)
    return pd.DataFrame(rows)


def make_payload(programs=None, cap=20, mixing=True, override=None, semesters=2, ta_comp=6636, staff=None):
    return AllocationPayload(
        programs=programs if programs is not None else [ProgramInput("p-1", "A", 60), ProgramInput("p-2", "B", 60)],
        studio_cap=cap,
        allow_mixing=mixing,
        total_students_override=override,
        semesters_per_year=semesters,
        ta_compensation=ta_comp,
        staff_counts=staff or StaffCounts(1, 6, 2),
    )


class TestSpaceDivision:
    def test_valid_file(self):
        result = validate_space_division(make_space_df())
        assert result.is_valid
        assert result.warnings == []

    def test_missing_required_column(self):
        df = pd.DataFrame([{"ROOM": "DC101"}])
        result = validate_space_division(df)
        assert not result.is_valid
        assert "ASTRA OCCUPANCY" in result.errors[0]

    def test_missing_location_warns(self):
        result = validate_space_division(make_space_df(with_location=False))
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_duplicate_rooms(self):
        result = validate_space_division(make_space_df(("DC101", "DC101")))
        assert not result.is_valid
        assert "DC101" in result.errors[0]

    def test_empty_file(self):
        df = pd.DataFrame(columns=["ROOM", "ASTRA OCCUPANCY"])
        assert not validate_space_division(df).is_valid


class TestCombinedSpaces:
    def test_absent_file_is_valid(self):
        assert validate_combined_spaces(None).is_valid

    def test_duplicate_zone_ids(self):
        df = pd.DataFrame([
            {"combined_id": "Z1", "members": "DC101"},
            {"combined_id": "Z1", "members": "DC102"},
        ])
        assert not validate_combined_spaces(df).is_valid

    def test_unknown_member_warns(self):
        combined = pd.DataFrame([{"combined_id": "Z1", "members": "DC101, DC999"}])
        result = validate_cross_file(make_space_df(), combined)
        assert result.is_valid
        assert any("DC999" in w for w in result.warnings)

    def test_member_in_two_zones_warns(self):
        combined = pd.DataFrame([
            {"combined_id": "Z1", "members": "DC101"},
            {"combined_id": "Z2", "members": "DC101,DC102"},
        ])
        result = validate_cross_file(make_space_df(), combined)
        assert any("Z1" in w and "Z2" in w for w in result.warnings)


class TestAllocationPayload:
    def test_valid_payload(self):
        result = validate_allocation_payload(make_payload())
        assert result.is_valid
        assert result.errors == []

    def test_label_required(self):
        result = validate_allocation_payload(make_payload(programs=[ProgramInput("p-1", " ", 60)]))
        assert "Program 1: Label required." in result.errors

    def test_at_least_one_student(self):
        result = validate_allocation_payload(make_payload(programs=[ProgramInput("p-1", "A", 0)]))
        assert "Program 1: At least 1 student." in result.errors

    def test_whole_numbers_only(self):
        result = validate_allocation_payload(make_payload(programs=[ProgramInput("p-1", "A", 12.5)]))
        assert "Program 1: Whole numbers only." in result.errors

    def test_too_many_programs(self):
        programs = [ProgramInput(f"p-{i}", f"P{i}", 10) for i in range(13)]
        result = validate_allocation_payload(make_payload(programs=programs, cap=40))
        assert not result.is_valid

    def test_cap_too_small(self):
        assert not validate_allocation_payload(make_payload(cap=1)).is_valid

    def test_mixing_cap_below_program_count(self):
        programs = [ProgramInput(f"p-{i}", f"P{i}", 10) for i in range(3)]
        assert not validate_allocation_payload(make_payload(programs=programs, cap=2)).is_valid
        assert validate_allocation_payload(make_payload(programs=programs, cap=2, mixing=False)).is_valid

    def test_duplicate_labels_warn(self):
        programs = [ProgramInput("p-1", "A", 10), ProgramInput("p-2", "A", 10)]
        result = validate_allocation_payload(make_payload(programs=programs))
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_finance_inputs(self):
        assert not validate_allocation_payload(make_payload(override=-1)).is_valid
        assert not validate_allocation_payload(make_payload(semesters=5)).is_valid
        assert not validate_allocation_payload(make_payload(ta_comp=-10)).is_valid
        assert not validate_allocation_payload(make_payload(staff=StaffCounts(faculty=-1))).is_valid
