"""Staffing cost estimate derived from studio totals."""

import math
from typing import List, Optional

from models.finance import CompensationBreakdown, FinanceInputs, FinanceSummary
from models.program import StudioSummary
from config.defaults import (
    ADMIN_SERVICE_RATE, COMPENSATION_MATRIX, RISK_RATE, TECH_FEE_RATE,
)

TA_ROLE_PREFIX = "FA / TA"


def _normalize_override(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return int(value)


def build_compensation_breakdown(
    inputs: FinanceInputs,
    matrix: Optional[List[dict]] = None,
) -> List[CompensationBreakdown]:
    """Cost per role: compensation plus ERE, risk and tech fee, then admin charge on top."""
    rows = []
    for entry in matrix or COMPENSATION_MATRIX:
        count = inputs.staff_counts.count_for(entry["key"])
        if entry["compensation"] is None:
            base_compensation = inputs.ta_compensation * inputs.semesters_per_year
        else:
            base_compensation = entry["compensation"]

        compensation = base_compensation * count
        ere = compensation * entry["ere_rate"]
        risk = compensation * RISK_RATE
        tech_fee = compensation * TECH_FEE_RATE
        subtotal = compensation + ere + risk + tech_fee
        admin_charge = subtotal * ADMIN_SERVICE_RATE

        rows.append(CompensationBreakdown(
            role=f"{entry['role']} (x{count})",
            compensation=compensation,
            ere=ere,
            risk=risk,
            tech_fee=tech_fee,
            admin_charge=admin_charge,
            total_cost=subtotal + admin_charge,
        ))
    return rows


def build_finance_summary(
    studio_summary: Optional[StudioSummary],
    inputs: FinanceInputs,
) -> Optional[FinanceSummary]:
    if studio_summary is None:
        return None

    auto_total = studio_summary.total_students
    override = _normalize_override(inputs.total_students_override)
    effective_total = override if override is not None else auto_total

    if inputs.studio_cap > 0:
        number_of_studios = math.ceil(effective_total / inputs.studio_cap)
    else:
        number_of_studios = 0

    breakdown = build_compensation_breakdown(inputs)
    total_annual_cost = sum(row.total_cost for row in breakdown)

    # Per-semester and per-year figures track the TA/FA line only
    ta_row = next((r for r in breakdown if r.role.startswith(TA_ROLE_PREFIX)), None)
    if ta_row is not None and inputs.semesters_per_year > 0:
        cost_per_semester = ta_row.total_cost / inputs.semesters_per_year
    else:
        cost_per_semester = 0.0
    cost_per_year = ta_row.total_cost if ta_row is not None else 0.0

    return FinanceSummary(
        auto_total_students=auto_total,
        effective_total_students=effective_total,
        number_of_studios=number_of_studios,
        suggested_ta_count=number_of_studios,
        staff_counts=inputs.staff_counts,
        cost_per_semester=cost_per_semester,
        cost_per_year=cost_per_year,
        total_annual_cost=total_annual_cost,
        breakdown=breakdown,
    )
