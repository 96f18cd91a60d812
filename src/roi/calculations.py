"""ROI calculation: time savings, labor/error/revenue benefits, ROI and payback.

Pure functions over an ``ROIState``. Degenerate inputs (zero team size,
zero rates, zero fee) produce zero or infinite-payback results rather than
errors.
"""

import logging
import math
from typing import Dict, Iterable, List

from src.core.models import ROIResults, ROIState, WorkflowSelection
from src.roi.workflows import get_workflow

logger = logging.getLogger(__name__)

SCENARIO_MULTIPLIERS: Dict[str, float] = {
    "conservative": 0.6,
    "expected": 1.0,
    "aggressive": 1.3,
}

# Average weeks per month; not calendar-accurate.
WEEKS_PER_MONTH = 4.33


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with ties going up (toward +inf), unlike Python's banker's ``round``."""
    if math.isinf(value) or math.isnan(value):
        return value
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def scenario_multiplier(scenario: str) -> float:
    """Return the benefit multiplier for a scenario name."""
    return SCENARIO_MULTIPLIERS[scenario]


def active_workflows(workflows: Iterable[WorkflowSelection]) -> List[WorkflowSelection]:
    """Enabled selections that reference a known catalog workflow."""
    active = []
    for selection in workflows:
        if not selection.enabled:
            continue
        if get_workflow(selection.id) is None:
            logger.debug(f"Ignoring unknown workflow id: {selection.id}")
            continue
        active.append(selection)
    return active


def events_per_month(selection: WorkflowSelection) -> float:
    return selection.events_per_week * WEEKS_PER_MONTH


def hours_saved_per_workflow(selection: WorkflowSelection) -> float:
    """Monthly hours one employee saves on one workflow (never negative)."""
    minutes_saved_per_event = max(0, selection.minutes_before - selection.minutes_after)
    return events_per_month(selection) * minutes_saved_per_event / 60


def calculate_hours_saved(workflows: Iterable[WorkflowSelection]) -> float:
    """Base (unscaled, single-employee) monthly hours saved across active workflows."""
    return sum(hours_saved_per_workflow(w) for w in active_workflows(workflows))


def calculate_events_per_month(workflows: Iterable[WorkflowSelection]) -> float:
    """Total monthly event volume across active workflows."""
    return sum(events_per_month(w) for w in active_workflows(workflows))


def calculate_error_savings(state: ROIState, multiplier: float) -> float:
    quality = state.quality
    if not quality.enabled:
        return 0.0
    errors_per_month = calculate_events_per_month(state.workflows) * quality.error_rate
    errors_avoided = errors_per_month * quality.error_reduction
    return errors_avoided * quality.cost_per_error * multiplier


def calculate_revenue_uplift(state: ROIState, multiplier: float) -> float:
    revenue = state.revenue
    if not revenue.enabled:
        return 0.0
    # Lift is relative to the baseline conversion rate, not percentage points.
    extra_deals = revenue.leads_per_month * revenue.conversion_rate * revenue.conversion_lift_relative
    return extra_deals * revenue.avg_deal_value * revenue.gross_margin * multiplier


def calculate_roi(state: ROIState) -> ROIResults:
    """
    Calculate monthly ROI for a calculator state.

    Net benefit, ROI percent and payback use the stated fee in
    ``state.novique``, not a derived plan fee; see
    ``src.roi.assessment.reconcile_with_pricing`` for the derived-fee view.

    Args:
        state: Full calculator input

    Returns:
        ROIResults rounded for display (hours/payback to 0.1, money and
        percent to whole units); ``payback_months`` is ``math.inf`` when net
        benefit is not positive
    """
    multiplier = scenario_multiplier(state.scenario)

    # Each impacted employee realizes the same per-workflow savings.
    hours_saved = (
        calculate_hours_saved(state.workflows) * multiplier * state.company.employees_impacted
    )

    fully_loaded_rate = state.costs.hourly_rate * state.costs.fully_loaded_multiplier
    labor_savings = hours_saved * fully_loaded_rate
    error_savings = calculate_error_savings(state, multiplier)
    revenue_uplift = calculate_revenue_uplift(state, multiplier)

    total_benefit = labor_savings + error_savings + revenue_uplift
    monthly_fee = state.novique.monthly_fee
    net_benefit = total_benefit - monthly_fee

    roi_percent = (net_benefit / monthly_fee) * 100 if monthly_fee > 0 else 0
    payback_months = (
        state.novique.one_time_setup / net_benefit if net_benefit > 0 else math.inf
    )

    return ROIResults(
        hours_saved_per_month=round_half_up(hours_saved, 1),
        labor_savings_per_month=round_half_up(labor_savings),
        error_savings_per_month=round_half_up(error_savings),
        revenue_uplift_per_month=round_half_up(revenue_uplift),
        total_benefit_per_month=round_half_up(total_benefit),
        net_benefit_per_month=round_half_up(net_benefit),
        roi_percent=round_half_up(roi_percent),
        payback_months=round_half_up(payback_months, 1),
    )
