"""Calculator session helpers: initial state, readiness, pricing and submissions.

``calculate_roi`` reports net benefit against the stated fee. Whoever shows
results next to a derived plan fee calls ``reconcile_with_pricing`` (or uses
``Assessment.effective_results``) explicitly; nothing here changes the raw
results.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import List, Optional

from src.core.models import (
    CompanyInfo,
    CostAssumptions,
    DerivedPricing,
    PricingSettings,
    QualitySettings,
    ReadinessFlags,
    RevenueSettings,
    ROIResults,
    ROIState,
    ROISubmission,
    VendorTerms,
)
from src.roi.calculations import calculate_roi, round_half_up
from src.roi.plans import compute_derived_pricing
from src.roi.workflows import default_selections
from src.shared.errors import ValidationError


def initial_state() -> ROIState:
    """Return the empty calculator state: no team info, every workflow disabled."""
    return ROIState(
        company=CompanyInfo(employees_impacted=0, industry="home_services"),
        costs=CostAssumptions(hourly_rate=0, fully_loaded_multiplier=1.3),
        workflows=default_selections(),
        quality=QualitySettings(
            enabled=False,
            error_rate=0.05,
            cost_per_error=25,
            error_reduction=0.5,
        ),
        revenue=RevenueSettings(
            enabled=False,
            leads_per_month=120,
            conversion_rate=0.12,
            conversion_lift_relative=0.1,
            avg_deal_value=800,
            gross_margin=0.7,
        ),
        novique=VendorTerms(monthly_fee=0, one_time_setup=0, selected_plan=None),
        scenario="expected",
    )


def compute_readiness(state: ROIState) -> ReadinessFlags:
    has_team_info = state.company.employees_impacted > 0 and state.costs.hourly_rate > 0
    has_workflows = any(w.enabled for w in state.workflows)
    can_show_roi = has_team_info and has_workflows

    if not has_team_info:
        results_state = "initial"
    elif not has_workflows:
        results_state = "team"
    else:
        results_state = "workflows"

    return ReadinessFlags(
        has_team_info=has_team_info,
        has_workflows=has_workflows,
        can_show_roi=can_show_roi,
        can_recommend_plan=can_show_roi,
        can_show_pricing=can_show_roi,
        results_state=results_state,
    )


def reconcile_with_pricing(results: ROIResults, pricing: DerivedPricing) -> ROIResults:
    """
    Recompute net benefit, ROI and payback against the derived plan fees.

    ROI is 0 and payback infinite unless the benefit exceeds the derived
    monthly fee.
    """
    net_gain = results.total_benefit_per_month - pricing.monthly_fee
    if net_gain > 0:
        roi_percent = round_half_up(net_gain / pricing.monthly_fee * 100)
        payback_months = round_half_up(pricing.setup_fee / net_gain, 1)
    else:
        roi_percent = 0
        payback_months = math.inf

    return replace(
        results,
        net_benefit_per_month=round_half_up(net_gain),
        roi_percent=roi_percent,
        payback_months=payback_months,
    )


@dataclass
class Assessment:
    """Everything a results panel needs for one state."""

    results: ROIResults
    readiness: ReadinessFlags
    derived_pricing: Optional[DerivedPricing]
    effective_results: ROIResults


def evaluate(state: ROIState, settings: Optional[PricingSettings] = None) -> Assessment:
    """
    Run the calculator for a state.

    Pricing is derived only once both team info and workflows are present.

    Args:
        state: Calculator input
        settings: Fee multipliers passed through to ``compute_derived_pricing``
    """
    results = calculate_roi(state)
    readiness = compute_readiness(state)

    derived_pricing = None
    effective_results = results
    if readiness.can_show_pricing:
        derived_pricing = compute_derived_pricing(
            results.total_benefit_per_month,
            state.novique.selected_plan,
            settings,
        )
        effective_results = reconcile_with_pricing(results, derived_pricing)

    return Assessment(
        results=results,
        readiness=readiness,
        derived_pricing=derived_pricing,
        effective_results=effective_results,
    )


def selected_workflow_ids(state: ROIState) -> List[str]:
    return [w.id for w in state.workflows if w.enabled]


def build_submission(email: str, state: ROIState, assessment: Assessment) -> ROISubmission:
    """
    Assemble the lead submission payload.

    Raises:
        ValidationError: If ``email`` does not look like an address
    """
    email = email.strip() if isinstance(email, str) else ""
    if "@" not in email:
        raise ValidationError("Valid email required")

    return ROISubmission(
        email=email,
        results=assessment.effective_results,
        industry=state.company.industry or None,
        employees_impacted=state.company.employees_impacted or None,
        selected_workflows=selected_workflow_ids(state),
        derived_pricing=assessment.derived_pricing,
        submitted_at=datetime.now(timezone.utc).isoformat(),
    )
