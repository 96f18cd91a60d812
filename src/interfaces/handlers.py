"""Shared calculator workflow for both CLI and Web interfaces."""

import logging
from typing import Any, Dict, Mapping, Optional

from src.core.models import ROIResults, ROIState
from src.core.store import InMemoryAssessmentStore, InMemoryPricingSettingsStore
from src.roi.assessment import Assessment, build_submission, evaluate, initial_state
from src.roi.formatting import format_currency, format_hours, format_months, format_percent
from src.roi.segments import apply_segment, parse_segment
from src.shared.metrics import increment_calculations, increment_submissions
from src.shared.tracing import handler_span

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


def format_results(results: ROIResults) -> Dict[str, str]:
    """Render results the way the results panel shows them."""
    return {
        "hoursSavedPerMonth": format_hours(results.hours_saved_per_month),
        "laborSavingsPerMonth": format_currency(results.labor_savings_per_month),
        "errorSavingsPerMonth": format_currency(results.error_savings_per_month),
        "revenueUpliftPerMonth": format_currency(results.revenue_uplift_per_month),
        "totalBenefitPerMonth": format_currency(results.total_benefit_per_month),
        "netBenefitPerMonth": format_currency(results.net_benefit_per_month),
        "roiPercent": format_percent(results.roi_percent),
        "paybackMonths": format_months(results.payback_months),
    }


class CalculatorWorkflow:
    """
    Centralized handler for calculator operations used by all interfaces.

    Owns the pricing settings and submission stores and passes settings into
    the engine explicitly on every call.
    """

    def __init__(
        self,
        settings_store: Optional[InMemoryPricingSettingsStore] = None,
        assessment_store: Optional[InMemoryAssessmentStore] = None,
    ):
        self.settings_store = settings_store or InMemoryPricingSettingsStore()
        self.assessment_store = assessment_store or InMemoryAssessmentStore()

    def build_state(self, data: Optional[Mapping[str, Any]] = None) -> ROIState:
        """
        Build a calculator state from request JSON on top of the initial state.

        Raises:
            ValidationError: If the JSON has the wrong shape
        """
        return ROIState.from_dict(data or {}, initial_state())

    def apply_segment(self, raw_segment: Optional[str], state: ROIState) -> Optional[ROIState]:
        """
        Pre-fill ``state`` with a segment's defaults.

        Returns:
            The merged state, or None when ``raw_segment`` names no known segment
        """
        segment = parse_segment(raw_segment)
        if segment is None:
            logger.debug(f"No segment matched {raw_segment!r}")
            return None
        return apply_segment(segment, state)

    def assess(self, state: ROIState) -> Assessment:
        """Evaluate a state with the current pricing settings."""
        with handler_span("calculate", scenario=state.scenario):
            assessment = evaluate(state, self.settings_store.get())
        increment_calculations(state.scenario)
        return assessment

    def calculate(self, state: ROIState) -> Dict[str, Any]:
        """
        Calculate results for a state.

        Returns:
            Dictionary with:
                - 'results': raw results against the stated fee
                - 'effectiveResults': results against the derived fee (when priced)
                - 'readiness': readiness flags
                - 'derivedPricing': derived pricing or None
                - 'formatted': display strings for the effective results
        """
        assessment = self.assess(state)
        pricing = assessment.derived_pricing
        logger.debug(
            f"Calculated ROI: total={assessment.results.total_benefit_per_month} "
            f"tier={pricing.final_tier if pricing else None}"
        )
        return {
            "results": assessment.results.to_dict(),
            "effectiveResults": assessment.effective_results.to_dict(),
            "readiness": assessment.readiness.to_dict(),
            "derivedPricing": pricing.to_dict() if pricing else None,
            "formatted": format_results(assessment.effective_results),
        }

    def submit(self, email: str, state: ROIState) -> Dict[str, Any]:
        """
        Record a lead submission for a state.

        Raises:
            ValidationError: If the email is not valid
        """
        with handler_span("submit", scenario=state.scenario):
            assessment = evaluate(state, self.settings_store.get())
            submission = build_submission(email, state, assessment)
            submission_id = self.assessment_store.add(submission)

        pricing = submission.derived_pricing
        increment_submissions(pricing.recommended_tier if pricing else None)
        logger.info(
            f"ROI submission {submission_id} recorded "
            f"(industry={submission.industry}, workflows={len(submission.selected_workflows)})"
        )
        return {"success": True, "id": submission_id, "submission": submission.to_dict()}
