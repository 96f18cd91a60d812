"""Tests for readiness, reconciliation and submission payloads."""

import dataclasses
import math

import pytest

from src.core.models import PricingSettings
from src.roi.assessment import (
    build_submission,
    compute_readiness,
    evaluate,
    initial_state,
    reconcile_with_pricing,
)
from src.roi.calculations import calculate_roi
from src.roi.formatting import format_months
from src.roi.plans import compute_derived_pricing
from src.roi.workflows import list_workflow_ids
from src.shared.errors import ValidationError


class TestInitialState:
    def test_starts_empty(self):
        state = initial_state()

        assert state.company.employees_impacted == 0
        assert state.costs.hourly_rate == 0
        assert state.costs.fully_loaded_multiplier == 1.3
        assert [w.id for w in state.workflows] == list_workflow_ids()
        assert not any(w.enabled for w in state.workflows)
        assert state.scenario == "expected"
        assert state.novique.selected_plan is None

    def test_returns_fresh_objects(self):
        first = initial_state()
        first.workflows[0].enabled = True
        assert initial_state().workflows[0].enabled is False


class TestReadiness:
    def test_initial(self):
        flags = compute_readiness(initial_state())

        assert flags.has_team_info is False
        assert flags.can_show_pricing is False
        assert flags.results_state == "initial"

    def test_team_without_workflows(self, make_state):
        state = make_state()
        state = dataclasses.replace(
            state, workflows=[dataclasses.replace(w, enabled=False) for w in state.workflows]
        )
        flags = compute_readiness(state)

        assert flags.has_team_info is True
        assert flags.has_workflows is False
        assert flags.can_show_roi is False
        assert flags.results_state == "team"

    def test_ready(self, make_state):
        flags = compute_readiness(make_state())

        assert flags.can_show_roi and flags.can_recommend_plan and flags.can_show_pricing
        assert flags.results_state == "workflows"

    def test_zero_hourly_rate_not_ready(self, make_state):
        assert compute_readiness(make_state(hourly_rate=0)).results_state == "initial"


class TestReconcile:
    def test_uses_derived_fees(self, make_state):
        results = calculate_roi(make_state())
        pricing = compute_derived_pricing(results.total_benefit_per_month, None)

        reconciled = reconcile_with_pricing(results, pricing)

        # 5066 - 750 = 4316; 4316 / 750 = 575%; 2250 / 4316 = 0.52
        assert reconciled.net_benefit_per_month == 4316
        assert reconciled.roi_percent == 575
        assert reconciled.payback_months == pytest.approx(0.5)
        assert reconciled.total_benefit_per_month == results.total_benefit_per_month
        # raw results untouched
        assert results.net_benefit_per_month == 5066

    def test_fee_exceeding_benefit(self, make_state):
        results = calculate_roi(make_state(employees=0.01))
        pricing = compute_derived_pricing(results.total_benefit_per_month, "scale")

        reconciled = reconcile_with_pricing(results, pricing)

        assert reconciled.net_benefit_per_month < 0
        assert reconciled.roi_percent == 0
        assert math.isinf(reconciled.payback_months)
        assert format_months(reconciled.payback_months) == "N/A"


class TestEvaluate:
    def test_not_ready_has_no_pricing(self):
        assessment = evaluate(initial_state())

        assert assessment.derived_pricing is None
        assert assessment.effective_results == assessment.results

    def test_ready_has_pricing_and_reconciled_results(self, make_state):
        assessment = evaluate(make_state(monthly_fee=100, selected_plan="starter"))

        pricing = assessment.derived_pricing
        assert pricing.final_tier == "growth"
        assert pricing.is_below_recommended is True
        # raw results keep the stated fee, effective results use the derived one
        assert assessment.results.net_benefit_per_month == 4966
        assert assessment.effective_results.net_benefit_per_month == 4316

    def test_settings_are_applied(self, make_state):
        settings = PricingSettings(monthly_value_multiplier=0.3, one_time_charge_multiplier=1)
        assessment = evaluate(make_state(), settings)

        # 5066 * 0.3 = 1519.8 -> 1500
        assert assessment.derived_pricing.monthly_fee == 1500
        assert assessment.derived_pricing.setup_fee == 1500


class TestBuildSubmission:
    def test_payload(self, make_state):
        state = make_state()
        assessment = evaluate(state)

        submission = build_submission(" lead@example.com ", state, assessment)

        assert submission.email == "lead@example.com"
        assert submission.selected_workflows == ["lead_followup"]
        assert submission.employees_impacted == 3
        assert submission.industry == "home_services"
        assert submission.results == assessment.effective_results
        assert submission.derived_pricing.recommended_tier == "growth"

        payload = submission.to_dict()
        assert payload["derivedPricing"]["monthlyFee"] == 750
        assert payload["results"]["netBenefitPerMonth"] == 4316
        assert payload["selectedWorkflows"] == ["lead_followup"]

    @pytest.mark.parametrize("email", ["", "not-an-email", None, ["lead@example.com"]])
    def test_invalid_email(self, make_state, email):
        state = make_state()
        with pytest.raises(ValidationError, match="Valid email required"):
            build_submission(email, state, evaluate(state))
