"""Tests for the ROI calculation."""

import dataclasses
import math

import pytest

from src.core.models import WorkflowSelection
from src.roi.calculations import (
    SCENARIO_MULTIPLIERS,
    WEEKS_PER_MONTH,
    calculate_events_per_month,
    calculate_hours_saved,
    calculate_roi,
    hours_saved_per_workflow,
    round_half_up,
)
from src.roi.assessment import initial_state
from src.roi.segments import apply_segment


def _with_quality_and_revenue(state):
    return dataclasses.replace(
        state,
        quality=dataclasses.replace(state.quality, enabled=True),
        revenue=dataclasses.replace(state.revenue, enabled=True),
    )


class TestRoundHalfUp:
    """Test display rounding."""

    def test_ties_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2

    def test_one_decimal(self):
        assert round_half_up(77.94, 1) == pytest.approx(77.9)
        assert round_half_up(1.25, 1) == pytest.approx(1.3)

    def test_infinity_passes_through(self):
        assert round_half_up(math.inf, 1) == math.inf


class TestHoursSaved:
    """Test per-workflow time savings."""

    def test_single_workflow(self):
        selection = WorkflowSelection("lead_followup", True, 40, 12, 3)
        assert hours_saved_per_workflow(selection) == pytest.approx(40 * WEEKS_PER_MONTH * 9 / 60)

    def test_negative_savings_clamped_to_zero(self):
        selection = WorkflowSelection("lead_followup", True, 40, 3, 12)
        assert hours_saved_per_workflow(selection) == 0

    def test_disabled_workflows_ignored(self):
        workflows = [
            WorkflowSelection("lead_followup", False, 40, 12, 3),
            WorkflowSelection("support_triage", True, 10, 6, 0),
        ]
        assert calculate_hours_saved(workflows) == pytest.approx(10 * WEEKS_PER_MONTH * 6 / 60)

    def test_unknown_workflow_contributes_zero(self):
        workflows = [
            WorkflowSelection("mystery_workflow", True, 100, 60, 0),
            WorkflowSelection("support_triage", True, 10, 6, 0),
        ]
        assert calculate_hours_saved(workflows) == pytest.approx(10 * WEEKS_PER_MONTH * 6 / 60)
        assert calculate_events_per_month(workflows) == pytest.approx(10 * WEEKS_PER_MONTH)


class TestCalculateROI:
    """Test the full calculation."""

    def test_concrete_example(self, make_state):
        """3 employees, $50/h, 1.3x, one 40/week workflow saving 9 minutes."""
        results = calculate_roi(make_state())

        assert results.hours_saved_per_month == pytest.approx(77.9)
        assert results.labor_savings_per_month == 5066
        assert results.error_savings_per_month == 0
        assert results.revenue_uplift_per_month == 0
        assert results.total_benefit_per_month == 5066

    def test_net_benefit_uses_stated_fee(self, make_state):
        results = calculate_roi(make_state(monthly_fee=1000, one_time_setup=3000))

        # 5066.1 - 1000
        assert results.net_benefit_per_month == 4066
        assert results.roi_percent == 407
        assert results.payback_months == pytest.approx(0.7)

    def test_zero_fee_means_zero_roi(self, make_state):
        results = calculate_roi(make_state(monthly_fee=0, one_time_setup=500))
        assert results.roi_percent == 0
        assert results.payback_months == pytest.approx(0.1)

    def test_non_positive_net_benefit_gives_infinite_payback(self, make_state):
        results = calculate_roi(make_state(monthly_fee=10000, one_time_setup=3000))
        assert results.net_benefit_per_month < 0
        assert math.isinf(results.payback_months)

    def test_error_savings(self, make_state):
        state = make_state()
        state = dataclasses.replace(
            state,
            quality=dataclasses.replace(
                state.quality, enabled=True, error_rate=0.1, cost_per_error=50, error_reduction=0.5
            ),
        )
        results = calculate_roi(state)

        # 173.2 events * 0.1 errors * 0.5 avoided * $50
        assert results.error_savings_per_month == 433

    def test_error_savings_ignores_minutes(self, make_state):
        """Error volume depends only on events, even when no time is saved."""
        state = make_state(minutes_before=3, minutes_after=3)
        state = dataclasses.replace(
            state,
            quality=dataclasses.replace(
                state.quality, enabled=True, error_rate=0.1, cost_per_error=50, error_reduction=0.5
            ),
        )
        results = calculate_roi(state)

        assert results.hours_saved_per_month == 0
        assert results.error_savings_per_month == 433

    def test_revenue_uplift_is_relative(self, make_state):
        state = make_state()
        state = dataclasses.replace(
            state,
            revenue=dataclasses.replace(
                state.revenue,
                enabled=True,
                leads_per_month=100,
                conversion_rate=0.2,
                conversion_lift_relative=0.5,
                avg_deal_value=1000,
                gross_margin=0.5,
            ),
        )
        results = calculate_roi(state)

        # 100 * 0.2 * 0.5 = 10 extra deals * $1000 * 0.5
        assert results.revenue_uplift_per_month == 5000
        assert results.total_benefit_per_month == 5066 + 5000

    def test_labor_savings_always_computed(self, make_state):
        state = make_state()
        assert not state.quality.enabled and not state.revenue.enabled
        assert calculate_roi(state).labor_savings_per_month > 0

    @pytest.mark.parametrize("scenario", ["conservative", "expected", "aggressive"])
    def test_scenario_scales_hours_once(self, make_state, scenario):
        expected = calculate_roi(make_state())
        scaled = calculate_roi(make_state(scenario=scenario))

        factor = SCENARIO_MULTIPLIERS[scenario]
        assert scaled.hours_saved_per_month == pytest.approx(77.94 * factor, abs=0.06)
        assert scaled.labor_savings_per_month == pytest.approx(
            expected.labor_savings_per_month * factor, abs=1
        )

    def test_scenario_monotonicity(self):
        base = _with_quality_and_revenue(apply_segment("financial", initial_state()))

        ordered = [
            calculate_roi(dataclasses.replace(base, scenario=s))
            for s in ("conservative", "expected", "aggressive")
        ]
        for field in (
            "hours_saved_per_month",
            "labor_savings_per_month",
            "error_savings_per_month",
            "revenue_uplift_per_month",
            "total_benefit_per_month",
        ):
            values = [getattr(r, field) for r in ordered]
            assert values[0] <= values[1] <= values[2], field

    @pytest.mark.parametrize("scenario", ["conservative", "expected", "aggressive"])
    def test_all_workflows_disabled_gives_zero(self, make_state, scenario):
        state = make_state(scenario=scenario)
        state = dataclasses.replace(
            state, workflows=[dataclasses.replace(w, enabled=False) for w in state.workflows]
        )
        results = calculate_roi(state)

        assert results.hours_saved_per_month == 0
        assert results.labor_savings_per_month == 0
        assert results.total_benefit_per_month == 0

    def test_degenerate_inputs_do_not_raise(self, make_state):
        results = calculate_roi(make_state(employees=-2, hourly_rate=0))

        assert results.labor_savings_per_month == 0
        assert results.roi_percent == 0
        assert math.isinf(results.payback_months)

    def test_employees_scale_linearly(self, make_state):
        one = calculate_roi(make_state(employees=1))
        four = calculate_roi(make_state(employees=4))
        assert four.hours_saved_per_month == pytest.approx(one.hours_saved_per_month * 4, abs=0.2)

    def test_input_state_not_mutated(self, make_state):
        state = make_state()
        before = state.to_dict()
        calculate_roi(state)
        assert state.to_dict() == before
