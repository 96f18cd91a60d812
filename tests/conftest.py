"""Shared fixtures for ROI calculator tests."""

import dataclasses
import os

import pytest

# The Flask app reads its secret at import time.
os.environ.setdefault("FLASK_SECRET_KEY", "test-secret-key")

from src.core.models import WorkflowSelection
from src.roi.assessment import initial_state


@pytest.fixture
def make_state():
    """Factory for states with a single custom workflow enabled."""

    def _make(
        employees=3,
        hourly_rate=50,
        multiplier=1.3,
        events_per_week=40,
        minutes_before=12,
        minutes_after=3,
        scenario="expected",
        monthly_fee=0,
        one_time_setup=0,
        selected_plan=None,
    ):
        state = initial_state()
        workflows = [dataclasses.replace(w, enabled=False) for w in state.workflows]
        workflows[0] = WorkflowSelection(
            id=workflows[0].id,
            enabled=True,
            events_per_week=events_per_week,
            minutes_before=minutes_before,
            minutes_after=minutes_after,
        )
        return dataclasses.replace(
            state,
            company=dataclasses.replace(state.company, employees_impacted=employees),
            costs=dataclasses.replace(
                state.costs, hourly_rate=hourly_rate, fully_loaded_multiplier=multiplier
            ),
            workflows=workflows,
            novique=dataclasses.replace(
                state.novique,
                monthly_fee=monthly_fee,
                one_time_setup=one_time_setup,
                selected_plan=selected_plan,
            ),
            scenario=scenario,
        )

    return _make
