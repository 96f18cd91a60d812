"""Industry segments and the defaults they pre-fill into a calculator state.

Segments never reach the calculation itself; ``map_segment_to_state`` only
produces replacement groups the caller merges (``dataclasses.replace``) into
its own state.
"""

import dataclasses
from typing import Any, Dict, List, Optional

from src.core.models import ROIState, SegmentDefaults, SegmentMeta, WorkflowSelection
from src.roi.workflows import DEFAULT_WORKFLOWS

ALL_SEGMENTS: List[str] = ["financial", "healthcare", "logistics", "realestate"]

SEGMENT_META: Dict[str, SegmentMeta] = {
    "financial": SegmentMeta(
        id="financial",
        label="Financial & Professional Services",
        subtitle="Law, accounting, consulting, agencies",
        industry="professional_services",
        narrative=(
            "Professional services teams lose margin to non-billable admin work: scheduling, "
            "reminders, document handoffs, and follow-ups. Automation typically reclaims "
            "meaningful time each month without changing how you serve clients."
        ),
        reframing="This is like adding billable capacity without hiring another employee.",
    ),
    "healthcare": SegmentMeta(
        id="healthcare",
        label="Healthcare & Health Services",
        subtitle="Clinics, dental, therapy, wellness",
        industry="healthcare",
        narrative=(
            "Healthcare businesses lose revenue through missed appointments, delayed intake, "
            "and manual coordination between staff and patients. Automation reduces no-shows "
            "and frees staff to focus on care instead of coordination."
        ),
        reframing=(
            "This usually means fewer no-shows and smoother patient flow without adding "
            "front-desk staff."
        ),
    ),
    "logistics": SegmentMeta(
        id="logistics",
        label="Logistics & Transportation",
        subtitle="Freight, delivery, dispatch, fleet",
        industry="manufacturing",
        narrative=(
            "Logistics operations run on tight timelines where manual updates and dispatch "
            "coordination create delays and errors. Automation saves time daily while "
            "improving response speed and consistency."
        ),
        reframing="Often the difference between keeping up with demand and needing another coordinator.",
    ),
    "realestate": SegmentMeta(
        id="realestate",
        label="Real Estate & Construction",
        subtitle="Brokerages, property management, contractors",
        industry="real_estate",
        narrative=(
            "Real estate and construction teams lose momentum when follow-ups, scheduling, "
            "and project updates fall through the cracks. Automation improves response time, "
            "keeps stakeholders aligned, and reduces delays caused by manual coordination."
        ),
        reframing="Typically translates to faster deal movement and fewer stalled projects.",
    ),
}

SEGMENT_DEFAULTS: Dict[str, SegmentDefaults] = {
    "financial": SegmentDefaults(
        employees_impacted=3,
        hourly_rate=50,
        industry="professional_services",
        enabled_workflows=(
            "lead_followup",
            "appointment_scheduling",
            "invoice_generation",
            "customer_intake",
        ),
        workflow_overrides={
            "lead_followup": {"events_per_week": 40},
            "appointment_scheduling": {"events_per_week": 25},
            "invoice_generation": {"events_per_week": 40},
            "customer_intake": {"events_per_week": 10},
        },
    ),
    "healthcare": SegmentDefaults(
        employees_impacted=4,
        hourly_rate=30,
        industry="healthcare",
        enabled_workflows=("appointment_scheduling", "customer_intake", "status_updates"),
        workflow_overrides={
            # one intake per appointment, ~60 appointments a week
            "appointment_scheduling": {"events_per_week": 60, "minutes_before": 12},
            "customer_intake": {"events_per_week": 60, "minutes_before": 12},
            "status_updates": {"events_per_week": 30},
        },
    ),
    "logistics": SegmentDefaults(
        employees_impacted=3,
        hourly_rate=40,
        industry="manufacturing",
        enabled_workflows=("status_updates", "task_routing", "support_triage"),
        workflow_overrides={
            # ~50 shipments a week, each needing an update and a dispatch decision
            "status_updates": {"events_per_week": 50, "minutes_before": 15},
            "task_routing": {"events_per_week": 50, "minutes_before": 15},
            "support_triage": {"events_per_week": 30},
        },
    ),
    "realestate": SegmentDefaults(
        employees_impacted=3,
        hourly_rate=40,
        industry="real_estate",
        enabled_workflows=(
            "lead_followup",
            "appointment_scheduling",
            "status_updates",
            "customer_intake",
        ),
        workflow_overrides={
            "lead_followup": {"events_per_week": 30},
            "appointment_scheduling": {"events_per_week": 15, "minutes_before": 15},
            "status_updates": {"events_per_week": 12},
            "customer_intake": {"events_per_week": 15},
        },
    ),
}


def parse_segment(value: Optional[str]) -> Optional[str]:
    """
    Match a raw segment id (e.g. from a URL) against the known segments.

    Matching is case-insensitive. Anything unknown, empty or missing returns
    None, meaning "no segment selected" rather than an error.
    """
    if not value:
        return None
    normalized = value.strip().lower()
    if normalized in ALL_SEGMENTS:
        return normalized
    return None


def map_segment_to_state(segment: str, current_state: ROIState) -> Dict[str, Any]:
    """
    Build the state groups a segment pre-fills.

    Every catalog workflow is present in the rebuilt list; only the segment's
    workflows are enabled, and numbers come from the segment overrides when
    given, else the catalog defaults.

    Args:
        segment: A parsed segment id (see ``parse_segment``)
        current_state: Caller's state; only fields the segment does not own are read

    Returns:
        Dict with ``company``, ``costs`` and ``workflows`` suitable for
        ``dataclasses.replace(current_state, **partial)``
    """
    defaults = SEGMENT_DEFAULTS[segment]
    meta = SEGMENT_META[segment]
    enabled = set(defaults.enabled_workflows)

    workflows: List[WorkflowSelection] = []
    for definition in DEFAULT_WORKFLOWS:
        overrides = defaults.workflow_overrides.get(definition.id, {})
        workflows.append(
            WorkflowSelection(
                id=definition.id,
                enabled=definition.id in enabled,
                events_per_week=overrides.get("events_per_week", definition.default_events_per_week),
                minutes_before=overrides.get("minutes_before", definition.default_minutes_before),
                minutes_after=overrides.get("minutes_after", definition.default_minutes_after),
            )
        )

    return {
        "company": dataclasses.replace(
            current_state.company,
            employees_impacted=defaults.employees_impacted,
            industry=meta.industry,
        ),
        "costs": dataclasses.replace(current_state.costs, hourly_rate=defaults.hourly_rate),
        "workflows": workflows,
    }


def apply_segment(segment: str, current_state: ROIState) -> ROIState:
    """Return a copy of ``current_state`` with the segment defaults merged in."""
    return dataclasses.replace(current_state, **map_segment_to_state(segment, current_state))
