"""Static catalog of automatable workflows and calculator lookup tables.

The catalog supplies default time/frequency assumptions for each workflow.
Industries and fully-loaded multipliers are presentation metadata only; the
calculation never reads them.
"""

from typing import Dict, List, Optional

from src.core.models import WorkflowDefinition, WorkflowSelection

DEFAULT_WORKFLOWS: List[WorkflowDefinition] = [
    WorkflowDefinition(
        id="lead_followup",
        name="Lead Capture + Follow-up",
        description="Automated lead capture from web forms with instant email/SMS follow-up",
        category="sales",
        default_events_per_week=25,
        default_minutes_before=12,
        default_minutes_after=3,
    ),
    WorkflowDefinition(
        id="appointment_scheduling",
        name="Appointment Scheduling + Reminders",
        description="AI-powered scheduling with automated confirmation and reminder messages",
        category="sales",
        default_events_per_week=20,
        default_minutes_before=15,
        default_minutes_after=2,
    ),
    WorkflowDefinition(
        id="invoice_generation",
        name="Invoice/Quote Generation",
        description="Auto-generate invoices and quotes from job data",
        category="operations",
        default_events_per_week=15,
        default_minutes_before=20,
        default_minutes_after=5,
    ),
    WorkflowDefinition(
        id="customer_intake",
        name="Customer Intake Forms",
        description="Digital intake forms with auto-populated CRM records",
        category="operations",
        default_events_per_week=12,
        default_minutes_before=10,
        default_minutes_after=2,
    ),
    WorkflowDefinition(
        id="status_updates",
        name="Status Updates + Reporting",
        description="Automated status notifications and report generation",
        category="operations",
        default_events_per_week=30,
        default_minutes_before=8,
        default_minutes_after=1,
    ),
    WorkflowDefinition(
        id="task_routing",
        name="Internal Task Routing",
        description="Smart assignment of tasks to team members based on availability",
        category="operations",
        default_events_per_week=18,
        default_minutes_before=10,
        default_minutes_after=2,
    ),
    WorkflowDefinition(
        id="support_triage",
        name="Support Triage",
        description="AI classification and routing of support requests",
        category="support",
        default_events_per_week=20,
        default_minutes_before=15,
        default_minutes_after=3,
    ),
]

_WORKFLOWS_BY_ID: Dict[str, WorkflowDefinition] = {w.id: w for w in DEFAULT_WORKFLOWS}

INDUSTRIES: List[Dict[str, str]] = [
    {"value": "home_services", "label": "Home Services"},
    {"value": "professional_services", "label": "Professional Services"},
    {"value": "healthcare", "label": "Healthcare"},
    {"value": "retail", "label": "Retail"},
    {"value": "real_estate", "label": "Real Estate"},
    {"value": "construction", "label": "Construction"},
    {"value": "manufacturing", "label": "Manufacturing"},
    {"value": "other", "label": "Other"},
]

FULLY_LOADED_MULTIPLIERS: List[Dict[str, object]] = [
    {"value": 1.2, "label": "1.2x (Basic benefits)"},
    {"value": 1.3, "label": "1.3x (Standard)"},
    {"value": 1.4, "label": "1.4x (Good benefits)"},
    {"value": 1.5, "label": "1.5x (Premium benefits)"},
]


def get_workflow(workflow_id: str) -> Optional[WorkflowDefinition]:
    """
    Look up a workflow definition.

    Args:
        workflow_id: Catalog id (e.g. "lead_followup")

    Returns:
        The WorkflowDefinition, or None if the id is not in the catalog
    """
    return _WORKFLOWS_BY_ID.get(workflow_id)


def list_workflow_ids() -> List[str]:
    """Return catalog ids in display order."""
    return [w.id for w in DEFAULT_WORKFLOWS]


def get_workflows_by_category(category: str) -> List[WorkflowDefinition]:
    """Return the catalog entries in one category (sales, operations or support)."""
    return [w for w in DEFAULT_WORKFLOWS if w.category == category]


def default_selection(definition: WorkflowDefinition, enabled: bool = False) -> WorkflowSelection:
    """Build a selection carrying the catalog defaults for ``definition``."""
    return WorkflowSelection(
        id=definition.id,
        enabled=enabled,
        events_per_week=definition.default_events_per_week,
        minutes_before=definition.default_minutes_before,
        minutes_after=definition.default_minutes_after,
    )


def default_selections() -> List[WorkflowSelection]:
    """Return one disabled selection per catalog workflow."""
    return [default_selection(w) for w in DEFAULT_WORKFLOWS]
