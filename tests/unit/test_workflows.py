"""Tests for the workflow catalog."""

from src.core.models import WORKFLOW_CATEGORIES
from src.roi.workflows import (
    DEFAULT_WORKFLOWS,
    FULLY_LOADED_MULTIPLIERS,
    INDUSTRIES,
    default_selections,
    get_workflow,
    get_workflows_by_category,
    list_workflow_ids,
)


class TestWorkflowCatalog:
    """Test catalog contents and lookups."""

    def test_catalog_ids_are_unique(self):
        ids = list_workflow_ids()
        assert len(ids) == len(set(ids)) == 7

    def test_categories_are_known(self):
        for workflow in DEFAULT_WORKFLOWS:
            assert workflow.category in WORKFLOW_CATEGORIES

    def test_defaults_never_increase_handling_time(self):
        """Minutes after automation never exceed minutes before."""
        for workflow in DEFAULT_WORKFLOWS:
            assert workflow.default_minutes_after <= workflow.default_minutes_before

    def test_get_workflow_known_id(self):
        workflow = get_workflow("lead_followup")
        assert workflow is not None
        assert workflow.name == "Lead Capture + Follow-up"
        assert workflow.default_events_per_week == 25
        assert workflow.default_minutes_before == 12
        assert workflow.default_minutes_after == 3

    def test_get_workflow_unknown_id_returns_none(self):
        assert get_workflow("does_not_exist") is None
        assert get_workflow("") is None

    def test_get_workflows_by_category(self):
        support = get_workflows_by_category("support")
        assert [w.id for w in support] == ["support_triage"]
        assert len(get_workflows_by_category("operations")) == 4

    def test_default_selections_cover_catalog_disabled(self):
        selections = default_selections()
        assert [s.id for s in selections] == list_workflow_ids()
        assert not any(s.enabled for s in selections)
        invoice = next(s for s in selections if s.id == "invoice_generation")
        assert (invoice.events_per_week, invoice.minutes_before, invoice.minutes_after) == (15, 20, 5)


class TestLookupTables:
    """Test presentation lookup tables."""

    def test_industries_include_segment_industries(self):
        values = {i["value"] for i in INDUSTRIES}
        assert {"professional_services", "healthcare", "manufacturing", "real_estate"} <= values

    def test_multiplier_choices(self):
        assert [m["value"] for m in FULLY_LOADED_MULTIPLIERS] == [1.2, 1.3, 1.4, 1.5]
