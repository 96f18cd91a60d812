"""HTTP route handlers for Web API."""

import logging
from typing import Any, Dict, Mapping, Optional

from src.core.models import PricingSettings
from src.interfaces.handlers import CalculatorWorkflow
from src.roi.plans import PLAN_DEFINITIONS
from src.roi.segments import ALL_SEGMENTS, SEGMENT_META, parse_segment
from src.roi.workflows import DEFAULT_WORKFLOWS, FULLY_LOADED_MULTIPLIERS, INDUSTRIES
from src.shared.errors import ValidationError
from src.shared.metrics import increment_errors
from src.web.models import SegmentResponse, SubmitRequest

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class WebHandlers:
    """Handlers for Web API endpoints."""

    def __init__(self, workflow: CalculatorWorkflow):
        """
        Initialize handlers.

        Args:
            workflow: CalculatorWorkflow instance shared with other interfaces
        """
        self.workflow = workflow

    def handle_catalog(self) -> Dict[str, Any]:
        """Return the workflow catalog and calculator lookup tables."""
        return {
            "workflows": [w.to_dict() for w in DEFAULT_WORKFLOWS],
            "industries": INDUSTRIES,
            "fullyLoadedMultipliers": FULLY_LOADED_MULTIPLIERS,
        }

    def handle_plans(self) -> Dict[str, Any]:
        return {"plans": [p.to_dict() for p in PLAN_DEFINITIONS]}

    def handle_segments(self) -> Dict[str, Any]:
        return {"segments": [SEGMENT_META[s].to_dict() for s in ALL_SEGMENTS]}

    def handle_segment(
        self, raw_segment: str, state_data: Optional[Mapping[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Handle segment pre-fill endpoint.

        Args:
            raw_segment: Segment id from the URL (case-insensitive)
            state_data: Optional current state JSON to merge the defaults into

        Returns:
            Segment metadata and merged state, or None for an unknown segment
        """
        segment = parse_segment(raw_segment)
        if segment is None:
            return None
        try:
            state = self.workflow.apply_segment(segment, self.workflow.build_state(state_data))
        except ValidationError:
            increment_errors("validation_error")
            raise
        return SegmentResponse(
            segment=segment, meta=SEGMENT_META[segment].to_dict(), state=state
        ).to_dict()

    def handle_calculate(self, data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Handle calculate endpoint.

        Args:
            data: ROI state JSON (partial allowed)

        Returns:
            Dictionary with results, effectiveResults, readiness, derivedPricing and formatted
        """
        try:
            state = self.workflow.build_state(data)
            return self.workflow.calculate(state)
        except ValidationError as e:
            logger.info(f"Rejected calculate request: {e}")
            increment_errors("validation_error")
            raise
        except Exception as e:
            logger.error(f"Error in calculate handler: {e}")
            increment_errors("calculation_error")
            raise

    def handle_submit(self, data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Handle ROI submission endpoint.

        Returns:
            Dictionary with success flag and submission id
        """
        try:
            request = SubmitRequest.from_json(data)
            state = self.workflow.build_state(request.state)
            result = self.workflow.submit(request.email, state)
            return {"success": result["success"], "id": result["id"]}
        except ValidationError as e:
            logger.info(f"Rejected submission: {e}")
            increment_errors("validation_error")
            raise
        except Exception as e:
            logger.error(f"Error in submission handler: {e}")
            increment_errors("submission_error")
            raise

    def handle_get_settings(self) -> Dict[str, Any]:
        return {"settings": self.workflow.settings_store.get().to_dict()}

    def handle_save_settings(self, data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Handle pricing settings update.

        Raises:
            ValidationError: If the settings are missing, non-numeric or not positive
        """
        try:
            settings = PricingSettings.from_dict(data)
            self.workflow.settings_store.save(settings)
        except ValidationError:
            increment_errors("validation_error")
            raise
        return {"settings": settings.to_dict()}

    def handle_reset_settings(self) -> Dict[str, Any]:
        self.workflow.settings_store.reset()
        return self.handle_get_settings()
