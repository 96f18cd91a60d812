"""In-memory stores for pricing settings and lead submissions (dev use only)."""

import logging
import math
import uuid
from typing import Callable, Dict, Optional

from .config import get_pricing_settings
from .models import PricingSettings, ROISubmission
from src.shared.errors import ValidationError

logger = logging.getLogger(__name__)


class InMemoryPricingSettingsStore:
    """Admin-editable fee multipliers, falling back to configured defaults."""

    def __init__(self, defaults: Callable[[], PricingSettings] = get_pricing_settings) -> None:
        """
        Initialize the store.

        Args:
            defaults: Callable returning the settings used when nothing is saved
        """
        self._defaults = defaults
        self._saved: Optional[PricingSettings] = None

    def get(self) -> PricingSettings:
        """Return saved settings, or the configured defaults."""
        if self._saved is not None:
            return self._saved
        return self._defaults()

    def save(self, settings: PricingSettings) -> None:
        """
        Persist new settings.

        Raises:
            ValidationError: If either multiplier is not a positive finite number
        """
        for value in (settings.monthly_value_multiplier, settings.one_time_charge_multiplier):
            if not math.isfinite(value) or value <= 0:
                raise ValidationError("Pricing multipliers must be positive finite numbers")
        logger.info(
            f"Saving pricing settings: monthly={settings.monthly_value_multiplier} "
            f"one_time={settings.one_time_charge_multiplier}"
        )
        self._saved = settings

    def reset(self) -> None:
        """Drop saved settings so defaults apply again."""
        self._saved = None


class InMemoryAssessmentStore:
    """Accepted ROI lead submissions keyed by generated id."""

    def __init__(self) -> None:
        self._submissions: Dict[str, ROISubmission] = {}

    def add(self, submission: ROISubmission) -> str:
        """Store a submission and return its id."""
        submission_id = uuid.uuid4().hex
        self._submissions[submission_id] = submission
        return submission_id

    def get(self, submission_id: str) -> Optional[ROISubmission]:
        """Return a submission by id, if present."""
        return self._submissions.get(submission_id)

    def list_all(self) -> Dict[str, ROISubmission]:
        """Return all stored submissions."""
        return dict(self._submissions)

    def clear(self) -> None:
        """Remove all submissions from the store."""
        self._submissions.clear()
