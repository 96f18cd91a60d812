"""Web request/response models for Flask application."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from src.core.models import ROIState
from src.shared.errors import ValidationError


@dataclass
class SubmitRequest:
    """Incoming ROI lead submission."""

    email: str
    state: Mapping[str, Any]

    @classmethod
    def from_json(cls, data: Optional[Mapping[str, Any]]) -> "SubmitRequest":
        """Create from JSON request."""
        if not isinstance(data, Mapping):
            raise ValidationError("Request body must be a JSON object")
        state = data.get("state") or {}
        if not isinstance(state, Mapping):
            raise ValidationError("state must be an object")
        email = data.get("email") or ""
        if not isinstance(email, str):
            raise ValidationError("Valid email required")
        return cls(email=email, state=state)


@dataclass
class SegmentResponse:
    """Segment metadata plus the pre-filled state it produces."""

    segment: str
    meta: Dict[str, Any]
    state: ROIState

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "segment": self.segment,
            "meta": self.meta,
            "state": self.state.to_dict(),
        }
