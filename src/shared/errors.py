"""Shared exception definitions for the application."""


class ROICalculatorError(Exception):
    """Base exception for ROI Calculator errors."""

    pass


class ConfigurationError(ROICalculatorError):
    """Raised when configuration is missing or invalid."""

    pass


class ValidationError(ROICalculatorError):
    """Raised when a request payload or settings value is malformed."""

    pass


class PlanNotFoundError(ROICalculatorError):
    """Raised when a plan tier id is not in the plan catalog."""

    pass
