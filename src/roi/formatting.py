"""Display formatting for calculator results (USD, en-US grouping)."""

import math

from src.roi.calculations import WEEKS_PER_MONTH, round_half_up

# Payback periods longer than this are shown as N/A.
MAX_DISPLAY_MONTHS = 100


def _grouped(value: float) -> str:
    """Group thousands, keeping up to three decimals like a JS ``toLocaleString``."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_currency(value: float) -> str:
    """Whole-dollar currency, e.g. ``$5,066`` or ``-$1,200``."""
    amount = round_half_up(value)
    if amount < 0:
        return f"-${-amount:,}"
    return f"${amount:,}"


def format_percent(value: float) -> str:
    return f"{_grouped(value)}%"


def format_hours(value: float) -> str:
    return f"{_grouped(value)} hrs"


def format_months(value: float) -> str:
    """
    Format a payback period.

    Infinite or very long periods render as ``N/A``; periods under a month
    are shown in weeks.
    """
    if math.isinf(value) or math.isnan(value) or value > MAX_DISPLAY_MONTHS:
        return "N/A"
    if value < 1:
        weeks = round_half_up(value * WEEKS_PER_MONTH)
        return f"{weeks} week{'' if weeks == 1 else 's'}"
    return f"{_grouped(value)} month{'' if value == 1 else 's'}"
