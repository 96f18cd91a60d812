"""Plan catalog, tier recommendation and fee derivation.

The value bands on ``PLAN_DEFINITIONS`` are the only place tier thresholds
live; recommendation reads them rather than repeating the numbers.
"""

import logging
from typing import Dict, List, Optional

from src.core.models import DerivedPricing, FeeRange, PlanDefinition, PricingSettings
from src.roi.calculations import round_half_up
from src.shared.errors import PlanNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_PRICING_SETTINGS = PricingSettings(monthly_value_multiplier=0.15, one_time_charge_multiplier=3)

FEE_ROUNDING_STEP = 50

PLAN_DEFINITIONS: List[PlanDefinition] = [
    PlanDefinition(
        id="starter",
        name="Starter",
        tagline="Get out of the weeds",
        description=(
            "Best for small teams automating their first critical workflows. Focused on "
            "eliminating repetitive admin and follow-up work."
        ),
        min_monthly_value=0,
        max_monthly_value=5000,
        monthly_fee_range=FeeRange(min=225, max=749),
        setup_fee_range=FeeRange(min=675, max=2247),
        color="green",
    ),
    PlanDefinition(
        id="growth",
        name="Growth",
        tagline="Run smoother, scale smarter",
        description=(
            "For growing teams with multiple workflows across sales and operations. "
            "Automation becomes part of how the business runs."
        ),
        min_monthly_value=5000,
        max_monthly_value=15000,
        monthly_fee_range=FeeRange(min=750, max=2499),
        setup_fee_range=FeeRange(min=2250, max=7497),
        color="blue",
    ),
    PlanDefinition(
        id="scale",
        name="Scale",
        tagline="Automation as infrastructure",
        description=(
            "Designed for high-volume operations where automation is a core system, "
            "not a side project."
        ),
        min_monthly_value=15000,
        max_monthly_value=None,
        # open value band, but the fee itself is capped
        monthly_fee_range=FeeRange(min=2500, max=5000),
        setup_fee_range=FeeRange(min=7500, max=15000),
        color="purple",
    ),
]

_PLANS_BY_ID: Dict[str, PlanDefinition] = {p.id: p for p in PLAN_DEFINITIONS}
_TIER_RANKS: Dict[str, int] = {p.id: rank for rank, p in enumerate(PLAN_DEFINITIONS)}


def get_plan_by_id(plan_id: str) -> PlanDefinition:
    """
    Return the plan definition for a tier id.

    Raises:
        PlanNotFoundError: If ``plan_id`` is not a known tier
    """
    try:
        return _PLANS_BY_ID[plan_id]
    except KeyError:
        raise PlanNotFoundError(f"Unknown plan tier: {plan_id}") from None


def tier_rank(tier: str) -> int:
    """Numeric rank of a tier: starter 0, growth 1, scale 2."""
    return _TIER_RANKS[tier]


def get_recommended_plan(monthly_value: float) -> PlanDefinition:
    """Return the plan whose value band contains ``monthly_value``."""
    for plan in PLAN_DEFINITIONS:
        if plan.covers(monthly_value):
            return plan
    # Below the first band (negative value): the cheapest plan still applies.
    return PLAN_DEFINITIONS[0]


def determine_recommended_tier(total_monthly_value: float) -> str:
    return get_recommended_plan(total_monthly_value).id


def enforce_minimum_tier(customer_selected_tier: Optional[str], recommended_tier: str) -> str:
    """Return the higher-ranked of the customer's choice and the recommendation."""
    if not customer_selected_tier:
        return recommended_tier
    if tier_rank(customer_selected_tier) >= tier_rank(recommended_tier):
        return customer_selected_tier
    return recommended_tier


def round_to_nearest_50(value: float) -> float:
    """Round to the nearest $50, halves going up."""
    return round_half_up(value / FEE_ROUNDING_STEP) * FEE_ROUNDING_STEP


def calculate_plan_pricing(
    plan_id: str,
    monthly_value: float,
    settings: PricingSettings = DEFAULT_PRICING_SETTINGS,
) -> Dict[str, float]:
    """
    Derive the monthly and setup fee for a plan.

    The raw fee (``monthly_value * monthly_value_multiplier``) is rounded to
    $50 and clamped into the plan's monthly fee range; setup is the clamped
    fee times ``one_time_charge_multiplier``.

    Returns:
        Dict with ``monthly_fee`` and ``setup_fee``
    """
    plan = get_plan_by_id(plan_id)
    raw_monthly_fee = monthly_value * settings.monthly_value_multiplier
    monthly_fee = plan.monthly_fee_range.clamp(round_to_nearest_50(raw_monthly_fee))
    setup_fee = monthly_fee * settings.one_time_charge_multiplier
    return {"monthly_fee": monthly_fee, "setup_fee": setup_fee}


def compute_derived_pricing(
    total_monthly_value: float,
    customer_selected_tier: Optional[str],
    settings: Optional[PricingSettings] = None,
) -> DerivedPricing:
    """
    Compute the enforced tier and its fees for a monthly value.

    The final tier is never ranked below the tier the value recommends; a
    lower customer selection is lifted and flagged with
    ``is_below_recommended``.

    Args:
        total_monthly_value: Total monthly benefit from ``calculate_roi``
        customer_selected_tier: Tier the customer picked, or None
        settings: Fee multipliers; defaults to ``DEFAULT_PRICING_SETTINGS``
    """
    settings = settings or DEFAULT_PRICING_SETTINGS
    recommended_tier = determine_recommended_tier(total_monthly_value)
    final_tier = enforce_minimum_tier(customer_selected_tier, recommended_tier)
    is_below_recommended = customer_selected_tier is not None and (
        tier_rank(customer_selected_tier) < tier_rank(recommended_tier)
    )
    if is_below_recommended:
        logger.debug(
            f"Selected tier {customer_selected_tier} is below recommended {recommended_tier}; "
            f"pricing at {final_tier}"
        )

    fees = calculate_plan_pricing(final_tier, total_monthly_value, settings)

    return DerivedPricing(
        monthly_fee=fees["monthly_fee"],
        setup_fee=fees["setup_fee"],
        customer_selected_tier=customer_selected_tier,
        recommended_tier=recommended_tier,
        final_tier=final_tier,
        is_below_recommended=is_below_recommended,
    )
