"""CLI prompts and formatting utilities."""

from typing import Dict, Optional

from src.core.models import DerivedPricing
from src.roi.formatting import format_currency
from src.roi.plans import get_plan_by_id


def print_header(title: str) -> None:
    """Print a formatted section header."""
    print(f"\n{'=' * 60}")
    print(f"=== {title}")
    print(f"{'=' * 60}\n")


def print_workflow_start() -> None:
    """Print calculator start message."""
    print_header("ROI Calculator")


def print_segment_applied(label: str) -> None:
    print(f"Using defaults for {label}.\n")


def print_error(error: str) -> None:
    """Print error message."""
    print(f"❌ Error: {error}\n", flush=True)


def print_not_ready(results_state: str) -> None:
    """Explain which inputs are still missing."""
    if results_state == "initial":
        print("Enter a team size and hourly rate to see results.\n")
    else:
        print("Enable at least one workflow to see results.\n")


def print_results(formatted: Dict[str, str]) -> None:
    """Print formatted results as an aligned table."""
    print_header("Projected Monthly Impact")
    rows = [
        ("Hours saved", formatted["hoursSavedPerMonth"]),
        ("Labor savings", formatted["laborSavingsPerMonth"]),
        ("Error savings", formatted["errorSavingsPerMonth"]),
        ("Revenue uplift", formatted["revenueUpliftPerMonth"]),
        ("Total benefit", formatted["totalBenefitPerMonth"]),
        ("Net benefit", formatted["netBenefitPerMonth"]),
        ("ROI", formatted["roiPercent"]),
        ("Payback", formatted["paybackMonths"]),
    ]
    for label, value in rows:
        print(f"  {label:<16}{value:>14}")
    print()


def print_pricing(pricing: Optional[DerivedPricing]) -> None:
    """Print the enforced plan and fees, with a notice when the pick was lifted."""
    if pricing is None:
        return
    plan = get_plan_by_id(pricing.final_tier)
    print_header(f"Plan: {plan.name}")
    print(f"  {plan.tagline}")
    print(f"  Monthly fee: {format_currency(pricing.monthly_fee)}")
    print(f"  Setup fee:   {format_currency(pricing.setup_fee)}")
    if pricing.is_below_recommended:
        selected = get_plan_by_id(pricing.customer_selected_tier)
        print(
            f"\n  You picked {selected.name}, but your projected value puts you in "
            f"{plan.name}; pricing reflects {plan.name}."
        )
    print()


def print_final_message() -> None:
    """Print final message."""
    print("=" * 60)
