"""Shared data models for the ROI calculator.

Attributes are snake_case; ``from_dict``/``to_dict`` speak the camelCase JSON
used by the web API and the lead submission payload.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from src.shared.errors import ValidationError

SCENARIOS: Tuple[str, ...] = ("conservative", "expected", "aggressive")
PLAN_TIERS: Tuple[str, ...] = ("starter", "growth", "scale")
WORKFLOW_CATEGORIES: Tuple[str, ...] = ("sales", "operations", "support")


def _number(value: Any, name: str) -> float:
    """Coerce a JSON value to a number, rejecting booleans and junk."""
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            raise ValidationError(f"{name} must be a number") from None
    else:
        raise ValidationError(f"{name} must be a number")
    # ints are always finite; float NaN and infinities are not
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(f"{name} must be a finite number")
    return number


def _flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, Mapping):
        raise ValidationError(f"{key} must be an object")
    return section


def parse_plan_tier(value: Any) -> Optional[str]:
    """Validate an optional plan tier id coming from a request."""
    if value is None or value == "":
        return None
    if value not in PLAN_TIERS:
        raise ValidationError(f"Unknown plan tier: {value}")
    return value


@dataclass(frozen=True)
class WorkflowDefinition:
    """Catalog entry for an automatable workflow."""

    id: str
    name: str
    description: str
    category: str  # sales | operations | support
    default_events_per_week: float
    default_minutes_before: float
    default_minutes_after: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "defaultEventsPerWeek": self.default_events_per_week,
            "defaultMinutesBefore": self.default_minutes_before,
            "defaultMinutesAfter": self.default_minutes_after,
        }


@dataclass
class WorkflowSelection:
    """Per-calculation workflow choice; numbers may override the catalog defaults."""

    id: str
    enabled: bool
    events_per_week: float
    minutes_before: float
    minutes_after: float

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], base: Optional["WorkflowSelection"] = None
    ) -> "WorkflowSelection":
        if not isinstance(data, Mapping) or not data.get("id"):
            raise ValidationError("Each workflow needs an id")

        def pick(key: str, fallback: Any) -> Any:
            return data[key] if key in data else fallback

        return cls(
            id=str(data["id"]),
            enabled=_flag(pick("enabled", base.enabled if base else False), "enabled"),
            events_per_week=_number(
                pick("eventsPerWeek", base.events_per_week if base else 0), "eventsPerWeek"
            ),
            minutes_before=_number(
                pick("minutesBefore", base.minutes_before if base else 0), "minutesBefore"
            ),
            minutes_after=_number(
                pick("minutesAfter", base.minutes_after if base else 0), "minutesAfter"
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "enabled": self.enabled,
            "eventsPerWeek": self.events_per_week,
            "minutesBefore": self.minutes_before,
            "minutesAfter": self.minutes_after,
        }


@dataclass
class CompanyInfo:
    employees_impacted: float
    industry: str


@dataclass
class CostAssumptions:
    hourly_rate: float
    fully_loaded_multiplier: float  # benefits/overhead load, typically 1.2-1.5


@dataclass
class QualitySettings:
    enabled: bool
    error_rate: float  # fraction of events producing an error
    cost_per_error: float
    error_reduction: float  # fraction of errors avoided by automation


@dataclass
class RevenueSettings:
    enabled: bool
    leads_per_month: float
    conversion_rate: float
    conversion_lift_relative: float  # multiplicative lift on conversion_rate
    avg_deal_value: float
    gross_margin: float


@dataclass
class VendorTerms:
    """Commercial terms the customer is evaluating (the stated fee)."""

    monthly_fee: float
    one_time_setup: float
    selected_plan: Optional[str] = None


@dataclass
class ROIState:
    """Complete calculator input."""

    company: CompanyInfo
    costs: CostAssumptions
    workflows: List[WorkflowSelection]
    quality: QualitySettings
    revenue: RevenueSettings
    novique: VendorTerms
    scenario: str = "expected"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: "ROIState") -> "ROIState":
        """
        Build a state from request JSON, filling gaps from ``base``.

        Args:
            data: camelCase JSON object (any group or field may be omitted)
            base: State supplying values for omitted fields

        Raises:
            ValidationError: If a value has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise ValidationError("ROI state must be an object")

        company = _section(data, "company")
        costs = _section(data, "costs")
        quality = _section(data, "quality")
        revenue = _section(data, "revenue")
        terms = _section(data, "novique")

        workflows = base.workflows
        if "workflows" in data:
            raw_workflows = data["workflows"]
            if not isinstance(raw_workflows, list):
                raise ValidationError("workflows must be a list")
            by_id = {w.id: w for w in base.workflows}
            workflows = [
                WorkflowSelection.from_dict(w, by_id.get(w.get("id")) if isinstance(w, Mapping) else None)
                for w in raw_workflows
            ]
        else:
            workflows = [WorkflowSelection(**vars(w)) for w in workflows]

        scenario = data.get("scenario", base.scenario)
        if scenario not in SCENARIOS:
            raise ValidationError(f"Unknown scenario: {scenario}")

        return cls(
            company=CompanyInfo(
                employees_impacted=_number(
                    company.get("employeesImpacted", base.company.employees_impacted),
                    "employeesImpacted",
                ),
                industry=str(company.get("industry", base.company.industry)),
            ),
            costs=CostAssumptions(
                hourly_rate=_number(costs.get("hourlyRate", base.costs.hourly_rate), "hourlyRate"),
                fully_loaded_multiplier=_number(
                    costs.get("fullyLoadedMultiplier", base.costs.fully_loaded_multiplier),
                    "fullyLoadedMultiplier",
                ),
            ),
            workflows=workflows,
            quality=QualitySettings(
                enabled=_flag(quality.get("enabled", base.quality.enabled), "quality.enabled"),
                error_rate=_number(quality.get("errorRate", base.quality.error_rate), "errorRate"),
                cost_per_error=_number(
                    quality.get("costPerError", base.quality.cost_per_error), "costPerError"
                ),
                error_reduction=_number(
                    quality.get("errorReduction", base.quality.error_reduction), "errorReduction"
                ),
            ),
            revenue=RevenueSettings(
                enabled=_flag(revenue.get("enabled", base.revenue.enabled), "revenue.enabled"),
                leads_per_month=_number(
                    revenue.get("leadsPerMonth", base.revenue.leads_per_month), "leadsPerMonth"
                ),
                conversion_rate=_number(
                    revenue.get("conversionRate", base.revenue.conversion_rate), "conversionRate"
                ),
                conversion_lift_relative=_number(
                    revenue.get("conversionLiftRelative", base.revenue.conversion_lift_relative),
                    "conversionLiftRelative",
                ),
                avg_deal_value=_number(
                    revenue.get("avgDealValue", base.revenue.avg_deal_value), "avgDealValue"
                ),
                gross_margin=_number(
                    revenue.get("grossMargin", base.revenue.gross_margin), "grossMargin"
                ),
            ),
            novique=VendorTerms(
                monthly_fee=_number(terms.get("monthlyFee", base.novique.monthly_fee), "monthlyFee"),
                one_time_setup=_number(
                    terms.get("oneTimeSetup", base.novique.one_time_setup), "oneTimeSetup"
                ),
                selected_plan=parse_plan_tier(
                    terms.get("selectedPlan", base.novique.selected_plan)
                ),
            ),
            scenario=scenario,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": {
                "employeesImpacted": self.company.employees_impacted,
                "industry": self.company.industry,
            },
            "costs": {
                "hourlyRate": self.costs.hourly_rate,
                "fullyLoadedMultiplier": self.costs.fully_loaded_multiplier,
            },
            "workflows": [w.to_dict() for w in self.workflows],
            "quality": {
                "enabled": self.quality.enabled,
                "errorRate": self.quality.error_rate,
                "costPerError": self.quality.cost_per_error,
                "errorReduction": self.quality.error_reduction,
            },
            "revenue": {
                "enabled": self.revenue.enabled,
                "leadsPerMonth": self.revenue.leads_per_month,
                "conversionRate": self.revenue.conversion_rate,
                "conversionLiftRelative": self.revenue.conversion_lift_relative,
                "avgDealValue": self.revenue.avg_deal_value,
                "grossMargin": self.revenue.gross_margin,
            },
            "novique": {
                "monthlyFee": self.novique.monthly_fee,
                "oneTimeSetup": self.novique.one_time_setup,
                "selectedPlan": self.novique.selected_plan,
            },
            "scenario": self.scenario,
        }


@dataclass
class ROIResults:
    """Calculator output. ``payback_months`` is ``math.inf`` when net benefit <= 0."""

    hours_saved_per_month: float
    labor_savings_per_month: float
    error_savings_per_month: float
    revenue_uplift_per_month: float
    total_benefit_per_month: float
    net_benefit_per_month: float
    roi_percent: float
    payback_months: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hoursSavedPerMonth": self.hours_saved_per_month,
            "laborSavingsPerMonth": self.labor_savings_per_month,
            "errorSavingsPerMonth": self.error_savings_per_month,
            "revenueUpliftPerMonth": self.revenue_uplift_per_month,
            "totalBenefitPerMonth": self.total_benefit_per_month,
            "netBenefitPerMonth": self.net_benefit_per_month,
            "roiPercent": self.roi_percent,
            "paybackMonths": None if math.isinf(self.payback_months) else self.payback_months,
        }


@dataclass(frozen=True)
class FeeRange:
    min: float
    max: Optional[float] = None  # None means no upper bound

    def clamp(self, value: float) -> float:
        if value < self.min:
            return self.min
        if self.max is not None and value > self.max:
            return self.max
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class PlanDefinition:
    """Commercial plan tier with its value band and fee ranges."""

    id: str
    name: str
    tagline: str
    description: str
    min_monthly_value: float
    max_monthly_value: Optional[float]  # None for the open-ended top band
    monthly_fee_range: FeeRange
    setup_fee_range: FeeRange
    color: str

    def covers(self, monthly_value: float) -> bool:
        """Return True if ``monthly_value`` falls in this plan's [min, max) band."""
        if monthly_value < self.min_monthly_value:
            return False
        return self.max_monthly_value is None or monthly_value < self.max_monthly_value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tagline": self.tagline,
            "description": self.description,
            "minMonthlyValue": self.min_monthly_value,
            "maxMonthlyValue": self.max_monthly_value,
            "monthlyFeeRange": self.monthly_fee_range.to_dict(),
            "setupFeeRange": self.setup_fee_range.to_dict(),
            "color": self.color,
        }


@dataclass(frozen=True)
class PricingSettings:
    """Multipliers that turn monthly value into fees."""

    monthly_value_multiplier: float = 0.15  # 15% of monthly value
    one_time_charge_multiplier: float = 3  # setup = 3x monthly fee

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PricingSettings":
        if not isinstance(data, Mapping):
            raise ValidationError("Pricing settings must be an object")
        try:
            monthly = data["monthlyValueMultiplier"]
            one_time = data["oneTimeChargeMultiplier"]
        except KeyError as err:
            raise ValidationError(f"Missing pricing setting: {err.args[0]}") from err
        return cls(
            monthly_value_multiplier=_number(monthly, "monthlyValueMultiplier"),
            one_time_charge_multiplier=_number(one_time, "oneTimeChargeMultiplier"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyValueMultiplier": self.monthly_value_multiplier,
            "oneTimeChargeMultiplier": self.one_time_charge_multiplier,
        }


@dataclass
class DerivedPricing:
    monthly_fee: float
    setup_fee: float
    customer_selected_tier: Optional[str]
    recommended_tier: str
    final_tier: str
    is_below_recommended: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyFee": self.monthly_fee,
            "setupFee": self.setup_fee,
            "customerSelectedTier": self.customer_selected_tier,
            "recommendedTier": self.recommended_tier,
            "finalTier": self.final_tier,
            "isBelowRecommended": self.is_below_recommended,
        }


@dataclass
class ReadinessFlags:
    """Which parts of the results panel have enough input to be shown."""

    has_team_info: bool
    has_workflows: bool
    can_show_roi: bool
    can_recommend_plan: bool
    can_show_pricing: bool
    results_state: str  # initial | team | workflows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasTeamInfo": self.has_team_info,
            "hasWorkflows": self.has_workflows,
            "canShowRoi": self.can_show_roi,
            "canRecommendPlan": self.can_recommend_plan,
            "canShowPricing": self.can_show_pricing,
            "resultsState": self.results_state,
        }


@dataclass(frozen=True)
class SegmentMeta:
    id: str
    label: str
    subtitle: str
    industry: str
    narrative: str
    reframing: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "subtitle": self.subtitle,
            "industry": self.industry,
            "narrative": self.narrative,
            "reframing": self.reframing,
        }


@dataclass(frozen=True)
class SegmentDefaults:
    employees_impacted: float
    hourly_rate: float
    industry: str
    enabled_workflows: Tuple[str, ...]
    # workflow id -> {"events_per_week" | "minutes_before" | "minutes_after": value}
    workflow_overrides: Mapping[str, Mapping[str, float]] = field(default_factory=dict)


@dataclass
class ROISubmission:
    """Lead submission payload handed to whatever stores/notifies downstream."""

    email: str
    results: ROIResults
    industry: Optional[str]
    employees_impacted: Optional[float]
    selected_workflows: List[str]
    derived_pricing: Optional[DerivedPricing]
    submitted_at: str  # ISO 8601

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "results": self.results.to_dict(),
            "industry": self.industry,
            "employeesImpacted": self.employees_impacted,
            "selectedWorkflows": list(self.selected_workflows),
            "derivedPricing": self.derived_pricing.to_dict() if self.derived_pricing else None,
            "submittedAt": self.submitted_at,
        }
