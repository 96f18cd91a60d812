"""ROI Calculator - CLI entry point."""

import dataclasses
import logging
from typing import Callable, Optional, Tuple, TypeVar

from src.core.config import load_environment
from src.core.models import PLAN_TIERS, SCENARIOS, ROIState
from src.interfaces.handlers import CalculatorWorkflow, format_results
from src.cli.prompts import (
    print_error,
    print_final_message,
    print_not_ready,
    print_pricing,
    print_results,
    print_segment_applied,
    print_workflow_start,
)
from src.roi.segments import ALL_SEGMENTS, SEGMENT_META, parse_segment
from src.roi.workflows import get_workflow, list_workflow_ids
from src.shared.logging import setup_logging
from src.shared.metrics import configure_metrics, increment_errors
from src.shared.tracing import configure_tracing

T = TypeVar("T")


def _ask(prompt: str, parse: Callable[[str], T], default: T) -> T:
    """Prompt until the answer parses; blank keeps ``default``."""
    shown = ", ".join(default) if isinstance(default, tuple) else default
    while True:
        raw = input(f"{prompt} [{shown}]: ").strip()
        if not raw:
            return default
        try:
            return parse(raw)
        except ValueError as e:
            print_error(str(e))


def _choice(options) -> Callable[[str], str]:
    def parse(raw: str) -> str:
        value = raw.lower()
        if value not in options:
            raise ValueError(f"Choose one of: {', '.join(options)}")
        return value

    return parse


def _optional_plan(raw: str) -> Optional[str]:
    if raw.lower() in ("none", "-"):
        return None
    return _choice(PLAN_TIERS)(raw)


def _workflow_ids(raw: str) -> Tuple[str, ...]:
    ids = tuple(part.strip() for part in raw.split(",") if part.strip())
    unknown = [i for i in ids if get_workflow(i) is None]
    if unknown:
        raise ValueError(f"Unknown workflows: {', '.join(unknown)}")
    return ids


def collect_state(workflow: CalculatorWorkflow) -> ROIState:
    """Prompt for the calculator inputs, starting from segment defaults if chosen."""
    state = workflow.build_state()

    segment = _ask(f"Industry segment ({', '.join(ALL_SEGMENTS)}, or none)", str, "none")
    segmented = workflow.apply_segment(segment, state)
    if segmented is not None:
        state = segmented
        print_segment_applied(SEGMENT_META[parse_segment(segment)].label)

    employees = _ask("Employees impacted", float, state.company.employees_impacted)
    hourly_rate = _ask("Hourly rate ($)", float, state.costs.hourly_rate)
    enabled = _ask(
        f"Workflows to automate ({', '.join(list_workflow_ids())})",
        _workflow_ids,
        tuple(w.id for w in state.workflows if w.enabled),
    )
    scenario = _ask(f"Scenario ({', '.join(SCENARIOS)})", _choice(SCENARIOS), state.scenario)
    plan = _ask(f"Preferred plan ({', '.join(PLAN_TIERS)}, or none)", _optional_plan, None)

    return dataclasses.replace(
        state,
        company=dataclasses.replace(state.company, employees_impacted=employees),
        costs=dataclasses.replace(state.costs, hourly_rate=hourly_rate),
        workflows=[dataclasses.replace(w, enabled=w.id in enabled) for w in state.workflows],
        novique=dataclasses.replace(state.novique, selected_plan=plan),
        scenario=scenario,
    )


def run_cli_workflow(workflow: Optional[CalculatorWorkflow] = None) -> None:
    """Run the interactive CLI calculator."""
    print_workflow_start()
    workflow = workflow or CalculatorWorkflow()

    state = collect_state(workflow)
    assessment = workflow.assess(state)

    if not assessment.readiness.can_show_roi:
        print_not_ready(assessment.readiness.results_state)
        return

    print_results(format_results(assessment.effective_results))
    print_pricing(assessment.derived_pricing)
    print_final_message()


def main() -> None:
    """Entry point for the CLI application."""
    load_environment()
    setup_logging(name="roi_calculator_cli", level=logging.WARNING, service_name="roi-calculator-cli")
    configure_tracing(service_name="roi-calculator-cli")
    configure_metrics()

    try:
        run_cli_workflow()
    except KeyboardInterrupt:
        print("\n\nExiting...")
    except Exception as e:
        increment_errors("cli_error")
        print_error(str(e))
        raise


if __name__ == "__main__":
    main()
