"""Interface layer shared by the CLI and Web applications."""

from .handlers import CalculatorWorkflow, format_results

__all__ = ["CalculatorWorkflow", "format_results"]
