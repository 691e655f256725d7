# src/sweepfit_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class SweepFitError(Exception):
    """Base class for all custom, user-facing errors in SweepFit Core."""
    pass

class SimulationLoadError(SweepFitError):
    """
    Raised when loading a stepped simulation from its results and log files fails
    for any reason. The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    Used for static typing and for `isinstance` checks in the load facade.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception` so it can be used in `except` clauses, and it
    declares `get_diagnostic_report` as abstract so every subclass has to provide
    its own report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string so that all user-facing
    diagnostics share one layout.

    Args:
        error_type: The high-level category of the error (e.g., "Malformed Header").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (source file, line, step, ...).

    Returns:
        A formatted diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============== SweepFit Core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if line_number := context.get('line_number'):
        lines.append(f"Line:           {line_number}")
    if variable := context.get('variable'):
        lines.append(f"Variable:       {variable}")
    if step := context.get('step'):
        lines.append(f"Step:           {step}")
    if frequency := context.get('frequency'):
        lines.append(f"Frequency:      {frequency}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("========================================================================")
    return "\n".join(lines)
