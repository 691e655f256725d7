# src/sweepfit_core/simulation/exceptions.py
"""
Defines the lookup errors of the stepped simulation aggregate.

Both are per-call failures: a missed lookup leaves the loaded simulation intact.
They inherit from `LookupError` so callers can treat them like a missing key.
"""
from dataclasses import dataclass
from typing import Sequence

from ..errors import DiagnosableError, format_diagnostic_report
from ..parser.raw_data import Step, format_step


@dataclass(eq=False)
class StepNotFoundError(DiagnosableError, LookupError):
    """Raised when a step is not part of the step catalog."""
    step: Step

    def __str__(self):
        return f"Step '{format_step(self.step)}' is not part of this simulation."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Step Not Found",
            details=str(self),
            suggestion="Use one of the steps returned by available_steps(); steps are matched by name and value.",
            context={'step': format_step(self.step)}
        )


@dataclass(eq=False)
class VariableNotFoundError(DiagnosableError, LookupError):
    """Raised when no declared variable has the requested name."""
    name: str
    available: Sequence[str] = ()

    def __str__(self):
        return f"Variable '{self.name}' is not declared in the results file."

    def get_diagnostic_report(self) -> str:
        names = ", ".join(self.available) if self.available else "(none)"
        return format_diagnostic_report(
            error_type="Variable Not Found",
            details=f"{self}\nDeclared variables: {names}",
            suggestion="Check the spelling; variable names are case-sensitive, e.g. 'V(out)'.",
            context={'variable': self.name}
        )
