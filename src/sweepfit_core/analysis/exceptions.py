# src/sweepfit_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the per-variable analysis engine.

These are per-call failures: they never invalidate the loaded simulation, so
callers may catch them and carry on with the next step or variable.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class FrequencyNotFoundError(DiagnosableError, ValueError):
    """Raised when no frequency sample is at or above the requested frequency."""
    target_hz: float
    max_hz: Optional[float] = None
    variable: Optional[str] = None

    def __str__(self):
        highest = f" (highest sample is {self.max_hz:g} Hz)" if self.max_hz is not None else ""
        return f"No frequency sample at or above {self.target_hz:g} Hz{highest}."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Frequency Not Found",
            details=str(self),
            suggestion="Extend the AC sweep range of the simulation or choose a lower reference frequency.",
            context={'variable': self.variable, 'frequency': f"{self.target_hz:g} Hz"}
        )


@dataclass(eq=False)
class DataPointIndexError(DiagnosableError, IndexError):
    """Raised when a data point index lies beyond the sample sequence."""
    index: int
    length: int
    variable: Optional[str] = None

    def __str__(self):
        return f"Data point index {self.index} is out of range for {self.length} sample(s)."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Index Out Of Range",
            details=str(self),
            suggestion="Use an index between 0 and the number of points per step minus one.",
            context={'variable': self.variable}
        )


@dataclass(eq=False)
class UnsupportedDataTypeError(DiagnosableError, NotImplementedError):
    """Raised for data views the engine does not provide (the complex argument)."""
    data_type: Any

    def __str__(self):
        return f"Data type '{self.data_type}' is not supported."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unsupported Data Type",
            details=str(self),
            suggestion="Use REAL, IMAGINARY, ABSOLUTE or ABSOLUTE_DECIBEL.",
            context={}
        )


@dataclass(eq=False)
class SampleLengthMismatchError(DiagnosableError, ValueError):
    """Raised when a frequency view and a data view do not have the same length."""
    expected: int
    actual: int

    def __str__(self):
        return f"Frequency view has {self.actual} sample(s), expected {self.expected}."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Sample Length Mismatch",
            details=str(self),
            suggestion="Pair each result with the frequency view of the same step.",
            context={}
        )
