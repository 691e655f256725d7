# src/sweepfit_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for reading the results and log files.

All parse-time failures are fatal for the file being read: `SteppedSimulation`
never gets built from a partially parsed input. Every class here derives from
`DiagnosableError`, so the load facade can catch a single type and turn any of
them into a user-facing report.

- `InputFileError` covers files that cannot be opened or read.
- `MalformedHeaderError` covers structural problems in the header text or in a
  `.step` line of the log.
- `UnexpectedEofError` is the special case of a results file that ends before
  its header terminator, or whose payload is shorter than the header promises.
- `BinaryIntegrityError` is raised in strict mode when the reader recorded any
  integrity issue.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import DiagnosableError, format_diagnostic_report
from ..validation.issues import IntegrityIssue


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all results-file and log-file errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Check that the results and log files come from the same simulator run.",
            context={}
        )


@dataclass(eq=False)
class InputFileError(BaseParsingError):
    """Raised when an input file does not exist or cannot be read."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Cannot read file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="File Access Error",
            details=self.details,
            suggestion="Ensure the file exists and has the correct read permissions.",
            context={'source_file': self.file_path}
        )


@dataclass(eq=False)
class MalformedHeaderError(BaseParsingError):
    """
    Raised when the header state machine or the log scanner meets text it cannot
    interpret: an unparsable integer, a missing section, or a bad `name=value` token.
    """
    details: str
    file_path: Optional[Path] = None
    line_number: Optional[int] = None

    def __str__(self):
        location = f" in file '{self.file_path}'" if self.file_path else ""
        if self.line_number is not None:
            location += f" (line {self.line_number})"
        return f"Malformed input{location}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Malformed Header",
            details=self.details,
            suggestion=(
                "The file does not follow the expected simulator output format. Make sure the "
                "results file was written in binary AC mode and the log belongs to the same run."
            ),
            context={'source_file': self.file_path, 'line_number': self.line_number}
        )


@dataclass(eq=False)
class UnexpectedEofError(MalformedHeaderError):
    """Raised when a results file ends before its header terminator or its payload."""

    def __str__(self):
        location = f" in file '{self.file_path}'" if self.file_path else ""
        return f"Unexpected end of file{location}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unexpected End Of File",
            details=self.details,
            suggestion="The results file looks truncated. Re-run the simulation and wait for it to finish writing.",
            context={'source_file': self.file_path}
        )


class BinaryIntegrityError(BaseParsingError):
    """
    Raised in strict mode when the load recorded one or more integrity issues.
    """
    def __init__(self, issues: List[IntegrityIssue], file_path: Optional[Path] = None):
        self.issues: List[IntegrityIssue] = list(issues)
        self.file_path = file_path
        summary = (
            f"Integrity check failed with {len(self.issues)} issue(s):\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        super().__init__(summary)

    def get_diagnostic_report(self) -> str:
        details = (
            "Strict mode rejects results files with integrity issues.\n"
            f"Found {len(self.issues)} issue(s):\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        return format_diagnostic_report(
            error_type="Results File Integrity Error",
            details=details,
            suggestion="Disable strict mode to load the file anyway, or regenerate the results file.",
            context={'source_file': self.file_path}
        )
