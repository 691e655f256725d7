# src/sweepfit_core/validation/__init__.py
from .issues import IntegrityIssue, IssueLevel
from .issue_codes import IntegrityIssueCode

__all__ = [
    "IntegrityIssue",
    "IssueLevel",
    "IntegrityIssueCode",
]
