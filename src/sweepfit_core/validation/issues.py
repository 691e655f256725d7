# src/sweepfit_core/validation/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict

logger = logging.getLogger(__name__)


class IssueLevel(Enum):
    """Severity level of an integrity issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegrityIssue:
    """
    A single integrity problem found while loading a results file. Issues do not
    stop a normal load; strict mode turns any of them into an error.
    """
    level: IssueLevel
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]", self.message]
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in sorted(self.details.items()))
            parts.append(f"({details_str})")
        return " ".join(parts)
