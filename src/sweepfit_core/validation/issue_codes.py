# src/sweepfit_core/validation/issue_codes.py
import logging
from enum import Enum

from .issues import IntegrityIssue, IssueLevel

logger = logging.getLogger(__name__)


class IntegrityIssueCode(Enum):
    """
    Registry of integrity issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Binary Payload Issues (BIN_...) ---
    BIN_TRAILING_BYTES = ("BIN_TRAILING_BYTES", "Binary payload ends with {trailing_bytes} byte(s) that do not form a complete {record_size}-byte record; they were ignored.")
    BIN_EXCESS_RECORDS = ("BIN_EXCESS_RECORDS", "Binary payload holds {excess_records} record(s) beyond the {expected_records} announced by the header; they were ignored.")

    # --- Header Consistency Issues (HDR_...) ---
    HDR_VAR_COUNT_MISMATCH = ("HDR_VAR_COUNT_MISMATCH", "Header declares {declared} variable(s) but {parsed} declaration line(s) were found.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Fills the template; a missing argument yields a placeholder message instead of raising."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Issue {self.code}: template argument {e} not supplied (got {sorted(kwargs)}).")
            return f"{self.code}: Missing key {e} while rendering '{self.template}'."

    def create_issue(self, level: IssueLevel = IssueLevel.WARNING, **kwargs) -> IntegrityIssue:
        """Builds an IntegrityIssue for this code, keeping the arguments as details."""
        return IntegrityIssue(level=level, code=self.code, message=self.format_message(**kwargs), details=dict(kwargs))
