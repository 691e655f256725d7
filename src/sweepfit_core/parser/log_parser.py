# src/sweepfit_core/parser/log_parser.py
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..constants import STEP_DIRECTIVE
from .exceptions import MalformedHeaderError
from .raw_data import ParsedLog, Step, SteppingVariable

logger = logging.getLogger(__name__)


def decode_log_bytes(data: bytes) -> str:
    """
    Decodes simulator log content. Some simulator versions write their logs as
    UTF-16LE, which shows up as NUL bytes near the start of the file.
    """
    if b"\x00" in data[:128]:
        text = data.decode("utf-16-le", errors="replace")
    else:
        text = data.decode("utf-8", errors="replace")
    return text.lstrip("\ufeff")


class LogParser:
    """Extracts the ordered step catalog from the text of a simulator log."""

    def parse(self, text: str, source_path: Optional[Union[str, Path]] = None) -> ParsedLog:
        """
        Returns one Step per line starting with `.step`, in file order.

        Raises:
            MalformedHeaderError: A token on a `.step` line is not `name=value`
                with a numeric value.
        """
        path = Path(source_path) if source_path is not None else None
        steps: List[Step] = []
        line_numbers: List[int] = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.startswith(STEP_DIRECTIVE):
                continue
            tokens = line.split()
            if tokens[0] != STEP_DIRECTIVE:
                # e.g. ".stepping" is not a step directive
                continue
            steps.append(tuple(self._parse_token(token, path, line_number) for token in tokens[1:]))
            line_numbers.append(line_number)

        logger.debug(f"Log scan found {len(steps)} step line(s).")
        return ParsedLog(steps=tuple(steps), source_path=path, step_line_numbers=tuple(line_numbers))

    @staticmethod
    def _parse_token(token: str, path: Optional[Path], line_number: int) -> SteppingVariable:
        name, sep, raw_value = token.partition("=")
        if not sep or not name or "=" in raw_value:
            raise MalformedHeaderError(
                details=f"Step token '{token}' is not of the form name=value.",
                file_path=path,
                line_number=line_number,
            )
        try:
            value = float(raw_value)
        except ValueError as e:
            raise MalformedHeaderError(
                details=f"Step token '{token}' has a non-numeric value '{raw_value}'.",
                file_path=path,
                line_number=line_number,
            ) from e
        return SteppingVariable(name=name, value=value)
