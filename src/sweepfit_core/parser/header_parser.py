# src/sweepfit_core/parser/header_parser.py
import logging
from enum import Enum, auto
from pathlib import Path
from typing import List, Optional, Union

from ..constants import BINARY_MARKER
from .exceptions import MalformedHeaderError, UnexpectedEofError
from .raw_data import ParsedHeader, SimulationVariable, VariableType

logger = logging.getLogger(__name__)

# Largest id a declaration may carry (unsigned 16 bit).
MAX_VARIABLE_ID = 0xFFFF


class HeaderState(Enum):
    OTHER = auto()
    VARIABLE_COUNT_DECLARED = auto()
    IN_VARIABLE_LIST = auto()
    POINT_COUNT_DECLARED = auto()
    BINARY_MARKER_SEEN = auto()


class HeaderParser:
    """
    Reads the text header of a results file and recovers the ordered variable
    catalog and the total point count.

    The header is scanned line by line with a small state machine. Markers are
    recognised by substring containment, checked in this order: "No. Variables",
    "Variables", "No. Points", "Binary". Only lines seen while in the variable
    list state are considered as declarations, and only when they split into
    exactly four tab-separated fields.
    """

    def parse(self, data: bytes, source_path: Optional[Union[str, Path]] = None) -> ParsedHeader:
        """
        Parses the header part of the raw results file content.

        Raises:
            MalformedHeaderError: An integer field cannot be parsed, the point count
                or the variable list is missing.
            UnexpectedEofError: The text ends before a line containing "Binary".
        """
        path = Path(source_path) if source_path is not None else None
        marker_pos = data.find(BINARY_MARKER)
        header_bytes = data if marker_pos < 0 else data[:marker_pos + len(BINARY_MARKER)]
        text = header_bytes.decode("utf-8", errors="replace")

        state = HeaderState.OTHER
        variables: List[SimulationVariable] = []
        total_points: Optional[int] = None
        declared_count: Optional[int] = None

        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.rstrip("\r\n")
            previous = state
            if "No. Variables" in line:
                state = HeaderState.VARIABLE_COUNT_DECLARED
                declared_count = self._parse_count(line, path, line_number)
            elif "Variables" in line:
                state = HeaderState.IN_VARIABLE_LIST
            elif "No. Points" in line:
                state = HeaderState.POINT_COUNT_DECLARED
                total_points = self._parse_count(line, path, line_number)
            elif "Binary" in line:
                state = HeaderState.BINARY_MARKER_SEEN
            if state is not previous:
                logger.debug(f"Header line {line_number}: {previous.name} -> {state.name}")

            if state is HeaderState.BINARY_MARKER_SEEN:
                break
            if state is HeaderState.IN_VARIABLE_LIST:
                variable = self._parse_declaration(line, path, line_number)
                if variable is not None:
                    variables.append(variable)

        if state is not HeaderState.BINARY_MARKER_SEEN:
            raise UnexpectedEofError(
                details="Reached end of file before the 'Binary:' header terminator.",
                file_path=path,
            )
        if total_points is None:
            raise MalformedHeaderError(details="Header has no 'No. Points' line.", file_path=path)
        if not variables:
            raise MalformedHeaderError(details="Header declares no variables.", file_path=path)

        self._check_unique(variables, path)
        logger.debug(f"Header parsed: {len(variables)} variable(s), {total_points} point(s).")
        return ParsedHeader(
            variables=tuple(variables),
            total_points=total_points,
            declared_variable_count=declared_count,
            source_path=path,
        )

    @staticmethod
    def _parse_count(line: str, path: Optional[Path], line_number: int) -> int:
        """Parses the non-negative integer after the first ':' of a count line."""
        _, sep, value = line.partition(":")
        try:
            if not sep:
                raise ValueError("no ':' separator")
            count = int(value.strip())
        except ValueError as e:
            raise MalformedHeaderError(
                details=f"Cannot parse count from line '{line.strip()}': {e}",
                file_path=path,
                line_number=line_number,
            ) from e
        if count < 0:
            raise MalformedHeaderError(
                details=f"Count must not be negative, got {count}.",
                file_path=path,
                line_number=line_number,
            )
        return count

    @staticmethod
    def _parse_declaration(line: str, path: Optional[Path], line_number: int) -> Optional[SimulationVariable]:
        cols = line.split("\t")
        if len(cols) != 4:
            return None
        _index, raw_id, name, type_tag = cols
        try:
            var_id = int(raw_id)
        except ValueError as e:
            raise MalformedHeaderError(
                details=f"Variable id '{raw_id}' is not an integer.",
                file_path=path,
                line_number=line_number,
            ) from e
        if not 0 <= var_id <= MAX_VARIABLE_ID:
            raise MalformedHeaderError(
                details=f"Variable id {var_id} is outside the unsigned 16-bit range.",
                file_path=path,
                line_number=line_number,
            )
        return SimulationVariable(id=var_id, name=name, var_type=VariableType.from_tag(type_tag))

    @staticmethod
    def _check_unique(variables: List[SimulationVariable], path: Optional[Path]):
        seen_ids, seen_names = set(), set()
        for variable in variables:
            if variable.id in seen_ids:
                raise MalformedHeaderError(details=f"Duplicate variable id {variable.id}.", file_path=path)
            if variable.name in seen_names:
                raise MalformedHeaderError(details=f"Duplicate variable name '{variable.name}'.", file_path=path)
            seen_ids.add(variable.id)
            seen_names.add(variable.name)
