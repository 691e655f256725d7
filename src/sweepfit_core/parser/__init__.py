# src/sweepfit_core/parser/__init__.py
from .raw_data import (
    ParsedHeader,
    ParsedLog,
    ParsedSamples,
    SimulationVariable,
    Step,
    SteppingVariable,
    VariableType,
    format_step,
)
from .header_parser import HeaderParser, HeaderState
from .log_parser import LogParser, decode_log_bytes
from .binary_reader import BinarySampleReader
from .exceptions import (
    BinaryIntegrityError,
    InputFileError,
    MalformedHeaderError,
    UnexpectedEofError,
)

__all__ = [
    # Records
    "ParsedHeader",
    "ParsedLog",
    "ParsedSamples",
    "SimulationVariable",
    "Step",
    "SteppingVariable",
    "VariableType",
    "format_step",
    # Parsers
    "HeaderParser",
    "HeaderState",
    "LogParser",
    "decode_log_bytes",
    "BinarySampleReader",
    # Exceptions
    "BinaryIntegrityError",
    "InputFileError",
    "MalformedHeaderError",
    "UnexpectedEofError",
]
