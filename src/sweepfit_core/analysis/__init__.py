# src/sweepfit_core/analysis/__init__.py
from .exceptions import (
    DataPointIndexError,
    FrequencyNotFoundError,
    SampleLengthMismatchError,
    UnsupportedDataTypeError,
)
from .fitness import logistic_function
from .results import (
    FITNESS_TERM_NAMES,
    DataType,
    FitnessCalibration,
    FitnessResult,
    FitnessSettings,
    PeakType,
    ResonanceSettings,
)
from .statistics import mean_and_deviation
from .variable_result import VariableResult

__all__ = [
    # Engine
    "VariableResult",
    "DataType",
    "PeakType",
    # Fitness
    "FITNESS_TERM_NAMES",
    "FitnessCalibration",
    "FitnessResult",
    "FitnessSettings",
    "ResonanceSettings",
    "logistic_function",
    "mean_and_deviation",
    # Exceptions
    "DataPointIndexError",
    "FrequencyNotFoundError",
    "SampleLengthMismatchError",
    "UnsupportedDataTypeError",
]
