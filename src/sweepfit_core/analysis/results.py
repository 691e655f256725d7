# src/sweepfit_core/analysis/results.py
"""
Data views, result records and tunable settings of the analysis engine.

Results are frozen dataclasses so a score computed for one step cannot be
changed by code that ranks or reports it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..constants import (
    DEFAULT_DIP_ONE_SIDED_GAIN,
    DEFAULT_FITNESS_WEIGHTS,
    DEFAULT_HIGH_REFERENCE_HZ,
    DEFAULT_LOW_REFERENCE_HZ,
    DEFAULT_ONE_SIDED_WINDOW_HZ,
    DEFAULT_PEAK_ONE_SIDED_GAIN,
    DEFAULT_RESONANCE_OFFSET_DB,
    DEFAULT_SYMMETRIC_GAIN,
)


class DataType(Enum):
    """Which view of the complex samples an operation works on."""
    REAL = "real"
    IMAGINARY = "imaginary"
    ABSOLUTE = "absolute"
    ABSOLUTE_DECIBEL = "absolute_decibel"
    ARGUMENT = "argument"  # not supported by the engine

    def __str__(self):
        return self.value


class PeakType(Enum):
    MINIMUM = "minimum"
    MAXIMUM = "maximum"


#: Names of the six fitness terms, in order.
FITNESS_TERM_NAMES = (
    "normalized_average",
    "inverse_spread",
    "first_sample_level",
    "high_reference_level",
    "low_reference_level",
    "resonance_penalty",
)


@dataclass(frozen=True)
class ResonanceSettings:
    """Constants of the resonance penalty heuristic."""
    offset_db: float = DEFAULT_RESONANCE_OFFSET_DB
    symmetric_gain: float = DEFAULT_SYMMETRIC_GAIN
    peak_one_sided_gain: float = DEFAULT_PEAK_ONE_SIDED_GAIN
    dip_one_sided_gain: float = DEFAULT_DIP_ONE_SIDED_GAIN
    one_sided_window_hz: float = DEFAULT_ONE_SIDED_WINDOW_HZ


@dataclass(frozen=True)
class FitnessSettings:
    """Weights and reference frequencies of the fitness function."""
    weights: Tuple[float, float, float, float, float] = DEFAULT_FITNESS_WEIGHTS
    high_reference_hz: float = DEFAULT_HIGH_REFERENCE_HZ
    low_reference_hz: float = DEFAULT_LOW_REFERENCE_HZ
    resonance: ResonanceSettings = ResonanceSettings()

    def __post_init__(self):
        if len(self.weights) != 5:
            raise ValueError(f"Exactly 5 fitness weights are required, got {len(self.weights)}.")


@dataclass(frozen=True)
class FitnessCalibration:
    """
    Population mean and standard deviation of the five logistic metrics across
    all steps. They center and scale the logistic transform of each metric.
    """
    averages: Tuple[float, float, float, float, float]
    deviations: Tuple[float, float, float, float, float]

    def __post_init__(self):
        if len(self.averages) != 5 or len(self.deviations) != 5:
            raise ValueError("A fitness calibration needs exactly 5 averages and 5 deviations.")


@dataclass(frozen=True)
class FitnessResult:
    """
    The outcome of scoring one step.

    Attributes:
        terms: The six weighted terms; the last one is the negated resonance penalty.
        score: Sum of `terms`. Higher is better.
        raw_values: The untransformed values behind each term. Slot 1 holds the
            peak-to-peak dB spread itself, while its term is computed from the
            inverse spread.
    """
    terms: Tuple[float, ...]
    score: float
    raw_values: Tuple[float, ...]

    def as_dict(self) -> dict:
        """Maps every term name to its (weighted term, raw value) pair."""
        return {
            name: (term, raw)
            for name, term, raw in zip(FITNESS_TERM_NAMES, self.terms, self.raw_values)
        }
