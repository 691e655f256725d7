# src/sweepfit_core/analysis/variable_result.py
"""
The per-variable analysis engine.

A VariableResult is a read-only view of one variable's complex samples for
exactly one step. Every operation is a pure computation over that slice; the
frequency axis of the same step is passed in where an operation needs it.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..parser.raw_data import SimulationVariable
from .exceptions import (
    DataPointIndexError,
    FrequencyNotFoundError,
    SampleLengthMismatchError,
    UnsupportedDataTypeError,
)
from .fitness import logistic_function
from .results import (
    DataType,
    FitnessResult,
    FitnessSettings,
    PeakType,
    ResonanceSettings,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class VariableResult:
    """
    One variable's samples for one step.

    Attributes:
        variable: A copy of the catalog record of the variable.
        reals: Real parts, one per point of the step.
        imags: Imaginary parts, same length as `reals`.
    """
    variable: SimulationVariable
    reals: np.ndarray
    imags: np.ndarray

    def __post_init__(self):
        if len(self.reals) != len(self.imags):
            raise ValueError(
                f"Variable '{self.variable.name}' has {len(self.reals)} real and {len(self.imags)} imaginary sample(s)."
            )

    def __len__(self) -> int:
        return len(self.reals)

    def __repr__(self) -> str:
        return f"VariableResult(variable='{self.variable.name}', points={len(self)})"

    # --- Views ---

    def get_data(self, data_type: DataType) -> np.ndarray:
        """
        Returns the whole sample sequence in the requested view.

        Raises:
            UnsupportedDataTypeError: For DataType.ARGUMENT or an unknown view.
        """
        if data_type is DataType.REAL:
            return self.reals
        if data_type is DataType.IMAGINARY:
            return self.imags
        if data_type is DataType.ABSOLUTE:
            return np.hypot(self.reals, self.imags)
        if data_type is DataType.ABSOLUTE_DECIBEL:
            with np.errstate(divide='ignore'):
                return 20.0 * np.log10(np.hypot(self.reals, self.imags))
        raise UnsupportedDataTypeError(data_type=data_type)

    def get_data_point(self, data_type: DataType, index: int) -> float:
        """Returns a single sample in the requested view."""
        if not 0 <= index < len(self):
            raise DataPointIndexError(index=index, length=len(self), variable=self.variable.name)
        return float(self.get_data(data_type)[index])

    def get_bode(self) -> List[Tuple[float, float]]:
        """Returns (magnitude in dB, phase in radians) for every sample."""
        magnitude_db = self.get_data(DataType.ABSOLUTE_DECIBEL)
        phase = np.arctan2(self.imags, self.reals)
        return list(zip(magnitude_db.tolist(), phase.tolist()))

    def normalize(self, data_type: DataType) -> np.ndarray:
        """Scales the view linearly to [0, 1]. A flat series maps to zeros."""
        data = self.get_data(data_type)
        if data.size == 0:
            return data.astype(np.float64)
        low, high = float(np.min(data)), float(np.max(data))
        span = high - low
        if span == 0:
            return np.zeros_like(data, dtype=np.float64)
        return (data - low) / span

    @staticmethod
    def diff(samples: Sequence[float]) -> np.ndarray:
        """First difference: `out[i] = samples[i + 1] - samples[i]`."""
        return np.diff(np.asarray(samples, dtype=np.float64))

    # --- Extremes and peaks ---

    def min(self, data_type: DataType) -> Tuple[int, float]:
        """(index, value) of the smallest sample; the first one wins on ties."""
        data = self._non_empty(data_type)
        index = int(np.argmin(data))
        return index, float(data[index])

    def max(self, data_type: DataType) -> Tuple[int, float]:
        """(index, value) of the largest sample; the first one wins on ties."""
        data = self._non_empty(data_type)
        index = int(np.argmax(data))
        return index, float(data[index])

    def find_peaks(
        self,
        peak_type: Optional[PeakType] = None,
        data_type: DataType = DataType.ABSOLUTE_DECIBEL,
    ) -> List[int]:
        """
        Returns the indices of strict local extrema, in ascending order.

        A sample is a maximum if it is greater than both neighbours and a minimum
        if it is smaller than both. With `peak_type=None` either kind qualifies.
        The first and last samples are never peaks.
        """
        data = self.get_data(data_type)
        if data.size < 3:
            return []
        centre = data[1:-1]
        rise = centre - data[:-2]
        fall = centre - data[2:]
        is_max = (rise > 0) & (fall > 0)
        is_min = (rise < 0) & (fall < 0)
        if peak_type is PeakType.MAXIMUM:
            mask = is_max
        elif peak_type is PeakType.MINIMUM:
            mask = is_min
        else:
            mask = is_max | is_min
        return (np.flatnonzero(mask) + 1).tolist()

    def next_value_around(
        self,
        data_type: DataType,
        starting_point: int,
        offset: float,
        maximum: bool,
    ) -> Tuple[Optional[int], Optional[int]]:
        """
        Finds the nearest sample on each side of `starting_point` that has moved
        away from the starting value by more than `offset`.

        For a maximum the search looks for samples that fell below the start by
        more than `offset`; for a minimum it looks for samples that rose above it.
        Each side is searched independently; the first and last samples are
        never reported as crossings.

        Returns:
            (left_index, right_index); a side without a crossing is None.
        """
        data = self.get_data(data_type)
        if not 0 <= starting_point < data.size:
            raise DataPointIndexError(index=starting_point, length=data.size, variable=self.variable.name)

        direction = -1.0 if maximum else 1.0
        crossed = (data - data[starting_point]) * direction > offset

        left_hits = np.flatnonzero(crossed[1:starting_point])
        right_hits = np.flatnonzero(crossed[starting_point + 1:data.size - 1])
        left = 1 + int(left_hits[-1]) if left_hits.size else None
        right = starting_point + 1 + int(right_hits[0]) if right_hits.size else None
        return left, right

    # --- Frequency-aware operations ---

    def find_value_near_freq(
        self,
        data_type: DataType,
        frequency: "VariableResult",
        search_freq: float,
    ) -> Tuple[int, float]:
        """
        Returns (index, value) of the first sample whose frequency is at or above
        `search_freq`. The frequency axis is assumed to be ascending.

        Raises:
            FrequencyNotFoundError: Every frequency sample is below `search_freq`.
        """
        freqs = self._frequency_axis(frequency)
        hits = np.flatnonzero(freqs >= search_freq)
        if hits.size == 0:
            raise FrequencyNotFoundError(
                target_hz=float(search_freq),
                max_hz=float(np.max(freqs)) if freqs.size else None,
                variable=self.variable.name,
            )
        index = int(hits[0])
        return index, self.get_data_point(data_type, index)

    def avg_normalized(self, data_type: DataType, frequency: "VariableResult") -> float:
        """
        Trapezoidal average of the view over a frequency axis scaled to [0, 1].

        Each segment is weighted by its share of the linear frequency span, so the
        densely sampled low decades of a logarithmic sweep do not dominate.
        """
        self._frequency_axis(frequency)
        values = self.get_data(data_type)
        weights = self.diff(frequency.normalize(DataType.REAL))
        return float(np.sum((values[1:] + values[:-1]) / 2.0 * weights))

    def calculate_resonance_penalty(
        self,
        frequency: "VariableResult",
        settings: Optional[ResonanceSettings] = None,
    ) -> float:
        """
        Penalises sharp peaks and dips of the dB response by the frequency width
        of their `offset_db` neighbourhood.

        - A peak with a crossing on both sides adds `symmetric_gain / width`.
        - A peak with only a right crossing closer than `one_sided_window_hz`
          adds `peak_one_sided_gain / distance`.
        - A dip with a crossing on both sides adds `symmetric_gain / width`.
        - A dip with only a left crossing closer than `one_sided_window_hz`
          adds `dip_one_sided_gain / distance`.

        All other crossings are ignored.
        """
        settings = settings or ResonanceSettings()
        freqs = self._frequency_axis(frequency)
        db = DataType.ABSOLUTE_DECIBEL
        penalty = 0.0

        for peak in self.find_peaks(PeakType.MAXIMUM, db):
            left, right = self.next_value_around(db, peak, settings.offset_db, maximum=True)
            if left is not None and right is not None:
                penalty += settings.symmetric_gain / (freqs[right] - freqs[left])
            elif right is not None:
                distance = freqs[right] - freqs[peak]
                if distance < settings.one_sided_window_hz:
                    penalty += settings.peak_one_sided_gain / distance

        for dip in self.find_peaks(PeakType.MINIMUM, db):
            left, right = self.next_value_around(db, dip, settings.offset_db, maximum=False)
            if left is not None and right is not None:
                penalty += settings.symmetric_gain / (freqs[right] - freqs[left])
            elif left is not None:
                distance = freqs[dip] - freqs[left]
                if distance < settings.one_sided_window_hz:
                    penalty += settings.dip_one_sided_gain / distance

        return float(penalty)

    def calculate_fitness(
        self,
        frequency: "VariableResult",
        averages: Sequence[float],
        deviations: Sequence[float],
        settings: Optional[FitnessSettings] = None,
    ) -> FitnessResult:
        """
        Scores this response. Five dB metrics are passed through a logistic
        transform centred on `averages[i]` and scaled by `deviations[i]`, then
        weighted; the negated resonance penalty is the sixth term.

        The metrics are: normalised average level, inverse peak-to-peak spread,
        level at the first sample, level near the high reference frequency and
        level near the low reference frequency.
        """
        settings = settings or FitnessSettings()
        if len(averages) != 5 or len(deviations) != 5:
            raise ValueError("calculate_fitness needs exactly 5 averages and 5 deviations.")

        metrics = self.fitness_metrics(frequency, settings)
        terms = [
            weight * logistic_function(value, scale=deviations[i], offset=averages[i])
            for i, (weight, value) in enumerate(zip(settings.weights, metrics))
        ]
        penalty_term = -self.calculate_resonance_penalty(frequency, settings.resonance)
        terms.append(penalty_term)

        db = DataType.ABSOLUTE_DECIBEL
        raw_values = list(metrics)
        raw_values[1] = self.max(db)[1] - self.min(db)[1]

        return FitnessResult(
            terms=tuple(float(t) for t in terms),
            score=float(sum(terms)),
            raw_values=tuple(float(v) for v in raw_values) + (penalty_term,),
        )

    def fitness_metrics(
        self,
        frequency: "VariableResult",
        settings: Optional[FitnessSettings] = None,
        reference_indices: Optional[Tuple[int, int]] = None,
    ) -> Tuple[float, float, float, float, float]:
        """
        The five pre-transform metrics of the fitness function.

        Args:
            reference_indices: Sample indices of the (high, low) reference
                frequencies. When omitted they are looked up on `frequency`.
        """
        settings = settings or FitnessSettings()
        db = DataType.ABSOLUTE_DECIBEL
        if reference_indices is None:
            high_index, _ = self.find_value_near_freq(db, frequency, settings.high_reference_hz)
            low_index, _ = self.find_value_near_freq(db, frequency, settings.low_reference_hz)
        else:
            high_index, low_index = reference_indices

        _, highest = self.max(db)
        _, lowest = self.min(db)
        spread = highest - lowest
        inverse_spread = 1.0 / spread if spread != 0 else float('inf')

        return (
            self.avg_normalized(db, frequency),
            inverse_spread,
            self.get_data_point(db, 0),
            self.get_data_point(db, high_index),
            self.get_data_point(db, low_index),
        )

    def plot(self, frequency: "VariableResult", ax=None, title: Optional[str] = None, color: Optional[str] = None):
        """Draws the dB response over `frequency` and returns the matplotlib Axes."""
        from ..plotting import plot_frequency_response

        return plot_frequency_response(
            self._frequency_axis(frequency),
            self.get_data(DataType.ABSOLUTE_DECIBEL),
            title=title or self.variable.name,
            color=color,
            ax=ax,
        )

    # --- Helpers ---

    def _non_empty(self, data_type: DataType) -> np.ndarray:
        data = self.get_data(data_type)
        if data.size == 0:
            raise DataPointIndexError(index=0, length=0, variable=self.variable.name)
        return data

    def _frequency_axis(self, frequency: "VariableResult") -> np.ndarray:
        if len(frequency) != len(self):
            raise SampleLengthMismatchError(expected=len(self), actual=len(frequency))
        return frequency.get_data(DataType.REAL)
