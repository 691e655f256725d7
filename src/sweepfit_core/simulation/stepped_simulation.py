# src/sweepfit_core/simulation/stepped_simulation.py
"""
The aggregate root of a loaded parameter sweep.

`SteppedSimulation.build` runs the header parser, the binary sample reader and
the log parser, then owns the result: the step catalog, the variable catalog and
one flat real/imaginary buffer per variable spanning all steps back to back.
After construction nothing in it changes; per-step views are sliced on demand.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..analysis.exceptions import FrequencyNotFoundError
from ..analysis.results import DataType, FitnessCalibration, FitnessResult, FitnessSettings, PeakType
from ..analysis.statistics import mean_and_deviation
from ..analysis.variable_result import VariableResult
from ..constants import RESONANCE_SEARCH_TICKS
from ..parser import (
    BinaryIntegrityError,
    BinarySampleReader,
    HeaderParser,
    InputFileError,
    LogParser,
    MalformedHeaderError,
    SimulationVariable,
    Step,
    VariableType,
    decode_log_bytes,
)
from ..validation import IntegrityIssue, IntegrityIssueCode
from .exceptions import StepNotFoundError, VariableNotFoundError

logger = logging.getLogger(__name__)

VariableRef = Union[SimulationVariable, str]


def _read_file(path: Path) -> bytes:
    """Reads a whole input file, turning OS-level failures into InputFileError."""
    try:
        with path.open("rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise InputFileError(details="File not found.", file_path=path) from e
    except OSError as e:
        raise InputFileError(details=f"{type(e).__name__}: {e}", file_path=path) from e


class SteppedSimulation:
    """
    All steps and variables of one AC sweep, with their complex samples.

    Use `build()` to load from a results/log file pair. The constructor takes the
    already parsed parts and checks the shape invariants:

    - the total point count is a positive multiple of the step count;
    - every variable has `points_per_block * step_count` real and imaginary samples.
    """

    def __init__(
        self,
        steps: Sequence[Step],
        variables: Sequence[SimulationVariable],
        reals: np.ndarray,
        imags: np.ndarray,
        issues: Sequence[IntegrityIssue] = (),
        results_path: Optional[Path] = None,
        log_path: Optional[Path] = None,
    ):
        self._steps: Tuple[Step, ...] = tuple(tuple(step) for step in steps)
        self._variables: Tuple[SimulationVariable, ...] = tuple(variables)
        self._issues: Tuple[IntegrityIssue, ...] = tuple(issues)
        self.results_path = results_path
        self.log_path = log_path

        reals = np.asarray(reals, dtype=np.float64)
        imags = np.asarray(imags, dtype=np.float64)
        expected_shape = (len(self._variables), reals.shape[-1] if reals.ndim == 2 else -1)
        if reals.ndim != 2 or reals.shape != expected_shape or imags.shape != reals.shape:
            raise ValueError(
                f"Sample buffers must have shape (variables, points) = {expected_shape}, "
                f"got reals {reals.shape} and imags {imags.shape}."
            )
        if not self._variables:
            raise ValueError("A stepped simulation needs at least one variable.")
        self._reals = reals
        self._imags = imags
        self._total_points = int(reals.shape[1])

        if not self._steps:
            raise MalformedHeaderError(
                details="The log file contains no '.step' lines; cannot split the results into steps.",
                file_path=log_path,
            )
        self._points_per_block, remainder = divmod(self._total_points, len(self._steps))
        if remainder:
            raise MalformedHeaderError(
                details=(
                    f"Total point count {self._total_points} is not divisible by the "
                    f"step count {len(self._steps)}."
                ),
                file_path=results_path,
            )

        self._step_index: Dict[Step, int] = {}
        for position, step in enumerate(self._steps):
            self._step_index.setdefault(step, position)
        self._variable_index: Dict[str, int] = {var.name: i for i, var in enumerate(self._variables)}
        self._frequency_position = self._locate_frequency_variable()

    @classmethod
    def build(
        cls,
        results_path: Union[str, Path],
        log_path: Union[str, Path],
        strict: bool = False,
    ) -> "SteppedSimulation":
        """
        Loads a stepped AC sweep from its binary results file and its log file.

        Args:
            results_path: The simulator's binary results file.
            log_path: The simulator's log file holding the `.step` lines.
            strict: Reject the results file if any integrity issue is found.

        Raises:
            InputFileError: A file cannot be read.
            MalformedHeaderError: The header, the log or the point/step counts are
                inconsistent. UnexpectedEofError is a subclass for truncated files.
            BinaryIntegrityError: `strict` is set and integrity issues were found.
        """
        results_path, log_path = Path(results_path), Path(log_path)
        logger.info(f"Loading stepped simulation from '{results_path.name}' and '{log_path.name}'.")

        results_data = _read_file(results_path)
        log_data = _read_file(log_path)

        header = HeaderParser().parse(results_data, results_path)
        reader = BinarySampleReader()
        samples = reader.read(
            results_data,
            variable_count=len(header.variables),
            expected_points=header.total_points,
            source_path=results_path,
        )
        issues: List[IntegrityIssue] = list(reader.issues)

        declared = header.declared_variable_count
        if declared is not None and declared != len(header.variables):
            issue = IntegrityIssueCode.HDR_VAR_COUNT_MISMATCH.create_issue(declared=declared, parsed=len(header.variables))
            logger.warning(str(issue))
            issues.append(issue)

        if strict and issues:
            raise BinaryIntegrityError(issues, file_path=results_path)

        log = LogParser().parse(decode_log_bytes(log_data), log_path)

        simulation = cls(
            steps=log.steps,
            variables=header.variables,
            reals=samples.reals,
            imags=samples.imags,
            issues=issues,
            results_path=results_path,
            log_path=log_path,
        )
        logger.info(
            f"Loaded {simulation.step_count} step(s) x {len(simulation.available_variables())} variable(s) "
            f"x {simulation.points_per_block} point(s) per step ({len(issues)} integrity issue(s))."
        )
        return simulation

    def __repr__(self) -> str:
        return (
            f"SteppedSimulation(steps={self.step_count}, variables={len(self._variables)}, "
            f"points_per_block={self._points_per_block})"
        )

    # --- Catalogs ---

    @property
    def issues(self) -> Tuple[IntegrityIssue, ...]:
        """Integrity issues recorded while loading."""
        return self._issues

    @property
    def total_points(self) -> int:
        return self._total_points

    @property
    def points_per_block(self) -> int:
        return self._points_per_block

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def frequency_variable(self) -> SimulationVariable:
        return self._variables[self._frequency_position]

    def available_parameters(self) -> List[str]:
        """Names of the swept parameters, taken from the first step."""
        if not self._steps:
            return []
        return [var.name for var in self._steps[0]]

    def available_variables(self) -> Tuple[SimulationVariable, ...]:
        return self._variables

    def available_steps(self) -> Tuple[Step, ...]:
        return self._steps

    def lookup_variable(self, name: str) -> SimulationVariable:
        """Returns the variable declared under `name`."""
        index = self._variable_index.get(name)
        if index is None:
            raise VariableNotFoundError(name=name, available=tuple(self._variable_index))
        return self._variables[index]

    # --- Slicing ---

    def values_at(self, step: Step) -> List[VariableResult]:
        """One result view per variable, in declared order, for `step`."""
        position = self._position_of(step)
        return [self._block(position, index) for index in range(len(self._variables))]

    def values_for_variable_at(self, step: Step, variable: VariableRef) -> VariableResult:
        """The result view of one variable at `step`."""
        return self._block(self._position_of(step), self._index_of(variable))

    def frequency_at(self, step: Step) -> VariableResult:
        """The frequency axis of `step`."""
        return self._block(self._position_of(step), self._frequency_position)

    def _block(self, position: int, index: int) -> VariableResult:
        start = position * self._points_per_block
        stop = start + self._points_per_block
        return VariableResult(
            variable=self._variables[index],
            reals=self._reals[index, start:stop],
            imags=self._imags[index, start:stop],
        )

    def _position_of(self, step: Step) -> int:
        position = self._step_index.get(tuple(step))
        if position is None:
            raise StepNotFoundError(step=tuple(step))
        return position

    def _index_of(self, variable: VariableRef) -> int:
        name = variable if isinstance(variable, str) else variable.name
        index = self._variable_index.get(name)
        if index is None or (not isinstance(variable, str) and self._variables[index] != variable):
            raise VariableNotFoundError(name=name, available=tuple(self._variable_index))
        return index

    def _locate_frequency_variable(self) -> int:
        for index, variable in enumerate(self._variables):
            if variable.var_type is VariableType.FREQUENCY:
                return index
        logger.warning(
            f"No variable of type 'frequency' declared; using '{self._variables[0].name}' as the frequency axis."
        )
        return 0

    # --- Fitness ---

    def find_averages_for_fitness(
        self,
        variable: VariableRef,
        settings: Optional[FitnessSettings] = None,
    ) -> FitnessCalibration:
        """
        Computes the population mean and deviation of the five fitness metrics of
        `variable` over all steps. The reference frequency indices are located on
        the first step and reused for every step.
        """
        settings = settings or FitnessSettings()
        first = self._steps[0]
        first_result = self.values_for_variable_at(first, variable)
        first_freq = self.frequency_at(first)
        db = DataType.ABSOLUTE_DECIBEL
        high_index, _ = first_result.find_value_near_freq(db, first_freq, settings.high_reference_hz)
        low_index, _ = first_result.find_value_near_freq(db, first_freq, settings.low_reference_hz)

        per_metric: List[List[float]] = [[] for _ in range(5)]
        for step in self._steps:
            metrics = self.values_for_variable_at(step, variable).fitness_metrics(
                self.frequency_at(step), settings, reference_indices=(high_index, low_index)
            )
            for values, metric in zip(per_metric, metrics):
                values.append(metric)

        stats = [mean_and_deviation(values) for values in per_metric]
        calibration = FitnessCalibration(
            averages=tuple(mean for mean, _ in stats),
            deviations=tuple(deviation for _, deviation in stats),
        )
        logger.debug(f"Fitness calibration for '{self._variables[self._index_of(variable)].name}': {calibration}")
        return calibration

    def calculate_fitnesses(
        self,
        variable: VariableRef,
        settings: Optional[FitnessSettings] = None,
        calibration: Optional[FitnessCalibration] = None,
    ) -> List[FitnessResult]:
        """Scores every step for `variable`, in step order."""
        settings = settings or FitnessSettings()
        calibration = calibration or self.find_averages_for_fitness(variable, settings)
        return [
            self.values_for_variable_at(step, variable).calculate_fitness(
                self.frequency_at(step), calibration.averages, calibration.deviations, settings
            )
            for step in self._steps
        ]

    def rank_steps(
        self,
        variable: VariableRef,
        settings: Optional[FitnessSettings] = None,
    ) -> List[Tuple[Step, FitnessResult]]:
        """Steps paired with their fitness, best score first. Ties keep step order."""
        scored = list(zip(self._steps, self.calculate_fitnesses(variable, settings)))
        return sorted(scored, key=lambda pair: pair[1].score, reverse=True)

    def find_with_resonance_at(self, variable: VariableRef, frequency_hz: float) -> List[Step]:
        """
        Returns the steps whose dB response of `variable` has a maximum fewer than
        RESONANCE_SEARCH_TICKS samples away from the first frequency sample above
        `frequency_hz`. The window is counted in samples, not in hertz.
        """
        freqs = self.frequency_at(self._steps[0]).get_data(DataType.REAL)
        above = np.flatnonzero(freqs > frequency_hz)
        if above.size == 0:
            raise FrequencyNotFoundError(
                target_hz=float(frequency_hz),
                max_hz=float(np.max(freqs)) if freqs.size else None,
                variable=self.frequency_variable.name,
            )
        centre = int(above[0])

        matches: List[Step] = []
        for step in self._steps:
            peaks = self.values_for_variable_at(step, variable).find_peaks(PeakType.MAXIMUM, DataType.ABSOLUTE_DECIBEL)
            if any(abs(peak - centre) < RESONANCE_SEARCH_TICKS for peak in peaks):
                matches.append(step)
        return matches
