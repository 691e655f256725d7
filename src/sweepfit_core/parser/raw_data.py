# src/sweepfit_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

# The classes in this module are the records produced by the three parsers and
# consumed by SteppedSimulation. They are frozen so a parsed catalog cannot be
# altered after the load has finished.


class VariableType(Enum):
    """Physical type of a simulated signal, derived from the header type tag."""
    FREQUENCY = "frequency"
    VOLTAGE = "voltage"
    CURRENT = "device_current"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> VariableType:
        for member in cls:
            if member is not cls.UNKNOWN and member.value == tag:
                return member
        return cls.UNKNOWN

    def __str__(self):
        return self.name.lower()


@dataclass(frozen=True)
class SimulationVariable:
    """One declared signal of the results file (frequency axis or a probe)."""
    id: int
    name: str
    var_type: VariableType


@dataclass(frozen=True)
class SteppingVariable:
    """
    The value one swept parameter takes in one step. Values are held at the
    32-bit precision the simulator log is read with, so steps built in code
    compare equal to parsed ones.
    """
    name: str
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(np.float32(self.value)))

    def __str__(self):
        return f"{self.name}={self.value:g}"


# A step is the ordered tuple of parameter assignments from one `.step` line.
Step = Tuple[SteppingVariable, ...]


def format_step(step: Step) -> str:
    """Renders a step the way the simulator log writes it."""
    return " ".join(str(var) for var in step) if step else "<empty step>"


@dataclass(frozen=True)
class ParsedHeader:
    """Result of the header state machine."""
    variables: Tuple[SimulationVariable, ...]
    total_points: int
    declared_variable_count: Optional[int]
    source_path: Optional[Path] = None


@dataclass(frozen=True, eq=False)
class ParsedSamples:
    """
    Result of the binary sample reader. `reals` and `imags` have the shape
    (variable_count, points); row `v` belongs to the v-th declared variable.
    """
    reals: np.ndarray
    imags: np.ndarray
    record_count: int
    trailing_bytes: int
    excess_records: int = 0
    payload_offset: int = 0

    @property
    def points(self) -> int:
        return int(self.reals.shape[1]) if self.reals.ndim == 2 else 0


@dataclass(frozen=True)
class ParsedLog:
    """Result of the log file scan: one Step per `.step` line, in file order."""
    steps: Tuple[Step, ...]
    source_path: Optional[Path] = None
    step_line_numbers: Tuple[int, ...] = field(default=(), compare=False)
