# src/sweepfit_core/simulation/__init__.py
from .exceptions import StepNotFoundError, VariableNotFoundError
from .stepped_simulation import SteppedSimulation
from .loader import load_simulation

__all__ = [
    # Exceptions
    "StepNotFoundError",
    "VariableNotFoundError",
    # Core Classes
    "SteppedSimulation",
    "load_simulation",
]
