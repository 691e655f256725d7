# src/sweepfit_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("SweepFit Core package initialized.")

from .units import ureg, pint, Quantity, FREQUENCY_DIMENSIONALITY
from .parser import SimulationVariable, SteppingVariable, Step, VariableType
from .analysis import (
    DataType,
    PeakType,
    VariableResult,
    FitnessCalibration,
    FitnessResult,
    FitnessSettings,
    ResonanceSettings,
)
from .simulation import SteppedSimulation, load_simulation
from .config import AnalysisConfig, ConfigParsingError, load_analysis_config
from .errors import SweepFitError, SimulationLoadError

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "FREQUENCY_DIMENSIONALITY",
    # Catalog records
    "SimulationVariable", "SteppingVariable", "Step", "VariableType",
    # Analysis
    "DataType", "PeakType", "VariableResult",
    "FitnessCalibration", "FitnessResult", "FitnessSettings", "ResonanceSettings",
    # Simulation
    "SteppedSimulation", "load_simulation",
    # Configuration
    "AnalysisConfig", "ConfigParsingError", "load_analysis_config",
    # Top-Level Errors (Actionable Diagnostics)
    "SweepFitError", "SimulationLoadError",
]
