# src/sweepfit_core/simulation/loader.py
"""
Public entry point for loading a stepped simulation.

`load_simulation` hides the parsers and the aggregate constructor behind one
call and turns every diagnosable failure into a single `SimulationLoadError`
whose message is the actionable report of the underlying error. Code that wants
the specific error types can call `SteppedSimulation.build` directly.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisConfig
from ..errors import DiagnosableError, SimulationLoadError, format_diagnostic_report
from .stepped_simulation import SteppedSimulation

logger = logging.getLogger(__name__)


def load_simulation(
    results_path: Union[str, Path],
    log_path: Optional[Union[str, Path]] = None,
    strict: Optional[bool] = None,
    config: Optional[AnalysisConfig] = None,
) -> SteppedSimulation:
    """
    Loads a results/log file pair.

    Args:
        results_path: The binary results file.
        log_path: The log file. Defaults to the results path with a `.log` suffix.
        strict: Reject files with integrity issues. Defaults to `config.strict`,
            or False without a config.
        config: Analysis configuration supplying the default strictness.

    Raises:
        SimulationLoadError: Loading failed; the message is a diagnostic report
            and the original exception is chained.
    """
    results_path = Path(results_path)
    log_path = Path(log_path) if log_path is not None else results_path.with_suffix(".log")
    if strict is None:
        strict = config.strict if config is not None else False

    try:
        return SteppedSimulation.build(results_path, log_path, strict=strict)

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred while loading '{results_path.name}': {e}")
        raise SimulationLoadError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred while loading '{results_path.name}': {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Load Error Occurred ({type(e).__name__})",
            details=f"The loader encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'source_file': results_path}
        )
        raise SimulationLoadError(report) from e
