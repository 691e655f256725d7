# src/sweepfit_core/plotting.py
"""
Chart rendering for frequency responses (Bode magnitude in dB over a log axis).
"""
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt

from .analysis.results import DataType
from .constants import DEFAULT_PLOT_Y_RANGE_DB
from .parser.raw_data import format_step

if TYPE_CHECKING:
    from .config import AnalysisConfig
    from .simulation.stepped_simulation import SteppedSimulation, VariableRef

logger = logging.getLogger(__name__)


def plot_frequency_response(
    frequency_samples: Sequence[float],
    data_samples: Sequence[float],
    title: str,
    color: Optional[str] = None,
    ax=None,
    y_range: Tuple[float, float] = DEFAULT_PLOT_Y_RANGE_DB,
):
    """
    Draws one response line with a log-scale X axis and a fixed Y range.

    Returns:
        The matplotlib Axes drawn on; a new figure is created when `ax` is None.
    """
    if len(frequency_samples) != len(data_samples):
        raise ValueError(
            f"Frequency and data samples differ in length ({len(frequency_samples)} vs {len(data_samples)})."
        )
    if ax is None:
        _, ax = plt.subplots(figsize=(11, 6))
    ax.plot(frequency_samples, data_samples, label=title, color=color)
    ax.set_xscale("log")
    ax.set_ylim(*y_range)
    ax.set_xlabel("Frequency [Hz]")
    ax.set_ylabel("Magnitude [dB]")
    ax.grid(True, which="both", alpha=0.3)
    return ax


def plot_steps(
    simulation: "SteppedSimulation",
    variable: "VariableRef",
    output_path: Optional[Union[str, Path]] = None,
    y_range: Optional[Tuple[float, float]] = None,
    config: Optional["AnalysisConfig"] = None,
):
    """
    Overlays the dB response of `variable` for every step. When `output_path` is
    given the chart is written there as PNG and the figure is closed.

    The Y range is `y_range` when given, else the `plot` section of `config`,
    else the default dB range.

    Returns:
        The matplotlib Axes, or None once the figure was saved and closed.
    """
    if y_range is None:
        y_range = config.plot_y_range_db if config is not None else DEFAULT_PLOT_Y_RANGE_DB

    fig, ax = plt.subplots(figsize=(11, 6))
    for step in simulation.available_steps():
        result = simulation.values_for_variable_at(step, variable)
        freq = simulation.frequency_at(step)
        plot_frequency_response(
            freq.get_data(DataType.REAL),
            result.get_data(DataType.ABSOLUTE_DECIBEL),
            title=format_step(step),
            ax=ax,
            y_range=y_range,
        )
    name = variable if isinstance(variable, str) else variable.name
    ax.set_title(f"{name}: {simulation.step_count} step(s)")
    ax.legend(fontsize="small", ncol=2)

    if output_path is None:
        return ax

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    logger.info(f"Saved response chart of '{name}' to '{output_path}'.")
    return None
