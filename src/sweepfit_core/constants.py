# src/sweepfit_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Results File Layout ---

#: Literal line that terminates the text header of a results file.
BINARY_MARKER: bytes = b"Binary:\n"

#: One binary record: little-endian float64 real part followed by float64 imaginary part.
RECORD_SIZE_BYTES: int = 16
RECORD_DTYPE: str = "<f8"

#: Token that opens a sweep step line in the simulator log.
STEP_DIRECTIVE: str = ".step"

# --- Fitness Defaults ---

#: Weights of the five logistic terms: normalized average, inverse spread,
#: level at the first sample, level near HIGH_REFERENCE, level near LOW_REFERENCE.
DEFAULT_FITNESS_WEIGHTS = (1.5, 1.0, 1.5, 1.5, 1.0)
DEFAULT_HIGH_REFERENCE_HZ: float = 1000.0
DEFAULT_LOW_REFERENCE_HZ: float = 100.0

# --- Resonance Penalty Defaults ---

DEFAULT_RESONANCE_OFFSET_DB: float = 3.0
DEFAULT_SYMMETRIC_GAIN: float = 10.0
DEFAULT_PEAK_ONE_SIDED_GAIN: float = 10.0
DEFAULT_DIP_ONE_SIDED_GAIN: float = 20.0
DEFAULT_ONE_SIDED_WINDOW_HZ: float = 100.0

#: Half-width, in frequency ticks, of the window used by resonance searches.
RESONANCE_SEARCH_TICKS: int = 2

# --- Chart Defaults ---

DEFAULT_PLOT_Y_RANGE_DB = (-70.0, 0.0)
