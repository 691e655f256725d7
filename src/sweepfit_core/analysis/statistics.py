# src/sweepfit_core/analysis/statistics.py
from typing import Iterable, Tuple

import numpy as np


def mean_and_deviation(values: Iterable[float]) -> Tuple[float, float]:
    """
    Returns the arithmetic mean and the sample standard deviation (n - 1) of
    `values`. A single value has a deviation of 0.

    Raises:
        ValueError: `values` is empty.
    """
    samples = np.asarray(list(values), dtype=np.float64)
    if samples.size == 0:
        raise ValueError("Cannot compute mean and deviation of an empty sequence.")
    mean = float(np.mean(samples))
    if samples.size == 1:
        return mean, 0.0
    return mean, float(np.std(samples, ddof=1))
