# src/sweepfit_core/analysis/fitness.py
"""
Scalar transforms used by the fitness function.
"""
import numpy as np
from scipy.special import expit


def logistic_function(x: float, scale: float, offset: float) -> float:
    """
    Computes `1 / (1 + exp(-(x - offset) / scale))`.

    A zero scale (every step produced the same metric value) degenerates to a
    step function: 0 below the offset, 0.5 at it and 1 above it.
    """
    if scale == 0:
        return float(0.5 * (1.0 + np.sign(x - offset)))
    return float(expit((x - offset) / scale))
