# src/sweepfit_core/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity

# Canonical dimensionality for every frequency-valued setting.
FREQUENCY_DIMENSIONALITY = ureg.parse_expression('Hz').dimensionality

FrequencyLike = Union[str, float, int, Quantity]


def to_hz(value: FrequencyLike) -> float:
    """
    Converts a frequency given as a plain number (already in Hz), a string such
    as ``"1 kHz"`` or a pint Quantity into a float in Hz.

    Raises:
        pint.DimensionalityError: If the value is not a frequency.
        pint.UndefinedUnitError: If the string names an unknown unit.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    quantity = Quantity(value)
    if quantity.dimensionless:
        return float(quantity.magnitude)
    if quantity.dimensionality != FREQUENCY_DIMENSIONALITY:
        raise pint.DimensionalityError(quantity.units, ureg.Hz)
    return float(quantity.to(ureg.Hz).magnitude)
