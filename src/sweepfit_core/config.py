# src/sweepfit_core/config.py
"""
Loads the analysis configuration (reader strictness, fitness weights, reference
frequencies, resonance penalty constants and chart range) from YAML.

The document is validated with Cerberus before any value is interpreted;
frequency-valued settings are strings such as "1 kHz" and are converted with pint.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import cerberus
import pint
import yaml

from .analysis.results import FitnessSettings, ResonanceSettings
from .constants import (
    DEFAULT_DIP_ONE_SIDED_GAIN,
    DEFAULT_FITNESS_WEIGHTS,
    DEFAULT_PEAK_ONE_SIDED_GAIN,
    DEFAULT_PLOT_Y_RANGE_DB,
    DEFAULT_RESONANCE_OFFSET_DB,
    DEFAULT_SYMMETRIC_GAIN,
)
from .units import to_hz

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during analysis configuration parsing."""
    pass


@dataclass(frozen=True)
class AnalysisConfig:
    """The validated, fully-defaulted analysis configuration."""
    strict: bool = False
    fitness: FitnessSettings = field(default_factory=FitnessSettings)
    plot_y_range_db: Tuple[float, float] = DEFAULT_PLOT_Y_RANGE_DB

    @property
    def resonance(self) -> ResonanceSettings:
        return self.fitness.resonance


_frequency_rule = {"type": ["string", "number"], "empty": False}

_schema = {
    "reader": {
        "type": "dict", "required": False, "default": {}, "schema": {
            "strict": {"type": "boolean", "default": False},
        },
    },
    "fitness": {
        "type": "dict", "required": False, "default": {}, "schema": {
            "weights": {
                "type": "list", "minlength": 5, "maxlength": 5,
                "schema": {"type": "number"}, "default": list(DEFAULT_FITNESS_WEIGHTS),
            },
            "high_reference": {**_frequency_rule, "default": "1 kHz"},
            "low_reference": {**_frequency_rule, "default": "100 Hz"},
        },
    },
    "resonance": {
        "type": "dict", "required": False, "default": {}, "schema": {
            "offset_db": {"type": "number", "min": 0, "default": DEFAULT_RESONANCE_OFFSET_DB},
            "symmetric_gain": {"type": "number", "default": DEFAULT_SYMMETRIC_GAIN},
            "peak_one_sided_gain": {"type": "number", "default": DEFAULT_PEAK_ONE_SIDED_GAIN},
            "dip_one_sided_gain": {"type": "number", "default": DEFAULT_DIP_ONE_SIDED_GAIN},
            "one_sided_window": {**_frequency_rule, "default": "100 Hz"},
        },
    },
    "plot": {
        "type": "dict", "required": False, "default": {}, "schema": {
            "y_min_db": {"type": "number", "default": DEFAULT_PLOT_Y_RANGE_DB[0]},
            "y_max_db": {"type": "number", "default": DEFAULT_PLOT_Y_RANGE_DB[1]},
        },
    },
}


class AnalysisConfigLoader:
    """Validates raw configuration mappings and turns them into AnalysisConfig objects."""

    def __init__(self):
        self._validator = cerberus.Validator(_schema)
        self._validator.allow_unknown = False

    def load(self, source: Union[str, Path, None]) -> AnalysisConfig:
        """
        Loads a configuration from a YAML file path or a YAML string. `None` or an
        empty document yields the defaults.
        """
        if source is None:
            return self.from_dict({})
        if isinstance(source, Path) or (isinstance(source, str) and "\n" not in source and Path(source).suffix in (".yaml", ".yml")):
            return self.from_dict(self._load_yaml_file(Path(source)), source_path=Path(source))
        return self.from_dict(self._load_yaml_text(source))

    def from_dict(self, raw: Dict[str, Any], source_path: Optional[Path] = None) -> AnalysisConfig:
        """Validates a raw mapping and builds the configuration from it."""
        where = f" in '{source_path}'" if source_path else ""
        if not self._validator.validate(raw):
            raise ConfigParsingError(f"Invalid analysis configuration{where}: {self._validator.errors}")
        doc = self._validator.document

        try:
            resonance = ResonanceSettings(
                offset_db=float(doc["resonance"]["offset_db"]),
                symmetric_gain=float(doc["resonance"]["symmetric_gain"]),
                peak_one_sided_gain=float(doc["resonance"]["peak_one_sided_gain"]),
                dip_one_sided_gain=float(doc["resonance"]["dip_one_sided_gain"]),
                one_sided_window_hz=to_hz(doc["resonance"]["one_sided_window"]),
            )
            fitness = FitnessSettings(
                weights=tuple(float(w) for w in doc["fitness"]["weights"]),
                high_reference_hz=to_hz(doc["fitness"]["high_reference"]),
                low_reference_hz=to_hz(doc["fitness"]["low_reference"]),
                resonance=resonance,
            )
        except (ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
            raise ConfigParsingError(f"Failed to parse analysis configuration{where}: {e}") from e

        y_min, y_max = float(doc["plot"]["y_min_db"]), float(doc["plot"]["y_max_db"])
        if y_min >= y_max:
            raise ConfigParsingError(f"plot.y_min_db ({y_min}) must be below plot.y_max_db ({y_max}){where}.")

        config = AnalysisConfig(strict=bool(doc["reader"]["strict"]), fitness=fitness, plot_y_range_db=(y_min, y_max))
        logger.debug(f"Analysis configuration loaded{where}: {config}")
        return config

    @staticmethod
    def _load_yaml_file(source: Path) -> Dict[str, Any]:
        if not source.is_file():
            raise ConfigParsingError(f"Configuration file not found at path: {source}")
        try:
            with source.open("r", encoding="utf-8") as f:
                return AnalysisConfigLoader._load_yaml_text(f.read())
        except PermissionError as e:
            raise ConfigParsingError(f"Permission denied when trying to read file: {e}") from e

    @staticmethod
    def _load_yaml_text(text: str) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Invalid YAML syntax: {e}") from e
        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigParsingError("The root of the configuration must be a dictionary (mapping).")
        return content


def load_analysis_config(source: Union[str, Path, None] = None) -> AnalysisConfig:
    """Convenience wrapper around AnalysisConfigLoader.load."""
    return AnalysisConfigLoader().load(source)
