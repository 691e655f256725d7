# tests/test_config.py
import pytest

from sweepfit_core.config import AnalysisConfig, AnalysisConfigLoader, ConfigParsingError, load_analysis_config
from sweepfit_core.analysis import FitnessSettings, ResonanceSettings


def test_defaults_without_document():
    config = load_analysis_config()

    assert config == AnalysisConfig()
    assert config.strict is False
    assert config.fitness.weights == (1.5, 1.0, 1.5, 1.5, 1.0)
    assert config.fitness.high_reference_hz == 1000.0
    assert config.fitness.low_reference_hz == 100.0
    assert config.resonance == ResonanceSettings()
    assert config.plot_y_range_db == (-70.0, 0.0)


def test_empty_document_yields_defaults():
    assert load_analysis_config("") == AnalysisConfig()


def test_overrides_from_yaml_text():
    config = load_analysis_config(
        """
reader:
  strict: true
fitness:
  weights: [1, 1, 1, 1, 2]
  high_reference: 2 kHz
  low_reference: 50
resonance:
  offset_db: 6
  one_sided_window: 0.5 kHz
plot:
  y_min_db: -90
"""
    )
    assert config.strict is True
    assert config.fitness.weights == (1.0, 1.0, 1.0, 1.0, 2.0)
    assert config.fitness.high_reference_hz == pytest.approx(2000.0)
    assert config.fitness.low_reference_hz == 50.0
    assert config.resonance.offset_db == 6.0
    assert config.resonance.one_sided_window_hz == pytest.approx(500.0)
    assert config.resonance.dip_one_sided_gain == 20.0
    assert config.plot_y_range_db == (-90.0, 0.0)


def test_load_from_file(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("fitness:\n  high_reference: 1.5 kHz\n", encoding="utf-8")

    assert load_analysis_config(path).fitness.high_reference_hz == pytest.approx(1500.0)
    assert load_analysis_config(str(path)).fitness.high_reference_hz == pytest.approx(1500.0)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigParsingError, match="not found"):
        load_analysis_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "document, message",
    [
        ("unknown_section: 1\n", "unknown"),
        ("fitness:\n  weights: [1, 2, 3]\n", "weights"),
        ("fitness:\n  weights: [1, 2, 3, 4, x]\n", "weights"),
        ("reader:\n  strict: maybe\n", "strict"),
        ("resonance:\n  offset_db: -1\n", "offset_db"),
    ],
)
def test_schema_violations(document, message):
    with pytest.raises(ConfigParsingError, match=message):
        load_analysis_config(document)


def test_reference_must_be_a_frequency():
    with pytest.raises(ConfigParsingError, match="Failed to parse"):
        load_analysis_config("fitness:\n  high_reference: 5 ohm\n")


def test_unknown_unit():
    with pytest.raises(ConfigParsingError):
        load_analysis_config("fitness:\n  low_reference: 5 blarg\n")


def test_invalid_yaml():
    with pytest.raises(ConfigParsingError, match="Invalid YAML"):
        load_analysis_config("fitness: [\n")


def test_root_must_be_a_mapping():
    with pytest.raises(ConfigParsingError, match="dictionary"):
        load_analysis_config("- 1\n- 2\n")


def test_plot_range_must_be_ordered():
    with pytest.raises(ConfigParsingError, match="y_min_db"):
        load_analysis_config("plot:\n  y_min_db: 0\n  y_max_db: -10\n")


def test_loader_from_dict():
    config = AnalysisConfigLoader().from_dict({"resonance": {"symmetric_gain": 15}})
    assert config.fitness == FitnessSettings(resonance=ResonanceSettings(symmetric_gain=15.0))
