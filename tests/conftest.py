# tests/conftest.py
import numpy as np
import pytest

from sweepfit_core.analysis import VariableResult
from sweepfit_core.parser import SimulationVariable, VariableType

FREQUENCY_TAG = "frequency"
VOLTAGE_TAG = "voltage"


def make_raw_bytes(variables, reals, imags, declared_count=None, total_points=None, payload_suffix=b""):
    """
    Builds the content of a binary AC results file.

    variables: list of (name, type_tag) in declared order.
    reals, imags: arrays of shape (len(variables), points).
    """
    reals = np.asarray(reals, dtype=float)
    imags = np.asarray(imags, dtype=float)
    points = reals.shape[1]
    declared_count = len(variables) if declared_count is None else declared_count
    total_points = points if total_points is None else total_points

    lines = [
        "Title: * synthetic sweep",
        "Date: Mon Oct 19 10:00:00 2026",
        "Plotname: AC Analysis",
        "Flags: complex forward stepped",
        f"No. Variables: {declared_count}",
        f"No. Points: {total_points}",
        "Offset:   0.0000000000000000e+000",
        "Command: synthetic writer",
        "Variables:",
    ]
    lines += [f"\t{i}\t{name}\t{tag}" for i, (name, tag) in enumerate(variables)]
    header = ("\n".join(lines) + "\nBinary:\n").encode("utf-8")

    # (points, variables, [real, imag]), point-major like the simulator writes it
    records = np.stack([reals.T, imags.T], axis=-1).astype("<f8")
    return header + records.tobytes() + payload_suffix


def make_log_text(steps):
    """steps: list of lists of (name, value) pairs, one list per `.step` line."""
    lines = [
        "Circuit: * synthetic sweep",
        "",
        "Direct Newton iteration for .op point succeeded.",
    ]
    for step in steps:
        lines.append(".step " + " ".join(f"{name}={value}" for name, value in step))
    lines += ["", "Total elapsed time: 0.042 seconds."]
    return "\n".join(lines) + "\n"


# A 3-step sweep of 2 variables with 5 points per step.
SWEEP_FREQUENCIES = np.array([10.0, 100.0, 1000.0, 10000.0, 100000.0])
SWEEP_STEPS = [
    [("r1", 100), ("c1", 1e-06)],
    [("r1", 200), ("c1", 1e-06)],
    [("r1", 300), ("c1", 2e-06)],
]
SWEEP_OUT_REALS = np.array([
    [0.10, 0.20, 0.90, 0.20, 0.10],
    [0.30, 0.35, 0.40, 0.35, 0.30],
    [0.50, 0.10, 0.50, 0.50, 0.50],
])
SWEEP_OUT_IMAGS = np.array([
    [0.00, 0.01, 0.00, -0.01, 0.00],
    [0.05, 0.00, 0.05, 0.00, 0.05],
    [0.00, 0.00, 0.00, 0.00, 0.00],
])


def sweep_arrays():
    """Full-length (2, 15) buffers of the standard sweep: frequency, then V(out)."""
    freq = np.tile(SWEEP_FREQUENCIES, len(SWEEP_STEPS))
    reals = np.vstack([freq, SWEEP_OUT_REALS.ravel()])
    imags = np.vstack([np.zeros_like(freq), SWEEP_OUT_IMAGS.ravel()])
    return reals, imags


@pytest.fixture
def raw_bytes_factory():
    return make_raw_bytes


@pytest.fixture
def log_text_factory():
    return make_log_text


@pytest.fixture
def sweep_variables():
    return [("frequency", FREQUENCY_TAG), ("V(out)", VOLTAGE_TAG)]


@pytest.fixture
def sweep_files(tmp_path, sweep_variables):
    """Writes the standard sweep to disk and returns (results_path, log_path)."""
    reals, imags = sweep_arrays()
    results_path = tmp_path / "sweep.raw"
    log_path = tmp_path / "sweep.log"
    results_path.write_bytes(make_raw_bytes(sweep_variables, reals, imags))
    log_path.write_text(make_log_text(SWEEP_STEPS), encoding="utf-8")
    return results_path, log_path


@pytest.fixture
def make_result():
    """Builds a VariableResult from real (and optional imaginary) samples."""
    def _make(reals, imags=None, name="V(out)", var_type=VariableType.VOLTAGE):
        reals = np.asarray(reals, dtype=float)
        imags = np.zeros_like(reals) if imags is None else np.asarray(imags, dtype=float)
        return VariableResult(
            variable=SimulationVariable(id=1, name=name, var_type=var_type),
            reals=reals,
            imags=imags,
        )
    return _make


@pytest.fixture
def make_frequency(make_result):
    def _make(freqs):
        return make_result(freqs, name="frequency", var_type=VariableType.FREQUENCY)
    return _make
