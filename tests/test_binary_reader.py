# tests/test_binary_reader.py
import struct

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from sweepfit_core.parser import BinarySampleReader, UnexpectedEofError
from sweepfit_core.validation import IssueLevel


@pytest.fixture
def reader():
    return BinarySampleReader()


def test_round_robin_assignment(reader):
    # record k belongs to variable k mod 2
    payload = b"".join(struct.pack("<dd", float(k), -float(k)) for k in range(6))
    samples = reader.read(b"header\nBinary:\n" + payload, variable_count=2)

    assert_array_equal(samples.reals, [[0.0, 2.0, 4.0], [1.0, 3.0, 5.0]])
    assert_array_equal(samples.imags, [[-0.0, -2.0, -4.0], [-1.0, -3.0, -5.0]])
    assert samples.points == 3
    assert samples.record_count == 6
    assert reader.issues == []


def test_matches_synthetic_writer(reader, raw_bytes_factory):
    reals = np.array([[10.0, 100.0], [0.5, 0.25], [1e-3, 2e-3]])
    imags = np.array([[0.0, 0.0], [0.1, -0.1], [3.0, 4.0]])
    data = raw_bytes_factory([("frequency", "frequency"), ("V(a)", "voltage"), ("I(R1)", "device_current")], reals, imags)

    samples = reader.read(data, variable_count=3, expected_points=2)
    assert_array_equal(samples.reals, reals)
    assert_array_equal(samples.imags, imags)


def test_buffers_are_read_only(reader):
    samples = reader.read(b"Binary:\n" + struct.pack("<dd", 1.0, 2.0), variable_count=1)
    with pytest.raises(ValueError):
        samples.reals[0, 0] = 5.0


def test_missing_marker(reader):
    # "Binary" without the colon and newline is not the marker
    with pytest.raises(UnexpectedEofError):
        reader.read(b"No. Points: 1\nBinary\n" + b"\x00" * 16, variable_count=1)


def test_trailing_partial_record_is_reported(reader):
    data = b"Binary:\n" + struct.pack("<dd", 1.0, 2.0) + b"\x01\x02\x03"
    samples = reader.read(data, variable_count=1)

    assert samples.trailing_bytes == 3
    assert_array_equal(samples.reals, [[1.0]])
    [issue] = reader.issues
    assert issue.code == "BIN_TRAILING_BYTES"
    assert issue.level is IssueLevel.WARNING
    assert issue.details["trailing_bytes"] == 3


def test_trailing_bytes_are_logged(reader, caplog):
    with caplog.at_level("WARNING"):
        reader.read(b"Binary:\n" + b"\x00" * 20, variable_count=1)
    assert "BIN_TRAILING_BYTES" in caplog.text


def test_short_payload_is_unexpected_eof(reader):
    data = b"Binary:\n" + struct.pack("<dd", 1.0, 2.0) * 3
    with pytest.raises(UnexpectedEofError, match="3 complete record"):
        reader.read(data, variable_count=2, expected_points=2)


def test_excess_records_are_reported_and_ignored(reader):
    data = b"Binary:\n" + b"".join(struct.pack("<dd", float(k), 0.0) for k in range(5))
    samples = reader.read(data, variable_count=2, expected_points=2)

    assert_array_equal(samples.reals, [[0.0, 2.0], [1.0, 3.0]])
    assert samples.excess_records == 1
    assert [issue.code for issue in reader.issues] == ["BIN_EXCESS_RECORDS"]


def test_incomplete_last_round_without_point_count(reader):
    data = b"Binary:\n" + b"".join(struct.pack("<dd", float(k), 0.0) for k in range(3))
    samples = reader.read(data, variable_count=2)

    assert samples.points == 1
    assert samples.excess_records == 1


def test_payload_offset_follows_marker(reader):
    data = b"Title: x\nBinary:\n" + struct.pack("<dd", 7.0, 8.0)
    samples = reader.read(data, variable_count=1)
    assert samples.payload_offset == len(b"Title: x\nBinary:\n")


def test_issues_reset_between_reads(reader):
    reader.read(b"Binary:\n" + b"\x00" * 17, variable_count=1)
    assert reader.issues
    reader.read(b"Binary:\n" + b"\x00" * 16, variable_count=1)
    assert reader.issues == []
