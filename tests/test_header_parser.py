# tests/test_header_parser.py
import numpy as np
import pytest

from sweepfit_core.parser import (
    HeaderParser,
    MalformedHeaderError,
    SimulationVariable,
    UnexpectedEofError,
    VariableType,
)


@pytest.fixture
def parser():
    return HeaderParser()


def _two_variable_file(raw_bytes_factory, **kwargs):
    reals = np.array([[1.0, 2.0, 3.0], [0.1, 0.2, 0.3]])
    return raw_bytes_factory(
        [("frequency", "frequency"), ("V(out)", "voltage")], reals, np.zeros_like(reals), **kwargs
    )


def test_parses_variables_and_point_count(parser, raw_bytes_factory):
    header = parser.parse(_two_variable_file(raw_bytes_factory))

    assert header.total_points == 3
    assert header.declared_variable_count == 2
    assert header.variables == (
        SimulationVariable(id=0, name="frequency", var_type=VariableType.FREQUENCY),
        SimulationVariable(id=1, name="V(out)", var_type=VariableType.VOLTAGE),
    )


def test_type_tags_map_to_variable_types(parser, raw_bytes_factory):
    variables = [
        ("frequency", "frequency"),
        ("V(n1)", "voltage"),
        ("I(R1)", "device_current"),
        ("Ix(u1:1)", "subckt_current"),
    ]
    reals = np.ones((4, 2))
    header = parser.parse(raw_bytes_factory(variables, reals, reals))

    assert [v.var_type for v in header.variables] == [
        VariableType.FREQUENCY,
        VariableType.VOLTAGE,
        VariableType.CURRENT,
        VariableType.UNKNOWN,
    ]


def test_non_contiguous_ids_are_kept(parser):
    data = (
        b"No. Variables: 2\nNo. Points: 1\nVariables:\n"
        b"\t0\t7\tfrequency\tfrequency\n"
        b"\t0\t12\tV(a)\tvoltage\n"
        b"\t3\tfrequency\tfrequency\n"
        b"\t5\tV(b)\tvoltage\n"
        b"Binary:\n"
    )
    header = parser.parse(data)
    # Five-field lines are not declarations.
    assert [(v.id, v.name) for v in header.variables] == [(3, "frequency"), (5, "V(b)")]


def test_lines_with_other_field_counts_are_ignored(parser):
    data = (
        b"No. Points: 4\nVariables:\n"
        b"\n"
        b"some stray text\n"
        b"\t0\tfrequency\tfrequency\n"
        b"Binary:\n"
    )
    header = parser.parse(data)
    assert [v.name for v in header.variables] == ["frequency"]
    assert header.declared_variable_count is None


def test_crlf_line_endings(parser):
    data = b"No. Variables: 1\r\nNo. Points: 2\r\nVariables:\r\n\t0\tfrequency\tfrequency\r\nBinary:\n"
    header = parser.parse(data)
    assert header.variables[0].var_type is VariableType.FREQUENCY
    assert header.total_points == 2


def test_missing_binary_marker_is_unexpected_eof(parser):
    data = b"No. Variables: 1\nNo. Points: 2\nVariables:\n\t0\tfrequency\tfrequency\n"
    with pytest.raises(UnexpectedEofError):
        parser.parse(data)


def test_unexpected_eof_is_also_malformed_header(parser):
    with pytest.raises(MalformedHeaderError):
        parser.parse(b"No. Points: 2\n")


@pytest.mark.parametrize("line", [b"No. Points: many\n", b"No. Points 12\n", b"No. Variables: -\n"])
def test_unparsable_counts(parser, line):
    data = line + b"Variables:\n\t0\tfrequency\tfrequency\nBinary:\n"
    with pytest.raises(MalformedHeaderError) as exc_info:
        parser.parse(data)
    assert exc_info.value.line_number == 1


def test_unparsable_variable_id(parser):
    data = b"No. Points: 2\nVariables:\n\tzero\tfrequency\tfrequency\nBinary:\n"
    with pytest.raises(MalformedHeaderError, match="'zero'"):
        parser.parse(data)


def test_variable_id_outside_u16_range(parser):
    data = b"No. Points: 2\nVariables:\n\t65536\tfrequency\tfrequency\nBinary:\n"
    with pytest.raises(MalformedHeaderError, match="16-bit"):
        parser.parse(data)


def test_missing_point_count(parser):
    data = b"Variables:\n\t0\tfrequency\tfrequency\nBinary:\n"
    with pytest.raises(MalformedHeaderError, match="No. Points"):
        parser.parse(data)


def test_no_declarations(parser):
    with pytest.raises(MalformedHeaderError, match="no variables"):
        parser.parse(b"No. Points: 2\nVariables:\nBinary:\n")


def test_duplicate_names_are_rejected(parser):
    data = b"No. Points: 2\nVariables:\n\t0\tV(a)\tvoltage\n\t1\tV(a)\tvoltage\nBinary:\n"
    with pytest.raises(MalformedHeaderError, match="Duplicate variable name"):
        parser.parse(data)


def test_binary_payload_is_not_scanned(parser, raw_bytes_factory):
    # Payload bytes that happen to spell a header keyword must not matter.
    data = _two_variable_file(raw_bytes_factory, payload_suffix=b"No. Points: 99\n")
    assert parser.parse(data).total_points == 3
