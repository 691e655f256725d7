# src/sweepfit_core/parser/binary_reader.py
import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from ..constants import BINARY_MARKER, RECORD_DTYPE, RECORD_SIZE_BYTES
from ..validation import IntegrityIssue, IntegrityIssueCode
from .exceptions import UnexpectedEofError
from .raw_data import ParsedSamples

logger = logging.getLogger(__name__)


class BinarySampleReader:
    """
    Decodes the binary payload that follows the `Binary:` header terminator.

    The payload is a sequence of 16-byte little-endian records (real, imag), both
    float64, assigned round-robin to the declared variables: record k belongs to
    variable k mod variable_count. Problems that do not prevent decoding are
    collected in `issues` instead of being dropped silently.
    """

    def __init__(self):
        self.issues: List[IntegrityIssue] = []

    def read(
        self,
        data: bytes,
        variable_count: int,
        expected_points: Optional[int] = None,
        source_path: Optional[Union[str, Path]] = None,
    ) -> ParsedSamples:
        """
        Splits the payload into one real and one imaginary row per variable.

        Args:
            data: The complete results file content.
            variable_count: Number of declared variables (channels).
            expected_points: Points per variable announced by the header. When given,
                a shorter payload is an error and surplus records are reported.
            source_path: Only used for diagnostics.

        Raises:
            UnexpectedEofError: The marker is missing, or the payload holds fewer
                records than announced.
        """
        path = Path(source_path) if source_path is not None else None
        self.issues = []
        if variable_count <= 0:
            raise ValueError(f"variable_count must be positive, got {variable_count}.")

        marker_pos = data.find(BINARY_MARKER)
        if marker_pos < 0:
            raise UnexpectedEofError(
                details="The 'Binary:' marker was not found; the file has no binary payload.",
                file_path=path,
            )
        offset = marker_pos + len(BINARY_MARKER)
        payload = memoryview(data)[offset:]

        record_count, trailing = divmod(len(payload), RECORD_SIZE_BYTES)
        if trailing:
            self._report(IntegrityIssueCode.BIN_TRAILING_BYTES, trailing_bytes=trailing, record_size=RECORD_SIZE_BYTES)

        if expected_points is not None:
            usable = variable_count * expected_points
            if record_count < usable:
                raise UnexpectedEofError(
                    details=(
                        f"Payload holds {record_count} complete record(s) but the header announces "
                        f"{expected_points} point(s) for {variable_count} variable(s) ({usable} records)."
                    ),
                    file_path=path,
                )
        else:
            usable = record_count - record_count % variable_count

        excess = record_count - usable
        if excess:
            self._report(IntegrityIssueCode.BIN_EXCESS_RECORDS, excess_records=excess, expected_records=usable)

        records = np.frombuffer(payload, dtype=RECORD_DTYPE, count=usable * 2)
        # (points, variables, [real, imag]) -> one contiguous row per variable
        table = records.reshape(-1, variable_count, 2)
        reals = np.ascontiguousarray(table[:, :, 0].T, dtype=np.float64)
        imags = np.ascontiguousarray(table[:, :, 1].T, dtype=np.float64)
        reals.flags.writeable = False
        imags.flags.writeable = False

        logger.debug(f"Decoded {usable} record(s) into {variable_count} channel(s) of {reals.shape[1]} point(s).")
        return ParsedSamples(
            reals=reals,
            imags=imags,
            record_count=record_count,
            trailing_bytes=trailing,
            excess_records=excess,
            payload_offset=offset,
        )

    def _report(self, code: IntegrityIssueCode, **kwargs):
        issue = code.create_issue(**kwargs)
        logger.warning(str(issue))
        self.issues.append(issue)
