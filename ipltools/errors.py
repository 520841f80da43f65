"""
Error types for IPL conversion and LOD resolution.

None of these stop a batch. Decoding and file errors are raised to the
caller that owns the current file, which logs them and moves on. Truncated
records, malformed lines and LOD conflicts are logged where they happen and
kept as values so callers and tests can inspect them.
"""

from typing import Optional, Union
from pathlib import Path


class IPLError(Exception):
    """Base class for all IPL tool errors."""


class FileAccessError(IPLError):
    """A file could not be opened, read, written or listed."""

    def __init__(self, path: Union[str, Path], action: str, reason: str = ""):
        self.path = Path(path)
        self.action = action
        self.reason = reason
        message = f"Failed to {action} {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidHeader(IPLError, ValueError):
    """Buffer does not start with a complete binary IPL header."""


class TruncatedRecord(IPLError):
    """A record array ended before its declared count was reached."""

    def __init__(self, kind: str, index: int, offset: int, stride: int, data_length: int):
        self.kind = kind
        self.index = index  # 1-based, the record that did not fit
        self.offset = offset
        self.stride = stride
        self.data_length = data_length
        super().__init__(
            f"Offset exceeds data length at {kind} {index} "
            f"(offset {offset} + {stride} > {data_length} bytes)"
        )


class MalformedLine(IPLError):
    """A text IPL line inside an object section could not be used."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line!r}")


class LodConflict(IPLError):
    """A high-detail model was given a second, different low-detail model."""

    def __init__(self, high_id: int, rejected_low_id: int, rejected_ipl: str,
                 current_low_id: int, current_ipl: str, message: Optional[str] = None):
        self.high_id = high_id
        self.rejected_low_id = rejected_low_id
        self.rejected_ipl = rejected_ipl
        self.current_low_id = current_low_id
        self.current_ipl = current_ipl
        super().__init__(message or (
            f"Trying to assign LLOD {rejected_low_id} to HLOD {high_id}, "
            f"which already has LLOD {current_low_id} - {current_ipl}"
        ))
