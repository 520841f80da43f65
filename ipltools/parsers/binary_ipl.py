"""
Binary IPL Parser

Parses the binary placement lists streamed by the game (the *_streamN.ipl
files inside the IMG archives).

File format:
- Header (76 bytes):
  - char[4] magic "bnry"
  - 18 x i32: item_instances, unknown1, unknown2, unknown3, parked_cars,
    unknown4, offset_item_instances, unused1, offset_unknown1, unused2,
    offset_unknown2, unused3, offset_unknown3, unused4, offset_parked_cars,
    unused5, offset_unknown4, unused6
- Item instances (40 bytes each, from offset_item_instances):
  - f32 x, y, z
  - f32 rx, ry, rz, rw (quaternion)
  - i32 model_id
  - i32 interior_flag (always 0)
  - i32 flags (LOD index, -1 for none)
- Parked cars (48 bytes each, from offset_parked_cars):
  - f32 x, y, z
  - f32 angle (around Z)
  - i32 vehicle_id
  - i32[7] unknown flags

Offsets in the header are byte offsets from the start of the file.
"""

from dataclasses import fields
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from ..constants import (
    BINARY_IPL_MAGIC,
    BINARY_IPL_HEADER_SIZE,
    OBJECT_INSTANCE_SIZE,
    PARKED_CAR_SIZE,
    PARKED_CAR_FLAG_COUNT,
)
from ..errors import InvalidHeader, TruncatedRecord
from ..utils import logWarning, read_file_bytes
from .base import read_int32, int32_from_words, floats_from_words
from .data_types import BinaryIPL, Header, ObjectInstance, ParkedVehicle

HEADER_FIELD_COUNT = len(fields(Header))

# Raw 32-bit words; floats and ints are decoded from the bits afterwards
OBJECT_DTYPE = np.dtype([
    ('position', '<u4', (3,)),
    ('rotation', '<u4', (4,)),
    ('model_id', '<u4'),
    ('interior_flag', '<u4'),
    ('flags', '<u4'),
])

CAR_DTYPE = np.dtype([
    ('position', '<u4', (3,)),
    ('angle', '<u4'),
    ('vehicle_id', '<u4'),
    ('flags', '<u4', (PARKED_CAR_FLAG_COUNT,)),
])


def is_binary_ipl(data: bytes) -> bool:
    """Check for the binary IPL magic."""
    return data[:len(BINARY_IPL_MAGIC)] == BINARY_IPL_MAGIC


def parse_header(data: bytes) -> Header:
    """
    Parse and validate the binary IPL header.

    Raises:
        InvalidHeader: magic missing or buffer shorter than the header
    """
    if not is_binary_ipl(data):
        raise InvalidHeader("Invalid header: Expected 'bnry'")
    if len(data) < BINARY_IPL_HEADER_SIZE:
        raise InvalidHeader(
            f"Invalid header: {len(data)} bytes, need {BINARY_IPL_HEADER_SIZE}"
        )

    start = len(BINARY_IPL_MAGIC)
    values = [read_int32(data, start + 4 * i) for i in range(HEADER_FIELD_COUNT)]
    return Header(*values)


def _count_fitting_records(kind: str, data_length: int, offset: int,
                           count: int, stride: int) -> Tuple[int, Optional[TruncatedRecord]]:
    """
    Number of records from `offset` that fit in the buffer.

    Record i (1-based) starts at offset + (i - 1) * stride and fits when
    its start + stride <= data_length. Reading stops at the first record
    that does not fit.
    """
    if count <= 0:
        return 0, None

    if offset < 0:
        fit = 0
    else:
        fit = min(count, max(0, (data_length - offset) // stride))

    if fit == count:
        return fit, None

    return fit, TruncatedRecord(kind, fit + 1, offset + fit * stride, stride, data_length)


def _parse_objects(data: bytes, offset: int, count: int) -> List[ObjectInstance]:
    records = np.frombuffer(data, dtype=OBJECT_DTYPE, count=count, offset=offset)

    positions = floats_from_words(records['position']).tolist()
    rotations = floats_from_words(records['rotation']).tolist()
    model_ids = int32_from_words(records['model_id']).tolist()
    interior_flags = int32_from_words(records['interior_flag']).tolist()
    flags = int32_from_words(records['flags']).tolist()

    return [
        ObjectInstance(
            model_id=model_ids[i],
            position=tuple(positions[i]),
            rotation=tuple(rotations[i]),
            interior_flag=interior_flags[i],
            flags=flags[i],
        )
        for i in range(count)
    ]


def _parse_cars(data: bytes, offset: int, count: int) -> List[ParkedVehicle]:
    records = np.frombuffer(data, dtype=CAR_DTYPE, count=count, offset=offset)

    positions = floats_from_words(records['position']).tolist()
    angles = floats_from_words(records['angle']).tolist()
    vehicle_ids = int32_from_words(records['vehicle_id']).tolist()
    flags = int32_from_words(records['flags']).tolist()

    return [
        ParkedVehicle(
            position=tuple(positions[i]),
            angle=angles[i],
            vehicle_id=vehicle_ids[i],
            flags=tuple(flags[i]),
        )
        for i in range(count)
    ]


def decode(data: bytes, source: str = "") -> BinaryIPL:
    """
    Decode a binary IPL buffer.

    Record arrays that run past the end of the buffer are cut at the last
    complete record; each cut is logged as a warning and listed in
    BinaryIPL.truncations.

    Args:
        data: Whole file contents
        source: Name used in log messages

    Raises:
        InvalidHeader: buffer is not a binary IPL
    """
    header = parse_header(data)
    result = BinaryIPL(header=header)
    prefix = f"{source}: " if source else ""

    count, truncation = _count_fitting_records(
        "object", len(data), header.offset_item_instances,
        header.item_instances, OBJECT_INSTANCE_SIZE,
    )
    if count:
        result.objects = _parse_objects(data, header.offset_item_instances, count)
    if truncation:
        logWarning(f"{prefix}{truncation}")
        result.truncations.append(truncation)

    if header.parked_cars > 0:
        count, truncation = _count_fitting_records(
            "car", len(data), header.offset_parked_cars,
            header.parked_cars, PARKED_CAR_SIZE,
        )
        if count:
            result.cars = _parse_cars(data, header.offset_parked_cars, count)
        if truncation:
            logWarning(f"{prefix}{truncation}")
            result.truncations.append(truncation)

    return result


class BinaryIPLParser:
    """
    Parser for binary IPL files.

    Usage:
        parser = BinaryIPLParser("input/countn2_stream0.ipl")
        for obj in parser.objects:
            print(obj.model_id, obj.position, obj.lod_index)
    """

    def __init__(self, filepath: Union[str, Path]):
        """
        Load and decode a binary IPL file.

        Raises:
            FileAccessError: file could not be read
            InvalidHeader: file is not a binary IPL
        """
        self.filepath = Path(filepath)
        self._ipl = decode(read_file_bytes(self.filepath), source=self.filepath.name)

    @property
    def ipl(self) -> BinaryIPL:
        return self._ipl

    @property
    def header(self) -> Header:
        return self._ipl.header

    @property
    def objects(self) -> List[ObjectInstance]:
        return self._ipl.objects

    @property
    def cars(self) -> List[ParkedVehicle]:
        return self._ipl.cars
