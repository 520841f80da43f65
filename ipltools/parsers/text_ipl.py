"""
Text IPL Reader

Reads the object (inst) section of text IPL files into TextRecords.

Line handling:
- ASCII whitespace (space, tab, CR, LF, FF, VT) is removed before
  anything else, including spaces inside model names ("lod tree 01"
  reads back as "lodtree01"). Other characters, such as the latin-1
  no-break space, are kept.
- '#' lines are comments.
- 'inst' opens the object section, 'end' closes it. Other sections are
  skipped.
- Object lines need at least 10 comma-separated fields:
    modelID, modelName, interiorID, x, y, z, rx, ry, rz, rw[, lodIndex]
  Short lines and lines with unparseable numbers are skipped.

LOD references are returned separately as {lod_index: record_index}: the
record at record_index is a high-detail object whose low-detail model is
the record at lod_index in the same file. The target may come later in the
file, so references are only resolved once the whole file has been read.
"""

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..constants import (
    COMMENT_PREFIX,
    MIN_INST_FIELDS,
    NO_LOD,
    SECTION_END,
    SECTION_INST,
)
from ..errors import MalformedLine
from ..utils import logDebug, read_file_bytes
from .data_types import BinaryIPL, TextRecord

_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")

LodRefs = Dict[int, int]


def _parse_record(fields: List[str]) -> TextRecord:
    """Build a record from the fields of one object line (ValueError on bad numbers)."""
    lod_index = None
    if len(fields) > MIN_INST_FIELDS:
        try:
            lod_index = int(fields[MIN_INST_FIELDS])
        except ValueError:
            lod_index = None
        if lod_index == NO_LOD:
            lod_index = None

    return TextRecord(
        model_id=int(fields[0]),
        model_name=fields[1],
        interior_id=int(fields[2]),
        position=(float(fields[3]), float(fields[4]), float(fields[5])),
        rotation=(float(fields[6]), float(fields[7]), float(fields[8]), float(fields[9])),
        lod_index=lod_index,
    )


def parse_text_ipl_lines(lines: Iterable[str], source: str = "") -> Tuple[List[TextRecord], LodRefs]:
    """
    Parse text IPL lines.

    Returns:
        (records in file order, {lod_index: index of the referencing record})
    """
    records: List[TextRecord] = []
    lod_refs: LodRefs = {}
    prefix = f"{source}: " if source else ""

    reading_objects = False
    for line_number, raw_line in enumerate(lines, 1):
        line = _WHITESPACE.sub("", raw_line)

        if line.startswith(COMMENT_PREFIX):
            continue

        if line == SECTION_INST:
            reading_objects = True
            continue

        if not reading_objects:
            continue

        if line == SECTION_END:
            reading_objects = False
            continue

        fields = line.split(",")
        if len(fields) < MIN_INST_FIELDS:
            logDebug(f"{prefix}{MalformedLine(line_number, line, f'{len(fields)} fields')}")
            continue

        try:
            record = _parse_record(fields)
        except ValueError as e:
            logDebug(f"{prefix}{MalformedLine(line_number, line, str(e))}")
            continue

        record_index = len(records)
        records.append(record)

        if record.lod_index is not None:
            lod_refs[record.lod_index] = record_index

    return records, lod_refs


def parse_text_ipl(filepath: Union[str, Path]) -> Tuple[List[TextRecord], LodRefs]:
    """
    Read a text IPL file.

    Raises:
        FileAccessError: file could not be read
    """
    filepath = Path(filepath)
    content = read_file_bytes(filepath).decode('latin-1')
    return parse_text_ipl_lines(content.split("\n"), source=filepath.name)


def records_from_binary(ipl: BinaryIPL, model_names=None) -> Tuple[List[TextRecord], LodRefs]:
    """
    TextRecords for the objects of a decoded binary IPL.

    Gives the same result as writing the file out as text and reading it
    back, minus the 6-decimal rounding and the whitespace stripping of
    names.
    """
    records: List[TextRecord] = []
    lod_refs: LodRefs = {}

    for record_index, obj in enumerate(ipl.objects):
        name = model_names.get_name(obj.model_id) if model_names is not None else ""
        records.append(TextRecord(
            model_id=obj.model_id,
            model_name=name,
            interior_id=obj.interior_flag,
            position=obj.position,
            rotation=obj.rotation,
            lod_index=obj.lod_index,
        ))
        if obj.lod_index is not None:
            lod_refs[obj.lod_index] = record_index

    return records, lod_refs


def get_lod_pairs(records: List[TextRecord], lod_refs: LodRefs) -> List[Tuple[TextRecord, TextRecord]]:
    """(high-detail record, low-detail record) pairs within one file."""
    pairs = []
    for lod_index, record_index in lod_refs.items():
        low = record_at(records, lod_index)
        if low is not None:
            pairs.append((records[record_index], low))
    return pairs


def record_at(records: List[TextRecord], index: int) -> Optional[TextRecord]:
    """Record at a 0-based LOD index, or None when out of range."""
    if 0 <= index < len(records):
        return records[index]
    return None
