"""
IPL Tools

Binary -> text IPL conversion and LOD model linking for the game's item
placement files.

Usage:
    from ipltools import BinaryIPLParser, encode, LodResolver

    parser = BinaryIPLParser("input/countn2_stream0.ipl")
    text = encode(parser.objects, parser.cars)
"""

__version__ = "1.0.0"

from .errors import IPLError, FileAccessError, InvalidHeader, TruncatedRecord, MalformedLine, LodConflict
from .parsers import (
    BinaryIPLParser,
    decode,
    parse_text_ipl,
    Header,
    ObjectInstance,
    ParkedVehicle,
    TextRecord,
    BinaryIPL,
)
from .converters import encode, ModelNameTable, PlaceholderModelNames, BinaryIPLConverter
from .lods import LodResolver, LodResolverState, format_lod_table, write_lod_table
