"""
IPL Parsers

- base: 32-bit int/float readers (scalar and numpy-vectorised)
- data_types: Header, ObjectInstance, ParkedVehicle, TextRecord, BinaryIPL
- binary_ipl: binary IPL decoder (decode, BinaryIPLParser)
- text_ipl: text IPL object reader (parse_text_ipl)

Usage:
    from ipltools.parsers import BinaryIPLParser, parse_text_ipl

    parser = BinaryIPLParser("input/countn2_stream0.ipl")
    print(len(parser.objects), len(parser.cars))

    records, lod_refs = parse_text_ipl("data/maps/country/countn2.ipl")
"""

from .base import (
    read_int32,
    read_float,
    int32_from_word,
    float_from_word,
    int32_from_words,
    floats_from_words,
)

from .data_types import (
    Header,
    ObjectInstance,
    ParkedVehicle,
    TextRecord,
    BinaryIPL,
)

from .binary_ipl import (
    BinaryIPLParser,
    decode,
    parse_header,
    is_binary_ipl,
)

from .text_ipl import (
    parse_text_ipl,
    parse_text_ipl_lines,
    records_from_binary,
    get_lod_pairs,
    record_at,
)

__all__ = [
    # Base
    'read_int32',
    'read_float',
    'int32_from_word',
    'float_from_word',
    'int32_from_words',
    'floats_from_words',
    # Data types
    'Header',
    'ObjectInstance',
    'ParkedVehicle',
    'TextRecord',
    'BinaryIPL',
    # Binary IPL
    'BinaryIPLParser',
    'decode',
    'parse_header',
    'is_binary_ipl',
    # Text IPL
    'parse_text_ipl',
    'parse_text_ipl_lines',
    'records_from_binary',
    'get_lod_pairs',
    'record_at',
]
