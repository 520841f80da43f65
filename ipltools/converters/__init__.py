"""
Converters package.

Turns decoded binary IPLs into text IPLs.
"""

from .model_names import ModelNameResolver, ModelNameTable, PlaceholderModelNames
from .text_ipl_writer import encode, format_object, format_car
from .binary_to_text import convert_binary_ipl, BinaryIPLConverter, ConversionSummary

__all__ = [
    'ModelNameResolver',
    'ModelNameTable',
    'PlaceholderModelNames',
    'encode',
    'format_object',
    'format_car',
    'convert_binary_ipl',
    'BinaryIPLConverter',
    'ConversionSummary',
]
