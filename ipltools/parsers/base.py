"""
Base utilities for binary IPL parsing.

Scalar readers decode one little-endian 32-bit value at a byte offset.
The *_from_words functions apply the same rules to numpy arrays of raw
uint32 words, which is how the record arrays are decoded in bulk.

Floats are decoded from their bit fields rather than with a native float32
view, so the engine's conventions hold exactly:
- exponent 0   -> 0.0 (denormals and -0.0 flush to +0.0)
- exponent 255 -> signed infinity (NaN patterns included)
"""

import math
import struct

import numpy as np

INT32_SIGN_BIT = 0x80000000
UINT32_RANGE = 0x100000000
MANTISSA_SCALE = 8388608.0  # 2^23
EXPONENT_BIAS = 127


def _read_word(data: bytes, offset: int) -> int:
    if offset < 0 or offset + 4 > len(data):
        raise ValueError(f"Not enough data for a 32-bit value at offset {offset}")
    return struct.unpack_from('<I', data, offset)[0]


def int32_from_word(word: int) -> int:
    """Two's-complement fix-up of an unsigned 32-bit value."""
    if word >= INT32_SIGN_BIT:
        return word - UINT32_RANGE
    return word


def float_from_word(word: int) -> float:
    """Decode an IEEE-754 single from its raw bits (see module notes)."""
    sign = -1.0 if word & INT32_SIGN_BIT else 1.0
    exponent = (word >> 23) & 0xFF
    mantissa = word & 0x7FFFFF
    if exponent == 0:
        return 0.0
    if exponent == 255:
        return sign * math.inf
    return sign * math.ldexp(1.0 + mantissa / MANTISSA_SCALE, exponent - EXPONENT_BIAS)


def read_int32(data: bytes, offset: int) -> int:
    """Read a little-endian signed 32-bit integer at a 0-based offset."""
    return int32_from_word(_read_word(data, offset))


def read_float(data: bytes, offset: int) -> float:
    """Read a little-endian 32-bit float at a 0-based offset."""
    return float_from_word(_read_word(data, offset))


def int32_from_words(words: np.ndarray) -> np.ndarray:
    """Vectorised int32_from_word. Returns an int64 array."""
    values = np.asarray(words, dtype=np.uint32).astype(np.int64)
    return np.where(values >= INT32_SIGN_BIT, values - UINT32_RANGE, values)


def floats_from_words(words: np.ndarray) -> np.ndarray:
    """Vectorised float_from_word. Returns a float64 array."""
    words = np.asarray(words, dtype=np.uint32)
    sign = np.where(words & INT32_SIGN_BIT, -1.0, 1.0)
    exponent = ((words >> 23) & 0xFF).astype(np.int32)
    mantissa = (words & 0x7FFFFF).astype(np.float64)

    with np.errstate(over='ignore'):
        values = sign * np.ldexp(1.0 + mantissa / MANTISSA_SCALE, exponent - EXPONENT_BIAS)

    values = np.where(exponent == 0, 0.0, values)
    values = np.where(exponent == 255, sign * np.inf, values)
    return values
