from __future__ import annotations

from .byteutil import MASK64, SIZE_OF_LONG, load_int64_le, store_int64_le

# x^128 + x^7 + x^2 + x + 1, low byte of the reduction polynomial
GF128_REDUCTION = 0x87

_TOP_BIT = 0x8000000000000000


def multiply_by_alpha(tweak: bytearray) -> bytearray:
    """
    Multiply a 128-bit tweak by alpha (x) in GF(2^128), in place.

    The tweak is read as two little-endian 64-bit words, low word first.
    """
    lo = load_int64_le(tweak, 0)
    hi = load_int64_le(tweak, SIZE_OF_LONG)

    carry = GF128_REDUCTION if hi & _TOP_BIT else 0

    hi = ((hi << 1) | (lo >> 63)) & MASK64
    lo = ((lo << 1) & MASK64) ^ carry

    store_int64_le(lo, tweak, 0)
    store_int64_le(hi, tweak, SIZE_OF_LONG)
    return tweak
