"""Fast decimal-to-double conversion for normal numbers using 128-bit powers of ten."""

from __future__ import annotations

import struct
from functools import lru_cache

_M64 = (1 << 64) - 1
POW10_MIN_EXP = -348
POW10_MAX_EXP = 347

_F64_BITS = 64
_F64_SIG_BITS = 52
_F64_SIG_FULL_BITS = 53
_F64_EXP_BIAS = 1023
_F64_SIG_MASK = 0x000FFFFFFFFFFFFF
_LOW_BITS = (1 << (64 - 54 - 1)) - 1


@lru_cache(maxsize=None)
def pow10_m128(exp10: int) -> tuple[int, int]:
    """Return (low, high) 64-bit halves of 10**exp10 normalised to 128 bits, rounded down."""
    if not POW10_MIN_EXP <= exp10 <= POW10_MAX_EXP:
        raise ValueError(f"exponent {exp10} outside [{POW10_MIN_EXP}, {POW10_MAX_EXP}]")
    if exp10 >= 0:
        power = 10**exp10
        shift = power.bit_length() - 128
        sig = power >> shift if shift > 0 else power << -shift
    else:
        divisor = 10**-exp10
        sig = (1 << (127 + divisor.bit_length())) // divisor
    return sig & _M64, sig >> 64


def parse_floating_normal_fast(exp10: int, mantissa: int, sign: int = 0) -> int | None:
    """Compute the IEEE-754 bits of mantissa * 10**exp10.

    A negative sign sets the sign bit. Returns None when the truncated product
    is too close to a rounding boundary to decide; the caller must fall back
    to a slower exact method.
    """
    if not 0 < mantissa <= _M64:
        raise ValueError("mantissa must be a non-zero 64-bit unsigned value")
    sig2_ext, sig2 = pow10_m128(exp10)

    lz = 64 - mantissa.bit_length()
    sig1 = (mantissa << lz) & _M64
    exp2 = ((217706 * exp10 - 4128768) >> 16) - lz

    product = sig1 * sig2
    hi, lo = product >> 64, product & _M64

    exact = False
    bits = hi & _LOW_BITS
    if ((bits - 1) & _M64) < _LOW_BITS - 1:
        exact = True
    else:
        hi2 = (sig1 * sig2_ext) >> 64
        add = (lo + hi2) & _M64
        if ((add + 1) & _M64) > 1:
            carry = add < lo or add < hi2
            hi = (hi + int(carry)) & _M64
            exact = True

    if not exact:
        return None

    lz = 1 if hi < (1 << 63) else 0
    hi = (hi << lz) & _M64
    exp2 += 64 - lz

    round_bit = 1 << (64 - 54)
    if hi & round_bit:
        hi = (hi + round_bit) & _M64
    if hi < round_bit:
        hi = 1 << 63
        exp2 += 1

    hi >>= _F64_BITS - _F64_SIG_FULL_BITS
    exp2 += _F64_BITS - _F64_SIG_FULL_BITS + _F64_SIG_BITS + _F64_EXP_BIAS
    raw = (((exp2 & _M64) << _F64_SIG_BITS) | (hi & _F64_SIG_MASK)) & _M64
    if sign < 0:
        raw |= 1 << 63
    return raw


def bits_to_double(raw: int) -> float:
    """Interpret a 64-bit integer as an IEEE-754 double."""
    return struct.unpack("<d", (raw & _M64).to_bytes(8, "little"))[0]