"""
Pullet16 Interpreter - Two's-Complement Arithmetic Helpers

The accumulator is held as a plain Python int. Whenever it takes part in
arithmetic or output it is re-read through twos_complement(); the stored
value itself is never normalized, so overflow past 16 bits only shows up
when the value is next encoded with to_pattern().

Conversion rule (kept exactly, including the 32768 edge):
    twos_complement(v) = v - 65536   if v > 32768
                         v           otherwise
"""

from .config import WORD_BITS, WORD_MASK, WORD_MODULUS, SIGN_THRESHOLD


def twos_complement(value: int) -> int:
    """Interpret a 16-bit unsigned pattern as a signed value."""
    if value > SIGN_THRESHOLD:
        return value - WORD_MODULUS
    return value


def to_pattern(value: int) -> int:
    """Encode a signed or oversized int as a 16-bit unsigned pattern.

    High-order bits beyond 16 are dropped silently (register truncation).
    """
    return value & WORD_MASK


def is_negative(value: int) -> bool:
    """True iff the two's-complement reading of value is below zero."""
    return twos_complement(value) < 0


def bit_string(value: int, width: int = WORD_BITS) -> str:
    """Format the low `width` bits of value as a 0/1 string, MSB first."""
    return format(value & ((1 << width) - 1), f'0{width}b')


def bit_string_to_int(bits: str) -> int:
    """Unsigned int from a 0/1 string. Raises ValueError on other characters."""
    if not bits or set(bits) - {'0', '1'}:
        raise ValueError(f"not a bit string: {bits!r}")
    return int(bits, 2)
