"""Seven-segment digit codes.

Each digit is spread over two frame bytes. Merged, the bits read
``A F E - B G C D`` from MSB to LSB; bit 4 belongs to the sign or a
decimal point and is cleared before lookup.
"""

from __future__ import annotations

from .errors import DigitDecodeError

DIGIT_CODES: dict[int, int] = {
    0xEB: 0,
    0x0A: 1,
    0xAD: 2,
    0x8F: 3,
    0x4E: 4,
    0xC7: 5,
    0xE7: 6,
    0x8A: 7,
    0xEF: 8,
    0xCF: 9,
}

NON_DIGIT_BIT = 1 << 4


def merge_digit_code(upper: int, lower: int) -> int:
    """Merge the low nibbles of two frame bytes into one digit code."""
    code = ((upper & 0x0F) << 4) | (lower & 0x0F)
    return code & ~NON_DIGIT_BIT


def decode_digit(code: int) -> int:
    """Return the decimal digit for a segment code.

    Raises:
        DigitDecodeError: If ``code`` is not a digit pattern.
    """
    try:
        return DIGIT_CODES[code]
    except KeyError:
        raise DigitDecodeError(code) from None
