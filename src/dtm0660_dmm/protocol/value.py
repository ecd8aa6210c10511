"""Assemble the displayed number from bytes 1-8.

Layout (low nibbles only)::

    +------+-----+-----+-----+-------+
    | Byte | b3  | b2  | b1  | b0    |
    +------+-----+-----+-----+-------+
    |    1 | 4A  | 4F  | 4E  | sign  |
    |    2 | 4B  | 4G  | 4C  | 4D    |
    |    3 | 3A  | 3F  | 3E  | DP1   |
    |    4 | 3B  | 3G  | 3C  | 3D    |
    |    5 | 2A  | 2F  | 2E  | DP2   |
    |    6 | 2B  | 2G  | 2C  | 2D    |
    |    7 | 1A  | 1F  | 1E  | DP3   |
    |    8 | 1B  | 1G  | 1C  | 1D    |
    +------+-----+-----+-----+-------+

Bytes 1-2 hold the leftmost (most significant) digit.
"""

from __future__ import annotations

import logging
import math

from .digits import decode_digit, merge_digit_code

logger = logging.getLogger(__name__)

# "0L" on the LCD: blank, O, L, blank
OVER_RANGE_CODES = (0x00, 0xEB, 0x61, 0x00)

# (byte index, divisor), checked in order
DECIMAL_POINTS = (
    (3, 1000),
    (5, 100),
    (7, 10),
)


def is_negative(frame: bytes) -> bool:
    return bool(frame[1] & 0x01)


def digit_codes(frame: bytes) -> tuple[int, int, int, int]:
    """Return the four merged digit codes, most significant first."""
    return tuple(
        merge_digit_code(frame[1 + i * 2], frame[2 + i * 2])
        for i in range(4)
    )


def assemble_value(frame: bytes) -> float:
    """Build the signed display value of a frame.

    Returns ``inf`` or ``-inf`` when the display shows the over-range
    sentinel.

    Raises:
        DigitDecodeError: If any of the four digit codes is invalid.
    """
    sign = -1 if is_negative(frame) else 1
    codes = digit_codes(frame)

    if codes == OVER_RANGE_CODES:
        logger.debug("Over limit.")
        return sign * math.inf

    digits = [decode_digit(code) for code in codes]
    logger.debug(
        "Digits: %02x %02x %02x %02x (%d%d%d%d).", *codes, *digits
    )

    intval = 0
    for digit in digits:
        intval = intval * 10 + digit

    value = float(intval)
    for index, divisor in DECIMAL_POINTS:
        if frame[index] & 0x01:
            value /= divisor
            break
    else:
        logger.debug("No decimal point in the number.")

    value *= sign
    logger.debug("The display value is %f.", value)
    return value
