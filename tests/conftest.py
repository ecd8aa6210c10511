"""Shared fixtures: a builder for synthetic DTM0660 frames."""

import pytest

from dtm0660_dmm.protocol.digits import DIGIT_CODES
from dtm0660_dmm.protocol.flags import FLAG_LAYOUT

SEGMENTS = {digit: code for code, digit in DIGIT_CODES.items()}

# Byte carrying bit 0 for a decimal point after digit 1, 2 or 3
DP_BYTES = {1: 3, 2: 5, 3: 7}


def make_frame(
    digits=(0, 0, 0, 0),
    flags=("rs232",),
    dp=None,
    codes=None,
):
    """Build a well-formed 15-byte frame.

    Args:
        digits: Four decimal digits, most significant first.
        flags: Flag names from FLAG_LAYOUT to set (``sign`` included).
        dp: Number of digits before the decimal point (1-3), or None.
        codes: Raw digit codes, overriding ``digits``.
    """
    if codes is None:
        codes = [SEGMENTS[d] for d in digits]

    nibbles = [0] * 15
    for i, code in enumerate(codes):
        nibbles[1 + i * 2] = code >> 4
        nibbles[2 + i * 2] = code & 0x0F
    if dp is not None:
        nibbles[DP_BYTES[dp]] |= 0x01
    for name in flags:
        index, bit = FLAG_LAYOUT[name]
        nibbles[index] |= 1 << bit

    return bytes(((i + 1) << 4) | nibble for i, nibble in enumerate(nibbles))


@pytest.fixture
def frame_builder():
    return make_frame
