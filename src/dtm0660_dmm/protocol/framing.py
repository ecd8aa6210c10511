"""Frame layout and sync nibble validation for DTM0660 packets.

The meter sends 15 bytes per reading, unidirectionally, at 2400/8n1::

    +------+----------+----------------------+
    | Byte | Bits 7-4 | Bits 3-0             |
    +------+----------+----------------------+
    |    0 | 0x1      | RS232 Auto DC AC     |
    |  1-8 | 0x2-0x9  | sign, digits, DP1-3  |
    | 9-14 | 0xA-0xF  | multipliers, units,  |
    |      |          | annunciators         |
    +------+----------+----------------------+

The high nibble of byte ``i`` always holds ``i + 1``. A frame whose nibbles
don't line up was read from the middle of the byte stream.
"""

from __future__ import annotations

import logging

from .errors import FramingError

logger = logging.getLogger(__name__)

PACKET_SIZE = 15

BAUDRATE = 2400
BYTESIZE = 8
PARITY = "N"
STOPBITS = 1
SERIAL_PARAMS = "2400/8n1"


def check_sync(frame: bytes) -> bytes:
    """Validate frame length and sync nibbles.

    Args:
        frame: A bytes-like object holding one aligned packet.

    Returns:
        The frame as an immutable ``bytes`` copy.

    Raises:
        FramingError: If the input is not a byte buffer, the length is
            not 15, or any sync nibble is wrong.
    """
    if isinstance(frame, (int, str)) or frame is None:
        raise FramingError(f"Frame is not a byte buffer: {type(frame).__name__}")
    try:
        data = bytes(frame)
    except (TypeError, ValueError) as e:
        raise FramingError(f"Frame is not a byte buffer: {e}") from None
    if len(data) != PACKET_SIZE:
        raise FramingError(
            f"Packet must be {PACKET_SIZE} bytes, got {len(data)}"
        )

    for i, byte in enumerate(data):
        if (byte >> 4) & 0x0F != i + 1:
            logger.debug("Sync nibble in byte %d (0x%02x) is invalid.", i, byte)
            raise FramingError(
                f"Sync nibble in byte {i} (0x{byte:02X}) is invalid",
                index=i,
                byte=byte,
            )
    return data


def sync_nibbles_valid(frame: bytes) -> bool:
    """Return True if every byte carries its 1-based position in the high nibble."""
    try:
        check_sync(frame)
    except FramingError:
        return False
    return True
