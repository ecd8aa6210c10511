"""Protocol layer: frame sync, digit and flag decoding, measurement mapping."""

from .errors import DecodeError, DigitDecodeError, FlagInvariantError, FramingError
from .flags import FlagSet, extract_flags, check_flags
from .framing import PACKET_SIZE, check_sync, sync_nibbles_valid
from .parser import DecodedPacket, decode_packet, packet_valid, parse_packet
