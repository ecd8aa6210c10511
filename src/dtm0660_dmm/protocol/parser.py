"""Turn a validated frame into a Measurement."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..models.measurement import Measurement, Modifier, Quantity, Unit
from .flags import FlagSet, check_flags, extract_flags, flags_valid
from .framing import check_sync, sync_nibbles_valid
from .errors import FramingError
from .value import assemble_value

logger = logging.getLogger(__name__)

# Later entries win if more than one is set
QUANTITY_ORDER: tuple[tuple[str, Quantity, Unit], ...] = (
    ("volt", Quantity.VOLTAGE, Unit.VOLT),
    ("ampere", Quantity.CURRENT, Unit.AMPERE),
    ("ohm", Quantity.RESISTANCE, Unit.OHM),
    ("hertz", Quantity.FREQUENCY, Unit.HERTZ),
    ("farad", Quantity.CAPACITANCE, Unit.FARAD),
    ("beep", Quantity.CONTINUITY, Unit.BOOLEAN),
    ("diode", Quantity.VOLTAGE, Unit.VOLT),
    ("percent", Quantity.DUTY_CYCLE, Unit.PERCENTAGE),
    ("celsius", Quantity.TEMPERATURE, Unit.CELSIUS),
    ("fahrenheit", Quantity.TEMPERATURE, Unit.FAHRENHEIT),
)

MODIFIER_FLAGS: dict[str, Modifier] = {
    "ac": Modifier.AC,
    "dc": Modifier.DC,
    "auto": Modifier.AUTORANGE,
    "diode": Modifier.DIODE,
    "hold": Modifier.HOLD,
    "relative": Modifier.RELATIVE,
    "min": Modifier.MIN,
    "max": Modifier.MAX,
}

ANNUNCIATORS: dict[str, str] = {
    "rs232": "RS232 enabled.",
    "low_battery": "Battery is low.",
    "auto_power_off": "Auto power-off mode is active.",
    "min_max": "Min Max mode active.",
    "user_symbol_0": "User-defined LCD symbol 0 is active.",
    "user_symbol_1": "User-defined LCD symbol 1 is active.",
}


@dataclass(frozen=True)
class DecodedPacket:
    """A measurement together with the raw flag state it came from."""

    measurement: Measurement
    flags: FlagSet

    @property
    def annunciators(self) -> list[str]:
        return [name for name in ANNUNCIATORS if getattr(self.flags, name)]

    def to_dict(self) -> dict:
        result = self.measurement.to_dict()
        result["annunciators"] = self.annunciators
        return result


def map_measurement(value: float, flags: FlagSet) -> Measurement:
    """Apply multiplier, quantity and mode flags to a raw display value."""
    if flags.nano:
        value /= 1e9
    if flags.micro:
        value /= 1e6
    if flags.milli:
        value /= 1e3
    if flags.kilo:
        value *= 1e3
    if flags.mega:
        value *= 1e6

    quantity = unit = None
    for name, flag_quantity, flag_unit in QUANTITY_ORDER:
        if not getattr(flags, name):
            continue
        quantity, unit = flag_quantity, flag_unit
        if name == "beep":
            # "OL" means an open circuit
            value = 0.0 if math.isinf(value) else 1.0

    modifiers = frozenset(
        modifier for name, modifier in MODIFIER_FLAGS.items()
        if getattr(flags, name)
    )

    for name, message in ANNUNCIATORS.items():
        if getattr(flags, name):
            logger.debug(message)

    return Measurement(value=value, quantity=quantity, unit=unit, modifiers=modifiers)


def packet_valid(frame: bytes) -> bool:
    """Check sync nibbles and flag consistency without decoding the value."""
    if not sync_nibbles_valid(frame):
        return False
    return flags_valid(extract_flags(frame))


def decode_packet(frame: bytes) -> DecodedPacket:
    """Decode one 15-byte frame.

    Raises:
        FramingError: On a bad length or sync nibble.
        FlagInvariantError: On contradictory flags.
        DigitDecodeError: On an unreadable digit.
    """
    data = check_sync(frame)
    flags = extract_flags(data)
    check_flags(flags)
    value = assemble_value(data)
    return DecodedPacket(measurement=map_measurement(value, flags), flags=flags)


def parse_packet(frame: bytes) -> Measurement:
    """Decode one 15-byte frame into a Measurement.

    See :func:`decode_packet` for the errors raised.
    """
    return decode_packet(frame).measurement


def split_frames(data: bytes, packet_size: int) -> list[bytes]:
    """Cut a buffer of back-to-back aligned frames into single frames.

    No resynchronization is attempted.

    Raises:
        FramingError: If ``data`` is not a whole number of frames.
    """
    if len(data) % packet_size:
        raise FramingError(
            f"Data length {len(data)} is not a multiple of {packet_size}"
        )
    return [
        bytes(data[offset : offset + packet_size])
        for offset in range(0, len(data), packet_size)
    ]
