"""Flag bits: extraction and consistency checks.

Bit layout (low nibble of each byte)::

    +------+-------------+---------+---------+------------+
    | Byte | Bit 3       | Bit 2   | Bit 1   | Bit 0      |
    +------+-------------+---------+---------+------------+
    |    0 | RS232       | Auto    | DC      | AC         |
    |    1 | 4A          | 4F      | 4E      | - (minus)  |
    |    9 | Diode       | k       | n       | u          |
    |   10 | Beep        | M       | %       | m          |
    |   11 | Hold        | Rel     | Ohms    | Farads     |
    |   12 | Low battery | Hz      | V       | A          |
    |   13 | User sym 1  | User 0  | Celsius | Fahrenheit |
    |   14 | Max         | Min-Max | Min     | Auto-Off   |
    +------+-------------+---------+---------+------------+
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict, fields

from .errors import FlagInvariantError

logger = logging.getLogger(__name__)

# field name -> (byte index, bit)
FLAG_LAYOUT: dict[str, tuple[int, int]] = {
    "ac": (0, 0),
    "dc": (0, 1),
    "auto": (0, 2),
    "rs232": (0, 3),
    "sign": (1, 0),
    "micro": (9, 0),
    "nano": (9, 1),
    "kilo": (9, 2),
    "diode": (9, 3),
    "milli": (10, 0),
    "percent": (10, 1),
    "mega": (10, 2),
    "beep": (10, 3),
    "farad": (11, 0),
    "ohm": (11, 1),
    "relative": (11, 2),
    "hold": (11, 3),
    "ampere": (12, 0),
    "volt": (12, 1),
    "hertz": (12, 2),
    "low_battery": (12, 3),
    "fahrenheit": (13, 0),
    "celsius": (13, 1),
    "user_symbol_0": (13, 2),
    "user_symbol_1": (13, 3),
    "auto_power_off": (14, 0),
    "min": (14, 1),
    "min_max": (14, 2),
    "max": (14, 3),
}

MULTIPLIER_FLAGS = ("nano", "micro", "milli", "kilo", "mega")

# Diode, beep and temperature share the display with V/Ohm, so they are
# not counted against each other.
QUANTITY_FLAGS = ("hertz", "ohm", "farad", "ampere", "volt", "percent")


@dataclass(frozen=True)
class FlagSet:
    """Every flag bit of one frame."""

    ac: bool = False
    dc: bool = False
    auto: bool = False
    rs232: bool = False
    sign: bool = False
    micro: bool = False
    nano: bool = False
    kilo: bool = False
    diode: bool = False
    milli: bool = False
    percent: bool = False
    mega: bool = False
    beep: bool = False
    farad: bool = False
    ohm: bool = False
    relative: bool = False
    hold: bool = False
    ampere: bool = False
    volt: bool = False
    hertz: bool = False
    low_battery: bool = False
    fahrenheit: bool = False
    celsius: bool = False
    user_symbol_0: bool = False
    user_symbol_1: bool = False
    auto_power_off: bool = False
    min: bool = False
    min_max: bool = False
    max: bool = False

    def active(self) -> list[str]:
        """Names of the set flags, in wire order."""
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


def extract_flags(frame: bytes) -> FlagSet:
    """Read every flag bit of a frame.

    Only bytes 0, 1 and 9-14 are looked at; the frame must already be
    at least 15 bytes long.
    """
    return FlagSet(**{
        name: bool(frame[index] & (1 << bit))
        for name, (index, bit) in FLAG_LAYOUT.items()
    })


def check_flags(flags: FlagSet) -> None:
    """Reject flag combinations the meter never displays.

    Raises:
        FlagInvariantError: With ``violation`` set to one of
            ``multiple_multipliers``, ``multiple_quantities``,
            ``ac_and_dc`` or ``missing_rs232``.
    """
    if sum(getattr(flags, name) for name in MULTIPLIER_FLAGS) > 1:
        _reject("More than one multiplier detected in packet.", "multiple_multipliers")

    if sum(getattr(flags, name) for name in QUANTITY_FLAGS) > 1:
        _reject("More than one measurement type detected in packet.", "multiple_quantities")

    if flags.ac and flags.dc:
        _reject("Both AC and DC flags detected in packet.", "ac_and_dc")

    if not flags.rs232:
        _reject("No RS232 flag detected in packet.", "missing_rs232")


def flags_valid(flags: FlagSet) -> bool:
    try:
        check_flags(flags)
    except FlagInvariantError:
        return False
    return True


def _reject(message: str, violation: str) -> None:
    logger.debug(message)
    raise FlagInvariantError(message, violation)
