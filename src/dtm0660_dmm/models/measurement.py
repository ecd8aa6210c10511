"""Measurement record produced from one decoded frame."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class Quantity(str, Enum):
    """Physical quantity shown on the display."""

    VOLTAGE = "voltage"
    CURRENT = "current"
    RESISTANCE = "resistance"
    FREQUENCY = "frequency"
    CAPACITANCE = "capacitance"
    CONTINUITY = "continuity"
    DUTY_CYCLE = "duty_cycle"
    TEMPERATURE = "temperature"


class Unit(str, Enum):
    VOLT = "V"
    AMPERE = "A"
    OHM = "Ω"
    HERTZ = "Hz"
    FARAD = "F"
    BOOLEAN = "bool"
    PERCENTAGE = "%"
    CELSIUS = "°C"
    FAHRENHEIT = "°F"


class Modifier(str, Enum):
    """Measurement mode flags carried alongside the value."""

    AC = "ac"
    DC = "dc"
    AUTORANGE = "autorange"
    DIODE = "diode"
    HOLD = "hold"
    RELATIVE = "relative"
    MIN = "min"
    MAX = "max"


@dataclass(frozen=True)
class Measurement:
    """A fully decoded reading.

    ``quantity`` and ``unit`` are None when the frame lights no unit
    annunciator. ``value`` is ``±inf`` for an over-range display.
    """

    value: float
    quantity: Quantity | None = None
    unit: Unit | None = None
    modifiers: frozenset[Modifier] = field(default_factory=frozenset)

    @property
    def over_range(self) -> bool:
        return math.isinf(self.value)

    def to_dict(self) -> dict:
        # JSON has no infinity; over-range is reported separately
        return {
            "value": None if self.over_range else self.value,
            "over_range": self.over_range,
            "quantity": self.quantity.value if self.quantity else None,
            "unit": self.unit.value if self.unit else None,
            "modifiers": sorted(m.value for m in self.modifiers),
        }

    def __str__(self) -> str:
        if self.over_range:
            text = "-OL" if self.value < 0 else "OL"
        else:
            text = f"{self.value:g}"
        if self.unit is not None:
            text += f" {self.unit.value}"
        for modifier in sorted(self.modifiers, key=lambda m: m.value):
            text += f" [{modifier.value.upper()}]"
        return text
