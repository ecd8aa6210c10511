"""Data models for decoded measurements."""

from .measurement import Measurement, Modifier, Quantity, Unit
