"""Decoder for the serial output of DTM0660-based multimeters."""

__version__ = "0.1.0"
