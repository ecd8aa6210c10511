"""Decode errors raised for a single rejected frame."""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all frame decoding failures."""

    kind = "decode"


class FramingError(DecodeError):
    """Frame has the wrong length or a sync nibble out of place."""

    kind = "framing"

    def __init__(self, message: str, index: int | None = None, byte: int | None = None) -> None:
        super().__init__(message)
        self.index = index
        self.byte = byte


class DigitDecodeError(DecodeError):
    """A digit code byte is not one of the ten segment patterns."""

    kind = "digit"

    def __init__(self, code: int) -> None:
        super().__init__(f"Invalid digit byte: 0x{code:02X}")
        self.code = code


class FlagInvariantError(DecodeError):
    """The flag bits describe an impossible display state."""

    kind = "flags"

    def __init__(self, message: str, violation: str) -> None:
        super().__init__(message)
        self.violation = violation
