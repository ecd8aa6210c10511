"""MCP server entry point for the DTM0660 frame decoder.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport. Frames come in
as hex strings captured from the meter's serial output.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .protocol.digits import DIGIT_CODES
from .protocol.errors import DecodeError
from .protocol.flags import FLAG_LAYOUT, extract_flags, flags_valid
from .protocol.framing import (
    BAUDRATE,
    BYTESIZE,
    PACKET_SIZE,
    PARITY,
    SERIAL_PARAMS,
    STOPBITS,
)
from .protocol.parser import decode_packet, packet_valid, split_frames
from .protocol.value import OVER_RANGE_CODES, digit_codes

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "dtm0660",
    instructions="Decode serial frames from DTM0660-based digital multimeters",
)


def _parse_hex(text: str) -> bytes:
    """Parse hex text, ignoring whitespace, colons and dashes."""
    cleaned = "".join(text.split())
    for sep in (":", "-"):
        cleaned = cleaned.replace(sep, "")
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise ValueError(f"Invalid hex data: {text!r}") from None


def _decode_result(frame: bytes) -> dict[str, Any]:
    try:
        decoded = decode_packet(frame)
    except DecodeError as e:
        logger.debug("Rejected frame %s: %s", frame.hex(" "), e)
        return {"valid": False, "error": str(e), "kind": e.kind}

    result: dict[str, Any] = {"valid": True}
    result.update(decoded.to_dict())
    result["display"] = str(decoded.measurement)
    return result


# ─── DECODING TOOLS ──────────────────────────────────────────────────

@mcp.tool()
def decode_frame(frame_hex: str) -> dict[str, Any]:
    """Decode a single 15-byte frame into a measurement.

    Args:
        frame_hex: Frame bytes as hex, e.g. "17 27 3d 4f 5e ...".
    """
    try:
        frame = _parse_hex(frame_hex)
    except ValueError as e:
        return {"error": str(e)}
    return _decode_result(frame)


@mcp.tool()
def validate_frame(frame_hex: str) -> dict[str, Any]:
    """Check sync nibbles and flag consistency without decoding the value.

    Args:
        frame_hex: Frame bytes as hex.
    """
    try:
        frame = _parse_hex(frame_hex)
    except ValueError as e:
        return {"error": str(e)}
    return {"valid": packet_valid(frame)}


@mcp.tool()
def decode_frames(data_hex: str) -> dict[str, Any]:
    """Decode a run of back-to-back, already aligned frames.

    The data is cut every 15 bytes; misaligned captures are not
    resynchronized.

    Args:
        data_hex: Concatenated frames as hex.
    """
    try:
        frames = split_frames(_parse_hex(data_hex), PACKET_SIZE)
    except ValueError as e:
        return {"error": str(e)}

    results = [_decode_result(frame) for frame in frames]
    return {
        "frames": results,
        "count": len(results),
        "valid_count": sum(1 for r in results if r["valid"]),
    }


@mcp.tool()
def inspect_frame(frame_hex: str) -> dict[str, Any]:
    """Show the raw contents of a frame, valid or not.

    Reports the sync nibble of every byte, the merged digit codes and
    every flag bit.

    Args:
        frame_hex: Frame bytes as hex.
    """
    try:
        frame = _parse_hex(frame_hex)
    except ValueError as e:
        return {"error": str(e)}
    if len(frame) != PACKET_SIZE:
        return {"error": f"Frame must be {PACKET_SIZE} bytes, got {len(frame)}"}

    flags = extract_flags(frame)
    codes = digit_codes(frame)
    return {
        "sync": [
            {"index": i, "nibble": byte >> 4, "ok": byte >> 4 == i + 1}
            for i, byte in enumerate(frame)
        ],
        "digit_codes": [f"0x{code:02X}" for code in codes],
        "digits": [DIGIT_CODES.get(code) for code in codes],
        "over_range": codes == OVER_RANGE_CODES,
        "flags": flags.active(),
        "flags_valid": flags_valid(flags),
    }


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("dtm0660://protocol/layout")
def resource_layout() -> str:
    """Byte and bit position of every flag."""
    return json.dumps({
        name: {"byte": index, "bit": bit}
        for name, (index, bit) in FLAG_LAYOUT.items()
    })


@mcp.resource("dtm0660://protocol/digits")
def resource_digits() -> str:
    """Seven-segment code for each digit."""
    return json.dumps({
        "digits": {str(digit): f"0x{code:02X}" for code, digit in DIGIT_CODES.items()},
        "over_range": [f"0x{code:02X}" for code in OVER_RANGE_CODES],
    })


@mcp.resource("dtm0660://serial/settings")
def resource_serial_settings() -> str:
    """Serial line settings of the meter's output."""
    return json.dumps({
        "baudrate": BAUDRATE,
        "bytesize": BYTESIZE,
        "parity": PARITY,
        "stopbits": STOPBITS,
        "handshake": None,
        "summary": SERIAL_PARAMS,
        "packet_size": PACKET_SIZE,
    })


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def interpret_capture(data_hex: str) -> str:
    """Walk through a capture from the meter and explain the readings.

    Args:
        data_hex: Captured serial bytes as hex.
    """
    return f"""Decode this capture from a DTM0660 multimeter:

{data_hex}

Steps:
- Use decode_frames if the capture is a whole number of 15-byte frames,
  otherwise find where the sync nibbles (1..F) line up and decode from there
- Use inspect_frame on any rejected frame to see which byte or flag is wrong
- Summarize the readings with their units and modes (AC/DC, hold, relative)
- Point out over-range readings and low battery warnings"""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
