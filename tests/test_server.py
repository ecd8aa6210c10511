"""Tests for the MCP tool and resource functions."""

import json

from dtm0660_dmm.protocol.value import OVER_RANGE_CODES
from dtm0660_dmm.server import (
    decode_frame,
    decode_frames,
    inspect_frame,
    interpret_capture,
    resource_digits,
    resource_layout,
    resource_serial_settings,
    validate_frame,
)


def test_decode_frame(frame_builder):
    frame = frame_builder(digits=(1, 2, 3, 4), dp=3, flags=("rs232", "dc", "volt"))
    result = decode_frame(frame.hex(" "))
    assert result["valid"] is True
    assert result["value"] == 123.4
    assert result["quantity"] == "voltage"
    assert result["unit"] == "V"
    assert result["modifiers"] == ["dc"]
    assert result["annunciators"] == ["rs232"]
    assert result["display"] == "123.4 V [DC]"


def test_decode_frame_separators(frame_builder):
    frame = frame_builder(digits=(0, 0, 0, 5), flags=("rs232", "ampere"))
    result = decode_frame(frame.hex(":"))
    assert result["value"] == 5.0


def test_decode_frame_over_range(frame_builder):
    frame = frame_builder(codes=OVER_RANGE_CODES, flags=("rs232", "ohm"))
    result = decode_frame(frame.hex())
    assert result["valid"] is True
    assert result["value"] is None
    assert result["over_range"] is True
    assert result["display"] == "OL Ω"


def test_decode_frame_rejected(frame_builder):
    frame = frame_builder(flags=("rs232", "ac", "dc"))
    result = decode_frame(frame.hex())
    assert result["valid"] is False
    assert result["kind"] == "flags"


def test_decode_frame_bad_hex():
    assert "error" in decode_frame("zz")


def test_validate_frame(frame_builder):
    assert validate_frame(frame_builder().hex()) == {"valid": True}
    assert validate_frame(frame_builder(flags=()).hex()) == {"valid": False}
    assert validate_frame("1727")["valid"] is False


def test_decode_frames(frame_builder):
    good = frame_builder(digits=(0, 0, 0, 1), flags=("rs232", "volt"))
    bad = frame_builder(flags=("volt",))
    result = decode_frames((good + bad + good).hex())
    assert result["count"] == 3
    assert result["valid_count"] == 2
    assert result["frames"][1]["kind"] == "flags"


def test_decode_frames_partial(frame_builder):
    result = decode_frames(frame_builder().hex() + "17")
    assert "error" in result


def test_inspect_frame(frame_builder):
    frame = bytearray(frame_builder(digits=(1, 2, 3, 4), flags=("rs232", "volt")))
    frame[2] &= 0x0F
    result = inspect_frame(bytes(frame).hex())
    assert result["sync"][2] == {"index": 2, "nibble": 0, "ok": False}
    assert result["sync"][0]["ok"] is True
    assert result["digits"] == [1, 2, 3, 4]
    assert result["flags"] == ["rs232", "volt"]
    assert result["flags_valid"] is True
    assert result["over_range"] is False


def test_inspect_frame_wrong_length():
    assert "error" in inspect_frame("17 27")


def test_resources():
    layout = json.loads(resource_layout())
    assert layout["volt"] == {"byte": 12, "bit": 1}
    digits = json.loads(resource_digits())
    assert digits["digits"]["0"] == "0xEB"
    assert digits["over_range"] == ["0x00", "0xEB", "0x61", "0x00"]
    settings = json.loads(resource_serial_settings())
    assert settings["baudrate"] == 2400
    assert settings["packet_size"] == 15


def test_prompt_mentions_data():
    assert "17 27" in interpret_capture("17 27")
