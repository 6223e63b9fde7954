"""
Tests for the AT command wire format helpers.
"""

import pytest

from mktinfo.commands import (
    DEVICE_INFO_COMMAND,
    PROBE_COMMAND,
    accept_any,
    decode_response,
    encode_command,
    expect_ok,
    expect_token,
)


# =============================================================================
# REQUEST ENCODING
# =============================================================================

class TestEncodeCommand:

    def test_constants_are_cr_terminated(self):
        assert PROBE_COMMAND == b"AT\r"
        assert DEVICE_INFO_COMMAND == b"AT+DEVICEINFO\r"

    def test_text_gets_carriage_return(self):
        assert encode_command("AT+GMR") == b"AT+GMR\r"

    def test_text_already_terminated(self):
        assert encode_command("AT\r") == b"AT\r"

    def test_bytes_are_verbatim(self):
        assert encode_command(b"AT+GMR\r\n") == b"AT+GMR\r\n"
        assert encode_command(b"\x01\x02") == b"\x01\x02"

    def test_bytearray_becomes_bytes(self):
        result = encode_command(bytearray(b"AT\r"))
        assert isinstance(result, bytes)
        assert result == b"AT\r"

    def test_non_ascii_text_rejected(self):
        with pytest.raises(UnicodeEncodeError):
            encode_command("AT+NAME=é")


# =============================================================================
# RESPONSE DECODING
# =============================================================================

class TestDecodeResponse:

    def test_keeps_line_endings(self):
        assert decode_response(b"OK\r\n") == "OK\r\n"

    def test_empty(self):
        assert decode_response(b"") == ""

    def test_invalid_bytes_do_not_raise(self):
        text = decode_response(b"MT\xff6261")
        assert text.startswith("MT")
        assert text.endswith("6261")


# =============================================================================
# VERIFICATION POLICIES
# =============================================================================

class TestVerifiers:

    def test_accept_any(self):
        assert accept_any(b"\x00garbage")

    def test_expect_ok_matches_token(self):
        assert expect_ok(b"AT\r\nOK\r\n")
        assert expect_ok(b"OK")

    def test_expect_ok_rejects_substring(self):
        assert not expect_ok(b"BOOKED\r\n")
        assert not expect_ok(b"ERROR\r\n")

    def test_custom_token(self):
        verify = expect_token("READY")
        assert verify(b"+DEV: READY\r\n")
        assert not verify(b"+DEV: BUSY\r\n")
        assert verify.__name__ == "expect_ready"
