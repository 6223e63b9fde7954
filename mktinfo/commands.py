"""
AT Command Protocol
===================

Wire format used to talk to MediaTek (MKT) style devices over serial.

Protocol Overview
-----------------
Requests are short ASCII command strings terminated by a carriage return.
Responses are arbitrary bytes (at most one read buffer) interpreted as
text. No delimiter is expected on the response: a read simply returns
whatever arrived within the timeout window.

Input (Host -> Device):
    AT               - Liveness probe, used during baud negotiation
    AT+DEVICEINFO    - Request the device information string

Output (Device -> Host):
    free-form text, typically ending in OK / ERROR
"""

from typing import Callable, Union

CR = b"\r"

PROBE_COMMAND = b"AT" + CR
DEVICE_INFO_COMMAND = b"AT+DEVICEINFO" + CR

# Bytes requested by a single bounded read
READ_BUFFER_SIZE = 128

# Read timeout per attempt (seconds)
DEFAULT_TIMEOUT = 2.0

# Baud used when probing whether a port exists at all
DEFAULT_PROBE_BAUD = 9600

ResponseVerifier = Callable[[bytes], bool]


def encode_command(command: Union[str, bytes]) -> bytes:
    """
    Turn a command into its wire representation.

    Text is ASCII encoded and terminated with a carriage return unless it
    already ends in one. Bytes are passed through verbatim.

    >>> encode_command("AT")
    b'AT\\r'
    >>> encode_command(b"AT+GMR\\r\\n")
    b'AT+GMR\\r\\n'
    """
    if isinstance(command, (bytes, bytearray)):
        return bytes(command)
    data = command.encode("ascii")
    if not data.endswith(CR):
        data += CR
    return data


def decode_response(data: bytes) -> str:
    """Decode raw response bytes to text without any framing or stripping."""
    return data.decode("utf-8", errors="replace")


# =============================================================================
# Response verification policies
# =============================================================================

def accept_any(response: bytes) -> bool:
    """Presence-only check: any response counts."""
    return True


def expect_token(token: Union[str, bytes]) -> ResponseVerifier:
    """
    Build a verifier that requires ``token`` as a whole line-level word
    of the response (``OK`` matches ``b"AT\\r\\nOK\\r\\n"`` but not ``b"BOOKED"``).
    """
    wanted = token.encode("ascii") if isinstance(token, str) else bytes(token)

    def verify(response: bytes) -> bool:
        return wanted in response.split()

    verify.__name__ = f"expect_{wanted.decode('ascii', errors='replace').lower()}"
    return verify


expect_ok = expect_token("OK")
