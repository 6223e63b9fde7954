"""
MKT Device Info Reader
======================

Scans serial ports, detects the baud rate of an AT-command device and
reads its device information string.

Example:
    >>> from mktinfo import discover_ports, detect_baud_rate, query_device_info
    >>>
    >>> ports = discover_ports()
    >>> baud = detect_baud_rate(ports[0])
    >>> print(query_device_info(ports[0], baud))

Each call opens, uses and closes its own port handle; nothing is kept
between calls.
"""

from .commands import (
    PROBE_COMMAND,
    DEVICE_INFO_COMMAND,
    READ_BUFFER_SIZE,
    DEFAULT_TIMEOUT,
    encode_command,
    decode_response,
    accept_any,
    expect_ok,
    expect_token,
)
from .data_types import (
    BAUD_RATE_CANDIDATES,
    SerialConfig,
    ProbeStatus,
    ProbeResult,
    ProbeSettings,
    DeviceInfoReading,
)
from .errors import (
    MktInfoError,
    SerialPortError,
    PortOpenError,
    PortWriteError,
    PortReadError,
    NoResponsiveBaudRate,
    NoPortsAvailable,
    ReaderBusy,
)
from .transport import exchange, open_serial
from .ports import (
    PortEnumerator,
    ProbeEnumerator,
    StaticEnumerator,
    SystemEnumerator,
    make_enumerator,
    discover_ports,
)
from .negotiator import detect_baud_rate, negotiate, probe_baud_rate
from .query import query_device_info, read_device_info
from .reader import DeviceInfoReader

__version__ = "1.0.0"
__all__ = [
    "PROBE_COMMAND",
    "DEVICE_INFO_COMMAND",
    "READ_BUFFER_SIZE",
    "DEFAULT_TIMEOUT",
    "encode_command",
    "decode_response",
    "accept_any",
    "expect_ok",
    "expect_token",
    "BAUD_RATE_CANDIDATES",
    "SerialConfig",
    "ProbeStatus",
    "ProbeResult",
    "ProbeSettings",
    "DeviceInfoReading",
    "MktInfoError",
    "SerialPortError",
    "PortOpenError",
    "PortWriteError",
    "PortReadError",
    "NoResponsiveBaudRate",
    "NoPortsAvailable",
    "ReaderBusy",
    "exchange",
    "open_serial",
    "PortEnumerator",
    "ProbeEnumerator",
    "StaticEnumerator",
    "SystemEnumerator",
    "make_enumerator",
    "discover_ports",
    "detect_baud_rate",
    "negotiate",
    "probe_baud_rate",
    "query_device_info",
    "read_device_info",
    "DeviceInfoReader",
]
