"""
Data Types for the MKT Device Info Reader
=========================================

Plain dataclasses describing one probing session. Every instance is
created, used and dropped within a single negotiation or query call;
none of them hold a port handle.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .commands import (
    DEFAULT_TIMEOUT,
    DEVICE_INFO_COMMAND,
    PROBE_COMMAND,
    READ_BUFFER_SIZE,
    ResponseVerifier,
    accept_any,
)

BAUD_RATE_CANDIDATES: Tuple[int, ...] = (
    9600, 14400, 19200, 38400, 57600, 115200, 128000, 256000,
)


@dataclass(frozen=True)
class SerialConfig:
    """
    Settings for a single open of a serial port.

    Attributes:
        port: Platform port name (e.g. 'COM3', '/dev/ttyUSB0')
        baud_rate: Line speed, must be positive
        read_timeout: Seconds a read may block
        write_timeout: Seconds a write may block (defaults to read_timeout)
    """
    port: str
    baud_rate: int
    read_timeout: float = DEFAULT_TIMEOUT
    write_timeout: Optional[float] = None

    def __post_init__(self):
        if not self.port:
            raise ValueError("port must not be empty")
        if self.baud_rate <= 0:
            raise ValueError(f"baud rate must be positive, got {self.baud_rate}")
        if self.read_timeout < 0:
            raise ValueError(f"timeout must not be negative, got {self.read_timeout}")
        if self.write_timeout is None:
            object.__setattr__(self, "write_timeout", self.read_timeout)


class ProbeStatus(Enum):
    """Outcome tag of one open+write+read attempt."""
    SUCCESS = "success"
    OPEN_FAILED = "open failed"
    WRITE_FAILED = "write failed"
    READ_FAILED = "read timed out or failed"


@dataclass(frozen=True)
class ProbeResult:
    """
    Result of a single probe.

    ``response`` is only meaningful for SUCCESS (and for a READ_FAILED
    caused by a rejected response); ``reason`` describes any failure.
    """
    baud_rate: int
    status: ProbeStatus
    response: bytes = b""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.SUCCESS

    def __str__(self) -> str:
        text = f"{self.baud_rate}: {self.status.value}"
        if self.ok:
            text += f" ({len(self.response)} bytes)"
        elif self.reason:
            text += f" ({self.reason})"
        return text


@dataclass(frozen=True)
class ProbeSettings:
    """
    Tunables shared by the negotiator, the query and the presentation shells.

    Attributes:
        candidates: Baud rates to try, in order
        timeout: Read/write timeout per attempt (seconds)
        buffer_size: Bytes requested by each bounded read
        probe_command: Sent during negotiation
        info_command: Sent by the device info query
        accept_empty: Count a zero-byte read as a successful probe
        verify: Policy applied to a non-empty probe response
        strategy: Port enumeration strategy name ('probe', 'static', 'system')
    """
    candidates: Tuple[int, ...] = BAUD_RATE_CANDIDATES
    timeout: float = DEFAULT_TIMEOUT
    buffer_size: int = READ_BUFFER_SIZE
    probe_command: bytes = PROBE_COMMAND
    info_command: bytes = DEVICE_INFO_COMMAND
    accept_empty: bool = False
    verify: ResponseVerifier = field(default=accept_any, compare=False)
    strategy: str = "system"

    def __post_init__(self):
        candidates = tuple(self.candidates)
        if not candidates:
            raise ValueError("no candidate baud rates given")
        for baud_rate in candidates:
            if baud_rate <= 0:
                raise ValueError(f"baud rate must be positive, got {baud_rate}")
        if self.timeout < 0:
            raise ValueError(f"timeout must not be negative, got {self.timeout}")
        if self.buffer_size <= 0:
            raise ValueError(f"buffer size must be positive, got {self.buffer_size}")
        object.__setattr__(self, "candidates", candidates)


@dataclass
class DeviceInfoReading:
    """
    What the presentation layer shows after a "Read Info" action.

    Exactly one of ``text`` / ``error`` is set. ``baud_rate`` is filled in
    once known, even when the later query fails.
    """
    port: str
    baud_rate: Optional[int] = None
    text: Optional[str] = None
    error: Optional[Exception] = None
    negotiated: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    def message(self) -> str:
        """Render the reading the way the info label displays it."""
        if self.ok:
            return f"Device Info: {self.text}"
        if self.error is None:
            return "Please select a COM port"
        if self.baud_rate is None and self.negotiated:
            return f"Error detecting baud rate: {self.error}"
        return f"Error: {self.error}"

    def __str__(self) -> str:
        return self.message()
