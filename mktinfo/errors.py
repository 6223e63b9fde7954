"""
Errors raised by the probing core.

Every failure is returned to the immediate caller as one of these types.
Nothing here is fatal to the process.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .data_types import ProbeResult, SerialConfig


class MktInfoError(Exception):
    """Base class for all mktinfo errors."""


class SerialPortError(MktInfoError):
    """A single open/write/read attempt failed."""

    stage = "access"

    def __init__(self, config: "SerialConfig", reason: str = ""):
        self.config = config
        self.reason = reason
        message = f"could not {self.stage} {config.port} at {config.baud_rate} baud"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PortOpenError(SerialPortError):
    stage = "open"


class PortWriteError(SerialPortError):
    stage = "write to"


class PortReadError(SerialPortError):
    """Read raised, or (during negotiation) produced no usable response."""

    stage = "read from"


class NoResponsiveBaudRate(MktInfoError):
    """Every candidate baud rate was tried and none produced a response."""

    def __init__(self, port: str, attempts: Optional[List["ProbeResult"]] = None):
        self.port = port
        self.attempts = list(attempts or [])
        tried = ", ".join(str(a.baud_rate) for a in self.attempts)
        super().__init__(
            f"could not detect baud rate on {port}"
            + (f" (tried {tried})" if tried else "")
        )


class NoPortsAvailable(MktInfoError):
    """Raised by callers that need a port when discovery came back empty."""

    def __init__(self, strategy: str = ""):
        self.strategy = strategy
        super().__init__(
            "no serial ports detected" + (f" ({strategy} scan)" if strategy else "")
        )


class ReaderBusy(MktInfoError):
    """A read was requested while another one is still in flight."""

    def __init__(self):
        super().__init__("a device read is already in progress")
