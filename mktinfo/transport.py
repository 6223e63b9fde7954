"""
Serial transport
================

The only place that touches a port handle. Every attempt goes through
:func:`exchange`, which opens the port, writes one command, performs one
bounded read and closes the port again on every exit path::

    Closed -> Opening -> Opened -> Writing -> Written -> Reading
           -> {Succeeded | TimedOut | Errored} -> Closed

There is no retry state. A retry is a fresh call with new parameters.

Anything that can be called as ``opener(config)`` and returns an object
with ``write``/``read``/``close`` can stand in for pyserial, which is how
the tests drive this module without hardware.
"""

import logging
from typing import Callable, Optional, Protocol

import serial

from .commands import READ_BUFFER_SIZE
from .data_types import SerialConfig
from .errors import PortOpenError, PortReadError, PortWriteError

logger = logging.getLogger(__name__)

# Errors a transport may raise on open/write/read
TRANSPORT_ERRORS = (serial.SerialException, OSError, ValueError)


class PortHandle(Protocol):
    """Capability set the core needs from an open port."""

    def write(self, data: bytes) -> Optional[int]: ...

    def read(self, size: int = 1) -> bytes: ...

    def close(self) -> None: ...


PortOpener = Callable[[SerialConfig], PortHandle]


def open_serial(config: SerialConfig) -> serial.Serial:
    """
    Open a pyserial port for ``config``.

    8N1, no software or hardware flow control.

    Raises:
        serial.SerialException: If the port cannot be opened
        ValueError: If pyserial rejects the settings
    """
    return serial.Serial(
        port=config.port,
        baudrate=config.baud_rate,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        timeout=config.read_timeout,
        write_timeout=config.write_timeout,
        xonxoff=False,
        rtscts=False,
        dsrdtr=False,
    )


def open_port(config: SerialConfig, opener: PortOpener = open_serial) -> PortHandle:
    """
    Open a port, translating transport errors into :class:`PortOpenError`.

    The caller owns the returned handle and must close it.
    """
    try:
        return opener(config)
    except TRANSPORT_ERRORS as exc:
        raise PortOpenError(config, str(exc)) from exc


def release(handle: PortHandle, config: SerialConfig) -> None:
    """Close ``handle``. A failing close never masks the attempt's outcome."""
    try:
        handle.close()
    except TRANSPORT_ERRORS as exc:
        logger.debug("closing %s failed: %s", config.port, exc)


def exchange(
    config: SerialConfig,
    command: bytes,
    size: int = READ_BUFFER_SIZE,
    opener: PortOpener = open_serial,
) -> bytes:
    """
    Run one open/write/read/close cycle.

    Args:
        config: Port settings for this attempt
        command: Bytes written verbatim
        size: Maximum bytes to read
        opener: Factory for the port handle

    Returns:
        The bytes actually read. Empty when nothing arrived before the
        read timeout (pyserial reports a timeout as a short read).

    Raises:
        PortOpenError: The port could not be opened
        PortWriteError: The write raised or was short
        PortReadError: The read raised
    """
    handle = open_port(config, opener)
    try:
        try:
            written = handle.write(command)
        except TRANSPORT_ERRORS as exc:
            raise PortWriteError(config, str(exc)) from exc
        if written is not None and written < len(command):
            raise PortWriteError(config, f"short write ({written}/{len(command)} bytes)")

        try:
            data = handle.read(size)
        except TRANSPORT_ERRORS as exc:
            raise PortReadError(config, str(exc)) from exc
        return bytes(data or b"")
    finally:
        release(handle, config)
