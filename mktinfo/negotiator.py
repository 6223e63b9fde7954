"""
Baud rate negotiation
=====================

Finds the line speed of a device by trial and error: for each candidate
rate, open the port, send a probe command and wait for a bounded read.
The first rate that yields a usable response wins.

Candidates are tried in a fixed order, lowest and most common first.
Each attempt is a complete open/write/read/close cycle; nothing is
retried at the same rate.

Empty reads
-----------
pyserial reports a read timeout as an empty read. By default an empty
read is therefore a failed candidate; pass ``accept_empty=True`` to count
any read that did not raise as a success.

Example
-------
>>> from mktinfo.negotiator import detect_baud_rate
>>> detect_baud_rate("/dev/ttyUSB0")
115200
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .commands import (
    DEFAULT_TIMEOUT,
    PROBE_COMMAND,
    READ_BUFFER_SIZE,
    ResponseVerifier,
    accept_any,
)
from .data_types import BAUD_RATE_CANDIDATES, ProbeResult, ProbeStatus, SerialConfig
from .errors import NoResponsiveBaudRate, PortOpenError, PortReadError, PortWriteError
from .transport import PortOpener, exchange, open_serial

logger = logging.getLogger(__name__)


def probe_baud_rate(
    port: str,
    baud_rate: int,
    command: bytes = PROBE_COMMAND,
    timeout: float = DEFAULT_TIMEOUT,
    opener: PortOpener = open_serial,
    buffer_size: int = READ_BUFFER_SIZE,
    accept_empty: bool = False,
    verify: ResponseVerifier = accept_any,
) -> ProbeResult:
    """
    Probe ``port`` once at ``baud_rate``.

    Transport failures are folded into the returned :class:`ProbeResult`
    instead of being raised.
    """
    config = SerialConfig(port, baud_rate, read_timeout=timeout)
    try:
        response = exchange(config, command, buffer_size, opener)
    except PortOpenError as exc:
        return ProbeResult(baud_rate, ProbeStatus.OPEN_FAILED, reason=exc.reason)
    except PortWriteError as exc:
        return ProbeResult(baud_rate, ProbeStatus.WRITE_FAILED, reason=exc.reason)
    except PortReadError as exc:
        return ProbeResult(baud_rate, ProbeStatus.READ_FAILED, reason=exc.reason)

    if not response:
        if accept_empty:
            return ProbeResult(baud_rate, ProbeStatus.SUCCESS, response)
        return ProbeResult(baud_rate, ProbeStatus.READ_FAILED, reason="no response before timeout")
    if not verify(response):
        return ProbeResult(baud_rate, ProbeStatus.READ_FAILED, response, reason="response rejected")
    return ProbeResult(baud_rate, ProbeStatus.SUCCESS, response)


def negotiate(
    port: str,
    *,
    candidates: Sequence[int] = BAUD_RATE_CANDIDATES,
    command: bytes = PROBE_COMMAND,
    timeout: float = DEFAULT_TIMEOUT,
    opener: PortOpener = open_serial,
    buffer_size: int = READ_BUFFER_SIZE,
    accept_empty: bool = False,
    verify: ResponseVerifier = accept_any,
) -> Tuple[Optional[int], List[ProbeResult]]:
    """
    Try ``candidates`` in order and stop at the first success.

    Returns:
        (winning baud rate or None, every ProbeResult in the order tried)

    Raises:
        ValueError: Empty candidate list or a non-positive rate
    """
    candidates = list(candidates)
    if not candidates:
        raise ValueError("no candidate baud rates given")
    for baud_rate in candidates:
        if baud_rate <= 0:
            raise ValueError(f"baud rate must be positive, got {baud_rate}")

    attempts = []
    for baud_rate in candidates:
        result = probe_baud_rate(
            port, baud_rate, command, timeout, opener, buffer_size, accept_empty, verify,
        )
        attempts.append(result)
        logger.debug("probe %s @ %s", port, result)
        if result.ok:
            return baud_rate, attempts
    return None, attempts


def detect_baud_rate(
    port: str,
    *,
    candidates: Sequence[int] = BAUD_RATE_CANDIDATES,
    command: bytes = PROBE_COMMAND,
    timeout: float = DEFAULT_TIMEOUT,
    opener: PortOpener = open_serial,
    buffer_size: int = READ_BUFFER_SIZE,
    accept_empty: bool = False,
    verify: ResponseVerifier = accept_any,
) -> int:
    """
    Detect the baud rate ``port`` answers at.

    Args:
        port: Port identifier
        candidates: Rates to try, in order
        command: Probe bytes, CR terminated
        timeout: Read timeout per candidate (seconds)
        opener: Port handle factory
        buffer_size: Bytes requested per read
        accept_empty: Count a zero-byte read as a response
        verify: Policy a non-empty response must satisfy

    Returns:
        The first responsive rate

    Raises:
        NoResponsiveBaudRate: Every candidate failed
    """
    baud_rate, attempts = negotiate(
        port,
        candidates=candidates,
        command=command,
        timeout=timeout,
        opener=opener,
        buffer_size=buffer_size,
        accept_empty=accept_empty,
        verify=verify,
    )
    if baud_rate is None:
        raise NoResponsiveBaudRate(port, attempts)
    return baud_rate
