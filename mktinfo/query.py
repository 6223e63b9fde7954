"""
Device information query
========================

Sends one command to a device at a known baud rate and returns whatever
came back within the timeout, decoded as text. The response is not
parsed, framed or validated.
"""

import logging
from typing import Optional, Union

from .commands import (
    DEFAULT_TIMEOUT,
    DEVICE_INFO_COMMAND,
    READ_BUFFER_SIZE,
    decode_response,
    encode_command,
)
from .data_types import DeviceInfoReading, ProbeSettings, SerialConfig
from .errors import MktInfoError
from .negotiator import detect_baud_rate
from .transport import PortOpener, exchange, open_serial

logger = logging.getLogger(__name__)


def query_device_info(
    port: str,
    baud_rate: int,
    command: Union[str, bytes] = DEVICE_INFO_COMMAND,
    timeout: float = DEFAULT_TIMEOUT,
    opener: PortOpener = open_serial,
    buffer_size: int = READ_BUFFER_SIZE,
) -> str:
    """
    Send ``command`` and return the response text.

    Text commands are CR terminated; bytes are written verbatim. A read
    that returns nothing before the timeout yields ``""``.

    Raises:
        PortOpenError, PortWriteError, PortReadError
    """
    config = SerialConfig(port, baud_rate, read_timeout=timeout)
    response = exchange(config, encode_command(command), buffer_size, opener)
    logger.debug("query %s @ %d returned %d bytes", port, baud_rate, len(response))
    return decode_response(response)


def read_device_info(
    port: str,
    baud_rate: Optional[int] = None,
    settings: Optional[ProbeSettings] = None,
    opener: PortOpener = open_serial,
) -> DeviceInfoReading:
    """
    Negotiate (unless ``baud_rate`` is given) and query ``port``.

    Device failures end up in ``reading.error``; nothing is raised for them.
    """
    settings = settings or ProbeSettings()
    reading = DeviceInfoReading(port=port, baud_rate=baud_rate)

    if baud_rate is not None and baud_rate <= 0:
        reading.baud_rate = None
        reading.error = ValueError(f"baud rate must be positive, got {baud_rate}")
        return reading

    if baud_rate is None:
        reading.negotiated = True
        try:
            reading.baud_rate = detect_baud_rate(
                port,
                candidates=settings.candidates,
                command=settings.probe_command,
                timeout=settings.timeout,
                opener=opener,
                buffer_size=settings.buffer_size,
                accept_empty=settings.accept_empty,
                verify=settings.verify,
            )
        except MktInfoError as exc:
            reading.error = exc
            return reading

    try:
        reading.text = query_device_info(
            port,
            reading.baud_rate,
            settings.info_command,
            settings.timeout,
            opener,
            settings.buffer_size,
        )
    except MktInfoError as exc:
        reading.error = exc
    return reading
