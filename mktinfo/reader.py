"""
Device info reader
==================

The object a presentation shell (window or command line) talks to. It
owns no port handle; it only remembers the last discovered port list for
display and serializes "Read Info" requests so two negotiations never
race on the same port.

Example
-------
>>> from mktinfo.reader import DeviceInfoReader
>>> reader = DeviceInfoReader()
>>> ports = reader.refresh_ports()
>>> if ports:
...     print(reader.read_info(ports[0]).message())
"""

import logging
import threading
from typing import List, Optional

from .data_types import DeviceInfoReading, ProbeSettings
from .errors import ReaderBusy
from .ports import PortEnumerator, make_enumerator
from .query import read_device_info
from .tools import log_exceptions
from .transport import PortOpener, open_serial

logger = logging.getLogger(__name__)


class DeviceInfoReader:
    """
    Serialized front end to port discovery, negotiation and query.

    Attributes:
        settings: Probe tunables shared by every read
        enumerator: Port discovery strategy
        ports: Result of the last :meth:`refresh_ports` (display only)
    """

    def __init__(
        self,
        enumerator: Optional[PortEnumerator] = None,
        opener: PortOpener = open_serial,
        settings: Optional[ProbeSettings] = None,
    ):
        self.settings = settings or ProbeSettings()
        self.opener = opener
        if enumerator is None:
            kwargs = {"opener": opener} if self.settings.strategy == "probe" else {}
            enumerator = make_enumerator(self.settings.strategy, **kwargs)
        self.enumerator = enumerator
        self.ports: List[str] = []
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        """True while a read is in flight; the UI keeps its trigger disabled."""
        return self._lock.locked()

    @log_exceptions
    def refresh_ports(self) -> List[str]:
        """Run discovery once and remember the result."""
        self.ports = self.enumerator.discover_ports()
        if not self.ports:
            logger.info("no serial ports detected (%s scan)", self.enumerator.name)
        return list(self.ports)

    def read_info(self, port: Optional[str], baud_rate: Optional[int] = None) -> DeviceInfoReading:
        """
        Read the device info string from ``port``.

        Args:
            port: Selected port, empty/None when nothing is selected
            baud_rate: Explicit rate, or None to negotiate first

        Returns:
            DeviceInfoReading; device failures are carried in ``error``

        Raises:
            ReaderBusy: Another read has not finished yet
        """
        if not port:
            return DeviceInfoReading(port="")

        if not self._lock.acquire(blocking=False):
            raise ReaderBusy()
        try:
            reading = read_device_info(port, baud_rate, self.settings, self.opener)
        finally:
            self._lock.release()

        if reading.ok:
            logger.info("%s @ %s: %r", port, reading.baud_rate, reading.text)
        else:
            logger.warning("%s: %s", port, reading.error)
        return reading
