"""
Serial port discovery
=====================

Finds candidate port identifiers on the host. The negotiator and query
never care how a port name was found, so discovery is a pluggable
strategy:

- :class:`ProbeEnumerator` opens every conventional port name in a
  bounded range and keeps the ones that open. A port held by another
  process fails to open and is left out; that is accepted behaviour.
- :class:`StaticEnumerator` returns a fixed platform list without touching
  hardware. Fast, but may list ports that do not exist.
- :class:`SystemEnumerator` asks the OS through pyserial's
  ``list_ports`` (device tree on Linux, registry on Windows, IOKit on macOS).

An empty result is a normal outcome, never an error.

Usage
-----
>>> from mktinfo.ports import make_enumerator
>>> enumerator = make_enumerator("static", platform="win32")
>>> enumerator.discover_ports()
['COM1', 'COM2', 'COM3', 'COM4']
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type

import serial.tools.list_ports

from .commands import DEFAULT_PROBE_BAUD
from .data_types import SerialConfig
from .errors import PortOpenError
from .transport import PortOpener, open_port, open_serial, release

logger = logging.getLogger(__name__)

# Highest COMn number Windows hands out
MAX_COM_PORT = 256

# How many /dev/ttyXXXn entries to try per template
MAX_TTY_INDEX = 32


def _platform_key(platform: Optional[str] = None) -> str:
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "win"
    if platform.startswith("darwin"):
        return "darwin"
    return "linux"


def probe_templates(platform: Optional[str] = None) -> List[Tuple[str, range]]:
    """Conventional ``(name template, index range)`` pairs for a platform."""
    key = _platform_key(platform)
    if key == "win":
        return [("COM{}", range(1, MAX_COM_PORT + 1))]
    if key == "darwin":
        return [
            ("/dev/tty.usbserial-{}", range(0, MAX_TTY_INDEX)),
            ("/dev/tty.usbmodem{}", range(0, MAX_TTY_INDEX)),
        ]
    return [
        ("/dev/ttyUSB{}", range(0, MAX_TTY_INDEX)),
        ("/dev/ttyACM{}", range(0, MAX_TTY_INDEX)),
        ("/dev/ttyS{}", range(0, MAX_TTY_INDEX)),
    ]


def static_candidates(platform: Optional[str] = None) -> List[str]:
    """Fixed candidate list shown when hardware is not scanned."""
    key = _platform_key(platform)
    if key == "win":
        return [f"COM{i}" for i in range(1, 5)]
    if key == "darwin":
        return ["/dev/tty.usbserial", "/dev/tty.usbmodem"]
    return [f"/dev/ttyUSB{i}" for i in range(4)] + [f"/dev/ttyACM{i}" for i in range(2)]


class PortEnumerator(ABC):
    """
    Strategy interface for port discovery.

    Subclasses implement :meth:`list_candidates`; :meth:`discover_ports`
    is what callers use.
    """

    name = "base"

    @abstractmethod
    def list_candidates(self) -> Sequence[str]:
        """
        Return the port identifiers this strategy considers present.

        Returns
        -------
        sequence of str
            Possibly empty; order is preserved by :meth:`discover_ports`
        """

    def discover_ports(self) -> List[str]:
        """Ordered, de-duplicated port identifiers (possibly empty)."""
        seen = set()
        ports = []
        for port in self.list_candidates():
            if port not in seen:
                seen.add(port)
                ports.append(port)
        logger.debug("%s scan found %d port(s): %s", self.name, len(ports), ports)
        return ports


class StaticEnumerator(PortEnumerator):
    """Fixed list, no hardware access."""

    name = "static"

    def __init__(self, ports: Optional[Iterable[str]] = None, platform: Optional[str] = None):
        self.ports = list(ports) if ports is not None else static_candidates(platform)

    def list_candidates(self) -> List[str]:
        return list(self.ports)


class ProbeEnumerator(PortEnumerator):
    """
    Keep every conventional port name that opens at ``baud_rate``.

    Each opened handle is closed straight after the check.
    """

    name = "probe"

    def __init__(
        self,
        templates: Optional[Sequence[Tuple[str, Iterable[int]]]] = None,
        baud_rate: int = DEFAULT_PROBE_BAUD,
        timeout: float = 0.0,
        opener: PortOpener = open_serial,
        platform: Optional[str] = None,
    ):
        self.templates = list(templates) if templates is not None else probe_templates(platform)
        self.baud_rate = baud_rate
        self.timeout = timeout
        self.opener = opener

    def names(self) -> List[str]:
        """Every port name the scan will try, in order."""
        return [template.format(index) for template, indices in self.templates for index in indices]

    def is_available(self, port: str) -> bool:
        config = SerialConfig(port, self.baud_rate, read_timeout=self.timeout)
        try:
            handle = open_port(config, self.opener)
        except PortOpenError:
            return False
        release(handle, config)
        return True

    def list_candidates(self) -> List[str]:
        return [port for port in self.names() if self.is_available(port)]


class SystemEnumerator(PortEnumerator):
    """Ports the operating system reports, via pyserial."""

    name = "system"

    def __init__(self, include_links: bool = False):
        self.include_links = include_links

    def describe_ports(self) -> List[Tuple[str, str]]:
        """
        Enumerate ports with a human readable description.

        Returns:
            Sorted list of (port_name, description) tuples
            Example: [("/dev/ttyUSB0", "CP2102 USB to UART Bridge"), ...]
        """
        ports = [
            (info.device, info.description)
            for info in serial.tools.list_ports.comports(include_links=self.include_links)
        ]
        ports.sort(key=lambda item: item[0])
        return ports

    def list_candidates(self) -> List[str]:
        return [device for device, _ in self.describe_ports()]


ENUMERATORS: Dict[str, Type[PortEnumerator]] = {
    StaticEnumerator.name: StaticEnumerator,
    ProbeEnumerator.name: ProbeEnumerator,
    SystemEnumerator.name: SystemEnumerator,
}


def make_enumerator(strategy: str = "system", **kwargs) -> PortEnumerator:
    """
    Build the enumerator named ``strategy``.

    Extra keyword arguments go to the strategy's constructor.

    Raises:
        ValueError: Unknown strategy name
    """
    try:
        cls = ENUMERATORS[strategy]
    except KeyError:
        raise ValueError(
            f"unknown port enumeration strategy {strategy!r} "
            f"(expected one of {', '.join(sorted(ENUMERATORS))})"
        ) from None
    return cls(**kwargs)


def discover_ports(enumerator: Optional[PortEnumerator] = None) -> List[str]:
    """Discover ports with ``enumerator`` (default: ask the OS)."""
    if enumerator is None:
        enumerator = SystemEnumerator()
    return enumerator.discover_ports()
