"""
Tests for port discovery strategies.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from mktinfo.ports import (
    ProbeEnumerator,
    StaticEnumerator,
    SystemEnumerator,
    discover_ports,
    make_enumerator,
    probe_templates,
    static_candidates,
)

from .conftest import FakeDevice


# =============================================================================
# HELPERS
# =============================================================================

def fake_comports(*devices):
    return [SimpleNamespace(device=d, description=f"USB Serial ({d})") for d in devices]


# =============================================================================
# STATIC STRATEGY
# =============================================================================

class TestStaticEnumerator:

    def test_windows_list(self):
        assert StaticEnumerator(platform="win32").discover_ports() == ["COM1", "COM2", "COM3", "COM4"]

    def test_linux_list(self):
        ports = static_candidates("linux")
        assert "/dev/ttyUSB0" in ports
        assert "/dev/ttyACM0" in ports

    def test_explicit_list_and_dedup(self):
        enumerator = StaticEnumerator(["COM5", "COM1", "COM5"])
        assert enumerator.discover_ports() == ["COM5", "COM1"]

    def test_empty_is_valid(self):
        assert StaticEnumerator([]).discover_ports() == []


# =============================================================================
# PROBE STRATEGY
# =============================================================================

class TestProbeEnumerator:

    def test_windows_templates_cover_com1_to_com256(self):
        enumerator = ProbeEnumerator(platform="win32", opener=FakeDevice(ports=[]))
        names = enumerator.names()
        assert names[0] == "COM1"
        assert names[-1] == "COM256"
        assert len(names) == 256

    def test_keeps_ports_that_open(self):
        device = FakeDevice(ports=["COM3", "COM7"])
        enumerator = ProbeEnumerator(platform="win32", opener=device)
        assert enumerator.discover_ports() == ["COM3", "COM7"]

    def test_opens_at_default_baud(self):
        device = FakeDevice(ports=["COM1"])
        ProbeEnumerator(templates=[("COM{}", range(1, 3))], opener=device).discover_ports()
        assert set(device.attempted_bauds) == {9600}

    def test_every_opened_port_is_closed(self):
        device = FakeDevice(ports=["/dev/ttyUSB0", "/dev/ttyACM1"])
        ProbeEnumerator(platform="linux", opener=device).discover_ports()
        assert device.open_count == 2
        assert device.close_count == device.open_count

    def test_nothing_written(self):
        device = FakeDevice(ports=["COM2"])
        ProbeEnumerator(platform="win32", opener=device).discover_ports()
        assert device.written == []

    def test_no_ports(self):
        device = FakeDevice(ports=[])
        assert ProbeEnumerator(platform="win32", opener=device).discover_ports() == []

    def test_idempotent(self):
        device = FakeDevice(ports=["COM4", "COM9"])
        enumerator = ProbeEnumerator(platform="win32", opener=device)
        assert enumerator.discover_ports() == enumerator.discover_ports()

    def test_linux_templates(self):
        templates = [template for template, _ in probe_templates("linux")]
        assert "/dev/ttyUSB{}" in templates
        assert "/dev/ttyACM{}" in templates


# =============================================================================
# SYSTEM STRATEGY
# =============================================================================

class TestSystemEnumerator:

    def test_sorted_devices(self):
        with patch("serial.tools.list_ports.comports",
                   return_value=fake_comports("/dev/ttyUSB1", "/dev/ttyACM0")):
            assert SystemEnumerator().discover_ports() == ["/dev/ttyACM0", "/dev/ttyUSB1"]

    def test_describe_ports(self):
        with patch("serial.tools.list_ports.comports", return_value=fake_comports("COM3")):
            assert SystemEnumerator().describe_ports() == [("COM3", "USB Serial (COM3)")]

    def test_idempotent(self):
        with patch("serial.tools.list_ports.comports",
                   return_value=fake_comports("COM3", "COM1")):
            enumerator = SystemEnumerator()
            assert enumerator.discover_ports() == enumerator.discover_ports() == ["COM1", "COM3"]

    def test_default_discover(self):
        with patch("serial.tools.list_ports.comports", return_value=[]):
            assert discover_ports() == []


# =============================================================================
# STRATEGY SELECTION
# =============================================================================

class TestMakeEnumerator:

    @pytest.mark.parametrize("name, cls", [
        ("static", StaticEnumerator),
        ("probe", ProbeEnumerator),
        ("system", SystemEnumerator),
    ])
    def test_known_strategies(self, name, cls):
        assert isinstance(make_enumerator(name), cls)

    def test_kwargs_forwarded(self):
        enumerator = make_enumerator("static", ports=["COM9"])
        assert enumerator.discover_ports() == ["COM9"]

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="unknown port enumeration strategy"):
            make_enumerator("registry")
