"""
Tests for the PyQt6 window (skipped when PyQt6 is not installed).

Runs on Qt's offscreen platform, no display needed.
"""

import os
from unittest.mock import Mock

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from mktinfo.gui.main_window import MainWindow  # noqa: E402
from mktinfo.ports import StaticEnumerator  # noqa: E402
from mktinfo.reader import DeviceInfoReader  # noqa: E402


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    reader = DeviceInfoReader(StaticEnumerator(["COM1", "COM3"]))
    reader.refresh_ports = Mock(wraps=reader.refresh_ports)
    win = MainWindow(reader=reader)
    yield win
    win.close()


# =============================================================================
# PORT LIST
# =============================================================================

class TestPortList:

    def test_populated_on_first_show(self, window):
        window.show()
        assert window.reader.refresh_ports.call_count == 1
        assert [window.combo_port.itemText(i) for i in range(window.combo_port.count())] == [
            "COM1", "COM3",
        ]
        assert window.button_read.isEnabled()

    def test_reshow_keeps_list_and_selection(self, window):
        window.show()
        window.combo_port.setCurrentIndex(1)
        window.hide()
        window.show()
        assert window.reader.refresh_ports.call_count == 1
        assert window.combo_port.currentText() == "COM3"

    def test_no_ports_disables_read(self, qapp):
        win = MainWindow(reader=DeviceInfoReader(StaticEnumerator([])))
        win.show()
        try:
            assert not win.button_read.isEnabled()
            assert win.label_info.text() == "No COM ports detected"
        finally:
            win.close()
