"""
Main window for the MKT Device Info Reader

Port dropdown, baud dropdown, "Read Info" button and a result label.
All serial work is delegated to DeviceInfoReader.
"""

from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QComboBox, QHBoxLayout, QLabel, QMainWindow,
    QPushButton, QVBoxLayout, QWidget,
)
from PyQt6.QtCore import Qt

from ..data_types import BAUD_RATE_CANDIDATES
from ..reader import DeviceInfoReader
from ..tools import log_exceptions


class MainWindow(QMainWindow):
    """
    Main application window
    """

    AUTO_BAUD = "Auto"
    PORT_PLACEHOLDER = "Select COM port"

    def __init__(self, reader: Optional[DeviceInfoReader] = None):
        """Initialize main window"""
        super().__init__()

        self.setWindowTitle("MKT Device Info Reader")
        self.resize(400, 300)

        self.reader = reader or DeviceInfoReader()
        self._ports_loaded = False

        self._build_ui()

    def _build_ui(self):
        """Build the user interface"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        layout.addWidget(QLabel("MediaTek (MKT) Device Info Tool"))
        layout.addWidget(QLabel("Detected COM Ports:"))

        # Port selection
        self.combo_port = QComboBox()
        self.combo_port.setPlaceholderText(self.PORT_PLACEHOLDER)
        layout.addWidget(self.combo_port)

        # Baud rate selection; Auto runs negotiation
        baud_layout = QHBoxLayout()
        baud_layout.addWidget(QLabel("Baud Rate"))
        self.combo_baud = QComboBox()
        self.combo_baud.addItem(self.AUTO_BAUD)
        for baud in BAUD_RATE_CANDIDATES:
            self.combo_baud.addItem(str(baud))
        baud_layout.addWidget(self.combo_baud)
        layout.addLayout(baud_layout)

        self.button_read = QPushButton("Read Info")
        self.button_read.clicked.connect(self._on_read_clicked)
        layout.addWidget(self.button_read)

        self.label_info = QLabel("Device Info will be displayed here")
        self.label_info.setWordWrap(True)
        self.label_info.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self.label_info)

        layout.addStretch()

    def showEvent(self, event):
        """Handle window show event"""
        super().showEvent(event)
        # Discovery runs once; restoring the window keeps the selection
        if not self._ports_loaded:
            self._ports_loaded = True
            self._refresh_ports()

    @log_exceptions
    def _refresh_ports(self):
        """Populate the port list once"""
        self.combo_port.clear()
        ports = self.reader.refresh_ports()
        self.combo_port.addItems(ports)
        self.combo_port.setCurrentIndex(-1)
        # Nothing to read from
        self.button_read.setEnabled(bool(ports))
        if not ports:
            self.label_info.setText("No COM ports detected")

    def _selected_baud(self) -> Optional[int]:
        text = self.combo_baud.currentText()
        if text == self.AUTO_BAUD:
            return None
        return int(text)

    @log_exceptions
    def _on_read_clicked(self):
        """Handle Read Info button click"""
        port = self.combo_port.currentText()
        baud = self._selected_baud()

        self.button_read.setEnabled(False)
        self.label_info.setText(
            f"Detecting baud rate on {port}..." if baud is None else f"Reading {port}..."
        )
        QApplication.processEvents()
        try:
            reading = self.reader.read_info(port, baud)
        finally:
            self.button_read.setEnabled(True)
        self.label_info.setText(reading.message())
