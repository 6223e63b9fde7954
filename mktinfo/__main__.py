"""
MKT Device Info Reader entry point

Launches the PyQt6 window
"""

import sys


def main():
    """Main entry point for the windowed application"""
    from PyQt6.QtWidgets import QApplication
    from mktinfo.gui.main_window import MainWindow

    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
