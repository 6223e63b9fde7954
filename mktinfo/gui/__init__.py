"""
PyQt6 window for the MKT Device Info Reader

Requires the ``gui`` extra (PyQt6).
"""
