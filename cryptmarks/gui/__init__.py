"""
gui — PyQt6 front-end for cryptmarks.

Public API
──────────
MainWindow  — top-level bookmark window
viewmodels  — pure-Python state containers
pages       — the bookmarks page
"""

from cryptmarks.gui.main_window import MainWindow
from cryptmarks.gui import viewmodels

__all__ = ["MainWindow", "viewmodels"]
