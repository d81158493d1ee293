"""
MainWindow — top-level bookmark window.

Hosts a single BookmarksPage and wires its buttons to a BookmarkService.
Every service call runs on the GUI thread and may block while the
encryption provider asks for a key.
"""

import logging

from PyQt6.QtWidgets import QApplication, QMainWindow, QMessageBox, QWidget

from cryptmarks.exceptions import DecryptionFailedError
from cryptmarks.gui.pages.bookmarks import BookmarksPage
from cryptmarks.service import BookmarkService, Outcome

__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Root window: owns the page and forwards user actions to the service."""

    def __init__(self, service: BookmarkService, parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("cryptmarks")
        self.resize(720, 480)

        self._service = service
        self._page = BookmarksPage()
        self.setCentralWidget(self._page)

        self._connect_actions()
        self.refresh()

    # ── Wiring ─────────────────────────────────────────────────────────────

    def _connect_actions(self) -> None:
        self._page._add_btn.clicked.connect(self._on_add)
        self._page._edit_btn.clicked.connect(self._on_edit)
        self._page._delete_btn.clicked.connect(self._on_delete)
        self._page._copy_btn.clicked.connect(self._on_copy)
        self._page._reload_btn.clicked.connect(self._on_reload)

    def _run(self, action) -> bool:
        """Call *action* (returns an Outcome), show it, redraw the list; returns outcome.ok."""
        try:
            outcome = action()
        except DecryptionFailedError as exc:
            logger.error("Decryption failed: %s", exc)
            QMessageBox.critical(self, "Cannot decrypt bookmarks", str(exc))
            return False
        self._page.show_outcome(outcome)
        self.refresh()
        return outcome.ok

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_add(self) -> None:
        ok = self._run(lambda: self._service.add_bookmark(
            self._page.url_text(), self._page.description_text()
        ))
        if ok:
            self._page.clear_inputs()

    def _on_edit(self) -> None:
        self._run(lambda: self._service.edit_description(
            self._page.url_text(), self._page.description_text()
        ))

    def _on_delete(self) -> None:
        if self._run(lambda: self._service.delete_bookmark(self._page.url_text())):
            self._page.clear_inputs()

    def _on_reload(self) -> None:
        self._run(self._service.reload)

    def _on_copy(self) -> None:
        url = self._page.url_text()
        if not url:
            self._page.show_outcome(Outcome(ok=False, message="No bookmark selected"))
            return
        QApplication.clipboard().setText(url)
        self._page.show_outcome(Outcome(ok=True, message=f"Copied {url}"))

    # ── Public API ─────────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Re-read the collection from the service (cache hit after first load)."""
        try:
            outcome = self._service.list_bookmarks()
        except DecryptionFailedError as exc:
            logger.error("Decryption failed: %s", exc)
            QMessageBox.critical(self, "Cannot decrypt bookmarks", str(exc))
            return
        if not outcome.ok:
            self._page.show_outcome(outcome)
        self._page.load_bookmarks(outcome.bookmarks)

    def closeEvent(self, event) -> None:
        outcome = self._service.shutdown()
        if not outcome.ok:
            QMessageBox.warning(self, "Unsaved bookmarks", outcome.message)
        super().closeEvent(event)
