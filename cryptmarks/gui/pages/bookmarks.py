"""
BookmarksPage — the single page of the bookmark window.

Layout
──────
  ┌──────────────────────────────────────────────┐
  │ Filter: [___________________________________]│
  │ ┌──────────────────────────────────────────┐ │
  │ │ URL                  │ Description       │ │
  │ │ https://a.com        │                   │ │
  │ │ https://b.com        │ notes             │ │
  │ └──────────────────────────────────────────┘ │
  │ URL: [____________]  Description: [________] │
  │ [Add] [Edit] [Delete] [Copy URL]   [Reload]  │
  │ status line                                  │
  └──────────────────────────────────────────────┘

The page only draws; MainWindow calls the service and feeds results back.
"""

import logging

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cryptmarks.gui.viewmodels import BookmarkListViewModel

__all__ = ["BookmarksPage"]

logger = logging.getLogger(__name__)

# Column indices
_COL_URL         = 0
_COL_DESCRIPTION = 1
_HEADERS = ["URL", "Description"]


class BookmarksPage(QWidget):
    """Browse, filter and edit bookmarks."""

    def __init__(self, parent: QWidget = None) -> None:
        super().__init__(parent)
        self._vm = BookmarkListViewModel()
        self._build_ui()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        filter_row = QHBoxLayout()
        filter_row.addWidget(QLabel("Filter:"))
        self._filter_edit = QLineEdit()
        self._filter_edit.setPlaceholderText("Filter by url or description…")
        self._filter_edit.textChanged.connect(self._on_filter_changed)
        filter_row.addWidget(self._filter_edit)
        layout.addLayout(filter_row)

        self._table = QTableWidget(0, len(_HEADERS))
        self._table.setHorizontalHeaderLabels(_HEADERS)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.horizontalHeader().setStretchLastSection(True)
        self._table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self._table)

        input_row = QHBoxLayout()
        input_row.addWidget(QLabel("URL:"))
        self._url_edit = QLineEdit()
        self._url_edit.setPlaceholderText("https://…")
        input_row.addWidget(self._url_edit)
        input_row.addWidget(QLabel("Description:"))
        self._desc_edit = QLineEdit()
        input_row.addWidget(self._desc_edit)
        layout.addLayout(input_row)

        btn_row = QHBoxLayout()
        self._add_btn    = QPushButton("Add")
        self._edit_btn   = QPushButton("Edit")
        self._delete_btn = QPushButton("Delete")
        self._copy_btn   = QPushButton("Copy URL")
        self._reload_btn = QPushButton("Reload")
        for btn in (self._add_btn, self._edit_btn, self._delete_btn, self._copy_btn):
            btn_row.addWidget(btn)
        btn_row.addStretch()
        btn_row.addWidget(self._reload_btn)
        layout.addLayout(btn_row)

        self._status_label = QLabel("")
        layout.addWidget(self._status_label)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_filter_changed(self, text: str) -> None:
        self._vm.filter_text = text
        self._refresh_table()

    def _on_selection_changed(self) -> None:
        rows = {index.row() for index in self._table.selectedIndexes()}
        visible = self._vm.visible_bookmarks
        bookmark = visible[rows.pop()] if len(rows) == 1 else None
        self._vm.select(bookmark)
        if bookmark is not None:
            self._url_edit.setText(bookmark.url)
            self._desc_edit.setText(bookmark.description or "")

    def _refresh_table(self) -> None:
        bookmarks = self._vm.visible_bookmarks
        self._table.setRowCount(len(bookmarks))
        for row, bm in enumerate(bookmarks):
            self._table.setItem(row, _COL_URL,         QTableWidgetItem(bm.url))
            self._table.setItem(row, _COL_DESCRIPTION, QTableWidgetItem(bm.description or ""))

    # ── Public API ─────────────────────────────────────────────────────────

    def load_bookmarks(self, bookmarks) -> None:
        """Populate the table with *bookmarks* (list[Bookmark])."""
        self._vm.load(bookmarks)
        self._refresh_table()

    def show_outcome(self, outcome) -> None:
        """Display an Outcome's message on the status line."""
        self._vm.apply(outcome)
        self._status_label.setText(self._vm.status)

    def url_text(self) -> str:
        return self._url_edit.text().strip()

    def description_text(self) -> str:
        return self._desc_edit.text()

    def clear_inputs(self) -> None:
        self._url_edit.clear()
        self._desc_edit.clear()
