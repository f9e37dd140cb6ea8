"""Word list panel - table view of a wordbook's words with edit actions."""

from typing import Any, Dict, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from wordbook_manager.core import Word
from wordbook_manager.ui.word_form_dialog import WordFormDialog

COLUMNS = [
    "★",
    "Word",
    "Pinyin",
    "Translation",
    "Part of speech",
    "Example",
    "Example translation",
    "Mastery",
    "Note",
    "Created",
]
WORD_COLUMN = 1


def _or_dash(text: str) -> str:
    return text or "-"


class WordListPanel(QWidget):
    """Shows words in a table and turns user actions into signals.

    The panel never changes data itself: the coordinator performs the
    operation and calls ``display_words`` with the refreshed list.

    Signals:
        word_create_requested: Form values for a new word.
        word_update_requested: Word id and form values.
        word_delete_requested: Word id, after confirmation.
        progress_reset_requested: Selected word ids, after confirmation.
        words_delete_requested: Selected word ids, after confirmation.
    """

    word_create_requested = Signal(dict)
    word_update_requested = Signal(str, dict)
    word_delete_requested = Signal(str)
    progress_reset_requested = Signal(list)
    words_delete_requested = Signal(list)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._words: List[Word] = []
        self._tag_labels: Dict[str, str] = {}
        self._busy = False
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        toolbar = QHBoxLayout()
        self.add_button = QPushButton("Add Word")
        self.edit_button = QPushButton("Edit")
        self.delete_button = QPushButton("Delete")
        self.reset_button = QPushButton("Reset Progress")
        self.bulk_delete_button = QPushButton("Delete Selected")
        for button in (
            self.add_button,
            self.edit_button,
            self.delete_button,
            self.reset_button,
            self.bulk_delete_button,
        ):
            toolbar.addWidget(button)
        toolbar.addStretch()
        layout.addLayout(toolbar)

        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setStyleSheet("QLabel { color: #888; padding: 20px; }")
        layout.addWidget(self.status_label)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.ExtendedSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Interactive)
        self.table.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table)

        self.add_button.clicked.connect(self._on_add_clicked)
        self.edit_button.clicked.connect(self._on_edit_clicked)
        self.delete_button.clicked.connect(self._on_delete_clicked)
        self.reset_button.clicked.connect(self._on_reset_clicked)
        self.bulk_delete_button.clicked.connect(self._on_bulk_delete_clicked)
        self.table.itemSelectionChanged.connect(self._update_actions)
        self.table.cellDoubleClicked.connect(lambda row, _col: self._open_edit_dialog(row))

        self._update_actions()

    # -------- State --------

    def show_loading(self):
        self.table.hide()
        self.status_label.setText("Loading...")
        self.status_label.show()

    def show_error(self, message: str):
        self.table.hide()
        self.status_label.setText(message)
        self.status_label.setStyleSheet("QLabel { color: #d33; padding: 20px; }")
        self.status_label.show()

    def set_busy(self, busy: bool):
        """Disable actions while an operation is in flight."""
        self._busy = busy
        self._update_actions()

    @property
    def busy(self) -> bool:
        return self._busy

    def display_words(self, words: List[Word], tag_labels: Optional[Dict[str, str]] = None):
        """Show the given words in the order given.

        Args:
            words: Words to display.
            tag_labels: Tag id -> display name; unknown ids are shown as-is.
        """
        self._words = list(words)
        self._tag_labels = dict(tag_labels or {})
        self.status_label.setStyleSheet("QLabel { color: #888; padding: 20px; }")

        self.table.setRowCount(0)
        if not self._words:
            self.table.hide()
            self.status_label.setText("No words yet")
            self.status_label.show()
            self._update_actions()
            return

        self.status_label.hide()
        self.table.show()
        self.table.setRowCount(len(self._words))
        for row, word in enumerate(self._words):
            self._fill_row(row, word)
        self.table.resizeColumnsToContents()
        self._update_actions()

    def _fill_row(self, row: int, word: Word):
        created = word.created_at.strftime("%Y-%m-%d") if word.created_at else "-"
        tags = ", ".join(self._tag_labels.get(t, t) for t in word.part_of_speech)
        values = [
            "★" if word.favorite else "",
            word.word,
            _or_dash(word.pinyin),
            _or_dash(word.translation),
            _or_dash(tags),
            _or_dash(word.example_sentence),
            _or_dash(word.example_translation),
            str(word.mastery),
            _or_dash(word.note),
            created,
        ]
        for col, text in enumerate(values):
            item = QTableWidgetItem(text)
            if col == WORD_COLUMN:
                item.setData(Qt.UserRole, word.id)
            self.table.setItem(row, col, item)

    def selected_word_ids(self) -> List[str]:
        rows = sorted({index.row() for index in self.table.selectionModel().selectedRows()})
        return [self._words[row].id for row in rows if row < len(self._words)]

    def _update_actions(self):
        selected = len(self.selected_word_ids()) if self._words else 0
        self.add_button.setEnabled(not self._busy)
        self.edit_button.setEnabled(not self._busy and selected == 1)
        self.delete_button.setEnabled(not self._busy and selected == 1)
        self.reset_button.setEnabled(not self._busy and selected > 0)
        self.bulk_delete_button.setEnabled(not self._busy and selected > 0)

    # -------- Dialogs --------

    def _word_values(self, word: Word) -> Dict[str, Any]:
        return {
            "word": word.word,
            "pinyin": word.pinyin,
            "translation": word.translation,
            "part_of_speech": [self._tag_labels.get(t, t) for t in word.part_of_speech],
            "example_sentence": word.example_sentence,
            "example_translation": word.example_translation,
            "note": word.note,
            "mastery": word.mastery,
            "favorite": word.favorite,
        }

    def _on_add_clicked(self):
        dialog = WordFormDialog("New Word", parent=self)
        if dialog.exec() == QDialog.Accepted:
            self.word_create_requested.emit(dialog.form_values())

    def _on_edit_clicked(self):
        rows = self.table.selectionModel().selectedRows()
        if len(rows) == 1:
            self._open_edit_dialog(rows[0].row())

    def _open_edit_dialog(self, row: int):
        if self._busy or row >= len(self._words):
            return
        word = self._words[row]
        dialog = WordFormDialog("Edit Word", initial=self._word_values(word), parent=self)
        if dialog.exec() == QDialog.Accepted:
            self.word_update_requested.emit(word.id, dialog.form_values())

    def _confirm(self, title: str, text: str) -> bool:
        reply = QMessageBox.question(
            self, title, text, QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        return reply == QMessageBox.Yes

    def _on_delete_clicked(self):
        ids = self.selected_word_ids()
        if len(ids) != 1:
            return
        word = next(w for w in self._words if w.id == ids[0])
        if self._confirm("Delete Word", f"Delete '{word.word}'?"):
            self.word_delete_requested.emit(word.id)

    def _on_reset_clicked(self):
        ids = self.selected_word_ids()
        if ids and self._confirm("Reset Progress", f"Reset study progress of {len(ids)} word(s)?"):
            self.progress_reset_requested.emit(ids)

    def _on_bulk_delete_clicked(self):
        ids = self.selected_word_ids()
        if ids and self._confirm("Delete Words", f"Delete {len(ids)} word(s)?"):
            self.words_delete_requested.emit(ids)
