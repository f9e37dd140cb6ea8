"""Main Window - Application shell with wordbook selector and menus."""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from wordbook_manager.core import Wordbook


class MainWindow(QMainWindow):
    """Provides the application shell, wordbook selection and wordbook menus."""

    # Emitted with the id of the wordbook picked in the selector ("" for none)
    wordbook_selected = Signal(str)
    wordbook_create_requested = Signal(str)
    wordbook_rename_requested = Signal(str, str)  # wordbook_id, new name
    wordbook_trash_requested = Signal(str)
    empty_trash_requested = Signal()
    import_requested = Signal(Path)

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Wordbook Manager")
        self.setGeometry(100, 100, 1200, 800)
        self._wordbooks: List[Wordbook] = []

        self._setup_ui()
        self._create_menu_bar()

    def _setup_ui(self):
        """Initialize the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)

        selector_row = QHBoxLayout()
        selector_row.addWidget(QLabel("Wordbook:"))
        self.wordbook_combo = QComboBox()
        self.wordbook_combo.setMinimumWidth(240)
        self.wordbook_combo.currentIndexChanged.connect(self._on_wordbook_index_changed)
        selector_row.addWidget(self.wordbook_combo)
        selector_row.addStretch()
        self.main_layout.addLayout(selector_row)

    def _create_menu_bar(self):
        """Create the application menu bar."""
        menu_bar = self.menuBar()

        # File menu
        file_menu = menu_bar.addMenu("&File")

        import_action = QAction("&Import Words from CSV...", self)
        import_action.setShortcut("Ctrl+I")
        import_action.triggered.connect(self._on_import)
        file_menu.addAction(import_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Wordbook menu
        wordbook_menu = menu_bar.addMenu("&Wordbook")

        new_action = QAction("&New Wordbook...", self)
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self._on_new_wordbook)
        wordbook_menu.addAction(new_action)

        rename_action = QAction("&Rename...", self)
        rename_action.triggered.connect(self._on_rename_wordbook)
        wordbook_menu.addAction(rename_action)

        trash_action = QAction("Move to &Trash", self)
        trash_action.triggered.connect(self._on_trash_wordbook)
        wordbook_menu.addAction(trash_action)

        wordbook_menu.addSeparator()

        empty_trash_action = QAction("&Empty Trash...", self)
        empty_trash_action.triggered.connect(self._on_empty_trash)
        wordbook_menu.addAction(empty_trash_action)

    def set_word_panel(self, panel: QWidget):
        """Place the word list panel below the wordbook selector."""
        self.main_layout.addWidget(panel)

    def set_wordbooks(self, wordbooks: List[Wordbook], select_id: Optional[str] = None):
        """Fill the selector, keeping ``select_id`` (or the current one) selected."""
        keep_id = select_id if select_id is not None else self.current_wordbook_id()
        self._wordbooks = list(wordbooks)

        self.wordbook_combo.blockSignals(True)
        self.wordbook_combo.clear()
        for wordbook in self._wordbooks:
            self.wordbook_combo.addItem(wordbook.name, wordbook.id)
        index = self.wordbook_combo.findData(keep_id) if keep_id else -1
        if index < 0 and self._wordbooks:
            index = 0
        self.wordbook_combo.setCurrentIndex(index)
        self.wordbook_combo.blockSignals(False)

        self.wordbook_selected.emit(self.current_wordbook_id() or "")

    def current_wordbook_id(self) -> Optional[str]:
        return self.wordbook_combo.currentData()

    def current_wordbook_name(self) -> str:
        return self.wordbook_combo.currentText()

    def _on_wordbook_index_changed(self, _index: int):
        self.wordbook_selected.emit(self.current_wordbook_id() or "")

    def _on_import(self):
        if not self.current_wordbook_id():
            self.show_error("No Wordbook", "Create or select a wordbook first.")
            return
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Import Words", str(Path.home()), "CSV files (*.csv)"
        )
        if file_path:
            self.import_requested.emit(Path(file_path))

    def _on_new_wordbook(self):
        name, ok = QInputDialog.getText(self, "New Wordbook", "Name:")
        if ok:
            self.wordbook_create_requested.emit(name)

    def _on_rename_wordbook(self):
        wordbook_id = self.current_wordbook_id()
        if not wordbook_id:
            return
        name, ok = QInputDialog.getText(
            self, "Rename Wordbook", "Name:", QLineEdit.Normal, self.current_wordbook_name()
        )
        if ok:
            self.wordbook_rename_requested.emit(wordbook_id, name)

    def _on_trash_wordbook(self):
        wordbook_id = self.current_wordbook_id()
        if not wordbook_id:
            return
        if self.confirm(
            "Move to Trash", f"Move '{self.current_wordbook_name()}' to the trash?"
        ):
            self.wordbook_trash_requested.emit(wordbook_id)

    def _on_empty_trash(self):
        if self.confirm(
            "Empty Trash",
            "Permanently delete every wordbook in the trash and all of their words?",
        ):
            self.empty_trash_requested.emit()

    def confirm(self, title: str, message: str) -> bool:
        reply = QMessageBox.question(
            self, title, message, QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        return reply == QMessageBox.Yes

    def show_error(self, title: str, message: str):
        """Display an error message to the user."""
        QMessageBox.critical(self, title, message)

    def show_info(self, title: str, message: str):
        """Display an information message to the user."""
        QMessageBox.information(self, title, message)
