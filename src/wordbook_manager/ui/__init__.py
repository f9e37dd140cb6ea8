"""UI layer - PySide6 presentation components."""

from .main_window import MainWindow
from .word_form_dialog import WordFormDialog
from .word_list_panel import WordListPanel

__all__ = ["MainWindow", "WordFormDialog", "WordListPanel"]
