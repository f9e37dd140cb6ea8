"""Word form dialog - modal form for creating and editing a word."""

from typing import Any, Dict, Optional

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QSpinBox,
    QVBoxLayout,
)


def split_labels(text: str) -> list[str]:
    """Split a comma-separated field into trimmed, non-empty labels."""
    return [part.strip() for part in text.split(",") if part.strip()]


class WordFormDialog(QDialog):
    """Collects the editable fields of a word.

    The Save button stays disabled while the word text is blank.
    """

    def __init__(
        self,
        title: str,
        initial: Optional[Dict[str, Any]] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(420)
        self._setup_ui()
        if initial:
            self.set_values(initial)
        self._update_save_enabled()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.word_edit = QLineEdit()
        self.pinyin_edit = QLineEdit()
        self.translation_edit = QLineEdit()
        self.part_of_speech_edit = QLineEdit()
        self.part_of_speech_edit.setPlaceholderText("comma separated")
        self.example_sentence_edit = QLineEdit()
        self.example_translation_edit = QLineEdit()
        self.note_edit = QLineEdit()
        self.mastery_spin = QSpinBox()
        self.mastery_spin.setRange(0, 100)
        self.favorite_check = QCheckBox("Favorite")

        form.addRow("Word", self.word_edit)
        form.addRow("Pinyin", self.pinyin_edit)
        form.addRow("Translation", self.translation_edit)
        form.addRow("Part of speech", self.part_of_speech_edit)
        form.addRow("Example", self.example_sentence_edit)
        form.addRow("Example translation", self.example_translation_edit)
        form.addRow("Note", self.note_edit)
        form.addRow("Mastery (0-100)", self.mastery_spin)
        form.addRow("", self.favorite_check)
        layout.addLayout(form)

        self.button_box = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

        self.word_edit.textChanged.connect(self._update_save_enabled)
        self.word_edit.setFocus()

    def _update_save_enabled(self):
        save_button = self.button_box.button(QDialogButtonBox.Save)
        save_button.setEnabled(bool(self.word_edit.text().strip()))

    def set_values(self, values: Dict[str, Any]) -> None:
        self.word_edit.setText(values.get("word", ""))
        self.pinyin_edit.setText(values.get("pinyin", ""))
        self.translation_edit.setText(values.get("translation", ""))
        self.part_of_speech_edit.setText(", ".join(values.get("part_of_speech", [])))
        self.example_sentence_edit.setText(values.get("example_sentence", ""))
        self.example_translation_edit.setText(values.get("example_translation", ""))
        self.note_edit.setText(values.get("note", ""))
        self.mastery_spin.setValue(int(values.get("mastery", 0) or 0))
        self.favorite_check.setChecked(bool(values.get("favorite", False)))

    def form_values(self) -> Dict[str, Any]:
        """Trimmed field values keyed by Word attribute name."""
        return {
            "word": self.word_edit.text().strip(),
            "pinyin": self.pinyin_edit.text().strip(),
            "translation": self.translation_edit.text().strip(),
            "part_of_speech": split_labels(self.part_of_speech_edit.text()),
            "example_sentence": self.example_sentence_edit.text().strip(),
            "example_translation": self.example_translation_edit.text().strip(),
            "note": self.note_edit.text().strip(),
            "mastery": self.mastery_spin.value(),
            "favorite": self.favorite_check.isChecked(),
        }
