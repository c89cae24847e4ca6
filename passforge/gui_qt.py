"""
Qt GUI for PassForge.

One window: length controls, character classes, exclusions, the
(editable) password and its strength read-out.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QFont, QGuiApplication, QKeyEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from .charsets import CHAR_SETS, CharacterClass, build_effective_alphabet, flatten_alphabet
from .config import PassForgeConfig
from .entropy import make_random_source
from .logger import setup_logger
from .sanitize import sanitize, splice_paste, truncate_to_length
from .strength import StrengthAssessment, estimate
from .synth import clamp_length, synthesize

logger = logging.getLogger(__name__)

CLASS_LABELS = {
    CharacterClass.UPPER: "Uppercase (A-Z)",
    CharacterClass.LOWER: "Lowercase (a-z)",
    CharacterClass.NUMBERS: "Numbers (0-9)",
    CharacterClass.SYMBOLS: "Symbols (!@#...)",
}

TIER_COLORS = {
    "very-weak": "#ef4444",
    "weak": "#f97316",
    "good": "#eab308",
    "strong": "#22c55e",
    "very-strong": "#38bdf8",
    "": "#9ca3af",
}


class PasswordLineEdit(QLineEdit):
    """
    Line edit whose keyboard paste is filtered against an allowed alphabet.
    """

    def __init__(self, owner: "GeneratorWidget") -> None:
        super().__init__(owner)
        self._owner = owner

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.matches(QKeySequence.Paste):
            self._owner.paste_into_password(QGuiApplication.clipboard().text())
            return
        super().keyPressEvent(event)


class GeneratorWidget(QWidget):
    """
    Controls + password display. All password logic lives in the core
    modules; this widget only reads controls and shows results.
    """

    def __init__(
        self,
        config: PassForgeConfig | None = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or PassForgeConfig()
        self.rng = make_random_source(config=self.config)

        # Debounce timers for free-typed inputs
        self._length_timer = self._single_shot(self.config.debounce_ms, self._on_length_box_settled)
        self._exclude_timer = self._single_shot(self.config.debounce_ms, self._on_constraints_changed)

        # Copy feedback and secure clipboard auto-clear
        self._feedback_timer = self._single_shot(self.config.copy_feedback_ms, self._reset_copy_button)
        self._clipboard_token: str | None = None
        self._clipboard_timer = self._single_shot(self.config.clipboard_clear_ms, self._on_clipboard_timeout)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        layout.addWidget(self._build_length_group())
        layout.addWidget(self._build_classes_group())
        layout.addWidget(self._build_password_group())

        self.generate_shortcut = QShortcut(QKeySequence("Ctrl+G"), self)
        self.generate_shortcut.activated.connect(self.generate)

        self._set_length_controls(self.config.default_length)
        self.generate()
        self.password_field.setFocus()

    def _single_shot(self, interval_ms: int, slot) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(interval_ms)
        timer.timeout.connect(slot)
        return timer

    # -- groups --

    def _build_length_group(self) -> QGroupBox:
        group = QGroupBox("Length")
        row = QHBoxLayout()

        self.minus_button = QPushButton("-")
        self.minus_button.clicked.connect(lambda: self.sync_length(self.length_slider.value() - 1))

        self.length_slider = QSlider(Qt.Horizontal)
        self.length_slider.setRange(self.config.min_length, self.config.max_length)
        self.length_slider.valueChanged.connect(self.sync_length)

        self.plus_button = QPushButton("+")
        self.plus_button.clicked.connect(lambda: self.sync_length(self.length_slider.value() + 1))

        self.length_box = QSpinBox()
        self.length_box.setRange(self.config.min_length, self.config.max_length)
        self.length_box.valueChanged.connect(lambda _v: self._length_timer.start())
        self.length_box.editingFinished.connect(self._on_length_box_settled)

        self.length_value_label = QLabel()
        self.length_value_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)

        row.addWidget(self.minus_button)
        row.addWidget(self.length_slider, 1)
        row.addWidget(self.plus_button)
        row.addWidget(self.length_box)
        row.addWidget(self.length_value_label)

        group.setLayout(row)
        return group

    def _build_classes_group(self) -> QGroupBox:
        group = QGroupBox("Characters")
        layout = QVBoxLayout()

        self.class_checks: dict[CharacterClass, QCheckBox] = {}
        for cls in CharacterClass:
            check = QCheckBox(CLASS_LABELS[cls])
            check.setToolTip(CHAR_SETS[cls])
            check.setChecked(True)
            check.toggled.connect(lambda _checked: self._on_constraints_changed())
            self.class_checks[cls] = check
            layout.addWidget(check)

        exclude_row = QHBoxLayout()
        exclude_row.addWidget(QLabel("Exclude"))
        self.exclude_edit = QLineEdit()
        self.exclude_edit.setPlaceholderText("e.g. 0O1lI")
        self.exclude_edit.textEdited.connect(lambda _t: self._exclude_timer.start())
        self.exclude_edit.returnPressed.connect(self._flush_exclude)
        exclude_row.addWidget(self.exclude_edit, 1)
        layout.addLayout(exclude_row)

        group.setLayout(layout)
        return group

    def _build_password_group(self) -> QGroupBox:
        group = QGroupBox("Password")
        layout = QVBoxLayout()

        self.password_field = PasswordLineEdit(self)
        pw_font = QFont("Consolas")
        pw_font.setPointSize(14)
        self.password_field.setFont(pw_font)
        self.password_field.setMaxLength(self.config.max_length)
        self.password_field.textEdited.connect(self._on_password_edited)

        buttons_row = QHBoxLayout()
        buttons_row.addStretch()
        self.generate_button = QPushButton("Generate")
        self.generate_button.clicked.connect(self.generate)
        self.copy_button = QPushButton("Copy")
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        buttons_row.addWidget(self.generate_button)
        buttons_row.addWidget(self.copy_button)
        buttons_row.addStretch()

        self.strength_label = QLabel()
        self.strength_label.setAlignment(Qt.AlignCenter)
        self.crack_time_label = QLabel()
        self.crack_time_label.setAlignment(Qt.AlignCenter)

        layout.addWidget(self.password_field)
        layout.addLayout(buttons_row)
        layout.addWidget(self.strength_label)
        layout.addWidget(self.crack_time_label)

        group.setLayout(layout)
        return group

    # -- constraint snapshot --

    def effective_alphabet(self) -> dict[CharacterClass, str]:
        enabled = {cls for cls, check in self.class_checks.items() if check.isChecked()}
        return build_effective_alphabet(enabled, self.exclude_edit.text())

    def allowed_chars(self) -> str:
        return flatten_alphabet(self.effective_alphabet())

    def _clamp(self, value: object) -> int:
        return clamp_length(value, self.config.min_length, self.config.max_length)

    # -- actions --

    @Slot()
    def generate(self) -> None:
        effective = self.effective_alphabet()
        password = synthesize(
            effective,
            self.length_slider.value(),
            rng=self.rng,
            min_length=self.config.min_length,
            max_length=self.config.max_length,
        )
        self._set_password(password)

    def sync_length(self, value: object, regenerate: bool = True) -> None:
        length = self._clamp(value)
        self._set_length_controls(length)

        current = self.password_field.text()
        if len(current) > length:
            self.password_field.setText(truncate_to_length(current, length))
            self.evaluate()

        if regenerate:
            self.generate()

    def paste_into_password(self, pasted: str) -> None:
        field = self.password_field
        if field.hasSelectedText():
            start = field.selectionStart()
            end = start + len(field.selectedText())
        else:
            start = end = field.cursorPosition()

        value, cursor = splice_paste(
            field.text(), pasted, start, end, self.allowed_chars(), self.config.max_length
        )
        field.setText(value)
        field.setCursorPosition(cursor)
        self._set_length_controls(self._clamp(len(value)))
        self.evaluate()

    def evaluate(self) -> None:
        password = self.password_field.text()
        assessment = estimate(password, len(self.allowed_chars()), self.config.guesses_per_second)
        self._show_assessment(assessment)

    # -- slots --

    def _on_length_box_settled(self) -> None:
        self._length_timer.stop()
        if self.length_box.value() != self.length_slider.value():
            self.sync_length(self.length_box.value())

    def _flush_exclude(self) -> None:
        self._exclude_timer.stop()
        self._on_constraints_changed()

    def _on_constraints_changed(self) -> None:
        # Re-validate what is shown, then replace it with a fresh password.
        self._filter_current_password()
        self.generate()

    def _on_password_edited(self, text: str) -> None:
        filtered = sanitize(text, self.allowed_chars())
        if filtered != text:
            cursor = self.password_field.cursorPosition() - (len(text) - len(filtered))
            self.password_field.setText(filtered)
            self.password_field.setCursorPosition(max(cursor, 0))

        self._set_length_controls(self._clamp(len(filtered)))
        self.evaluate()

    def _filter_current_password(self) -> None:
        current = self.password_field.text()
        filtered = sanitize(current, self.allowed_chars())
        if filtered != current:
            self.password_field.setText(filtered)

        self._set_length_controls(self._clamp(len(filtered)))
        self.evaluate()

    # -- display helpers --

    def _set_length_controls(self, length: int) -> None:
        for widget in (self.length_slider, self.length_box):
            widget.blockSignals(True)
            widget.setValue(length)
            widget.blockSignals(False)
        self.length_value_label.setText(str(length))

    def _set_password(self, password: str) -> None:
        self.password_field.setText(password)
        self._set_length_controls(self._clamp(len(password)))
        self.evaluate()

    def _show_assessment(self, assessment: StrengthAssessment) -> None:
        color = TIER_COLORS.get(assessment.tier.tag, TIER_COLORS[""])
        self.strength_label.setText(f"Strength: {assessment.label}")
        self.strength_label.setStyleSheet(f"color: {color}; font-weight: 600;")
        self.crack_time_label.setText(f"Time to crack: {assessment.time_label}")

    # -- clipboard --

    def copy_to_clipboard(self) -> None:
        password = self.password_field.text()
        if not password:
            self._show_copy_feedback("No password to copy")
            return

        clipboard = QGuiApplication.clipboard()
        try:
            clipboard.setText(password)
        except RuntimeError as exc:
            logger.error("Failed to copy password: %s", exc)
            self._show_copy_feedback("Copy failed")
            return

        self._clipboard_token = password
        self._clipboard_timer.start()
        self._show_copy_feedback("Copied!")

    def _show_copy_feedback(self, message: str) -> None:
        self.copy_button.setText(message)
        self._feedback_timer.start()

    def _reset_copy_button(self) -> None:
        self.copy_button.setText("Copy")

    def _on_clipboard_timeout(self) -> None:
        """
        Clear clipboard if it still holds the password we placed.
        """
        if not self._clipboard_token:
            return

        cb = QGuiApplication.clipboard()
        if cb.text() == self._clipboard_token:
            cb.clear()
        self._clipboard_token = None


class PassForgeWindow(QMainWindow):
    def __init__(self, config: PassForgeConfig | None = None) -> None:
        super().__init__()

        self.setWindowTitle("PassForge")
        self.setMinimumSize(560, 520)

        self._apply_base_style()

        self.generator = GeneratorWidget(config)
        self.setCentralWidget(self.generator)

    def _apply_base_style(self) -> None:
        self.setStyleSheet(
            """
            QMainWindow {
                background-color: #05070c;
            }
            QWidget {
                color: #e5e7eb;
                background-color: #05070c;
                font-family: Segoe UI, Arial, sans-serif;
            }
            QGroupBox {
                border: 1px solid #1f2933;
                border-radius: 10px;
                margin-top: 16px;
                background-color: #080b12;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                subcontrol-position: top left;
                padding: 2px 8px;
                color: #7dd3fc;
                font-weight: 600;
            }
            QLineEdit, QSpinBox {
                border: 1px solid #1f2933;
                border-radius: 6px;
                padding: 6px 8px;
                background-color: #050810;
            }
            QPushButton {
                border-radius: 8px;
                padding: 6px 14px;
                background-color: #0b1120;
                border: 1px solid #38bdf8;
            }
            QPushButton:hover {
                background-color: #020617;
            }
            """
        )


def main() -> None:
    setup_logger(verbose="-v" in sys.argv)
    app = QApplication(sys.argv)
    window = PassForgeWindow(PassForgeConfig.from_env())
    window.show()
    sys.exit(app.exec())
