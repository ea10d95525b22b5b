#!/usr/bin/env python3
"""
Standard / Programmer Calculator - four-function and multi-base bitwise calculator
with HEX/DEC/OCT/BIN views, history, JSON settings and keyboard shortcuts.
"""

import sys
import logging
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGridLayout, QPushButton, QLabel, QDialog, QDialogButtonBox,
    QCheckBox, QFontDialog, QScrollArea, QFrame, QMessageBox, QButtonGroup
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QKeyEvent, QAction
import qdarktheme

from base_convert import Base, is_digit_allowed
from calc_engine import Calculator, Mode
from evaluator import OPERATOR_SYMBOLS
from settings_store import load_config, save_config

logger = logging.getLogger(__name__)

if sys.platform == "win32":
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(
        "toolboxcalc.toolboxcalc"
    )

BASE_ORDER = (Base.HEX, Base.DEC, Base.OCT, Base.BIN)

BUTTON_STYLE = """
    QPushButton {
        border: 1px solid #a0a0a0;
        border-radius: 3px;
        font-size: 12pt;
    }
"""


class SettingsDialog(QDialog):
    """Settings dialog for calculator preferences"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.resize(275, 120)

        layout = QVBoxLayout()

        self.history_check = QCheckBox("Show history panel")
        self.history_check.setChecked(parent.config.get("show_history", True))
        layout.addWidget(self.history_check)

        # Font selection
        font_layout = QHBoxLayout()
        font_label = QLabel("Display Font:")
        self.font_button = QPushButton("Choose Font...")
        self.font_button.clicked.connect(self.choose_font)
        font_layout.addWidget(font_label)
        font_layout.addWidget(self.font_button)
        font_layout.addStretch()
        layout.addLayout(font_layout)

        layout.addStretch()

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.setLayout(layout)
        self.selected_font = None

    def choose_font(self):
        """Open font dialog"""
        current_font = self.parent().display.font()
        font, ok = QFontDialog.getFont(current_font, self)
        if ok:
            self.selected_font = font


class HistoryPanel(QFrame):
    """History panel showing previous calculations, newest first"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)
        self.setMaximumWidth(300)
        self.setMinimumWidth(300)

        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)

        title = QLabel("History")
        title_font = QFont()
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.history_widget = QWidget()
        self.history_layout = QVBoxLayout()
        self.history_layout.setSpacing(4)
        self.history_layout.addStretch()
        self.history_widget.setLayout(self.history_layout)

        scroll.setWidget(self.history_widget)
        layout.addWidget(scroll)

        self.setLayout(layout)
        self.history_items = []

    def set_entries(self, entries):
        """Rebuild the list from the calculator's history"""
        self.clear_entries()
        for text in entries:
            label = QLabel(text)
            label.setWordWrap(True)
            label.setStyleSheet("padding: 4px; background-color: #101010; border-radius: 3px;")
            font = QFont()
            font.setPointSize(9)
            label.setFont(font)
            # keep the stretch as the last item
            self.history_layout.insertWidget(self.history_layout.count() - 1, label)
            self.history_items.append(label)

    def clear_entries(self):
        for label in self.history_items:
            self.history_layout.removeWidget(label)
            label.deleteLater()
        self.history_items.clear()


class CalculatorWindow(QMainWindow):
    """Main calculator window"""

    def __init__(self, config=None):
        super().__init__()

        self.config = config if config is not None else load_config()
        self.calculator = Calculator(history_limit=self.config["history_limit"])

        self.init_ui()
        self.apply_settings()

    def init_ui(self):
        """Initialize the user interface"""
        self.setWindowTitle("Toolbox Calculator")

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout()
        main_layout.setSpacing(10)

        calc_layout = QVBoxLayout()
        calc_layout.setSpacing(8)

        # Mode switcher
        mode_layout = QHBoxLayout()
        self.mode_group = QButtonGroup(self)
        self.mode_buttons = {}
        for mode, text in ((Mode.STANDARD, "Standard"), (Mode.PROGRAMMER, "Programmer")):
            btn = QPushButton(text)
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, m=mode: self.switch_mode(m))
            self.mode_group.addButton(btn)
            self.mode_buttons[mode] = btn
            mode_layout.addWidget(btn)
        calc_layout.addLayout(mode_layout)

        # Display area
        display_frame = QFrame()
        display_frame.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)
        display_layout = QVBoxLayout()
        display_layout.setContentsMargins(5, 5, 5, 5)

        info_layout = QHBoxLayout()

        self.mode_label = QLabel("STD")
        mode_font = QFont()
        mode_font.setBold(True)
        mode_font.setPointSize(9)
        self.mode_label.setFont(mode_font)
        self.mode_label.setStyleSheet("color: #0066cc;")
        info_layout.addWidget(self.mode_label)

        info_layout.addStretch()

        # Pending operation indicator
        self.op_label = QLabel("")
        op_font = QFont("Consolas", 20)
        op_font.setBold(True)
        self.op_label.setFont(op_font)
        self.op_label.setStyleSheet("color: #ffa500;")
        info_layout.addWidget(self.op_label)

        display_layout.addLayout(info_layout)

        self.display = QLabel("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.display.setFont(QFont("Consolas", 24))
        self.display.setMinimumHeight(60)
        display_layout.addWidget(self.display)

        display_frame.setLayout(display_layout)
        calc_layout.addWidget(display_frame)

        # Base views (programmer mode)
        self.base_frame = QFrame()
        base_layout = QGridLayout()
        base_layout.setContentsMargins(0, 0, 0, 0)
        base_layout.setSpacing(2)
        self.base_buttons = {}
        self.base_labels = {}
        for row, base in enumerate(BASE_ORDER):
            btn = QPushButton(base.name)
            btn.setFixedWidth(50)
            btn.clicked.connect(lambda checked, b=base: self.switch_base(b))
            value_label = QLabel("0")
            value_label.setFont(QFont("Consolas", 10))
            value_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            base_layout.addWidget(btn, row, 0)
            base_layout.addWidget(value_label, row, 1)
            self.base_buttons[base] = btn
            self.base_labels[base] = value_label
        self.base_frame.setLayout(base_layout)
        calc_layout.addWidget(self.base_frame)

        # Button grid
        button_layout = QGridLayout()
        button_layout.setSpacing(4)

        # (text, row, col, action, column span)
        buttons = [
            # Row 0 - bitwise (programmer only)
            ("AND", 0, 0, "AND", 1), ("OR", 0, 1, "OR", 1), ("XOR", 0, 2, "XOR", 1), ("NOT", 0, 3, "NOT", 1),
            ("<<", 1, 0, "<<", 1), (">>", 1, 1, ">>", 1),
            # Row 1/2 - hex digits (programmer only)
            ("A", 1, 2, "A", 1), ("B", 1, 3, "B", 1),
            ("C", 2, 0, "C", 1), ("D", 2, 1, "D", 1), ("E", 2, 2, "E", 1), ("F", 2, 3, "F", 1),
            # Row 3
            ("CLR", 3, 0, "clear", 2), ("÷", 3, 2, "÷", 1), ("×", 3, 3, "×", 1),
            # Row 4
            ("7", 4, 0, 7, 1), ("8", 4, 1, 8, 1), ("9", 4, 2, 9, 1), ("-", 4, 3, "-", 1),
            # Row 5
            ("4", 5, 0, 4, 1), ("5", 5, 1, 5, 1), ("6", 5, 2, 6, 1), ("+", 5, 3, "+", 1),
            # Row 6
            ("1", 6, 0, 1, 1), ("2", 6, 1, 2, 1), ("3", 6, 2, 3, 1), ("=", 6, 3, "equals", 1),
            # Row 7
            ("0", 7, 0, 0, 2), (".", 7, 2, "decimal", 1),
        ]

        self.digit_buttons = {}
        self.hex_buttons = {}
        self.programmer_buttons = []
        for text, row, col, action, span in buttons:
            btn = QPushButton(text)
            btn.setMinimumSize(50, 40)
            btn.setStyleSheet(BUTTON_STYLE)

            if isinstance(action, int):
                btn.clicked.connect(lambda checked, a=action: self.number_pressed(a))
                self.digit_buttons[action] = btn
            elif action in ["A", "B", "C", "D", "E", "F"]:
                btn.clicked.connect(lambda checked, a=action: self.number_pressed(a))
                self.hex_buttons[action] = btn
                self.programmer_buttons.append(btn)
            elif action in ["AND", "OR", "XOR", "NOT", "<<", ">>"]:
                btn.clicked.connect(lambda checked, a=action: self.operation_pressed(a))
                self.programmer_buttons.append(btn)
            elif action in ["+", "-", "×", "÷"]:
                btn.clicked.connect(lambda checked, a=action: self.operation_pressed(a))
                btn.setStyleSheet(btn.styleSheet() + "QPushButton { background-color: #243036; }")
            elif action == "equals":
                btn.clicked.connect(self.equals_pressed)
                btn.setStyleSheet(btn.styleSheet() + "QPushButton { background-color: #1f2b27; font-weight: bold; }")
            elif action == "clear":
                btn.clicked.connect(self.clear_all)
            elif action == "decimal":
                btn.clicked.connect(self.decimal_pressed)
                self.decimal_button = btn

            button_layout.addWidget(btn, row, col, 1, span)

        calc_layout.addLayout(button_layout)
        calc_layout.addStretch()

        main_layout.addLayout(calc_layout)

        self.history_panel = HistoryPanel()
        main_layout.addWidget(self.history_panel)

        central.setLayout(main_layout)

        # Menu bar
        menubar = self.menuBar()

        edit_menu = menubar.addMenu("&Edit")

        copy_action = QAction("&Copy", self)
        copy_action.setShortcut("Ctrl+C")
        copy_action.triggered.connect(self.copy_to_clipboard)
        edit_menu.addAction(copy_action)

        paste_action = QAction("&Paste", self)
        paste_action.setShortcut("Ctrl+V")
        paste_action.triggered.connect(self.paste_from_clipboard)
        edit_menu.addAction(paste_action)

        edit_menu.addSeparator()
        clear_history_action = QAction("Clear &History", self)
        clear_history_action.triggered.connect(self.clear_history)
        edit_menu.addAction(clear_history_action)

        edit_menu.addSeparator()

        settings_action = QAction("&Settings...", self)
        settings_action.triggered.connect(self.show_settings)
        edit_menu.addAction(settings_action)

        help_menu = menubar.addMenu("&Help")

        shortcuts_action = QAction("&Keyboard Shortcuts", self)
        shortcuts_action.triggered.connect(self.show_shortcuts)
        help_menu.addAction(shortcuts_action)

        self.setWindowFlags(self.windowFlags() & ~Qt.WindowType.WindowMaximizeButtonHint)

        self.update_display()

    def apply_settings(self):
        """Apply font and panel visibility from the config"""
        font_str = self.config.get("display_font")
        if font_str:
            font = QFont()
            if font.fromString(font_str):
                self.display.setFont(font)
            else:
                logger.warning("Ignoring unreadable display font %r", font_str)

        self.history_panel.setVisible(bool(self.config.get("show_history", True)))
        self.adjustSize()

    def save_settings(self):
        self.config["display_font"] = self.display.font().toString()
        save_config(self.config)

    def show_settings(self):
        """Show settings dialog"""
        dialog = SettingsDialog(self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.config["show_history"] = dialog.history_check.isChecked()
            if dialog.selected_font:
                self.display.setFont(dialog.selected_font)
                self.config["display_font"] = dialog.selected_font.toString()
            self.apply_settings()

    def show_shortcuts(self):
        """Show keyboard shortcuts help"""
        shortcuts = """
<h3>Keyboard Shortcuts</h3>
<table>
<tr><td><b>0-9</b></td><td>Number entry (numpad supported)</td></tr>
<tr><td><b>A-F</b></td><td>Hex digits (Programmer, HEX base)</td></tr>
<tr><td><b>.</b></td><td>Decimal point (Standard)</td></tr>
<tr><td><b>M</b></td><td>Toggle Standard / Programmer mode</td></tr>
<tr><td><b>X</b></td><td>Toggle HEX / DEC base (Programmer)</td></tr>
<tr><td><b>+, -, *, /</b></td><td>Basic operations (numpad supported)</td></tr>
<tr><td><b>&amp;, |, ^, ~</b></td><td>AND, OR, XOR, NOT (Programmer)</td></tr>
<tr><td><b>&lt;, &gt;</b></td><td>Shift left / right (Programmer)</td></tr>
<tr><td><b>Enter</b></td><td>Equals</td></tr>
<tr><td><b>ESC / Delete</b></td><td>Clear</td></tr>
<tr><td><b>Ctrl+C / Ctrl+V</b></td><td>Copy / paste value</td></tr>
</table>
        """
        msg = QMessageBox(self)
        msg.setWindowTitle("Keyboard Shortcuts")
        msg.setTextFormat(Qt.TextFormat.RichText)
        msg.setText(shortcuts)
        msg.exec()

    def copy_to_clipboard(self):
        """Copy the displayed value without group separators"""
        clipboard = QApplication.clipboard()
        clipboard.setText("".join(self.calculator.display_text.split()))

    def paste_from_clipboard(self):
        clipboard = QApplication.clipboard()
        text = clipboard.text().strip()
        if not text:
            return
        self.calculator.paste(text)
        self.update_display()

    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard input"""
        key = event.key()
        text = event.text().upper()
        programmer = self.calculator.mode is Mode.PROGRAMMER

        # Copy/paste go through the menu shortcuts; keep 'C' from typing a hex digit
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            super().keyPressEvent(event)
            return

        if len(text) == 1 and text in "0123456789":
            self.number_pressed(int(text))
        elif len(text) == 1 and text in "ABCDEF" and programmer and self.calculator.base is Base.HEX:
            self.number_pressed(text)
        elif text == "X" and programmer:
            self.switch_base(Base.DEC if self.calculator.base is Base.HEX else Base.HEX)
        elif text == "M":
            self.switch_mode(Mode.STANDARD if programmer else Mode.PROGRAMMER)
        elif text == ".":
            self.decimal_pressed()

        # Operations
        elif text == "+":
            self.operation_pressed("+")
        elif text == "-":
            self.operation_pressed("-")
        elif text == "*":
            self.operation_pressed("×")
        elif text == "/":
            self.operation_pressed("÷")
        elif text == "&":
            self.operation_pressed("AND")
        elif text == "|":
            self.operation_pressed("OR")
        elif text == "^":
            self.operation_pressed("XOR")
        elif text == "~":
            self.operation_pressed("NOT")
        elif text == "<":
            self.operation_pressed("<<")
        elif text == ">":
            self.operation_pressed(">>")

        elif key in [Qt.Key.Key_Return, Qt.Key.Key_Enter] or text == "=":
            self.equals_pressed()
        elif key in [Qt.Key.Key_Escape, Qt.Key.Key_Delete]:
            self.clear_all()

        else:
            super().keyPressEvent(event)

    def switch_mode(self, mode):
        self.calculator.mode_pressed(mode)
        self.update_display()

    def switch_base(self, base):
        self.calculator.base_pressed(base)
        self.update_display()

    def number_pressed(self, digit):
        self.calculator.digit_pressed(digit)
        self.update_display()

    def decimal_pressed(self):
        self.calculator.decimal_point_pressed()
        self.update_display()

    def operation_pressed(self, op):
        self.calculator.operator_pressed(op)
        self.update_display()

    def equals_pressed(self):
        self.calculator.equals_pressed()
        self.update_display()

    def clear_all(self):
        self.calculator.clear_pressed()
        self.update_display()

    def clear_history(self):
        self.calculator.clear_history()
        self.history_panel.clear_entries()

    def update_buttons(self):
        """Show programmer controls and enable only digits valid for the base"""
        state = self.calculator.state
        programmer = state.programmer

        self.mode_buttons[state.mode].setChecked(True)
        self.base_frame.setVisible(programmer)
        for btn in self.programmer_buttons:
            btn.setVisible(programmer)
        self.decimal_button.setEnabled(not programmer)

        for digit, btn in self.digit_buttons.items():
            btn.setEnabled(not programmer or is_digit_allowed(digit, state.base))
        for btn in self.hex_buttons.values():
            btn.setEnabled(programmer and state.base is Base.HEX)

        for base, btn in self.base_buttons.items():
            weight = "bold" if base is state.base else "normal"
            btn.setStyleSheet(f"QPushButton {{ font-weight: {weight}; }}")

    def update_display(self):
        """Update the display labels"""
        state = self.calculator.state

        self.display.setText(state.display_text)
        self.op_label.setText(OPERATOR_SYMBOLS.get(state.pending_operator, ""))

        if state.programmer:
            self.mode_label.setText(state.base.name)
            for base, text in self.calculator.views().items():
                self.base_labels[base].setText(text)
        else:
            self.mode_label.setText("STD")

        self.update_buttons()
        self.history_panel.set_entries(self.calculator.history)

    def closeEvent(self, event):
        """Handle window close"""
        self.save_settings()
        event.accept()


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')

    app = QApplication(sys.argv)
    qdarktheme.setup_theme()

    calculator = CalculatorWindow()
    calculator.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
