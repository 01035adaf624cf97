# UI.py
""""PySide6 user interface for the Expression Calculator.

Structure
---------
- Calculator UI: main window with input line, live result, keypad and history
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, input line, result display, keypad and history list
- Re-evaluate the input on every change and show the result (or "Error")
- On '=' / Enter: record the expression in the history and replace the input with the result,
  or show the MathEngine error as a dialog and leave the input alone
- History click-to-replay and "clear history"
- Clipboard integration (paste, Shift+click copies the result) and optional evaluate after paste
- Dark/light mode

Responsibilities (Settings)
---------------------------
- Load Current Settings and Settings Descriptions via config_manager
- Validate user input (history size between 1 and 10)
- Save and apply theme / logging changes immediately

Threading Note
--------------
MathEngine is linear in the input length and never blocks, so it is called directly on the UI thread.
"""""

import logging
import sys
from pathlib import Path

import pyperclip
from pynput.keyboard import Controller
from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QTimer

from . import History
from . import config_manager as config_manager
from . import error as E

logger = logging.getLogger(__name__)

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    # We are running in a PyInstaller bundle (.exe)
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    # We are running in a normal Python environment (.py)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

SETTINGS_KEY = "\u2699"        # gear
CLIPBOARD_KEY = "\U0001F4CB"   # clipboard
COPY_LABEL = "\U0001F4D1"      # bookmark tabs, shown while Shift is held
BACKSPACE_KEY = "<"
CLEAR_KEY = "C"
PERCENT_KEY = "%"
EQUALS_KEY = "="

# (label, text inserted into the input, row, column)
BUTTONS = [
    (SETTINGS_KEY, None, 0, 0), (CLIPBOARD_KEY, None, 0, 1), (CLEAR_KEY, None, 0, 2), (BACKSPACE_KEY, None, 0, 3), (PERCENT_KEY, None, 0, 4),
    ('sin', 'sin(', 1, 0), ('cos', 'cos(', 1, 1), ('tan', 'tan(', 1, 2), ('(', '(', 1, 3), (')', ')', 1, 4),
    ('√', 'sqrt(', 2, 0), ('7', '7', 2, 1), ('8', '8', 2, 2), ('9', '9', 2, 3), ('÷', '÷', 2, 4),
    ('log', 'log(', 3, 0), ('4', '4', 3, 1), ('5', '5', 3, 2), ('6', '6', 3, 3), ('×', '×', 3, 4),
    ('ln', 'ln(', 4, 0), ('1', '1', 4, 1), ('2', '2', 4, 2), ('3', '3', 4, 3), ('−', '−', 4, 4),
    ('π', 'pi', 5, 0), ('e', 'e', 5, 1), ('0', '0', 5, 2), ('.', '.', 5, 3), ('+', '+', 5, 4),
    ('xʸ', '^', 6, 0), ('mod', '%', 6, 1), (EQUALS_KEY, None, 6, 2),
]

# Buttons that support "press and hold"
HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', BACKSPACE_KEY]

DARK_BUTTON_STYLE = "background-color: #121212; color: white; font-weight: bold;"
EQUALS_BUTTON_STYLE = "background-color: #007bff; color: white; font-weight: bold;"


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" clipboard button.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


def apply_log_level(debug):
    level = logging.DEBUG if debug else logging.INFO
    logging.getLogger("Calculator").setLevel(level)


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window, saving the new settings and opening an error
    message if something went wrong.

    All of the Settings can be seperated into two categories:
    1. Checkboxes   (Managed with True or False)
    2. Input Fields (Managed as an Integer)

    """""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Setting key -> widget, read back in save_settings

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(300, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(f"{description} (1-{History.HISTORY_LIMIT}):")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        setting_value_list = self.setting_value_list

        for key_value, widget in self.widgets.items():

            # --- Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            # --- Input Fields (history_limit) ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                try:
                    new_value_int = int(new_value_str)
                    if key_value == "history_limit" and not 1 <= new_value_int <= History.HISTORY_LIMIT:
                        raise ValueError(f"'{new_value_int}' is out of range 1-{History.HISTORY_LIMIT}.")
                except ValueError as e:
                    logger.warning("Invalid input for %s: %s", key_value, e)
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return  # Stop saving!

                setting_value_list[key_value] = new_value_int

        # --- Write to File ---
        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}config.json")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    initial_delay = 500
    repeat_interval = 100

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.history = ()  # Most recent first, owned by this window only
        self.shift_is_held = False
        self.was_held = False
        self.held_button_value = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.button_objects = {}
        self.setWindowTitle("Calculator")
        self.resize(620, 520)
        main_h_layout = QtWidgets.QHBoxLayout(self)
        calculator_v_layout = QtWidgets.QVBoxLayout()
        main_h_layout.addLayout(calculator_v_layout, 3)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Input and Result Display ---
        self.input_line = QtWidgets.QLineEdit()
        self.input_line.setAlignment(Qt.AlignmentFlag.AlignRight)
        font = self.input_line.font()
        font.setPointSize(22)
        self.input_line.setFont(font)
        self.input_line.textChanged.connect(self.update_result)
        self.input_line.returnPressed.connect(self.submit)
        calculator_v_layout.addWidget(self.input_line)

        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(32)
        self.display.setFont(font)
        calculator_v_layout.addWidget(self.display)

        # --- 5. Button Grid ---
        button_container = QtWidgets.QWidget()
        calculator_v_layout.addWidget(button_container, 1)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for label, value, row, col in BUTTONS:
            button = QtWidgets.QPushButton(label)
            button.setSizePolicy(expanding_policy)

            if label == SETTINGS_KEY:
                button.clicked.connect(self.open_settings)
            elif label in HOLD_BUTTONS:
                # Use press/release signals for hold logic
                button.pressed.connect(lambda val=label: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=label: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=label: self.handle_button_press(val))

            if label == EQUALS_KEY:
                button_grid.addWidget(button, row, col, 1, 3)  # '=' spans the rest of the last row
            else:
                button_grid.addWidget(button, row, col)
            self.button_objects[label] = button

        self.insert_values = {label: value for label, value, row, col in BUTTONS if value is not None}

        # --- 6. History ---
        history_v_layout = QtWidgets.QVBoxLayout()
        main_h_layout.addLayout(history_v_layout, 2)
        history_v_layout.addWidget(QtWidgets.QLabel("History"))
        self.history_list = QtWidgets.QListWidget()
        self.history_list.itemClicked.connect(self.replay_history_item)
        history_v_layout.addWidget(self.history_list, 1)
        clear_history_button = QtWidgets.QPushButton("Clear history")
        clear_history_button.clicked.connect(self.clear_history)
        history_v_layout.addWidget(clear_history_button)

        self.update_darkmode()
        self.update_result()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A hold already fired the action; don't fire once more on release.
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)
        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Key Event Handlers ---
    def update_button_labels(self):
        clipboard_button = self.button_objects.get(CLIPBOARD_KEY)
        if clipboard_button:
            clipboard_button.setText(COPY_LABEL if self.shift_is_held else CLIPBOARD_KEY)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = True
            self.update_button_labels()
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
            self.update_button_labels()
        super().keyReleaseEvent(event)

    def handle_button_press(self, value):
        text = self.input_line.text()

        if value == EQUALS_KEY:
            self.submit()
            return

        elif value == CLEAR_KEY:
            text = ""

        elif value == BACKSPACE_KEY:
            text = History.backspace(text)

        elif value == PERCENT_KEY:
            text = History.apply_percent(text)

        elif value == CLIPBOARD_KEY:
            self.handle_clipboard()
            return

        else:
            text += self.insert_values[value]

        self.input_line.setText(text)  # textChanged triggers update_result
        self.input_line.setFocus()

    def handle_clipboard(self):
        # Shift held: copy the current result. Otherwise paste into the input.
        if self.shift_is_held or is_shift_pressed():
            pyperclip.copy(self.display.text())
            logger.info("Copied %r to the clipboard", self.display.text())
            return

        clipboard_text = pyperclip.paste()
        if not clipboard_text:
            return
        self.input_line.setText(self.input_line.text() + clipboard_text)

        if self.setting_value_list["after_paste_enter"] == True:
            self.submit()

    # --- Evaluation ---
    def update_result(self):
        self.display.setText(History.preview(self.input_line.text()))

    def submit(self):
        expression = self.input_line.text()
        limit = self.setting_value_list["history_limit"]
        try:
            result, self.history = History.submit(expression, self.history, limit)
        except E.MathError as error_obj:
            logger.warning("Evaluation failed for %r: %s (code %s)", expression, error_obj.message, error_obj.code)
            self.show_error(error_obj)
            return

        self.render_history()
        self.input_line.setText(result)

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_code = error_obj.code
        additional_info = f"Details: {error_obj.message}\nEquation: {error_obj.equation}"

        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle(E.Error_Dictionary.get(error_code[:1], "Calculation error"))
        error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
        error_box.setInformativeText(additional_info)
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    # --- History ---
    def render_history(self):
        self.history_list.clear()
        for entry in self.history:
            item = QtWidgets.QListWidgetItem(f"{entry.expression} = {entry.result}")
            item.setData(Qt.ItemDataRole.UserRole, entry)
            self.history_list.addItem(item)

    def replay_history_item(self, item):
        entry = item.data(Qt.ItemDataRole.UserRole)
        expression, shown = History.replay(entry)
        self.input_line.blockSignals(True)  # the preview is already computed
        self.input_line.setText(expression)
        self.input_line.blockSignals(False)
        self.display.setText(shown)

    def clear_history(self):
        self.history = ()
        self.render_history()
        logger.info("History cleared")

    # --- Appearance / Settings ---
    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            for text, button in self.button_objects.items():
                button.setStyleSheet(EQUALS_BUTTON_STYLE if text == EQUALS_KEY else DARK_BUTTON_STYLE)
            self.setStyleSheet("background-color: #121212; color: white;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
        else:
            for text, button in self.button_objects.items():
                button.setStyleSheet(EQUALS_BUTTON_STYLE if text == EQUALS_KEY else "font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload settings after the dialog closes so changes apply immediately
        self.setting_value_list = config_manager.load_setting_value("all")
        apply_log_level(self.setting_value_list["debug"])
        self.update_darkmode()

        limit = History.clamp_limit(self.setting_value_list["history_limit"])
        self.history = self.history[:limit]
        self.render_history()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
                QPushButton:hover {
                    background-color: #444444;
                }
            """
        else:
            return ""


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
