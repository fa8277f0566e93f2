"""
Widget adapters that wrap Qt widgets to implement the widget ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QDoubleSpinBox.value() vs QComboBox.currentData()
- QLineEdit.setText() vs QSlider.setValue() vs QComboBox.setCurrentIndex()

Values come out in the shape the form engine stores for the field type:
empty text is "", numbers stay numbers, dates are ISO strings, multi-choice
widgets return lists.
"""

from typing import Any, Callable, List, Optional, Sequence

from PyQt6.QtCore import QDate, QDateTime, QTime, Qt
from PyQt6.QtWidgets import (
    QButtonGroup, QCheckBox, QComboBox, QDateEdit, QDateTimeEdit, QDoubleSpinBox,
    QFileDialog, QHBoxLayout, QLineEdit, QListWidget, QListWidgetItem, QPlainTextEdit,
    QPushButton, QRadioButton, QSlider, QTimeEdit, QVBoxLayout, QWidget,
)

from pyqt_formbuilder.forms.widget_registry import WidgetMeta
from .widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable,
    RangeConfigurable, OptionsSelectable, ChangeSignalEmitter,
)


class LineEditAdapter(QLineEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=WidgetMeta):
    """Single-line text (text, email, tel, url, color)."""

    _widget_id = "line_edit"

    def get_value(self) -> Any:
        return self.text()

    def set_value(self, value: Any) -> None:
        self.setText("" if value is None else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        # textEdited fires on user edits only, not on set_value
        self.textEdited.connect(lambda _text: callback(self.get_value()))


class PasswordEditAdapter(LineEditAdapter, metaclass=WidgetMeta):
    _widget_id = "password_edit"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setEchoMode(QLineEdit.EchoMode.Password)


class TextEditAdapter(QPlainTextEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=WidgetMeta):
    """Multi-line text (textarea)."""

    _widget_id = "text_edit"

    def get_value(self) -> Any:
        return self.toPlainText()

    def set_value(self, value: Any) -> None:
        self.setPlainText("" if value is None else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textChanged.connect(lambda: callback(self.get_value()))


class DoubleSpinBoxAdapter(QDoubleSpinBox, ValueGettable, ValueSettable, PlaceholderCapable,
                           RangeConfigurable, ChangeSignalEmitter, metaclass=WidgetMeta):
    """
    Numeric input (number).

    Integral steps (the default) yield int values; fractional steps yield floats.
    """

    _widget_id = "double_spin_box"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRange(-1e9, 1e9)
        self.setDecimals(0)

    def get_value(self) -> Any:
        value = self.value()
        return int(value) if self.decimals() == 0 else value

    def set_value(self, value: Any) -> None:
        try:
            self.setValue(float(value))
        except (TypeError, ValueError):
            self.setValue(0.0)

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def configure_range(self, minimum: Optional[float], maximum: Optional[float],
                        step: Optional[float] = None) -> None:
        step = 1 if step is None else step
        self.setDecimals(0 if float(step).is_integer() else 6)
        self.setSingleStep(step)
        self.setRange(self.minimum() if minimum is None else minimum,
                      self.maximum() if maximum is None else maximum)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda _value: callback(self.get_value()))


class SliderAdapter(QSlider, ValueGettable, ValueSettable, RangeConfigurable,
                    ChangeSignalEmitter, metaclass=WidgetMeta):
    """Integer slider (range); HTML range inputs default to 0..100."""

    _widget_id = "slider"

    def __init__(self, parent=None):
        super().__init__(Qt.Orientation.Horizontal, parent)
        self.setRange(0, 100)

    def get_value(self) -> Any:
        return self.value()

    def set_value(self, value: Any) -> None:
        """Show ``value`` exactly, widening the range if a rule bound excludes it."""
        try:
            number = int(value)
        except (TypeError, ValueError):
            number = self.minimum()
        if number < self.minimum():
            self.setMinimum(number)
        elif number > self.maximum():
            self.setMaximum(number)
        self.setValue(number)

    def configure_range(self, minimum: Optional[float], maximum: Optional[float],
                        step: Optional[float] = None) -> None:
        self.setRange(self.minimum() if minimum is None else int(minimum),
                      self.maximum() if maximum is None else int(maximum))
        self.setSingleStep(1 if step is None else max(1, int(step)))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda _value: callback(self.get_value()))


class ComboBoxAdapter(QComboBox, ValueGettable, ValueSettable, PlaceholderCapable,
                      OptionsSelectable, ChangeSignalEmitter, metaclass=WidgetMeta):
    """
    Single-choice dropdown (select).

    Stores option values in itemData; no selection reads as "".
    """

    _widget_id = "combo_box"

    def get_value(self) -> Any:
        if self.currentIndex() < 0:
            return ""
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        for i in range(self.count()):
            if self.itemData(i) == value:
                self.setCurrentIndex(i)
                return
        # Value not among options - clear selection
        self.setCurrentIndex(-1)

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def set_options(self, options: Sequence[Any]) -> None:
        self.clear()
        for option in options:
            self.addItem(option.label, option.value)
            if option.disabled:
                self.model().item(self.count() - 1).setEnabled(False)
        self.setCurrentIndex(-1)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.currentIndexChanged.connect(lambda _index: callback(self.get_value()))


class MultiSelectAdapter(QListWidget, ValueGettable, ValueSettable, OptionsSelectable,
                         ChangeSignalEmitter, metaclass=WidgetMeta):
    """Multi-choice list (select with ``multiple``); value is a list."""

    _widget_id = "multi_select"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSelectionMode(QListWidget.SelectionMode.MultiSelection)

    def get_value(self) -> Any:
        return [self.item(i).data(Qt.ItemDataRole.UserRole)
                for i in range(self.count()) if self.item(i).isSelected()]

    def set_value(self, value: Any) -> None:
        selected = list(value) if isinstance(value, (list, tuple, set)) else []
        for i in range(self.count()):
            item = self.item(i)
            item.setSelected(item.data(Qt.ItemDataRole.UserRole) in selected)

    def set_options(self, options: Sequence[Any]) -> None:
        self.clear()
        for option in options:
            item = QListWidgetItem(option.label)
            item.setData(Qt.ItemDataRole.UserRole, option.value)
            if option.disabled:
                item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEnabled)
            self.addItem(item)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.itemSelectionChanged.connect(lambda: callback(self.get_value()))


class RadioGroupAdapter(QWidget, ValueGettable, ValueSettable, OptionsSelectable,
                        ChangeSignalEmitter, metaclass=WidgetMeta):
    """Radio buttons (radio); no checked button reads as ""."""

    _widget_id = "radio_group"

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._group = QButtonGroup(self)
        self._values: List[Any] = []

    def get_value(self) -> Any:
        checked = self._group.checkedId()
        return "" if checked < 0 else self._values[checked]

    def set_value(self, value: Any) -> None:
        # Exclusive groups refuse to uncheck the last button directly
        self._group.setExclusive(False)
        for index, button in enumerate(self._group.buttons()):
            button.setChecked(self._values[index] == value)
        self._group.setExclusive(True)

    def set_options(self, options: Sequence[Any]) -> None:
        for button in self._group.buttons():
            self._group.removeButton(button)
            button.deleteLater()
        self._values = []
        for index, option in enumerate(options):
            button = QRadioButton(option.label, self)
            button.setEnabled(not option.disabled)
            self._group.addButton(button, index)
            self._layout.addWidget(button)
            self._values.append(option.value)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._group.idToggled.connect(
            lambda _id, checked: callback(self.get_value()) if checked else None
        )


class CheckBoxAdapter(QCheckBox, ValueGettable, ValueSettable,
                      ChangeSignalEmitter, metaclass=WidgetMeta):
    """Single boolean checkbox."""

    _widget_id = "check_box"

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.toggled.connect(lambda _checked: callback(self.get_value()))


class CheckboxGroupAdapter(QWidget, ValueGettable, ValueSettable, OptionsSelectable,
                           ChangeSignalEmitter, metaclass=WidgetMeta):
    """Checkbox field with options; value is the list of checked option values."""

    _widget_id = "checkbox_group"

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._checkboxes: List[QCheckBox] = []
        self._values: List[Any] = []
        self._callbacks: List[Callable[[Any], None]] = []

    def get_value(self) -> Any:
        return [value for value, box in zip(self._values, self._checkboxes) if box.isChecked()]

    def set_value(self, value: Any) -> None:
        selected = list(value) if isinstance(value, (list, tuple, set)) else []
        for option_value, box in zip(self._values, self._checkboxes):
            box.setChecked(option_value in selected)

    def set_options(self, options: Sequence[Any]) -> None:
        for box in self._checkboxes:
            box.deleteLater()
        self._checkboxes, self._values = [], []
        for option in options:
            box = QCheckBox(option.label, self)
            box.setEnabled(not option.disabled)
            box.toggled.connect(self._emit_change)
            self._layout.addWidget(box)
            self._checkboxes.append(box)
            self._values.append(option.value)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._callbacks.append(callback)

    def _emit_change(self, _checked: bool) -> None:
        if self.signalsBlocked():
            return
        for callback in self._callbacks:
            callback(self.get_value())


class _TemporalEditAdapter(ValueGettable, ValueSettable, ChangeSignalEmitter):
    """
    Shared behaviour for date/time editors.

    The minimum value doubles as "empty" (shown as blank special text) and
    reads back as "". Values are ISO strings.
    """

    _iso_format: str = ""

    def _init_empty_state(self) -> None:
        self.setSpecialValueText(" ")
        if isinstance(self, QDateEdit):
            self.setCalendarPopup(True)

    def _is_empty(self) -> bool:
        return self.dateTime() == self.minimumDateTime()

    def get_value(self) -> Any:
        if self._is_empty():
            return ""
        return self.dateTime().toString(self._iso_format)

    def set_value(self, value: Any) -> None:
        parsed = QDateTime.fromString(str(value or ""), self._iso_format)
        if not parsed.isValid():
            parsed = QDateTime.fromString(str(value or ""), Qt.DateFormat.ISODate)
        self.setDateTime(parsed if parsed.isValid() else self.minimumDateTime())

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.dateTimeChanged.connect(lambda _dt: callback(self.get_value()))


class DateEditAdapter(QDateEdit, _TemporalEditAdapter, metaclass=WidgetMeta):
    _widget_id = "date_edit"
    _iso_format = "yyyy-MM-dd"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumDate(QDate(1752, 9, 14))
        self._init_empty_state()
        self.setDateTime(self.minimumDateTime())


class TimeEditAdapter(QTimeEdit, _TemporalEditAdapter, metaclass=WidgetMeta):
    """Note: 00:00 is the empty marker, so midnight itself reads as ""."""

    _widget_id = "time_edit"
    _iso_format = "HH:mm"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumTime(QTime(0, 0))
        self._init_empty_state()
        self.setDateTime(self.minimumDateTime())

    def set_value(self, value: Any) -> None:
        parsed = QTime.fromString(str(value or ""), self._iso_format)
        self.setTime(parsed if parsed.isValid() else self.minimumTime())


class DateTimeEditAdapter(QDateTimeEdit, _TemporalEditAdapter, metaclass=WidgetMeta):
    _widget_id = "datetime_edit"
    _iso_format = "yyyy-MM-dd'T'HH:mm"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumDate(QDate(1752, 9, 14))
        self._init_empty_state()
        self.setDateTime(self.minimumDateTime())


class FilePickerAdapter(QWidget, ValueGettable, ValueSettable, PlaceholderCapable,
                        ChangeSignalEmitter, metaclass=WidgetMeta):
    """
    Read-only path display plus a browse button (file).

    ``accept`` ("image/*,.pdf") becomes the dialog's name filter; ``multiple``
    allows several files, reported as a list.
    """

    _widget_id = "file_picker"

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._display = QLineEdit(self)
        self._display.setReadOnly(True)
        self._button = QPushButton("...", self)
        self._button.clicked.connect(self.browse)
        layout.addWidget(self._display)
        layout.addWidget(self._button)
        self.multiple = False
        self.accept_filter = ""
        self._paths: List[str] = []
        self._callbacks: List[Callable[[Any], None]] = []

    def selected_paths(self) -> List[str]:
        return list(self._paths)

    def get_value(self) -> Any:
        if not self._paths:
            return ""
        return self._paths[0] if len(self._paths) == 1 else list(self._paths)

    def set_value(self, value: Any) -> None:
        if isinstance(value, (list, tuple)):
            self._paths = [str(v) for v in value]
        else:
            self._paths = [str(value)] if value else []
        self._display.setText("; ".join(self._paths))

    def set_placeholder(self, text: str) -> None:
        self._display.setPlaceholderText(text)

    def set_accept(self, accept: Optional[str]) -> None:
        patterns = []
        for token in (accept or "").split(","):
            token = token.strip()
            if token.startswith("."):
                patterns.append(f"*{token}")
            elif token.endswith("/*"):
                patterns.append("*")
            elif token:
                patterns.append(f"*.{token.rsplit('/', 1)[-1]}")
        self.accept_filter = f"Files ({' '.join(patterns)})" if patterns else ""

    def browse(self) -> None:
        if self.multiple:
            paths, _ = QFileDialog.getOpenFileNames(self, filter=self.accept_filter)
        else:
            path, _ = QFileDialog.getOpenFileName(self, filter=self.accept_filter)
            paths = [path] if path else []
        if paths:
            self.choose_paths(paths)

    def choose_paths(self, paths: Sequence[str]) -> None:
        """Apply a selection as if picked in the dialog."""
        self.set_value(list(paths))
        for callback in self._callbacks:
            callback(self.get_value())

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._callbacks.append(callback)
