"""
Qt rendering layer for a FormEngine.

SchemaFormWidget draws one row per field (label, input, hint, error) in the
engine's field order and keeps the rows in step with the engine: user edits
go in through ``FormEngine.set_value``, focus loss marks the control touched,
and every engine ``value_changed`` refreshes visibility, enabled state, error
text and widget contents.
"""

import logging
from typing import Dict, Optional

from PyQt6.QtCore import QEvent, QObject
from PyQt6.QtWidgets import (
    QBoxLayout, QHBoxLayout, QLabel, QLayout, QLineEdit, QPlainTextEdit,
    QPushButton, QVBoxLayout, QWidget,
)

from pyqt_formbuilder.models import FieldConfig, FieldType, FormLayout, get_field_type_spec
import pyqt_formbuilder.protocols.widget_adapters  # noqa: F401  (registers widgets)
from pyqt_formbuilder.protocols.widget_protocols import (
    ChangeSignalEmitter, OptionsSelectable, PlaceholderCapable, RangeConfigurable,
)
from pyqt_formbuilder.services.signal_service import SignalService
from .form_engine import FormEngine
from .layout_constants import DEFAULT_LAYOUT, FormLayoutConfig
from .widget_registry import get_widget_class

logger = logging.getLogger(__name__)


def widget_id_for(field: FieldConfig) -> str:
    """Registry id of the input widget that renders ``field``."""
    if field.type is FieldType.SELECT and field.multiple:
        return "multi_select"
    if field.type is FieldType.CHECKBOX and field.options:
        return "checkbox_group"
    return get_field_type_spec(field.type).widget_id


def create_field_widget(field: FieldConfig, parent: Optional[QWidget] = None) -> QWidget:
    """Instantiate and configure the input widget for one field."""
    widget = get_widget_class(widget_id_for(field))(parent)
    widget.setObjectName(field.name)

    if field.placeholder and isinstance(widget, PlaceholderCapable):
        widget.set_placeholder(field.placeholder)
    if isinstance(widget, OptionsSelectable):
        widget.set_options(field.options)
    if isinstance(widget, RangeConfigurable):
        # Rule bounds size the slider track only; number inputs keep out-of-range values visible
        rules = field.validations if field.type is FieldType.RANGE else None
        widget.configure_range(rules.min if rules else None, rules.max if rules else None, field.step)
    if field.type is FieldType.CHECKBOX and not field.options:
        widget.setText(field.label)
    if field.type is FieldType.FILE:
        widget.multiple = field.multiple
        widget.set_accept(field.accept)
    if field.css_class:
        widget.setProperty("cssClass", field.css_class)
    if field.readonly:
        if isinstance(widget, (QLineEdit, QPlainTextEdit)):
            widget.setReadOnly(True)
        else:
            widget.setEnabled(False)
    return widget


class _FocusOutFilter(QObject):
    """Reports focus loss on an input (or any of its children) as a touch."""

    def __init__(self, on_focus_out, parent=None):
        super().__init__(parent)
        self._on_focus_out = on_focus_out

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.FocusOut:
            self._on_focus_out()
        return False


class FieldRow(QWidget):
    """Label, input, hint and error label for one field."""

    def __init__(self, field: FieldConfig, layout_type: FormLayout,
                 layout_config: FormLayoutConfig, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.field = field
        self.setObjectName(f"row_{field.name}")

        direction = QBoxLayout.Direction.LeftToRight if layout_type is FormLayout.HORIZONTAL \
            else QBoxLayout.Direction.TopToBottom
        outer = QBoxLayout(direction, self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(layout_config.field_row_spacing)

        self.label = QLabel(field.label, self)
        if layout_type is FormLayout.HORIZONTAL:
            self.label.setFixedWidth(layout_config.horizontal_label_width)
        # Single checkboxes carry their own text
        self.label.setVisible(not (field.type is FieldType.CHECKBOX and not field.options))
        outer.addWidget(self.label)

        column = QVBoxLayout()
        column.setSpacing(layout_config.field_row_spacing)
        self.input = create_field_widget(field, self)
        column.addWidget(self.input)

        self.hint_label = QLabel(field.hint or "", self)
        self.hint_label.setStyleSheet(layout_config.hint_style)
        self.hint_label.setVisible(bool(field.hint))
        column.addWidget(self.hint_label)

        self.error_label = QLabel("", self)
        self.error_label.setObjectName(f"error_{field.name}")
        self.error_label.setStyleSheet(layout_config.error_style)
        self.error_label.setVisible(False)
        column.addWidget(self.error_label)
        outer.addLayout(column)


class SchemaFormWidget(QWidget):
    """
    Complete rendered form bound to one FormEngine.

    Example:
        engine = FormEngine(FormConfig.from_dict(schema))
        form = SchemaFormWidget(engine)
        engine.form_submitted.connect(handle_submit)
        form.show()
    """

    def __init__(self, engine: FormEngine, layout_config: Optional[FormLayoutConfig] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.engine = engine
        self.layout_config = layout_config or DEFAULT_LAYOUT
        self.rows: Dict[str, FieldRow] = {}
        self._focus_filters = []

        self._build()
        engine.value_changed.connect(self._on_engine_value_changed)
        engine.form_reset.connect(self.refresh)
        self.refresh()

    # ========== BUILD ==========

    def _build(self) -> None:
        config = self.engine.config
        main_layout = QVBoxLayout(self)
        main_layout.setSpacing(self.layout_config.main_layout_spacing)
        main_layout.setContentsMargins(*self.layout_config.main_layout_margins)

        self.title_label = QLabel(config.title, self)
        self.title_label.setStyleSheet(self.layout_config.title_style)
        main_layout.addWidget(self.title_label)
        if config.description:
            self.description_label = QLabel(config.description, self)
            self.description_label.setWordWrap(True)
            main_layout.addWidget(self.description_label)

        self.fields_container = QWidget(self)
        self.fields_container.setObjectName(self.engine.layout_class)
        if config.css_class:
            self.fields_container.setProperty("cssClass", config.css_class)
        content_layout = self._create_content_layout()
        for field in self.engine.sorted_fields:
            row = FieldRow(field, self.engine.layout, self.layout_config, self.fields_container)
            self._connect_row(row)
            content_layout.addWidget(row)
            self.rows[field.name] = row
        main_layout.addWidget(self.fields_container)

        button_layout = QHBoxLayout()
        self.submit_button = QPushButton(self.engine.submit_button_text, self)
        self.submit_button.clicked.connect(self.submit)
        button_layout.addWidget(self.submit_button)
        self.reset_button = QPushButton(self.engine.reset_button_text, self)
        self.reset_button.clicked.connect(self.engine.reset)
        self.reset_button.setVisible(self.engine.show_reset_button)
        button_layout.addWidget(self.reset_button)
        button_layout.addStretch()
        main_layout.addLayout(button_layout)
        main_layout.addStretch()

    def _create_content_layout(self) -> QLayout:
        if self.engine.layout is FormLayout.INLINE:
            layout = QHBoxLayout(self.fields_container)
        else:
            layout = QVBoxLayout(self.fields_container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(self.layout_config.content_layout_spacing)
        return layout

    def _connect_row(self, row: FieldRow) -> None:
        name = row.field.name
        widget = row.input
        if isinstance(widget, ChangeSignalEmitter):
            if row.field.type is FieldType.FILE:
                widget.connect_change_signal(lambda _value, w=widget, n=name: self.engine.set_files(n, w.selected_paths()))
            else:
                widget.connect_change_signal(lambda value, n=name: self.engine.set_value(n, value))

        focus_filter = _FocusOutFilter(lambda n=name: self._on_field_touched(n), self)
        widget.installEventFilter(focus_filter)
        for child in widget.findChildren(QWidget):
            child.installEventFilter(focus_filter)
        self._focus_filters.append(focus_filter)

    # ========== ENGINE -> VIEW ==========

    def _on_engine_value_changed(self, _value) -> None:
        if self.engine.is_in_reset():
            # form_reset follows and refreshes once
            return
        self.refresh()

    def _on_field_touched(self, field_name: str) -> None:
        self.engine.mark_touched(field_name)
        self._refresh_error(field_name)

    def refresh(self) -> None:
        """Bring every row in line with the engine."""
        for name, row in self.rows.items():
            control = self.engine.get_control(name)
            row.setVisible(self.engine.is_field_visible(row.field))
            if not row.field.readonly:
                row.input.setEnabled(control.enabled)
            SignalService.update_widget_value(row.input, control.value)
            self._refresh_error(name)

    def _refresh_error(self, field_name: str) -> None:
        row = self.rows[field_name]
        message = self.engine.get_error_message(field_name)
        row.error_label.setText(message)
        row.error_label.setVisible(bool(message))

    # ========== ACTIONS ==========

    def submit(self) -> bool:
        submitted = self.engine.submit()
        if not submitted:
            for name in self.rows:
                self._refresh_error(name)
        return submitted

    def closeEvent(self, event) -> None:
        self.engine.teardown()
        super().closeEvent(event)
