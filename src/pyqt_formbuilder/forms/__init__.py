"""
Form engine and rendering.

FormEngine turns a FormConfig into live validated controls; SchemaFormWidget
renders an engine with Qt widgets resolved through the widget registry.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_engine import FormEngine
    from .form_widget import SchemaFormWidget, FieldRow, create_field_widget, widget_id_for
    from .layout_constants import FormLayoutConfig
    from .widget_registry import (
        WidgetMeta,
        WIDGET_IMPLEMENTATIONS,
        WIDGET_CAPABILITIES,
        get_widget_class,
        get_widget_capabilities,
        list_widgets_with_capability,
    )

_EXPORTS = {
    "FormEngine": ("pyqt_formbuilder.forms.form_engine", "FormEngine"),
    "SchemaFormWidget": ("pyqt_formbuilder.forms.form_widget", "SchemaFormWidget"),
    "FieldRow": ("pyqt_formbuilder.forms.form_widget", "FieldRow"),
    "create_field_widget": ("pyqt_formbuilder.forms.form_widget", "create_field_widget"),
    "widget_id_for": ("pyqt_formbuilder.forms.form_widget", "widget_id_for"),
    "FormLayoutConfig": ("pyqt_formbuilder.forms.layout_constants", "FormLayoutConfig"),
    "DEFAULT_LAYOUT": ("pyqt_formbuilder.forms.layout_constants", "DEFAULT_LAYOUT"),
    "COMPACT_LAYOUT": ("pyqt_formbuilder.forms.layout_constants", "COMPACT_LAYOUT"),
    "WidgetMeta": ("pyqt_formbuilder.forms.widget_registry", "WidgetMeta"),
    "WIDGET_IMPLEMENTATIONS": ("pyqt_formbuilder.forms.widget_registry", "WIDGET_IMPLEMENTATIONS"),
    "WIDGET_CAPABILITIES": ("pyqt_formbuilder.forms.widget_registry", "WIDGET_CAPABILITIES"),
    "get_widget_class": ("pyqt_formbuilder.forms.widget_registry", "get_widget_class"),
    "get_widget_capabilities": ("pyqt_formbuilder.forms.widget_registry", "get_widget_capabilities"),
    "list_widgets_with_capability": ("pyqt_formbuilder.forms.widget_registry", "list_widgets_with_capability"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
