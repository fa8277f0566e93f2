"""
Configuration hook, widget protocol definitions and adapters.

ABC-based widget contracts plus the Qt adapters that implement them for
every schema field type. Adapters load on first access so the engine can be
used without creating any widget classes.
"""

import importlib

from .form_config import FormBuilderConfig, set_form_config, get_form_config
from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    PlaceholderCapable,
    RangeConfigurable,
    OptionsSelectable,
    ChangeSignalEmitter,
)

_ADAPTERS = (
    "LineEditAdapter",
    "PasswordEditAdapter",
    "TextEditAdapter",
    "DoubleSpinBoxAdapter",
    "SliderAdapter",
    "ComboBoxAdapter",
    "MultiSelectAdapter",
    "RadioGroupAdapter",
    "CheckBoxAdapter",
    "CheckboxGroupAdapter",
    "DateEditAdapter",
    "TimeEditAdapter",
    "DateTimeEditAdapter",
    "FilePickerAdapter",
)


def __getattr__(name: str):
    if name in _ADAPTERS:
        module = importlib.import_module("pyqt_formbuilder.protocols.widget_adapters")
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "FormBuilderConfig",
    "set_form_config",
    "get_form_config",
    "ValueGettable",
    "ValueSettable",
    "PlaceholderCapable",
    "RangeConfigurable",
    "OptionsSelectable",
    "ChangeSignalEmitter",
    *_ADAPTERS,
]
