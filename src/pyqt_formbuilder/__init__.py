"""
pyqt-formbuilder: schema-driven reactive forms for PyQt6.

Describe a form once as a JSON-like schema (fields, types, validation rules,
dependencies) and get a live, validated control set plus submit/reset
lifecycle signals, with an optional Qt widget that renders it.

Architecture:
- models: FormConfig/FieldConfig schema and the closed FieldType table
- core: FormControl/FormGroup reactive substrate on Qt signals
- validation: declarative rules, ValidatorRegistry, error messages
- services: dependent-field state machine and guard flags
- forms: FormEngine orchestrator and SchemaFormWidget renderer
- protocols: FormBuilderConfig and widget ABCs/adapters
"""

import importlib

__version__ = "0.1.0"

_EXPORTS = {
    "FormConfig": ("pyqt_formbuilder.models", "FormConfig"),
    "FieldConfig": ("pyqt_formbuilder.models", "FieldConfig"),
    "FieldValidation": ("pyqt_formbuilder.models", "FieldValidation"),
    "FieldOption": ("pyqt_formbuilder.models", "FieldOption"),
    "DependsOn": ("pyqt_formbuilder.models", "DependsOn"),
    "FieldType": ("pyqt_formbuilder.models", "FieldType"),
    "FormLayout": ("pyqt_formbuilder.models", "FormLayout"),
    "FormEngine": ("pyqt_formbuilder.forms.form_engine", "FormEngine"),
    "SchemaFormWidget": ("pyqt_formbuilder.forms.form_widget", "SchemaFormWidget"),
    "ValidatorRegistry": ("pyqt_formbuilder.validation", "ValidatorRegistry"),
    "resolve_error_message": ("pyqt_formbuilder.validation", "resolve_error_message"),
    "FormBuilderConfig": ("pyqt_formbuilder.protocols.form_config", "FormBuilderConfig"),
    "set_form_config": ("pyqt_formbuilder.protocols.form_config", "set_form_config"),
    "get_form_config": ("pyqt_formbuilder.protocols.form_config", "get_form_config"),
    "FormBuilderError": ("pyqt_formbuilder.exceptions", "FormBuilderError"),
    "SchemaError": ("pyqt_formbuilder.exceptions", "SchemaError"),
    "UnknownFieldError": ("pyqt_formbuilder.exceptions", "UnknownFieldError"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        value = getattr(importlib.import_module(module_name), attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__", *_EXPORTS.keys()]
