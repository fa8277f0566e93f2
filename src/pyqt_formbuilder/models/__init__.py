"""
Schema model.

Passive dataclasses describing a form, plus the closed field-type variant
table used for default values, rule subsets and widget lookup.
"""

from .field_types import (
    FieldType,
    FormLayout,
    FieldTypeSpec,
    FIELD_TYPE_SPECS,
    get_field_type_spec,
)
from .form_config import (
    FieldOption,
    FieldValidation,
    DependsOn,
    FieldConfig,
    FormConfig,
    ValidationMessages,
    UNSET,
)

__all__ = [
    "FieldType",
    "FormLayout",
    "FieldTypeSpec",
    "FIELD_TYPE_SPECS",
    "get_field_type_spec",
    "FieldOption",
    "FieldValidation",
    "DependsOn",
    "FieldConfig",
    "FormConfig",
    "ValidationMessages",
    "UNSET",
]
