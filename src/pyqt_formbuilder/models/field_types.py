"""
Closed field-type variant.

Every schema ``type`` string maps to exactly one FieldType member, and every
member has exactly one FieldTypeSpec. Default-value derivation, the rule subset
that makes sense for the type, and the rendering widget are all looked up here
instead of matching on type strings throughout the codebase.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet


class FieldType(str, Enum):
    """Supported input types."""
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEL = "tel"
    URL = "url"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DATE = "date"
    TIME = "time"
    DATETIME_LOCAL = "datetime-local"
    FILE = "file"
    RANGE = "range"
    COLOR = "color"


class FormLayout(str, Enum):
    """Presentation hint for the rendering layer."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    INLINE = "inline"


_TEXT_RULES = frozenset({"required", "minLength", "maxLength", "pattern", "email", "custom"})
_NUMERIC_RULES = frozenset({"required", "min", "max", "custom"})
_CHOICE_RULES = frozenset({"required", "custom"})


@dataclass(frozen=True)
class FieldTypeSpec:
    """Per-type behaviour table entry."""
    field_type: FieldType
    widget_id: str
    allowed_rules: FrozenSet[str]
    _default: Callable[[bool], Any]
    has_options: bool = False

    def default_value(self, multiple: bool = False) -> Any:
        return self._default(multiple)


def _empty_string(multiple: bool) -> Any:
    return ""


FIELD_TYPE_SPECS: Dict[FieldType, FieldTypeSpec] = {
    FieldType.TEXT: FieldTypeSpec(FieldType.TEXT, "line_edit", _TEXT_RULES, _empty_string),
    FieldType.EMAIL: FieldTypeSpec(FieldType.EMAIL, "line_edit", _TEXT_RULES, _empty_string),
    FieldType.PASSWORD: FieldTypeSpec(FieldType.PASSWORD, "password_edit", _TEXT_RULES, _empty_string),
    FieldType.NUMBER: FieldTypeSpec(FieldType.NUMBER, "double_spin_box", _NUMERIC_RULES, lambda multiple: 0),
    FieldType.TEL: FieldTypeSpec(FieldType.TEL, "line_edit", _TEXT_RULES, _empty_string),
    FieldType.URL: FieldTypeSpec(FieldType.URL, "line_edit", _TEXT_RULES, _empty_string),
    FieldType.TEXTAREA: FieldTypeSpec(FieldType.TEXTAREA, "text_edit", _TEXT_RULES, _empty_string),
    FieldType.SELECT: FieldTypeSpec(
        FieldType.SELECT, "combo_box", _CHOICE_RULES,
        lambda multiple: [] if multiple else "", has_options=True,
    ),
    FieldType.RADIO: FieldTypeSpec(FieldType.RADIO, "radio_group", _CHOICE_RULES, _empty_string, has_options=True),
    FieldType.CHECKBOX: FieldTypeSpec(
        FieldType.CHECKBOX, "check_box", _CHOICE_RULES, lambda multiple: False, has_options=True,
    ),
    FieldType.DATE: FieldTypeSpec(FieldType.DATE, "date_edit", frozenset({"required", "custom"}), _empty_string),
    FieldType.TIME: FieldTypeSpec(FieldType.TIME, "time_edit", frozenset({"required", "custom"}), _empty_string),
    FieldType.DATETIME_LOCAL: FieldTypeSpec(
        FieldType.DATETIME_LOCAL, "datetime_edit", frozenset({"required", "custom"}), _empty_string,
    ),
    FieldType.FILE: FieldTypeSpec(FieldType.FILE, "file_picker", frozenset({"required", "custom"}), _empty_string),
    FieldType.RANGE: FieldTypeSpec(FieldType.RANGE, "slider", _NUMERIC_RULES, lambda multiple: 0),
    FieldType.COLOR: FieldTypeSpec(FieldType.COLOR, "line_edit", frozenset({"required", "pattern", "custom"}), _empty_string),
}


def get_field_type_spec(field_type: FieldType) -> FieldTypeSpec:
    """Return the behaviour table entry for ``field_type``."""
    return FIELD_TYPE_SPECS[field_type]
