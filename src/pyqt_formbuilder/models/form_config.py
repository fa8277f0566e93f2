"""
Declarative form schema.

Passive data only: the engine reads these objects and never mutates them.
``from_dict`` accepts the JSON-like schema with its camelCase keys, e.g.::

    FormConfig.from_dict({
        "title": "Sign in",
        "fields": [
            {"name": "email", "type": "email", "label": "Email",
             "validations": {"required": True, "email": True}},
        ],
    })
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pyqt_formbuilder.exceptions import SchemaError
from .field_types import FieldType, FormLayout

logger = logging.getLogger(__name__)

# Override message per error kind (e.g. {"required": "Please fill this in"})
ValidationMessages = Dict[str, str]


def _parse_enum(enum_type, raw: Any, what: str):
    if isinstance(raw, enum_type):
        return raw
    try:
        return enum_type(raw)
    except ValueError:
        allowed = [member.value for member in enum_type]
        raise SchemaError(f"Unknown {what} {raw!r}. Expected one of {allowed}") from None


@dataclass(frozen=True)
class FieldOption:
    """One selectable choice for select/radio/checkbox fields."""
    label: str
    value: Any
    disabled: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldOption':
        if "label" not in data or "value" not in data:
            raise SchemaError(f"Option requires 'label' and 'value': {dict(data)!r}")
        return cls(label=str(data["label"]), value=data["value"], disabled=bool(data.get("disabled", False)))


@dataclass(frozen=True)
class FieldValidation:
    """Declarative rule set. ``None`` means the rule is not applied."""
    required: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None
    email: Optional[bool] = None
    custom: Optional[str] = None
    custom_params: Any = None

    _KEYS = {
        "required": "required",
        "minLength": "min_length",
        "maxLength": "max_length",
        "min": "min",
        "max": "max",
        "pattern": "pattern",
        "email": "email",
        "custom": "custom",
        "customParams": "custom_params",
    }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldValidation':
        unknown = set(data) - set(cls._KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown validation keys: {sorted(unknown)}")
        return cls(**{attr: data[key] for key, attr in cls._KEYS.items() if key in data})

    def present_rules(self) -> List[str]:
        """Rule names (schema spelling) that are set, in compile order."""
        rules = []
        if self.required:
            rules.append("required")
        if self.min_length is not None:
            rules.append("minLength")
        if self.max_length is not None:
            rules.append("maxLength")
        if self.min is not None:
            rules.append("min")
        if self.max is not None:
            rules.append("max")
        if self.pattern:
            rules.append("pattern")
        if self.email:
            rules.append("email")
        if self.custom:
            rules.append("custom")
        return rules


@dataclass(frozen=True)
class DependsOn:
    """Show/enable the owning field only while ``field`` equals ``value``."""
    field: str
    value: Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DependsOn':
        if "field" not in data:
            raise SchemaError(f"dependsOn requires 'field': {dict(data)!r}")
        return cls(field=data["field"], value=data.get("value"))


# Sentinel distinguishing "no initial value" from an explicit None
class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class FieldConfig:
    """Full description of one form field."""
    name: str
    type: FieldType
    label: str = ""
    placeholder: Optional[str] = None
    value: Any = UNSET
    validations: Optional[FieldValidation] = None
    validation_messages: ValidationMessages = field(default_factory=dict)
    options: List[FieldOption] = field(default_factory=list)
    disabled: bool = False
    readonly: bool = False
    css_class: Optional[str] = None
    hint: Optional[str] = None
    order: Optional[int] = None
    visible: bool = True
    depends_on: Optional[DependsOn] = None
    multiple: bool = False
    accept: Optional[str] = None
    step: Optional[float] = None

    @property
    def has_initial_value(self) -> bool:
        return self.value is not UNSET and self.value is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldConfig':
        name = data.get("name")
        if not name:
            raise SchemaError(f"Field requires a non-empty 'name': {dict(data)!r}")
        if "type" not in data:
            raise SchemaError(f"Field '{name}' requires a 'type'")

        validations = data.get("validations")
        depends_on = data.get("dependsOn")
        return cls(
            name=name,
            type=_parse_enum(FieldType, data["type"], f"field type for '{name}'"),
            label=data.get("label", ""),
            placeholder=data.get("placeholder"),
            value=data.get("value", UNSET),
            validations=FieldValidation.from_dict(validations) if validations is not None else None,
            validation_messages=dict(data.get("validationMessages") or {}),
            options=[FieldOption.from_dict(option) for option in data.get("options") or []],
            disabled=bool(data.get("disabled", False)),
            readonly=bool(data.get("readonly", False)),
            css_class=data.get("cssClass"),
            hint=data.get("hint"),
            order=data.get("order"),
            visible=data.get("visible", True) is not False,
            depends_on=DependsOn.from_dict(depends_on) if depends_on is not None else None,
            multiple=bool(data.get("multiple", False)),
            accept=data.get("accept"),
            step=data.get("step"),
        )


@dataclass(frozen=True)
class FormConfig:
    """Complete form description, immutable for the lifetime of one engine."""
    title: str
    fields: List[FieldConfig] = field(default_factory=list)
    description: Optional[str] = None
    submit_button_text: Optional[str] = None
    reset_button_text: Optional[str] = None
    show_reset_button: Optional[bool] = None
    layout: Optional[FormLayout] = None
    css_class: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FormConfig':
        title = data.get("title")
        if not title:
            raise SchemaError("Form schema requires a 'title'")
        layout = data.get("layout")
        return cls(
            title=title,
            fields=[FieldConfig.from_dict(f) for f in data.get("fields") or []],
            description=data.get("description"),
            submit_button_text=data.get("submitButtonText"),
            reset_button_text=data.get("resetButtonText"),
            show_reset_button=data.get("showResetButton"),
            layout=_parse_enum(FormLayout, layout, "layout") if layout is not None else None,
            css_class=data.get("cssClass"),
        )

    @classmethod
    def from_json(cls, text: str) -> 'FormConfig':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Form schema is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise SchemaError("Form schema JSON must be an object")
        return cls.from_dict(data)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]
