"""
Declarative rule validators.

Factories for the rules a schema can declare directly under ``validations``
(required, minLength, maxLength, min, max, pattern, email). Each factory
returns a ValidatorFn: ``None`` when the control is valid, otherwise a one-key
dict ``{error_kind: payload}``. Every rule except ``required`` passes empty
values so rules compose.
"""

import re
from typing import Any, Optional, Sized

from pyqt_formbuilder.core.reactive import FormControl, ValidatorFn
from pyqt_formbuilder.core.value_utils import is_empty

EMAIL_PATTERN = re.compile(
    r"^(?=.{1,254}$)(?=.{1,64}@)"
    r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def to_number(value: Any) -> Optional[float]:
    """Numeric reading of a control value, or None if it has none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _has_length(value: Any) -> bool:
    return isinstance(value, Sized) and not isinstance(value, dict)


class Validators:
    """Built-in declarative rules."""

    @staticmethod
    def required(control: FormControl) -> Optional[dict]:
        return {"required": True} if is_empty(control.value) else None

    @staticmethod
    def min_length(length: int) -> ValidatorFn:
        def validator(control: FormControl) -> Optional[dict]:
            value = control.value
            if is_empty(value) or not _has_length(value):
                return None
            if len(value) < length:
                return {"minLength": {"requiredLength": length, "actualLength": len(value)}}
            return None
        return validator

    @staticmethod
    def max_length(length: int) -> ValidatorFn:
        def validator(control: FormControl) -> Optional[dict]:
            value = control.value
            if is_empty(value) or not _has_length(value):
                return None
            if len(value) > length:
                return {"maxLength": {"requiredLength": length, "actualLength": len(value)}}
            return None
        return validator

    @staticmethod
    def min(bound: float) -> ValidatorFn:
        def validator(control: FormControl) -> Optional[dict]:
            if is_empty(control.value):
                return None
            number = to_number(control.value)
            if number is not None and number < bound:
                return {"min": {"min": bound, "actual": control.value}}
            return None
        return validator

    @staticmethod
    def max(bound: float) -> ValidatorFn:
        def validator(control: FormControl) -> Optional[dict]:
            if is_empty(control.value):
                return None
            number = to_number(control.value)
            if number is not None and number > bound:
                return {"max": {"max": bound, "actual": control.value}}
            return None
        return validator

    @staticmethod
    def pattern(pattern: str) -> ValidatorFn:
        """Anchored match; ``^``/``$`` are added when absent.

        Raises:
            re.error: If ``pattern`` is not a valid regular expression
        """
        required_pattern = pattern
        if not required_pattern.startswith("^"):
            required_pattern = "^" + required_pattern
        if not required_pattern.endswith("$"):
            required_pattern += "$"
        regex = re.compile(required_pattern)

        def validator(control: FormControl) -> Optional[dict]:
            value = control.value
            if is_empty(value):
                return None
            if regex.search(str(value)) is None:
                return {"pattern": {"requiredPattern": required_pattern, "actualValue": value}}
            return None
        return validator

    @staticmethod
    def email(control: FormControl) -> Optional[dict]:
        value = control.value
        if is_empty(value):
            return None
        return None if EMAIL_PATTERN.match(str(value)) else {"email": True}
