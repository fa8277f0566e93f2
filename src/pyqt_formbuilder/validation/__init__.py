"""
Validation layer.

Declarative rule factories, the named-validator registry used for
``custom`` rules, and error message resolution.
"""

from .validators import Validators, EMAIL_PATTERN
from .validator_registry import ValidatorRegistry, ValidatorFactory, MATCH_FIELD
from .error_messages import (
    MESSAGE_CATALOGS,
    BUTTON_LABELS,
    get_button_label,
    resolve_error_message,
)
from . import named_validators

__all__ = [
    "Validators",
    "EMAIL_PATTERN",
    "ValidatorRegistry",
    "ValidatorFactory",
    "MATCH_FIELD",
    "MESSAGE_CATALOGS",
    "BUTTON_LABELS",
    "get_button_label",
    "resolve_error_message",
    "named_validators",
]
