"""
Core reactive primitives.

Qt-signal based form controls and groups, plus small pure helpers for
ordering fields and comparing values.
"""

from .reactive import ControlStatus, FormControl, FormGroup, ValidatorFn
from .sort_utils import sort_by_order
from .value_utils import values_match, is_empty

__all__ = [
    "ControlStatus",
    "FormControl",
    "FormGroup",
    "ValidatorFn",
    "sort_by_order",
    "values_match",
    "is_empty",
]
