"""Value comparison helpers shared by dependency and cross-field rules."""

from numbers import Number
from typing import Any


def values_match(left: Any, right: Any) -> bool:
    """Strict equality: booleans only match booleans, numbers compare numerically."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, Number) and isinstance(right, Number):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return type(left) is type(right) and left == right


def is_empty(value: Any) -> bool:
    """True for values the ``required`` rule rejects: None, "" and empty sequences."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False
