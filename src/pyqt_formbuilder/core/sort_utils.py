"""Sorting utilities."""

from typing import Iterable, List

from pyqt_formbuilder.models import FieldConfig


def sort_by_order(fields: Iterable[FieldConfig], default_order: int = 999) -> List[FieldConfig]:
    """Return fields ordered by ``order``; missing order sorts as ``default_order``.

    ``sorted`` is stable, so ties keep their schema order.
    """
    def sort_key(field: FieldConfig):
        return default_order if field.order is None else field.order

    return sorted(list(fields), key=sort_key)
