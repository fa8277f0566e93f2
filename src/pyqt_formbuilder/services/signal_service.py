"""
Signal blocking for engine -> widget synchronisation.

Writing an engine value back into a widget must not re-enter the engine as
a fresh user edit. Blocking the widget's signals for the duration of the
write guarantees that, and the context manager guarantees unblocking.
"""

from contextlib import contextmanager
from typing import Any
import logging

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QWidget

from pyqt_formbuilder.protocols.widget_protocols import ValueGettable, ValueSettable

logger = logging.getLogger(__name__)


class SignalService:
    """
    Examples:
        with SignalService.block_signals(checkbox):
            checkbox.setChecked(True)

        SignalService.update_widget_value(widget, engine_value)
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals (child objects included)."""
        blocked = []
        for widget in widgets:
            if widget is None:
                continue
            blocked.append(widget)
            blocked.extend(widget.findChildren(QObject))
        previous = [w.blockSignals(True) for w in blocked]

        try:
            yield
        finally:
            for widget, was_blocked in zip(blocked, previous):
                widget.blockSignals(was_blocked)

    @staticmethod
    def update_widget_value(widget: QWidget, value: Any) -> bool:
        """Write ``value`` into ``widget`` silently; False if it already showed it."""
        if not isinstance(widget, ValueSettable):
            raise TypeError(f"{type(widget).__name__} does not implement ValueSettable")
        if isinstance(widget, ValueGettable) and widget.get_value() == value:
            return False
        with SignalService.block_signals(widget):
            widget.set_value(value)
        logger.debug(f"Synced {type(widget).__name__} to {value!r}")
        return True
