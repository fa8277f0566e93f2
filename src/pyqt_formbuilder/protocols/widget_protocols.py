"""
Widget ABC contracts for schema-rendered inputs.

Every input widget the rendering layer creates implements these, so the
form widget reads, writes and observes values through one interface
instead of Qt's per-class API (text() vs value() vs currentData()).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence


class ValueGettable(ABC):
    """ABC for widgets that can return a value."""

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the widget.

        Returns:
            The value in the shape the engine stores for the field type
            (str, number, bool or list).
        """
        pass


class ValueSettable(ABC):
    """ABC for widgets that can accept a value."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the widget's value.

        Args:
            value: Engine value; the type default clears the widget.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for widgets that can display placeholder text."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class RangeConfigurable(ABC):
    """ABC for numeric widgets (spin boxes, sliders)."""

    @abstractmethod
    def configure_range(self, minimum: Optional[float], maximum: Optional[float],
                        step: Optional[float] = None) -> None:
        """
        Configure bounds and increment.

        Args:
            minimum: Lower bound, None keeps the widget default
            maximum: Upper bound, None keeps the widget default
            step: Increment, None means 1
        """
        pass


class OptionsSelectable(ABC):
    """
    ABC for widgets choosing among schema options.

    Implemented by dropdowns, list selections and radio/checkbox groups.
    """

    @abstractmethod
    def set_options(self, options: Sequence[Any]) -> None:
        """
        Populate choices.

        Args:
            options: FieldOption instances; disabled options are shown but
                cannot be selected
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for widgets that report user edits.

    Eliminates duck typing of signal names (textEdited vs valueChanged vs
    currentIndexChanged).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to widget's change signal.

        Args:
            callback: Function to call when widget value changes.
                     Signature: callback(new_value: Any) -> None
        """
        pass
