"""
Widget registry with metaclass auto-registration.

Input widget classes register themselves when defined, keyed by their
``_widget_id``. FieldTypeSpec.widget_id names which class renders a field
type, so adding a widget never touches the form widget itself.

Design:
- WidgetMeta metaclass (Qt metaclass + ABCMeta) handles auto-registration
- WIDGET_IMPLEMENTATIONS: widget_id -> widget class
- WIDGET_CAPABILITIES: widget class -> implemented ABCs
"""

from abc import ABCMeta
from typing import Dict, List, Set, Type
import logging

from PyQt6.QtCore import QObject

logger = logging.getLogger(__name__)

# Maps widget_id -> widget class
WIDGET_IMPLEMENTATIONS: Dict[str, Type] = {}

# Maps widget class -> set of ABC classes
WIDGET_CAPABILITIES: Dict[Type, Set[Type]] = {}


class WidgetMeta(type(QObject), ABCMeta):
    """
    Metaclass for automatic widget registration.

    1. Only registers concrete implementations (no abstract methods)
    2. Requires _widget_id attribute for identification
    3. Records which widget ABCs the class implements

    Example:
        class LineEditAdapter(QLineEdit, ValueGettable, ValueSettable,
                              metaclass=WidgetMeta):
            _widget_id = "line_edit"
            ...

    The widget auto-registers in WIDGET_IMPLEMENTATIONS["line_edit"] when
    the class is defined.
    """

    def __new__(mcs, name, bases, attrs):
        new_class = super().__new__(mcs, name, bases, attrs)

        abstract_methods = getattr(new_class, '__abstractmethods__', None)
        if abstract_methods:
            logger.debug(f"Skipping registration for {name} - abstract methods remaining: {abstract_methods}")
            return new_class

        widget_id = attrs.get('_widget_id')
        if widget_id is None:
            # Inherited id only - intermediate or specialised subclass
            logger.debug(f"Skipping registration for {name} - no own _widget_id")
            return new_class

        if widget_id in WIDGET_IMPLEMENTATIONS:
            existing = WIDGET_IMPLEMENTATIONS[widget_id]
            logger.warning(
                f"Widget ID '{widget_id}' already registered to {existing.__name__}. "
                f"Overwriting with {name}."
            )
        WIDGET_IMPLEMENTATIONS[widget_id] = new_class

        from pyqt_formbuilder.protocols.widget_protocols import (
            ValueGettable, ValueSettable, PlaceholderCapable,
            RangeConfigurable, OptionsSelectable, ChangeSignalEmitter,
        )
        abc_types = {
            ValueGettable, ValueSettable, PlaceholderCapable,
            RangeConfigurable, OptionsSelectable, ChangeSignalEmitter,
        }
        WIDGET_CAPABILITIES[new_class] = {abc for abc in abc_types if issubclass(new_class, abc)}

        logger.debug(
            f"Auto-registered {name} as '{widget_id}' with capabilities: "
            f"{sorted(c.__name__ for c in WIDGET_CAPABILITIES[new_class])}"
        )
        return new_class


def get_widget_class(widget_id: str) -> Type:
    """
    Get widget class by ID.

    Raises:
        KeyError: If widget_id not registered
    """
    if widget_id not in WIDGET_IMPLEMENTATIONS:
        raise KeyError(
            f"No widget registered with ID '{widget_id}'. "
            f"Available widgets: {list(WIDGET_IMPLEMENTATIONS.keys())}"
        )
    return WIDGET_IMPLEMENTATIONS[widget_id]


def get_widget_capabilities(widget_class: Type) -> Set[Type]:
    return WIDGET_CAPABILITIES.get(widget_class, set())


def list_widgets_with_capability(capability: Type) -> List[Type]:
    """
    Find all widgets that implement a specific ABC.

    Example:
        >>> from pyqt_formbuilder.protocols import OptionsSelectable
        >>> [w.__name__ for w in list_widgets_with_capability(OptionsSelectable)]
        ['ComboBoxAdapter', 'MultiSelectAdapter', 'RadioGroupAdapter', 'CheckboxGroupAdapter']
    """
    return [
        widget_class
        for widget_class, capabilities in WIDGET_CAPABILITIES.items()
        if capability in capabilities
    ]
