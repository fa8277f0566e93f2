"""
Service layer for form engines.

Dependent-field state machine, guard-flag management and signal blocking.
Widget-facing SignalService is imported lazily by the rendering layer so the
engine stays usable without QtWidgets.
"""

from .dependency_service import DependentFieldService, FieldState
from .flag_context_manager import FlagContextManager, EngineFlag

__all__ = [
    "DependentFieldService",
    "FieldState",
    "FlagContextManager",
    "EngineFlag",
]
