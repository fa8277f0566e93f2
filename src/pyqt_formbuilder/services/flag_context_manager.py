"""
Context manager factory for boolean guard flags on a form engine.

Pattern:
    Instead of:
        self._in_recompute = True
        try:
            # ... logic
        finally:
            self._in_recompute = False

    Use:
        with FlagContextManager.manage_flags(self, _in_recompute=True):
            # ... logic

Flags are always restored, including when the guarded block raises.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class EngineFlag(Enum):
    """
    Registry of valid FormEngine flags.

    Add new flags here as they're introduced; every flag must be initialized
    in FormEngine.__init__.
    """
    IN_RECOMPUTE = '_in_recompute'
    IN_RESET = '_in_reset'
    IN_BUILD = '_in_build'


class FlagContextManager:
    """
    Save/set/restore for any combination of registered engine flags.

    Examples:
        with FlagContextManager.manage_flags(engine, _in_recompute=True):
            engine._recompute_dependents()

        with FlagContextManager.reset_context(engine):
            engine._group.reset(...)
    """

    VALID_FLAGS: Set[str] = {flag.value for flag in EngineFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore their previous values on exit.

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to EngineFlag enum."
            )

        # No default on getattr: a flag missing from __init__ is a bug
        prev_values: Dict[str, bool] = {name: getattr(obj, name) for name in flags}
        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
        logger.debug(f"Flags set on {type(obj).__name__}: {flags}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)

    @staticmethod
    @contextmanager
    def reset_context(obj: Any):
        """Mark a reset in progress; dependent recomputation stays allowed."""
        with FlagContextManager.manage_flags(obj, **{EngineFlag.IN_RESET.value: True}):
            yield

    @staticmethod
    def is_flag_set(obj: Any, flag: EngineFlag) -> bool:
        return getattr(obj, flag.value)
