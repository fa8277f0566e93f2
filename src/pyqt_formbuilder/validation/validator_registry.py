"""
Name -> validator registry for ``custom`` rules.

Instances are passed into each FormEngine rather than shared as a
module-level singleton, so tests and applications can run independent
registries side by side. Registration is expected at startup; the registry
is not guarded for concurrent mutation.

Example:
    registry = ValidatorRegistry()
    registry.register("evenNumber", lambda c: None if c.value % 2 == 0 else {"evenNumber": True})

    engine = FormEngine(config, registry=registry)
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pyqt_formbuilder.core.reactive import ValidatorFn
from . import named_validators

logger = logging.getLogger(__name__)

# Builds a validator from the schema's ``customParams``
ValidatorFactory = Callable[[Any], ValidatorFn]

MATCH_FIELD = "matchField"


class ValidatorRegistry:
    """Registry of named validators and parameterized validator factories."""

    def __init__(self, register_defaults: bool = True):
        self._validators: Dict[str, ValidatorFn] = {}
        self._factories: Dict[str, ValidatorFactory] = {}
        if register_defaults:
            self._register_default_validators()

    def _register_default_validators(self) -> None:
        self.register("alphanumeric", named_validators.alphanumeric)
        self.register("noSpaces", named_validators.no_spaces)
        self.register("strongPassword", named_validators.strong_password)
        self.register("dni", named_validators.dni)
        self.register("phone", named_validators.phone)
        self.register("url", named_validators.url)
        self.register("futureDate", named_validators.future_date)
        self.register("pastDate", named_validators.past_date)
        self.register_factory(MATCH_FIELD, named_validators.match_field, unparameterized="")

    def register(self, name: str, validator: ValidatorFn) -> None:
        """Install or replace the validator under ``name``."""
        if name in self._validators:
            logger.debug(f"Replacing validator '{name}'")
        self._validators[name] = validator
        self._factories.pop(name, None)

    def register_factory(self, name: str, factory: ValidatorFactory, unparameterized: Any = None) -> None:
        """Install a parameterized validator.

        ``resolve(name, params)`` builds ``factory(params)``. Without params the
        registry serves ``factory(unparameterized)``.
        """
        self._validators[name] = factory(unparameterized)
        self._factories[name] = factory

    def resolve(self, name: str, params: Any = None) -> Optional[ValidatorFn]:
        """Look up ``name``; returns None when nothing is registered under it."""
        validator = self._validators.get(name)
        if validator is None:
            return None
        factory = self._factories.get(name)
        if factory is not None and params:
            return factory(params)
        return validator

    def unregister(self, name: str) -> None:
        self._validators.pop(name, None)
        self._factories.pop(name, None)

    def names(self) -> List[str]:
        return list(self._validators)

    def __contains__(self, name: object) -> bool:
        return name in self._validators
