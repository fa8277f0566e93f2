"""
Minimal reactive-forms substrate on Qt signals.

FormControl holds one value plus its validity, enabled and touched/dirty
state. FormGroup owns named controls and re-emits a single aggregate
``value_changed`` carrying the value mapping. All propagation is synchronous:
a ``set_value`` call has finished validating and notifying by the time it
returns.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formbuilder.models import UNSET

logger = logging.getLogger(__name__)

# Returns None when valid, otherwise {error_kind: diagnostic_payload}
ValidatorFn = Callable[['FormControl'], Optional[Dict[str, Any]]]


class ControlStatus(Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    DISABLED = "DISABLED"


class FormControl(QObject):
    """One named, independently validatable input slot."""

    value_changed = pyqtSignal(object)
    status_changed = pyqtSignal(str)

    def __init__(self, value: Any = None, validators: Optional[List[ValidatorFn]] = None,
                 disabled: bool = False, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.name: Optional[str] = None
        self.group: Optional['FormGroup'] = None
        self._default_value = value
        self._value = value
        self._validators: List[ValidatorFn] = list(validators or [])
        self._errors: Dict[str, Any] = {}
        self._status = ControlStatus.DISABLED if disabled else ControlStatus.VALID
        self._touched = False
        self._dirty = False
        self._run_validators()

    # ========== STATE ==========

    @property
    def value(self) -> Any:
        return self._value

    @property
    def default_value(self) -> Any:
        return self._default_value

    @property
    def validators(self) -> List[ValidatorFn]:
        return list(self._validators)

    @property
    def errors(self) -> Dict[str, Any]:
        """Failing rules in validator order; empty when valid or disabled."""
        return dict(self._errors)

    @property
    def status(self) -> ControlStatus:
        return self._status

    @property
    def valid(self) -> bool:
        return self._status is ControlStatus.VALID

    @property
    def invalid(self) -> bool:
        return self._status is ControlStatus.INVALID

    @property
    def disabled(self) -> bool:
        return self._status is ControlStatus.DISABLED

    @property
    def enabled(self) -> bool:
        return not self.disabled

    @property
    def touched(self) -> bool:
        return self._touched

    @property
    def dirty(self) -> bool:
        return self._dirty

    def first_error(self) -> Optional[Tuple[str, Any]]:
        for kind, payload in self._errors.items():
            return kind, payload
        return None

    # ========== MUTATIONS ==========

    def set_value(self, value: Any, emit_event: bool = True) -> None:
        self._value = value
        self.update_value_and_validity(emit_event=emit_event)

    def reset(self, value: Any = UNSET, emit_event: bool = True) -> None:
        """Restore ``value`` (or the construction default) and clear interaction state."""
        self._value = self._default_value if value is UNSET else value
        self._touched = False
        self._dirty = False
        self.update_value_and_validity(emit_event=emit_event)

    def enable(self, emit_event: bool = True) -> None:
        self._status = ControlStatus.VALID
        self.update_value_and_validity(emit_event=emit_event)

    def disable(self, emit_event: bool = True) -> None:
        self._status = ControlStatus.DISABLED
        self.update_value_and_validity(emit_event=emit_event)

    def mark_as_touched(self) -> None:
        self._touched = True

    def mark_as_untouched(self) -> None:
        self._touched = False

    def mark_as_dirty(self) -> None:
        self._dirty = True

    def update_value_and_validity(self, emit_event: bool = True) -> None:
        previous = self._status
        self._run_validators()
        if emit_event:
            self.value_changed.emit(self._value)
            if self._status is not previous:
                self.status_changed.emit(self._status.value)
        if self.group is not None:
            self.group._on_child_changed(self, emit_event)

    def revalidate(self) -> None:
        """Re-run validators without notifying anyone."""
        self._run_validators()

    def _run_validators(self) -> None:
        if self._status is ControlStatus.DISABLED:
            self._errors = {}
            return
        errors: Dict[str, Any] = {}
        for validator in self._validators:
            result = validator(self)
            if result:
                for kind, payload in result.items():
                    errors.setdefault(kind, payload)
        self._errors = errors
        self._status = ControlStatus.INVALID if errors else ControlStatus.VALID


class FormGroup(QObject):
    """Named control set with one aggregate value-change stream."""

    value_changed = pyqtSignal(object)

    def __init__(self, controls: Optional[Mapping[str, FormControl]] = None,
                 revalidate_siblings: bool = True, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._controls: Dict[str, FormControl] = {}
        self._revalidate_siblings = revalidate_siblings
        self._batch_depth = 0
        for name, control in (controls or {}).items():
            self.add_control(name, control)

    @property
    def controls(self) -> Dict[str, FormControl]:
        return dict(self._controls)

    def add_control(self, name: str, control: FormControl) -> None:
        if name in self._controls:
            raise ValueError(f"Control '{name}' already registered")
        control.name = name
        control.group = self
        if control.parent() is None:
            control.setParent(self)
        self._controls[name] = control
        if self._revalidate_siblings:
            self._revalidate_all()

    def get(self, name: str) -> Optional[FormControl]:
        return self._controls.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._controls

    def __iter__(self) -> Iterator[str]:
        return iter(self._controls)

    def __len__(self) -> int:
        return len(self._controls)

    @property
    def value(self) -> Dict[str, Any]:
        """Values of enabled controls."""
        return {name: c.value for name, c in self._controls.items() if c.enabled}

    @property
    def raw_value(self) -> Dict[str, Any]:
        """Values of every control, disabled ones included."""
        return {name: c.value for name, c in self._controls.items()}

    @property
    def valid(self) -> bool:
        return not self.invalid

    @property
    def invalid(self) -> bool:
        return any(c.invalid for c in self._controls.values())

    def mark_all_as_touched(self) -> None:
        for control in self._controls.values():
            control.mark_as_touched()

    @contextmanager
    def batch(self, emit_event: bool = True):
        """Collapse child notifications into one aggregate emission on exit."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0:
            if self._revalidate_siblings:
                self._revalidate_all()
            if emit_event:
                self.value_changed.emit(self.value)

    def patch_value(self, values: Mapping[str, Any], emit_event: bool = True) -> None:
        """Assign the known keys of ``values``; unknown keys are ignored."""
        with self.batch(emit_event=emit_event):
            for name, value in values.items():
                control = self._controls.get(name)
                if control is None:
                    logger.debug(f"patch_value: ignoring unknown control '{name}'")
                    continue
                control.set_value(value, emit_event=False)

    def reset(self, values: Optional[Mapping[str, Any]] = None, emit_event: bool = True) -> None:
        values = values or {}
        with self.batch(emit_event=emit_event):
            for name, control in self._controls.items():
                control.reset(values.get(name, UNSET), emit_event=False)

    def _on_child_changed(self, child: FormControl, emit_event: bool) -> None:
        if self._batch_depth:
            return
        if self._revalidate_siblings:
            self._revalidate_all(skip=child)
        if emit_event:
            self.value_changed.emit(self.value)

    def _revalidate_all(self, skip: Optional[FormControl] = None) -> None:
        for control in self._controls.values():
            if control is not skip:
                control.revalidate()
