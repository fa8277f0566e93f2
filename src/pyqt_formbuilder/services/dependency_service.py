"""
Dependent-field state machine.

Each field is ENABLED, DISABLED (statically, from the schema) or HIDDEN (its
``dependsOn`` condition is unmet). Hiding a field disables its control and
clears it back to its default so hidden fields never carry stale data.

Recomputation repeats passes over the dependent fields until no field changes
state, bounded by ``max_passes``; clearing a hidden control never triggers a
nested recomputation.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from pyqt_formbuilder.core.reactive import FormControl, FormGroup
from pyqt_formbuilder.core.value_utils import values_match
from pyqt_formbuilder.models import FieldConfig

logger = logging.getLogger(__name__)


class FieldState(Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"
    HIDDEN = "hidden"


class DependentFieldService:
    """Stateless transition logic; the engine owns the state mapping."""

    def condition_met(self, field: FieldConfig, group: FormGroup) -> Optional[bool]:
        """Whether ``field``'s dependency holds; None if it has none or it dangles."""
        if field.depends_on is None:
            return None
        source = group.get(field.depends_on.field)
        if source is None:
            return None
        return values_match(source.value, field.depends_on.value)

    def initial_state(self, field: FieldConfig, group: FormGroup) -> FieldState:
        if self.condition_met(field, group) is False:
            return FieldState.HIDDEN
        return FieldState.DISABLED if field.disabled else FieldState.ENABLED

    def apply_state(self, field: FieldConfig, control: FormControl, state: FieldState) -> bool:
        """Bring ``control`` in line with ``state``; True if anything changed."""
        if state is FieldState.HIDDEN:
            stale = not values_match(control.value, control.default_value)
            if control.disabled and not stale:
                return False
            control.disable(emit_event=False)
            control.reset(emit_event=False)
            logger.debug(f"Hid '{field.name}' (value cleared: {stale})")
            return True

        should_disable = state is FieldState.DISABLED
        if control.disabled == should_disable:
            return False
        if should_disable:
            control.disable(emit_event=False)
        else:
            control.enable(emit_event=False)
        logger.debug(f"'{field.name}' -> {state.value}")
        return True

    def recompute(self, fields: Sequence[FieldConfig], group: FormGroup,
                  states: Dict[str, FieldState], max_passes: Optional[int] = None) -> List[str]:
        """Re-evaluate every dependent field until stable.

        Returns the names whose state or value changed, in first-change order.
        """
        dependents = [f for f in fields if f.depends_on is not None and f.name in group]
        limit = max_passes if max_passes is not None else len(dependents) + 1
        changed: List[str] = []

        for pass_number in range(1, limit + 1):
            pass_changed = False
            for field in dependents:
                met = self.condition_met(field, group)
                if met is None:
                    continue
                if met:
                    target = FieldState.DISABLED if field.disabled else FieldState.ENABLED
                else:
                    target = FieldState.HIDDEN
                control = group.get(field.name)
                state_changed = states.get(field.name) is not target
                states[field.name] = target
                if self.apply_state(field, control, target) or state_changed:
                    pass_changed = True
                    if field.name not in changed:
                        changed.append(field.name)
            if not pass_changed:
                logger.debug(f"Dependent fields stable after {pass_number} pass(es)")
                return changed

        logger.warning(f"Dependent fields did not settle within {limit} passes; last changes: {changed}")
        return changed
