"""
Form engine - builds live controls from a FormConfig.

The engine is the only stateful orchestrator: it compiles each field's
validators, owns the FormGroup, runs the dependent-field state machine after
every value change and gates submission on validity.

Outbound notifications are Qt signals:
    value_changed(dict)   - every aggregate value change
    form_submitted(dict)  - submit() with every enabled control valid
    form_reset()          - after reset()

Example:
    engine = FormEngine(FormConfig.from_dict(schema))
    engine.form_submitted.connect(save)
    engine.set_value("email", "ana@example.com")
    engine.submit()
"""

import logging
import re
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formbuilder.core.reactive import FormControl, FormGroup, ValidatorFn
from pyqt_formbuilder.core.sort_utils import sort_by_order
from pyqt_formbuilder.exceptions import SchemaError, UnknownFieldError
from pyqt_formbuilder.models import FieldConfig, FormConfig, FormLayout, get_field_type_spec
from pyqt_formbuilder.protocols.form_config import FormBuilderConfig, get_form_config
from pyqt_formbuilder.services.dependency_service import DependentFieldService, FieldState
from pyqt_formbuilder.services.flag_context_manager import EngineFlag, FlagContextManager
from pyqt_formbuilder.validation.error_messages import get_button_label, resolve_error_message
from pyqt_formbuilder.validation.validator_registry import ValidatorRegistry
from pyqt_formbuilder.validation.validators import Validators

logger = logging.getLogger(__name__)

FieldRef = Union[FieldConfig, str]


class FormEngine(QObject):
    """Live, validated control set for one FormConfig."""

    value_changed = pyqtSignal(object)
    form_submitted = pyqtSignal(object)
    form_reset = pyqtSignal()

    def __init__(self, config: FormConfig, registry: Optional[ValidatorRegistry] = None,
                 form_config: Optional[FormBuilderConfig] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.config = config
        self.registry = registry if registry is not None else ValidatorRegistry()
        self.settings = form_config or get_form_config()

        # Guard flags (see EngineFlag)
        self._in_recompute = False
        self._in_reset = False
        self._in_build = False

        self._dependency_service = DependentFieldService()
        self._field_states: Dict[str, FieldState] = {}
        self._fields_by_name: Dict[str, FieldConfig] = {}
        self._subscription = None
        self.sorted_fields: List[FieldConfig] = []
        self.group: Optional[FormGroup] = None

        self.initialize(config)

    # ========== BUILD ==========

    def initialize(self, config: FormConfig) -> None:
        """Build controls for ``config``, replacing any previous build."""
        self.teardown()
        self.config = config
        self._check_schema(config)
        previous_group = self.group

        with FlagContextManager.manage_flags(self, _in_build=True):
            self.sorted_fields = sort_by_order(config.fields, self.settings.default_order)
            self._fields_by_name = {f.name: f for f in self.sorted_fields}

            controls: Dict[str, FormControl] = {}
            for field in self.sorted_fields:
                controls[field.name] = FormControl(
                    value=self.initial_value(field),
                    validators=self.build_validators(field),
                    disabled=field.disabled,
                )
            self.group = FormGroup(controls, revalidate_siblings=self.settings.revalidate_siblings, parent=self)

            self._field_states = {}
            for field in self.sorted_fields:
                state = self._dependency_service.initial_state(field, self.group)
                self._field_states[field.name] = state
                self._dependency_service.apply_state(field, self.group.get(field.name), state)
            self._recompute_dependents()

        self._subscription = self.group.value_changed.connect(self._on_group_value_changed)
        if previous_group is not None:
            self._release_group(previous_group)
        logger.debug(f"Built form '{config.title}' with {len(self.sorted_fields)} controls")

    def teardown(self) -> None:
        """Drop the aggregate subscription; later control changes are ignored."""
        if self._subscription is None:
            return
        try:
            self.group.value_changed.disconnect(self._subscription)
        except TypeError:
            # Already disconnected
            pass
        self._subscription = None
        logger.debug(f"Tore down form '{self.config.title}'")

    def _release_group(self, group: FormGroup) -> None:
        """Schedule a replaced group and its controls for deletion."""
        group.setParent(None)
        group.deleteLater()

    @property
    def is_active(self) -> bool:
        return self._subscription is not None

    def _check_schema(self, config: FormConfig) -> None:
        duplicates = [name for name, count in Counter(config.field_names()).items() if count > 1]
        if duplicates:
            raise SchemaError(f"Duplicate field names in '{config.title}': {duplicates}")

        names = set(config.field_names())
        for field in config.fields:
            if field.depends_on is not None and field.depends_on.field not in names:
                self._schema_problem(
                    f"Field '{field.name}' depends on unknown field '{field.depends_on.field}'; "
                    f"it will always be shown"
                )

    def _schema_problem(self, message: str) -> None:
        if self.settings.strict_schema:
            raise SchemaError(message)
        logger.warning(message)

    def initial_value(self, field: FieldConfig) -> Any:
        """Schema ``value`` if given, otherwise the type default."""
        if field.has_initial_value:
            return field.value
        return get_field_type_spec(field.type).default_value(field.multiple)

    def build_validators(self, field: FieldConfig) -> List[ValidatorFn]:
        """Compile ``field.validations`` in the fixed rule order."""
        rules = field.validations
        if rules is None:
            return []

        allowed = get_field_type_spec(field.type).allowed_rules
        validators: List[ValidatorFn] = []
        for rule in rules.present_rules():
            if rule not in allowed:
                message = f"Rule '{rule}' has no effect on {field.type.value} field '{field.name}'"
                if self.settings.strict_schema:
                    raise SchemaError(message)
                logger.debug(message)

            if rule == "required":
                validators.append(Validators.required)
            elif rule == "minLength":
                validators.append(Validators.min_length(rules.min_length))
            elif rule == "maxLength":
                validators.append(Validators.max_length(rules.max_length))
            elif rule == "min":
                validators.append(Validators.min(rules.min))
            elif rule == "max":
                validators.append(Validators.max(rules.max))
            elif rule == "pattern":
                try:
                    validators.append(Validators.pattern(rules.pattern))
                except re.error as e:
                    self._schema_problem(
                        f"Invalid pattern {rules.pattern!r} on field '{field.name}' ({e}); rule skipped"
                    )
            elif rule == "email":
                validators.append(Validators.email)
            elif rule == "custom":
                custom = self.registry.resolve(rules.custom, rules.custom_params)
                if custom is None:
                    self._schema_problem(
                        f"Unknown custom validator '{rules.custom}' on field '{field.name}'; rule skipped"
                    )
                    continue
                validators.append(custom)
        return validators

    # ========== REACTIVE PROPAGATION ==========

    def _on_group_value_changed(self, _value: Dict[str, Any]) -> None:
        if self._in_recompute or self._in_build or self._subscription is None:
            return
        # Emitted mapping reflects settled dependents
        self._recompute_dependents()
        self.value_changed.emit(self.group.value)

    def _recompute_dependents(self) -> List[str]:
        with FlagContextManager.manage_flags(self, _in_recompute=True):
            changed = self._dependency_service.recompute(
                self.sorted_fields, self.group, self._field_states,
                max_passes=self.settings.max_dependency_passes,
            )
        if changed:
            logger.debug(f"Dependent fields changed: {changed}")
        return changed

    # ========== LOOKUP ==========

    @property
    def controls(self) -> Dict[str, FormControl]:
        return self.group.controls

    def get_control(self, field_name: str) -> FormControl:
        control = self.group.get(field_name)
        if control is None:
            raise UnknownFieldError(field_name)
        return control

    def get_field(self, field_name: str) -> FieldConfig:
        field = self._fields_by_name.get(field_name)
        if field is None:
            raise UnknownFieldError(field_name)
        return field

    def field_state(self, field_name: str) -> FieldState:
        self.get_control(field_name)
        return self._field_states[field_name]

    @property
    def value(self) -> Dict[str, Any]:
        """Values of enabled controls (what submit emits)."""
        return self.group.value

    @property
    def raw_value(self) -> Dict[str, Any]:
        return self.group.raw_value

    @property
    def valid(self) -> bool:
        return self.group.valid

    @property
    def invalid(self) -> bool:
        return self.group.invalid

    # ========== QUERIES ==========

    def is_field_visible(self, field: FieldRef) -> bool:
        if isinstance(field, str):
            field = self._fields_by_name.get(field)
            if field is None:
                return True
        if field.visible is False:
            return False
        return self._dependency_service.condition_met(field, self.group) is not False

    def has_error(self, field_name: str) -> bool:
        control = self.group.get(field_name)
        return bool(control is not None and control.invalid and control.touched)

    def get_error_message(self, field_name: str) -> str:
        if not self.has_error(field_name):
            return ""
        kind, payload = self.group.get(field_name).first_error()
        overrides = self._fields_by_name[field_name].validation_messages
        return resolve_error_message(kind, payload, overrides, self.settings.locale)

    # ========== MUTATIONS ==========

    def set_value(self, field_name: str, value: Any) -> None:
        """Assign a user-originated value; marks the control dirty."""
        control = self.get_control(field_name)
        control.mark_as_dirty()
        control.set_value(value)

    def patch_value(self, values: Mapping[str, Any]) -> None:
        """Assign several values with a single aggregate notification."""
        self.group.patch_value(values)

    def set_files(self, field_name: str, paths: Sequence[str]) -> None:
        """File input selection: one path stays scalar, several become a list."""
        paths = list(paths)
        if not paths:
            value = self.initial_value(self.get_field(field_name))
        elif len(paths) == 1:
            value = paths[0]
        else:
            value = paths
        self.set_value(field_name, value)

    def mark_touched(self, field_name: str) -> None:
        self.get_control(field_name).mark_as_touched()

    # ========== LIFECYCLE ==========

    def submit(self) -> bool:
        """Emit ``form_submitted`` if valid; otherwise surface every error."""
        if self.group.invalid:
            self.group.mark_all_as_touched()
            invalid = [name for name, c in self.group.controls.items() if c.invalid]
            logger.info(f"Submit blocked for '{self.config.title}': invalid fields {invalid}")
            return False

        value = self.group.value
        logger.debug(f"Submitting '{self.config.title}' with fields {list(value)}")
        self.form_submitted.emit(value)
        return True

    def reset(self) -> None:
        """Restore every control to its schema-or-type default."""
        with FlagContextManager.reset_context(self):
            defaults = {field.name: self.initial_value(field) for field in self.sorted_fields}
            self.group.reset(defaults, emit_event=False)
            self._recompute_dependents()
            if self._subscription is not None:
                self.value_changed.emit(self.group.value)
        logger.debug(f"Reset form '{self.config.title}'")
        self.form_reset.emit()

    # ========== PRESENTATION ==========

    @property
    def submit_button_text(self) -> str:
        if self.config.submit_button_text is not None:
            return self.config.submit_button_text
        return get_button_label("submit", self.settings.locale)

    @property
    def reset_button_text(self) -> str:
        if self.config.reset_button_text is not None:
            return self.config.reset_button_text
        return get_button_label("reset", self.settings.locale)

    @property
    def show_reset_button(self) -> bool:
        return True if self.config.show_reset_button is None else self.config.show_reset_button

    @property
    def layout(self) -> FormLayout:
        return self.config.layout or FormLayout.VERTICAL

    @property
    def layout_class(self) -> str:
        return f"form-layout-{self.layout.value}"

    def is_in_reset(self) -> bool:
        """True while reset() is restoring defaults and announcing them."""
        return FlagContextManager.is_flag_set(self, EngineFlag.IN_RESET)
