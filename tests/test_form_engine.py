"""Tests for the form engine: build, dependent fields, submit and reset."""

import logging

import pytest

from pyqt_formbuilder.core.reactive import FormControl, FormGroup
from pyqt_formbuilder.exceptions import SchemaError, UnknownFieldError
from pyqt_formbuilder.forms.form_engine import FormEngine
from pyqt_formbuilder.models import FormConfig
from pyqt_formbuilder.protocols.form_config import FormBuilderConfig, set_form_config
from pyqt_formbuilder.services.dependency_service import FieldState

pytestmark = pytest.mark.usefixtures("qapp")

PROFILE_SCHEMA = {
    "title": "Perfil",
    "fields": [
        {"name": "newsletter", "type": "checkbox", "label": "Newsletter"},
        {"name": "petName", "type": "text", "label": "Pet name", "order": 5,
         "validations": {"required": True},
         "dependsOn": {"field": "hasPet", "value": "yes"}},
        {"name": "hasPet", "type": "select", "label": "Pet?", "order": 4,
         "options": [{"label": "Yes", "value": "yes"}, {"label": "No", "value": "no"}]},
        {"name": "age", "type": "number", "label": "Age", "order": 3, "value": 30,
         "validations": {"min": 18, "max": 99}},
        {"name": "email", "type": "email", "label": "Email", "order": 2,
         "validations": {"required": True, "email": True}},
        {"name": "name", "type": "text", "label": "Name", "order": 1,
         "validations": {"required": True, "minLength": 3},
         "validationMessages": {"required": "Name please"}},
    ],
}


@pytest.fixture
def engine():
    return FormEngine(FormConfig.from_dict(PROFILE_SCHEMA))


def make_engine(fields, **form):
    return FormEngine(FormConfig.from_dict({"title": "T", "fields": fields, **form}))


def record(signal):
    received = []
    signal.connect(received.append)
    return received


# ========== BUILD ==========

def test_controls_follow_field_order(engine):
    assert list(engine.controls) == ["name", "email", "age", "hasPet", "petName", "newsletter"]


def test_initial_value_skips_hidden_dependents(engine):
    assert engine.value == {
        "name": "", "email": "", "age": 30, "hasPet": "", "newsletter": False,
    }
    assert engine.raw_value["petName"] == ""
    assert engine.field_state("petName") is FieldState.HIDDEN


def test_rules_compile_in_fixed_order(engine):
    control = engine.get_control("name")
    control.set_value("a")
    assert list(control.errors) == ["minLength"]
    control.set_value("")
    assert list(control.errors) == ["required"]


def test_number_bounds(engine):
    engine.set_value("age", 12)
    assert engine.get_control("age").errors == {"min": {"min": 18, "actual": 12}}
    engine.set_value("age", 120)
    assert engine.get_control("age").errors == {"max": {"max": 99, "actual": 120}}


def test_statically_disabled_field_is_excluded():
    engine = make_engine([
        {"name": "code", "type": "text", "value": "ABC", "disabled": True, "validations": {"required": True}},
        {"name": "note", "type": "text"},
    ])
    assert engine.value == {"note": ""}
    assert engine.field_state("code") is FieldState.DISABLED
    assert engine.valid


def test_duplicate_names_raise():
    with pytest.raises(SchemaError):
        make_engine([{"name": "a", "type": "text"}, {"name": "a", "type": "email"}])


# ========== DEPENDENT FIELDS ==========

def test_dependent_field_enables_when_condition_met(engine):
    engine.set_value("hasPet", "yes")
    assert engine.field_state("petName") is FieldState.ENABLED
    assert engine.is_field_visible("petName")
    assert "petName" in engine.value


def test_hiding_clears_dependent_value(engine):
    engine.set_value("hasPet", "yes")
    engine.set_value("petName", "Rex")

    engine.set_value("hasPet", "no")
    assert engine.field_state("petName") is FieldState.HIDDEN
    assert not engine.is_field_visible("petName")
    assert engine.get_control("petName").value == ""
    assert "petName" not in engine.value

    engine.set_value("hasPet", "yes")
    assert engine.value["petName"] == ""


def test_value_changed_carries_settled_dependents(engine):
    emitted = record(engine.value_changed)
    engine.set_value("hasPet", "yes")
    assert len(emitted) == 1
    assert emitted[0]["petName"] == ""

    engine.set_value("hasPet", "no")
    assert "petName" not in emitted[-1]


def test_recompute_is_idempotent(engine):
    engine.set_value("hasPet", "yes")
    engine.set_value("petName", "Rex")
    before = engine.raw_value
    assert engine._recompute_dependents() == []
    assert engine.raw_value == before


def test_chained_dependents_settle_in_one_event():
    # "shipping" is listed before its own source so a second pass is needed
    engine = make_engine([
        {"name": "shipping", "type": "text", "order": 1, "dependsOn": {"field": "method", "value": "post"}},
        {"name": "gift", "type": "checkbox", "order": 2},
        {"name": "method", "type": "select", "order": 3,
         "options": [{"label": "Post", "value": "post"}, {"label": "Pickup", "value": "pickup"}],
         "dependsOn": {"field": "gift", "value": True}},
    ])
    engine.set_value("gift", True)
    engine.set_value("method", "post")
    engine.set_value("shipping", "Calle Mayor 1")
    assert engine.value == {"shipping": "Calle Mayor 1", "gift": True, "method": "post"}

    emitted = record(engine.value_changed)
    engine.set_value("gift", False)
    assert engine.field_state("method") is FieldState.HIDDEN
    assert engine.field_state("shipping") is FieldState.HIDDEN
    assert engine.raw_value["shipping"] == ""
    assert emitted == [{"gift": False}]


def test_dependency_uses_strict_equality():
    engine = make_engine([
        {"name": "count", "type": "number"},
        {"name": "detail", "type": "text", "dependsOn": {"field": "count", "value": "1"}},
    ])
    engine.set_value("count", 1)
    assert engine.field_state("detail") is FieldState.HIDDEN


def test_disabled_dependent_stays_disabled_when_shown():
    engine = make_engine([
        {"name": "toggle", "type": "checkbox"},
        {"name": "locked", "type": "text", "disabled": True, "dependsOn": {"field": "toggle", "value": True}},
    ])
    engine.set_value("toggle", True)
    assert engine.field_state("locked") is FieldState.DISABLED
    assert engine.is_field_visible("locked")
    assert "locked" not in engine.value


def test_dangling_dependency_is_always_visible(caplog):
    with caplog.at_level(logging.WARNING):
        engine = make_engine([
            {"name": "a", "type": "text", "dependsOn": {"field": "ghost", "value": 1}},
        ])
    assert "ghost" in caplog.text
    assert engine.is_field_visible("a")
    assert engine.value == {"a": ""}


def test_static_visibility_flag():
    engine = make_engine([{"name": "a", "type": "text", "visible": False}])
    assert not engine.is_field_visible("a")


# ========== ERRORS ==========

def test_errors_hidden_until_touched(engine):
    assert not engine.has_error("name")
    assert engine.get_error_message("name") == ""

    engine.mark_touched("name")
    assert engine.has_error("name")
    assert engine.get_error_message("name") == "Name please"


def test_catalog_message_for_first_failing_rule(engine):
    engine.set_value("name", "Al")
    engine.mark_touched("name")
    assert engine.get_error_message("name") == "Mínimo 3 caracteres"


def test_english_locale():
    set_form_config(FormBuilderConfig(locale="en"))
    engine = FormEngine(FormConfig.from_dict(PROFILE_SCHEMA))
    engine.mark_touched("email")
    assert engine.get_error_message("email") == "This field is required"
    assert engine.submit_button_text == "Submit"
    assert engine.reset_button_text == "Reset"


def test_unknown_field_queries_do_not_raise(engine):
    assert not engine.has_error("ghost")
    assert engine.get_error_message("ghost") == ""
    assert engine.is_field_visible("ghost")


def test_unknown_field_mutation_raises(engine):
    with pytest.raises(UnknownFieldError):
        engine.set_value("ghost", 1)
    with pytest.raises(KeyError):
        engine.get_control("ghost")


# ========== CUSTOM VALIDATORS ==========

def test_custom_validator_from_injected_registry(registry):
    registry.register("evenNumber", lambda c: None if c.value % 2 == 0 else {"evenNumber": True})
    config = FormConfig.from_dict({"title": "T", "fields": [
        {"name": "n", "type": "number", "validations": {"custom": "evenNumber"}},
    ]})
    engine = FormEngine(config, registry=registry)
    engine.set_value("n", 3)
    engine.mark_touched("n")
    assert engine.get_control("n").errors == {"evenNumber": True}
    assert engine.get_error_message("n") == "Campo inválido"


def test_unknown_custom_validator_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        engine = make_engine([{"name": "a", "type": "text", "validations": {"custom": "nope"}}])
    assert "nope" in caplog.text
    assert engine.valid


def test_match_field_follows_sibling_changes():
    engine = make_engine([
        {"name": "password", "type": "password"},
        {"name": "confirm", "type": "password",
         "validations": {"custom": "matchField", "customParams": "password"}},
    ])
    engine.set_value("password", "Secret1!")
    engine.set_value("confirm", "Secret1!")
    assert engine.valid

    engine.set_value("password", "Changed1!")
    assert engine.get_control("confirm").errors == {
        "matchField": {"fieldName": "password", "value": "Secret1!"}
    }


def test_pattern_ending_in_escaped_dollar_builds():
    engine = make_engine([{"name": "price", "type": "text", "validations": {"pattern": "[0-9]+\\$"}}])
    engine.set_value("price", "100$")
    assert engine.valid
    engine.set_value("price", "100")
    assert list(engine.get_control("price").errors) == ["pattern"]


def test_invalid_pattern_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        engine = make_engine([{"name": "a", "type": "text", "validations": {"pattern": "[0-9"}}])
    assert "Invalid pattern" in caplog.text
    engine.set_value("a", "anything")
    assert engine.valid


@pytest.mark.parametrize("fields", [
    [{"name": "a", "type": "text", "dependsOn": {"field": "ghost", "value": 1}}],
    [{"name": "a", "type": "text", "validations": {"custom": "nope"}}],
    [{"name": "a", "type": "date", "validations": {"minLength": 2}}],
    [{"name": "a", "type": "text", "validations": {"pattern": "[0-9"}}],
])
def test_strict_schema_raises(fields):
    set_form_config(FormBuilderConfig(strict_schema=True))
    with pytest.raises(SchemaError):
        make_engine(fields)


# ========== SUBMIT / RESET ==========

def test_submit_blocked_marks_everything_touched(engine):
    submitted = record(engine.form_submitted)
    assert engine.submit() is False
    assert submitted == []
    assert all(c.touched for c in engine.controls.values())
    assert engine.get_error_message("name") == "Name please"
    assert engine.get_error_message("email") == "Este campo es obligatorio"


def test_submit_emits_enabled_values(engine):
    submitted = record(engine.form_submitted)
    engine.set_value("name", "Ana")
    engine.set_value("email", "ana@example.com")

    assert engine.submit() is True
    assert submitted == [{
        "name": "Ana", "email": "ana@example.com", "age": 30, "hasPet": "", "newsletter": False,
    }]


def test_hidden_required_field_does_not_block_submit(engine):
    engine.patch_value({"name": "Ana", "email": "ana@example.com", "hasPet": "yes"})
    assert engine.invalid
    engine.set_value("hasPet", "no")
    assert engine.submit() is True


def test_reset_restores_defaults(engine):
    engine.patch_value({"name": "Ana", "age": 40, "hasPet": "yes"})
    engine.set_value("petName", "Rex")
    engine.mark_touched("name")

    changes = record(engine.value_changed)
    resets = []
    engine.form_reset.connect(lambda: resets.append(engine.is_in_reset()))
    in_reset_on_change = []
    engine.value_changed.connect(lambda _value: in_reset_on_change.append(engine.is_in_reset()))
    engine.reset()

    assert engine.value == {"name": "", "email": "", "age": 30, "hasPet": "", "newsletter": False}
    assert engine.field_state("petName") is FieldState.HIDDEN
    assert not engine.get_control("name").touched
    assert changes == [engine.value]
    assert resets == [False]
    assert in_reset_on_change == [True]


def test_same_events_give_same_values():
    config = FormConfig.from_dict(PROFILE_SCHEMA)
    events = [("hasPet", "yes"), ("petName", "Rex"), ("name", "Ana"), ("hasPet", "no"), ("age", 41)]
    results = []
    for _ in range(2):
        engine = FormEngine(config)
        for name, value in events:
            engine.set_value(name, value)
        results.append(engine.raw_value)
    assert results[0] == results[1]


# ========== MISC ==========

def test_presentation_defaults(engine):
    assert engine.submit_button_text == "Enviar"
    assert engine.reset_button_text == "Resetear"
    assert engine.show_reset_button is True
    assert engine.layout_class == "form-layout-vertical"


def test_presentation_overrides():
    engine = make_engine([], submitButtonText="Go", showResetButton=False, layout="inline")
    assert engine.submit_button_text == "Go"
    assert engine.show_reset_button is False
    assert engine.layout_class == "form-layout-inline"


def test_set_files():
    engine = make_engine([{"name": "docs", "type": "file", "multiple": True}])
    engine.set_files("docs", ["/tmp/a.pdf"])
    assert engine.value["docs"] == "/tmp/a.pdf"
    engine.set_files("docs", ["/tmp/a.pdf", "/tmp/b.pdf"])
    assert engine.value["docs"] == ["/tmp/a.pdf", "/tmp/b.pdf"]
    engine.set_files("docs", [])
    assert engine.value["docs"] == ""


def test_set_value_marks_dirty(engine):
    engine.set_value("name", "Ana")
    assert engine.get_control("name").dirty
    assert not engine.get_control("email").dirty


def test_teardown_stops_propagation(engine):
    emitted = record(engine.value_changed)
    engine.teardown()
    assert not engine.is_active

    engine.set_value("hasPet", "yes")
    assert emitted == []
    assert engine.field_state("petName") is FieldState.HIDDEN


def test_initialize_rebuilds(engine):
    engine.initialize(FormConfig.from_dict({"title": "Otro", "fields": [{"name": "x", "type": "url"}]}))
    assert list(engine.controls) == ["x"]
    assert engine.is_active


def test_initialize_releases_previous_controls(engine):
    old_group = engine.group
    engine.initialize(FormConfig.from_dict({"title": "Otro", "fields": [{"name": "x", "type": "url"}]}))

    assert old_group.parent() is None
    assert engine.findChildren(FormGroup) == [engine.group]
    assert engine.findChildren(FormControl) == [engine.get_control("x")]
