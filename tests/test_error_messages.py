"""Tests for error message resolution."""

from pyqt_formbuilder.validation import get_button_label, resolve_error_message


def test_catalog_templates_are_filled_from_payload():
    assert resolve_error_message("minLength", {"requiredLength": 3, "actualLength": 1}) == "Mínimo 3 caracteres"
    assert resolve_error_message("max", {"max": 99, "actual": 120}) == "El valor máximo es 99"
    assert resolve_error_message("matchField", {"fieldName": "password", "value": "x"}) == (
        "El valor no coincide con password"
    )


def test_override_wins_verbatim():
    overrides = {"required": "Name please {requiredLength}"}
    assert resolve_error_message("required", True, overrides) == "Name please {requiredLength}"


def test_empty_override_falls_back_to_catalog():
    assert resolve_error_message("required", True, {"required": ""}) == "Este campo es obligatorio"


def test_unknown_kind_uses_generic_message():
    assert resolve_error_message("evenNumber", True) == "Campo inválido"
    assert resolve_error_message("evenNumber", True, locale="en") == "Invalid field"


def test_missing_placeholder_is_kept():
    assert resolve_error_message("minLength", {"actualLength": 1}) == "Mínimo {requiredLength} caracteres"


def test_english_catalog():
    assert resolve_error_message("required", True, locale="en") == "This field is required"
    assert resolve_error_message("min", {"min": 18, "actual": 3}, locale="en") == "The minimum value is 18"


def test_unknown_locale_falls_back_to_spanish():
    assert resolve_error_message("required", True, locale="fr") == "Este campo es obligatorio"


def test_button_labels():
    assert get_button_label("submit") == "Enviar"
    assert get_button_label("reset") == "Resetear"
    assert get_button_label("submit", "en") == "Submit"
