"""Tests for declarative rules, named validators and the registry."""

from datetime import date, timedelta

import pytest

from pyqt_formbuilder.core import FormControl, FormGroup
from pyqt_formbuilder.validation import Validators, ValidatorRegistry
from pyqt_formbuilder.validation import named_validators as nv

pytestmark = pytest.mark.usefixtures("qapp")


def errors_for(validator, value):
    return validator(FormControl(value))


# ========== DECLARATIVE RULES ==========

@pytest.mark.parametrize("value", [None, "", [], ()])
def test_required_rejects_empty_values(value):
    assert errors_for(Validators.required, value) == {"required": True}


@pytest.mark.parametrize("value", ["x", 0, False, ["a"]])
def test_required_accepts_present_values(value):
    assert errors_for(Validators.required, value) is None


def test_min_length_payload():
    assert errors_for(Validators.min_length(3), "ab") == {
        "minLength": {"requiredLength": 3, "actualLength": 2}
    }
    assert errors_for(Validators.min_length(3), "abc") is None
    assert errors_for(Validators.min_length(3), "") is None


def test_max_length_payload():
    assert errors_for(Validators.max_length(2), "abc") == {
        "maxLength": {"requiredLength": 2, "actualLength": 3}
    }


def test_min_and_max_bounds():
    assert errors_for(Validators.min(18), 17) == {"min": {"min": 18, "actual": 17}}
    assert errors_for(Validators.min(18), "17") == {"min": {"min": 18, "actual": "17"}}
    assert errors_for(Validators.min(18), 18) is None
    assert errors_for(Validators.max(10), 11) == {"max": {"max": 10, "actual": 11}}
    assert errors_for(Validators.max(10), "") is None
    assert errors_for(Validators.max(10), "abc") is None


def test_pattern_matches_whole_value():
    validator = Validators.pattern("[0-9]{3}")
    assert errors_for(validator, "123") is None
    assert errors_for(validator, "1234") == {
        "pattern": {"requiredPattern": "^[0-9]{3}$", "actualValue": "1234"}
    }


def test_pattern_ending_in_escaped_dollar():
    validator = Validators.pattern(r"[0-9]+\$")
    assert errors_for(validator, "100$") is None
    assert errors_for(validator, "100") == {
        "pattern": {"requiredPattern": r"^[0-9]+\$", "actualValue": "100"}
    }


def test_pattern_keeps_explicit_anchors():
    validator = Validators.pattern("^ab|cd$")
    assert errors_for(validator, "abz") is None
    assert errors_for(validator, "zcd") is None
    assert errors_for(validator, "zz") is not None


def test_email():
    assert errors_for(Validators.email, "ana@example.com") is None
    assert errors_for(Validators.email, "ana@") == {"email": True}
    assert errors_for(Validators.email, "") is None


# ========== NAMED VALIDATORS ==========

def test_strong_password_valid():
    assert errors_for(nv.strong_password, "Abcdef1!") is None


def test_strong_password_reports_each_check():
    assert errors_for(nv.strong_password, "abcdefgh") == {
        "strongPassword": {
            "hasUpperCase": False,
            "hasLowerCase": True,
            "hasNumber": False,
            "hasSpecialChar": False,
            "isLengthValid": True,
        }
    }


def test_dni():
    assert errors_for(nv.dni, "12345678Z") is None
    assert errors_for(nv.dni, "1234567Z") == {"dni": {"value": "1234567Z"}}


def test_phone():
    assert errors_for(nv.phone, "664-123-4567") is None
    assert errors_for(nv.phone, "+34 (91) 123 45 67") is None
    assert errors_for(nv.phone, "12345") == {"phone": {"value": "12345"}}
    assert errors_for(nv.phone, "664-123-456a") is not None


def test_alphanumeric_and_no_spaces():
    assert errors_for(nv.alphanumeric, "abc123") is None
    assert errors_for(nv.alphanumeric, "abc-123") == {"alphanumeric": {"value": "abc-123"}}
    assert errors_for(nv.no_spaces, "abc") is None
    assert errors_for(nv.no_spaces, "a b") == {"noSpaces": {"value": "a b"}}


@pytest.mark.parametrize("value, valid", [
    ("https://example.com/path?q=1", True),
    ("mailto:ana@example.com", True),
    ("example.com", False),
    ("http://", False),
    ("http://example.com:99999", False),
    ("http://exa mple.com", False),
    ("https://a b/c", False),
    ("http://exa\tmple.com", False),
    ("http://ex<ample.com/", False),
    ("http://-bad.example.com", False),
    ("http://a..b/", False),
    ("http://192.168.0.1:8080/status", True),
    ("http://[::1]/", True),
    ("https://m\u00fcnchen.de/", True),
])
def test_url(value, valid):
    assert (errors_for(nv.url, value) is None) is valid


def test_future_and_past_dates():
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    today = date.today().isoformat()

    assert errors_for(nv.future_date, tomorrow) is None
    assert errors_for(nv.future_date, today) == {"futureDate": {"value": today}}
    assert errors_for(nv.past_date, yesterday) is None
    assert errors_for(nv.past_date, today) == {"pastDate": {"value": today}}
    assert errors_for(nv.past_date, "not a date") is not None


def test_named_validators_pass_empty_values():
    for validator in (nv.alphanumeric, nv.no_spaces, nv.strong_password, nv.dni,
                      nv.phone, nv.url, nv.future_date, nv.past_date):
        assert errors_for(validator, "") is None


def test_match_field_against_sibling():
    password = FormControl("Secret1!")
    confirm = FormControl("Secret1!", [nv.match_field("password")])
    FormGroup({"password": password, "confirmPassword": confirm})
    assert confirm.valid

    confirm.set_value("Other1!")
    assert confirm.errors == {"matchField": {"fieldName": "password", "value": "Other1!"}}


def test_match_field_without_group_or_sibling_passes():
    assert errors_for(nv.match_field("password"), "x") is None

    lonely = FormControl("x", [nv.match_field("missing")])
    FormGroup({"confirm": lonely})
    assert lonely.valid


# ========== REGISTRY ==========

def test_registry_has_builtins(registry):
    for name in ("alphanumeric", "noSpaces", "strongPassword", "dni", "phone",
                 "url", "futureDate", "pastDate", "matchField"):
        assert name in registry


def test_registry_resolve_unknown_returns_none(registry):
    assert registry.resolve("doesNotExist") is None


def test_registry_register_and_replace(registry):
    def even(control):
        return None if control.value % 2 == 0 else {"even": True}

    registry.register("even", even)
    assert registry.resolve("even") is even

    registry.register("dni", even)
    assert registry.resolve("dni") is even


def test_registry_match_field_is_parameterized(registry):
    validator = registry.resolve("matchField", "password")
    password = FormControl("a")
    confirm = FormControl("b", [validator])
    FormGroup({"password": password, "confirm": confirm})
    assert confirm.errors == {"matchField": {"fieldName": "password", "value": "b"}}


def test_registry_without_params_returns_registered_validator(registry):
    assert registry.resolve("dni") is nv.dni
    assert registry.resolve("dni", "ignored") is nv.dni


def test_registries_are_independent():
    first, second = ValidatorRegistry(), ValidatorRegistry()
    first.register("only_here", lambda c: None)
    assert "only_here" in first
    assert "only_here" not in second


def test_empty_registry():
    assert ValidatorRegistry(register_defaults=False).names() == []
