"""
Error message resolution.

Maps a control's first failing rule to display text. A per-field override
wins verbatim; otherwise the locale catalog template is filled from the
rule's payload. Unknown kinds fall back to the generic ``invalid`` message.
"""

import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "es"

MESSAGE_CATALOGS: Dict[str, Dict[str, str]] = {
    "es": {
        "required": "Este campo es obligatorio",
        "email": "Ingrese un email válido",
        "minLength": "Mínimo {requiredLength} caracteres",
        "maxLength": "Máximo {requiredLength} caracteres",
        "min": "El valor mínimo es {min}",
        "max": "El valor máximo es {max}",
        "pattern": "Formato inválido",
        "alphanumeric": "Solo se permiten letras y números",
        "noSpaces": "No se permiten espacios",
        "strongPassword": (
            "La contraseña debe tener al menos 8 caracteres, 1 mayúscula, "
            "1 minúscula, 1 número y 1 carácter especial"
        ),
        "dni": "DNI inválido (8 dígitos y 1 letra)",
        "phone": "Teléfono inválido",
        "url": "URL inválida",
        "futureDate": "La fecha debe ser futura",
        "pastDate": "La fecha debe ser pasada",
        "matchField": "El valor no coincide con {fieldName}",
        "invalid": "Campo inválido",
    },
    "en": {
        "required": "This field is required",
        "email": "Enter a valid email address",
        "minLength": "Minimum {requiredLength} characters",
        "maxLength": "Maximum {requiredLength} characters",
        "min": "The minimum value is {min}",
        "max": "The maximum value is {max}",
        "pattern": "Invalid format",
        "alphanumeric": "Only letters and numbers are allowed",
        "noSpaces": "Spaces are not allowed",
        "strongPassword": (
            "The password must be at least 8 characters long and include an uppercase letter, "
            "a lowercase letter, a number and a special character"
        ),
        "dni": "Invalid DNI (8 digits and 1 letter)",
        "phone": "Invalid phone number",
        "url": "Invalid URL",
        "futureDate": "The date must be in the future",
        "pastDate": "The date must be in the past",
        "matchField": "The value does not match {fieldName}",
        "invalid": "Invalid field",
    },
}

BUTTON_LABELS: Dict[str, Dict[str, str]] = {
    "es": {"submit": "Enviar", "reset": "Resetear"},
    "en": {"submit": "Submit", "reset": "Reset"},
}


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def get_catalog(locale: Optional[str] = None) -> Dict[str, str]:
    catalog = MESSAGE_CATALOGS.get(locale or DEFAULT_LOCALE)
    if catalog is None:
        logger.debug(f"No message catalog for locale {locale!r}, using {DEFAULT_LOCALE!r}")
        catalog = MESSAGE_CATALOGS[DEFAULT_LOCALE]
    return catalog


def get_button_label(button: str, locale: Optional[str] = None) -> str:
    labels = BUTTON_LABELS.get(locale or DEFAULT_LOCALE, BUTTON_LABELS[DEFAULT_LOCALE])
    return labels[button]


def resolve_error_message(error_kind: str, payload: Any = None,
                          overrides: Optional[Mapping[str, str]] = None,
                          locale: Optional[str] = None) -> str:
    """Display text for one failing rule."""
    if overrides and overrides.get(error_kind):
        return overrides[error_kind]

    catalog = get_catalog(locale)
    template = catalog.get(error_kind)
    if template is None:
        return catalog["invalid"]
    if isinstance(payload, Mapping):
        return template.format_map(_KeepMissing(payload))
    return template
