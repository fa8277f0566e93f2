"""
Named semantic validators.

These are installed into every ValidatorRegistry under their schema names
(``custom: "strongPassword"`` etc.). All of them treat a falsy value as
valid; pair with ``required`` to demand a value.
"""

import ipaddress
import logging
import re
from datetime import date, datetime, time
from typing import Any, Optional
from urllib.parse import urlsplit

from pyqt_formbuilder.core.reactive import FormControl, ValidatorFn
from pyqt_formbuilder.core.value_utils import values_match

logger = logging.getLogger(__name__)

_ALPHANUMERIC = re.compile(r"^[a-zA-Z0-9]*$")
_WHITESPACE = re.compile(r"\s")
_DNI = re.compile(r"^\d{8}[A-Za-z]$", re.ASCII)
_PHONE = re.compile(r"^[\d\s+\-()]+$", re.ASCII)
_NON_DIGIT = re.compile(r"\D", re.ASCII)
_SPECIAL_CHARS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
_URL_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_URL_FORBIDDEN = re.compile(r"[\s\x00-\x1f\x7f]")
_HOST_LABEL = re.compile(r"^(?!-)[A-Za-z0-9_-]{1,63}(?<!-)$")

# Schemes whose URLs must carry an authority (host)
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def alphanumeric(control: FormControl) -> Optional[dict]:
    if not control.value:
        return None
    valid = _ALPHANUMERIC.match(str(control.value)) is not None
    return None if valid else {"alphanumeric": {"value": control.value}}


def no_spaces(control: FormControl) -> Optional[dict]:
    if not control.value:
        return None
    valid = _WHITESPACE.search(str(control.value)) is None
    return None if valid else {"noSpaces": {"value": control.value}}


def strong_password(control: FormControl) -> Optional[dict]:
    """At least 8 characters with upper, lower, digit and special character."""
    if not control.value:
        return None
    password = str(control.value)
    checks = {
        "hasUpperCase": re.search(r"[A-Z]", password) is not None,
        "hasLowerCase": re.search(r"[a-z]", password) is not None,
        "hasNumber": re.search(r"[0-9]", password) is not None,
        "hasSpecialChar": _SPECIAL_CHARS.search(password) is not None,
        "isLengthValid": len(password) >= 8,
    }
    return None if all(checks.values()) else {"strongPassword": checks}


def dni(control: FormControl) -> Optional[dict]:
    """Spanish DNI: 8 digits followed by one letter."""
    if not control.value:
        return None
    valid = _DNI.match(str(control.value)) is not None
    return None if valid else {"dni": {"value": control.value}}


def phone(control: FormControl) -> Optional[dict]:
    if not control.value:
        return None
    text = str(control.value)
    valid = _PHONE.match(text) is not None and len(_NON_DIGIT.sub("", text)) >= 9
    return None if valid else {"phone": {"value": control.value}}


def _is_valid_host(host: str) -> bool:
    """IP literal or DNS name (IDNA labels allowed)."""
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    labels = ascii_host[:-1].split(".") if ascii_host.endswith(".") else ascii_host.split(".")
    return all(_HOST_LABEL.match(label) for label in labels)


def is_absolute_url(text: str) -> bool:
    text = text.strip()
    if _URL_FORBIDDEN.search(text):
        return False
    try:
        parts = urlsplit(text)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if not parts.scheme or not _URL_SCHEME.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname) and _is_valid_host(parts.hostname)
    return bool(parts.netloc or parts.path)


def url(control: FormControl) -> Optional[dict]:
    if not control.value:
        return None
    valid = is_absolute_url(str(control.value))
    return None if valid else {"url": {"value": control.value}}


def parse_date(value: Any) -> Optional[datetime]:
    """Naive local datetime for date-like values, or None if unparseable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _today_midnight() -> datetime:
    return datetime.combine(date.today(), time.min)


def future_date(control: FormControl) -> Optional[dict]:
    if not control.value:
        return None
    parsed = parse_date(control.value)
    valid = parsed is not None and parsed > _today_midnight()
    return None if valid else {"futureDate": {"value": control.value}}


def past_date(control: FormControl) -> Optional[dict]:
    if not control.value:
        return None
    parsed = parse_date(control.value)
    valid = parsed is not None and parsed < _today_midnight()
    return None if valid else {"pastDate": {"value": control.value}}


def match_field(field_name: str) -> ValidatorFn:
    """Equality with a sibling control, e.g. password confirmation.

    A control outside a group, or a sibling that does not exist, passes.
    """
    def validator(control: FormControl) -> Optional[dict]:
        if control.group is None or not control.value:
            return None
        sibling = control.group.get(field_name)
        if sibling is None:
            return None
        if values_match(control.value, sibling.value):
            return None
        return {"matchField": {"fieldName": field_name, "value": control.value}}
    return validator
