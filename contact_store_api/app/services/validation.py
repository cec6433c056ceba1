"""
Field validation and normalization for contacts.

``validate_contact`` and ``validate_partial`` are pure: they never
modify their input and return a mapping of field name to error
message, empty when the input is valid.  All violated fields are
reported at once.  Patterns are matched against the trimmed value,
since surrounding whitespace is dropped on save.  ``normalize_contact``
produces the values that are actually stored (trimmed, email
lower‑cased).
"""

import re
from typing import Any, Callable, Dict, Mapping, Optional

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]{10,25}$")

NAME_MAX_LENGTH = 120

CONTACT_FIELDS = ("name", "email", "phone")


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _check_name(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Name is required"
    if len(value.strip()) > NAME_MAX_LENGTH:
        return f"Name must be at most {NAME_MAX_LENGTH} characters"
    return None


def _check_email(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Email is required"
    if not EMAIL_RE.fullmatch(value.strip()):
        return "Invalid email format"
    return None


def _check_phone(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Phone is required"
    if not PHONE_RE.fullmatch(value.strip()):
        return "Phone must be 10-25 characters"
    return None


_CHECKS: Dict[str, Callable[[Any], Optional[str]]] = {
    "name": _check_name,
    "email": _check_email,
    "phone": _check_phone,
}


def validate_contact(contact: Mapping[str, Any]) -> Dict[str, str]:
    """Validate a complete contact; every field is required."""
    errors = {}
    for field in CONTACT_FIELDS:
        message = _CHECKS[field](contact.get(field))
        if message:
            errors[field] = message
    return errors


def validate_partial(updates: Mapping[str, Any]) -> Dict[str, str]:
    """Validate only the contact fields present in ``updates``."""
    errors = {}
    for field in CONTACT_FIELDS:
        if field in updates:
            message = _CHECKS[field](updates[field])
            if message:
                errors[field] = message
    return errors


def normalize_contact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy with values trimmed and the email lower‑cased.

    Only the keys present in ``fields`` are returned, so the result of a
    partial update stays partial.
    """
    normalized = dict(fields)
    for field in ("name", "phone"):
        if isinstance(normalized.get(field), str):
            normalized[field] = normalized[field].strip()
    if isinstance(normalized.get("email"), str):
        normalized["email"] = normalized["email"].strip().lower()
    return normalized
