import re
from typing import Any

from dosomething.exceptions import ValidationError

EMAIL_RE = re.compile(
    r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))@"
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)
PHONE_CHARS_RE = re.compile(r"^\+?[0-9()\-.\s]+$")
NUMBER_RE = re.compile(r"^\d+$")

MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15

EMPTY = "Must not be empty!"


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def is_email(value: str | None) -> bool:
    return bool(value) and EMAIL_RE.match(value.strip()) is not None


def normalize_phone(value: str) -> str:
    """Strip punctuation, keeping digits only."""
    return re.sub(r"\D", "", value)


def is_phone(value: str | None) -> bool:
    if not value or PHONE_CHARS_RE.match(value.strip()) is None:
        return False
    return MIN_PHONE_DIGITS <= len(normalize_phone(value)) <= MAX_PHONE_DIGITS


def validate_event(data: dict[str, Any]) -> None:
    errors = {}
    for field in ("type", "date", "time", "location", "label"):
        if is_empty(data.get(field)):
            errors[field] = EMPTY
    if errors:
        raise ValidationError(errors)


def validate_headcount(headcount: Any) -> int:
    """Accept a positive integer or a string of digits."""
    if is_empty(headcount):
        raise ValidationError({"headcount": EMPTY})
    if isinstance(headcount, bool):
        raise ValidationError({"headcount": "Numbers only!"})
    if isinstance(headcount, int):
        value = headcount
    elif isinstance(headcount, str) and NUMBER_RE.match(headcount.strip()):
        value = int(headcount.strip())
    else:
        raise ValidationError({"headcount": "Numbers only!"})
    if value < 1:
        raise ValidationError({"headcount": "Must be at least 1!"})
    return value


def validate_registration(data: dict[str, Any]) -> None:
    errors = {}
    if is_empty(data.get("first_name")):
        errors["first_name"] = EMPTY
    if is_empty(data.get("last_name")):
        errors["last_name"] = EMPTY
    if is_empty(data.get("phone")):
        errors["phone"] = EMPTY
    elif not is_phone(data["phone"]):
        errors["phone"] = "Must be a valid phone number!"
    if is_empty(data.get("email")):
        errors["email"] = EMPTY
    elif not is_email(data["email"]):
        errors["email"] = "Must be a valid email address!"
    if is_empty(data.get("notify")):
        errors["notify"] = EMPTY
    elif data["notify"] not in ("sms", "email"):
        errors["notify"] = "Must be sms or email!"
    if errors:
        raise ValidationError(errors)
