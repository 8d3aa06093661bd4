import pytest

from dosomething.exceptions import ValidationError
from dosomething.validators import is_email, is_phone, normalize_phone, validate_event, validate_headcount


@pytest.mark.parametrize("value", ["a@b.co", "first.last@example.com", '"odd name"@example.org'])
def test_is_email(value):
    assert is_email(value)


@pytest.mark.parametrize("value", [None, "", "a@b", "a b@example.com", "@example.com"])
def test_is_not_email(value):
    assert not is_email(value)


@pytest.mark.parametrize("value", ["5551234567", "+1 (555) 123-4567", "555.123.4567"])
def test_is_phone(value):
    assert is_phone(value)


@pytest.mark.parametrize("value", [None, "123", "555-123-abcd", "1234567890123456"])
def test_is_not_phone(value):
    assert not is_phone(value)


def test_normalize_phone():
    assert normalize_phone("+1 (555) 123-4567") == "15551234567"


@pytest.mark.parametrize("value, expected", [(1, 1), (4, 4), ("3", 3), (" 12 ", 12)])
def test_validate_headcount(value, expected):
    assert validate_headcount(value) == expected


@pytest.mark.parametrize(
    "value, message",
    [
        (None, "Must not be empty!"),
        ("  ", "Must not be empty!"),
        ("abc", "Numbers only!"),
        ("2.5", "Numbers only!"),
        (True, "Numbers only!"),
        (0, "Must be at least 1!"),
        ("-1", "Numbers only!"),
    ],
)
def test_validate_headcount_errors(value, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_headcount(value)
    assert exc_info.value.errors == {"headcount": message}


def test_validate_event_lists_every_empty_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_event({"type": "Party", "date": "", "time": None, "location": " "})

    assert exc_info.value.errors == {
        "date": "Must not be empty!",
        "time": "Must not be empty!",
        "location": "Must not be empty!",
        "label": "Must not be empty!",
    }
