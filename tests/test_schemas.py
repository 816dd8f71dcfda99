import time

import pytest
from pydantic import ValidationError

from app.schemas.user import UserCreate, UserUpdate


def _messages(exc_info) -> dict[str, str]:
    return {".".join(str(part) for part in err["loc"]): err["msg"] for err in exc_info.value.errors()}


def test_create_normalizes_name_and_email():
    payload = UserCreate.model_validate({"name": "  Jane Smith ", "email": " JANE@Example.com "})

    assert payload.name == "Jane Smith"
    assert payload.email == "jane@example.com"
    assert payload.is_active is True
    assert payload.age is None


def test_create_accepts_camel_case_is_active():
    payload = UserCreate.model_validate({"name": "A", "email": "a@example.com", "isActive": False})

    assert payload.is_active is False


@pytest.mark.parametrize(
    "email",
    ["john.doe@example.com", "john-doe@mail.example.org", "j_d@example.io"],
)
def test_valid_emails(email):
    assert UserCreate(name="A", email=email).email == email


@pytest.mark.parametrize(
    "email",
    ["not-an-email", "john@example", "john@example.comm", "jo hn@example.com", "john..doe@example.com"],
)
def test_invalid_emails(email):
    with pytest.raises(ValidationError) as exc_info:
        UserCreate(name="A", email=email)

    assert _messages(exc_info) == {"email": "Please enter a valid email"}


def test_create_reports_every_violation():
    with pytest.raises(ValidationError) as exc_info:
        UserCreate.model_validate({"age": 200})

    assert _messages(exc_info) == {
        "name": "Name is required",
        "email": "Email is required",
        "age": "Age seems invalid",
    }


def test_name_length_limit():
    assert UserCreate(name="x" * 50, email="a@example.com").name == "x" * 50

    with pytest.raises(ValidationError) as exc_info:
        UserCreate(name="x" * 51, email="a@example.com")

    assert _messages(exc_info) == {"name": "Name cannot exceed 50 characters"}


def test_update_only_reports_supplied_fields():
    payload = UserUpdate.model_validate({"email": "NEW@Example.com"})

    assert payload.changes() == {"email": "new@example.com"}


def test_update_rejects_null_required_fields():
    with pytest.raises(ValidationError) as exc_info:
        UserUpdate.model_validate({"name": None, "email": None, "isActive": None})

    assert set(_messages(exc_info)) == {"name", "email", "isActive"}


def test_update_allows_clearing_age():
    assert UserUpdate.model_validate({"age": None}).changes() == {"age": None}


def test_multi_segment_domains_are_valid():
    assert UserCreate(name="A", email="a.b-c@mail.example.co.uk").email == "a.b-c@mail.example.co.uk"


@pytest.mark.parametrize("email", ["a" * 40 + "!", "a" * 26 + "@bb!", "a" * 30 + "@" + "b" * 30 + ".c!"])
def test_near_miss_emails_are_rejected_quickly(email):
    started = time.perf_counter()

    with pytest.raises(ValidationError) as exc_info:
        UserCreate(name="A", email=email)

    assert time.perf_counter() - started < 0.5
    assert _messages(exc_info) == {"email": "Please enter a valid email"}


def test_overlong_email_is_rejected():
    email = "a" * 250 + "@example.com"

    with pytest.raises(ValidationError) as exc_info:
        UserCreate(name="A", email=email)

    assert _messages(exc_info) == {"email": "Please enter a valid email"}
