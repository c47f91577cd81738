from datetime import date

import pytest

from src.app.core.domain.models import ClientPayload
from src.app.core.services.client_validator import ClientValidator
from tests.factories import make_payload

TODAY = date(2026, 10, 19)


@pytest.fixture
def validator():
    """Validator with a fixed clock."""
    return ClientValidator(today=lambda: TODAY)


def test_valid_payload_has_no_errors(validator):
    # Act
    result = validator.validate(make_payload())

    # Assert
    assert result.is_valid
    assert result.errors == {}


def test_empty_payload_reports_every_required_field(validator):
    # Act
    result = validator.validate(ClientPayload())

    # Assert
    assert not result.is_valid
    assert result.errors == {
        "first_name": ["First name is required"],
        "last_name": ["Last name is required"],
        "company_name": ["Company name is required"],
        "tax_id": ["Tax ID is required"],
        "phone_number": ["Phone number is required"],
        "email": ["Email is required"],
        "birth_date": ["Birth date is required"],
    }


def test_whitespace_only_values_count_as_missing(validator):
    # Arrange
    payload = make_payload(first_name="   ", company_name="\t")

    # Act
    result = validator.validate(payload)

    # Assert
    assert result.errors == {
        "first_name": ["First name is required"],
        "company_name": ["Company name is required"],
    }


def test_invalid_tax_id_is_reported_on_tax_id_only(validator):
    # Act
    result = validator.validate(make_payload(tax_id="invalid"))

    # Assert
    assert result.errors == {"tax_id": ["Tax ID must follow the format XX-XXXXXXXX-X"]}


@pytest.mark.parametrize("tax_id", [
    "2012345678-9",
    "20-1234567-9",
    "20-12345678-99",
    "AB-12345678-9",
    " 20-12345678-9x",
    "٢٠-12345678-9",
])
def test_tax_id_must_match_exact_pattern(validator, tax_id):
    # Act
    result = validator.validate(make_payload(tax_id=tax_id))

    # Assert
    assert "tax_id" in result.errors


def test_length_caps_are_enforced(validator):
    # Arrange
    payload = make_payload(
        first_name="a" * 101,
        last_name="b" * 101,
        company_name="c" * 151,
        phone_number="1" * 31,
    )

    # Act
    result = validator.validate(payload)

    # Assert
    assert result.errors == {
        "first_name": ["First name must not exceed 100 characters"],
        "last_name": ["Last name must not exceed 100 characters"],
        "company_name": ["Company name must not exceed 150 characters"],
        "phone_number": ["Phone number must not exceed 30 characters"],
    }


def test_values_at_the_length_cap_are_accepted(validator):
    # Arrange
    payload = make_payload(
        first_name="a" * 100,
        last_name="b" * 100,
        company_name="c" * 150,
        phone_number="1" * 30,
    )

    # Act
    result = validator.validate(payload)

    # Assert
    assert result.is_valid


def test_length_is_measured_after_trimming(validator):
    # Act
    result = validator.validate(make_payload(first_name="  " + "a" * 100 + "  "))

    # Assert
    assert result.is_valid


@pytest.mark.parametrize("email", ["not-an-email", "juan@", "@example.com", "juan perez@example.com"])
def test_malformed_email_is_rejected(validator, email):
    # Act
    result = validator.validate(make_payload(email=email))

    # Assert
    assert result.errors == {"email": ["Email must be valid"]}


def test_overlong_email_is_rejected(validator):
    # Arrange
    email = "juan." + "x" * 50 + "@" + "sub" * 30 + ".example.com"
    assert len(email) > 150

    # Act
    result = validator.validate(make_payload(email=email))

    # Assert
    assert "Email must not exceed 150 characters" in result.errors["email"]


def test_birth_date_today_is_not_in_the_past(validator):
    # Act
    result = validator.validate(make_payload(birth_date=TODAY))

    # Assert
    assert result.errors == {"birth_date": ["Birth date must be in the past"]}


def test_birth_date_in_the_future_is_rejected(validator):
    # Act
    result = validator.validate(make_payload(birth_date=date(2030, 1, 1)))

    # Assert
    assert result.errors == {"birth_date": ["Birth date must be in the past"]}


def test_birth_date_yesterday_is_accepted(validator):
    # Act
    result = validator.validate(make_payload(birth_date=date(2026, 10, 18)))

    # Assert
    assert result.is_valid


def test_iso_birth_date_text_is_parsed(validator):
    # Arrange
    payload = make_payload(birth_date=" 1985-06-15 ")

    # Act & Assert
    assert payload.birth_date == date(1985, 6, 15)
    assert validator.validate(payload).is_valid


@pytest.mark.parametrize("text", ["not-a-date", "1985-13-01", "15/06/1985"])
def test_unparseable_birth_date_is_rejected(validator, text):
    # Act
    result = validator.validate(make_payload(birth_date=text))

    # Assert
    assert result.errors == {"birth_date": ["Birth date must be a valid date"]}


def test_blank_birth_date_text_is_missing(validator):
    # Act
    result = validator.validate(make_payload(birth_date="  "))

    # Assert
    assert result.errors == {"birth_date": ["Birth date is required"]}


def test_unparseable_birth_date_is_reported_with_other_fields(validator):
    # Arrange
    payload = make_payload(birth_date="not-a-date", tax_id="invalid", first_name="")

    # Act
    result = validator.validate(payload)

    # Assert
    assert result.errors == {
        "first_name": ["First name is required"],
        "tax_id": ["Tax ID must follow the format XX-XXXXXXXX-X"],
        "birth_date": ["Birth date must be a valid date"],
    }


def test_every_violated_field_is_reported_together(validator):
    # Arrange
    payload = make_payload(tax_id="invalid", email="nope", birth_date=TODAY, last_name="")

    # Act
    result = validator.validate(payload)

    # Assert
    assert set(result.errors) == {"tax_id", "email", "birth_date", "last_name"}


def test_validate_does_not_modify_payload(validator):
    # Arrange
    payload = make_payload(tax_id="invalid")
    before = payload.model_dump()

    # Act
    validator.validate(payload)

    # Assert
    assert payload.model_dump() == before
