"""Field-level validation of submitted client payloads."""
import re
from collections.abc import Callable
from datetime import date

from email_validator import EmailNotValidError, validate_email

from src.app.core.domain.models import ClientPayload, ValidationResult


TAX_ID_PATTERN = re.compile(r"[0-9]{2}-[0-9]{8}-[0-9]")

# field -> (label used in messages, maximum length or None)
TEXT_FIELD_RULES: dict[str, tuple[str, int | None]] = {
    "first_name": ("First name", 100),
    "last_name": ("Last name", 100),
    "company_name": ("Company name", 150),
    "tax_id": ("Tax ID", None),
    "phone_number": ("Phone number", 30),
    "email": ("Email", 150),
}


class ClientValidator:
    """
    Checks a client payload against the registry's field rules.

    Every violated field is reported in a single pass. The validator never
    touches the store, so uniqueness is out of its reach.
    """

    def __init__(self, today: Callable[[], date] = date.today):
        """
        Args:
            today: Clock used for the birth date check
        """
        self.today = today

    def validate(self, payload: ClientPayload) -> ValidationResult:
        result = ValidationResult()

        for field, (label, max_length) in TEXT_FIELD_RULES.items():
            value = getattr(payload, field)
            if not value:
                result.add(field, f"{label} is required")
                continue
            if max_length is not None and len(value) > max_length:
                result.add(field, f"{label} must not exceed {max_length} characters")

        if payload.tax_id and not TAX_ID_PATTERN.fullmatch(payload.tax_id):
            result.add("tax_id", "Tax ID must follow the format XX-XXXXXXXX-X")

        if payload.email and not self._is_valid_email(payload.email):
            result.add("email", "Email must be valid")

        if not payload.birth_date:
            result.add("birth_date", "Birth date is required")
        elif not isinstance(payload.birth_date, date):
            result.add("birth_date", "Birth date must be a valid date")
        elif payload.birth_date >= self.today():
            result.add("birth_date", "Birth date must be in the past")

        return result

    @staticmethod
    def _is_valid_email(email: str) -> bool:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True
