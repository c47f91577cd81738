"""Domain models used in business logic."""
from datetime import date, datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


MUTABLE_CLIENT_FIELDS = (
    "first_name",
    "last_name",
    "company_name",
    "tax_id",
    "birth_date",
    "phone_number",
    "email",
)


class ClientPayload(BaseModel):
    """
    Client fields as submitted by a caller, before any business rule is applied.

    Every field may be missing; string values are trimmed on construction so
    that validation and persistence see the same value. A birth date that is
    not an ISO date is kept as the submitted text for the validator to reject.
    """
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None
    tax_id: str | None = None
    birth_date: date | str | None = None
    phone_number: str | None = None
    email: str | None = None

    @field_validator("first_name", "last_name", "company_name", "tax_id", "phone_number", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Any:
        """Trim surrounding whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("birth_date", mode="before")
    @classmethod
    def parse_birth_date(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        text = v.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return text


class Client(BaseModel):
    """
    Domain model for Client used in business logic.

    ``id`` and both timestamps are absent until the store inserts the record.
    """
    id: UUID | None = Field(default=None, description="Store-assigned client ID")
    first_name: str
    last_name: str
    company_name: str
    tax_id: str = Field(..., description="Tax identifier, DD-DDDDDDDD-D")
    birth_date: date
    phone_number: str
    email: str
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last modification timestamp")

    model_config = {"from_attributes": True}

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @classmethod
    def from_payload(cls, payload: ClientPayload) -> "Client":
        """Build an unsaved client from a payload that already passed validation."""
        return cls(**payload.model_dump(include=set(MUTABLE_CLIENT_FIELDS)))

    def with_changes(self, payload: ClientPayload) -> "Client":
        """Return a copy with every mutable field replaced by the payload's values."""
        return self.model_copy(update=payload.model_dump(include=set(MUTABLE_CLIENT_FIELDS)))


class ValidationResult(BaseModel):
    """Outcome of validating a payload: valid, or every violation keyed by field."""
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)


class Conflict(BaseModel):
    """A uniqueness violation detected before a write."""
    field: Literal["tax_id", "email"]
    value: str
    existing_id: UUID
