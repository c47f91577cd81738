"""API schemas for client registry requests and responses."""
from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ClientRequest(BaseModel):
    """
    Request schema for creating or replacing a client.

    Fields are deliberately unconstrained: the registry validates them and
    reports every violation at once.
    """
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None
    tax_id: str | None = Field(default=None, description="Tax identifier, format XX-XXXXXXXX-X")
    birth_date: str | None = Field(default=None, description="ISO date, YYYY-MM-DD")
    phone_number: str | None = None
    email: str | None = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def date_to_iso(cls, v: Any) -> Any:
        """Accept date objects from Python callers; the text is parsed by the registry."""
        if isinstance(v, date):
            return v.isoformat()
        return v


class ClientResponse(BaseModel):
    """Response schema for client data returned by the API."""
    id: UUID
    first_name: str
    last_name: str
    company_name: str
    tax_id: str
    birth_date: date
    phone_number: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ValidationErrorDetail(BaseModel):
    """Body of the ``detail`` field when a request fails validation."""
    message: str
    errors: dict[str, list[str]]
