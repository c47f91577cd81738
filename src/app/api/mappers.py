"""Mappers for converting between domain models and API schemas."""
from src.app.core.domain.models import Client, ClientPayload
from src.client.schemas import ClientRequest, ClientResponse


def to_client_payload(request: ClientRequest) -> ClientPayload:
    """Convert a ClientRequest API schema to the payload the registry validates."""
    return ClientPayload(**request.model_dump())


def to_client_response(client: Client) -> ClientResponse:
    """
    Convert a Client domain model to ClientResponse API schema.

    Args:
        client: Persisted domain model

    Returns:
        API response schema
    """
    return ClientResponse(
        id=client.id,
        first_name=client.first_name,
        last_name=client.last_name,
        company_name=client.company_name,
        tax_id=client.tax_id,
        birth_date=client.birth_date,
        phone_number=client.phone_number,
        email=client.email,
        created_at=client.created_at,
        updated_at=client.updated_at,
    )
