from uuid import UUID
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.services.client_registry import ClientRegistry
from src.client.schemas import ClientRequest, ClientResponse, ValidationErrorDetail
from src.app.api.mappers import to_client_payload, to_client_response
from src.shared.exceptions import EntityNotFound, ConflictingEntityFound, EntityValidationFailed
from src.app.logging import get_logger

router = APIRouter(prefix="/clients", tags=["clients"])
logger = get_logger(__name__)


def _validation_error(e: EntityValidationFailed) -> HTTPException:
    detail = ValidationErrorDetail(message=str(e), errors=e.errors)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail.model_dump())


@router.get("/", response_model=list[ClientResponse])
@inject
async def list_clients(
    registry: ClientRegistry = Depends(Provide[Container.client_registry]),
) -> list[ClientResponse]:
    """List all clients."""
    clients = await registry.find_all()
    return [to_client_response(client) for client in clients]


@router.get("/search", response_model=list[ClientResponse])
@inject
async def search_clients(
    name: Annotated[str, Query(description="Case-insensitive fragment of first, last or company name")],
    registry: ClientRegistry = Depends(Provide[Container.client_registry]),
) -> list[ClientResponse]:
    """
    Search clients by name.

    Args:
        name: Fragment matched as a substring; an empty value returns every client

    Returns:
        Matching clients, possibly none
    """
    clients = await registry.search_by_name(name)
    return [to_client_response(client) for client in clients]


@router.get("/{client_id}", response_model=ClientResponse)
@inject
async def get_client(
    client_id: UUID,
    registry: ClientRegistry = Depends(Provide[Container.client_registry]),
) -> ClientResponse:
    """Get a client by ID."""
    try:
        client = await registry.find_by_id(client_id)
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Client not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_client(
    request: ClientRequest,
    registry: ClientRegistry = Depends(Provide[Container.client_registry]),
) -> ClientResponse:
    """
    Create a new client.

    Raises:
        HTTPException 400: If any field is invalid, with every violation listed
        HTTPException 409: If the tax ID or email is already in use
    """
    try:
        client = await registry.create(to_client_payload(request))
        return to_client_response(client)
    except EntityValidationFailed as e:
        logger.error(f"Failed to create client due to validation error: {e}")
        raise _validation_error(e)
    except ConflictingEntityFound as e:
        logger.error(f"Failed to create client: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put("/{client_id}", response_model=ClientResponse)
@inject
async def update_client(
    client_id: UUID,
    request: ClientRequest,
    registry: ClientRegistry = Depends(Provide[Container.client_registry]),
) -> ClientResponse:
    """
    Replace every mutable field of an existing client.

    Raises:
        HTTPException 404: If client not found
        HTTPException 400: If any field is invalid
        HTTPException 409: If another client holds the tax ID or email
    """
    try:
        client = await registry.update(client_id, to_client_payload(request))
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Failed to update client, not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EntityValidationFailed as e:
        logger.error(f"Failed to update client due to validation error: {e}")
        raise _validation_error(e)
    except ConflictingEntityFound as e:
        logger.error(f"Failed to update client: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_client(
    client_id: UUID,
    registry: ClientRegistry = Depends(Provide[Container.client_registry]),
) -> Response:
    """Delete a client."""
    try:
        await registry.delete(client_id)
    except EntityNotFound as e:
        logger.error(f"Failed to delete client, not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
