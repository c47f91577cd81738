"""HTTP client for consuming the Client Registry API."""
from uuid import UUID
from typing import Optional
from httpx import AsyncClient, Response

from src.client.schemas import ClientRequest, ClientResponse

CLIENTS_PATH = "/api/v1/clients"


class ClientRegistryClient:
    """HTTP client for interacting with the Client Registry API."""

    def __init__(self, base_url: str, client: Optional[AsyncClient] = None):
        """
        Initialize the registry client.

        Args:
            base_url: Base URL of the API (e.g., "http://localhost:8000")
            client: Optional httpx.AsyncClient instance. If not provided, a new one will be created.
        """
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client:
            self._client = AsyncClient(base_url=self.base_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_client and self._client:
            await self._client.aclose()

    @property
    def client(self) -> AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    async def list_clients(self) -> list[ClientResponse]:
        """
        List every client.

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        response: Response = await self.client.get(f"{CLIENTS_PATH}/")
        response.raise_for_status()
        return [ClientResponse(**item) for item in response.json()]

    async def get_client(self, client_id: UUID) -> ClientResponse:
        """
        Get a client by ID.

        Raises:
            httpx.HTTPStatusError: If the request fails (e.g., 404 if not found)
        """
        response: Response = await self.client.get(f"{CLIENTS_PATH}/{client_id}")
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def search_clients(self, name: str) -> list[ClientResponse]:
        """
        Search clients by a fragment of their first, last or company name.

        Args:
            name: Case-insensitive fragment to look for

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        response: Response = await self.client.get(f"{CLIENTS_PATH}/search", params={"name": name})
        response.raise_for_status()
        return [ClientResponse(**item) for item in response.json()]

    async def create_client(self, request: ClientRequest) -> ClientResponse:
        """
        Create a new client.

        Raises:
            httpx.HTTPStatusError: If the request fails (400 invalid, 409 duplicate)
        """
        response: Response = await self.client.post(
            f"{CLIENTS_PATH}/",
            json=request.model_dump(mode="json")
        )
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def update_client(self, client_id: UUID, request: ClientRequest) -> ClientResponse:
        """
        Replace every mutable field of a client.

        Raises:
            httpx.HTTPStatusError: If the request fails (404, 400 or 409)
        """
        response: Response = await self.client.put(
            f"{CLIENTS_PATH}/{client_id}",
            json=request.model_dump(mode="json")
        )
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def delete_client(self, client_id: UUID) -> None:
        """
        Delete a client.

        Raises:
            httpx.HTTPStatusError: If the request fails (e.g., 404 if not found)
        """
        response: Response = await self.client.delete(f"{CLIENTS_PATH}/{client_id}")
        response.raise_for_status()
