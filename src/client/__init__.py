"""HTTP client and schemas for the Client Registry API."""
from src.client.registry_client import ClientRegistryClient
from src.client.schemas import ClientRequest, ClientResponse, ValidationErrorDetail

__all__ = [
    "ClientRegistryClient",
    "ClientRequest",
    "ClientResponse",
    "ValidationErrorDetail",
]
