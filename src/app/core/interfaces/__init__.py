"""Contracts the core requires from its collaborators."""
from src.app.core.interfaces.client_store import ClientStore, TransactionalClientStore

__all__ = [
    "ClientStore",
    "TransactionalClientStore",
]
