"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.database.database import Database, DatabaseSettings

from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.memory_client_store import InMemoryClientStore

from src.app.core.services.client_validator import ClientValidator
from src.app.core.services.uniqueness_guard import UniquenessGuard
from src.app.core.services.client_registry import ClientRegistry


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "src.app.api.v1.clients",
        ]
    )

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers and Rules (reusable across all requests)
    # =========================================================================
    client_mapper = providers.Singleton(ClientMapper)

    client_validator = providers.Singleton(ClientValidator)

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
        echo=config.provided.database.echo,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # STORES - SQL repository per request, or one process-wide memory store
    # =========================================================================
    client_repository = providers.Factory(
        ClientRepository,
        db=database,
        mapper=client_mapper,
    )

    memory_client_store = providers.Singleton(InMemoryClientStore)

    client_store = providers.Selector(
        config.provided.store_backend,
        sql=client_repository,
        memory=memory_client_store,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    uniqueness_guard = providers.Factory(
        UniquenessGuard,
        store=client_store,
    )

    client_registry = providers.Factory(
        ClientRegistry,
        store=client_store,
        validator=client_validator,
        guard=uniqueness_guard,
    )
