from src.shared.database.base_mapper import BaseEntityMapper
from src.app.core.domain.models import Client
from src.app.infrastructure.entities.client_entity import ClientEntity


class ClientMapper(BaseEntityMapper[Client, ClientEntity]):
    """Mapper for converting between Client domain model and ClientEntity."""

    @staticmethod
    def to_entity(model_instance: Client) -> ClientEntity:
        """
        Convert a Client (domain model) to ClientEntity (database entity).

        Store-assigned columns are only carried over when the model already has them.
        """
        entity = ClientEntity()
        ClientMapper.copy_to_entity(model_instance, entity)
        if model_instance.id is not None:
            entity.id = model_instance.id
        if model_instance.created_at is not None:
            entity.created_at = model_instance.created_at
        if model_instance.updated_at is not None:
            entity.updated_at = model_instance.updated_at
        return entity

    @staticmethod
    def to_model(entity: ClientEntity) -> Client:
        """Convert a ClientEntity (database entity) to Client (domain model)."""
        return Client(
            id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            company_name=entity.company_name,
            tax_id=entity.tax_id,
            birth_date=entity.birth_date,
            phone_number=entity.phone_number,
            email=entity.email,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def copy_to_entity(model_instance: Client, entity: ClientEntity) -> None:
        entity.first_name = model_instance.first_name
        entity.last_name = model_instance.last_name
        entity.company_name = model_instance.company_name
        entity.tax_id = model_instance.tax_id
        entity.birth_date = model_instance.birth_date
        entity.phone_number = model_instance.phone_number
        entity.email = model_instance.email
