import abc
from typing import Generic, TypeVar


TModel = TypeVar("TModel")
TEntity = TypeVar("TEntity")


class BaseEntityMapper(abc.ABC, Generic[TModel, TEntity]):
    """Converts between a domain model and its database entity."""

    @staticmethod
    @abc.abstractmethod
    def to_entity(model_instance: TModel) -> TEntity:
        pass

    @staticmethod
    @abc.abstractmethod
    def to_model(entity: TEntity) -> TModel:
        pass

    @staticmethod
    @abc.abstractmethod
    def copy_to_entity(model_instance: TModel, entity: TEntity) -> None:
        """Overwrite the mutable columns of a loaded entity with the model's values."""
        pass
