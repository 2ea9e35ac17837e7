"""Environment registry: CRUD over named environment records in DynamoDB."""
from env_registry.errors import (
    MalformedRecordError,
    MissingKeyError,
    RegistryError,
    StorageError,
    UnsupportedRouteError,
)
from env_registry.service import EnvironmentRegistry
from env_registry.store import DynamoEnvironmentStore, InMemoryEnvironmentStore

__all__ = [
    "DynamoEnvironmentStore",
    "EnvironmentRegistry",
    "InMemoryEnvironmentStore",
    "MalformedRecordError",
    "MissingKeyError",
    "RegistryError",
    "StorageError",
    "UnsupportedRouteError",
]
