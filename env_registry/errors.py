# env_registry/errors.py


class RegistryError(Exception):
    """Base class for failures that map to a 400 response."""


class MalformedRecordError(RegistryError):
    pass


class MissingKeyError(RegistryError):
    pass


class StorageError(RegistryError):
    pass


class UnsupportedRouteError(RegistryError):
    pass
