# env_registry/store.py
"""Storage backends for environment records.

The registry only talks to the small interface defined by
``EnvironmentStore``; any durable key-value store can sit behind it.
"""
import copy
import logging
import threading
from abc import ABC, abstractmethod
from decimal import DecimalException
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from env_registry.codec import KEY_FIELD
from env_registry.errors import StorageError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class EnvironmentStore(ABC):
    @abstractmethod
    def list(self) -> List[Record]:
        """Return every record, in no particular order."""

    @abstractmethod
    def get(self, env_name: str) -> Optional[Record]:
        """Return the record for env_name, or None if there is none."""

    @abstractmethod
    def put(self, record: Record) -> None:
        """Create or fully replace the record keyed by record[KEY_FIELD]."""

    @abstractmethod
    def delete(self, env_name: str) -> None:
        """Remove the record for env_name. Absent keys are not an error."""


def _storage_error(action: str, exc: Exception) -> StorageError:
    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message") or str(exc)
    elif isinstance(exc, DecimalException):
        message = "Number cannot be stored at DynamoDB precision"
    else:
        message = str(exc)
    logger.warning("DynamoDB %s failed: %s", action, message)
    return StorageError(message)


class DynamoEnvironmentStore(EnvironmentStore):
    """Store backed by a boto3 DynamoDB ``Table`` resource."""

    def __init__(self, table):
        self.table = table

    def list(self) -> List[Record]:
        items: List[Record] = []
        scan_args: Dict[str, Any] = {}
        try:
            while True:
                response = self.table.scan(**scan_args)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    return items
                scan_args["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise _storage_error("scan", e)

    def get(self, env_name: str) -> Optional[Record]:
        try:
            response = self.table.get_item(Key={KEY_FIELD: env_name})
        except (ClientError, BotoCoreError) as e:
            raise _storage_error("get_item", e)
        return response.get("Item")

    def put(self, record: Record) -> None:
        try:
            self.table.put_item(Item=record)
        except (ClientError, BotoCoreError) as e:
            raise _storage_error("put_item", e)
        except (TypeError, DecimalException) as e:
            # raised by boto3's serializer before any request goes out
            raise _storage_error("put_item", e)

    def delete(self, env_name: str) -> None:
        try:
            self.table.delete_item(Key={KEY_FIELD: env_name})
        except (ClientError, BotoCoreError) as e:
            raise _storage_error("delete_item", e)


class InMemoryEnvironmentStore(EnvironmentStore):
    """Process-local store for tests and ``env-registry serve --memory``."""

    def __init__(self, records=None):
        self._records: Dict[str, Record] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.put(record)

    def list(self) -> List[Record]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._records.values()]

    def get(self, env_name: str) -> Optional[Record]:
        with self._lock:
            record = self._records.get(env_name)
            return copy.deepcopy(record) if record is not None else None

    def put(self, record: Record) -> None:
        with self._lock:
            self._records[record[KEY_FIELD]] = copy.deepcopy(record)

    def delete(self, env_name: str) -> None:
        with self._lock:
            self._records.pop(env_name, None)
