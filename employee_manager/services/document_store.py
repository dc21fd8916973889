"""Cosmos DB document store.

Each collection is a Cosmos container partitioned on ``/id``. The store has no
transactions and no unique constraints; callers that need uniqueness must
query first.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any, Protocol

from azure.core.exceptions import AzureError
from azure.cosmos.aio import CosmosClient

from employee_manager.core.config import Settings
from employee_manager.core.exceptions import RemoteReadError, RemoteWriteError

logger = logging.getLogger(__name__)

_FIELD_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DocumentStore(Protocol):
    async def insert(self, collection: str, document: dict[str, Any]) -> str: ...

    async def fetch_all(self, collection: str) -> list[dict[str, Any]]: ...

    async def fetch_where(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]: ...

    async def delete_by_id(self, collection: str, document_id: str) -> None: ...


class CosmosDocumentStore:
    def __init__(self) -> None:
        self.client: CosmosClient | None = None
        self.database: Any = None
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        endpoint = settings.COSMOS_DB_ENDPOINT
        key = settings.COSMOS_DB_KEY
        database_name = settings.COSMOS_DB_DATABASE

        if not endpoint or not key:
            logger.warning("Cosmos DB credentials missing — document store not initialized")
            return

        self.client = CosmosClient(endpoint, key)
        self.database = self.client.get_database_client(database_name)
        self.initialized = True
        logger.info("CosmosDocumentStore initialized (database=%s)", database_name)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None
            self.database = None
            self.initialized = False

    def _container(self, collection: str, error: type[Exception]) -> Any:
        if not self.database:
            raise error("Document store not initialized")
        return self.database.get_container_client(collection)

    async def insert(self, collection: str, document: dict[str, Any]) -> str:
        container = self._container(collection, RemoteWriteError)
        body = {**document, "id": str(uuid.uuid4())}
        try:
            created = await container.create_item(body=body)
        except AzureError as e:
            logger.error("Insert into %s failed: %s", collection, e)
            raise RemoteWriteError(
                f"Failed to insert document into {collection}", {"status": getattr(e, "status_code", None)}
            ) from e
        return created.get("id", body["id"])

    async def fetch_all(self, collection: str) -> list[dict[str, Any]]:
        return await self._query(collection, "SELECT * FROM c", [])

    async def fetch_where(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        if not _FIELD_NAME_RE.match(field):
            raise RemoteReadError(f"Invalid field name: {field!r}")
        query = f'SELECT * FROM c WHERE c["{field}"] = @value'
        params: list[dict[str, Any]] = [{"name": "@value", "value": value}]
        return await self._query(collection, query, params)

    async def delete_by_id(self, collection: str, document_id: str) -> None:
        container = self._container(collection, RemoteWriteError)
        try:
            await container.delete_item(item=document_id, partition_key=document_id)
        except AzureError as e:
            logger.error("Delete of %s from %s failed: %s", document_id, collection, e)
            raise RemoteWriteError(
                f"Failed to delete document {document_id}", {"status": getattr(e, "status_code", None)}
            ) from e

    async def _query(self, collection: str, query: str, params: list[dict[str, Any]]) -> list[dict[str, Any]]:
        container = self._container(collection, RemoteReadError)
        items: list[dict[str, Any]] = []
        try:
            async for item in container.query_items(query=query, parameters=params):
                items.append(item)
        except AzureError as e:
            logger.error("Query on %s failed: %s", collection, e)
            raise RemoteReadError(
                f"Failed to read from {collection}", {"status": getattr(e, "status_code", None)}
            ) from e
        return items

    async def check_connection(self, collection: str) -> bool:
        if not self.database:
            return False
        try:
            container = self.database.get_container_client(collection)
            async for _ in container.query_items(query="SELECT VALUE COUNT(1) FROM c"):
                return True
            return True
        except Exception:
            logger.exception("Cosmos DB connection check failed")
            return False


document_store = CosmosDocumentStore()
