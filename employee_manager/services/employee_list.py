"""In-memory employee list with per-record delete tracking.

The list mirrors the remote collection as of the last fetch. Mutations happen
on the event loop between awaits, so refresh and delete never interleave
inside a mutation; a version counter detects refresh snapshots that are older
than a completed delete.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from employee_manager.core.exceptions import DeleteInProgressError, RemoteReadError, RemoteWriteError
from employee_manager.models.employee import EmployeeRecord
from employee_manager.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class DeleteConfirmation(BaseModel):
    record_id: str
    title: str = "Delete Employee"
    message: str


class EmployeeListController:
    def __init__(self, store: DocumentStore, collection: str) -> None:
        self.store = store
        self.collection = collection
        self.records: list[EmployeeRecord] = []
        self.deleting_ids: set[str] = set()
        self.loading = True
        self.refreshing = False
        self.closed = False

        self._version = 0
        self._deleted_at: dict[str, int] = {}
        self._refresh_seq = 0
        self._applied_refresh = 0

    async def refresh(self, user_initiated: bool = False) -> None:
        """Replace the local list with a full fetch.

        On failure the previous list is kept and ``RemoteReadError`` is raised.
        Records deleted after this refresh started are masked out of its
        snapshot, and a snapshot older than one already applied is dropped.
        """
        self._refresh_seq += 1
        seq = self._refresh_seq
        started_at = self._version
        if user_initiated:
            self.refreshing = True

        try:
            docs = await self.store.fetch_all(self.collection)
        except RemoteReadError:
            logger.exception("Error fetching employees")
            if not self.closed:
                self.loading = False
                self.refreshing = False
            raise

        if self.closed:
            return

        if seq < self._applied_refresh:
            logger.debug("Discarding stale employee snapshot (seq=%s)", seq)
            return

        masked = {record_id for record_id, version in self._deleted_at.items() if version > started_at}
        records = [EmployeeRecord.from_document(doc) for doc in docs]
        self.records = [record for record in records if record.id not in masked]
        self._applied_refresh = seq
        self._deleted_at = {
            record_id: version for record_id, version in self._deleted_at.items() if version > started_at
        }
        self.loading = False
        self.refreshing = False

    def request_delete(self, record: EmployeeRecord) -> DeleteConfirmation:
        return DeleteConfirmation(
            record_id=record.id,
            message=f"Are you sure you want to delete {record.full_name}? This action cannot be undone.",
        )

    async def confirm_delete(self, confirmation: DeleteConfirmation) -> None:
        await self.delete(confirmation.record_id)

    async def delete(self, record_id: str) -> None:
        if self.closed:
            logger.debug("Ignoring delete of %s on a closed list", record_id)
            return
        if record_id in self.deleting_ids:
            raise DeleteInProgressError(record_id)

        self.deleting_ids.add(record_id)
        try:
            await self.store.delete_by_id(self.collection, record_id)
        except RemoteWriteError:
            logger.exception("Error deleting employee %s", record_id)
            raise
        else:
            if not self.closed:
                self._version += 1
                self._deleted_at[record_id] = self._version
                self.records = [record for record in self.records if record.id != record_id]
            logger.info("Employee %s deleted", record_id)
        finally:
            self.deleting_ids.discard(record_id)

    def is_deleting(self, record_id: str) -> bool:
        return record_id in self.deleting_ids

    def is_delete_enabled(self, record_id: str) -> bool:
        return not self.closed and record_id not in self.deleting_ids

    def close(self) -> None:
        self.closed = True
