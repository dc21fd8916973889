"""Uniqueness check for new employee records.

The store has no unique constraints, so uniqueness of ``email`` and
``employeeId`` is approximated by querying before insert. Two submissions
racing with the same keys can both pass; that window is accepted.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from employee_manager.core.exceptions import RemoteQueryError, RemoteReadError
from employee_manager.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class DuplicateCheckResult(BaseModel):
    is_duplicate: bool
    field: str | None = None
    message: str | None = None


# checked in order; the first hit wins
_UNIQUE_FIELDS: list[tuple[str, str]] = [
    ("email", "Email already exists"),
    ("employeeId", "Employee ID already exists"),
]


class DuplicateChecker:
    def __init__(self, store: DocumentStore, collection: str) -> None:
        self.store = store
        self.collection = collection

    async def check(self, email: str, employee_id: str) -> DuplicateCheckResult:
        values = {"email": email, "employeeId": employee_id}

        for field, message in _UNIQUE_FIELDS:
            try:
                matches = await self.store.fetch_where(self.collection, field, values[field])
            except RemoteReadError as e:
                logger.error("Duplicate check on %s failed: %s", field, e)
                raise RemoteQueryError(f"Could not check {field} for duplicates", {"field": field}) from e

            if matches:
                logger.info("Duplicate %s found: %s", field, values[field])
                return DuplicateCheckResult(is_duplicate=True, field=field, message=message)

        return DuplicateCheckResult(is_duplicate=False)
