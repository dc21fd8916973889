"""Exception hierarchy for the employee manager.

Field-scoped errors (validation, duplicates) are resolved by the write
pipeline; remote errors are reported to the caller and never retried.
"""

from __future__ import annotations

from typing import Any


class EmployeeManagerError(Exception):
    """Base exception for all employee manager errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(EmployeeManagerError):
    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__("Validation failed", {"fields": field_errors})
        self.field_errors = field_errors


class DuplicateError(EmployeeManagerError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, {"field": field})
        self.field = field


class RemoteError(EmployeeManagerError):
    """Backend failure; surfaced to the user as retryable."""


class RemoteReadError(RemoteError):
    pass


class RemoteQueryError(RemoteReadError):
    """A duplicate-check query failed; the record must not be inserted."""


class RemoteWriteError(RemoteError):
    pass


class InsertError(RemoteWriteError):
    pass


class AuthError(EmployeeManagerError):
    """Credential or identity service failure; the message is user-facing."""


class SubmissionInProgressError(EmployeeManagerError):
    pass


class DeleteInProgressError(EmployeeManagerError):
    def __init__(self, record_id: str) -> None:
        super().__init__(f"Deletion of {record_id} is already in progress", {"id": record_id})
        self.record_id = record_id
