"""Employee write pipeline: validate, check duplicates, insert.

Each step gates the next. A rejected or failed submission leaves the form
untouched so the user can correct or retry; the form is only reset once the
caller acknowledges a successful insert.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

from employee_manager.core.exceptions import (
    EmployeeManagerError,
    InsertError,
    RemoteQueryError,
    RemoteWriteError,
    SubmissionInProgressError,
)
from employee_manager.models.employee import FORM_FIELDS, EmployeeRecord, EmploymentType
from employee_manager.services.document_store import DocumentStore
from employee_manager.services.duplicate_checker import DuplicateChecker
from employee_manager.services.navigation import EMPLOYEES_ROUTE, Navigator
from employee_manager.services.validation import validate, validate_field

logger = logging.getLogger(__name__)


class SubmitRequest(BaseModel):
    """Raw form values plus the employment type chosen with the toggle."""

    fields: dict[str, Any]
    employment_type: EmploymentType = EmploymentType.PART_TIME


class SubmitOk(BaseModel):
    inserted_id: str


class SubmitRejected(BaseModel):
    field_errors: dict[str, str]
    reason: Literal["validation", "duplicate"]


class SubmitFailed(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    cause: EmployeeManagerError


SubmitOutcome = Union[SubmitOk, SubmitRejected, SubmitFailed]


class EmployeeFormState:
    """Values, inline errors and the employment type toggle of one form."""

    def __init__(self, min_salary: int | None = None) -> None:
        self.min_salary = min_salary
        self.values: dict[str, str] = {}
        self.errors: dict[str, str] = {}
        self.is_full_time = False
        self.is_submitting = False
        self.closed = False
        self.reset()

    def reset(self) -> None:
        self.values = {name: "" for name in FORM_FIELDS}
        self.errors = {}
        self.is_full_time = False

    def set_field(self, name: str, value: str) -> str | None:
        error = validate_field(name, value, self.min_salary)
        self.values[name] = value
        if error:
            self.errors[name] = error
        else:
            self.errors.pop(name, None)
        return error

    def set_full_time(self, is_full_time: bool) -> None:
        self.is_full_time = is_full_time

    @property
    def can_submit(self) -> bool:
        return not self.is_submitting and not self.errors

    def to_request(self) -> SubmitRequest:
        return SubmitRequest(
            fields=dict(self.values),
            employment_type=EmploymentType.from_toggle(self.is_full_time),
        )

    def close(self) -> None:
        self.closed = True


class EmployeeWritePipeline:
    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        min_salary: int | None = None,
        navigator: Navigator | None = None,
    ) -> None:
        self.store = store
        self.collection = collection
        self.min_salary = min_salary
        self.navigator = navigator
        self.checker = DuplicateChecker(store, collection)

    async def submit(self, request: SubmitRequest) -> SubmitOutcome:
        result = validate(request.fields, self.min_salary)
        if not result.is_valid:
            return SubmitRejected(field_errors=result.errors, reason="validation")
        fields = result.accepted

        try:
            duplicate = await self.checker.check(fields.email, fields.employee_id)
        except RemoteQueryError as e:
            return SubmitFailed(cause=e)

        if duplicate.is_duplicate:
            return SubmitRejected(
                field_errors={duplicate.field: duplicate.message},
                reason="duplicate",
            )

        record = EmployeeRecord.from_fields(
            fields,
            employment_type=request.employment_type,
            created_at=datetime.now(timezone.utc),
        )

        try:
            inserted_id = await self.store.insert(self.collection, record.to_document())
        except RemoteWriteError as e:
            logger.error("Failed to save employee %s: %s", fields.employee_id, e)
            error = InsertError("Failed to save employee data.", {"employee_id": fields.employee_id})
            error.__cause__ = e
            return SubmitFailed(cause=error)

        logger.info("Employee %s saved (id=%s)", fields.employee_id, inserted_id)
        return SubmitOk(inserted_id=inserted_id)

    async def submit_form(self, form: EmployeeFormState) -> SubmitOutcome:
        if form.is_submitting:
            return SubmitFailed(cause=SubmissionInProgressError("A submission is already in progress"))

        form.is_submitting = True
        try:
            outcome = await self.submit(form.to_request())
        finally:
            form.is_submitting = False

        if isinstance(outcome, SubmitRejected) and not form.closed:
            form.errors.update(outcome.field_errors)
        return outcome

    def acknowledge_success(self, form: EmployeeFormState, view_employees: bool = False) -> None:
        form.reset()
        if view_employees and self.navigator is not None:
            self.navigator.push(EMPLOYEES_ROUTE)
