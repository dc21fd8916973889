from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from employee_manager.core.config import settings
from employee_manager.core.dependencies import get_current_user
from employee_manager.core.exceptions import RemoteReadError, RemoteWriteError
from employee_manager.models.auth import UserInfo
from employee_manager.models.employee import EmployeeCreate, EmployeeRecord, InsertedEmployee
from employee_manager.services.document_store import DocumentStore, document_store
from employee_manager.services.employee_pipeline import (
    EmployeeWritePipeline,
    SubmitFailed,
    SubmitRejected,
    SubmitRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def get_store() -> DocumentStore:
    return document_store


def get_pipeline(store: DocumentStore = Depends(get_store)) -> EmployeeWritePipeline:  # noqa: B008
    return EmployeeWritePipeline(
        store,
        settings.COSMOS_DB_EMPLOYEES_CONTAINER,
        min_salary=settings.MIN_SALARY,
    )


@router.get("", response_model=list[EmployeeRecord])
async def list_employees(
    store: DocumentStore = Depends(get_store),  # noqa: B008
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        docs = await store.fetch_all(settings.COSMOS_DB_EMPLOYEES_CONTAINER)
    except RemoteReadError as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to retrieve employees",
        ) from err

    return [EmployeeRecord.from_document(doc) for doc in docs]


@router.post("", response_model=InsertedEmployee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    body: EmployeeCreate,
    pipeline: EmployeeWritePipeline = Depends(get_pipeline),  # noqa: B008
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    outcome = await pipeline.submit(
        SubmitRequest(fields=body.form_values(), employment_type=body.employment_type)
    )

    if isinstance(outcome, SubmitRejected):
        raise HTTPException(
            status_code=(
                status.HTTP_409_CONFLICT
                if outcome.reason == "duplicate"
                else status.HTTP_422_UNPROCESSABLE_ENTITY
            ),
            detail={"errors": outcome.field_errors},
        )
    if isinstance(outcome, SubmitFailed):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=outcome.cause.message,
        )

    return InsertedEmployee(id=outcome.inserted_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    store: DocumentStore = Depends(get_store),  # noqa: B008
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        await store.delete_by_id(settings.COSMOS_DB_EMPLOYEES_CONTAINER, employee_id)
    except RemoteWriteError as err:
        logger.exception("Failed to delete employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to delete employee. Please try again.",
        ) from err

    logger.info("Employee %s deleted by %s", employee_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
