"""Employee models mapped to the camelCase fields of the stored documents."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

FORM_FIELDS: tuple[str, ...] = (
    "fullName",
    "email",
    "employeeId",
    "department",
    "phoneNumber",
    "position",
    "salary",
)


class EmploymentType(str, Enum):
    FULL_TIME = "Full-Time"
    PART_TIME = "Part-Time"

    @classmethod
    def from_toggle(cls, is_full_time: bool) -> EmploymentType:
        return cls.FULL_TIME if is_full_time else cls.PART_TIME


class EmployeeFields(BaseModel):
    """Validated form values, ready to be stored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    full_name: str
    email: str
    employee_id: str
    department: str
    phone_number: str
    position: str
    salary: Decimal


class EmployeeRecord(BaseModel):
    """A stored employee. Immutable once inserted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None = None
    full_name: str = ""
    email: str = ""
    employee_id: str = ""
    department: str = ""
    phone_number: str = ""
    position: str = ""
    salary: Decimal | None = None
    employment_type: EmploymentType | None = None
    created_at: datetime | None = None

    @classmethod
    def from_fields(
        cls,
        fields: EmployeeFields,
        employment_type: EmploymentType,
        created_at: datetime,
    ) -> EmployeeRecord:
        return cls(
            **fields.model_dump(),
            employment_type=employment_type,
            created_at=created_at,
        )

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> EmployeeRecord:
        data: dict[str, Any] = {"id": doc.get("id")}
        for name in ("fullName", "email", "employeeId", "department", "phoneNumber", "position"):
            value = doc.get(name)
            data[name] = str(value) if value is not None else ""

        data["salary"] = _parse_salary(doc.get("salary"))

        try:
            data["employmentType"] = EmploymentType(doc.get("employmentType"))
        except ValueError:
            data["employmentType"] = None

        created_at = doc.get("createdAt")
        try:
            data["createdAt"] = datetime.fromisoformat(created_at) if isinstance(created_at, str) else None
        except ValueError:
            data["createdAt"] = None

        return cls.model_validate(data)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})


class InsertedEmployee(BaseModel):
    id: str


def _parse_salary(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


class EmployeeCreate(BaseModel):
    """Raw employee form input as posted by API clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str | None = None
    email: str | None = None
    employee_id: str | None = None
    department: str | None = None
    phone_number: str | None = None
    position: str | None = None
    salary: str | int | float | None = None
    employment_type: EmploymentType = EmploymentType.PART_TIME

    def form_values(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"employment_type"}, exclude_none=True)
