"""Field validation for the employee and sign-in forms.

Each field is checked on its own; there are no cross-field rules. The same
rule functions back both the whole-form check run at submit time and the
single-field check run on every change.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any

import pydantic
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from employee_manager.core.config import settings
from employee_manager.models.employee import EmployeeFields

_EMPLOYEE_ID_RE = re.compile(r"^EMP[0-9]{3,6}$")
_PHONE_RE = re.compile(r"^[0-9]{10}$")

# form field name -> model attribute
_ATTRIBUTES: dict[str, str] = {
    "fullName": "full_name",
    "email": "email",
    "employeeId": "employee_id",
    "department": "department",
    "phoneNumber": "phone_number",
    "position": "position",
    "salary": "salary",
}
_FORM_NAMES = {attr: name for name, attr in _ATTRIBUTES.items()}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _required(value: Any, message: str) -> str:
    text = _text(value)
    if not text:
        raise ValueError(message)
    return text


def _is_email(text: str) -> bool:
    try:
        validate_email(text, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def check_full_name(value: Any, min_salary: int) -> str:
    text = _required(value, "Full name is required")
    if len(text) < 2:
        raise ValueError("Full name must be at least 2 characters long")
    if len(text) > 50:
        raise ValueError("Full name must not exceed 50 characters")
    return text


def check_email(value: Any, min_salary: int) -> str:
    text = _required(value, "Email is required")
    if not _is_email(text):
        raise ValueError("Invalid email address")
    return text


def check_employee_id(value: Any, min_salary: int) -> str:
    text = _required(value, "Employee ID is required")
    if not _EMPLOYEE_ID_RE.match(text):
        raise ValueError("Employee ID must be in format EMP followed by 3-6 digits")
    return text


def check_department(value: Any, min_salary: int) -> str:
    text = _required(value, "Department is required")
    if len(text) < 2:
        raise ValueError("Department must be at least 2 characters")
    return text


def check_phone_number(value: Any, min_salary: int) -> str:
    text = _required(value, "Phone number is required")
    if not _PHONE_RE.match(text):
        raise ValueError("Phone number must be a valid 10-digit number")
    return text


def check_position(value: Any, min_salary: int) -> str:
    text = _required(value, "Position is required")
    if len(text) < 2:
        raise ValueError("Position must be at least 2 characters")
    return text


def check_salary(value: Any, min_salary: int) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("Salary must be a number")
    text = _required(value, "Salary is required")
    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError("Salary must be a number") from e
    if not amount.is_finite():
        raise ValueError("Salary must be a number")
    if amount <= 0:
        raise ValueError("Salary must be positive")
    if amount < min_salary:
        raise ValueError(f"Salary must be at least ${min_salary:,}")
    return amount


RULES: dict[str, Callable[[Any, int], Any]] = {
    "fullName": check_full_name,
    "email": check_email,
    "employeeId": check_employee_id,
    "department": check_department,
    "phoneNumber": check_phone_number,
    "position": check_position,
    "salary": check_salary,
}


def _min_salary(info: ValidationInfo) -> int:
    if info.context and info.context.get("min_salary") is not None:
        return info.context["min_salary"]
    return settings.MIN_SALARY


class _EmployeeForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    full_name: str = ""
    email: str = ""
    employee_id: str = ""
    department: str = ""
    phone_number: str = ""
    position: str = ""
    salary: Decimal | str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _apply_rule(cls, value: Any, info: ValidationInfo) -> Any:
        rule = RULES[_FORM_NAMES[info.field_name]]
        return rule(value, _min_salary(info))


class _SignInForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: str = ""
    password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        text = _required(value, "Email is required")
        if not _is_email(text):
            raise ValueError("Please enter a valid email address")
        return text

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        # passwords are not trimmed
        if value is None or value == "":
            raise ValueError("Password is required")
        if len(str(value)) < 6:
            raise ValueError("Password must be at least 6 characters")
        return str(value)


class ValidationResult(BaseModel):
    accepted: EmployeeFields | None = None
    errors: dict[str, str] = {}

    @property
    def is_valid(self) -> bool:
        return self.accepted is not None and not self.errors


def _field_errors(exc: pydantic.ValidationError, names: dict[str, str]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        attr = str(err["loc"][0]) if err["loc"] else ""
        cause = (err.get("ctx") or {}).get("error")
        field = names.get(attr, attr)
        errors.setdefault(field, str(cause) if cause is not None else err["msg"])
    return errors


def validate(values: dict[str, Any], min_salary: int | None = None) -> ValidationResult:
    """Validate a whole employee form keyed by form field name.

    Returns the normalised values when every rule passes, otherwise a
    mapping of form field name to its first failing message.
    """
    data = {attr: values.get(name) for name, attr in _ATTRIBUTES.items() if name in values}
    try:
        form = _EmployeeForm.model_validate(data, context={"min_salary": min_salary})
    except pydantic.ValidationError as e:
        return ValidationResult(errors=_field_errors(e, _FORM_NAMES))

    return ValidationResult(accepted=EmployeeFields(**form.model_dump()))


def validate_field(name: str, value: Any, min_salary: int | None = None) -> str | None:
    rule = RULES.get(name)
    if rule is None:
        raise KeyError(f"Unknown form field: {name}")
    try:
        rule(value, settings.MIN_SALARY if min_salary is None else min_salary)
    except ValueError as e:
        return str(e)
    return None


def validate_sign_in(email: Any, password: Any) -> dict[str, str]:
    try:
        _SignInForm.model_validate({"email": email, "password": password})
    except pydantic.ValidationError as e:
        return _field_errors(e, {})
    return {}
