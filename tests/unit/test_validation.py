from __future__ import annotations

from decimal import Decimal

import pytest

from employee_manager.services.validation import validate, validate_field, validate_sign_in

VALID_FORM = {
    "fullName": "Jane Roe",
    "email": "jane.roe@acme.io",
    "employeeId": "EMP1001",
    "department": "Engineering",
    "phoneNumber": "5551234567",
    "position": "Developer",
    "salary": "55000",
}


def _with(**overrides):
    return {**VALID_FORM, **overrides}


def test_valid_form_is_accepted():
    result = validate(VALID_FORM)

    assert result.is_valid
    assert result.errors == {}
    assert result.accepted.full_name == "Jane Roe"
    assert result.accepted.employee_id == "EMP1001"
    assert result.accepted.salary == Decimal("55000")


def test_accepted_values_are_trimmed():
    result = validate(_with(fullName="  Jane Roe  ", email=" jane.roe@acme.io "))

    assert result.accepted.full_name == "Jane Roe"
    assert result.accepted.email == "jane.roe@acme.io"


@pytest.mark.parametrize(
    ("employee_id", "ok"),
    [
        ("EMP12", False),
        ("EMP123", True),
        ("EMP123456", True),
        ("EMP1234567", False),
        ("emp123", False),
        ("EMPABC", False),
    ],
)
def test_employee_id_format(employee_id, ok):
    result = validate(_with(employeeId=employee_id))

    assert result.is_valid is ok
    if not ok:
        assert result.errors == {"employeeId": "Employee ID must be in format EMP followed by 3-6 digits"}


def test_empty_form_reports_every_required_field():
    result = validate({})

    assert not result.is_valid
    assert result.accepted is None
    assert result.errors == {
        "fullName": "Full name is required",
        "email": "Email is required",
        "employeeId": "Employee ID is required",
        "department": "Department is required",
        "phoneNumber": "Phone number is required",
        "position": "Position is required",
        "salary": "Salary is required",
    }


def test_whitespace_only_counts_as_missing():
    result = validate(_with(position="   "))

    assert result.errors == {"position": "Position is required"}


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("fullName", "J", "Full name must be at least 2 characters long"),
        ("fullName", "J" * 51, "Full name must not exceed 50 characters"),
        ("email", "not-an-email", "Invalid email address"),
        ("department", "X", "Department must be at least 2 characters"),
        ("phoneNumber", "555123456", "Phone number must be a valid 10-digit number"),
        ("phoneNumber", "555-123-4567", "Phone number must be a valid 10-digit number"),
        ("position", "X", "Position must be at least 2 characters"),
        ("salary", "lots", "Salary must be a number"),
        ("salary", "-5", "Salary must be positive"),
        ("salary", "0", "Salary must be positive"),
        ("salary", "19999.99", "Salary must be at least $20,000"),
    ],
)
def test_field_rule_messages(field, value, message):
    result = validate(_with(**{field: value}))

    assert result.errors == {field: message}


def test_full_name_boundaries_are_inclusive():
    assert validate(_with(fullName="Jo")).is_valid
    assert validate(_with(fullName="J" * 50)).is_valid


def test_salary_accepts_numbers_and_floor():
    assert validate(_with(salary=20000)).accepted.salary == Decimal("20000")
    assert validate(_with(salary=61250.5)).is_valid


def test_configured_salary_floor():
    result = validate(_with(salary="25000"), min_salary=30000)

    assert result.errors == {"salary": "Salary must be at least $30,000"}


def test_errors_are_reported_per_field():
    result = validate(_with(email="nope", phoneNumber="12"))

    assert set(result.errors) == {"email", "phoneNumber"}


def test_validate_field_single_rule():
    assert validate_field("employeeId", "EMP123") is None
    assert validate_field("employeeId", "") == "Employee ID is required"
    assert validate_field("salary", "21000", min_salary=25000) == "Salary must be at least $25,000"


def test_validate_field_unknown_name():
    with pytest.raises(KeyError):
        validate_field("nickname", "JJ")


def test_sign_in_validation():
    assert validate_sign_in("jane.roe@acme.io", "secret1") == {}
    assert validate_sign_in("", "") == {
        "email": "Email is required",
        "password": "Password is required",
    }
    assert validate_sign_in("jane", "12345") == {
        "email": "Please enter a valid email address",
        "password": "Password must be at least 6 characters",
    }
