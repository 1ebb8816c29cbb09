from datetime import datetime, time

from email_validator import EmailNotValidError, validate_email

from employee_import.db_models import ZERO_DATE, Employee


# (attribute, limit, message) for optional text fields.
_LENGTH_LIMITS = (
    ("telephone", 20, "Telephone number must not exceed 20 characters"),
    ("mobile", 20, "Mobile phone number must not exceed 20 characters"),
    ("address", 200, "Address must not exceed 200 characters"),
    ("address_2", 200, "Address line 2 must not exceed 200 characters"),
    ("postcode", 20, "Postcode must not exceed 20 characters"),
)


def validate_employee(employee: Employee, *, now: datetime | None = None) -> list[str]:
    reference_time = now or datetime.now()
    errors: list[str] = []

    payroll_number = (employee.payroll_number or "").strip()
    if not payroll_number:
        errors.append("Payroll number is required")
    elif len(payroll_number) > 50:
        errors.append("Payroll number must not exceed 50 characters")

    forenames = (employee.forenames or "").strip()
    if not forenames:
        errors.append("Forename is required")
    elif len(forenames) > 100:
        errors.append("Forename must not exceed 100 characters")

    surname = (employee.surname or "").strip()
    if not surname:
        errors.append("Surname is required")
    elif len(surname) > 100:
        errors.append("Surname must not exceed 100 characters")

    if employee.date_of_birth is None or employee.date_of_birth == ZERO_DATE:
        errors.append("Date of birth is required")
    elif datetime.combine(employee.date_of_birth, time.min) >= reference_time:
        errors.append("Date of birth must be in the past")

    for attribute, limit, message in _LENGTH_LIMITS:
        if len(getattr(employee, attribute) or "") > limit:
            errors.append(message)

    email = employee.email_home or ""
    if len(email) > 100:
        errors.append("Email must not exceed 100 characters")
    if email and not is_valid_email(email):
        errors.append("Invalid email format")

    if employee.start_date is None or employee.start_date == ZERO_DATE:
        errors.append("Start date is required")

    return errors


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
