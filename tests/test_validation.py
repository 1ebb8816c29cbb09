from datetime import date

from conftest import NOW, make_employee
from employee_import.db_models import ZERO_DATE
from employee_import.validation import is_valid_email, validate_employee


def test_valid_employee_has_no_errors() -> None:
    assert validate_employee(make_employee(email_home="jane@example.co.uk"), now=NOW) == []


def test_required_fields() -> None:
    employee = make_employee(
        payroll_number=" ",
        forenames="",
        surname="",
        date_of_birth=ZERO_DATE,
        start_date=ZERO_DATE,
    )

    assert validate_employee(employee, now=NOW) == [
        "Payroll number is required",
        "Forename is required",
        "Surname is required",
        "Date of birth is required",
        "Start date is required",
    ]


def test_length_limits() -> None:
    employee = make_employee(
        payroll_number="P" * 51,
        telephone="1" * 21,
        postcode="X" * 21,
        address_2="a" * 201,
    )

    assert validate_employee(employee, now=NOW) == [
        "Payroll number must not exceed 50 characters",
        "Telephone number must not exceed 20 characters",
        "Address line 2 must not exceed 200 characters",
        "Postcode must not exceed 20 characters",
    ]


def test_date_of_birth_must_be_in_the_past() -> None:
    employee = make_employee(date_of_birth=date(2026, 10, 18))

    assert validate_employee(employee, now=NOW) == ["Date of birth must be in the past"]


def test_future_start_date_is_allowed() -> None:
    assert validate_employee(make_employee(start_date=date(2030, 1, 1)), now=NOW) == []


def test_email_format() -> None:
    assert is_valid_email("someone@example.com")
    assert not is_valid_email("someone@")
    assert not is_valid_email("plainaddress")
    assert validate_employee(make_employee(email_home="broken@"), now=NOW) == ["Invalid email format"]
