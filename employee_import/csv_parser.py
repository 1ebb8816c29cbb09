"""Parse comma or tab delimited personnel exports into Employee records.

The first line is a header row of ``Personnel_Records.<Field>`` names. Rows that
cannot be decoded, or that fail the basic sanity checks below, are logged and
skipped; only a missing header row or missing required columns fail the parse.
"""

from collections.abc import Callable
from datetime import date, datetime, time
import logging
import re

from dateutil import parser as date_parser

from employee_import.db_models import ZERO_DATE, Employee, blank_employee_values
from employee_import.exceptions import ParsingError


logger = logging.getLogger(__name__)

REQUIRED_HEADERS = (
    "Personnel_Records.Payroll_Number",
    "Personnel_Records.Forenames",
    "Personnel_Records.Surname",
    "Personnel_Records.Date_of_Birth",
    "Personnel_Records.Start_Date",
)

DATE_FORMAT = "%d/%m/%Y"
_LINE_BREAK = re.compile(r"[\r\n]+")
_EXACT_DATE = re.compile(r"\d{2}/\d{2}/\d{4}")
_DATE_PART = re.compile(r"[A-Za-z]+|\d+")


def parse_date(value: str) -> date:
    """Parse DD/MM/YYYY, falling back to ISO and then a lenient day-first parse.

    Unparseable or partial values come back as ZERO_DATE.
    """
    if _EXACT_DATE.fullmatch(value):
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            pass
    # Day, month and year must all be present; dateutil fills gaps from today.
    if len(_DATE_PART.findall(value)) < 3:
        return ZERO_DATE
    try:
        # dayfirst would read 1990-04-05 as 4 May.
        return date_parser.isoparse(value).date()
    except ValueError:
        pass
    try:
        return date_parser.parse(value, dayfirst=True).date()
    except (ValueError, OverflowError):
        return ZERO_DATE


# Lowercased header name -> (Employee attribute, converter).
COLUMN_MAP: dict[str, tuple[str, Callable[[str], object]]] = {
    "personnel_records.payroll_number": ("payroll_number", str),
    "personnel_records.forenames": ("forenames", str),
    "personnel_records.surname": ("surname", str),
    "personnel_records.date_of_birth": ("date_of_birth", parse_date),
    "personnel_records.telephone": ("telephone", str),
    "personnel_records.mobile": ("mobile", str),
    "personnel_records.address": ("address", str),
    "personnel_records.address_2": ("address_2", str),
    "personnel_records.postcode": ("postcode", str),
    "personnel_records.email_home": ("email_home", str),
    "personnel_records.start_date": ("start_date", parse_date),
}


def split_lines(content: str) -> list[str]:
    return [line for line in _LINE_BREAK.split(content) if line]


def choose_delimiter(header_line: str) -> str:
    return "\t" if "\t" in header_line else ","


def missing_required_headers(headers: list[str]) -> list[str]:
    missing = [name for name in REQUIRED_HEADERS if name not in headers]
    if not missing:
        return []

    logger.warning("required headers not found with exact case", extra={"missing": missing})
    lowered = {header.lower() for header in headers}
    return [name for name in REQUIRED_HEADERS if name.lower() not in lowered]


def decode_row(headers: list[str], values: list[str]) -> Employee:
    fields = blank_employee_values()
    for header, raw_value in zip(headers, values):
        mapping = COLUMN_MAP.get(header.lower())
        if mapping is None:
            continue
        attribute, convert = mapping
        fields[attribute] = convert(raw_value.strip())
    return Employee(**fields)


def skip_reason(employee: Employee, now: datetime) -> str | None:
    if not employee.payroll_number.strip():
        return "empty payroll number"
    if datetime.combine(employee.date_of_birth, time.min) >= now:
        return "date of birth is not in the past"
    if datetime.combine(employee.start_date, time.min) > now:
        return "start date is in the future"
    return None


def parse_employee_file(raw: bytes | str, *, now: datetime | None = None) -> list[Employee]:
    if isinstance(raw, bytes):
        # Undecodable bytes become U+FFFD.
        content = raw.decode("utf-8-sig", errors="replace")
    else:
        content = raw.removeprefix("\ufeff")

    logger.info("parsing employee file", extra={"preview": content[:200]})

    lines = split_lines(content)
    if len(lines) < 2:
        raise ParsingError("File contains no data or has an invalid format")

    delimiter = choose_delimiter(lines[0])
    headers = lines[0].split(delimiter)
    logger.info(
        "employee file headers",
        extra={"delimiter": "tab" if delimiter == "\t" else "comma", "headers": headers},
    )

    missing = missing_required_headers(headers)
    if missing:
        raise ParsingError(f"Missing required headers: {', '.join(missing)}")

    reference_time = now or datetime.now()
    employees: list[Employee] = []
    for line_number, line in enumerate(lines[1:], start=1):
        if not line.strip():
            continue
        try:
            employee = decode_row(headers, line.split(delimiter))
            reason = skip_reason(employee, reference_time)
        except Exception:
            logger.exception("error processing line", extra={"line_number": line_number, "line": line})
            continue

        if reason is not None:
            logger.warning("skipping line", extra={"line_number": line_number, "reason": reason})
            continue

        employees.append(employee)

    logger.info("finished parsing employee file", extra={"valid_employees": len(employees)})
    return employees
