from datetime import datetime
import logging
from typing import BinaryIO

from sqlalchemy.orm import Session, sessionmaker

from employee_import import employee_store
from employee_import.csv_parser import parse_employee_file
from employee_import.db_models import Employee
from employee_import.exceptions import NotFoundError, ParsingError, ValidationError
from employee_import.files import ImportFile
from employee_import.query import build_query
from employee_import.schemas import ImportResult
from employee_import.validation import validate_employee


logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "The file contains no data or has an invalid format"


class EmployeeService:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def import_file(self, file: ImportFile) -> ImportResult:
        try:
            with file.open_read_stream() as stream:
                return self.import_stream(stream)
        except Exception as exc:
            logger.exception("error importing employee file", extra={"file_name": file.file_name})
            return ImportResult.failed(f"Import error: {exc}")

    def import_stream(self, stream: BinaryIO, *, now: datetime | None = None) -> ImportResult:
        try:
            try:
                employees = parse_employee_file(stream.read(), now=now)
            except ParsingError as exc:
                logger.warning("employee file rejected", extra={"error": str(exc)})
                return ImportResult.failed(str(exc))

            if not employees:
                return ImportResult.failed(NO_DATA_MESSAGE)

            with self.session_factory() as db:
                success_count = employee_store.add_employees(db, employees)

            logger.info(
                "employee import finished",
                extra={"imported": success_count, "parsed": len(employees)},
            )
            # Reports every parsed row, including any whose insert failed.
            return ImportResult(success_count=success_count, imported_employees=list(employees))
        except Exception as exc:
            logger.exception("error importing employees")
            return ImportResult.failed(f"Import error: {exc}")

    def list_employees(
        self,
        sort_field: str | None = "surname",
        sort_order: str | None = "asc",
        search: str | None = None,
    ) -> list[Employee]:
        query = build_query(sort_field, sort_order, search)
        with self.session_factory() as db:
            return employee_store.query_employees(db, query)

    def list_all(self) -> list[Employee]:
        with self.session_factory() as db:
            return employee_store.get_all(db)

    def get_employee(self, employee_id: int) -> Employee:
        with self.session_factory() as db:
            employee = employee_store.get_by_id(db, employee_id)
        if employee is None:
            raise NotFoundError(employee_id)
        return employee

    def get_by_payroll_number(self, payroll_number: str) -> Employee | None:
        with self.session_factory() as db:
            return employee_store.get_by_payroll_number(db, payroll_number)

    def add_employee(self, employee: Employee) -> Employee:
        errors = validate_employee(employee)
        if errors:
            raise ValidationError(errors)
        with self.session_factory() as db:
            return employee_store.add_employee(db, employee)

    def update_employee(self, employee: Employee) -> Employee:
        with self.session_factory() as db:
            if employee.id is None or employee_store.get_by_id(db, employee.id) is None:
                raise NotFoundError(employee.id)

            errors = validate_employee(employee)
            if errors:
                raise ValidationError(errors)
            return employee_store.update_employee(db, employee)

    def delete_employee(self, employee_id: int) -> bool:
        with self.session_factory() as db:
            if employee_store.get_by_id(db, employee_id) is None:
                raise NotFoundError(employee_id)
            return employee_store.delete_employee(db, employee_id)
