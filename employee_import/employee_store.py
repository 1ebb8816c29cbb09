from collections.abc import Iterable
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from employee_import.db_models import STRING_FIELDS, Employee
from employee_import.exceptions import NotFoundError
from employee_import.query import SEARCH_FIELDS, EmployeeQuery


logger = logging.getLogger(__name__)


def get_all(db: Session) -> list[Employee]:
    return list(db.execute(select(Employee)).scalars().all())


def get_by_id(db: Session, employee_id: int) -> Employee | None:
    return db.get(Employee, employee_id)


def get_by_payroll_number(db: Session, payroll_number: str) -> Employee | None:
    stmt = select(Employee).where(Employee.payroll_number == payroll_number).limit(1)
    return db.execute(stmt).scalars().first()


def _fresh_copy(employee: Employee) -> Employee:
    # Never reuse an incoming id; the database assigns a new one.
    return Employee(**employee.field_values())


def add_employee(db: Session, employee: Employee) -> Employee:
    new_employee = _fresh_copy(employee)
    db.add(new_employee)
    db.commit()
    logger.info(
        "added employee",
        extra={"employee_id": new_employee.id, "payroll_number": new_employee.payroll_number},
    )
    return new_employee


def add_employees(db: Session, employees: Iterable[Employee]) -> int:
    """Insert each employee in its own commit and return how many were stored.

    A failing row is rolled back and logged; later rows are still attempted.
    """
    success_count = 0
    for employee in employees:
        new_employee = _fresh_copy(employee)
        try:
            db.add(new_employee)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(
                "error adding employee",
                extra={"payroll_number": employee.payroll_number, "error": str(exc)},
            )
            continue

        logger.info(
            "added employee",
            extra={"employee_id": new_employee.id, "payroll_number": new_employee.payroll_number},
        )
        success_count += 1
    return success_count


def update_employee(db: Session, employee: Employee) -> Employee:
    existing = get_by_id(db, employee.id) if employee.id is not None else None
    if existing is None:
        raise NotFoundError(employee.id)

    for name, value in employee.field_values().items():
        setattr(existing, name, value)
    db.commit()
    logger.info(
        "updated employee",
        extra={"employee_id": existing.id, "payroll_number": existing.payroll_number},
    )
    return existing


def delete_employee(db: Session, employee_id: int) -> bool:
    existing = get_by_id(db, employee_id)
    if existing is None:
        logger.warning("attempted to delete missing employee", extra={"employee_id": employee_id})
        return False

    db.delete(existing)
    db.commit()
    logger.info(
        "deleted employee",
        extra={"employee_id": employee_id, "payroll_number": existing.payroll_number},
    )
    return True


def query_employees(db: Session, query: EmployeeQuery) -> list[Employee]:
    stmt = select(Employee)

    if query.search:
        needle = query.search.lower()
        stmt = stmt.where(
            or_(
                *(
                    func.lower(getattr(Employee, name)).contains(needle, autoescape=True)
                    for name in SEARCH_FIELDS
                )
            )
        )

    sort_column = getattr(Employee, query.sort_attribute)
    if query.sort_attribute in STRING_FIELDS:
        sort_column = func.lower(sort_column)
    order = sort_column.desc() if query.descending else sort_column.asc()
    # Stable order for ties.
    stmt = stmt.order_by(order, Employee.id.asc())
    return list(db.execute(stmt).scalars().all())
