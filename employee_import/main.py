import argparse
import json
import logging
import sys

from employee_import.config import get_settings
from employee_import.csv_parser import parse_date
from employee_import.database import build_session_factory
from employee_import.db_models import Employee
from employee_import.exceptions import NotFoundError, ValidationError
from employee_import.files import PathImportFile, is_csv_file
from employee_import.scheduler import start_scheduler
from employee_import.service import EmployeeService


# CLI option -> (Employee attribute, converter)
UPDATE_OPTIONS = {
    "payroll_number": ("payroll_number", str),
    "forenames": ("forenames", str),
    "surname": ("surname", str),
    "date_of_birth": ("date_of_birth", parse_date),
    "telephone": ("telephone", str),
    "mobile": ("mobile", str),
    "address": ("address", str),
    "address_2": ("address_2", str),
    "postcode": ("postcode", str),
    "email_home": ("email_home", str),
    "start_date": ("start_date", parse_date),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage employee records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="import employees from a delimited file")
    import_parser.add_argument("path", help="CSV or tab separated file with a Personnel_Records header row")
    import_parser.add_argument("--json", action="store_true", help="print the full result payload as JSON")

    list_parser = subparsers.add_parser("list", help="list employees")
    list_parser.add_argument("--search", default=None, help="case-insensitive text to match")
    list_parser.add_argument("--sort-field", default="surname", help="field to sort by")
    list_parser.add_argument("--sort-order", default="asc", help="asc or desc")

    show_parser = subparsers.add_parser("show", help="show one employee")
    show_parser.add_argument("employee_id", type=int)

    delete_parser = subparsers.add_parser("delete", help="delete one employee")
    delete_parser.add_argument("employee_id", type=int)

    update_parser = subparsers.add_parser("update", help="update fields of one employee")
    update_parser.add_argument("employee_id", type=int)
    for option in UPDATE_OPTIONS:
        update_parser.add_argument(f"--{option.replace('_', '-')}", dest=option, default=None)

    schedule_parser = subparsers.add_parser("schedule", help="start the daily drop-folder import")
    schedule_parser.add_argument("--run-now", action="store_true", help="also import once immediately")

    return parser.parse_args(argv)


def format_row(employee: Employee) -> str:
    return "\t".join(
        str(value)
        for value in (
            employee.id,
            employee.payroll_number,
            employee.forenames,
            employee.surname,
            employee.date_of_birth.isoformat(),
            employee.start_date.isoformat(),
            employee.email_home or "",
        )
    )


def run_import(service: EmployeeService, path: str, as_json: bool) -> int:
    import_file = PathImportFile(path)
    if not import_file.path.exists() or import_file.length == 0:
        print("Please select a file", file=sys.stderr)
        return 2
    if not is_csv_file(import_file):
        print("Please select a CSV file", file=sys.stderr)
        return 2

    result = service.import_file(import_file)
    if as_json:
        print(json.dumps(result.as_payload(), indent=2))
    else:
        print(
            "success={success} success_count={success_count} error_count={error_count}".format(
                success=result.success,
                success_count=result.success_count,
                error_count=result.error_count,
            )
        )
        for message in result.error_messages:
            print(f"error={message}")
    return 0 if result.success else 1


def run_update(service: EmployeeService, args: argparse.Namespace) -> int:
    employee = service.get_employee(args.employee_id)
    for option, (attribute, convert) in UPDATE_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            setattr(employee, attribute, convert(value.strip()))

    updated = service.update_employee(employee)
    print(format_row(updated))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    session_factory = build_session_factory(settings.database_url)
    if args.command == "schedule":
        start_scheduler(settings, session_factory, run_now=args.run_now)
        return 0

    service = EmployeeService(session_factory)
    try:
        if args.command == "import":
            return run_import(service, args.path, args.json)

        if args.command == "list":
            for employee in service.list_employees(args.sort_field, args.sort_order, args.search):
                print(format_row(employee))
            return 0

        if args.command == "show":
            print(json.dumps(service.get_employee(args.employee_id).as_dict(), indent=2))
            return 0

        if args.command == "delete":
            service.delete_employee(args.employee_id)
            print(f"deleted={args.employee_id}")
            return 0

        return run_update(service, args)
    except NotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except ValidationError as exc:
        for message in exc.messages:
            print(f"error={message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
