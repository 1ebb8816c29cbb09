from collections.abc import Generator
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from employee_import.config import Settings
from employee_import.database import build_session_factory
from employee_import.db_models import Employee
from employee_import.service import EmployeeService


HEADER = ",".join(
    [
        "Personnel_Records.Payroll_Number",
        "Personnel_Records.Forenames",
        "Personnel_Records.Surname",
        "Personnel_Records.Date_of_Birth",
        "Personnel_Records.Start_Date",
    ]
)

NOW = datetime(2026, 10, 17, 12, 0, 0)


def make_employee(**overrides: object) -> Employee:
    values: dict[str, object] = {
        "payroll_number": "PI100",
        "forenames": "John",
        "surname": "Doe",
        "date_of_birth": date(1980, 1, 1),
        "telephone": "",
        "mobile": "",
        "address": "",
        "address_2": "",
        "postcode": "",
        "email_home": "",
        "start_date": date(2020, 1, 1),
    }
    values.update(overrides)
    return Employee(**values)


@pytest.fixture()
def temp_workspace(tmp_path: Path) -> Path:
    (tmp_path / "data" / "input").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture()
def test_settings(temp_workspace: Path) -> Settings:
    return Settings(
        app_name="employee-import",
        database_url=f"sqlite:///{temp_workspace / 'test.db'}",
        log_level="INFO",
        input_dir=str(temp_workspace / "data" / "input"),
        schedule_hour_utc=2,
        schedule_minute_utc=0,
    )


@pytest.fixture()
def session_factory(test_settings: Settings) -> sessionmaker[Session]:
    return build_session_factory(test_settings.database_url)


@pytest.fixture()
def service(session_factory: sessionmaker[Session]) -> Generator[EmployeeService, None, None]:
    yield EmployeeService(session_factory)
