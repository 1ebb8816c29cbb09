from datetime import UTC, date, datetime
import logging
from pathlib import Path

from apscheduler.schedulers.blocking import BlockingScheduler
from sqlalchemy.orm import Session, sessionmaker

from employee_import.config import Settings
from employee_import.files import PathImportFile
from employee_import.schemas import ImportResult
from employee_import.service import EmployeeService


logger = logging.getLogger(__name__)


def drop_file_path(settings: Settings, run_date: date) -> Path:
    return Path(settings.input_dir) / f"employees-{run_date.isoformat()}.csv"


def run_daily_import(settings: Settings, session_factory: sessionmaker[Session]) -> ImportResult | None:
    run_date = datetime.now(UTC).date()
    path = drop_file_path(settings, run_date)
    if not path.exists():
        logger.warning("no employee file to import", extra={"path": str(path)})
        return None

    result = EmployeeService(session_factory).import_file(PathImportFile(path))
    if not result.success:
        logger.error(
            "scheduled employee import failed",
            extra={"path": str(path), "error_messages": result.error_messages},
        )
        return result
    logger.info(
        "scheduled employee import completed",
        extra={"path": str(path), "success_count": result.success_count},
    )
    return result


def start_scheduler(settings: Settings, session_factory: sessionmaker[Session], *, run_now: bool = False) -> None:
    scheduler = BlockingScheduler(timezone="UTC")
    scheduler.add_job(
        run_daily_import,
        "cron",
        args=[settings, session_factory],
        hour=settings.schedule_hour_utc,
        minute=settings.schedule_minute_utc,
        id="daily_employee_import",
        replace_existing=True,
    )

    logger.info(
        "scheduler started",
        extra={
            "schedule_hour_utc": settings.schedule_hour_utc,
            "schedule_minute_utc": settings.schedule_minute_utc,
            "input_dir": settings.input_dir,
        },
    )

    if run_now:
        run_daily_import(settings, session_factory)

    scheduler.start()
