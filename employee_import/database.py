from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from employee_import.db_models import Base


def _unicode_lower(value: str | None) -> str | None:
    if value is None:
        return None
    return value.lower()


def build_session_factory(database_url: str) -> sessionmaker[Session]:
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(database_url, future=True, connect_args=connect_args)
    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _register_lower(dbapi_connection, connection_record) -> None:
            # SQLite's built-in lower() only folds ASCII.
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    # Schema is created on startup; there are no migrations.
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
