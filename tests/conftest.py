from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rtp_report.db.base import Base
from rtp_report.db.dependencies import get_db_session
import rtp_report.models.entities  # noqa: F401
from rtp_report.main import create_app
from rtp_report.models.entities import (
    DailyExecution,
    Service,
    ServiceGroup,
    TargetOverride,
    TemporalTarget,
    Unit,
    WeekdayCapacity,
)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class QueryCounter:
    def __init__(self) -> None:
        self.statements: list[str] = []

    @property
    def count(self) -> int:
        return len(self.statements)


@contextmanager
def count_queries(session: Session) -> Iterator[QueryCounter]:
    """Record every SQL statement the session's engine executes inside the block."""

    engine = session.get_bind()
    counter = QueryCounter()

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany) -> None:
        counter.statements.append(statement)

    event.listen(engine, "before_cursor_execute", _before_cursor_execute)
    try:
        yield counter
    finally:
        event.remove(engine, "before_cursor_execute", _before_cursor_execute)


class Seeder:
    """Row factories for the reporting schema."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _save(self, row):
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def unit(self, name: str = "Hospital Central") -> Unit:
        return self._save(Unit(name=name))

    def group(self, name: str, *, color: str | None = "#1e88e5", active: bool = True) -> ServiceGroup:
        return self._save(ServiceGroup(name=name, description=None, color=color, active=active))

    def service(
        self,
        unit: Unit,
        name: str,
        *,
        group: ServiceGroup | None = None,
        static_target: int = 0,
    ) -> Service:
        return self._save(
            Service(
                unit_id=unit.id,
                group_id=group.id if group is not None else None,
                name=name,
                static_target=static_target,
            )
        )

    def execution(
        self,
        service: Service,
        *,
        year: int,
        month: int,
        day: int,
        scheduled: int = 0,
        executed: int = 0,
        walkin: int = 0,
    ) -> DailyExecution:
        return self._save(
            DailyExecution(
                unit_id=service.unit_id,
                service_id=service.id,
                year=year,
                month=month,
                day=day,
                scheduled_count=scheduled,
                executed_count=executed,
                executed_walkin_count=walkin,
            )
        )

    def capacity(self, service: Service, label: str, consultations: int) -> WeekdayCapacity:
        return self._save(
            WeekdayCapacity(
                unit_id=service.unit_id,
                service_id=service.id,
                weekday_label=label,
                consultations_per_day=consultations,
            )
        )

    def override(
        self,
        service: Service,
        value: int,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> TargetOverride:
        return self._save(
            TargetOverride(
                service_id=service.id,
                unit_id=service.unit_id,
                target_value=value,
                validity_start=start,
                validity_end=end,
            )
        )

    def temporal_target(
        self,
        service: Service,
        value: int,
        *,
        active: bool = True,
        start: date | None = None,
        end: date | None = None,
    ) -> TemporalTarget:
        return self._save(
            TemporalTarget(
                service_id=service.id,
                target_value=value,
                active=active,
                validity_start=start,
                validity_end=end,
            )
        )


@pytest.fixture()
def seed(db_session: Session) -> Seeder:
    return Seeder(db_session)
