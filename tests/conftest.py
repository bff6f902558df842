import os

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REAPER_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hotdesk.db.base import Base
from hotdesk.db.session import get_db
from hotdesk.main import app
from hotdesk.models.seat import Seat, SeatStatus
from hotdesk.services.activity_log import ActivityLog
from hotdesk.services.booking_ledger import BookingLedger
from hotdesk.services.coordinator import BookingCoordinator
from hotdesk.services.seat_registry import SeatRegistry


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'hotdesk.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_seat(db):
    def _make(workstation_id, block="A", employee_id=None, employee_name=None, status=SeatStatus.AVAILABLE, is_active=True):
        seat = Seat(
            workstation_id=workstation_id,
            block=block,
            employee_id=employee_id,
            employee_name=employee_name,
            status=status,
            is_active=is_active,
        )
        db.add(seat)
        db.commit()
        db.refresh(seat)
        return seat

    return _make


def build_coordinator(session):
    return BookingCoordinator(session, SeatRegistry(session), BookingLedger(session), ActivityLog(session))


@pytest.fixture
def coordinator(db):
    return build_coordinator(db)


@pytest.fixture
def coordinator_factory():
    return build_coordinator
