"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time: point the app at an in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATABASE_AUTO_CREATE"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["REPORT_TIMEZONE"] = "UTC"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, create_tables, engine
from app.dependencies import get_now
from app.main import create_app
from app.models.reservation import Reservation
from app.models.role import Role, RoleName
from app.models.user import User
from app.schemas.reservation import ReservationOut
from app.seed import seed_roles
from app.services.reservation_store import ReservationStore
from app.utils.exceptions import ReservationNotFoundException
from app.utils.security import create_access_token, hash_password

NOW = datetime(2024, 3, 15, 14, 30, tzinfo=timezone.utc)
PASSWORD = "secret123"


class InMemoryReservationStore(ReservationStore):
    """Store double: same contract as SqlReservationStore, backed by a list."""

    def __init__(self, reservations=()):
        self._rows = [ReservationOut.model_validate(r) for r in reservations]
        self.list_calls = 0
        self.deleted_by: dict[str, int | None] = {}

    def list(self):
        self.list_calls += 1
        return sorted(self._rows, key=lambda r: r.createdAt, reverse=True)

    def filter_by(self, **equalities):
        return [r for r in self.list() if all(getattr(r, k) == v for k, v in equalities.items())]

    def get(self, reservation_id):
        for r in self._rows:
            if r.id == reservation_id:
                return r
        raise ReservationNotFoundException(reservation_id)

    def delete(self, reservation_id, actor_id=None):
        row = self.get(reservation_id)
        self._rows.remove(row)
        self.deleted_by[reservation_id] = actor_id


@pytest.fixture
def memory_store():
    return InMemoryReservationStore


@pytest.fixture
def db():
    create_tables()
    session = SessionLocal()
    seed_roles(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def application(db):
    application = create_app()
    application.dependency_overrides[get_now] = lambda: NOW
    return application


@pytest.fixture
def client(application):
    return TestClient(application)


def _make_user(db, email: str, role: RoleName, is_active: bool = True) -> User:
    role_row = db.query(Role).filter(Role.name == role).first()
    user = User(email=email, name=email.split("@")[0], password=hash_password(PASSWORD),
                isActive=is_active, roleId=role_row.id)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.name.value)}"}


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin@oufaris.ma", RoleName.ADMIN)


@pytest.fixture
def plain_user(db):
    return _make_user(db, "staff@oufaris.ma", RoleName.USER)


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def user_headers(plain_user):
    return _headers(plain_user)


@pytest.fixture
def make_reservation(db):
    """Insert a reservation row; createdAt is stored as UTC wall time."""
    def factory(car_name="Dacia Logan", created_at=NOW, car_category="Economique", source=None):
        row = Reservation(carName=car_name, carCategory=car_category, source=source, createdAt=created_at)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    return factory
