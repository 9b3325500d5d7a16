"""
Shared pytest fixtures.

Uses a SQLite database so no Postgres is required for tests.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, get_db
from app.main import app
from app.models.employee import Employee
from app.models.threshold import OrganizationThreshold

SQLITE_URL = "sqlite:///./test_scoring.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    # Seed the system default thresholds (normally done by Alembic migration)
    db = TestingSessionLocal()
    try:
        if db.query(OrganizationThreshold).filter(OrganizationThreshold.organization_id.is_(None)).count() == 0:
            db.add(OrganizationThreshold(
                organization_id=None,
                burnout_red_threshold=70,
                readiness_green_threshold=70,
                interaction_high_threshold=50,
                interaction_critical_threshold=70,
                threshold_type="absolute",
                enable_interaction_effects=True,
                weekend_adjustment_enabled=True,
            ))
            db.commit()
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_employee(db):
    """Factory: a fresh employee per call, so tests never share metric rows."""
    def _make(name: str = "Test Employee", organization_id=None) -> Employee:
        employee = Employee(name=name, organization_id=organization_id)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee
    return _make
