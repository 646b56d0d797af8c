import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SEED_DEMO_DATA"] = "false"

from paydesk.database import Base, get_db
from paydesk.main import app
from paydesk.models.employee import Employee
from paydesk.models.loan import Loan
from paydesk.models.overtime import OvertimeRecord
from fastapi.testclient import TestClient
from datetime import date

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def roster(db_session):
    """Three-person crew with one active loan and mixed overtime approvals."""
    db_session.add_all([
        Employee(id="1", name="Richard Steel", role="Project Manager", department="Operations", salary=65000.0),
        Employee(id="2", name="Sarah Concrete", role="Senior Civil Engineer", department="Engineering & Design", salary=20000.0),
        Employee(id="3", name="Bob Builder", role="General Laborer", department="Operations", salary=3000.0),
    ])
    db_session.add_all([
        Loan(id="L1", employee_id="1", type="SSS", total_amount=15000.0, remaining_balance=12000.0,
             monthly_amortization=1000.0, start_date=date(2025, 1, 1), end_date=date(2026, 3, 1), status="Active"),
        Loan(id="L2", employee_id="1", type="Company", total_amount=9000.0, remaining_balance=0.0,
             monthly_amortization=750.0, start_date=date(2024, 1, 1), end_date=date(2025, 1, 1), status="Paid"),
    ])
    db_session.add_all([
        OvertimeRecord(id="ot1", employee_id="1", work_date=date(2025, 11, 18), hours=3,
                       rate_multiplier=1.25, reason="Site inspection", status="Approved"),
        OvertimeRecord(id="ot2", employee_id="2", work_date=date(2025, 11, 23), hours=2,
                       rate_multiplier=1.25, reason="Design review", status="Pending"),
        OvertimeRecord(id="ot9", employee_id="99", work_date=date(2025, 11, 20), hours=8,
                       rate_multiplier=2.0, reason="Contractor not on the roster", status="Approved"),
    ])
    db_session.commit()
    return db_session

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
