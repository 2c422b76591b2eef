"""Pytest fixtures for testing"""

import os

# Point settings at SQLite before any land_sales module builds the engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from land_sales.api.main import create_app
from land_sales.api.dependencies import get_today
from land_sales.infrastructure.database.models import Base
from land_sales.infrastructure.database.session import get_db
from land_sales.domain.models import PaymentRecord, PaymentStatus


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 6, 1)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed 'today'"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def sale_request() -> dict:
    """$10,000 parcel, $2,000 down, 9.9% over 5 years"""
    return {
        "property_id": "parcel-TX-0042",
        "buyer_id": "buyer-1",
        "sale_date": "2024-01-15",
        "sale_price": 10000,
        "down_payment": 2000,
        "interest_rate": 9.9,
        "term_months": 60,
    }


@pytest.fixture
def make_record():
    """Build payment records where only principal and status matter"""

    def _make(principal: str, status: str) -> PaymentRecord:
        return PaymentRecord(
            payment_number=1,
            due_date=date(2024, 2, 15),
            amount_due=Decimal(principal),
            principal=Decimal(principal),
            interest=Decimal("0"),
            status=PaymentStatus(status),
        )

    return _make
