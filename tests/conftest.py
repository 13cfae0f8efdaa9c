"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from echeck_gateway.api.main import create_app
from echeck_gateway.infrastructure.database.models import Base
from echeck_gateway.infrastructure.database.session import get_db
from echeck_gateway.domain.models import BankAccount, Transaction


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ISSUER_ID = "issuer_acme"


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
def other_session(db: Session) -> Generator[Session, None, None]:
    """Second connection to the test database, acting as a concurrent request"""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(db: Session):
    """FastAPI app wired to the test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Test client authenticated as the default issuer"""
    return TestClient(app, headers={"X-User-ID": ISSUER_ID})


@pytest.fixture
def linked_account(client: TestClient) -> dict:
    """A linked source account for the default issuer"""
    response = client.post(
        "/v1/accounts",
        json={
            "bank_name": "First Federal Bank",
            "bank_address": "100 Main St, Springfield",
            "routing_number": "021000021",
            "fractional_routing": "1-2/210",
            "account_number": "123456789",
            "confirm_account_number": "123456789",
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def sample_account() -> BankAccount:
    return BankAccount(
        bank_name="First Federal Bank",
        bank_address="100 Main St, Springfield",
        routing_number="021000021",
        account_number="123456789",
        fractional_routing="1-2/210",
    )


@pytest.fixture
def sample_transaction() -> Transaction:
    return Transaction(
        amount_cents=125000,  # $1,250.00
        recipient_name="Jane Contractor",
        memo="Consulting - March",
        date="2026-03-15",
        check_number="2045",
    )
