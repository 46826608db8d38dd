import os

# Point the application engine at an in-memory database before app imports
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DEBUG", "false")

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.main import app
from app.auth import hash_password, session_token_for
from app.database import Base, get_db
from app.models import User, Auction, Bid

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="function")
def db_engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Yields a database session bound to the test engine"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Yields a TestClient that uses the test database session"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session is closed by fixture

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(db_session):
    """A user whose password is TEST_PASSWORD"""
    user = User(email="bidder@test.com", password=hash_password(TEST_PASSWORD))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(registered_user):
    """Bearer header for registered_user"""
    token = session_token_for(registered_user)
    return {"Authorization": f"Bearer {token}"}


def make_auction(db_session, title="Vintage Lamp", starting_bid=10.0, description=None):
    auction = Auction(
        title=title,
        description=description,
        startingBid=starting_bid,
        currentBid=0,
        expiryDate=datetime.now(timezone.utc) + timedelta(days=3),
    )
    db_session.add(auction)
    db_session.commit()
    db_session.refresh(auction)
    return auction


def make_bid(db_session, auction, bidder, amount):
    bid = Bid(auctionId=auction.id, bidAmount=amount, bidder=bidder)
    db_session.add(bid)
    db_session.commit()
    db_session.refresh(bid)
    return bid


@pytest.fixture
def auction(db_session):
    """A single open auction"""
    return make_auction(db_session)
