from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from quest2go.auth.jwt_handler import SessionTokenCodec
from quest2go.auth.passwords import PasswordHasher
from quest2go.core.config import Settings
from quest2go.database import Base, build_engine, create_schema
from quest2go.main import create_app
from quest2go.store.accounts import AccountStore

TEST_SECRET = 'test-secret-key-with-enough-bytes-for-hs256'


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        database_url='sqlite://',
        bcrypt_rounds=4,
        cookie_secure=False,
        log_level='WARNING',
    )


@pytest.fixture
def db():
    engine = build_engine('sqlite://')
    create_schema(engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db) -> AccountStore:
    return AccountStore(db)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def codec(clock) -> SessionTokenCodec:
    return SessionTokenCodec(TEST_SECRET, clock=clock)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
