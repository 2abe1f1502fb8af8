import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from geo_backend.database import Base, build_engine, get_db  # noqa: E402
from geo_backend.main import app  # noqa: E402
from geo_backend.models.user import Role  # noqa: E402
from geo_backend.stores import identity_store  # noqa: E402


@pytest.fixture
def db_engine():
    engine = build_engine('sqlite://')
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def create_account(session_factory):
    def _create_account(email: str, password: str = 'secret', role: Role = Role.USER) -> str:
        db = session_factory()
        try:
            return identity_store.create_user(db, email, password, role=role).id
        finally:
            db.close()

    return _create_account
