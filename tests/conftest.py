import os

os.environ["TESTING"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BOLD_API_KEY"] = "test-api-key"
os.environ["BOLD_SECRET_KEY"] = "test-bold-secret"
os.environ["DONATION_FETCH_RETRY_DELAYS"] = "[0, 0]"

import pytest
from fastapi.testclient import TestClient

from atenas.api.dependencies import get_email_service, get_storage_service
from atenas.db.database import SessionLocal, engine
from atenas.db.models import Base
from atenas.domain.enums import RoleName
from atenas.infrastructure.external_services import geocoding_service
from atenas.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from atenas.main import app

from .factories import FakeMailer, FakeStorage, make_user


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    geocoding_service.clear_cache()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def unit_of_work(db):
    return UnitOfWorkImpl(db)


@pytest.fixture
def storage():
    fake = FakeStorage()
    app.dependency_overrides[get_storage_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_storage_service, None)


@pytest.fixture
def mailer():
    fake = FakeMailer()
    app.dependency_overrides[get_email_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_email_service, None)


@pytest.fixture
def client(storage, mailer):
    return TestClient(app)


@pytest.fixture
def admin(db):
    return make_user(db, "admin@atenas.org", roles=[RoleName.ADMIN])


@pytest.fixture
def donor(db):
    return make_user(db, "donor@example.com", roles=[RoleName.DONATOR])
