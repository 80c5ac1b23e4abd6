import os
import tempfile

# Point the app's own engine at a throwaway SQLite file before it is imported.
# Most tests swap in an in-memory engine below; the lifespan tests use this one.
TEST_DB_DIR = tempfile.mkdtemp(prefix="food-delivery-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DB_DIR, 'app.db')}"
os.environ.setdefault("EMAIL_PROVIDER", "console")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.application.services.registration_ledger import PendingRegistrationLedger
from app.domain.models.category import Category
from app.domain.models.product import Product
from app.domain.models.user import User
from app.infrastructure.database import Base, get_db
from app.interfaces.deps import get_ledger, get_notification_sender


class FakeClock:
    """Controllable UTC clock for the ledger."""

    def __init__(self):
        self.current = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


class RecordingSender:
    """Notification sender that remembers what it was asked to send."""

    def __init__(self, ok=True):
        self.ok = ok
        self.sent = []
        self.closed = False

    async def send(self, to, subject, text, html=None):
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})
        return self.ok

    async def aclose(self):
        self.closed = True


@pytest.fixture(scope="function")
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def session_for_tests(engine):
    """Fresh in-memory database per test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger(request, clock):
    """Ledger on the fake clock. `@pytest.mark.otp_codes("111111", ...)` scripts the codes it hands out."""
    marker = request.node.get_closest_marker("otp_codes")
    if marker is None:
        return PendingRegistrationLedger(ttl=timedelta(minutes=5), clock=clock)
    codes = iter(marker.args)
    return PendingRegistrationLedger(ttl=timedelta(minutes=5), clock=clock, code_factory=lambda: next(codes))


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture(scope="function")
def app_with_overrides(session_for_tests, ledger, sender):
    def override_get_db():
        try:
            yield session_for_tests
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_notification_sender] = lambda: sender
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app_with_overrides):
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def add_user(session_for_tests):
    def _add(username="alice", password="secret", email=None, **extra):
        user = User(username=username, password=password, email=email, role="customer", **extra)
        session_for_tests.add(user)
        session_for_tests.commit()
        session_for_tests.refresh(user)
        return user
    return _add


@pytest.fixture
def add_catalog(session_for_tests):
    def _add(category_name, products):
        """products: iterable of (name, price, is_active)."""
        category = Category(name=category_name, image_url=f"https://img.test/{category_name}.png")
        session_for_tests.add(category)
        session_for_tests.flush()
        for name, price, is_active in products:
            session_for_tests.add(
                Product(category_id=category.category_id, name=name, price=price, is_active=is_active)
            )
        session_for_tests.commit()
        return category
    return _add
