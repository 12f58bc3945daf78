"""
Test configuration and fixtures for the rental dashboard API.
Provides an in-memory database, in-memory record stores, test data factories
and an authenticated HTTP client.
"""

import pytest
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.database import Base, get_db
from app.models.invoice import Invoice, InvoiceStatus
from app.models.property import Property, LettingStatus, ComplianceStatus
from app.models.user import User
from app.repositories.invoice import InvoiceRepository
from app.repositories.property import PropertyRepository
from app.repositories.user import UserRepository
from app.services.auth import AuthService
from app.services.invoice import InvoiceService
from app.services.property import PropertyService
from app.services.revalidation import ListingCache, ViewInvalidator, view_invalidator
from app.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

INVOICE_DATE = date(2024, 3, 1)


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def invoice_repository(db_session: AsyncSession) -> InvoiceRepository:
    return InvoiceRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


class InMemoryStore:
    """
    Record store keeping rows in a dict.

    Set `failure` to an exception instance to make every call raise it,
    simulating a database outage.
    """

    def __init__(self, model):
        self.model = model
        self.rows: Dict[uuid.UUID, Dict[str, Any]] = {}
        self.failure: Optional[BaseException] = None
        self.calls: List[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.failure is not None:
            raise self.failure

    async def create(self, obj_in: Dict[str, Any]) -> uuid.UUID:
        self._check("create")
        record_id = uuid.uuid4()
        self.rows[record_id] = dict(obj_in)
        return record_id

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> bool:
        self._check("update")
        if id not in self.rows:
            return False
        self.rows[id].update(obj_in)
        return True

    async def delete(self, id: uuid.UUID) -> bool:
        self._check("delete")
        return self.rows.pop(id, None) is not None

    async def get_by_id(self, id: uuid.UUID):
        self._check("get_by_id")
        if id not in self.rows:
            return None
        now = datetime.now(timezone.utc)
        return self.model(id=id, created_at=now, updated_at=now, **self.rows[id])

    async def get_multi(self, skip: int = 0, limit: int = 100):
        self._check("get_multi")
        ids = list(self.rows)[skip:skip + limit]
        return [await self.get_by_id(record_id) for record_id in ids]


@pytest.fixture
def invalidator() -> ViewInvalidator:
    return ViewInvalidator(ListingCache())


@pytest.fixture
def invoice_store() -> InMemoryStore:
    return InMemoryStore(Invoice)


@pytest.fixture
def property_store() -> InMemoryStore:
    return InMemoryStore(Property)


@pytest.fixture
def invoice_service(invoice_store: InMemoryStore, invalidator: ViewInvalidator) -> InvoiceService:
    return InvoiceService(invoice_store, invalidator, today=lambda: INVOICE_DATE)


@pytest.fixture
def property_service(property_store: InMemoryStore, invalidator: ViewInvalidator) -> PropertyService:
    return PropertyService(property_store, invalidator)


# Test data factories
class InvoiceFactory:
    """Factory for invoice form submissions and stored invoices."""

    @staticmethod
    def form(
        customer_id: str = "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        amount: str = "125.50",
        status: str = "pending"
    ) -> dict:
        return {"customerId": customer_id, "amount": amount, "status": status}

    @staticmethod
    async def create_invoice(
        invoice_repo: InvoiceRepository,
        customer_id: str = "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        amount: int = 12550,
        status: InvoiceStatus = InvoiceStatus.PENDING,
        invoice_date: date = INVOICE_DATE
    ) -> Invoice:
        invoice_id = await invoice_repo.create({
            "customer_id": customer_id,
            "amount": amount,
            "status": status,
            "date": invoice_date,
        })
        return await invoice_repo.get_by_id(invoice_id)


class PropertyFactory:
    """Factory for property form submissions and stored properties."""

    @staticmethod
    def form(
        title: str = "Two-bed flat on Mill Road",
        address: str = "12 Mill Road, Cambridge",
        image_url: str = "/properties/mill-road.png",
        monthly_rent: str = "1450.00",
        tenants: str = "2",
        letting_status: str = "let",
        compliance_status: str = "pending"
    ) -> dict:
        return {
            "title": title,
            "address": address,
            "imageUrl": image_url,
            "monthlyRent": monthly_rent,
            "tenants": tenants,
            "lettingStatus": letting_status,
            "complianceStatus": compliance_status,
        }

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        title: str = "Two-bed flat on Mill Road",
        monthly_rent: Decimal = Decimal("1450.00"),
        letting_status: LettingStatus = LettingStatus.LET
    ) -> Property:
        property_id = await property_repo.create({
            "title": title,
            "address": "12 Mill Road, Cambridge",
            "image_url": "/properties/mill-road.png",
            "monthly_rent": monthly_rent,
            "tenants": 2,
            "letting_status": letting_status,
            "compliance_status": ComplianceStatus.PENDING,
        })
        return await property_repo.get_by_id(property_id)


class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: str = None,
        password: str = "testpassword123",
        full_name: str = "Test User",
        is_active: bool = True
    ) -> User:
        return await user_repo.create_user({
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "full_name": full_name,
            "is_active": is_active,
        })


@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="manager@example.com", full_name="Test Manager")


@pytest.fixture
async def test_inactive_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="inactive@example.com", is_active=False)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    token = create_access_token(user_id=test_user.id, email=test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async client bound to the app with the test session and an empty listing cache."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    view_invalidator.cache.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    view_invalidator.cache.clear()
