"""Test configuration and fixtures."""

import os

# Settings are read at import time: point them at a throwaway database and
# keep every external provider unconfigured before travloger is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["FRONTEND_URL"] = "http://frontend.test"
os.environ["API_BASE_URL"] = "http://api.test"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["RAZORPAY_KEY_ID"] = ""
os.environ["RAZORPAY_KEY_SECRET"] = ""
os.environ["RAZORPAY_WEBHOOK_SECRET"] = ""
os.environ["SENDGRID_API_KEY"] = ""

from typing import Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import travloger.models  # noqa: E402,F401 - Import all models
from travloger.api.deps import AuthUser, get_current_user  # noqa: E402
from travloger.database import get_db  # noqa: E402
from travloger.models.base import Base  # noqa: E402
from travloger.services.email_service import get_email_service  # noqa: E402
from travloger.services.razorpay_service import PaymentProviderError, get_payment_service  # noqa: E402
from travloger.services.supabase_auth import AuthProviderError, get_auth_service  # noqa: E402

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_USER = AuthUser(id="admin-uid", email="admin@travloger.in", name="Admin", role="admin")
EMPLOYEE_USER = AuthUser(
    id="employee-uid",
    email="ravi@travloger.in",
    name="Ravi Kumar",
    role="employee",
    employee_id=1,
)


# ============================================================================
# Provider fakes
# ============================================================================

class FakeAuthService:
    """Stands in for Supabase Auth."""

    VALID_PASSWORD = "secret123"

    def __init__(self):
        self.is_configured = True
        self.fail_create = False
        self.created_users: list[dict] = []
        self.signed_out: list[str] = []

    def sign_in(self, email: str, password: str) -> dict:
        if password != self.VALID_PASSWORD:
            raise AuthProviderError("Invalid login credentials")
        return {
            "user": {"id": "uid-1", "email": email, "name": "Ravi", "role": "employee", "employee_id": 1},
            "token": "access-token",
        }

    def sign_up(self, name: str, email: str, password: str, role: str = "employee") -> dict:
        if email.startswith("taken"):
            raise AuthProviderError("User already registered")
        return {"user": {"id": "uid-2", "email": email, "name": name, "role": role}, "token": None}

    def sign_out(self, token: str) -> None:
        self.signed_out.append(token)

    def create_user(self, email: str, password: str, name: str, employee_id: Optional[int] = None) -> str:
        if self.fail_create:
            raise AuthProviderError("Email rate limit exceeded")
        self.created_users.append({"email": email, "name": name, "employee_id": employee_id})
        return f"auth-{len(self.created_users)}"


class FakePaymentService:
    """Stands in for Razorpay. Links are kept in memory by id."""

    def __init__(self):
        self.is_configured = True
        self.fail_create = False
        self.fail_fetch = False
        self.valid_signature = True
        self.created: list[dict] = []
        self.links: dict[str, dict] = {}
        self.listed: list[dict] = []

    async def create_payment_link(self, amount, customer_email, customer_name=None,
                                  customer_phone=None, description=None,
                                  reference_id=None, callback_url=None) -> dict:
        if self.fail_create:
            raise PaymentProviderError("Authentication failed", status_code=401)
        link_id = f"plink_{len(self.created) + 1}"
        short_url = f"https://rzp.io/i/{link_id}"
        self.created.append({
            "amount": amount,
            "customer_email": customer_email,
            "customer_name": customer_name,
            "description": description,
            "reference_id": reference_id,
            "callback_url": callback_url,
        })
        self.links[link_id] = {"id": link_id, "short_url": short_url, "status": "created", "payments": []}
        return {"id": link_id, "short_url": short_url, "status": "created", "order_id": None, "raw": {}}

    async def fetch_payment_link(self, link_id: str) -> dict:
        if self.fail_fetch:
            raise PaymentProviderError("Payment provider unreachable")
        if link_id not in self.links:
            raise PaymentProviderError("The id provided does not exist", status_code=400)
        return self.links[link_id]

    async def list_payment_links(self, from_ts: int, to_ts: int) -> list[dict]:
        return self.listed

    def verify_webhook_signature(self, body: bytes, signature: str) -> bool:
        return self.valid_signature

    def mark_paid(self, link_id: str, payment_id: str = "pay_123") -> None:
        self.links[link_id]["status"] = "paid"
        self.links[link_id]["payments"] = [{"payment_id": payment_id}]


class FakeEmailService:
    """Stands in for SendGrid; records every message."""

    def __init__(self):
        self.succeed = True
        self.sent: list[tuple[str, dict]] = []

    def _record(self, kind: str, **kwargs) -> bool:
        self.sent.append((kind, kwargs))
        return self.succeed

    def send_credentials(self, name, email, password, login_url=None) -> bool:
        return self._record("credentials", name=name, email=email, password=password)

    def send_employee_details(self, customer, employee) -> bool:
        return self._record("employee_details", customer=customer, employee=employee)

    def send_customer_details(self, employee, lead) -> bool:
        return self._record("customer_details", employee=employee, lead=lead)

    def send_payment_link(self, member, itinerary, payment) -> bool:
        return self._record("payment_link", member=member, itinerary=itinerary, payment=payment)

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.sent]


# ============================================================================
# Database
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine):
    """Create a test database session."""
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session


# ============================================================================
# Application
# ============================================================================

@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest.fixture
def payment_service():
    return FakePaymentService()


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest_asyncio.fixture(scope="function")
async def app(db_session, auth_service, payment_service, email_service):
    """The real application with the database, the caller and the providers overridden."""
    from travloger.main import app as application

    async def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_current_user] = lambda: ADMIN_USER
    application.dependency_overrides[get_auth_service] = lambda: auth_service
    application.dependency_overrides[get_payment_service] = lambda: payment_service
    application.dependency_overrides[get_email_service] = lambda: email_service

    yield application

    # Clean up
    application.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def client(app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def as_employee(app):
    """Make requests as a non-admin portal user."""
    app.dependency_overrides[get_current_user] = lambda: EMPLOYEE_USER
    return EMPLOYEE_USER


@pytest.fixture
def anonymous(app):
    """Drop the caller override so the real bearer-token check runs."""
    app.dependency_overrides.pop(get_current_user, None)


# ============================================================================
# Sample data
# ============================================================================

@pytest.fixture
def sample_lead_data():
    return {
        "name": "Asha Mehta",
        "email": "Asha@Example.com",
        "phone": "9876543210",
        "number_of_travelers": "2",
        "travel_dates": "2026-12-20",
        "source": "website",
        "destination": "Kashmir",
        "custom_notes": "Honeymoon",
    }


@pytest.fixture
def sample_employee_data():
    return {
        "name": "Ravi Kumar",
        "email": "Ravi@Travloger.in",
        "phone": "9123456780",
        "destination": "Kashmir",
        "password": "welcome1",
    }


@pytest.fixture
def sample_package_data():
    return {
        "destination": "kashmir",
        "plan_type": "Custom Plan",
        "price": 24999,
        "days": 6,
        "nights": 5,
    }
