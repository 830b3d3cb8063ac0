import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from course_access.adapter.services.payment_signer import HmacPaymentSigner
from course_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from course_access.adapter.services.wayforpay_gateway import WayForPayGateway
from course_access.app.services.email_sender import IEmailSender
from course_access.depends import get_email_sender, get_payment_gateway, get_unit_of_work

ADMIN_HEADERS = {"X-Admin-API-Key": "test-admin-key-12345"}
MERCHANT_ACCOUNT = "test_merch_n1"
MERCHANT_SECRET = "test-merchant-secret"
ACK_TIME = 1700000000


class CapturingEmailSender(IEmailSender):
    """Keeps sent codes in memory instead of delivering them"""

    def __init__(self):
        self.sent = []

    async def send_login_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))

    def last_code(self, email: str) -> str:
        for sent_email, code in reversed(self.sent):
            if sent_email == email:
                return code
        raise AssertionError(f"No code sent to {email}")


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture
def email_sender():
    return CapturingEmailSender()


@pytest.fixture
def payment_signer():
    return HmacPaymentSigner(MERCHANT_SECRET)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, email_sender, payment_signer):
    from httpx import ASGITransport
    from course_access.api.app import create_app
    from course_access.config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    def override_get_payment_gateway():
        return WayForPayGateway(
            payment_signer,
            merchant_account=MERCHANT_ACCOUNT,
            merchant_domain="test",
            pay_url="https://secure.wayforpay.com/pay",
            clock=lambda: ACK_TIME,
        )

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_payment_gateway] = override_get_payment_gateway

    # https so the Secure session cookie is sent back; paths are relative to the API prefix
    transport = ASGITransport(app=app)
    base_url = f"https://test{ApplicationConfig.API_PREFIX}"
    async with AsyncClient(transport=transport, base_url=base_url) as ac:
        yield ac


@pytest.fixture
def login(client, email_sender):
    """Run the request/verify flow; the session cookie stays on the client."""

    async def _login(email: str = "viewer@example.com") -> str:
        response = await client.post("/auth/request-code", json={"email": email})
        assert response.status_code == 200
        code = email_sender.last_code(email.strip().lower())

        response = await client.post("/auth/verify-code", json={"email": email, "code": code})
        assert response.status_code == 200
        return response.cookies["sid"]

    return _login
