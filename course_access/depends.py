from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from course_access.adapter.services.email_sender import HttpEmailSender, LoggingEmailSender
from course_access.adapter.services.payment_signer import HmacPaymentSigner
from course_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from course_access.adapter.services.wayforpay_gateway import WayForPayGateway
from course_access.api.error import ClientError
from course_access.app.services.email_sender import IEmailSender
from course_access.app.services.payment_gateway import IPaymentGateway
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.app.use_cases.access import AccessContext, AuthorizeUseCase
from course_access.config import ApplicationConfig
from course_access.domain.catalog import Catalog
from course_access.domain.catalog import get_catalog as load_configured_catalog
from course_access.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session, timeout=ApplicationConfig.STORAGE_TIMEOUT_SECONDS)


def get_catalog() -> Catalog:
    return load_configured_catalog()


def get_email_sender() -> IEmailSender:
    if not ApplicationConfig.EMAIL_API_URL:
        return LoggingEmailSender()

    return HttpEmailSender(
        api_url=ApplicationConfig.EMAIL_API_URL,
        api_key=ApplicationConfig.EMAIL_API_KEY,
        sender=ApplicationConfig.EMAIL_FROM,
        timeout=ApplicationConfig.EMAIL_TIMEOUT_SECONDS,
        ttl_minutes=ApplicationConfig.OTP_TTL_MINUTES,
    )


def get_payment_gateway() -> IPaymentGateway:
    signer = HmacPaymentSigner(
        ApplicationConfig.WAYFORPAY_SECRET_KEY,
        algorithm=ApplicationConfig.PAYMENT_SIGNATURE_ALGORITHM,
    )
    return WayForPayGateway(
        signer,
        merchant_account=ApplicationConfig.WAYFORPAY_MERCHANT_ACCOUNT,
        merchant_domain=ApplicationConfig.WAYFORPAY_DOMAIN,
        pay_url=ApplicationConfig.WAYFORPAY_PAY_URL,
    )


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)


async def get_access_context(
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AccessContext:
    """
    Resolve the caller from the session cookie.

    Never fails for a bad token: missing, unknown or expired sessions give
    an anonymous context. Storage errors propagate.
    """
    result = await AuthorizeUseCase(uow).execute(session_token)
    return result.value


async def require_identity(context: AccessContext = Depends(get_access_context)) -> str:
    """
    Dependency for endpoints that need a logged-in caller.

    Raises:
        ClientError: 401 if there is no valid session
    """
    if not context.is_authenticated:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Login required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return context.identity
