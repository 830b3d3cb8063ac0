"""
Request Code Use Case

Issues a one-time login code and dispatches it by email.
"""

import logging
from datetime import timedelta
from typing import Optional

from course_access.app.services.email_sender import EmailDeliveryError, IEmailSender
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.config import ApplicationConfig
from course_access.domain.base import normalize_identity, utcnow
from course_access.domain.credentials import generate_code, hash_code
from course_access.domain.entities import AuditEvent, OneTimeCode
from course_access.libs.result import Error, Result, Return
from .dtos import RequestCodeResponse

logger = logging.getLogger(__name__)


class RequestCodeUseCase:
    """
    Use case for requesting a login code.

    Business Rules:
    - 6-digit uniformly random code, leading zeros allowed
    - Only the bcrypt hash of the code is stored
    - Prior codes of the identity are deleted in the same transaction
    - Code expires in 5 minutes
    - Same response whether or not the identity was seen before
    - Delivery failure is logged and never fails the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        ttl_minutes: Optional[int] = None,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.ttl_minutes = ttl_minutes or ApplicationConfig.OTP_TTL_MINUTES

    async def execute(self, email: str) -> Result[RequestCodeResponse]:
        """
        Execute request code use case.

        Args:
            email: Identity the code is sent to

        Returns:
            Result with RequestCodeResponse, or Error

        Errors:
            - INVALID_IDENTITY: Empty email
        """
        identity = normalize_identity(email or "")
        if not identity:
            return Return.err(Error("INVALID_IDENTITY", "Email is required"))

        code = generate_code()

        async with self.uow:
            replaced = await self.uow.one_time_codes.delete_by_identity(identity)

            one_time_code = OneTimeCode(
                identity=identity,
                code_hash=hash_code(code),
                expires_at=utcnow() + timedelta(minutes=self.ttl_minutes),
            )
            await self.uow.one_time_codes.create(one_time_code)

            await self.uow.audit_events.create(
                AuditEvent(
                    identity=identity,
                    action="code_requested",
                    event_metadata={"replaced_codes": replaced},
                )
            )

            await self.uow.commit()

        # Delivery happens after commit: the code is valid even if email fails
        try:
            await self.email_sender.send_login_code(identity, code)
        except EmailDeliveryError as exc:
            logger.error(f"Login code delivery to {identity} failed: {exc}")
            logger.warning(f"Undelivered login code for {identity}: {code}")

        return Return.ok(RequestCodeResponse(accepted=True))
