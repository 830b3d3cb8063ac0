"""
Verify Code Use Case

Exchanges a one-time code for a new session token.
"""

from datetime import timedelta
from typing import Optional

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.config import ApplicationConfig
from course_access.domain.base import normalize_identity, utcnow
from course_access.domain.credentials import check_code, generate_session_token, hash_token
from course_access.domain.entities import AuditEvent, Session
from course_access.libs.result import Error, Result, Return
from .dtos import VerifyCodeResult

# One message for every failure so responses don't reveal which check failed
INVALID_CODE_MESSAGE = "Invalid or expired code"


class VerifyCodeUseCase:
    """
    Use case for verifying a login code.

    Business Rules:
    - Code must exist, be unexpired and match the stored hash
    - Single-use: the code row is deleted on success
    - A failed attempt increments the attempt counter; the code is deleted
      once the counter reaches the limit
    - Session token is 256 random bits; only its SHA-256 digest is stored
    - Session expires in 30 days
    - Earlier sessions of the identity stay valid
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_ttl_days: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ):
        self.uow = uow
        self.session_ttl_days = session_ttl_days or ApplicationConfig.SESSION_TTL_DAYS
        self.max_attempts = max_attempts or ApplicationConfig.OTP_MAX_ATTEMPTS

    async def execute(self, email: str, code: str) -> Result[VerifyCodeResult]:
        """
        Execute verify code use case.

        Args:
            email: Identity the code was issued to
            code: Submitted digits

        Returns:
            Result with VerifyCodeResult holding the raw session token, or Error

        Errors:
            - CODE_NOT_FOUND: No live code for the identity (never issued, consumed, or burned)
            - CODE_EXPIRED: Code TTL has passed
            - CODE_MISMATCH: Code does not match
        """
        identity = normalize_identity(email or "")
        submitted = (code or "").strip()

        async with self.uow:
            record = await self.uow.one_time_codes.get_latest_by_identity(identity)
            if record is None:
                return Return.err(Error("CODE_NOT_FOUND", INVALID_CODE_MESSAGE))

            now = utcnow()
            if record.expires_at <= now:
                return Return.err(Error("CODE_EXPIRED", INVALID_CODE_MESSAGE))

            if not check_code(submitted, record.code_hash):
                attempts = await self.uow.one_time_codes.increment_attempts(record.id)
                if attempts >= self.max_attempts:
                    await self.uow.one_time_codes.delete_by_id(record.id)
                await self.uow.commit()
                return Return.err(Error("CODE_MISMATCH", INVALID_CODE_MESSAGE))

            # Only the caller whose delete removed the row may log in
            consumed = await self.uow.one_time_codes.delete_by_id(record.id)
            if not consumed:
                return Return.err(Error("CODE_NOT_FOUND", INVALID_CODE_MESSAGE))

            session_token = generate_session_token()
            session = Session(
                identity=identity,
                token_hash=hash_token(session_token),
                expires_at=now + timedelta(days=self.session_ttl_days),
            )
            await self.uow.sessions.create(session)

            await self.uow.audit_events.create(
                AuditEvent(
                    identity=identity,
                    action="login",
                    event_metadata={"session_id": str(session.id)},
                )
            )

            await self.uow.commit()

            return Return.ok(
                VerifyCodeResult(
                    identity=identity,
                    session_token=session_token,
                    expires_at=session.expires_at,
                )
            )
