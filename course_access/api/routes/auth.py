from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field

from course_access.api.error import ClientError, ServerError
from course_access.app.services.email_sender import IEmailSender
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.app.use_cases.auth import (
    LogoutUseCase,
    RequestCodeResponse,
    RequestCodeUseCase,
    VerifyCodeUseCase,
)
from course_access.config import ApplicationConfig
from course_access.depends import get_email_sender, get_session_token, get_unit_of_work
from course_access.domain.entities import VerifyFailure

router = APIRouter(prefix="/auth", tags=["Authentication"])

VERIFY_FAILURE_REASONS = {
    "CODE_NOT_FOUND": VerifyFailure.not_found,
    "CODE_EXPIRED": VerifyFailure.expired,
    "CODE_MISMATCH": VerifyFailure.mismatch,
}


class RequestCodeRequest(BaseModel):
    """
    Request code HTTP request payload

    Validates incoming HTTP request before the code is issued.
    """

    email: EmailStr = Field(..., description="Email the login code is sent to")


@router.post(
    "/request-code", status_code=status.HTTP_200_OK, response_model=RequestCodeResponse
)
async def request_code(
    request: RequestCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Login Code

    Issues a fresh six-digit code for the email and invalidates any earlier
    one. The response is the same whether or not the email was seen before.

    Raises:
        - 422 Unprocessable Entity: Invalid email (handled by FastAPI)
        - 500 Internal Server Error: Storage failure
    """
    use_case = RequestCodeUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_IDENTITY":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class VerifyCodeRequest(BaseModel):
    """Verify code HTTP request payload"""

    email: EmailStr = Field(..., description="Email the code was sent to")
    code: str = Field(..., min_length=1, max_length=32, description="Six-digit login code")


class VerifyCodeResponse(BaseModel):
    accepted: bool
    identity: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None


@router.post("/verify-code", status_code=status.HTTP_200_OK, response_model=VerifyCodeResponse)
async def verify_code(request: VerifyCodeRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Verify Login Code

    Consumes the code and opens a session. The raw session token is only
    ever sent in the HttpOnly cookie.

    Raises:
        - 400 Bad Request: Unknown, expired or wrong code (generic message)
        - 500 Internal Server Error: Storage failure
    """
    use_case = VerifyCodeUseCase(uow)
    result = await use_case.execute(request.email, request.code)

    if result.is_err():
        error = result.error
        reason = VERIFY_FAILURE_REASONS.get(error.code)
        if reason is None:
            raise ServerError(error)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"accepted": False, "reason": reason.value, "message": error.message},
        )

    verified = result.value
    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"accepted": True, "identity": verified.identity},
    )
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=verified.session_token,
        max_age=ApplicationConfig.SESSION_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return response


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    session_token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Deletes the session and clears the cookie. Always succeeds, also for
    callers without a session.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(session_token)

    if result.is_err():
        raise ServerError(result.error)

    response = JSONResponse(status_code=status.HTTP_200_OK, content={"ok": True})
    response.delete_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        path="/",
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
    return response
