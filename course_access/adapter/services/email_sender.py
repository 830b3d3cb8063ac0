"""
Email delivery adapters.

HttpEmailSender posts to a transactional email HTTP API. LoggingEmailSender
is used when no API is configured: the code is written to the application
log so an operator can hand it over.
"""

import logging

import httpx

from course_access.app.services.email_sender import EmailDeliveryError, IEmailSender

logger = logging.getLogger(__name__)

LOGIN_CODE_SUBJECT = "Your login code"


def _login_code_text(code: str, ttl_minutes: int) -> str:
    return f"Your login code: {code}\nThe code expires in {ttl_minutes} minutes."


class HttpEmailSender(IEmailSender):
    """Sends messages through a JSON email API with bearer authentication"""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        sender: str,
        timeout: float = 10.0,
        ttl_minutes: int = 5,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.ttl_minutes = ttl_minutes
        self.transport = transport

    async def send_login_code(self, email: str, code: str) -> None:
        payload = {
            "from": self.sender,
            "to": [email],
            "subject": LOGIN_CODE_SUBJECT,
            "text": _login_code_text(code, self.ttl_minutes),
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"{exc.__class__.__name__}: {exc}") from exc


class LoggingEmailSender(IEmailSender):
    """Operational fallback when no email API is configured"""

    async def send_login_code(self, email: str, code: str) -> None:
        logger.warning(f"Email delivery not configured; login code for {email}: {code}")
