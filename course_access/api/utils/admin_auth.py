"""
Admin API Key Authentication

Validates admin API keys for system administration endpoints.
"""

import hmac

from fastapi import Header, status

from course_access.api.error import ClientError
from course_access.config import ApplicationConfig
from course_access.libs.result import Error


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used for manual grants, audit log access and maintenance. Different
    from the viewer session cookie.

    Args:
        x_admin_api_key: API key from X-Admin-API-Key header

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    valid_admin_key = ApplicationConfig.ADMIN_API_KEY

    if not valid_admin_key or not hmac.compare_digest(
        x_admin_api_key.encode(), str(valid_admin_key).encode()
    ):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
