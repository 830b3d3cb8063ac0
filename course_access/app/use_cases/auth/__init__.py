"""
Authentication Use Cases

One-time code login and logout.
"""

from .request_code_use_case import RequestCodeUseCase
from .verify_code_use_case import VerifyCodeUseCase
from .logout_use_case import LogoutUseCase
from .dtos import RequestCodeResponse, VerifyCodeResult, LogoutResponse

__all__ = [
    # Use Cases
    "RequestCodeUseCase",
    "VerifyCodeUseCase",
    "LogoutUseCase",
    # DTOs - Responses
    "RequestCodeResponse",
    "VerifyCodeResult",
    "LogoutResponse",
]
