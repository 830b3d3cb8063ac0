"""Admin use cases for system administration operations."""

from .purge_expired_use_case import PurgeExpiredUseCase, PurgeExpiredResponse

__all__ = [
    "PurgeExpiredUseCase",
    "PurgeExpiredResponse",
]
