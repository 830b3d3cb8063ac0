from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from course_access.domain.entities import OneTimeCode


class IOneTimeCodeRepository(ABC):
    """OneTimeCode repository interface - application layer"""

    @abstractmethod
    async def get_latest_by_identity(self, identity: str) -> Optional[OneTimeCode]:
        """Get the most recent code issued to an identity"""
        pass

    @abstractmethod
    async def create(self, code: OneTimeCode) -> OneTimeCode:
        """Create a new one-time code"""
        pass

    @abstractmethod
    async def delete_by_identity(self, identity: str) -> int:
        """Delete all codes of an identity. Returns count of deleted codes."""
        pass

    @abstractmethod
    async def delete_by_id(self, code_id: UUID) -> bool:
        """Delete a code. Returns True if this call removed it."""
        pass

    @abstractmethod
    async def increment_attempts(self, code_id: UUID) -> int:
        """Record a failed attempt. Returns the new attempt count."""
        pass

    @abstractmethod
    async def delete_expired(self, now) -> int:
        """Delete codes whose expiry has passed. Returns count."""
        pass
