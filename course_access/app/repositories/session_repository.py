from abc import ABC, abstractmethod
from typing import Optional

from course_access.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by SHA-256 digest of its token"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> bool:
        """Delete a session. Returns True if a session existed."""
        pass

    @abstractmethod
    async def delete_expired(self, now) -> int:
        """Delete sessions whose expiry has passed. Returns count."""
        pass
