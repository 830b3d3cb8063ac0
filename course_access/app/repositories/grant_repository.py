from abc import ABC, abstractmethod
from typing import List


class IGrantRepository(ABC):
    """Grant repository interface - application layer"""

    @abstractmethod
    async def add(self, identity: str, entitlement_id: str) -> bool:
        """
        Insert a grant, ignoring an existing (identity, entitlement_id) row.

        Returns True if a new row was written, False if it already existed.
        """
        pass

    @abstractmethod
    async def list_entitlement_ids(self, identity: str) -> List[str]:
        """Get every entitlement id granted to an identity"""
        pass
