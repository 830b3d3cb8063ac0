import asyncio
from typing import Awaitable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from course_access.app.repositories.errors import StorageError
from course_access.config import ApplicationConfig

T = TypeVar("T")


async def bounded(awaitable: Awaitable[T], timeout: float) -> T:
    """Await a storage call, converting timeouts and driver errors to StorageError."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise StorageError(f"Storage call exceeded {timeout}s") from exc
    except SQLAlchemyError as exc:
        raise StorageError(exc.__class__.__name__) from exc


class SqlRepository:
    """Base for SQLModel repositories sharing one AsyncSession"""

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout or ApplicationConfig.STORAGE_TIMEOUT_SECONDS

    async def _run(self, awaitable: Awaitable[T]) -> T:
        return await bounded(awaitable, self.timeout)

    async def _persist(self, obj):
        self.session.add(obj)
        await self._run(self.session.flush())
        await self._run(self.session.refresh(obj))
        return obj

    @property
    def dialect_name(self) -> str:
        return self.session.bind.dialect.name
