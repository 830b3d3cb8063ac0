from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from course_access.adapter.repositories.audit_event_repository import AuditEventRepository
from course_access.adapter.repositories.base import bounded
from course_access.adapter.repositories.grant_repository import GrantRepository
from course_access.adapter.repositories.lesson_progress_repository import LessonProgressRepository
from course_access.adapter.repositories.one_time_code_repository import OneTimeCodeRepository
from course_access.adapter.repositories.order_repository import OrderRepository
from course_access.adapter.repositories.session_repository import SessionRepository
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.config import ApplicationConfig


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout or ApplicationConfig.STORAGE_TIMEOUT_SECONDS

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.one_time_codes = OneTimeCodeRepository(self.session, self.timeout)
        self.sessions = SessionRepository(self.session, self.timeout)
        self.grants = GrantRepository(self.session, self.timeout)
        self.orders = OrderRepository(self.session, self.timeout)
        self.lesson_progress = LessonProgressRepository(self.session, self.timeout)
        self.audit_events = AuditEventRepository(self.session, self.timeout)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await bounded(self.session.commit(), self.timeout)

    async def rollback(self):
        await self.session.rollback()
