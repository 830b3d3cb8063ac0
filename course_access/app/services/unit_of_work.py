from abc import ABC, abstractmethod

from course_access.app.repositories.audit_event_repository import IAuditEventRepository
from course_access.app.repositories.grant_repository import IGrantRepository
from course_access.app.repositories.lesson_progress_repository import ILessonProgressRepository
from course_access.app.repositories.one_time_code_repository import IOneTimeCodeRepository
from course_access.app.repositories.order_repository import IOrderRepository
from course_access.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    one_time_codes: IOneTimeCodeRepository
    sessions: ISessionRepository
    grants: IGrantRepository
    orders: IOrderRepository
    lesson_progress: ILessonProgressRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
