import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select

from course_access.adapter.repositories.base import SqlRepository
from course_access.app.repositories.audit_event_repository import IAuditEventRepository
from course_access.domain.entities import AuditEvent


class AuditEventRepository(SqlRepository, IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        return await self._persist(audit_event)

    async def list_paginated(
        self, identity: Optional[str] = None, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events with keyset pagination, newest first.

        Cursor format: base64 of "<created_at ISO>|<id hex>" of the last event
        on the previous page. The id breaks ties between events sharing a
        timestamp.
        """
        stmt = select(AuditEvent)
        if identity is not None:
            stmt = stmt.where(AuditEvent.identity == identity)

        if cursor:
            try:
                cursor_str = base64.b64decode(cursor).decode("utf-8")
                timestamp_str, id_str = cursor_str.split("|", 1)
                cursor_timestamp = datetime.fromisoformat(timestamp_str)
                cursor_id = UUID(id_str)
                stmt = stmt.where(
                    or_(
                        AuditEvent.created_at < cursor_timestamp,
                        and_(
                            AuditEvent.created_at == cursor_timestamp,
                            AuditEvent.id < cursor_id,
                        ),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        # Fetch one extra row to know whether another page exists
        stmt = stmt.order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(limit + 1)

        result = await self._run(self.session.exec(stmt))
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            last = events[-1]
            cursor_str = f"{last.created_at.isoformat()}|{last.id.hex}"
            next_cursor = base64.b64encode(cursor_str.encode("utf-8")).decode("utf-8")

        return events, next_cursor
