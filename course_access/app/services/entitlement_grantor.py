"""
Entitlement Grantor

Writes grants inside the caller's unit of work so that a grant commits (or
rolls back) together with whatever caused it, such as an order approval.
"""

import logging
from typing import Optional, Set

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class EntitlementGrantor:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def grant(
        self, identity: str, entitlement_id: str, source: str, metadata: Optional[dict] = None
    ) -> bool:
        """
        Idempotently grant an entitlement. Must run inside an open unit of work.

        Returns:
            True if a new grant row was written, False if it already existed
        """
        created = await self.uow.grants.add(identity, entitlement_id)

        if created:
            await self.uow.audit_events.create(
                AuditEvent(
                    identity=identity,
                    action="grant_created",
                    event_metadata={"entitlement_id": entitlement_id, "source": source, **(metadata or {})},
                )
            )
            logger.info(f"Granted {entitlement_id} to {identity} ({source})")

        return created

    async def list_entitlements(self, identity: str) -> Set[str]:
        return set(await self.uow.grants.list_entitlement_ids(identity))
