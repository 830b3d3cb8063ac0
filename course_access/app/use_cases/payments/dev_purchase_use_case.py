"""
Dev Purchase Use Case

Development payment flow: grants the item immediately, no provider involved.
"""

from course_access.app.services.entitlement_grantor import EntitlementGrantor
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.catalog import Catalog
from course_access.domain.entitlements import BLOCK_ID_PATTERN, make_block_id, course_of
from course_access.libs.result import Error, Result, Return
from .dtos import DevPurchaseResponse


class DevPurchaseUseCase:
    """
    Use case for purchasing without payment (PAYMENT_MODE=dev only).

    Business Rules:
    - Caller must be logged in
    - Item must be in the catalog
    - Idempotent like any grant
    - Redirects to the bought block, or the first block of a bought course
    """

    def __init__(self, uow: UnitOfWork, catalog: Catalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(self, identity: str, item_id: str) -> Result[DevPurchaseResponse]:
        if not self.catalog.is_valid_entitlement(item_id):
            return Return.err(Error("INVALID_ENTITLEMENT", "Unknown item"))

        async with self.uow:
            created = await EntitlementGrantor(self.uow).grant(identity, item_id, source="dev")
            await self.uow.commit()

        if BLOCK_ID_PATTERN.match(item_id):
            block_id = item_id
        else:
            block_id = make_block_id(course_of(item_id), 1)

        return Return.ok(
            DevPurchaseResponse(
                entitlement_id=item_id,
                created=created,
                redirect_url=f"/block.html?bid={block_id}",
            )
        )
