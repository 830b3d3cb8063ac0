"""
Grant Entitlement Use Case

Manual and development grants outside the payment flow.
"""

from course_access.app.services.entitlement_grantor import EntitlementGrantor
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import normalize_identity
from course_access.domain.catalog import Catalog
from course_access.libs.result import Error, Result, Return
from .dtos import GrantResponse


class GrantEntitlementUseCase:
    """
    Use case for granting an entitlement without payment.

    Business Rules:
    - Entitlement must be a catalog block or full-course id
    - Idempotent: a repeated grant succeeds with created=False
    - The identity does not need to have logged in before
    """

    def __init__(self, uow: UnitOfWork, catalog: Catalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(
        self, email: str, entitlement_id: str, source: str = "manual"
    ) -> Result[GrantResponse]:
        """
        Execute grant entitlement use case.

        Errors:
            - INVALID_IDENTITY: Empty email
            - INVALID_ENTITLEMENT: Entitlement id not in the catalog
        """
        identity = normalize_identity(email or "")
        if not identity:
            return Return.err(Error("INVALID_IDENTITY", "Email is required"))

        if not self.catalog.is_valid_entitlement(entitlement_id):
            return Return.err(Error("INVALID_ENTITLEMENT", "Unknown entitlement"))

        async with self.uow:
            created = await EntitlementGrantor(self.uow).grant(identity, entitlement_id, source)
            await self.uow.commit()

            return Return.ok(
                GrantResponse(identity=identity, entitlement_id=entitlement_id, created=created)
            )
