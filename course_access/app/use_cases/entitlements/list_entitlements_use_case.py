from course_access.app.services.entitlement_grantor import EntitlementGrantor
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import normalize_identity
from course_access.libs.result import Error, Result, Return
from .dtos import EntitlementsResponse


class ListEntitlementsUseCase:
    """Pure read of the entitlements granted to an identity"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[EntitlementsResponse]:
        identity = normalize_identity(email or "")
        if not identity:
            return Return.err(Error("INVALID_IDENTITY", "Email is required"))

        async with self.uow:
            entitlements = await EntitlementGrantor(self.uow).list_entitlements(identity)

            return Return.ok(
                EntitlementsResponse(identity=identity, entitlements=sorted(entitlements))
            )
