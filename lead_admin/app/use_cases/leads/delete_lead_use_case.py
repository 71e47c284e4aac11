"""
Delete Lead Use Case
"""

from lead_admin.app.security.identity import Identity
from lead_admin.app.security.policy import LEAD_GRANTS, authorize_resource
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import OperationClass
from lead_admin.libs.result import Result, Return

from .dtos import LeadOut
from .update_lead_use_case import LEAD_NOT_FOUND


class DeleteLeadUseCase:
    """
    Use case for deleting a lead.

    Business Rules:
    - Company-tier callers may only delete leads of their own company
    - Returns the deleted lead
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, lead_id: int) -> Result[LeadOut]:
        async with self.uow:
            lead = await self.uow.investor_admins.get_by_id(lead_id)
            if lead is None:
                return Return.err(LEAD_NOT_FOUND)

            access = authorize_resource(
                identity, OperationClass.delete, lead.company_id, LEAD_GRANTS, "lead"
            )
            if access.is_err():
                return access

            deleted = LeadOut.model_validate(lead)
            await self.uow.investor_admins.delete(lead)
            await self.uow.commit()

            return Return.ok(deleted)
