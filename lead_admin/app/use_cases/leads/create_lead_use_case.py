"""
Create Lead Use Case

Creates a lead owned by the caller's company (or any company for super tier).
"""

import logging

from lead_admin.app.security.identity import Identity
from lead_admin.app.security.policy import LEAD_GRANTS, authorize_create
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import InvestorAdmin
from lead_admin.libs.result import Error, Result, Return

from .dtos import LeadCreateCommand, LeadOut

logger = logging.getLogger(__name__)

MSG_DATE_REQUIRED = Error("MSG_DATE_REQUIRED", "msgDate is required for creator roles")
PHONE_NUMBER_EXISTS = Error(
    "PHONE_NUMBER_EXISTS", "Phone number already exists for another lead."
)


class CreateLeadUseCase:
    """
    Use case for creating a lead.

    Business Rules:
    - Company-tier callers create only for their own company; naming another
      company is rejected before anything is written
    - Absent companyID defaults to the caller's company
    - Creator roles must supply msgDate
    - Phone numbers are unique across leads
    - created_by records the acting user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, command: LeadCreateCommand) -> Result[LeadOut]:
        scope_result = authorize_create(identity, command.company_id, LEAD_GRANTS, "lead")
        if scope_result.is_err():
            return scope_result

        if identity.role.is_creator and command.msg_date is None:
            return Return.err(MSG_DATE_REQUIRED)

        async with self.uow:
            if command.phone_number:
                existing = await self.uow.investor_admins.get_by_phone_number(
                    command.phone_number
                )
                if existing is not None:
                    return Return.err(PHONE_NUMBER_EXISTS)

            data = command.model_dump(exclude_none=True, exclude={"company_id"})
            lead = InvestorAdmin(
                **data,
                company_id=scope_result.value,
                created_by=identity.subject_id,
            )
            lead = await self.uow.investor_admins.create(lead)
            await self.uow.commit()

            logger.info(f"Lead {lead.id} created by {identity.username}")
            return Return.ok(LeadOut.model_validate(lead))
