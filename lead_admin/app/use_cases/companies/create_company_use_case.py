"""
Create Company Use Case
"""

import logging

from lead_admin.app.security.identity import Identity
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.entities import Company
from lead_admin.libs.result import Result, Return

from .dtos import CompanyCommand, CompanyOut

logger = logging.getLogger(__name__)


class CreateCompanyUseCase:
    """
    Use case for creating a company.

    Business Rules:
    - Only super_admin and super_creator reach this (checked by the caller)
    - created_by records the acting user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, command: CompanyCommand) -> Result[CompanyOut]:
        async with self.uow:
            company = Company(**command.model_dump(), created_by=identity.subject_id)
            company = await self.uow.companies.create(company)
            await self.uow.commit()

            logger.info(f"Company {company.company_id} created by {identity.username}")
            return Return.ok(CompanyOut.model_validate(company))
