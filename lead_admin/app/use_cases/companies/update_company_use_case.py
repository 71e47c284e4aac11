from typing import Any, Dict

from lead_admin.app.security.identity import Identity
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.domain.base import utcnow
from lead_admin.libs.result import Result, Return

from .dtos import CompanyOut
from .get_company_use_case import COMPANY_NOT_FOUND

UPDATABLE_FIELDS = ("name", "description", "phone_number", "url")


class UpdateCompanyUseCase:
    """Partial update; only the fields the caller sent are applied"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, company_id: int, changes: Dict[str, Any]
    ) -> Result[CompanyOut]:
        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None:
                return Return.err(COMPANY_NOT_FOUND)

            for name, value in changes.items():
                if name in UPDATABLE_FIELDS:
                    setattr(company, name, value)
            company.updated_by = identity.subject_id
            company.updated_at = utcnow()

            company = await self.uow.companies.update(company)
            await self.uow.commit()
            return Return.ok(CompanyOut.model_validate(company))
