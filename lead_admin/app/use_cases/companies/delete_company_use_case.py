from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Result, Return

from .dtos import CompanyOut
from .get_company_use_case import COMPANY_NOT_FOUND


class DeleteCompanyUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, company_id: int) -> Result[CompanyOut]:
        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None:
                return Return.err(COMPANY_NOT_FOUND)

            deleted = CompanyOut.model_validate(company)
            await self.uow.companies.delete(company)
            await self.uow.commit()
            return Return.ok(deleted)
