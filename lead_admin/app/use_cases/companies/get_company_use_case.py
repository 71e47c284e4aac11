from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Error, Result, Return

from .dtos import CompanyOut

COMPANY_NOT_FOUND = Error("COMPANY_NOT_FOUND", "Company not found")


class GetCompanyUseCase:
    """Scope is enforced on the requested companyID before this runs"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, company_id: int) -> Result[CompanyOut]:
        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None:
                return Return.err(COMPANY_NOT_FOUND)
            return Return.ok(CompanyOut.model_validate(company))
