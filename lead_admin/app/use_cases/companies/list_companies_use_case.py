from typing import List

from lead_admin.app.security.policy import ScopeFilter
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Result, Return

from .dtos import CompanyOut


class ListCompaniesUseCase:
    """Company-tier callers see only their own company"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, scope: ScopeFilter) -> Result[List[CompanyOut]]:
        async with self.uow:
            companies = await self.uow.companies.list(scope.company_id)
            return Return.ok([CompanyOut.model_validate(c) for c in companies])
