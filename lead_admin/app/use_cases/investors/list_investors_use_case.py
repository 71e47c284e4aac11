from typing import List

from lead_admin.app.security.policy import ScopeFilter
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Result, Return

from .dtos import InvestorOut


class ListInvestorsUseCase:
    """Submissions newest first, confined to the caller's company scope"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, scope: ScopeFilter) -> Result[List[InvestorOut]]:
        async with self.uow:
            investors = await self.uow.investors.list(scope.company_id)
            return Return.ok([InvestorOut.model_validate(i) for i in investors])
