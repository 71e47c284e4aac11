"""
Lead Statistics Use Case
"""

from lead_admin.app.security.policy import ScopeFilter
from lead_admin.app.services.unit_of_work import UnitOfWork
from lead_admin.libs.result import Result, Return

from .dtos import LeadStatisticsOut


class LeadStatisticsUseCase:
    """Max/min/avg/sum/count of investment amounts within the caller's scope"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, scope: ScopeFilter) -> Result[LeadStatisticsOut]:
        async with self.uow:
            stats = await self.uow.investor_admins.statistics(scope.company_id)

        return Return.ok(
            LeadStatisticsOut(
                max=stats.max,
                min=stats.min,
                avg=stats.avg,
                sum=stats.sum,
                count=stats.count,
            )
        )
