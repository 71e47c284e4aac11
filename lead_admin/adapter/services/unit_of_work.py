from sqlmodel.ext.asyncio.session import AsyncSession

from lead_admin.adapter.repositories.activity_log_repository import ActivityLogRepository
from lead_admin.adapter.repositories.company_repository import CompanyRepository
from lead_admin.adapter.repositories.investor_admin_repository import InvestorAdminRepository
from lead_admin.adapter.repositories.investor_repository import InvestorRepository
from lead_admin.adapter.repositories.user_repository import UserRepository
from lead_admin.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.companies = CompanyRepository(self.session)
        self.investors = InvestorRepository(self.session)
        self.investor_admins = InvestorAdminRepository(self.session)
        self.activity_logs = ActivityLogRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
